# roughenough

Building blocks for Roughtime clients, in plain Python with no third-party
dependencies:

- `roughenough.encoding`: decoding server public keys given as hex or base64,
  and hex dumps of raw messages
- `roughenough.crypto`: SRV commitments, chained nonces and random bytes
- `roughenough.server_list`: loading, validating and writing JSON server lists
- `roughenough.measurement`: the result of one exchange with a server
- `roughenough.validation`: finding causality violations in a sequence of
  measurements
- `roughenough.reporting`: malfeasance reports built from those violations
- `roughenough.args`: the argument parser for a Roughtime client command line
- `roughenough.loadstats`: thread-safe throughput counters for load generators
- `roughenough.errors`: the `ClientError` family of exceptions
- `roughenough.e2e`: a live end-to-end check of built server and client
  executables

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Decoding a public key

`try_decode_key` accepts lower- or upper-case hex, URL-safe base64 or
standard base64, with or without padding, and requires the result to be 32
bytes. On failure it raises `DecodeError`, which carries a `position` and a
`kind` (a `DecodeKind`).

```python
from roughenough.encoding import DecodeError, DecodeKind, try_decode_key

public_key = try_decode_key("01" * 32)
assert public_key == bytes([1]) * 32

try:
    try_decode_key("0101010101010101")
except DecodeError as exc:
    assert exc.kind is DecodeKind.LENGTH and exc.position == 8
```

`try_decode` does the same without the length check. `hexdump(data)` returns
a classic hex dump: an 8-digit offset, 16 bytes per line in pairs, and the
printable ASCII form between bars.

```python
from roughenough.encoding import hexdump

print(hexdump(b"Hello, World! This is a test."), end="")
```

## Commitments and chained nonces

```python
from roughenough.crypto import calculate_chained_nonce, make_srv_commitment, random_bytes

srv = make_srv_commitment(public_key)          # SHA-512(0xff || key)[:32]
rand = random_bytes(32)
nonce = calculate_chained_nonce(prior_response_frame, rand)  # SHA-512(frame || rand)[:32]
```

`make_srv_commitment` raises `ValueError` unless the key is 32 bytes.
`calculate_chained_nonce` takes the prior response as framed bytes or as any
object with an `as_frame_bytes()` method.

## Server lists

A server list is a JSON document with a `servers` array and optional
`sources` and `reports` URLs, both of which must use HTTPS:

```json
{
  "servers": [
    {
      "name": "Example Server",
      "version": "1",
      "publicKeyType": "ed25519",
      "publicKey": "AQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQEBAQE=",
      "addresses": [{"protocol": "udp", "address": "roughtime.example.com:2002"}]
    }
  ]
}
```

```python
from roughenough.server_list import ServerList, ServerListError

try:
    servers = ServerList.from_file("servers.json")
except ServerListError as exc:
    raise SystemExit(f"bad server list: {exc}")

for server in servers.choose_random(1):
    address = server.first_address()
    print(server.name, address.protocol.value, address.host(), address.port())

print(servers.reporting_url)
print(servers.to_json())
```

`Address`, `Server` and `ServerList` validate themselves when built, and
`ServerList.from_json` validates what it parses. Failures raise subclasses of
`ServerListError`: `EmptyFieldError`, `InvalidAddressError`,
`InvalidUrlError`, `InvalidJsonError` and `ConfigError` (the last when
`choose_random` is asked for more servers than the list holds).
`add_server` appends a server.

## Measurements and causality checks

A `Measurement` holds the framed request and response bytes of one exchange,
the server's address, and the `midpoint` and `radius` (in seconds) that the
response reported. `midpoint_datetime()` gives the midpoint as a UTC
`datetime`.

For every pair of measurements `(i, j)`, with `i` received before `j`, the
rule `MIDP_i - RADI_i <= MIDP_j + RADI_j` must hold. `validate_causality`
returns each pair that breaks it as a `CausalityViolation`, in order of `i`
then `j`:

```python
from roughenough.measurement import Measurement
from roughenough.reporting import MalfeasanceReport, ReportingError
from roughenough.validation import validate_causality

def measured(midpoint):
    return Measurement(
        server=("127.0.0.1", 2002),
        request=b"request-frame",
        response=b"response-frame",
        midpoint=midpoint,
        radius=5,
        public_key=bytes(32),
    )

violations = validate_causality([measured(2000), measured(1000)])
for violation in violations:
    print(violation.lower_bound_i, ">", violation.upper_bound_j)  # 1995 > 1005
    report = MalfeasanceReport.from_violation(violation)
    print(report.to_json())
```

A report entry requires the measurement's public key. Its JSON form holds the
base64 `request`, `response` and `publicKey`, and `rand` when the measurement
carries a chaining value. `MalfeasanceReport.submit(url)` POSTs the report as
JSON and raises `ReportingError` if delivery fails.

## Client arguments

`roughenough.args.parse_args(argv)` parses a client command line (host and
port, or `--server-list`; `--pub-key`, `--num-requests`, `--timeout`,
`--zulu`, `--epoch`, `--tcp`, `--tls` and so on) and rejects invalid
combinations, such as a host without a port or `--tls-no-verify` without
`--tls`. `build_parser()` returns the underlying `argparse` parser.

## Load statistics

`Stats` counts requests sent, responses received, timeouts and errors from
any number of threads. `drain()` returns a `StatsReport` for the interval
since the last drain and starts a new one; `StatsReport.lines()` renders it
as three lines of counts and rates. `display_loop(stats, delay, stop)` logs a
report every `delay` seconds until the `threading.Event` `stop` is set.

## End-to-end check

`roughenough-e2e` starts `target/<mode>/roughenough_server` for the debug and
release build modes (or the modes given as arguments), runs
`target/<mode>/roughenough_client` against it with 50 requests, and exits
with status 1 as soon as a mode fails:

```
roughenough-e2e
roughenough-e2e release
```

## What this package does not do

It does not send requests to Roughtime servers: there is no network
transport and no client that queries a server. Accordingly it parses no
Roughtime messages and verifies no signatures or Merkle proofs; measurements
are built from values the caller supplies, and validation covers causal
ordering only. Although `roughenough.args` parses a client command line,
there is no client command that acts on it, nothing formats measurements for
display, and nothing sets the system clock.
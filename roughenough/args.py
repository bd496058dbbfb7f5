"""Command-line arguments of the Roughtime client."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

VERSION = "2.0.0"
DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S %Z"
DEFAULT_NUM_UNIQUE_SERVERS = 3
DEFAULT_MEASUREMENT_ROUNDS = 2


def _port(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port '{text}'") from None
    if not 0 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"port out of range: {value}")
    return value


def _count(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number '{text}'") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the parser for the client's command line."""
    parser = argparse.ArgumentParser(
        prog="roughenough_client", description="Roughenough roughtime client"
    )
    parser.add_argument("--version", action="version", version=VERSION)
    parser.add_argument(
        "hostname", nargs="?", help="Server hostname (e.g. roughtime.int08h.com)"
    )
    parser.add_argument(
        "port", nargs="?", type=_port, help="Server port (e.g. 2002)"
    )
    parser.add_argument(
        "--epoch",
        action="store_true",
        help="Display the time as seconds since the epoch (UTC)",
    )
    parser.add_argument(
        "-f",
        "--time-format",
        metavar="FORMAT",
        default=DEFAULT_TIME_FORMAT,
        help="The strftime() format string to display the date and time",
    )
    parser.add_argument(
        "-k", "--pub-key", metavar="KEY", help="Public key of server (base64 or hex)"
    )
    parser.add_argument(
        "-n",
        "--num-requests",
        metavar="N",
        type=_count,
        default=1,
        help="Number of requests to send",
    )
    parser.add_argument(
        "-P",
        "--protocol",
        metavar="PROTOCOL",
        type=_count,
        default=14,
        help="Roughtime version to send; 0 = Google, 14 = RFC draft 14",
    )
    parser.add_argument(
        "-l",
        "--server-list",
        metavar="FILE",
        help="File containing servers to query, JSON format",
    )
    parser.add_argument(
        "-u",
        "--num-unique-servers",
        metavar="N",
        type=_count,
        default=None,
        help=f"Number of different servers to query [default: {DEFAULT_NUM_UNIQUE_SERVERS}]",
    )
    parser.add_argument(
        "-r",
        "--num-measurement-rounds",
        metavar="N",
        type=_count,
        default=None,
        help="Number of times to repeat the chained measurement sequence "
        f"[default: {DEFAULT_MEASUREMENT_ROUNDS}]",
    )
    noise = parser.add_mutually_exclusive_group()
    noise.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Don't print any messages except for errors",
    )
    noise.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Output details about requests and responses; "
        "specify multiple times for more detail",
    )
    parser.add_argument(
        "--report",
        dest="send_report",
        action="store_true",
        help="Send malfeasance reports when causality violations are detected",
    )
    parser.add_argument(
        "-s",
        "--set-clock",
        action="store_true",
        help="Set the system's clock to the received time",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        metavar="TIMEOUT",
        type=_port,
        default=2,
        help="Seconds to wait for the server's response",
    )
    parser.add_argument(
        "--zulu",
        action="store_true",
        help="Display time in UTC [default: local time]",
    )
    parser.add_argument(
        "--tcp", action="store_true", help="Use TCP transport instead of UDP"
    )
    parser.add_argument("--tls", action="store_true", help="Use TLS over TCP")
    parser.add_argument(
        "--tls-no-verify",
        action="store_true",
        help="Skip TLS certificate verification "
        "(needed for initial time sync when system clock is wrong)",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse and check the client's command line; exits on invalid input."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if (args.hostname is None) != (args.port is None):
        parser.error("'hostname' and 'port' must be given together")
    if args.server_list is None:
        if args.num_unique_servers is not None:
            parser.error("--num-unique-servers requires --server-list")
        if args.num_measurement_rounds is not None:
            parser.error("--num-measurement-rounds requires --server-list")
    if args.tls_no_verify and not args.tls:
        parser.error("--tls-no-verify requires --tls")

    if args.num_unique_servers is None:
        args.num_unique_servers = DEFAULT_NUM_UNIQUE_SERVERS
    if args.num_measurement_rounds is None:
        args.num_measurement_rounds = DEFAULT_MEASUREMENT_ROUNDS
    return args
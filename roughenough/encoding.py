"""Decoding of keys in several text encodings, and hex dumps."""

from __future__ import annotations

import base64
import enum
import string

_BASE64_CORE = string.ascii_uppercase + string.ascii_lowercase + string.digits
_HEX_LOWER = "0123456789abcdef"
_HEX_UPPER = "0123456789ABCDEF"
KEY_LENGTH = 32


class DecodeKind(enum.Enum):
    """Why a decode failed."""

    SYMBOL = "invalid symbol"
    TRAILING = "non-zero trailing bits"
    PADDING = "invalid padding"
    LENGTH = "invalid length"


class DecodeError(ValueError):
    """An encoded value could not be decoded."""

    def __init__(self, position: int, kind: DecodeKind) -> None:
        self.position = position
        self.kind = kind
        super().__init__(f"{kind.value} at {position}")


def _decode_hex(text: str, alphabet: str) -> bytes:
    if len(text) % 2:
        raise DecodeError(len(text) - 1, DecodeKind.LENGTH)
    for position, ch in enumerate(text):
        if ch not in alphabet:
            raise DecodeError(position, DecodeKind.SYMBOL)
    return bytes.fromhex(text)


def _decode_base64(text: str, altchars: str, padded: bool) -> bytes:
    alphabet = _BASE64_CORE + altchars
    if padded:
        if len(text) % 4:
            raise DecodeError(len(text) - len(text) % 4, DecodeKind.LENGTH)
        stripped = text.rstrip("=")
        if len(text) - len(stripped) > 2:
            raise DecodeError(len(stripped), DecodeKind.PADDING)
    else:
        if len(text) % 4 == 1:
            raise DecodeError(len(text) - 1, DecodeKind.LENGTH)
        stripped = text
    for position, ch in enumerate(stripped):
        if ch not in alphabet:
            raise DecodeError(position, DecodeKind.SYMBOL)
    if len(stripped) % 4 == 1:
        raise DecodeError(len(stripped) - 1, DecodeKind.PADDING)

    alt = altchars.encode("ascii")
    data = base64.b64decode(stripped + "=" * (-len(stripped) % 4), altchars=alt)
    canonical = base64.b64encode(data, altchars=alt).decode("ascii").rstrip("=")
    if canonical != stripped:
        raise DecodeError(len(stripped) - 1, DecodeKind.TRAILING)
    return data


_DECODERS = (
    lambda v: _decode_hex(v, _HEX_LOWER),
    lambda v: _decode_hex(v, _HEX_UPPER),
    lambda v: _decode_base64(v, "-_", padded=True),
    lambda v: _decode_base64(v, "-_", padded=False),
    lambda v: _decode_base64(v, "+/", padded=True),
    lambda v: _decode_base64(v, "+/", padded=False),
)


def try_decode(encoded_value: str) -> bytes:
    """Decode a value as hex or base64, trying each encoding in turn.

    Raises the error of the last encoding tried if none succeeds.
    """
    last_error: DecodeError | None = None
    for decode in _DECODERS:
        try:
            return decode(encoded_value)
        except DecodeError as exc:
            last_error = exc
    assert last_error is not None
    raise last_error


def try_decode_key(encoded_key: str) -> bytes:
    """Decode a 32-byte public key given as hex or base64."""
    key = try_decode(encoded_key)
    if len(key) != KEY_LENGTH:
        raise DecodeError(len(key), DecodeKind.LENGTH)
    return key


def _hexdump_lines(data: bytes):
    bytes_per_line = 16
    for offset in range(0, len(data), bytes_per_line):
        chunk = data[offset:offset + bytes_per_line]
        parts = [f"{offset:08x}: "]
        for i, byte in enumerate(chunk):
            parts.append(f"{byte:02x}")
            if i % 2 == 1:
                parts.append(" ")
        for i in range(bytes_per_line - len(chunk)):
            parts.append("  ")
            if (len(chunk) + i) % 2 == 1:
                parts.append(" ")
        printable = "".join(chr(b) if 0x20 <= b <= 0x7E else "." for b in chunk)
        parts.append(f" |{printable}|\n")
        yield "".join(parts)


def hexdump(data: bytes) -> str:
    """Return a hex dump: offset, 16 bytes in pairs, and their ASCII form."""
    return "".join(_hexdump_lines(bytes(data)))
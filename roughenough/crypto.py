"""Cryptographic helpers: nonce chaining, random bytes, SRV commitments."""

from __future__ import annotations

import hashlib
import secrets

HASH_PREFIX_SRV = b"\xff"
PUBLIC_KEY_LENGTH = 32
_TRUNCATED_LENGTH = 32


def _frame_bytes(response) -> bytes:
    if isinstance(response, (bytes, bytearray, memoryview)):
        return bytes(response)
    return bytes(response.as_frame_bytes())


def calculate_chained_nonce(prior_response, rand: bytes) -> bytes:
    """Return SHA-512(prior_response_frame || rand) truncated to 32 bytes.

    ``prior_response`` is either the framed response bytes or an object
    offering ``as_frame_bytes()``.
    """
    digest = hashlib.sha512(_frame_bytes(prior_response) + bytes(rand)).digest()
    return digest[:_TRUNCATED_LENGTH]


def random_bytes(n: int = 32) -> bytes:
    """Return ``n`` cryptographically secure random bytes."""
    return secrets.token_bytes(n)


def make_srv_commitment(public_key: bytes) -> bytes:
    """Return the SRV value H(0xff || public_key), SHA-512 truncated to 32 bytes."""
    key = bytes(public_key)
    if len(key) != PUBLIC_KEY_LENGTH:
        raise ValueError(
            f"public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(key)}"
        )
    return hashlib.sha512(HASH_PREFIX_SRV + key).digest()[:_TRUNCATED_LENGTH]
"""Errors raised while querying a Roughtime server."""

from __future__ import annotations


class ClientError(Exception):
    """Base class for everything that can go wrong when querying a server."""


class _DetailedError(ClientError):
    """A client error that carries one detail value in its message."""

    _template = "{}"

    def __init__(self, detail: object) -> None:
        self.detail = detail
        super().__init__(self._template.format(detail))


class ServerTimeout(ClientError):
    """No response arrived from the server before the timeout expired."""

    def __init__(self) -> None:
        super().__init__("timeout waiting for server response")


class BadResponse(_DetailedError):
    """The server's response could not be parsed."""

    _template = "bad server response: {}"


class BadPublicKey(_DetailedError):
    """The server's public key could not be decoded."""

    _template = "public key decode failed: {}"


class ClientIOError(_DetailedError):
    """A network or file operation failed."""

    _template = "IO error: {}"


class ValidationFailed(_DetailedError):
    """The server's response did not pass validation."""

    _template = "validation of the server's response failed: {}"


class InvalidConfiguration(_DetailedError):
    """The client was configured in a way that cannot work."""

    _template = "invalid configuration: {}"


class DnsLookupFailed(_DetailedError):
    """A host name did not resolve to any address."""

    _template = "could not find IP address for '{}'"
"""Lists of Roughtime servers, read from and written to JSON."""

from __future__ import annotations

import enum
import json
import random
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

_PORT_PATTERN = re.compile(r"\+?[0-9]+")
_MAX_PORT = 0xFFFF
_HTTPS = "https://"


class Protocol(enum.Enum):
    """Transport protocol a server listens on."""

    TCP = "tcp"
    UDP = "udp"


class ServerListError(Exception):
    """Base class for problems with a server list."""


class EmptyFieldError(ServerListError):
    """A required field is empty."""

    def __init__(self, field_name: str) -> None:
        self.field = field_name
        super().__init__(f"field '{field_name}' is empty")


class InvalidAddressError(ServerListError):
    """An address is not of the form 'host:port'."""

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"Invalid address: expected 'host:port', got '{address}'")


class InvalidUrlError(ServerListError):
    """A URL in the list is not acceptable."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid URL: {reason}")


class InvalidJsonError(ServerListError):
    """The document is not valid JSON or lacks required structure."""

    def __init__(self, detail: object) -> None:
        self.detail = detail
        super().__init__(f"JSON error: {detail}")


class ConfigError(ServerListError):
    """The list cannot satisfy what was asked of it."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Configuration error: {detail}")


def _parse_port(text: str) -> Optional[int]:
    if not _PORT_PATTERN.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _MAX_PORT else None


def _unchecked(cls, **values):
    """Build a dataclass instance without running its validation."""
    obj = cls.__new__(cls)
    obj.__dict__.update(values)
    return obj


@dataclass
class Address:
    """A network address of a server, 'host:port', with its protocol."""

    protocol: Protocol
    address: str

    def __post_init__(self) -> None:
        self.protocol = Protocol(self.protocol)
        self.validate()

    def validate(self) -> None:
        """Check that the address is 'host:port' with a valid port number."""
        parts = self.address.split(":", 1)
        if len(parts) != 2 or _parse_port(parts[1]) is None:
            raise InvalidAddressError(self.address)

    def host(self) -> str:
        """The host part of the address."""
        return self.address.split(":")[0]

    def port(self) -> int:
        """The port part of the address."""
        parts = self.address.split(":")
        port = _parse_port(parts[1]) if len(parts) > 1 else None
        if port is None:
            raise InvalidAddressError(self.address)
        return port

    def _as_dict(self) -> Dict[str, Any]:
        return {"protocol": self.protocol.value, "address": self.address}


@dataclass
class Server:
    """A single Roughtime server entry."""

    name: str
    version: str
    public_key_type: str
    public_key: str
    addresses: List[Address]

    def __post_init__(self) -> None:
        self.addresses = list(self.addresses)
        self.validate()

    def validate(self) -> None:
        """Check that every field is present and every address is valid."""
        for field_name, value in (
            ("name", self.name),
            ("version", self.version),
            ("publicKeyType", self.public_key_type),
            ("publicKey", self.public_key),
        ):
            if not value:
                raise EmptyFieldError(field_name)
        if not self.addresses:
            raise EmptyFieldError(f"{self.name}.addresses")
        for address in self.addresses:
            address.validate()

    def first_address(self) -> Address:
        """The first address listed for the server."""
        return self.addresses[0]

    def _as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "publicKeyType": self.public_key_type,
            "publicKey": self.public_key,
            "addresses": [a._as_dict() for a in self.addresses],
        }


@dataclass
class ServerList:
    """A list of Roughtime servers, with optional sources and report URL."""

    servers: List[Server]
    sources: Optional[List[str]] = None
    reporting_url: Optional[str] = None

    def __post_init__(self) -> None:
        self.servers = list(self.servers)
        if self.sources is not None:
            self.sources = list(self.sources)
        self.validate()

    def validate(self) -> None:
        """Check the list: servers present and valid, URLs using HTTPS."""
        if not self.servers:
            raise EmptyFieldError("server list")
        for server in self.servers:
            server.validate()
        for url in self.sources or ():
            if not url.startswith(_HTTPS):
                raise InvalidUrlError(f"Source URL must use HTTPS scheme: {url}")
        if self.reporting_url is not None and not self.reporting_url.startswith(_HTTPS):
            raise InvalidUrlError(
                f"Reports URL must use HTTPS scheme: {self.reporting_url}"
            )

    @classmethod
    def from_json(cls, text: str) -> "ServerList":
        """Parse and validate a server list from JSON text."""
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidJsonError(exc) from exc
        server_list = _server_list_from_json(document)
        server_list.validate()
        return server_list

    def to_json(self) -> str:
        """Serialize the list as indented JSON."""
        document: Dict[str, Any] = {"servers": [s._as_dict() for s in self.servers]}
        if self.sources is not None:
            document["sources"] = list(self.sources)
        if self.reporting_url is not None:
            document["reports"] = self.reporting_url
        return json.dumps(document, indent=2)

    @classmethod
    def from_file(cls, file_name: str) -> "ServerList":
        """Load and validate a server list from a JSON file."""
        try:
            with open(file_name, encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            raise ServerListError(f"IO error: {exc}") from exc
        return cls.from_json(text)

    def choose_random(self, n: int) -> List[Server]:
        """Pick ``n`` distinct servers at random."""
        if n > len(self.servers):
            raise ConfigError(
                f"requested {n} servers but only {len(self.servers)} available"
            )
        return random.sample(self.servers, n)

    def add_server(self, server: Server) -> None:
        """Append a server to the list."""
        self.servers.append(server)


def _require(obj: Any, key: str, kind: type, where: str) -> Any:
    if not isinstance(obj, dict):
        raise InvalidJsonError(f"expected an object for {where}")
    if key not in obj:
        raise InvalidJsonError(f"missing field `{key}` in {where}")
    value = obj[key]
    if not isinstance(value, kind):
        raise InvalidJsonError(f"invalid type for `{key}` in {where}")
    return value


def _address_from_json(obj: Any) -> Address:
    protocol_text = _require(obj, "protocol", str, "address")
    try:
        protocol = Protocol(protocol_text)
    except ValueError:
        raise InvalidJsonError(f"unknown protocol `{protocol_text}`") from None
    return _unchecked(
        Address, protocol=protocol, address=_require(obj, "address", str, "address")
    )


def _server_from_json(obj: Any) -> Server:
    return _unchecked(
        Server,
        name=_require(obj, "name", str, "server"),
        version=_require(obj, "version", str, "server"),
        public_key_type=_require(obj, "publicKeyType", str, "server"),
        public_key=_require(obj, "publicKey", str, "server"),
        addresses=[
            _address_from_json(a) for a in _require(obj, "addresses", list, "server")
        ],
    )


def _server_list_from_json(document: Any) -> ServerList:
    servers = [_server_from_json(s) for s in _require(document, "servers", list, "list")]

    sources = document.get("sources")
    if sources is not None and not (
        isinstance(sources, list) and all(isinstance(u, str) for u in sources)
    ):
        raise InvalidJsonError("invalid type for `sources` in list")

    reports = document.get("reports")
    if reports is not None and not isinstance(reports, str):
        raise InvalidJsonError("invalid type for `reports` in list")

    return _unchecked(
        ServerList,
        servers=servers,
        sources=list(sources) if sources is not None else None,
        reporting_url=reports,
    )
"""The validated result of one exchange with a Roughtime server."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple

from roughenough.errors import InvalidConfiguration

_RAND_LENGTH = 32
_MAX_RADIUS = 0xFFFFFFFF


@dataclass(frozen=True)
class Measurement:
    """A request/response exchange with a server and what it measured.

    ``request`` and ``response`` are the framed message bytes. The server's
    true time lay within ``(midpoint - radius, midpoint + radius)``, in
    seconds since the Unix epoch, when the response was generated.
    """

    server: Tuple[str, int]
    request: bytes
    response: bytes
    midpoint: int
    radius: int
    hostname: str = "unknown"
    public_key: Optional[bytes] = None
    rand_value: Optional[bytes] = None
    prior_response: Optional[bytes] = None

    def __post_init__(self) -> None:
        for name in ("server", "request", "response"):
            if getattr(self, name) is None:
                raise InvalidConfiguration(f"{name} is required")
        if self.hostname is None:
            object.__setattr__(self, "hostname", "unknown")
        if self.midpoint < 0:
            raise InvalidConfiguration(f"midpoint must not be negative: {self.midpoint}")
        if not 0 <= self.radius <= _MAX_RADIUS:
            raise InvalidConfiguration(f"radius out of range: {self.radius}")
        if self.rand_value is not None and len(self.rand_value) != _RAND_LENGTH:
            raise InvalidConfiguration(
                f"rand value must be {_RAND_LENGTH} bytes, got {len(self.rand_value)}"
            )

    def midpoint_datetime(self) -> datetime:
        """The midpoint as an aware UTC datetime."""
        return datetime.fromtimestamp(self.midpoint, tz=timezone.utc)
"""Reports that prove a server sent an incorrect time."""

from __future__ import annotations

import base64
import json
import logging
import urllib.request
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from roughenough.measurement import Measurement
from roughenough.validation import CausalityViolation

logger = logging.getLogger(__name__)

SUBMIT_TIMEOUT = 10.0


class ReportingError(Exception):
    """A malfeasance report could not be delivered."""

    def __init__(self, detail: object) -> None:
        self.detail = detail
        super().__init__(f"remote server: {detail}")


def _b64(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


@dataclass(frozen=True)
class ReportEntry:
    """One request/response observation in a malfeasance report.

    Every value is base64 encoded. ``request`` and ``response`` include
    their framing; ``rand`` is the random value used to chain the nonce.
    """

    request: str
    response: str
    public_key: str
    rand: Optional[str] = None

    @classmethod
    def from_measurement(cls, measurement: Measurement) -> "ReportEntry":
        """Build an entry from a measurement, which must carry a public key."""
        if measurement.public_key is None:
            raise ValueError("a report entry requires the server's public key")
        rand = measurement.rand_value
        return cls(
            request=_b64(measurement.request),
            response=_b64(measurement.response),
            public_key=_b64(measurement.public_key),
            rand=_b64(rand) if rand is not None else None,
        )

    def to_dict(self) -> Dict[str, str]:
        """The entry in its JSON form; ``rand`` is left out when absent."""
        document: Dict[str, str] = {}
        if self.rand is not None:
            document["rand"] = self.rand
        document["request"] = self.request
        document["response"] = self.response
        document["publicKey"] = self.public_key
        return document


@dataclass(frozen=True)
class MalfeasanceReport:
    """Ordered observations that together show a violation of causality."""

    responses: Tuple[ReportEntry, ...]

    @classmethod
    def from_violation(cls, violation: CausalityViolation) -> "MalfeasanceReport":
        """Build a report from the two measurements of a violation, in order."""
        return cls(
            responses=tuple(
                ReportEntry.from_measurement(m)
                for m in (violation.measurement_i, violation.measurement_j)
            )
        )

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        """The report in its JSON form."""
        return {"responses": [entry.to_dict() for entry in self.responses]}

    def to_json(self) -> str:
        """The report as indented JSON."""
        return json.dumps(self.to_dict(), indent=2)

    def submit(self, url: str) -> None:
        """POST the report as JSON to ``url``."""
        logger.info("Sending malfeasance report to %s", url)
        body = json.dumps(self.to_dict()).encode("utf-8")
        request = urllib.request.Request(
            url,
            data=body,
            method="POST",
            headers={"Content-Type": "application/json"},
        )
        try:
            with urllib.request.urlopen(request, timeout=SUBMIT_TIMEOUT) as reply:
                reply.read()
        except (OSError, ValueError) as exc:
            logger.error("failed to submit report: %s", exc)
            raise ReportingError(exc) from exc
        logger.info("Successfully sent malfeasance report")


def _jsonable(report: MalfeasanceReport) -> Any:
    return report.to_dict()
"""Throughput counters shared by load-generation workers."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_DELAY = 2.0
_MIB = 1024.0 * 1024.0


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class StatsReport:
    """Counts gathered over one interval of ``elapsed_secs`` seconds."""

    num_sent: int
    bytes_sent: int
    num_responses: int
    bytes_received: int
    num_timeouts: int
    num_errors: int
    elapsed_secs: float

    def _rate(self, count: float) -> float:
        return count / self.elapsed_secs if self.elapsed_secs > 0 else 0.0

    @property
    def requests_per_sec(self) -> float:
        return self._rate(self.num_sent)

    @property
    def responses_per_sec(self) -> float:
        return self._rate(self.num_responses)

    @property
    def errors_per_sec(self) -> float:
        return self._rate(self.num_errors)

    @property
    def timeouts_per_sec(self) -> float:
        return self._rate(self.num_timeouts)

    @property
    def sent_mib_per_sec(self) -> float:
        return self._rate(self.bytes_sent) / _MIB

    @property
    def received_mib_per_sec(self) -> float:
        return self._rate(self.bytes_received) / _MIB

    def lines(self) -> List[str]:
        """The report as three lines: sent, received, and errors/timeouts."""
        return [
            f"sent: {self.num_sent} reqs, {self.requests_per_sec:.2f} reqs/s, "
            f"{self.sent_mib_per_sec:.2f} MiB/s",
            f"recv: {self.num_responses} resps, {self.responses_per_sec:.2f} resps/s, "
            f"{self.received_mib_per_sec:.2f} MiB/s",
            f"errs: {self.num_errors} errs, {self.errors_per_sec:.2f} errs/s  "
            f"to: {self.num_timeouts} timeouts, {self.timeouts_per_sec:.2f} to/s",
        ]


class Stats:
    """Thread-safe counters of requests, responses, timeouts and errors."""

    def __init__(self, last_update_ms: int = 0) -> None:
        self._lock = threading.Lock()
        self._clear()
        self.last_update_ms = last_update_ms

    def _clear(self) -> None:
        self.num_sent = 0
        self.bytes_sent = 0
        self.num_responses = 0
        self.bytes_received = 0
        self.num_timeouts = 0
        self.num_errors = 0
        self.last_update_ms = 0

    def record_sent(self, nbytes: int) -> None:
        """Count one request of ``nbytes`` bytes sent."""
        with self._lock:
            self.num_sent += 1
            self.bytes_sent += nbytes

    def record_response(self, nbytes: int) -> None:
        """Count one response of ``nbytes`` bytes received."""
        with self._lock:
            self.num_responses += 1
            self.bytes_received += nbytes

    def record_timeout(self) -> None:
        """Count one request that got no response in time."""
        with self._lock:
            self.num_timeouts += 1

    def record_error(self) -> None:
        """Count one failed receive."""
        with self._lock:
            self.num_errors += 1

    def reset(self) -> None:
        """Zero every counter and the time of the last update."""
        with self._lock:
            self._clear()

    def drain(self, now_ms: Optional[int] = None) -> StatsReport:
        """Take the counts since the last drain and start a new interval at ``now_ms``."""
        if now_ms is None:
            now_ms = _now_ms()
        with self._lock:
            report = StatsReport(
                num_sent=self.num_sent,
                bytes_sent=self.bytes_sent,
                num_responses=self.num_responses,
                bytes_received=self.bytes_received,
                num_timeouts=self.num_timeouts,
                num_errors=self.num_errors,
                elapsed_secs=(now_ms - self.last_update_ms) / 1000.0,
            )
            self._clear()
            self.last_update_ms = now_ms
        return report


def display_loop(
    stats: Stats,
    delay: float = DEFAULT_DISPLAY_DELAY,
    stop: Optional[threading.Event] = None,
) -> int:
    """Every ``delay`` seconds, drain ``stats`` and log the report.

    Runs until ``stop`` is set, or forever without one. Returns the number
    of reports logged.
    """
    stop = stop if stop is not None else threading.Event()
    reports = 0
    while not stop.wait(delay):
        for line in stats.drain().lines():
            logger.info("%s", line)
        reports += 1
    return reports
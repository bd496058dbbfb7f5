"""Checks of causal ordering across a sequence of measurements.

For measurements ``i`` and ``j``, where ``i`` was received before ``j``, the
earliest possible time of ``i`` must not be later than the latest possible
time of ``j``: ``MIDP_i - RADI_i <= MIDP_j + RADI_j``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import List, Sequence

from roughenough.measurement import Measurement


@dataclass(frozen=True)
class CausalityViolation:
    """A pair of measurements whose time intervals break causal ordering.

    ``measurement_i`` was received before ``measurement_j``, yet its lower
    bound (``MIDP_i - RADI_i``) is greater than the upper bound of
    ``measurement_j`` (``MIDP_j + RADI_j``).
    """

    measurement_i: Measurement
    measurement_j: Measurement
    lower_bound_i: int = field(init=False)
    upper_bound_j: int = field(init=False)

    def __post_init__(self) -> None:
        lower_bound_i = _lower_bound(self.measurement_i)
        upper_bound_j = _upper_bound(self.measurement_j)
        if not lower_bound_i > upper_bound_j:
            raise ValueError("(MIDP_i - RADI_i > MIDP_j + RADI_j) does not hold")
        object.__setattr__(self, "lower_bound_i", lower_bound_i)
        object.__setattr__(self, "upper_bound_j", upper_bound_j)


def _lower_bound(measurement: Measurement) -> int:
    return measurement.midpoint - measurement.radius


def _upper_bound(measurement: Measurement) -> int:
    return measurement.midpoint + measurement.radius


def validate_causality(measurements: Sequence[Measurement]) -> List[CausalityViolation]:
    """Return every pair ``(i, j)``, ``i`` received first, that violates causality.

    Pairs are reported in order of ``i``, then ``j``. An empty list means the
    measurements are consistent with causal ordering.
    """
    return [
        CausalityViolation(earlier, later)
        for earlier, later in combinations(measurements, 2)
        if _lower_bound(earlier) > _upper_bound(later)
    ]
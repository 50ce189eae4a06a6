from __future__ import annotations

import math
import numbers
from enum import Enum

from ..errors import InvalidArgumentError


class PlanId(str, Enum):
    BASE = "base"
    PREMIUM = "premium"
    CORPORATE = "corporate"


MONTHS_PER_YEAR = 12
TOTAL_AUTHORIZED_SHARES = 11_904_762


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def _is_finite(value: float) -> bool:
    return isinstance(value, numbers.Real) and math.isfinite(value)


def check_non_negative(name: str, value: float) -> None:
    if not _is_finite(value) or value < 0:
        raise InvalidArgumentError(f"{name} must be >= 0, got {value!r}")


def check_positive(name: str, value: float) -> None:
    if not _is_finite(value) or value <= 0:
        raise InvalidArgumentError(f"{name} must be > 0, got {value!r}")


def check_percentage(name: str, value: float) -> None:
    if not _is_finite(value) or value < 0 or value > 100:
        raise InvalidArgumentError(f"{name} must be within [0, 100], got {value!r}")


def check_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 0:
        raise InvalidArgumentError(f"{name} must be a non-negative integer, got {value!r}")

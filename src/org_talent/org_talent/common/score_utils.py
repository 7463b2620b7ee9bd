from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional


def round_score(value: float) -> float:
    """Round to one decimal, half away from zero (2.25 -> 2.3)."""
    return float(Decimal(repr(float(value))).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def mean(values: Iterable[float]) -> Optional[float]:
    items = [float(v) for v in values]
    if not items:
        return None
    return sum(items) / len(items)


def population_variance(values: Iterable[float]) -> Optional[float]:
    items = [float(v) for v in values]
    if not items:
        return None
    avg = sum(items) / len(items)
    return sum((v - avg) ** 2 for v in items) / len(items)


def now_utc() -> datetime:
    """Current UTC time.

    Note: Services take a ``clock`` callable defaulting to this.
    """
    return datetime.now(timezone.utc)

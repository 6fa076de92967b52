"""Shared numeric/formatting utilities for dashboard views."""

from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Mapping, Sequence, TypeVar

from dashboard.domain.errors import EmptyInputError
from dashboard.domain.models import to_float

T = TypeVar("T")


def field_value(row: Any, field: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(field)
    return getattr(row, field, None)


def sum_field(rows: Iterable[Any], field: str) -> float:
    total = 0.0
    for row in rows:
        total += to_float(field_value(row, field))
    return total


def roas(revenue: float, spend: float) -> float:
    """Return on ad spend; zero spend yields zero rather than a division error."""
    if spend <= 0:
        return 0.0
    return revenue / spend


def best_by(items: Sequence[T], score: Callable[[T], float]) -> T:
    """Highest-scoring item; the earliest one wins a tie."""
    if not items:
        raise EmptyInputError("best_by")
    best = items[0]
    best_score = score(best)
    for item in items[1:]:
        item_score = score(item)
        if item_score > best_score:
            best, best_score = item, item_score
    return best


def average(total: float, count: int) -> float:
    if count == 0:
        raise EmptyInputError("average")
    return total / count


def peak(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        raise EmptyInputError("peak")
    return max(values)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def fmt_money(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"${round_half_up(value):,}"


def fmt_count(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{round_half_up(value):,}"


def fmt_ratio(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.2f}"


def fmt_roas(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.1f}x"


def fmt_pct(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.2f}%"


def efficiency_band(value: float) -> str:
    if value > 10:
        return "Excellent"
    if value > 5:
        return "Good"
    if value > 2:
        return "Average"
    return "Needs Improvement"

"""Chart series and card text helpers consumed by the presentation layer."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Callable, Iterable

from dashboard.config import (
    DEFAULT_MEDIUM_COLOR,
    MEDIUM_COLORS,
    MOBILE_REVENUE_COLOR,
    MOBILE_SPEND_COLOR,
    REVENUE_COLOR,
    SPEND_COLOR,
)


@dataclass(frozen=True)
class ChartPoint:
    label: str
    value: float
    color: str

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def chart_series(
    items: Iterable[Any],
    label: Callable[[Any], str],
    value: Callable[[Any], float],
    color: str | Callable[[Any], str],
) -> list[ChartPoint]:
    pick_color = color if callable(color) else (lambda _item: color)
    return [ChartPoint(label=label(item), value=float(value(item)), color=pick_color(item)) for item in items]


def short_campaign_label(name: str) -> str:
    return name.split(" - ")[0]


def week_label(week_start: str) -> str:
    """``2024-01-08`` -> ``Jan 8``; keys that are not ISO dates pass through."""
    try:
        parsed = date.fromisoformat(week_start[:10])
    except ValueError:
        return week_start
    return f"{parsed:%b} {parsed.day}"


def medium_color(medium: str) -> str:
    return MEDIUM_COLORS.get(medium, DEFAULT_MEDIUM_COLOR)


def is_mobile(device: str) -> bool:
    return "Mobile" in device


def device_revenue_color(device: str) -> str:
    return MOBILE_REVENUE_COLOR if is_mobile(device) else REVENUE_COLOR


def device_spend_color(device: str) -> str:
    return MOBILE_SPEND_COLOR if is_mobile(device) else SPEND_COLOR


def points_as_dicts(points: Iterable[ChartPoint]) -> list[dict[str, Any]]:
    return [point.as_dict() for point in points]

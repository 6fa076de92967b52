"""Campaign filtering and table sorting helpers."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Collection, Iterable, List, Sequence, TypeVar

from dashboard.application.reporting.metrics import field_value, to_float
from dashboard.domain.models import Campaign

T = TypeVar("T")

SORT_DIRECTIONS: tuple[str, ...] = ("asc", "desc")
SORT_TYPES: tuple[str, ...] = ("string", "number")

# (key, header, sort type) in display order.
CAMPAIGN_TABLE_COLUMNS: tuple[tuple[str, str, str], ...] = (
    ("name", "Campaign Name", "string"),
    ("objective", "Type", "string"),
    ("status", "Status", "string"),
    ("medium", "Medium", "string"),
    ("budget", "Budget", "number"),
    ("spend", "Spend", "number"),
    ("revenue", "Revenue", "number"),
    ("conversions", "Conversions", "number"),
    ("roas", "ROAS", "number"),
)
CAMPAIGN_SORT_TYPES: dict[str, str] = {key: sort_type for key, _, sort_type in CAMPAIGN_TABLE_COLUMNS}


@dataclass(frozen=True)
class SortDescriptor:
    key: str
    direction: str = "asc"

    def toggled(self, key: str) -> "SortDescriptor":
        if key != self.key:
            return SortDescriptor(key=key, direction="asc")
        return replace(self, direction="asc" if self.direction == "desc" else "desc")


DEFAULT_CAMPAIGN_SORT = SortDescriptor(key="revenue", direction="desc")


def filter_campaigns(
    campaigns: Iterable[Campaign],
    name_query: str = "",
    type_selection: Collection[str] = (),
) -> List[Campaign]:
    needle = (name_query or "").lower()
    selected = set(type_selection)
    output: List[Campaign] = []
    for campaign in campaigns:
        matches_name = needle in campaign.name.lower()
        matches_type = not selected or campaign.objective in selected
        if matches_name and matches_type:
            output.append(campaign)
    return output


def distinct_objectives(campaigns: Iterable[Campaign]) -> List[str]:
    seen: dict[str, None] = {}
    for campaign in campaigns:
        seen.setdefault(campaign.objective, None)
    return list(seen)


def sort_rows(
    rows: Sequence[T],
    key: str,
    direction: str = "asc",
    sort_type: str = "string",
) -> List[T]:
    """Stable sort of mapping or attribute rows by one column."""
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f"Unknown sort direction: {direction}")
    if sort_type not in SORT_TYPES:
        raise ValueError(f"Unknown sort type: {sort_type}")

    def _sort_key(row: T) -> Any:
        value = field_value(row, key)
        if sort_type == "number":
            return to_float(value)
        return "" if value is None else str(value)

    return sorted(rows, key=_sort_key, reverse=direction == "desc")


def sort_campaign_rows(rows: Sequence[T], sort: SortDescriptor = DEFAULT_CAMPAIGN_SORT) -> List[T]:
    sort_type = CAMPAIGN_SORT_TYPES.get(sort.key)
    if sort_type is None:
        raise ValueError(f"Campaign table has no sortable column: {sort.key}")
    return sort_rows(rows, sort.key, direction=sort.direction, sort_type=sort_type)

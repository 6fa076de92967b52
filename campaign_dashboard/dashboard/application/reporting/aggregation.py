"""Dimension grouping over nested campaign performance rows."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence

import polars as pl

from dashboard.application.reporting.metrics import field_value, to_float
from dashboard.domain.models import Campaign, GroupSummary

BASE_SUM_FIELDS: tuple[str, ...] = ("revenue", "spend")


def _rows_frame(
    campaigns: Iterable[Campaign],
    extract_rows: Callable[[Campaign], Iterable[Any] | None],
    key_of: Callable[[Any], str],
    sum_fields: Sequence[str],
    first_fields: Sequence[str],
) -> pl.DataFrame:
    schema: dict[str, Any] = {"key": pl.Utf8}
    schema.update({name: pl.Float64 for name in sum_fields})
    schema.update({name: pl.Utf8 for name in first_fields})

    records: list[dict[str, Any]] = []
    for campaign in campaigns:
        for row in extract_rows(campaign) or ():
            record: dict[str, Any] = {"key": str(key_of(row))}
            for name in sum_fields:
                record[name] = to_float(field_value(row, name))
            for name in first_fields:
                value = field_value(row, name)
                record[name] = None if value is None else str(value)
            records.append(record)

    if not records:
        return pl.DataFrame(schema=schema)
    return pl.DataFrame(records, schema=schema)


def group_by(
    campaigns: Iterable[Campaign],
    extract_rows: Callable[[Campaign], Iterable[Any] | None],
    key_of: Callable[[Any], str],
    extra_sums: Sequence[str] = (),
    first_values: Sequence[str] = (),
) -> dict[str, GroupSummary]:
    """Sum revenue/spend (plus ``extra_sums``) per key, in first-seen key order.

    ``first_values`` are string attributes captured from the first row seen for
    each key; later rows never overwrite them.
    """
    sum_fields = [*BASE_SUM_FIELDS, *[name for name in extra_sums if name not in BASE_SUM_FIELDS]]
    frame = _rows_frame(campaigns, extract_rows, key_of, sum_fields, first_values)
    # Totals accumulate row by row in input order.
    grouped = frame.group_by("key", maintain_order=True).agg(
        [
            *[pl.col(name).cum_sum().last() for name in sum_fields],
            *[pl.col(name).first() for name in first_values],
        ]
    )

    summaries: dict[str, GroupSummary] = {}
    for row in grouped.iter_rows(named=True):
        key = str(row["key"])
        summaries[key] = GroupSummary(
            key=key,
            revenue=to_float(row["revenue"]),
            spend=to_float(row["spend"]),
            impressions=to_float(row["impressions"]) if "impressions" in row else None,
            conversions=to_float(row["conversions"]) if "conversions" in row else None,
            country=row.get("country") if "country" in first_values else None,
        )
    return summaries


def group_by_device(campaigns: Iterable[Campaign]) -> list[GroupSummary]:
    grouped = group_by(
        campaigns,
        extract_rows=lambda campaign: campaign.device_performance,
        key_of=lambda row: row.device,
        extra_sums=("impressions",),
    )
    return list(grouped.values())


def group_by_region(campaigns: Iterable[Campaign]) -> list[GroupSummary]:
    grouped = group_by(
        campaigns,
        extract_rows=lambda campaign: campaign.regional_performance,
        key_of=lambda row: row.region,
        first_values=("country",),
    )
    return list(grouped.values())


def group_by_week(campaigns: Iterable[Campaign]) -> list[GroupSummary]:
    """Weekly totals in chronological order (ISO ``week_start`` sorts lexically)."""
    grouped = group_by(
        campaigns,
        extract_rows=lambda campaign: campaign.weekly_performance,
        key_of=lambda row: row.week_start,
    )
    return [grouped[key] for key in sorted(grouped)]


def group_by_medium(campaigns: Iterable[Campaign]) -> list[GroupSummary]:
    grouped = group_by(
        campaigns,
        extract_rows=lambda campaign: (campaign,),
        key_of=lambda row: row.medium,
        extra_sums=("conversions",),
    )
    return list(grouped.values())

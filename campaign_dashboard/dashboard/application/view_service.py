"""Application service building per-page view-models from the campaign bundle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Collection

from dashboard.application.reporting.aggregation import (
    group_by_device,
    group_by_medium,
    group_by_region,
    group_by_week,
)
from dashboard.application.reporting.metrics import (
    average,
    best_by,
    efficiency_band,
    fmt_count,
    fmt_money,
    fmt_ratio,
    fmt_roas,
    peak,
    roas,
    sum_field,
)
from dashboard.application.reporting.rendering import (
    ChartPoint,
    chart_series,
    device_revenue_color,
    device_spend_color,
    medium_color,
    points_as_dicts,
    short_campaign_label,
    week_label,
)
from dashboard.application.reporting.selectors import (
    DEFAULT_CAMPAIGN_SORT,
    SortDescriptor,
    distinct_objectives,
    filter_campaigns,
    sort_campaign_rows,
    sort_rows,
)
from dashboard.config import (
    CONVERSION_RATE_COLOR,
    LEADER_LIMIT,
    REVENUE_COLOR,
    ROAS_COLOR,
    SPEND_COLOR,
    TOP_CAMPAIGN_LIMIT,
    TOP_REGION_LIMIT,
)
from dashboard.domain.errors import EmptyInputError
from dashboard.domain.models import Campaign, GroupSummary, MarketingData


def _group_roas(group: GroupSummary) -> float:
    return roas(group.revenue, group.spend)


def _group_revenue(group: GroupSummary) -> float:
    return group.revenue


@dataclass(frozen=True)
class CampaignView:
    total_count: int
    filtered: list[Campaign]
    objective_options: list[str]
    name_query: str
    type_selection: list[str]
    sort: SortDescriptor
    total_spend: float
    total_revenue: float
    total_conversions: float
    top_revenue_chart: list[ChartPoint]
    roas_chart: list[ChartPoint]
    medium_chart: list[ChartPoint]
    conversion_rate_chart: list[ChartPoint]
    table_rows: list[dict[str, Any]]

    @property
    def filtered_count(self) -> int:
        return len(self.filtered)

    def cards(self) -> dict[str, str]:
        return {
            "Filtered Campaigns": str(self.filtered_count),
            "Total Spend": fmt_money(self.total_spend),
            "Total Revenue": fmt_money(self.total_revenue),
            "Total Conversions": fmt_count(self.total_conversions),
        }

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_count": self.total_count,
            "filtered_count": self.filtered_count,
            "filters": {"name_query": self.name_query, "type_selection": self.type_selection},
            "objective_options": self.objective_options,
            "sort": {"key": self.sort.key, "direction": self.sort.direction},
            "cards": self.cards(),
            "charts": {
                "top_revenue": points_as_dicts(self.top_revenue_chart),
                "roas": points_as_dicts(self.roas_chart),
                "medium_revenue": points_as_dicts(self.medium_chart),
                "conversion_rate": points_as_dicts(self.conversion_rate_chart),
            },
            "table": self.table_rows,
        }


def build_campaign_view(
    data: MarketingData,
    name_query: str = "",
    type_selection: Collection[str] = (),
    sort: SortDescriptor = DEFAULT_CAMPAIGN_SORT,
) -> CampaignView:
    """Filter campaigns, then derive cards, top-N charts, and the sorted table."""
    filtered = filter_campaigns(data.campaigns, name_query, type_selection)
    leading = filtered[:TOP_CAMPAIGN_LIMIT]

    def _label(campaign: Campaign) -> str:
        return short_campaign_label(campaign.name)

    return CampaignView(
        total_count=len(data.campaigns),
        filtered=filtered,
        objective_options=distinct_objectives(data.campaigns),
        name_query=name_query,
        type_selection=sorted(type_selection),
        sort=sort,
        total_spend=sum_field(filtered, "spend"),
        total_revenue=sum_field(filtered, "revenue"),
        total_conversions=sum_field(filtered, "conversions"),
        top_revenue_chart=chart_series(leading, _label, lambda c: c.revenue, REVENUE_COLOR),
        roas_chart=chart_series(leading, _label, lambda c: c.roas, ROAS_COLOR),
        medium_chart=chart_series(
            group_by_medium(filtered),
            label=lambda group: group.key,
            value=_group_revenue,
            color=lambda group: medium_color(group.key),
        ),
        conversion_rate_chart=chart_series(leading, _label, lambda c: c.conversion_rate, CONVERSION_RATE_COLOR),
        table_rows=sort_campaign_rows([campaign.table_row() for campaign in filtered], sort),
    )


@dataclass(frozen=True)
class DeviceView:
    devices: list[GroupSummary]
    total_revenue: float
    total_spend: float
    total_impressions: float
    average_roas: float
    best_device: str | None
    revenue_chart: list[ChartPoint]
    spend_chart: list[ChartPoint]

    def breakdown_rows(self) -> list[dict[str, Any]]:
        return [
            {"device": group.key, "revenue": group.revenue, "roas": _group_roas(group)}
            for group in self.devices
        ]

    def cards(self) -> dict[str, str]:
        return {
            "Total Revenue": fmt_money(self.total_revenue),
            "Total Impressions": fmt_count(self.total_impressions),
            "Avg. ROAS": fmt_ratio(self.average_roas),
            "Best Performing Device": self.best_device or "N/A",
        }

    def as_dict(self) -> dict[str, Any]:
        return {
            "cards": self.cards(),
            "devices": [group.as_dict() for group in self.devices],
            "charts": {
                "revenue": points_as_dicts(self.revenue_chart),
                "spend": points_as_dicts(self.spend_chart),
            },
            "breakdown": self.breakdown_rows(),
        }


def build_device_view(data: MarketingData) -> DeviceView:
    devices = group_by_device(data.campaigns)
    total_revenue = sum_field(devices, "revenue")
    total_spend = sum_field(devices, "spend")
    try:
        best_device: str | None = best_by(devices, _group_roas).key
    except EmptyInputError:
        best_device = None

    return DeviceView(
        devices=devices,
        total_revenue=total_revenue,
        total_spend=total_spend,
        total_impressions=sum_field(devices, "impressions"),
        average_roas=roas(total_revenue, total_spend),
        best_device=best_device,
        revenue_chart=chart_series(
            devices, lambda g: g.key, _group_revenue, lambda g: device_revenue_color(g.key)
        ),
        spend_chart=chart_series(devices, lambda g: g.key, lambda g: g.spend, lambda g: device_spend_color(g.key)),
    )


@dataclass(frozen=True)
class RegionMetrics:
    region_count: int
    total_revenue: float
    total_spend: float
    average_roas: float
    top_region: str
    top_region_revenue: float


@dataclass(frozen=True)
class RegionView:
    regions: list[GroupSummary]
    metrics: RegionMetrics | None
    revenue_chart: list[ChartPoint]
    spend_chart: list[ChartPoint]
    revenue_by_region: list[dict[str, Any]]
    spend_by_region: list[dict[str, Any]]
    revenue_leaders: list[GroupSummary]
    spend_leaders: list[GroupSummary]

    def cards(self) -> dict[str, str]:
        if self.metrics is None:
            return {}
        return {
            "Total Regions": str(self.metrics.region_count),
            "Total Revenue": fmt_money(self.metrics.total_revenue),
            "Total Spend": fmt_money(self.metrics.total_spend),
            "Top Region": self.metrics.top_region,
        }

    def as_dict(self) -> dict[str, Any]:
        return {
            "cards": self.cards(),
            "regions": [group.as_dict() for group in self.regions],
            "charts": {
                "top_revenue": points_as_dicts(self.revenue_chart),
                "top_spend": points_as_dicts(self.spend_chart),
                "revenue_by_region": self.revenue_by_region,
                "spend_by_region": self.spend_by_region,
            },
            "revenue_leaders": [group.as_dict() for group in self.revenue_leaders],
            "spend_leaders": [group.as_dict() for group in self.spend_leaders],
        }


def _region_series(regions: list[GroupSummary], value_field: str) -> list[dict[str, Any]]:
    """Every region in encounter order, valued by one field and tagged with its country."""
    return [
        {
            "region": group.key,
            "country": group.country or "",
            "value": getattr(group, value_field),
            "revenue": group.revenue,
            "spend": group.spend,
        }
        for group in regions
    ]


def build_region_view(data: MarketingData) -> RegionView:
    regions = group_by_region(data.campaigns)
    by_revenue = sort_rows(regions, "revenue", direction="desc", sort_type="number")
    by_spend = sort_rows(regions, "spend", direction="desc", sort_type="number")

    metrics: RegionMetrics | None = None
    if regions:
        total_revenue = sum_field(regions, "revenue")
        total_spend = sum_field(regions, "spend")
        top_region = best_by(regions, _group_revenue)
        metrics = RegionMetrics(
            region_count=len(regions),
            total_revenue=total_revenue,
            total_spend=total_spend,
            average_roas=roas(total_revenue, total_spend),
            top_region=top_region.key,
            top_region_revenue=top_region.revenue,
        )

    return RegionView(
        regions=regions,
        metrics=metrics,
        revenue_chart=chart_series(by_revenue[:TOP_REGION_LIMIT], lambda g: g.key, _group_revenue, REVENUE_COLOR),
        spend_chart=chart_series(by_spend[:TOP_REGION_LIMIT], lambda g: g.key, lambda g: g.spend, SPEND_COLOR),
        revenue_by_region=_region_series(regions, "revenue"),
        spend_by_region=_region_series(regions, "spend"),
        revenue_leaders=by_revenue[:LEADER_LIMIT],
        spend_leaders=by_spend[:LEADER_LIMIT],
    )


@dataclass(frozen=True)
class WeeklyMetrics:
    total_revenue: float
    total_spend: float
    average_roas: float
    week_count: int
    average_weekly_revenue: float
    average_weekly_spend: float
    revenue_peak: float
    spend_peak: float

    @property
    def data_period(self) -> str:
        return f"{self.week_count} weeks"

    @property
    def efficiency(self) -> str:
        return efficiency_band(self.average_roas)


@dataclass(frozen=True)
class WeeklyView:
    weeks: list[GroupSummary]
    metrics: WeeklyMetrics | None
    revenue_series: list[ChartPoint]
    spend_series: list[ChartPoint]

    def cards(self) -> dict[str, str]:
        if self.metrics is None:
            return {}
        return {
            "Total Revenue": fmt_money(self.metrics.total_revenue),
            "Total Spend": fmt_money(self.metrics.total_spend),
            "Average ROAS": fmt_roas(self.metrics.average_roas),
            "Weeks Tracked": str(self.metrics.week_count),
            "Average Weekly Revenue": fmt_money(self.metrics.average_weekly_revenue),
            "Average Weekly Spend": fmt_money(self.metrics.average_weekly_spend),
            "Revenue Peak": fmt_money(self.metrics.revenue_peak),
            "Spend Peak": fmt_money(self.metrics.spend_peak),
            "Data Period": self.metrics.data_period,
            "Efficiency": self.metrics.efficiency,
        }

    def as_dict(self) -> dict[str, Any]:
        return {
            "cards": self.cards(),
            "weeks": [group.as_dict() for group in self.weeks],
            "charts": {
                "revenue": points_as_dicts(self.revenue_series),
                "spend": points_as_dicts(self.spend_series),
            },
        }


def build_weekly_view(data: MarketingData) -> WeeklyView:
    weeks = group_by_week(data.campaigns)

    metrics: WeeklyMetrics | None = None
    if weeks:
        total_revenue = sum_field(weeks, "revenue")
        total_spend = sum_field(weeks, "spend")
        metrics = WeeklyMetrics(
            total_revenue=total_revenue,
            total_spend=total_spend,
            average_roas=roas(total_revenue, total_spend),
            week_count=len(weeks),
            average_weekly_revenue=average(total_revenue, len(weeks)),
            average_weekly_spend=average(total_spend, len(weeks)),
            revenue_peak=peak(week.revenue for week in weeks),
            spend_peak=peak(week.spend for week in weeks),
        )

    return WeeklyView(
        weeks=weeks,
        metrics=metrics,
        revenue_series=chart_series(weeks, lambda g: week_label(g.key), _group_revenue, REVENUE_COLOR),
        spend_series=chart_series(weeks, lambda g: week_label(g.key), lambda g: g.spend, SPEND_COLOR),
    )

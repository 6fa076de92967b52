"""Application service that renders every dashboard page and exports the result."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter
from typing import Any, Awaitable, Callable, Collection, Dict, List

import polars as pl

from dashboard.application.page_service import (
    DashboardPage,
    LoadState,
    campaign_page,
    device_page,
    region_page,
    weekly_page,
)
from dashboard.application.reporting.metrics import roas
from dashboard.application.reporting.selectors import CAMPAIGN_TABLE_COLUMNS, SortDescriptor
from dashboard.application.view_service import CampaignView, DeviceView, RegionView, WeeklyView
from dashboard.domain.errors import FetchError
from dashboard.domain.models import MarketingData
from dashboard.infrastructure.report_exporter import save_output_workbook, save_summary_json

logger = logging.getLogger(__name__)

CAMPAIGN_SHEET_COLUMNS: list[str] = ["id", *[key for key, _, _ in CAMPAIGN_TABLE_COLUMNS], "conversion_rate"]
DEVICE_SHEET_COLUMNS: list[str] = ["device", "revenue", "spend", "impressions", "roas"]
REGION_SHEET_COLUMNS: list[str] = ["region", "country", "revenue", "spend"]
WEEK_SHEET_COLUMNS: list[str] = ["week_start", "revenue", "spend"]


@dataclass(frozen=True)
class DashboardViews:
    campaign: CampaignView
    device: DeviceView
    region: RegionView
    weekly: WeeklyView

    def summary(self) -> dict[str, Any]:
        return {
            "campaign_view": self.campaign.as_dict(),
            "device_view": self.device.as_dict(),
            "region_view": self.region.as_dict(),
            "weekly_view": self.weekly.as_dict(),
        }


@dataclass(frozen=True)
class ExportResult:
    views: DashboardViews
    json_path: Path
    excel_path: Path
    excel_saved: bool
    excel_error: str


def _sheet_df(rows: List[Dict[str, Any]], columns: List[str]) -> pl.DataFrame:
    if not rows:
        return pl.DataFrame({col: [] for col in columns})
    return pl.DataFrame([{col: row.get(col) for col in columns} for row in rows]).select(columns)


def build_sheets(views: DashboardViews) -> dict[str, pl.DataFrame]:
    # Source ids may mix ints and strings; one column needs one dtype.
    campaign_rows = [
        {**row, "id": None if row.get("id") is None else str(row["id"])} for row in views.campaign.table_rows
    ]
    device_rows = [
        {**group.as_dict(), "device": group.key, "roas": roas(group.revenue, group.spend)}
        for group in views.device.devices
    ]
    region_rows = [{**group.as_dict(), "region": group.key} for group in views.region.regions]
    week_rows = [{**group.as_dict(), "week_start": group.key} for group in views.weekly.weeks]
    return {
        "campaigns": _sheet_df(campaign_rows, CAMPAIGN_SHEET_COLUMNS),
        "devices": _sheet_df(device_rows, DEVICE_SHEET_COLUMNS),
        "regions": _sheet_df(region_rows, REGION_SHEET_COLUMNS),
        "weeks": _sheet_df(week_rows, WEEK_SHEET_COLUMNS),
    }


async def load_dashboard_views(
    fetch: Callable[[], Awaitable[MarketingData]],
    name_query: str = "",
    type_selection: Collection[str] = (),
    sort: SortDescriptor | None = None,
) -> DashboardViews:
    """Load each page from its own fetch and render the four views.

    Raises ``FetchError`` with the first page failure message.
    """
    campaign = campaign_page(fetch)
    campaign.set_name_query(name_query)
    campaign.set_type_selection(type_selection)
    if sort is not None:
        campaign.context.sort = sort
    pages: list[DashboardPage[Any]] = [campaign, device_page(fetch), region_page(fetch), weekly_page(fetch)]

    await asyncio.gather(*(page.load() for page in pages))

    snapshots = [page.render() for page in pages]
    for page, snapshot in zip(pages, snapshots):
        if snapshot.state is not LoadState.LOADED:
            raise FetchError(snapshot.error or f"{page.name} page did not load")
    return DashboardViews(
        campaign=snapshots[0].view,
        device=snapshots[1].view,
        region=snapshots[2].view,
        weekly=snapshots[3].view,
    )


def run_reporting_pipeline(
    fetch: Callable[[], Awaitable[MarketingData]],
    output_dir: Path,
    name_query: str = "",
    type_selection: Collection[str] = (),
    sort: SortDescriptor | None = None,
) -> ExportResult:
    pipeline_start = perf_counter()
    views = asyncio.run(load_dashboard_views(fetch, name_query, type_selection, sort))
    logger.info(
        "Views prepared: campaigns=%d/%d, devices=%d, regions=%d, weeks=%d",
        views.campaign.filtered_count,
        views.campaign.total_count,
        len(views.device.devices),
        len(views.region.regions),
        len(views.weekly.weeks),
    )

    json_path = output_dir / "summary.json"
    excel_path = output_dir / "summary.xlsx"
    save_summary_json(json_path, views.summary())
    excel_saved, excel_error = save_output_workbook(excel_path, build_sheets(views))
    logger.info("Total elapsed: %.3fs", perf_counter() - pipeline_start)

    return ExportResult(
        views=views,
        json_path=json_path,
        excel_path=excel_path,
        excel_saved=excel_saved,
        excel_error=excel_error,
    )

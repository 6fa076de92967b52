"""Application layer package."""

from .page_service import DashboardPage, LoadState, PageContext, PageSnapshot
from .report_service import DashboardViews, load_dashboard_views, run_reporting_pipeline
from .view_service import build_campaign_view, build_device_view, build_region_view, build_weekly_view

__all__ = [
    "DashboardPage",
    "LoadState",
    "PageContext",
    "PageSnapshot",
    "DashboardViews",
    "load_dashboard_views",
    "run_reporting_pipeline",
    "build_campaign_view",
    "build_device_view",
    "build_region_view",
    "build_weekly_view",
]

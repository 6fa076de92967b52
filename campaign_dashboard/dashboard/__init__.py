"""Campaign dashboard core package."""

from .application import DashboardViews, load_dashboard_views, run_reporting_pipeline
from .domain import Campaign, EmptyInputError, FetchError, MarketingData
from .infrastructure import MarketingDataSource, fetch_marketing_data

__all__ = [
    "Campaign",
    "MarketingData",
    "FetchError",
    "EmptyInputError",
    "MarketingDataSource",
    "fetch_marketing_data",
    "DashboardViews",
    "load_dashboard_views",
    "run_reporting_pipeline",
]

"""Domain layer package."""

from .errors import DashboardError, EmptyInputError, FetchError
from .models import Campaign, DevicePerf, GroupSummary, MarketingData, RegionPerf, WeekPerf

__all__ = [
    "Campaign",
    "DevicePerf",
    "RegionPerf",
    "WeekPerf",
    "MarketingData",
    "GroupSummary",
    "DashboardError",
    "FetchError",
    "EmptyInputError",
]

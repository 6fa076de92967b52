"""Infrastructure layer package."""

from .data_source import MarketingDataSource, fetch_marketing_data, parse_marketing_data
from .report_exporter import save_output_workbook, save_summary_json

__all__ = [
    "MarketingDataSource",
    "fetch_marketing_data",
    "parse_marketing_data",
    "save_output_workbook",
    "save_summary_json",
]

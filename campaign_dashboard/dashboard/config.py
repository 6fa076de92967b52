"""Environment-driven settings and dashboard presentation constants."""

from __future__ import annotations

import logging
import os
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parent
DEFAULT_DATA_PATH = PACKAGE_ROOT / "data" / "marketing_data.json"
DEFAULT_OUTPUT_DIR = Path("output")

TOP_CAMPAIGN_LIMIT = 6
TOP_REGION_LIMIT = 6
LEADER_LIMIT = 3

REVENUE_COLOR = "#10B981"
SPEND_COLOR = "#EF4444"
ROAS_COLOR = "#3B82F6"
CONVERSION_RATE_COLOR = "#F59E0B"
MEDIUM_COLORS: dict[str, str] = {
    "Instagram": "#E1306C",
    "Facebook": "#1877F2",
    "Google Ads": "#4285F4",
}
DEFAULT_MEDIUM_COLOR = "#8B5CF6"
MOBILE_REVENUE_COLOR = "#3B82F6"
MOBILE_SPEND_COLOR = "#F59E0B"


def _parse_data_source() -> str:
    raw = os.getenv("DASHBOARD_DATA_SOURCE", "").strip()
    return raw or str(DEFAULT_DATA_PATH)


def _parse_fetch_timeout() -> float:
    raw = os.getenv("DASHBOARD_FETCH_TIMEOUT", "10")
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid DASHBOARD_FETCH_TIMEOUT: {raw}") from exc
    if timeout <= 0:
        raise ValueError(f"DASHBOARD_FETCH_TIMEOUT must be positive, got {timeout}")
    return timeout


def _parse_log_level() -> int:
    raw = os.getenv("DASHBOARD_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise ValueError(f"Invalid DASHBOARD_LOG_LEVEL: {raw}")
    return level


DATA_SOURCE = _parse_data_source()
FETCH_TIMEOUT_SECONDS = _parse_fetch_timeout()
LOG_LEVEL = _parse_log_level()

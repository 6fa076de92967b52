"""Infrastructure adapter for summary export targets."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import polars as pl
from openpyxl import Workbook

logger = logging.getLogger(__name__)

EXCEL_SHEET_NAME_LIMIT = 31


def _excel_cell_value(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (int, bool, str)):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def save_summary_json(path: Path, summary: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Saved JSON summary to %s", path)


def write_output_excel(path: Path, sheets: Dict[str, pl.DataFrame]) -> None:
    workbook = Workbook()
    default_sheet = workbook.active
    workbook.remove(default_sheet)

    for sheet_name, frame in sheets.items():
        worksheet = workbook.create_sheet(title=str(sheet_name)[:EXCEL_SHEET_NAME_LIMIT])
        worksheet.append(frame.columns)
        for row in frame.iter_rows(named=False):
            worksheet.append([_excel_cell_value(value) for value in row])

    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)


def save_output_workbook(path: Path, sheets: Dict[str, pl.DataFrame]) -> tuple[bool, str]:
    try:
        write_output_excel(path, sheets)
    except PermissionError as exc:
        logger.warning("Excel save skipped for %s: %s", path, exc)
        return False, str(exc)
    logger.info("Saved Excel workbook to %s", path)
    return True, ""

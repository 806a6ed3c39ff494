"""Scenario record store exports."""

from .scenario_records import RECORD_COLUMNS, RECORD_SHEET_NAME, ScenarioRow
from .scenario_workbook_store import RecordStoreError, ScenarioWorkbookStore, workbook_name_for

__all__ = [
    "RECORD_COLUMNS",
    "RECORD_SHEET_NAME",
    "ScenarioRow",
    "RecordStoreError",
    "ScenarioWorkbookStore",
    "workbook_name_for",
]

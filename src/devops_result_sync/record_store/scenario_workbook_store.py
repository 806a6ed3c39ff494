"""Append-only scenario workbook shared by the scenario workers of one execution."""

from __future__ import annotations

import logging
import threading
import zipfile
from datetime import date
from pathlib import Path

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet._read_only import ReadOnlyWorksheet
from openpyxl.worksheet.worksheet import Worksheet

from .scenario_records import RECORD_COLUMNS, RECORD_SHEET_NAME, ScenarioRow

logger = logging.getLogger(__name__)

WORKBOOK_PREFIX = "AutomationTestRun"
# XML parse errors from openpyxl (ElementTree and lxml) derive from SyntaxError.
_WORKBOOK_ERRORS = (
    OSError,
    KeyError,
    ValueError,
    SyntaxError,
    zipfile.BadZipFile,
    InvalidFileException,
)


class RecordStoreError(Exception):
    """Raised when the scenario workbook cannot be created, written or read."""


def workbook_name_for(day: date) -> str:
    return f"{WORKBOOK_PREFIX}{day.strftime('%Y.%m.%d')}.xlsx"


class ScenarioWorkbookStore:
    """Workbook with one row per finished scenario.

    The workbook is opened and saved on every operation; appends from
    concurrent workers are serialized by a lock owned by the store.
    """

    def __init__(self, directory: Path | str, *, day: date | None = None) -> None:
        self._path = Path(directory) / workbook_name_for(day or date.today())
        self._lock = threading.Lock()
        self._initialized = False

    @classmethod
    def from_existing(cls, path: Path | str) -> ScenarioWorkbookStore:
        """Attach to a workbook written by an earlier process."""
        workbook_path = Path(path)
        if not workbook_path.exists():
            raise RecordStoreError(f"Scenario workbook not found: {workbook_path}")
        store = cls(workbook_path.parent)
        store._path = workbook_path
        store._initialized = True
        return store

    @property
    def path(self) -> Path:
        return self._path

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> bool:
        """Create the workbook with its header row; only the first call does any work.

        Returns:
          True when this call created the workbook.

        Raises:
          RecordStoreError: If the workbook location is not writable.
        """
        with self._lock:
            if self._initialized:
                return False
            workbook = Workbook()
            sheet = workbook.active
            if sheet is None:
                raise RecordStoreError("Workbook active sheet is not available.")
            sheet.title = RECORD_SHEET_NAME
            for column_index, name in enumerate(RECORD_COLUMNS, start=1):
                cell = sheet.cell(row=1, column=column_index, value=name)
                cell.font = Font(bold=True)
                sheet.column_dimensions[get_column_letter(column_index)].width = max(
                    12, len(name) + 6
                )
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                workbook.save(self._path)
            except OSError as exc:
                raise RecordStoreError(
                    f"Unable to create scenario workbook: {self._path}"
                ) from exc
            self._initialized = True
        logger.info("Scenario workbook initialized at %s", self._path)
        return True

    def append_row(self, row: ScenarioRow) -> None:
        """Append one scenario row and persist the workbook."""
        with self._lock:
            try:
                workbook = load_workbook(self._path)
                sheet = self._record_sheet(workbook)
                row_index = sheet.max_row + 1
                for column_index, value in enumerate(row.to_cells(), start=1):
                    cell = sheet.cell(row=row_index, column=column_index, value=value)
                    if isinstance(value, str):
                        # Text starting with "=" is otherwise saved as a formula.
                        cell.data_type = "s"
                workbook.save(self._path)
            except _WORKBOOK_ERRORS as exc:
                raise RecordStoreError(
                    f"Unable to append scenario '{row.description}' to {self._path}"
                ) from exc
        logger.debug("Scenario '%s' written to %s", row.description, self._path.name)

    def read_all(self) -> tuple[ScenarioRow, ...]:
        """Return every appended scenario row, header excluded."""
        with self._lock:
            try:
                workbook = load_workbook(self._path, read_only=True, data_only=True)
            except _WORKBOOK_ERRORS as exc:
                raise RecordStoreError(f"Unable to read scenario workbook: {self._path}") from exc
            try:
                sheet = self._record_sheet(workbook)
                rows = tuple(
                    ScenarioRow.from_cells(values)
                    for values in sheet.iter_rows(min_row=2, values_only=True)
                    if any(value not in (None, "") for value in values)
                )
            except _WORKBOOK_ERRORS as exc:
                raise RecordStoreError(f"Unable to read scenario workbook: {self._path}") from exc
            finally:
                workbook.close()
        logger.info("Read %d scenario rows from %s", len(rows), self._path)
        return rows

    def _record_sheet(self, workbook: Workbook) -> Worksheet | ReadOnlyWorksheet:
        if RECORD_SHEET_NAME not in workbook.sheetnames:
            raise RecordStoreError(
                f"Scenario workbook {self._path} has no '{RECORD_SHEET_NAME}' sheet."
            )
        return workbook[RECORD_SHEET_NAME]

"""Spreadsheet backend interface and an in-memory implementation."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..errors import InvalidRangeError, SheetNotFoundError
from .ranges import col_letter_to_index, column_letters, index_to_col_letter

logger = logging.getLogger(__name__)


def cell_to_str(value: Any) -> str:
    """Render a cell value the way it is sent to a model."""
    if value is None:
        return ""
    return str(value)


class SpreadsheetBackend(ABC):
    """Read/write access to the sheets of a single spreadsheet."""

    @abstractmethod
    def get_sheet_names(self) -> list[str]:
        """Return sheet names in tab order."""

    @abstractmethod
    def get_last_row(self, sheet: str) -> int:
        """Return the last row with content in any column, 0 when empty."""

    @abstractmethod
    def get_last_column(self, sheet: str) -> int:
        """Return the 1-based index of the last column with content, 0 when empty."""

    @abstractmethod
    def read_column(self, sheet: str, column: str, start_row: int, row_count: int) -> list[str]:
        """Read ``row_count`` cells of one column as strings."""

    @abstractmethod
    def write_column(self, sheet: str, column: str, start_row: int, values: list[str]) -> int:
        """Write values down one column starting at ``start_row``.

        Returns the number of rows written.
        """

    @abstractmethod
    def read_row(self, sheet: str, row: int, column_count: int) -> list[str]:
        """Read the first ``column_count`` cells of a row as strings."""

    def has_sheet(self, sheet: str) -> bool:
        return sheet in self.get_sheet_names()

    def get_column_letters(self, sheet: str) -> list[str]:
        """Column letters from A to the last populated column."""
        if not self.has_sheet(sheet):
            return []
        return column_letters(self.get_last_column(sheet))

    def get_column_headers(self, sheet: str, header_row: int = 1) -> dict[str, str]:
        """Map column letter to the header text found in ``header_row``."""
        if not self.has_sheet(sheet):
            return {}
        last_column = self.get_last_column(sheet)
        if last_column == 0:
            return {}
        headers = self.read_row(sheet, header_row, last_column)
        return {index_to_col_letter(i): header for i, header in enumerate(headers)}


class InMemorySpreadsheet(SpreadsheetBackend):
    """Spreadsheet held in plain dicts, keyed by sheet name then (row, col)."""

    def __init__(self, sheets: Optional[dict[str, list[list[Any]]]] = None):
        self._sheets: dict[str, dict[tuple[int, int], Any]] = {}
        for name, rows in (sheets or {}).items():
            self.add_sheet(name, rows)

    def add_sheet(self, name: str, rows: Optional[list[list[Any]]] = None):
        """Add a sheet from a list of rows, row 1 first."""
        cells: dict[tuple[int, int], Any] = {}
        for row_idx, row in enumerate(rows or []):
            for col_idx, value in enumerate(row):
                if value not in (None, ""):
                    cells[(row_idx + 1, col_idx + 1)] = value
        self._sheets[name] = cells

    def remove_sheet(self, name: str):
        self._sheets.pop(name, None)

    def _cells(self, sheet: str) -> dict[tuple[int, int], Any]:
        try:
            return self._sheets[sheet]
        except KeyError:
            raise SheetNotFoundError(sheet)

    def get_cell(self, sheet: str, a1: str) -> str:
        """Read one cell by A1 notation, e.g. ``B2``."""
        letters = "".join(c for c in a1 if c.isalpha())
        row = int("".join(c for c in a1 if c.isdigit()))
        return cell_to_str(self._cells(sheet).get((row, col_letter_to_index(letters) + 1)))

    def get_sheet_names(self) -> list[str]:
        return list(self._sheets)

    def get_last_row(self, sheet: str) -> int:
        return max((row for row, _ in self._cells(sheet)), default=0)

    def get_last_column(self, sheet: str) -> int:
        return max((col for _, col in self._cells(sheet)), default=0)

    def read_column(self, sheet: str, column: str, start_row: int, row_count: int) -> list[str]:
        cells = self._cells(sheet)
        col = col_letter_to_index(column) + 1
        return [cell_to_str(cells.get((row, col))) for row in range(start_row, start_row + row_count)]

    def read_row(self, sheet: str, row: int, column_count: int) -> list[str]:
        cells = self._cells(sheet)
        return [cell_to_str(cells.get((row, col))) for col in range(1, column_count + 1)]

    def write_column(self, sheet: str, column: str, start_row: int, values: list[str]) -> int:
        if start_row < 1:
            raise InvalidRangeError(f"Start row must be 1 or greater, got {start_row}")
        cells = self._cells(sheet)
        col = col_letter_to_index(column) + 1
        for offset, value in enumerate(values):
            key = (start_row + offset, col)
            if value in (None, ""):
                cells.pop(key, None)
            else:
                cells[key] = value
        logger.debug(f"Wrote {len(values)} cells to {sheet}!{column}{start_row}")
        return len(values)

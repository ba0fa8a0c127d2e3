"""Spreadsheet access and row range resolution."""

from .backend import SpreadsheetBackend, InMemorySpreadsheet
from .client import GoogleSheetsBackend
from .ranges import (
    AUTO_START_ROW,
    EffectiveRange,
    RangeSpec,
    RowMode,
    col_letter_to_index,
    column_letters,
    index_to_col_letter,
    resolve,
)

__all__ = [
    "SpreadsheetBackend",
    "InMemorySpreadsheet",
    "GoogleSheetsBackend",
    "AUTO_START_ROW",
    "EffectiveRange",
    "RangeSpec",
    "RowMode",
    "col_letter_to_index",
    "column_letters",
    "index_to_col_letter",
    "resolve",
]

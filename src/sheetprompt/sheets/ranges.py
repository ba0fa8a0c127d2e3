"""Row range resolution for column reads and writes.

A ``RangeSpec`` is what the user asks for: a sheet, a column, a start row
(or ``"auto"`` for the row below the header) and a row mode. Resolving it
against the sheet's last populated row gives an ``EffectiveRange`` that is
safe to read and, retargeted at the output column, to write. Resolution is
pure, so resolving the same spec twice always yields the same rows.
"""

import re
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from ..errors import InvalidRangeError

AUTO_START_ROW = "auto"
WINDOW_ROWS = 3

StartRow = Union[int, Literal["auto"]]

_COLUMN_RE = re.compile(r"^[A-Za-z]+$")


class RowMode(str, Enum):
    """How many rows to take from the start row."""

    FIXED = "fixed"  # rowCount rows
    ALL = "all"  # every row down to the last populated one
    THREE = "three"  # a fixed window of three rows


def col_letter_to_index(col: str) -> int:
    """Convert column letter(s) to 0-based index. A=0, B=1, ..., Z=25, AA=26, etc."""
    if not _COLUMN_RE.match(col or ""):
        raise InvalidRangeError(f"Invalid column: {col!r}")
    result = 0
    for char in col.upper():
        result = result * 26 + (ord(char) - ord("A") + 1)
    return result - 1


def index_to_col_letter(index: int) -> str:
    """Convert 0-based index to column letter(s)."""
    result = ""
    index += 1
    while index > 0:
        index -= 1
        result = chr(ord("A") + (index % 26)) + result
        index //= 26
    return result


def column_letters(count: int) -> list[str]:
    """Return the first ``count`` column letters (A, B, ...)."""
    return [index_to_col_letter(i) for i in range(max(0, count))]


class RangeSpec(BaseModel):
    """A possibly symbolic single-column row range."""

    sheet: str
    column: str
    start_row: StartRow = AUTO_START_ROW
    row_mode: RowMode = RowMode.FIXED
    row_count: Optional[int] = None


class EffectiveRange(BaseModel):
    """A concrete, bounds-clamped single-column row window."""

    sheet: str
    column: str
    start_row: int = Field(ge=1)
    row_count: int = Field(ge=0)

    @property
    def end_row(self) -> int:
        """Last row covered by the range (start_row - 1 when empty)."""
        return self.start_row + self.row_count - 1

    @property
    def is_empty(self) -> bool:
        return self.row_count == 0

    @property
    def a1_notation(self) -> str:
        column = self.column.upper()
        end_row = max(self.start_row, self.end_row)
        return f"{self.sheet}!{column}{self.start_row}:{column}{end_row}"

    def retarget(self, sheet: str, column: str) -> "EffectiveRange":
        """Same rows, different sheet/column."""
        col_letter_to_index(column)
        return EffectiveRange(
            sheet=sheet,
            column=column.upper(),
            start_row=self.start_row,
            row_count=self.row_count,
        )


def effective_start_row(start_row: StartRow, header_row: int) -> int:
    """Resolve ``"auto"`` to the row below the header, validate literals."""
    if start_row == AUTO_START_ROW:
        return header_row + 1
    if isinstance(start_row, bool) or not isinstance(start_row, int):
        raise InvalidRangeError(f"Invalid start row: {start_row!r}")
    if start_row < 1:
        raise InvalidRangeError(f"Start row must be 1 or greater, got {start_row}")
    return start_row


def requested_row_count(row_mode: RowMode, row_count: Optional[int], available: int) -> int:
    """Rows asked for by the row mode, before clamping to the sheet."""
    if row_mode == RowMode.FIXED:
        return max(1, row_count or 0)
    if row_mode == RowMode.THREE:
        return WINDOW_ROWS
    if row_mode == RowMode.ALL:
        return available
    raise InvalidRangeError(f"Unknown row mode: {row_mode!r}")


def resolve(spec: RangeSpec, sheet_last_row: int, header_row: int) -> EffectiveRange:
    """Resolve a RangeSpec against a sheet's current extent.

    Never reads past ``sheet_last_row``: a start row below the last populated
    row gives an empty range rather than an error.
    """
    col_letter_to_index(spec.column)
    start = effective_start_row(spec.start_row, header_row)
    available = max(0, sheet_last_row - start + 1)
    requested = requested_row_count(RowMode(spec.row_mode), spec.row_count, available)

    return EffectiveRange(
        sheet=spec.sheet,
        column=spec.column.upper(),
        start_row=start,
        row_count=min(requested, available),
    )

"""Tests for row range resolution."""

import pytest

from sheetprompt.errors import InvalidRangeError
from sheetprompt.sheets import (
    EffectiveRange,
    RangeSpec,
    RowMode,
    col_letter_to_index,
    column_letters,
    index_to_col_letter,
    resolve,
)


def spec(start_row=2, row_mode=RowMode.FIXED, row_count=None, column="A") -> RangeSpec:
    return RangeSpec(
        sheet="Sheet1",
        column=column,
        start_row=start_row,
        row_mode=row_mode,
        row_count=row_count,
    )


class TestColumnLetters:
    """Column letter conversion."""

    @pytest.mark.parametrize(
        "letter,index",
        [("A", 0), ("B", 1), ("Z", 25), ("AA", 26), ("AZ", 51), ("BA", 52), ("ZZ", 701)],
    )
    def test_letter_index_conversion(self, letter, index):
        assert col_letter_to_index(letter) == index
        assert index_to_col_letter(index) == letter

    def test_lowercase_letters_accepted(self):
        assert col_letter_to_index("ab") == 27

    @pytest.mark.parametrize("bad", ["", "A1", "1", "A-B"])
    def test_invalid_column_rejected(self, bad):
        with pytest.raises(InvalidRangeError):
            col_letter_to_index(bad)

    def test_column_letters(self):
        assert column_letters(3) == ["A", "B", "C"]
        assert column_letters(0) == []


class TestFixedMode:
    """rowMode=fixed takes rowCount rows, clamped to the sheet."""

    @pytest.mark.parametrize(
        "row_count,last_row,start,expected",
        [
            (1, 10, 2, 1),
            (5, 10, 2, 5),
            (20, 10, 2, 9),
            (3, 10, 10, 1),
            (3, 10, 11, 0),
            (3, 0, 1, 0),
        ],
    )
    def test_count_is_min_of_requested_and_available(self, row_count, last_row, start, expected):
        result = resolve(spec(start_row=start, row_count=row_count), last_row, header_row=1)
        assert result.start_row == start
        assert result.row_count == expected

    @pytest.mark.parametrize("row_count", [None, 0, -4])
    def test_missing_or_non_positive_count_defaults_to_one(self, row_count):
        result = resolve(spec(row_count=row_count), sheet_last_row=10, header_row=1)
        assert result.row_count == 1


class TestAllMode:
    """rowMode=all takes every remaining row."""

    @pytest.mark.parametrize("last_row,start,expected", [(10, 2, 9), (2, 2, 1), (1, 2, 0), (0, 5, 0)])
    def test_all_remaining(self, last_row, start, expected):
        result = resolve(spec(start_row=start, row_mode=RowMode.ALL), last_row, header_row=1)
        assert result.row_count == expected

    def test_row_count_ignored(self):
        result = resolve(spec(row_mode=RowMode.ALL, row_count=2), 10, header_row=1)
        assert result.row_count == 9


class TestWindowMode:
    """rowMode=three takes at most three rows."""

    @pytest.mark.parametrize("last_row,expected", [(10, 3), (4, 3), (3, 2), (2, 1), (1, 0)])
    def test_window_of_three(self, last_row, expected):
        result = resolve(spec(row_mode=RowMode.THREE, row_count=50), last_row, header_row=1)
        assert result.row_count == expected


class TestStartRow:
    """Start row resolution."""

    def test_auto_uses_row_below_header(self):
        result = resolve(spec(start_row="auto", row_mode=RowMode.ALL), 10, header_row=4)
        assert result.start_row == 5
        assert result.row_count == 6

    def test_auto_with_default_header_row(self):
        result = resolve(spec(start_row="auto"), 10, header_row=1)
        assert result.start_row == 2

    @pytest.mark.parametrize("start", [0, -1])
    def test_start_row_below_one_is_invalid(self, start):
        with pytest.raises(InvalidRangeError):
            resolve(spec(start_row=start), 10, header_row=1)

    def test_start_beyond_sheet_gives_empty_range(self):
        result = resolve(spec(start_row=50, row_mode=RowMode.ALL), 10, header_row=1)
        assert result.is_empty

    def test_invalid_column(self):
        with pytest.raises(InvalidRangeError):
            resolve(spec(column="1A"), 10, header_row=1)


class TestEffectiveRange:
    """EffectiveRange helpers."""

    def test_resolution_is_deterministic(self):
        s = spec(start_row="auto", row_mode=RowMode.THREE)
        assert resolve(s, 7, 1) == resolve(s, 7, 1)

    def test_column_normalized_to_upper_case(self):
        assert resolve(spec(column="b"), 10, 1).column == "B"

    def test_a1_notation(self):
        rng = EffectiveRange(sheet="Sheet1", column="B", start_row=2, row_count=3)
        assert rng.end_row == 4
        assert rng.a1_notation == "Sheet1!B2:B4"

    def test_retarget_keeps_rows(self):
        rng = EffectiveRange(sheet="In", column="A", start_row=5, row_count=2)
        out = rng.retarget("Out", "C")
        assert (out.sheet, out.column, out.start_row, out.row_count) == ("Out", "C", 5, 2)

    def test_retarget_rejects_bad_column(self):
        rng = EffectiveRange(sheet="In", column="A", start_row=2, row_count=1)
        with pytest.raises(InvalidRangeError):
            rng.retarget("Out", "1")
        assert rng.retarget("Out", "c").column == "C"

"""
Tests for the grid adapter (chart records <-> headers + rows).
"""

import pytest

from charts.grid import Grid, grid_from_lists, template_headers, to_grid, to_records
from charts.models import ChartCategory
from core.errors import DuplicateHeaderError, EmptyHeaderError


def _chart(data):
    return ChartCategory(id="c1", name="Chart", data=data)


class TestToGrid:
    """Tests for projecting a chart into a grid."""

    def test_headers_follow_first_row_order(self):
        """Headers come from the first row's keys, in insertion order."""
        grid = to_grid(_chart([
            {"size": "M", "height": "176-182", "chest": "94-98"},
            {"size": "L", "height": "182-186", "chest": "98-102"},
        ]))

        assert grid.headers == ["size", "height", "chest"]
        assert grid.rows == [["M", "176-182", "94-98"], ["L", "182-186", "98-102"]]

    def test_empty_chart_gets_template(self):
        """An empty chart is edited from a two-column template with one blank row."""
        grid = to_grid(_chart([]), language="en")

        assert grid.headers == ["Size", "Parameters"]
        assert grid.rows == [["", ""]]

    def test_template_is_localized(self):
        assert template_headers("uk") == ["Розмір", "Параметри"]
        assert template_headers("ru") == ["Размер", "Параметры"]

    def test_missing_cells_come_out_blank(self):
        """Rows lacking a first-row key get an empty cell instead of failing."""
        grid = to_grid(_chart([
            {"size": "M", "chest": "98"},
            {"size": "L"},
        ]))

        assert grid.rows[1] == ["L", ""]


class TestToRecords:
    """Tests for converting a grid back to records."""

    def test_round_trip_preserves_rows(self):
        data = [
            {"int": "M", "height": "176-182"},
            {"int": "L", "height": "182-186"},
        ]

        assert to_records(to_grid(_chart(data))) == data

    def test_headers_are_trimmed(self):
        grid = Grid(headers=["  Size ", "Chest"], rows=[["M", "98"]])

        assert to_records(grid) == [{"Size": "M", "Chest": "98"}]

    def test_blank_header_column_is_dropped(self):
        """A column whose header trims to empty is left out of every record."""
        grid = Grid(headers=["Size", "   "], rows=[["M", "ignored"], ["L", "x"]])

        assert to_records(grid) == [{"Size": "M"}, {"Size": "L"}]

    def test_every_record_has_every_key(self):
        grid = Grid(headers=["Size", "Chest"], rows=[["M", ""], ["", ""]])

        records = to_records(grid)

        assert all(set(r.keys()) == {"Size", "Chest"} for r in records)
        assert records[1] == {"Size": "", "Chest": ""}


class TestGridEditing:
    """Tests for column/row operations keeping rows aligned with headers."""

    def test_add_column_extends_every_row(self):
        grid = Grid(headers=["Size"], rows=[["S"], ["M"]])

        grid.add_column("Chest")

        assert grid.headers == ["Size", "Chest"]
        assert all(len(row) == grid.width for row in grid.rows)
        assert grid.rows[0] == ["S", ""]

    def test_remove_column_removes_cells(self):
        grid = Grid(headers=["Size", "Chest", "Waist"], rows=[["S", "90", "70"]])

        assert grid.remove_column(1) is True
        assert grid.headers == ["Size", "Waist"]
        assert grid.rows == [["S", "70"]]

    def test_remove_last_column_is_noop(self):
        """A grid always keeps at least one column."""
        grid = Grid(headers=["Size"], rows=[["S"]])

        assert grid.remove_column(0) is False
        assert grid.headers == ["Size"]
        assert grid.rows == [["S"]]

    def test_add_and_remove_row(self):
        grid = Grid(headers=["Size", "Chest"], rows=[["S", "90"]])

        grid.add_row()
        assert grid.rows[-1] == ["", ""]

        grid.remove_row(0)
        assert grid.rows == [["", ""]]

    def test_rows_may_become_empty(self):
        grid = Grid(headers=["Size"], rows=[["S"]])

        grid.remove_row(0)

        assert grid.rows == []
        assert to_records(grid) == []

    def test_set_cell_out_of_range(self):
        grid = Grid(headers=["Size"], rows=[["S"]])

        with pytest.raises(IndexError):
            grid.set_cell(0, 3, "x")
        with pytest.raises(IndexError):
            grid.set_cell(5, 0, "x")

    def test_copy_is_independent(self):
        grid = Grid(headers=["Size"], rows=[["S"]])
        clone = grid.copy()

        clone.set_cell(0, 0, "XL")

        assert grid.rows == [["S"]]


class TestValidateHeaders:
    """Tests for save-time header validation."""

    def test_duplicate_headers(self):
        with pytest.raises(DuplicateHeaderError):
            Grid(headers=["Size", "Size"], rows=[]).validate_headers()

    def test_duplicates_after_trimming(self):
        with pytest.raises(DuplicateHeaderError):
            Grid(headers=["Size", " Size "], rows=[]).validate_headers()

    def test_empty_header(self):
        with pytest.raises(EmptyHeaderError):
            Grid(headers=["Size", "  "], rows=[]).validate_headers()

    def test_valid_headers(self):
        Grid(headers=["Size", "Chest"], rows=[]).validate_headers()


class TestGridFromLists:
    """Tests for building a grid from submitted form data."""

    def test_rows_are_padded_and_truncated(self):
        grid = grid_from_lists(["Size", "Chest"], [["S"], ["M", "98", "extra"]])

        assert grid.rows == [["S", ""], ["M", "98"]]

    def test_none_cells_become_blank(self):
        grid = grid_from_lists(["Size"], [[None]])

        assert grid.rows == [[""]]

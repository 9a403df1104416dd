"""
Tests for reference-table row highlighting.
"""

from charts.highlight import highlighted_rows, row_matches


class TestRowMatches:
    """Tests for the loose single-row match."""

    def test_exact_cell_match(self):
        """A cell equal to the recommendation matches."""
        assert row_matches({"int": "M", "height": "176-182"}, "176-182") is True

    def test_case_insensitive(self):
        assert row_matches({"size": "xl"}, "XL") is True

    def test_cell_contained_in_recommendation(self):
        """A combined recommendation matches each of its parts."""
        assert row_matches({"int": "L", "height": "182-186"}, "L (176-182)") is True
        assert row_matches({"int": "M", "height": "176-182"}, "L (176-182)") is True

    def test_recommendation_not_in_row(self):
        assert row_matches({"size": "M", "height": "170"}, "XL") is False

    def test_blank_cells_never_match(self):
        """An empty cell is a substring of everything and must be skipped."""
        assert row_matches({"size": "", "chest": "  "}, "M") is False

    def test_empty_recommendation_matches_nothing(self):
        assert row_matches({"size": "M"}, "") is False
        assert row_matches({"size": "M"}, None) is False


class TestHighlightedRows:
    """Tests for the row indices shown as matching."""

    def test_single_match(self):
        rows = [
            {"int": "S", "height": "170-176"},
            {"int": "M", "height": "176-182"},
        ]

        assert highlighted_rows(rows, "176-182") == [1]

    def test_no_match(self):
        rows = [{"size": "M", "height": "170"}, {"size": "S", "height": "164"}]

        assert highlighted_rows(rows, "XL") == []

    def test_all_matches_are_returned(self):
        """No precedence between rows; every match is highlighted."""
        rows = [
            {"int": "M", "height": "170-176"},
            {"int": "L", "height": "176-182"},
            {"int": "XL", "height": "182-188"},
        ]

        assert highlighted_rows(rows, "M (176-182)") == [0, 1]

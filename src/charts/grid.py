"""
Grid adapter: the positional editing view of a size chart.

A chart is a list of keyed records; while it is being edited it is held as
an ordered list of headers plus rows of cells aligned with those headers.

    grid = to_grid(chart)
    grid.add_column("Sleeve")
    grid.set_cell(0, grid.width - 1, "62")
    chart.data = to_records(grid)

Header edits are validated only when the grid is saved, so a grid may hold
duplicate or blank headers while the user is still typing.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from charts.models import ChartCategory, SizeRow
from config.locales import translate
from core.errors import DuplicateHeaderError, EmptyHeaderError
from core.logging import get_logger

logger = get_logger(__name__)

# Template columns for an empty chart, as translation keys
_TEMPLATE_HEADER_KEYS = ("column_size", "column_parameters")


@dataclass
class Grid:
    """Headers plus rows of cells, rows aligned positionally with headers."""

    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    @property
    def width(self) -> int:
        return len(self.headers)

    # =========================================================================
    # Columns
    # =========================================================================

    def add_column(self, name: str) -> None:
        """Append a column, with a blank cell in every row."""
        self.headers.append(name)
        for row in self.rows:
            row.append("")

    def remove_column(self, index: int) -> bool:
        """
        Delete a column and its cell in every row.

        A grid always keeps at least one column: with a single column left
        this is a no-op and returns False.
        """
        if len(self.headers) <= 1:
            return False
        self._check_column(index)
        del self.headers[index]
        for row in self.rows:
            del row[index]
        return True

    # =========================================================================
    # Rows
    # =========================================================================

    def add_row(self) -> None:
        self.rows.append([""] * len(self.headers))

    def remove_row(self, index: int) -> None:
        self._check_row(index)
        del self.rows[index]

    # =========================================================================
    # Cells
    # =========================================================================

    def set_header(self, index: int, value: str) -> None:
        self._check_column(index)
        self.headers[index] = value

    def set_cell(self, row_index: int, col_index: int, value: str) -> None:
        self._check_row(row_index)
        self._check_column(col_index)
        self.rows[row_index][col_index] = value

    # =========================================================================
    # Validation
    # =========================================================================

    def validate_headers(self) -> None:
        """
        Check the headers before a save.

        Raises:
            DuplicateHeaderError: two headers are equal after trimming
            EmptyHeaderError: a header is blank after trimming
        """
        trimmed = [h.strip() for h in self.headers]
        if len(set(trimmed)) != len(trimmed):
            raise DuplicateHeaderError(f"Duplicate column names: {self.headers}")
        if any(not h for h in trimmed):
            raise EmptyHeaderError(f"Empty column name in: {self.headers}")

    def copy(self) -> "Grid":
        return Grid(headers=list(self.headers), rows=[list(r) for r in self.rows])

    def _check_column(self, index: int) -> None:
        if not 0 <= index < len(self.headers):
            raise IndexError(f"Column index {index} out of range (width={len(self.headers)})")

    def _check_row(self, index: int) -> None:
        if not 0 <= index < len(self.rows):
            raise IndexError(f"Row index {index} out of range (rows={len(self.rows)})")


def template_headers(language: str = "en") -> List[str]:
    """Columns offered for a chart that has no rows yet."""
    return [translate(language, key) for key in _TEMPLATE_HEADER_KEYS]


def to_grid(chart: ChartCategory, language: str = "en") -> Grid:
    """
    Project a chart into a grid.

    Headers are the keys of the first row, in insertion order. Cells missing
    from a later row come out blank. An empty chart gives a two-column
    template with one blank row.
    """
    if not chart.data:
        headers = template_headers(language)
        return Grid(headers=headers, rows=[[""] * len(headers)])

    headers = list(chart.data[0].keys())
    expected = set(headers)
    rows = []
    for index, record in enumerate(chart.data):
        if set(record.keys()) != expected:
            logger.warning(
                "Chart row has different columns than the first row",
                chart_id=chart.id,
                row=index,
                columns=list(record.keys()),
                expected=headers,
            )
        rows.append([record.get(h) or "" for h in headers])
    return Grid(headers=headers, rows=rows)


def to_records(grid: Grid) -> List[SizeRow]:
    """
    Convert a grid back to keyed records.

    Headers are trimmed; a header that trims to empty is dropped from every
    record. Blank or missing cells become empty strings.
    """
    keys = [(i, h.strip()) for i, h in enumerate(grid.headers)]
    records: List[SizeRow] = []
    for row in grid.rows:
        record: SizeRow = {}
        for i, key in keys:
            if not key:
                continue
            record[key] = (row[i] if i < len(row) else "") or ""
        records.append(record)
    return records


def grid_from_lists(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> Grid:
    """
    Build a grid from submitted form data.

    Rows longer than the headers are truncated and shorter ones padded with
    blanks so that every row matches the header count.
    """
    width = len(headers)
    normalized = []
    for row in rows:
        cells = ["" if cell is None else str(cell) for cell in list(row)[:width]]
        cells.extend([""] * (width - len(cells)))
        normalized.append(cells)
    return Grid(headers=[str(h) for h in headers], rows=normalized)

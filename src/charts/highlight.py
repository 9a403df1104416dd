"""
Row highlighting for the reference table.

Loose match: a row is emphasized when any of its cells, ignoring case,
equals the recommended size or appears inside it. "L (176-182)" therefore
matches both an "L" cell and a "176-182" cell. Every matching row is
returned; none ranks above another. Blank cells never match, and both
sides are stripped before comparing.
"""

from typing import Iterable, List, Optional

from charts.models import SizeRow


def row_matches(row: SizeRow, recommended: Optional[str]) -> bool:
    if not recommended:
        return False
    target = recommended.strip().lower()
    if not target:
        return False

    for value in row.values():
        cell = str(value).strip().lower()
        # A blank cell is contained in every string
        if not cell:
            continue
        if cell == target or cell in target:
            return True
    return False


def highlighted_rows(rows: Iterable[SizeRow], recommended: Optional[str]) -> List[int]:
    """Indices of all rows matching the recommended size."""
    return [i for i, row in enumerate(rows) if row_matches(row, recommended)]

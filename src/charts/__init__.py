"""
Size chart data model and editor.

Provides the chart records, the grid projection used while editing,
the chart store, the editor session and row highlighting.
"""

from charts.models import ChartCategory, SizeRow
from charts.grid import Grid, to_grid, to_records
from charts.store import ChartStore
from charts.editor import ChartEditorSession, EditorState
from charts.highlight import highlighted_rows, row_matches

__all__ = [
    "ChartCategory",
    "SizeRow",
    "Grid",
    "to_grid",
    "to_records",
    "ChartStore",
    "ChartEditorSession",
    "EditorState",
    "highlighted_rows",
    "row_matches",
]

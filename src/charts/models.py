"""
Size chart data model.

A chart row is a plain ``dict`` of column name -> value. Chart schemas are
user-defined, so rows are not forced into a fixed struct.
"""

import copy
from typing import Dict, Iterable, List, Optional, Set

from pydantic import BaseModel, Field

from core.errors import ChartNotFoundError, HeterogeneousChartError


# One size entry: column name -> cell value
SizeRow = Dict[str, str]


class ChartCategory(BaseModel):
    """A named, independently editable size table for one class of garment."""

    id: str = Field(..., min_length=1, description="Unique chart id")
    name: str = Field(..., description="Display name")
    data: List[SizeRow] = Field(default_factory=list, description="Rows, first row defines the columns")

    @property
    def headers(self) -> List[str]:
        """Column names, taken from the first row."""
        if not self.data:
            return []
        return list(self.data[0].keys())

    def clone(self) -> "ChartCategory":
        return self.model_copy(deep=True)


def header_set(rows: Iterable[SizeRow]) -> Optional[Set[str]]:
    """Key set of the first row, or None for an empty chart."""
    for row in rows:
        return set(row.keys())
    return None


def is_homogeneous(chart: ChartCategory) -> bool:
    """True when every row has exactly the same keys as the first row."""
    expected = header_set(chart.data)
    if expected is None:
        return True
    return all(set(row.keys()) == expected for row in chart.data)


def check_homogeneous(chart: ChartCategory) -> None:
    """
    Raise HeterogeneousChartError if the rows of a chart disagree on columns.

    Used where charts enter from outside (API uploads); the editor's own
    save path always produces homogeneous rows.
    """
    expected = header_set(chart.data)
    if expected is None:
        return
    for index, row in enumerate(chart.data):
        if set(row.keys()) != expected:
            missing = sorted(expected - set(row.keys()))
            extra = sorted(set(row.keys()) - expected)
            raise HeterogeneousChartError(
                f"Chart '{chart.id}' row {index} has different columns "
                f"(missing={missing}, extra={extra})"
            )


def clone_charts(charts: Iterable[ChartCategory]) -> List[ChartCategory]:
    """Deep copy of a chart list."""
    return [chart.clone() for chart in charts]


def find_chart(charts: Iterable[ChartCategory], chart_id: str) -> ChartCategory:
    """Return the chart with the given id or raise ChartNotFoundError."""
    for chart in charts:
        if chart.id == chart_id:
            return chart
    raise ChartNotFoundError(chart_id)


def charts_from_dicts(items: Iterable[Dict]) -> List[ChartCategory]:
    """Build charts from plain dicts (e.g. config.constants.DEFAULT_CHARTS)."""
    return [ChartCategory(**copy.deepcopy(item)) for item in items]

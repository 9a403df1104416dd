"""
Chart store: the canonical, ordered list of size charts.

The store is only replaced wholesale (by a saved editor session), never
edited in place, so readers always see a complete list.
"""

import threading
from typing import Iterable, List, Optional

from charts.models import (
    ChartCategory,
    charts_from_dicts,
    check_homogeneous,
    clone_charts,
    find_chart,
)
from config.constants import DEFAULT_CHARTS
from core.errors import DuplicateChartIdError, LastCategoryError
from core.logging import LoggerMixin


class ChartStore(LoggerMixin):
    """
    Thread-safe holder of the chart list.

    Usage:
        store = ChartStore.with_defaults()
        chart = store.get("universal")
        store.replace_all(edited_charts)
    """

    def __init__(self, charts: Iterable[ChartCategory]):
        self._lock = threading.RLock()
        self._charts: List[ChartCategory] = []
        self.replace_all(charts)

    @classmethod
    def with_defaults(cls) -> "ChartStore":
        """Store seeded with the built-in charts."""
        return cls(charts_from_dicts(DEFAULT_CHARTS))

    @property
    def charts(self) -> List[ChartCategory]:
        """Deep copy of the current list."""
        with self._lock:
            return clone_charts(self._charts)

    def ids(self) -> List[str]:
        with self._lock:
            return [chart.id for chart in self._charts]

    def __len__(self) -> int:
        with self._lock:
            return len(self._charts)

    def __contains__(self, chart_id: object) -> bool:
        with self._lock:
            return any(chart.id == chart_id for chart in self._charts)

    def get(self, chart_id: str) -> ChartCategory:
        """Copy of one chart. Raises ChartNotFoundError."""
        with self._lock:
            return find_chart(self._charts, chart_id).clone()

    def first(self) -> ChartCategory:
        with self._lock:
            return self._charts[0].clone()

    def find(self, chart_id: Optional[str]) -> Optional[ChartCategory]:
        """Copy of one chart, or None when the id is unknown."""
        with self._lock:
            for chart in self._charts:
                if chart.id == chart_id:
                    return chart.clone()
        return None

    def replace_all(self, charts: Iterable[ChartCategory]) -> None:
        """
        Atomically replace the whole list.

        Raises:
            LastCategoryError: the new list is empty
            DuplicateChartIdError: ids are not unique
            HeterogeneousChartError: a chart's rows disagree on columns
        """
        new_charts = clone_charts(charts)
        if not new_charts:
            raise LastCategoryError("At least one chart category must exist")

        seen = set()
        for chart in new_charts:
            if chart.id in seen:
                raise DuplicateChartIdError(f"Duplicate chart id: {chart.id}")
            seen.add(chart.id)
            check_homogeneous(chart)

        with self._lock:
            self._charts = new_charts

        self.logger.info(
            "Chart store replaced",
            count=len(new_charts),
            ids=[chart.id for chart in new_charts],
        )

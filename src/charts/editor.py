"""
Chart editor session.

The editor works on a deep copy of the store's charts. One chart at a time
is "active" and projected into a Grid; switching charts commits the grid
back into the working copy first. Nothing reaches the store until save(),
which swaps in the whole working copy at once. cancel() throws it away.

States:
    CLOSED  --open()-->  EDITING  --save()-->  SAVED
                           |
                           +--cancel()-->  CLOSED

Validation failures keep the session in EDITING and record a translated
message in ``last_error`` for the UI to show. Every public transition holds
``lock``, so concurrent callers on one session are serialized.
"""

import functools
import threading
import time
from enum import Enum
from typing import Callable, List, Optional, Sequence, TypeVar

from charts.grid import Grid, grid_from_lists, to_grid, to_records
from charts.models import ChartCategory, clone_charts, find_chart
from charts.store import ChartStore
from config.constants import CUSTOM_CHART_ID_PREFIX
from config.locales import chart_display_name, translate
from core.errors import (
    ChartValidationError,
    EditorStateError,
    LastCategoryError,
)
from core.logging import LoggerMixin


T = TypeVar("T")


def _synchronized(method):
    """Hold the session lock for the whole transition."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.lock:
            return method(self, *args, **kwargs)
    return wrapper


class EditorState(str, Enum):
    CLOSED = "closed"
    EDITING = "editing"
    SAVED = "saved"


class ChartEditorSession(LoggerMixin):
    """
    Editing session over a ChartStore.

    Usage:
        editor = ChartEditorSession(store, language="en")
        editor.open()
        editor.grid.set_cell(0, 0, "XS")
        editor.select_chart("sportswear")   # commits the edit above
        editor.save()                        # store now has the edit
    """

    def __init__(
        self,
        store: ChartStore,
        language: str = "uk",
        clock: Callable[[], float] = time.time,
    ):
        self._store = store
        self.language = language
        self._clock = clock
        self.lock = threading.RLock()

        self.state = EditorState.CLOSED
        self.charts: List[ChartCategory] = []
        self.active_id: Optional[str] = None
        self.name: str = ""
        self.grid: Grid = Grid()
        self.last_error: Optional[str] = None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def is_editing(self) -> bool:
        return self.state == EditorState.EDITING

    @_synchronized
    def open(self) -> None:
        """Start editing a fresh copy of the store's charts, first chart active."""
        if self.is_editing:
            raise EditorStateError("Editor is already open")

        self.charts = self._store.charts
        self.last_error = None
        self._load(self.charts[0])
        self.state = EditorState.EDITING
        self.logger.info("Chart editor opened", charts=len(self.charts), active_id=self.active_id)

    @_synchronized
    def save(self) -> List[ChartCategory]:
        """
        Validate the active grid, commit it and replace the store's charts.

        Raises:
            DuplicateHeaderError / EmptyHeaderError: nothing is committed and
                the session stays open.
            DuplicateChartIdError / HeterogeneousChartError: the store refused
                the working copy; the session stays open.
        """
        self._begin_action()

        self._guard(self.grid.validate_headers)

        self._commit()
        saved = clone_charts(self.charts)
        self._guard(lambda: self._store.replace_all(saved))

        self._reset()
        self.state = EditorState.SAVED
        self.logger.info("Chart editor saved", charts=len(saved))
        return saved

    @_synchronized
    def cancel(self) -> None:
        """Discard the working copy. The store is untouched."""
        self._begin_action()
        self._reset()
        self.state = EditorState.CLOSED
        self.logger.info("Chart editor cancelled")

    # =========================================================================
    # Categories
    # =========================================================================

    @_synchronized
    def select_chart(self, chart_id: str) -> None:
        """Commit the current grid, then make another chart active."""
        self._begin_action()
        if chart_id == self.active_id:
            return

        next_chart = find_chart(self.charts, chart_id)
        self._commit()
        self._load(next_chart)

    @_synchronized
    def add_category(self) -> ChartCategory:
        """Commit the current grid and append a new seeded chart, made active."""
        self._begin_action()
        self._commit()

        chart = ChartCategory(
            id=self._new_chart_id(),
            name=translate(self.language, "new_category"),
            data=[{
                translate(self.language, "column_size"): "M",
                translate(self.language, "column_height"): "175",
                translate(self.language, "column_chest"): "100",
            }],
        )
        self.charts.append(chart)
        self._load(chart)
        self.logger.info("Chart category added", chart_id=chart.id)
        return chart

    @_synchronized
    def delete_category(self, chart_id: str) -> None:
        """
        Remove a chart from the working copy.

        Raises:
            LastCategoryError: only one chart is left
            ChartNotFoundError: unknown id
        """
        self._begin_action()

        def check() -> None:
            if len(self.charts) <= 1:
                raise LastCategoryError("Cannot delete the last chart category")

        self._guard(check)
        find_chart(self.charts, chart_id)

        self.charts = [c for c in self.charts if c.id != chart_id]
        if chart_id == self.active_id:
            self._load(self.charts[0])
        self.logger.info("Chart category deleted", chart_id=chart_id, remaining=len(self.charts))

    # =========================================================================
    # Grid editing
    # =========================================================================

    @_synchronized
    def rename(self, name: str) -> None:
        self._begin_action()
        self.name = name

    @_synchronized
    def set_header(self, index: int, value: str) -> None:
        self._begin_action()
        self.grid.set_header(index, value)

    @_synchronized
    def set_cell(self, row_index: int, col_index: int, value: str) -> None:
        self._begin_action()
        self.grid.set_cell(row_index, col_index, value)

    @_synchronized
    def add_column(self, name: Optional[str] = None) -> None:
        self._begin_action()
        self.grid.add_column(name if name is not None else translate(self.language, "new_column"))

    @_synchronized
    def remove_column(self, index: int) -> bool:
        self._begin_action()
        return self.grid.remove_column(index)

    @_synchronized
    def add_row(self) -> None:
        self._begin_action()
        self.grid.add_row()

    @_synchronized
    def remove_row(self, index: int) -> None:
        self._begin_action()
        self.grid.remove_row(index)

    @_synchronized
    def replace_grid(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        name: Optional[str] = None,
    ) -> None:
        """Replace the whole active grid (and optionally the name) from form data."""
        self._begin_action()
        if not headers:
            raise IndexError("A grid needs at least one column")
        self.grid = grid_from_lists(headers, rows)
        if name is not None:
            self.name = name

    # =========================================================================
    # Views
    # =========================================================================

    def display_name(self, chart: ChartCategory) -> str:
        """Sidebar label; the active chart shows the name being typed."""
        if chart.id == self.active_id and self.name:
            return self.name
        return chart_display_name(chart.id, chart.name, self.language)

    @_synchronized
    def working_copy(self) -> List[ChartCategory]:
        """Working charts with the in-progress grid applied (no side effects)."""
        charts = clone_charts(self.charts)
        if self.is_editing and self.active_id is not None:
            for chart in charts:
                if chart.id == self.active_id:
                    chart.name = self.name
                    chart.data = to_records(self.grid)
        return charts

    # =========================================================================
    # Internals
    # =========================================================================

    def _commit(self) -> None:
        """Write the grid and name back into the working copy of the active chart."""
        records = to_records(self.grid)
        for chart in self.charts:
            if chart.id == self.active_id:
                chart.name = self.name
                chart.data = records
                return

    def _load(self, chart: ChartCategory) -> None:
        self.active_id = chart.id
        self.name = chart_display_name(chart.id, chart.name, self.language)
        self.grid = to_grid(chart, self.language)

    def _guard(self, check: Callable[[], T]) -> T:
        """Run a validation, recording its translated message on failure."""
        try:
            return check()
        except ChartValidationError as e:
            self.last_error = translate(self.language, e.message_key)
            self.logger.info(
                "Chart edit rejected",
                error=str(e),
                error_type=type(e).__name__,
                active_id=self.active_id,
            )
            raise

    def _new_chart_id(self) -> str:
        existing = {chart.id for chart in self.charts} | set(self._store.ids())
        stamp = int(self._clock() * 1000)
        chart_id = f"{CUSTOM_CHART_ID_PREFIX}{stamp}"
        while chart_id in existing:
            stamp += 1
            chart_id = f"{CUSTOM_CHART_ID_PREFIX}{stamp}"
        return chart_id

    def _begin_action(self) -> None:
        """Require the editing state; a new action clears the previous rejection."""
        if not self.is_editing:
            raise EditorStateError(f"Editor is not open (state={self.state.value})")
        self.last_error = None

    def _reset(self) -> None:
        self.charts = []
        self.active_id = None
        self.name = ""
        self.grid = Grid()
        self.last_error = None


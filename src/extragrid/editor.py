"""GridEditor: the public editing surface over a single in-memory grid.

The editor owns the grid model, the selection and the undo history. Each
mutating method runs as a transaction: the grid is snapshotted first and
restored if the operation fails part way. A history entry is recorded only
once the whole operation has completed, so composite operations (delete's
split-then-remerge) produce a single entry.

Precondition failures (bad selection, no active cell, splitting an unmerged
cell) are absorbed here: they are logged as warnings and reported by a False
return. Illegal moves and invalid loaded grids propagate.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from loguru import logger

from extragrid import indexer, rearrange, selection, span_ops, structure_ops
from extragrid.config import ResetOptions, get_settings
from extragrid.exceptions import (
    GridError,
    InvalidGridError,
    InvalidSelectionError,
    NoActiveCellError,
    NotMergedCellError,
)
from extragrid.history import HistoryStack
from extragrid.serde import GridData, build_model, from_html, snapshot
from extragrid.types import Cell, CellTag, GridModel, Selection

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from extragrid.config import Settings
    from extragrid.types import Rect

# Errors reported by a False return instead of being raised
_RECOVERABLE = (InvalidSelectionError, NoActiveCellError, NotMergedCellError)


class GridEditor:
    """Merged-cell grid editor with selection and undo/redo.

    Example:
        editor = GridEditor()
        editor.reset(3, 3, header_rows=1)
        editor.select_range(2, 1, 3, 2)
        editor.merge()
        editor.undo()
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._model = GridModel()
        self._selection = Selection()
        self._history: HistoryStack = HistoryStack()

    # --- Queries ---

    @property
    def model(self) -> GridModel:
        """The live grid. Treat as read-only; mutate through editor methods."""
        return self._model

    @property
    def history(self) -> HistoryStack:
        return self._history

    @property
    def row_count(self) -> int:
        return self._model.row_count

    @property
    def col_count(self) -> int:
        return indexer.max_cols(self._model)

    @property
    def active_cell(self) -> Cell | None:
        return self._selection.active

    @property
    def selected_cells(self) -> list[Cell]:
        return list(self._selection.cells)

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def find_cell(self, r: int, c: int) -> Cell | None:
        """Return the cell covering logical point (r, c), if any."""
        return indexer.find_cell(self._model, r, c)

    def selection_rect(self) -> Rect | None:
        """Rectangle exactly filled by the active and selected cells, else None."""
        return selection.selection_rect(self._model, self._selection.targets())

    def can_move_rows(self, start: int, count: int, to: int) -> bool:
        return rearrange.can_move_rows(self._model, start, count, to)

    def can_move_cols(self, start: int, count: int, to: int) -> bool:
        return rearrange.can_move_cols(self._model, start, count, to)

    def get_content(self) -> GridData:
        """Snapshot of the current structure and content."""
        return snapshot(self._model)

    # --- Lifecycle ---

    def reset(
        self,
        rows: int,
        cols: int,
        *,
        header_rows: int = 0,
        header_cols: int = 0,
        show_coords: bool | None = None,
    ) -> None:
        """Rebuild the grid as plain ``rows`` x ``cols`` unit cells.

        Cells in the first ``header_rows`` rows or first ``header_cols``
        columns are header cells. With ``show_coords`` (default from
        settings) each cell's content is set to its own ``"r,c"``.

        Raises:
            ValueError: If ``rows`` or ``cols`` is negative.
            pydantic.ValidationError: If a header count is negative.
        """
        if rows < 0 or cols < 0:
            raise ValueError(f"grid size must not be negative, got {rows}x{cols}")
        options = ResetOptions(
            header_rows=header_rows, header_cols=header_cols, show_coords=show_coords
        )
        coords = (
            self._settings.show_coords
            if options.show_coords is None
            else options.show_coords
        )

        model = GridModel()
        if cols > 0:
            model.rows = [
                [
                    Cell(
                        tag=CellTag.HEADER
                        if r <= options.header_rows or c <= options.header_cols
                        else CellTag.DATA
                    )
                    for c in range(1, cols + 1)
                ]
                for r in range(1, rows + 1)
            ]
        indexer.recompute(model, show_coords=coords)

        self._model = model
        self._selection.clear()
        self._record("reset")

    def load(self, data: GridData | dict[str, Any] | str) -> None:
        """Replace the grid with a serialized one and start a fresh history.

        Accepts a ``GridData``, its dict form, a JSON string, or an HTML
        table string (recognized by a leading ``<``).

        Raises:
            InvalidGridError: If the cells do not tile a rectangle. The current
                grid and history are left untouched.
            pydantic.ValidationError: If the payload is malformed.
            ValueError: If HTML input cannot be parsed.
        """
        if isinstance(data, str):
            text = data.strip()
            grid = from_html(text) if text.startswith("<") else GridData.from_json(text)
        elif isinstance(data, dict):
            grid = GridData.model_validate(data)
        else:
            grid = data

        model = build_model(grid)
        indexer.recompute(model)
        problems = indexer.find_tiling_violations(model)
        if problems:
            raise InvalidGridError(problems)

        self._model = model
        self._selection.clear()
        self._history.clear()
        self._record("load")

    # --- Selection ---

    def select_cell(self, r: int, c: int) -> Cell | None:
        """Make the cell covering (r, c) the active cell.

        Returns:
            The active cell, or None (with the selection cleared) if the point
            is outside the grid.
        """
        cell = indexer.find_cell(self._model, r, c)
        self._selection.clear()
        if cell is None:
            logger.warning("select_cell: ({},{}) is outside the grid", r, c)
            return None
        self._selection.active = cell
        return cell

    def select_range(self, r1: int, c1: int, r2: int, c2: int) -> bool:
        """Select the smallest whole-cell rectangle spanning two corner points.

        Returns:
            True if a valid rectangle was selected. Otherwise the selection is
            cleared and False returned.
        """
        first = indexer.find_cell(self._model, r1, c1)
        second = indexer.find_cell(self._model, r2, c2)
        self._selection.clear()
        if first is None or second is None:
            logger.warning(
                "select_range: ({},{})-({},{}) is outside the grid", r1, c1, r2, c2
            )
            return False
        try:
            rect = selection.expand(self._model, first, second)
            self._selection.cells = selection.cells_within(self._model, rect)
        except InvalidSelectionError as e:
            return self._reject("select_range", e)
        return True

    def clear_selection(self) -> None:
        self._selection.clear()

    def navigate(self, forward: bool = True) -> bool:
        """Move the active cell to the next (or previous) cell in reading order.

        Covered points are skipped and the walk wraps across rows. Stepping
        past either end clears the selection and returns False.
        """
        order = list(self._model.cells())
        if not order:
            return False

        current = self._selection.active
        if current is None:
            target = order[0] if forward else order[-1]
        else:
            index = order.index(current) + (1 if forward else -1)
            if not 0 <= index < len(order):
                self._selection.clear()
                return False
            target = order[index]

        self._selection.clear()
        self._selection.active = target
        return True

    # --- Content ---

    def set_content(self, r: int, c: int, content: str) -> bool:
        """Replace the content of the cell covering (r, c).

        Returns:
            True if the content changed (and a history entry was recorded).
        """
        cell = indexer.find_cell(self._model, r, c)
        if cell is None:
            logger.warning("set_content: ({},{}) is outside the grid", r, c)
            return False
        if cell.content == content:
            return False
        cell.content = content
        self._record("set_content")
        return True

    # --- Spans ---

    def merge(self) -> bool:
        """Merge the selected cells into their top-left cell, which becomes active."""
        try:
            with self._transaction():
                survivor = span_ops.merge_cells(self._model, self._selection.cells)
        except InvalidSelectionError as e:
            return self._reject("merge", e)

        self._selection.clear()
        self._selection.active = survivor
        self._record("merge")
        return True

    def split(self) -> bool:
        """Split the active cell (or a single selected cell) into unit cells."""
        try:
            with self._transaction():
                cell = self._single_target()
                span_ops.split_cell(self._model, cell)
        except (NoActiveCellError, NotMergedCellError) as e:
            return self._reject("split", e, clear=False)

        self._selection.clear()
        self._selection.active = cell
        self._record("split")
        return True

    # --- Insertion ---

    def add_row_above(self) -> bool:
        return self._insert("add_row_above", structure_ops.insert_row, below=False)

    def add_row_below(self) -> bool:
        return self._insert("add_row_below", structure_ops.insert_row, below=True)

    def add_col_left(self) -> bool:
        return self._insert("add_col_left", structure_ops.insert_col, right=False)

    def add_col_right(self) -> bool:
        return self._insert("add_col_right", structure_ops.insert_col, right=True)

    def _insert(
        self, operation: str, handler: Callable[..., None], **kwargs: bool
    ) -> bool:
        try:
            with self._transaction():
                anchor = self._require_active()
                handler(self._model, anchor, **kwargs)
        except NoActiveCellError as e:
            return self._reject(operation, e, clear=False)

        self._selection.cells = []
        self._record(operation)
        return True

    # --- Deletion ---

    def delete_rows(self) -> bool:
        """Delete every row touched by the active cell or selection."""
        return self._delete("delete_rows", structure_ops.delete_rows, by_row=True)

    def delete_cols(self) -> bool:
        """Delete every column touched by the active cell or selection."""
        return self._delete("delete_cols", structure_ops.delete_cols, by_row=False)

    def _delete(
        self, operation: str, handler: Callable[..., None], *, by_row: bool
    ) -> bool:
        try:
            with self._transaction():
                targets = self._require_targets()
                lines = structure_ops.touched_lines(targets, by_row=by_row)
                handler(self._model, lines)
        except _RECOVERABLE as e:
            return self._reject(operation, e)

        self._selection.clear()
        self._record(operation)
        return True

    # --- Moves ---

    def move_rows(self, start: int, count: int, to: int) -> None:
        """Move rows ``start .. start+count-1`` so the first lands at ``to``.

        Raises:
            IllegalMoveError: If ``can_move_rows`` is False. Nothing changes.
        """
        with self._transaction():
            rearrange.move_rows(self._model, start, count, to)
        self._selection.cells = []
        self._record("move_rows")

    def move_cols(self, start: int, count: int, to: int) -> None:
        """Move columns ``start .. start+count-1`` so the first lands at ``to``.

        Raises:
            IllegalMoveError: If ``can_move_cols`` is False. Nothing changes.
        """
        with self._transaction():
            rearrange.move_cols(self._model, start, count, to)
        self._selection.cells = []
        self._record("move_cols")

    # --- Header / data retagging ---

    def to_header_rows(self) -> bool:
        return self._retag("to_header_rows", CellTag.HEADER, by_row=True)

    def to_header_cols(self) -> bool:
        return self._retag("to_header_cols", CellTag.HEADER, by_row=False)

    def to_data_rows(self) -> bool:
        return self._retag("to_data_rows", CellTag.DATA, by_row=True)

    def to_data_cols(self) -> bool:
        return self._retag("to_data_cols", CellTag.DATA, by_row=False)

    def _retag(self, operation: str, tag: CellTag, *, by_row: bool) -> bool:
        """Retag the full lines under the selection.

        Returns:
            True if any cell changed tag. A history entry is recorded only then.
        """
        try:
            with self._transaction():
                targets = self._require_targets()
                changed = structure_ops.retag_lines(
                    self._model, targets, tag, by_row=by_row
                )
        except NoActiveCellError as e:
            return self._reject(operation, e)

        self._selection.clear()
        if changed:
            self._record(operation)
        return changed

    # --- History ---

    def undo(self) -> bool:
        data = self._history.undo()
        if data is None:
            return False
        self._restore(data)
        return True

    def redo(self) -> bool:
        data = self._history.redo()
        if data is None:
            return False
        self._restore(data)
        return True

    # --- Internals ---

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Restore the pre-operation grid if the body raises after mutating."""
        backup = snapshot(self._model)
        try:
            yield
        except Exception as e:
            if snapshot(self._model) != backup:
                if not isinstance(e, GridError):
                    logger.opt(exception=e).error("grid operation failed; rolled back")
                self._restore(backup)
            else:
                indexer.recompute(self._model)
            raise

    def _restore(self, data: GridData) -> None:
        model = build_model(data)
        indexer.recompute(model)
        self._model = model
        self._selection.clear()

    def _record(self, operation: str) -> None:
        self._history.record(snapshot(self._model))
        logger.debug("{}: grid is {}x{}", operation, self.row_count, self.col_count)

    def _reject(self, operation: str, error: GridError, *, clear: bool = True) -> bool:
        logger.warning("{} rejected: {}", operation, error)
        if clear:
            self._selection.clear()
        return False

    def _require_active(self) -> Cell:
        if self._selection.active is None:
            raise NoActiveCellError("no active cell")
        return self._selection.active

    def _require_targets(self) -> list[Cell]:
        targets = self._selection.targets()
        if not targets:
            raise NoActiveCellError("no active cell or selection")
        return targets

    def _single_target(self) -> Cell:
        if self._selection.active is not None:
            return self._selection.active
        if len(self._selection.cells) == 1:
            return self._selection.cells[0]
        raise NoActiveCellError("select a single cell to split")

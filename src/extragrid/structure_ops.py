"""Row and column insertion, deletion and retagging handlers.

Handlers change spans and row membership only. Coordinates are refreshed by
the centralized recompute pass after each line, because every insertion or
deletion shifts the indices of the lines after it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from extragrid.indexer import (
    cells_in_col,
    cells_in_row,
    find_cell,
    insertion_index,
    max_cols,
    recompute,
)
from extragrid.selection import bounding_rect, cells_within
from extragrid.span_ops import merge_cells, split_cell
from extragrid.types import Cell, Rect

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from extragrid.types import CellTag, GridModel


# --- Insertion ---


def insert_row(model: GridModel, anchor: Cell, *, below: bool) -> None:
    """Insert an empty row above or below ``anchor``.

    The new row takes logical index ``anchor.r1`` (above) or ``anchor.r2 + 1``
    (below). At the top or bottom edge it is a full-width row of plain cells.
    Elsewhere, each column gets a new cell unless it is covered by a span that
    reaches across the insertion line from above; such a span grows by one
    row instead.
    """
    cc = anchor.coords
    at = cc.r2 + 1 if below else cc.r1
    width = max_cols(model)

    if at == 1 or at == model.row_count + 1:
        count = width
    else:
        count = 0
        c = 1
        while c <= width:
            cell = find_cell(model, at, c)
            assert cell is not None
            if cell.coords.r1 == at:
                # Starts on the line being pushed down: the new row needs
                # its own cell in this column.
                count += 1
                c += 1
            else:
                cell.row_span += 1
                c = cell.coords.c2 + 1

    model.rows.insert(at - 1, [Cell() for _ in range(count)])
    recompute(model)
    logger.debug("inserted row {} with {} new cells", at, count)


def insert_col(model: GridModel, anchor: Cell, *, right: bool) -> None:
    """Insert an empty column left or right of ``anchor``.

    At the first or last column every physical row simply gets a new cell at
    its start or end. Elsewhere, walking down the rows: a cell starting
    exactly at the insertion column gets a new sibling at the matching
    physical slot, and a cell spanning across it from the left grows by one
    column (once, on its own anchor row).
    """
    cc = anchor.coords
    width = max_cols(model)

    if (not right and cc.c1 == 1) or (right and cc.c2 == width):
        for row in model.rows:
            if right:
                row.append(Cell())
            else:
                row.insert(0, Cell())
        recompute(model)
        logger.debug("inserted edge column ({})", "right" if right else "left")
        return

    at = cc.c2 + 1 if right else cc.c1

    slots: list[tuple[list[Cell], int]] = []
    for r in range(1, model.row_count + 1):
        cell = find_cell(model, r, at)
        assert cell is not None
        if cell.coords.c1 == at:
            slots.append((model.rows[r - 1], insertion_index(model, r, at)))
        elif cell.coords.r1 == r:
            cell.col_span += 1

    for row, index in slots:
        row.insert(index, Cell())

    recompute(model)
    logger.debug("inserted column {} with {} new cells", at, len(slots))


# --- Deletion ---


def delete_rows(model: GridModel, lines: Iterable[int]) -> None:
    """Delete the given logical rows.

    Lines are processed bottom-up so earlier deletions never shift the
    indices of lines still to be deleted. For each line, spans that start on
    it and continue below are first split and re-merged one row lower (the
    content moves with them); spans reaching it from above shrink by one row;
    then the physical row goes.
    """
    for r in sorted(set(lines), reverse=True):
        c = 1
        while c <= max_cols(model):
            cell = find_cell(model, r, c)
            assert cell is not None
            cc = cell.coords
            if cc.r1 == r and cell.row_span > 1:
                _split_and_remerge(model, cell, Rect(r + 1, cc.c1, cc.r2, cc.c2))
            c = cc.c2 + 1

        for cell in cells_in_row(model, r):
            if cell.coords.r1 < r:
                cell.row_span -= 1

        del model.rows[r - 1]
        recompute(model)
        logger.debug("deleted row {}", r)

    _drop_if_empty(model)


def delete_cols(model: GridModel, lines: Iterable[int]) -> None:
    """Delete the given logical columns.

    The column counterpart of ``delete_rows``: lines go right-to-left, spans
    starting on the line are split and re-merged one column to the right,
    spans reaching it from the left shrink, and the remaining cells of the
    line are removed from their rows.
    """
    for c in sorted(set(lines), reverse=True):
        r = 1
        while r <= model.row_count:
            cell = find_cell(model, r, c)
            assert cell is not None
            cc = cell.coords
            if cc.c1 == c and cell.col_span > 1:
                _split_and_remerge(model, cell, Rect(cc.r1, c + 1, cc.r2, cc.c2))
            r = cc.r2 + 1

        for cell in cells_in_col(model, c):
            if cell.coords.c1 < c:
                cell.col_span -= 1
            else:
                model.row_of(cell).remove(cell)

        recompute(model)
        logger.debug("deleted column {}", c)

    _drop_if_empty(model)


def _split_and_remerge(model: GridModel, cell: Cell, remainder: Rect) -> None:
    """Split ``cell`` and merge back the part of it that survives a deletion.

    ``remainder`` is the cell's rectangle minus the line being deleted. Its
    top-left unit inherits the content; if it still covers more than one
    unit it is merged again.
    """
    split_cell(model, cell)

    heir = find_cell(model, remainder.r1, remainder.c1)
    assert heir is not None
    heir.content = cell.content

    if remainder.r1 != remainder.r2 or remainder.c1 != remainder.c2:
        merge_cells(model, cells_within(model, remainder))


def _drop_if_empty(model: GridModel) -> None:
    # A grid without columns keeps no empty rows around.
    if model.rows and max_cols(model) == 0:
        model.rows.clear()


# --- Line queries and retagging ---


def touched_lines(cells: Sequence[Cell], *, by_row: bool) -> list[int]:
    """Sorted logical rows (or columns) covered by any of ``cells``."""
    lines: set[int] = set()
    for cell in cells:
        cc = cell.coords
        if by_row:
            lines.update(range(cc.r1, cc.r2 + 1))
        else:
            lines.update(range(cc.c1, cc.c2 + 1))
    return sorted(lines)


def retag_lines(
    model: GridModel,
    cells: Sequence[Cell],
    tag: CellTag,
    *,
    by_row: bool,
) -> bool:
    """Retag every cell touching the full rows (or columns) spanned by ``cells``.

    Returns:
        True if at least one cell changed tag.
    """
    rect = bounding_rect(cells)
    if by_row:
        band = Rect(rect.r1, 1, rect.r2, max_cols(model))
    else:
        band = Rect(1, rect.c1, model.row_count, rect.c2)

    changed = 0
    for cell in model.cells():
        if band.intersects(cell.coords) and cell.tag is not tag:
            cell.tag = tag
            changed += 1

    logger.debug("retagged {} cells as {}", changed, tag.value)
    return changed > 0

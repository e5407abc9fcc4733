"""Row and column moves.

``can_move_rows`` / ``can_move_cols`` are pure predicates; callers (drag
handlers, tests) can probe them freely. ``move_rows`` / ``move_cols`` check
the same predicate before touching anything and raise ``IllegalMoveError``
when it fails, leaving the grid unchanged.

Positions are 1-based. ``to`` is the line the moved block's first line will
occupy; whatever was there shifts to make room. ``to`` may be one past the
last line to move the block to the end.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from extragrid.exceptions import IllegalMoveError
from extragrid.indexer import (
    anchor_left,
    cells_in_col,
    cells_in_row,
    find_cell,
    max_cols,
    recompute,
)

if TYPE_CHECKING:
    from extragrid.types import Cell, GridModel


def _valid_positions(first: int, last: int, to: int, size: int) -> bool:
    """Bounds checks shared by rows and columns."""
    return not (
        first < 1
        or last > size
        or first > last  # empty source
        or to < 1
        or to > size + 1
        or first <= to <= last  # overlaps the source
        or to == last + 1  # no-op
    )


# --- Legality ---


def can_move_rows(model: GridModel, start: int, count: int, to: int) -> bool:
    """Whether rows ``start .. start+count-1`` can move to ``to`` without tearing spans.

    A span only partly inside the moved block must contain the whole block,
    and ``to`` must fall within it. A span covering row ``to`` must either
    contain the whole block (and then ``to`` stays inside it) or not contain
    it at all (and then ``to`` is one of its edges).
    """
    first, last = start, start + count - 1
    if not _valid_positions(first, last, to, model.row_count):
        return False

    for r in range(first, last + 1):
        for cell in cells_in_row(model, r):
            cc = cell.coords
            if cc.r1 < first or cc.r2 > last:
                contains = cc.r1 <= first and last <= cc.r2
                if not contains or not cc.r1 <= to <= cc.r2 + 1:
                    return False

    if to != model.row_count + 1:
        for cell in cells_in_row(model, to):
            cc = cell.coords
            if cell.row_span > 1:
                inside = cc.r1 <= first and last <= cc.r2
                if inside and not cc.r1 <= to <= cc.r2 + 1:
                    return False
                if not inside and not (to <= cc.r1 or to >= cc.r2 + 1):
                    return False

    return True


def can_move_cols(model: GridModel, start: int, count: int, to: int) -> bool:
    """Column counterpart of ``can_move_rows``."""
    first, last = start, start + count - 1
    width = max_cols(model)
    if not _valid_positions(first, last, to, width):
        return False

    for c in range(first, last + 1):
        for cell in cells_in_col(model, c):
            cc = cell.coords
            if cc.c1 < first or cc.c2 > last:
                contains = cc.c1 <= first and last <= cc.c2
                if not contains or not cc.c1 <= to <= cc.c2 + 1:
                    return False

    if to != width + 1:
        for cell in cells_in_col(model, to):
            cc = cell.coords
            if cell.col_span > 1:
                inside = cc.c1 <= first and last <= cc.c2
                if inside and not cc.c1 <= to <= cc.c2 + 1:
                    return False
                if not inside and not (to <= cc.c1 or to >= cc.c2 + 1):
                    return False

    return True


# --- Execution ---


def move_rows(model: GridModel, start: int, count: int, to: int) -> None:
    """Move a contiguous block of rows so its first row lands at ``to``.

    Spans that contain both the block and the destination stay in place
    logically. Their anchor row is about to move, so they are first handed
    over to the row that becomes their new top line.

    Raises:
        IllegalMoveError: If ``can_move_rows`` rejects the move.
    """
    if not can_move_rows(model, start, count, to):
        raise IllegalMoveError("row", start, count, to)

    first, last = start, start + count - 1

    # Spans anchored on the block's first row (moving down) or on the target
    # row (moving up) that the move happens inside of.
    edge_cells: list[Cell] = []
    for r in range(first, last + 1):
        for cell in cells_in_row(model, r):
            cc = cell.coords
            if (
                cell.row_span > 1
                and (cc.r1 == r == first or cc.r1 == to)
                and cc.r1 <= to <= cc.r2 + 1
                and cell not in edge_cells
            ):
                edge_cells.append(cell)

    if edge_cells:
        new_top = last + 1 if to > last else first
        _hand_over(model, edge_cells, new_top)

    block = model.rows[first - 1 : last]
    del model.rows[first - 1 : last]
    insert_at = to - 1 if to < first else to - 1 - count
    model.rows[insert_at:insert_at] = block

    recompute(model)
    logger.debug("moved rows {}-{} to {}", first, last, to)


def _hand_over(model: GridModel, edge_cells: list[Cell], new_top: int) -> None:
    """Transfer spanning cells into row ``new_top`` at their column's slot.

    Each cell goes right after the nearest cell to its left that is (or has
    just become) owned by the target row.
    """
    target_row = model.rows[new_top - 1]
    relocated: list[Cell] = []

    for cell in sorted(edge_cells, key=lambda cell: cell.coords.c1):
        neighbor: Cell | None = None
        for x in range(cell.coords.c1 - 1, 0, -1):
            candidate = find_cell(model, new_top, x)
            if candidate is None:
                continue
            if candidate in relocated or (
                candidate.coords.r1 == new_top and candidate not in edge_cells
            ):
                neighbor = candidate
                break

        model.row_of(cell).remove(cell)
        index = target_row.index(neighbor) + 1 if neighbor is not None else 0
        target_row.insert(index, cell)
        relocated.append(cell)


def move_cols(model: GridModel, start: int, count: int, to: int) -> None:
    """Move a contiguous block of columns so its first column lands at ``to``.

    Works row by row: the cells anchored on a row inside the block are lifted
    out and reinserted after the nearest remaining cell left of ``to``. A row
    whose spanning cell already contains the destination is left untouched.

    Raises:
        IllegalMoveError: If ``can_move_cols`` rejects the move.
    """
    if not can_move_cols(model, start, count, to):
        raise IllegalMoveError("column", start, count, to)

    first, last = start, start + count - 1

    plans: list[tuple[list[Cell], list[Cell], Cell | None]] = []
    for r in range(1, model.row_count + 1):
        moving: list[Cell] = []
        absorbed = False
        for c in range(first, last + 1):
            cell = find_cell(model, r, c)
            assert cell is not None
            cc = cell.coords
            if cc.c1 == c and cc.r1 == r:
                if cc.c1 <= to <= cc.c2 + 1:
                    absorbed = True
                    break
                moving.append(cell)
        if absorbed or not moving:
            continue
        neighbor = anchor_left(model, r, to, exclude=moving)
        plans.append((model.rows[r - 1], moving, neighbor))

    for row, moving, neighbor in plans:
        for cell in moving:
            row.remove(cell)
        index = row.index(neighbor) + 1 if neighbor is not None else 0
        row[index:index] = moving

    recompute(model)
    logger.debug("moved columns {}-{} to {}", first, last, to)

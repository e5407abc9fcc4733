"""Merge and split handlers.

These handlers only change spans and physical cell membership; coordinates
are fixed by the centralized recompute pass before returning.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from extragrid.exceptions import InvalidSelectionError, NotMergedCellError
from extragrid.indexer import insertion_index, recompute
from extragrid.selection import cells_within
from extragrid.types import Cell, Rect

if TYPE_CHECKING:
    from collections.abc import Sequence

    from extragrid.types import GridModel


def merge_cells(model: GridModel, cells: Sequence[Cell]) -> Cell:
    """Collapse a rectangular group of cells into one spanning cell.

    The top-left cell survives and keeps its content and tag; the extent is
    taken from the cell with the largest lower-right corner. Every other cell
    is removed from its row.

    Args:
        model: An indexed grid.
        cells: The cells to merge. Order does not matter.

    Returns:
        The surviving cell.

    Raises:
        InvalidSelectionError: If fewer than two cells are given, or the cells
            do not form an exact rectangle.
    """
    if len(cells) < 2:
        raise InvalidSelectionError("select at least two cells to merge")

    survivor = min(cells, key=lambda cell: (cell.coords.r1, cell.coords.c1))
    corner = max(cells, key=lambda cell: (cell.coords.r2, cell.coords.c2))
    top_left, bottom_right = survivor.coords, corner.coords
    rect = Rect(top_left.r1, top_left.c1, bottom_right.r2, bottom_right.c2)

    covered = cells_within(model, rect)
    if len(covered) != len(cells) or any(cell not in cells for cell in covered):
        raise InvalidSelectionError("cells to merge do not form a rectangle")

    for cell in cells:
        if cell is not survivor:
            model.row_of(cell).remove(cell)

    survivor.row_span = rect.r2 - rect.r1 + 1
    survivor.col_span = rect.c2 - rect.c1 + 1

    recompute(model)
    logger.debug(
        "merged {} cells into ({},{})-({},{})",
        len(cells),
        rect.r1,
        rect.c1,
        rect.r2,
        rect.c2,
    )
    return survivor


def split_cell(model: GridModel, cell: Cell) -> list[Cell]:
    """Split a spanning cell back into unit cells.

    The original cell keeps its content and shrinks to its top-left unit.
    Every other unit of its former rectangle gets a new empty cell carrying
    the same tag, inserted at the physical slot matching its column.

    Returns:
        The newly created cells, in row-major order.

    Raises:
        NotMergedCellError: If the cell spans a single row and column.
    """
    if not cell.is_merged:
        raise NotMergedCellError("not a merged cell")

    cc = cell.coords

    # Insertion slots are computed against the current coordinates before
    # any row is touched.
    plan: list[tuple[list[Cell], int, int]] = []
    for r in range(cc.r1, cc.r2 + 1):
        row = model.rows[r - 1]
        if r == cc.r1:
            plan.append((row, row.index(cell) + 1, cell.col_span - 1))
        else:
            plan.append((row, insertion_index(model, r, cc.c1), cell.col_span))

    created: list[Cell] = []
    for row, index, count in plan:
        new_cells = [Cell(tag=cell.tag) for _ in range(count)]
        row[index:index] = new_cells
        created.extend(new_cells)

    cell.row_span = 1
    cell.col_span = 1

    recompute(model)
    logger.debug("split ({},{}) into {} cells", cc.r1, cc.c1, len(created) + 1)
    return created

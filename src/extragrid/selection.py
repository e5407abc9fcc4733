"""Rectangular selection expansion and validation.

A selection is only meaningful when it is an exact rectangle of whole cells.
``expand`` grows a two-corner selection until no cell sticks out of it, and
``cells_within`` either returns the cells of a rectangle or rejects it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from extragrid.exceptions import InvalidSelectionError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from extragrid.types import Cell, GridModel, Rect


def expand(model: GridModel, first: Cell, second: Cell) -> Rect:
    """Return the smallest rectangle enclosing both cells and every cell it touches.

    Starts from the union of the two cells' rectangles and keeps absorbing any
    cell that partially overlaps the rectangle until nothing changes, so spans
    sticking out on any side are fully included.
    """
    rect = first.coords.union(second.coords)
    while True:
        grown = rect
        for cell in model.cells():
            if grown.intersects(cell.coords):
                grown = grown.union(cell.coords)
        if grown == rect:
            return rect
        rect = grown


def cells_within(model: GridModel, rect: Rect) -> list[Cell]:
    """Return the cells covering ``rect``, in physical row-major order.

    Raises:
        InvalidSelectionError: If some cell is only partially inside ``rect``.
    """
    selected: list[Cell] = []
    for cell in model.cells():
        cc = cell.coords
        if not rect.intersects(cc):
            continue
        if not rect.encloses(cc):
            raise InvalidSelectionError(
                f"cell at ({cc.r1},{cc.c1})-({cc.r2},{cc.c2}) is only partially "
                f"inside ({rect.r1},{rect.c1})-({rect.r2},{rect.c2})"
            )
        selected.append(cell)
    return selected


def validate(model: GridModel, rect: Rect) -> bool:
    """True if every cell touching ``rect`` lies entirely inside it."""
    try:
        cells_within(model, rect)
    except InvalidSelectionError:
        return False
    return True


def bounding_rect(cells: Sequence[Cell]) -> Rect:
    """Union of the rectangles of a non-empty group of cells."""
    rect = cells[0].coords
    for cell in cells[1:]:
        rect = rect.union(cell.coords)
    return rect


def selection_rect(model: GridModel, cells: Sequence[Cell]) -> Rect | None:
    """Rectangle covered by ``cells`` if they fill it completely, else None.

    Used to turn a selection into row/column move coordinates: every point of
    the bounding rectangle must belong to one of the given cells.
    """
    if not cells:
        return None
    rect = bounding_rect(cells)
    for cell in model.cells():
        if rect.intersects(cell.coords) and cell not in cells:
            return None
    return rect

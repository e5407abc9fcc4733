"""Centralized coordinate pass for grids.

Structural handlers only move cells and edit spans. After every change this
module reassigns each cell's logical rectangle from scratch, instead of
patching coordinates incrementally inside each handler.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from extragrid.types import Cell, Rect

if TYPE_CHECKING:
    from collections.abc import Iterable

    from extragrid.types import GridModel


def recompute(model: GridModel, *, show_coords: bool = False) -> None:
    """Walk all rows and assign every cell's logical rectangle.

    Rows map one-to-one onto logical rows. Within a row, a cell's first
    column is the smallest column at or after its physical position that no
    previously placed cell (earlier in this row, or a span reaching down from
    an earlier row) already claims.

    Args:
        model: The grid to index.
        show_coords: Debug aid. Overwrite each cell's content with its own
            ``"r1,c1"`` so layouts can be checked by eye.
    """
    claimed: set[tuple[int, int]] = set()

    for row_idx, row in enumerate(model.rows):
        r1 = row_idx + 1
        for col_idx, cell in enumerate(row):
            c1 = col_idx + 1
            while (r1, c1) in claimed:
                c1 += 1

            rect = Rect(r1, c1, r1 + cell.row_span - 1, c1 + cell.col_span - 1)
            cell.rect = rect
            claimed.update(rect.points())

            if show_coords:
                cell.content = f"{r1},{c1}"


def max_cols(model: GridModel) -> int:
    """Logical column count: the largest ``c2`` over all cells."""
    return max((cell.coords.c2 for cell in model.cells()), default=0)


def find_cell(model: GridModel, r: int, c: int) -> Cell | None:
    """Return the cell whose rectangle covers the point (r, c)."""
    for cell in model.cells():
        if cell.coords.contains(r, c):
            return cell
    return None


def cells_in_row(model: GridModel, r: int) -> list[Cell]:
    """Distinct cells intersecting logical row ``r``, left to right."""
    return _distinct(find_cell(model, r, c) for c in range(1, max_cols(model) + 1))


def cells_in_col(model: GridModel, c: int) -> list[Cell]:
    """Distinct cells intersecting logical column ``c``, top to bottom."""
    return _distinct(find_cell(model, r, c) for r in range(1, model.row_count + 1))


def anchor_left(
    model: GridModel,
    r: int,
    c: int,
    *,
    exclude: Iterable[Cell] = (),
) -> Cell | None:
    """Nearest cell physically owned by row ``r`` lying left of column ``c``.

    Scans leftward from ``c - 1``, skipping spans that reach down from
    earlier rows, since those live in another row's cell list.

    Args:
        model: An indexed grid.
        r: Logical row, which is also the physical row.
        c: Logical column the new or relocated cell will start at.
        exclude: Cells to skip while scanning (e.g. cells that are about to
            be moved out of the row).
    """
    skipped = list(exclude)
    for x in range(c - 1, 0, -1):
        left = find_cell(model, r, x)
        if left is None or left in skipped:
            continue
        if left.coords.r1 == r:
            return left
    return None


def insertion_index(model: GridModel, r: int, c: int) -> int:
    """Physical index in row ``r`` for a cell anchored at logical column ``c``."""
    left = anchor_left(model, r, c)
    if left is None:
        return 0
    return model.rows[r - 1].index(left) + 1


def find_tiling_violations(model: GridModel) -> list[str]:
    """Check that cell rectangles partition the grid exactly.

    The grid must be indexed. Returns a list of human-readable problems;
    an empty list means every point of the R x C grid is covered by exactly
    one cell.
    """
    problems: list[str] = []
    n_rows = model.row_count
    n_cols = max_cols(model)
    owners: dict[tuple[int, int], Cell] = {}

    for cell in model.cells():
        rect = cell.coords
        if rect.r2 > n_rows:
            problems.append(
                f"cell at ({rect.r1},{rect.c1}) spans to row {rect.r2} "
                f"but the grid has {n_rows} rows"
            )
        for point in rect.points():
            if point in owners:
                problems.append(f"cells overlap at ({point[0]},{point[1]})")
            else:
                owners[point] = cell

    for r, c in Rect(1, 1, n_rows, n_cols).points():
        if (r, c) not in owners:
            problems.append(f"no cell covers ({r},{c})")

    return problems


def _distinct(cells: Iterable[Cell | None]) -> list[Cell]:
    result: list[Cell] = []
    for cell in cells:
        if cell is not None and cell not in result:
            result.append(cell)
    return result

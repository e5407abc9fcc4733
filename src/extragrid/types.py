"""Data types for the extragrid grid engine.

Defines the cell entity, the physical grid, logical rectangles and the
selection. No structural logic lives here; see indexer, span_ops,
structure_ops and rearrange.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

# --- Enums ---


class CellTag(Enum):
    """Role of a cell within the table."""

    HEADER = "header"
    DATA = "data"


# --- Geometry ---


@dataclass(frozen=True)
class Rect:
    """A logical rectangle, 1-based and inclusive on both ends."""

    r1: int
    c1: int
    r2: int
    c2: int

    def contains(self, r: int, c: int) -> bool:
        return self.r1 <= r <= self.r2 and self.c1 <= c <= self.c2

    def encloses(self, other: Rect) -> bool:
        """True if ``other`` lies entirely inside this rectangle."""
        return (
            self.r1 <= other.r1
            and other.r2 <= self.r2
            and self.c1 <= other.c1
            and other.c2 <= self.c2
        )

    def intersects(self, other: Rect) -> bool:
        return not (
            other.r2 < self.r1
            or other.r1 > self.r2
            or other.c2 < self.c1
            or other.c1 > self.c2
        )

    def union(self, other: Rect) -> Rect:
        return Rect(
            min(self.r1, other.r1),
            min(self.c1, other.c1),
            max(self.r2, other.r2),
            max(self.c2, other.c2),
        )

    def points(self) -> Iterator[tuple[int, int]]:
        """Yield every (row, col) point in row-major order."""
        for r in range(self.r1, self.r2 + 1):
            for c in range(self.c1, self.c2 + 1):
                yield r, c


# --- Cells and grid ---


@dataclass(eq=False)
class Cell:
    """A physical cell owned by exactly one row.

    Cells compare by identity: two cells with equal attributes are still
    distinct entities. ``rect`` is derived state assigned by the indexer and
    is stale between a structural change and the next recompute.
    """

    row_span: int = 1
    col_span: int = 1
    tag: CellTag = CellTag.DATA
    content: str = ""
    rect: Rect | None = field(default=None, repr=False)

    @property
    def coords(self) -> Rect:
        if self.rect is None:
            raise RuntimeError("cell has no coordinates; recompute the grid first")
        return self.rect

    @property
    def is_merged(self) -> bool:
        return self.row_span > 1 or self.col_span > 1


@dataclass
class GridModel:
    """Ordered rows of physical cells.

    Physical order within a row is left-to-right logical order, but a row
    holds only the cells anchored on it: cells covered by a span from an
    earlier row are absent.
    """

    rows: list[list[Cell]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def cells(self) -> Iterator[Cell]:
        """Yield every cell in physical row-major order."""
        for row in self.rows:
            yield from row

    def row_of(self, cell: Cell) -> list[Cell]:
        """Return the physical row that owns ``cell``."""
        for row in self.rows:
            if cell in row:
                return row
        raise ValueError("cell does not belong to this grid")


@dataclass
class Selection:
    """Selected cells plus the optional active (focused) cell.

    The editor keeps the two mutually exclusive: selecting a single cell makes
    it active and empties ``cells``; selecting a range fills ``cells`` and
    clears ``active``.
    """

    cells: list[Cell] = field(default_factory=list)
    active: Cell | None = None

    @property
    def is_empty(self) -> bool:
        return not self.cells and self.active is None

    def targets(self) -> list[Cell]:
        """Selected cells followed by the active cell, without duplicates."""
        result = list(self.cells)
        if self.active is not None and self.active not in result:
            result.append(self.active)
        return result

    def contains(self, cell: Cell) -> bool:
        return cell in self.targets()

    def clear(self) -> None:
        self.cells = []
        self.active = None

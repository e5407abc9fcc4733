"""Exception classes for extragrid grid editing."""

from __future__ import annotations


class GridError(Exception):
    """Base class for grid editing errors."""

    pass


class InvalidSelectionError(GridError):
    """Raised when a selection is not an exact rectangle of whole cells.

    Also raised when merge is invoked with fewer than two selected cells.
    """

    pass


class NoActiveCellError(GridError):
    """Raised when an operation needs an active cell or selection and has none."""

    pass


class NotMergedCellError(GridError):
    """Raised when split is invoked on a cell that spans a single row and column."""

    pass


class IllegalMoveError(GridError):
    """Raised when a row/column move would tear or straddle a spanning cell.

    Callers are expected to probe ``can_move_rows`` / ``can_move_cols`` first,
    so this signals a contract violation rather than ordinary user input.
    """

    def __init__(self, axis: str, start: int, count: int, to: int) -> None:
        self.axis = axis
        self.start = start
        self.count = count
        self.to = to
        super().__init__(
            f"cannot move {count} {axis}(s) starting at {start} to position {to}"
        )


class InvalidGridError(GridError):
    """Raised when a loaded grid does not tile its bounding rectangle."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        summary = "; ".join(problems[:3])
        if len(problems) > 3:
            summary += f" (+{len(problems) - 3} more)"
        super().__init__(f"Grid does not tile: {summary}")

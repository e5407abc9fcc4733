"""Linear undo/redo history of grid snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from extragrid.serde import GridData


class HistoryStack:
    """Snapshots taken after each completed mutation.

    ``index`` points at the snapshot matching the live grid. Recording a new
    snapshot discards everything past ``index`` (no branching).
    """

    def __init__(self) -> None:
        self._entries: list[GridData] = []
        self._index = -1

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index + 1 < len(self._entries)

    @property
    def current(self) -> GridData | None:
        if self._index < 0:
            return None
        return self._entries[self._index]

    def record(self, snapshot: GridData) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(snapshot)
        self._index += 1
        logger.debug("history: recorded entry {}/{}", self._index + 1, len(self))

    def undo(self) -> GridData | None:
        """Step back one entry and return it, or None if already at the start."""
        if not self.can_undo:
            return None
        self._index -= 1
        logger.debug("history: undo to entry {}/{}", self._index + 1, len(self))
        return self._entries[self._index]

    def redo(self) -> GridData | None:
        """Step forward one entry and return it, or None if at the newest."""
        if not self.can_redo:
            return None
        self._index += 1
        logger.debug("history: redo to entry {}/{}", self._index + 1, len(self))
        return self._entries[self._index]

    def clear(self) -> None:
        self._entries.clear()
        self._index = -1

"""Tests for the undo/redo stack."""

from __future__ import annotations

from extragrid.history import HistoryStack
from extragrid.serde import CellData, GridData, RowData


def _grid(content: str) -> GridData:
    return GridData(rows=(RowData(cells=(CellData(content=content),)),))


class TestHistoryStack:
    """Tests for HistoryStack."""

    def test_empty(self) -> None:
        history = HistoryStack()
        assert len(history) == 0
        assert history.current is None
        assert history.undo() is None
        assert history.redo() is None

    def test_undo_and_redo(self) -> None:
        history = HistoryStack()
        for name in ("a", "b", "c"):
            history.record(_grid(name))

        assert history.undo() == _grid("b")
        assert history.undo() == _grid("a")
        assert history.undo() is None
        assert not history.can_undo

        assert history.redo() == _grid("b")
        assert history.redo() == _grid("c")
        assert history.redo() is None
        assert history.index == 2

    def test_record_truncates_redo_entries(self) -> None:
        history = HistoryStack()
        for name in ("a", "b", "c"):
            history.record(_grid(name))
        history.undo()
        history.undo()

        history.record(_grid("d"))

        assert len(history) == 2
        assert history.current == _grid("d")
        assert not history.can_redo
        assert history.undo() == _grid("a")

    def test_clear(self) -> None:
        history = HistoryStack()
        history.record(_grid("a"))
        history.clear()
        assert len(history) == 0
        assert history.index == -1

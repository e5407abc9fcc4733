"""Tests for row and column moves."""

from __future__ import annotations

import pytest

from extragrid.exceptions import IllegalMoveError
from extragrid.rearrange import can_move_cols, can_move_rows, move_cols, move_rows
from extragrid.serde import snapshot
from tests.helpers import assert_tiles, layout, make_grid

GRID_3X3 = [["a", "b", "c"], ["d", "e", "f"], ["g", "h", "i"]]


class TestCanMove:
    """Tests for the move legality predicates."""

    @pytest.mark.parametrize(
        ("start", "count", "to"),
        [
            (0, 1, 3),  # source before the grid
            (3, 2, 1),  # source past the end
            (1, 0, 3),  # empty source
            (1, 1, 0),  # destination before the grid
            (1, 1, 5),  # destination past end + 1
            (1, 2, 2),  # destination inside the source
            (1, 1, 2),  # no-op
        ],
    )
    def test_bounds(self, start: int, count: int, to: int) -> None:
        model = make_grid(GRID_3X3)
        assert not can_move_rows(model, start, count, to)
        assert not can_move_cols(model, start, count, to)

    def test_plain_moves_allowed(self) -> None:
        model = make_grid(GRID_3X3)
        assert can_move_rows(model, 1, 1, 4)
        assert can_move_rows(model, 3, 1, 1)
        assert can_move_cols(model, 2, 2, 1)

    def test_tearing_a_span_is_rejected(self) -> None:
        model = make_grid([["a:2x1", "b"], ["c"], ["d", "e"]])
        # Row 1 alone would tear a away from row 2.
        assert not can_move_rows(model, 1, 1, 4)
        # Moving inside the span is fine.
        assert can_move_rows(model, 1, 1, 3)

    def test_landing_astride_a_span_is_rejected(self) -> None:
        model = make_grid([["a", "b:1x2"], ["c", "d", "e"]])
        assert not can_move_cols(model, 1, 1, 3)
        assert can_move_cols(model, 1, 1, 4)

    def test_block_reaching_past_a_span_is_rejected(self) -> None:
        model = make_grid([["a:2x1", "b"], ["c"], ["d", "e"]])
        # Rows 2-3 take half of a along while row 1 keeps the rest.
        assert not can_move_rows(model, 2, 2, 1)
        with pytest.raises(IllegalMoveError):
            move_rows(model, 2, 2, 1)
        assert layout(model) == [["a:2x1", "b"], ["c"], ["d", "e"]]

    def test_block_reaching_past_a_column_span_is_rejected(self) -> None:
        model = make_grid([["a:1x2", "b", "c"], ["d", "e", "f", "g"]])
        assert not can_move_cols(model, 2, 2, 1)
        with pytest.raises(IllegalMoveError):
            move_cols(model, 2, 2, 1)
        assert layout(model) == [["a:1x2", "b", "c"], ["d", "e", "f", "g"]]

        # The block sticks out on the left of b while b sticks out on the right.
        model = make_grid([["a", "b:1x2", "c"], ["d", "e", "f", "g"]])
        assert not can_move_cols(model, 1, 2, 4)

    def test_span_containing_the_block_may_move_within(self) -> None:
        model = make_grid([["a:3x1", "b"], ["c"], ["d"]])
        assert can_move_rows(model, 1, 2, 4)
        assert can_move_rows(model, 2, 2, 1)

    def test_predicate_does_not_mutate(self) -> None:
        model = make_grid([["a:2x1", "b"], ["c"], ["d", "e"]])
        before = snapshot(model)
        can_move_rows(model, 1, 1, 4)
        can_move_cols(model, 1, 1, 3)
        assert snapshot(model) == before


class TestMoveRows:
    """Tests for move_rows."""

    def test_move_down(self) -> None:
        model = make_grid(GRID_3X3)
        move_rows(model, 1, 1, 4)
        assert layout(model) == [["d", "e", "f"], ["g", "h", "i"], ["a", "b", "c"]]

    def test_move_up(self) -> None:
        model = make_grid(GRID_3X3)
        move_rows(model, 3, 1, 1)
        assert layout(model) == [["g", "h", "i"], ["a", "b", "c"], ["d", "e", "f"]]

    def test_span_hands_over_to_new_top_row(self) -> None:
        model = make_grid([["a", "b:3x1"], ["c"], ["d"]])
        move_rows(model, 1, 1, 3)
        assert layout(model) == [["c", "b:3x1"], ["a"], ["d"]]
        assert_tiles(model)

    def test_move_inverse(self) -> None:
        model = make_grid([["a", "b", "c"], ["d", "e", "f"], ["g", "h:2x2"], ["i"]])
        before = snapshot(model)
        move_rows(model, 3, 2, 2)
        assert_tiles(model)
        move_rows(model, 2, 2, 5)
        assert snapshot(model) == before

    def test_illegal_move_raises_without_mutation(self) -> None:
        model = make_grid([["a:2x1", "b"], ["c"], ["d", "e"]])
        before = snapshot(model)
        with pytest.raises(IllegalMoveError, match="row"):
            move_rows(model, 1, 1, 4)
        assert snapshot(model) == before


class TestMoveCols:
    """Tests for move_cols."""

    def test_move_right(self) -> None:
        model = make_grid(GRID_3X3)
        move_cols(model, 1, 1, 4)
        assert layout(model) == [["b", "c", "a"], ["e", "f", "d"], ["h", "i", "g"]]

    def test_span_containing_destination_stays(self) -> None:
        model = make_grid([["a", "b:1x2"], ["c", "d", "e"]])
        move_cols(model, 2, 1, 4)
        assert layout(model) == [["a", "b:1x2"], ["c", "e", "d"]]
        assert_tiles(model)

    def test_move_inverse(self) -> None:
        model = make_grid([["a", "b:2x2"], ["c"], ["d", "e", "f"]])
        before = snapshot(model)
        move_cols(model, 2, 2, 1)
        assert_tiles(model)
        move_cols(model, 1, 2, 4)
        assert snapshot(model) == before

    def test_illegal_move_raises_without_mutation(self) -> None:
        model = make_grid([["a", "b:1x2"], ["c", "d", "e"]])
        before = snapshot(model)
        with pytest.raises(IllegalMoveError) as exc_info:
            move_cols(model, 1, 1, 3)
        assert exc_info.value.axis == "column"
        assert snapshot(model) == before

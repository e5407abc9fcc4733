"""Grid building and checking helpers shared by the test modules."""

from __future__ import annotations

from extragrid.editor import GridEditor
from extragrid.indexer import find_tiling_violations, recompute
from extragrid.serde import to_html
from extragrid.types import Cell, CellTag, GridModel


def make_grid(rows: list[list[str]]) -> GridModel:
    """Build an indexed grid from compact cell tokens.

    Each token is ``content`` or ``content:RxC`` for a cell spanning R rows
    and C columns. A leading ``#`` makes a header cell.
    """
    model = GridModel()
    for tokens in rows:
        row: list[Cell] = []
        for token in tokens:
            tag = CellTag.DATA
            if token.startswith("#"):
                tag = CellTag.HEADER
                token = token[1:]
            content, _, span = token.partition(":")
            row_span, col_span = (int(n) for n in span.split("x")) if span else (1, 1)
            row.append(
                Cell(row_span=row_span, col_span=col_span, tag=tag, content=content)
            )
        model.rows.append(row)
    recompute(model)
    return model


def layout(model: GridModel) -> list[list[str]]:
    """Inverse of ``make_grid``: the compact tokens of every physical row."""
    rows: list[list[str]] = []
    for row in model.rows:
        tokens = []
        for cell in row:
            token = ("#" if cell.tag is CellTag.HEADER else "") + cell.content
            if cell.is_merged:
                token += f":{cell.row_span}x{cell.col_span}"
            tokens.append(token)
        rows.append(tokens)
    return rows


def cell_at(model: GridModel, content: str) -> Cell:
    """Return the unique cell with the given content."""
    matches = [cell for cell in model.cells() if cell.content == content]
    assert len(matches) == 1, f"expected one cell {content!r}, found {len(matches)}"
    return matches[0]


def assert_tiles(model: GridModel) -> None:
    problems = find_tiling_violations(model)
    assert problems == [], problems


def html_of(editor: GridEditor) -> str:
    return to_html(editor.get_content())

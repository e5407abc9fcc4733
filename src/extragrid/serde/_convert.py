"""Conversion between the live grid and its immutable snapshot models."""

from __future__ import annotations

from extragrid.serde._models import CellData, GridData, RowData
from extragrid.types import Cell, GridModel


def snapshot(model: GridModel) -> GridData:
    """Capture the structure and content of ``model``.

    Coordinates are derived state and are not part of the snapshot.
    """
    return GridData(
        rows=tuple(
            RowData(
                cells=tuple(
                    CellData(
                        row_span=cell.row_span,
                        col_span=cell.col_span,
                        tag=cell.tag,
                        content=cell.content,
                    )
                    for cell in row
                )
            )
            for row in model.rows
        )
    )


def build_model(data: GridData) -> GridModel:
    """Create fresh cells from a snapshot. The result still needs indexing."""
    return GridModel(
        rows=[
            [
                Cell(
                    row_span=cell.row_span,
                    col_span=cell.col_span,
                    tag=cell.tag,
                    content=cell.content,
                )
                for cell in row.cells
            ]
            for row in data.rows
        ]
    )

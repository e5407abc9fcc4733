"""Serde module: live grid <-> immutable snapshots <-> JSON / HTML.

Public API:
    snapshot(model) -> GridData: capture structure and content
    build_model(data) -> GridModel: fresh cells from a snapshot
    to_html(data) -> str / from_html(html) -> GridData
    GridData.to_json() / GridData.from_json(text)
"""

from __future__ import annotations

from ._convert import build_model, snapshot
from ._html import from_html, to_html
from ._models import CellData, GridData, RowData

__all__ = [
    "CellData",
    "GridData",
    "RowData",
    "build_model",
    "from_html",
    "snapshot",
    "to_html",
]

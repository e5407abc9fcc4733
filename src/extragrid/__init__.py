"""extragrid - Merged-cell grid editing engine.

Edits a rectangular grid whose cells may span several rows and columns:
merge, split, row/column insertion and deletion, legality-checked row and
column moves, all under a linear undo/redo history.
"""

from loguru import logger

__version__ = "0.1.0"

from extragrid.editor import GridEditor
from extragrid.exceptions import (
    GridError,
    IllegalMoveError,
    InvalidGridError,
    InvalidSelectionError,
    NoActiveCellError,
    NotMergedCellError,
)
from extragrid.serde import CellData, GridData, RowData, from_html, to_html
from extragrid.types import Cell, CellTag, GridModel, Rect, Selection

# Silent until an application calls extragrid.logging.configure_logging()
logger.disable("extragrid")

__all__ = [
    "Cell",
    "CellData",
    "CellTag",
    "GridData",
    "GridEditor",
    "GridError",
    "GridModel",
    "IllegalMoveError",
    "InvalidGridError",
    "InvalidSelectionError",
    "NoActiveCellError",
    "NotMergedCellError",
    "Rect",
    "RowData",
    "Selection",
    "__version__",
    "from_html",
    "to_html",
]

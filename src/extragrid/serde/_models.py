"""Pydantic models for the exchanged grid format.

These are the immutable snapshots stored by the history stack and the
payload accepted by ``GridEditor.load``. Field aliases give the camelCase
wire names; unit spans are left out when dumping.
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
)

from extragrid.types import CellTag


class CellData(BaseModel):
    """One cell: spans, tag and opaque content."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    row_span: int = Field(1, ge=1, alias="rowSpan")
    col_span: int = Field(1, ge=1, alias="colSpan")
    tag: CellTag = CellTag.DATA
    content: str = ""

    @model_serializer(mode="wrap")
    def _omit_unit_spans(self, handler: SerializerFunctionWrapHandler) -> Any:
        data = handler(self)
        for key in ("rowSpan", "colSpan", "row_span", "col_span"):
            if data.get(key) == 1:
                del data[key]
        return data


class RowData(BaseModel):
    """The cells physically owned by one row, left to right."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    cells: tuple[CellData, ...] = ()


class GridData(BaseModel):
    """A full grid: rows top to bottom."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    rows: tuple[RowData, ...] = ()

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def to_json(self, *, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, text: str) -> GridData:
        return cls.model_validate_json(text)

"""HTML table codec.

Grids are exchanged as a bare ``<table><tbody>`` with ``td``/``th`` cells.
``rowspan``/``colspan`` are written only when greater than 1. Cell content is
rich-text markup and passes through both directions verbatim.
"""

from __future__ import annotations

from html.parser import HTMLParser

from extragrid.serde._models import CellData, GridData, RowData
from extragrid.types import CellTag

_ELEMENT_FOR_TAG = {CellTag.HEADER: "th", CellTag.DATA: "td"}
_TAG_FOR_ELEMENT = {name: tag for tag, name in _ELEMENT_FOR_TAG.items()}
_ROW_TAGS = ("td", "th", "tr")


def to_html(data: GridData) -> str:
    """Render a grid snapshot as an HTML table string."""
    parts = ["<table><tbody>"]
    for row in data.rows:
        parts.append("<tr>")
        for cell in row.cells:
            name = _ELEMENT_FOR_TAG[cell.tag]
            attrs = ""
            if cell.row_span > 1:
                attrs += f' rowspan="{cell.row_span}"'
            if cell.col_span > 1:
                attrs += f' colspan="{cell.col_span}"'
            parts.append(f"<{name}{attrs}>{cell.content}</{name}>")
        parts.append("</tr>")
    parts.append("</tbody></table>")
    return "".join(parts)


class TableHTMLParser(HTMLParser):
    """Parse the first top-level ``<table>`` into rows of cells.

    Everything between a cell's start and end tag is kept as raw markup.
    Tables nested inside a cell are part of that cell's content. Omitted
    ``</td>`` and ``</tr>`` end tags are closed implicitly, as browsers do.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=False)
        self.rows: list[RowData] = []
        self.found_table = False
        self.closed_table = False
        self._in_table = False
        self._row: list[CellData] | None = None
        self._cell: tuple[CellTag, int, int] | None = None
        self._content: list[str] = []
        self._nested = 0

    # --- Structure ---

    def _in_content(self, tag: str, structural: tuple[str, ...]) -> bool:
        return self._cell is not None and (self._nested > 0 or tag not in structural)

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if self._in_content(tag, _ROW_TAGS):
            if tag == "table":
                self._nested += 1
            self._content.append(self.get_starttag_text() or "")
            return
        if not self._in_table:
            if tag == "table" and not self.found_table:
                self.found_table = True
                self._in_table = True
            return

        if tag == "tr":
            self._end_row()
            self._row = []
        elif tag in _TAG_FOR_ELEMENT:
            self._end_cell()
            if self._row is None:
                self._row = []
            attrs_dict = dict(attrs)
            self._cell = (
                _TAG_FOR_ELEMENT[tag],
                _span(attrs_dict, "rowspan"),
                _span(attrs_dict, "colspan"),
            )

    def handle_startendtag(
        self, tag: str, attrs: list[tuple[str, str | None]]
    ) -> None:
        if self._cell is not None:
            self._content.append(self.get_starttag_text() or "")
        else:
            self.handle_starttag(tag, attrs)
            self.handle_endtag(tag)

    def handle_endtag(self, tag: str) -> None:
        if self._in_content(tag, (*_ROW_TAGS, "table")):
            if tag == "table":
                self._nested -= 1
            self._content.append(f"</{tag}>")
            return
        if not self._in_table:
            return

        if tag in _TAG_FOR_ELEMENT:
            self._end_cell()
        elif tag == "tr":
            self._end_row()
        elif tag == "table":
            self._end_row()
            self._in_table = False
            self.closed_table = True

    # --- Cell content ---

    def handle_data(self, data: str) -> None:
        if self._cell is not None:
            self._content.append(data)

    def handle_entityref(self, name: str) -> None:
        if self._cell is not None:
            self._content.append(f"&{name};")

    def handle_charref(self, name: str) -> None:
        if self._cell is not None:
            self._content.append(f"&#{name};")

    def handle_comment(self, data: str) -> None:
        if self._cell is not None:
            self._content.append(f"<!--{data}-->")

    def _end_cell(self) -> None:
        if self._cell is None:
            return
        assert self._row is not None
        tag, row_span, col_span = self._cell
        self._row.append(
            CellData(
                row_span=row_span,
                col_span=col_span,
                tag=tag,
                content="".join(self._content),
            )
        )
        self._cell = None
        self._content = []

    def _end_row(self) -> None:
        self._end_cell()
        if self._row is not None:
            self.rows.append(RowData(cells=tuple(self._row)))
            self._row = None


def from_html(html: str) -> GridData:
    """Parse an HTML table string produced by ``to_html`` (or compatible).

    Attributes other than ``rowspan``/``colspan`` are ignored, so markup
    carrying presentation classes is accepted. Entities such as ``&nbsp;``
    are kept as written.

    Raises:
        ValueError: If there is no complete ``<table>`` element or a span
            attribute is not a positive integer.
    """
    parser = TableHTMLParser()
    parser.feed(html)
    parser.close()

    if not parser.found_table:
        raise ValueError("Expected a <table> element")
    if not parser.closed_table:
        raise ValueError("Invalid table markup: missing </table>")
    return GridData(rows=tuple(parser.rows))


def _span(attrs: dict[str, str | None], name: str) -> int:
    raw = attrs.get(name) or "1"
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"Invalid {name} value {raw!r}") from e
    if value < 1:
        raise ValueError(f"Invalid {name} value {raw!r}")
    return value

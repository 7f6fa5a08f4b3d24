"""
Google Docs Document Structure Parsing and Range Resolution

This module turns a raw `documents.get` payload into a typed snapshot of the
document body and resolves the index positions the edit engine needs:
the end of the document, a freshly inserted table, and the insertion point
of a table cell.

A snapshot is only valid until the next successful edit. Any insertion or
deletion shifts every index at or after the edit point, so callers re-read
the document instead of reusing an old snapshot.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from core.errors import StructuralNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextRun:
    """A run of literal text inside a paragraph, [start_index, end_index)."""

    start_index: int
    end_index: int
    content: str


@dataclass(frozen=True)
class Paragraph:
    start_index: int
    end_index: int
    elements: list[TextRun] = field(default_factory=list)
    named_style: str = "NORMAL_TEXT"

    @property
    def text(self) -> str:
        return "".join(run.content for run in self.elements)


@dataclass(frozen=True)
class TableCell:
    start_index: int
    end_index: int
    content: list["StructuralElement"] = field(default_factory=list)

    @property
    def paragraphs(self) -> list[Paragraph]:
        return [element for element in self.content if isinstance(element, Paragraph)]


@dataclass(frozen=True)
class TableRow:
    start_index: int
    end_index: int
    cells: list[TableCell] = field(default_factory=list)


@dataclass(frozen=True)
class Table:
    start_index: int
    end_index: int
    rows: list[TableRow] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.rows[0].cells) if self.rows else 0


@dataclass(frozen=True)
class OpaqueElement:
    """Element the engine never edits (section break, table of contents)."""

    start_index: int
    end_index: int
    kind: str


StructuralElement = Union[Paragraph, Table, OpaqueElement]


@dataclass(frozen=True)
class DocumentSnapshot:
    """Point-in-time read of a document body."""

    document_id: str
    title: str = ""
    revision_id: Optional[str] = None
    content: list[StructuralElement] = field(default_factory=list)

    @property
    def tables(self) -> list[Table]:
        return [element for element in self.content if isinstance(element, Table)]


def parse_document_structure(doc_data: dict[str, Any]) -> DocumentSnapshot:
    """
    Parse a raw document into a DocumentSnapshot.

    Args:
        doc_data: Raw document data from the Google Docs API

    Returns:
        Snapshot of the document body with all structural elements
    """
    body = doc_data.get("body", {})
    content = _parse_content(body.get("content", []))
    return DocumentSnapshot(
        document_id=doc_data.get("documentId", ""),
        title=doc_data.get("title", ""),
        revision_id=doc_data.get("revisionId"),
        content=content,
    )


def _parse_content(elements: list[dict[str, Any]]) -> list[StructuralElement]:
    parsed = []
    for element in elements:
        element_info = _parse_element(element)
        if element_info is not None:
            parsed.append(element_info)
    return parsed


def _parse_element(element: dict[str, Any]) -> Optional[StructuralElement]:
    """
    Parse a single document element.

    The first element of a body is usually a section break without a
    startIndex; it starts at 0.
    """
    start_index = element.get("startIndex", 0)
    end_index = element.get("endIndex", 0)

    if "paragraph" in element:
        paragraph = element["paragraph"]
        return Paragraph(
            start_index=start_index,
            end_index=end_index,
            elements=_parse_text_runs(paragraph),
            named_style=paragraph.get("paragraphStyle", {}).get("namedStyleType", "NORMAL_TEXT"),
        )

    if "table" in element:
        return Table(
            start_index=start_index,
            end_index=end_index,
            rows=_parse_table_rows(element["table"]),
        )

    if "sectionBreak" in element:
        return OpaqueElement(start_index, end_index, "section_break")

    if "tableOfContents" in element:
        return OpaqueElement(start_index, end_index, "table_of_contents")

    logger.debug(f"Skipping unknown structural element at {start_index}-{end_index}")
    return None


def _parse_text_runs(paragraph: dict[str, Any]) -> list[TextRun]:
    runs = []
    for element in paragraph.get("elements", []):
        if "textRun" not in element:
            continue
        runs.append(
            TextRun(
                start_index=element.get("startIndex", 0),
                end_index=element.get("endIndex", 0),
                content=element["textRun"].get("content", ""),
            )
        )
    return runs


def _parse_table_rows(table: dict[str, Any]) -> list[TableRow]:
    rows = []
    for row in table.get("tableRows", []):
        cells = [
            TableCell(
                start_index=cell.get("startIndex", 0),
                end_index=cell.get("endIndex", 0),
                content=_parse_content(cell.get("content", [])),
            )
            for cell in row.get("tableCells", [])
        ]
        rows.append(
            TableRow(
                start_index=row.get("startIndex", 0),
                end_index=row.get("endIndex", 0),
                cells=cells,
            )
        )
    return rows


def utf16_length(text: str) -> int:
    """
    Number of index positions ``text`` occupies once inserted.

    Document indices count UTF-16 code units, so a character outside the
    Basic Multilingual Plane (most emoji) takes two positions.
    """
    return len(text.encode("utf-16-le")) // 2


def document_end_index(snapshot: DocumentSnapshot) -> int:
    """
    End index of the document body.

    This is the end index of the LAST top-level element, so trailing tables
    and paragraphs are counted. A freshly created empty document ends at 2
    (its implicit trailing newline occupies index 1).
    """
    if not snapshot.content:
        return 1
    return snapshot.content[-1].end_index


def locate_table(snapshot: DocumentSnapshot, not_before: int) -> Table:
    """
    Find the first table starting at or after an index.

    Raises:
        StructuralNotFoundError: If no such table exists
    """
    for element in snapshot.content:
        if isinstance(element, Table) and element.start_index >= not_before:
            return element
    raise StructuralNotFoundError(
        f"No table found at or after index {not_before} "
        f"(document has {len(snapshot.tables)} tables)",
        document_id=snapshot.document_id or None,
    )


def get_table_cell(table: Table, row: int, column: int) -> TableCell:
    """
    Raises:
        StructuralNotFoundError: If the table has no cell at (row, column)
    """
    if not 0 <= row < len(table.rows):
        raise StructuralNotFoundError(
            f"Row {row} does not exist in table at index {table.start_index} "
            f"({len(table.rows)} rows)"
        )
    cells = table.rows[row].cells
    if not 0 <= column < len(cells):
        raise StructuralNotFoundError(
            f"Column {column} does not exist in row {row} of table at index "
            f"{table.start_index} ({len(cells)} columns)"
        )
    return cells[column]


def cell_insertion_point(table: Table, row: int, column: int) -> int:
    """
    Index at which text typed into a cell lands: the start of its first paragraph.

    Raises:
        StructuralNotFoundError: If the cell does not exist or has no paragraph
    """
    cell = get_table_cell(table, row, column)
    paragraphs = cell.paragraphs
    if not paragraphs:
        raise StructuralNotFoundError(
            f"Cell ({row}, {column}) of table at index {table.start_index} has no paragraph"
        )
    return paragraphs[0].start_index


def extract_text(snapshot: DocumentSnapshot) -> str:
    """Plain text of the document body, including the text of table cells."""
    return _extract_elements_text(snapshot.content)


def _extract_elements_text(elements: list[StructuralElement]) -> str:
    text_parts = []
    for element in elements:
        if isinstance(element, Paragraph):
            text_parts.append(element.text)
        elif isinstance(element, Table):
            for row in element.rows:
                for cell in row.cells:
                    text_parts.append(_extract_elements_text(cell.content))
    return "".join(text_parts)

"""
Edit Batch Builders

Pure functions that turn a semantic edit request into an ordered list of
EditOperation values. Nothing here talks to the backend; indices come from
a snapshot the caller has just read.

Ordering rule for a single batch: every index is computed against the
pre-batch snapshot, and insertions that target distinct indices are emitted
from the highest index to the lowest, so an earlier insertion never shifts
the target of a later one.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from core.errors import ValidationError
from gdocs.docs_helpers import (
    HEADER_GRAY,
    build_all_borders_cell_style,
    build_background_cell_style,
    build_text_style,
)
from gdocs.docs_structure import Table, cell_insertion_point, utf16_length
from gdocs.edit_operations import (
    EditOperation,
    DeleteRange,
    InsertInlineImage,
    InsertTable,
    InsertText,
    UpdateParagraphStyle,
    UpdateTableCellStyle,
    UpdateTextStyle,
)

logger = logging.getLogger(__name__)

# A new or emptied document still holds one implicit newline at index 1
EMPTY_DOCUMENT_END_INDEX = 2


def build_replace_document_operations(end_index: int, new_text: str) -> List[EditOperation]:
    """
    Replace the whole body with new_text.

    The delete covers [1, end_index - 1); the final newline cannot be deleted.
    When end_index <= 2 there is nothing to delete and the delete is omitted,
    since the backend rejects an empty range. An empty new_text just clears
    the document.
    """
    operations: List[EditOperation] = []
    if end_index > EMPTY_DOCUMENT_END_INDEX:
        operations.append(DeleteRange(1, end_index - 1))
    if new_text:
        operations.append(InsertText(1, new_text))
    return operations


def build_append_operations(end_index: int, text: str) -> List[EditOperation]:
    """Insert text just before the document's implicit trailing newline."""
    return [InsertText(max(1, end_index - 1), text)]


def build_table_creation_operations(index: int, rows: int, columns: int) -> List[EditOperation]:
    """
    Insert a newline at index, then the table right after it.

    The newline makes the table start its own structural element instead of
    splitting a run of existing text.
    """
    return [
        InsertText(index, "\n"),
        InsertTable(index + 1, rows, columns),
    ]


def build_cell_fill_operations(
    table: Table,
    rows: int,
    columns: int,
    data: Sequence[Sequence[str]],
) -> List[EditOperation]:
    """
    Insert each non-empty data value into its cell.

    Only (row, col) with row < rows, col < columns and a value present in
    the row-major data are filled. Operations are sorted by target index,
    highest first.

    Raises:
        StructuralNotFoundError: If an addressed cell is missing from the table
    """
    pending: List[InsertText] = []
    for row_idx, row_data in enumerate(data[:rows]):
        for col_idx, value in enumerate(row_data[:columns]):
            if not value:
                continue
            index = cell_insertion_point(table, row_idx, col_idx)
            pending.append(InsertText(index, value))

    pending.sort(key=lambda op: op.index, reverse=True)
    return pending


def build_border_operations(table: Table) -> List[EditOperation]:
    """Solid black 1pt border on all four sides of every cell."""
    cell_style, fields = build_all_borders_cell_style()
    operations: List[EditOperation] = []
    for row_idx, row in enumerate(table.rows):
        for col_idx in range(len(row.cells)):
            operations.append(
                UpdateTableCellStyle(table.start_index, row_idx, col_idx, cell_style, fields)
            )
    return operations


def build_header_operations(table: Table) -> List[EditOperation]:
    """
    Header styling for row 0 only: centered, bold text on a light gray background.

    Runs whose stripped content is empty (the blank paragraph marker) are
    not bolded.
    """
    if not table.rows:
        return []

    bold_style, bold_fields = build_text_style(bold=True)
    background_style, background_fields = build_background_cell_style(HEADER_GRAY)

    operations: List[EditOperation] = []
    for col_idx, cell in enumerate(table.rows[0].cells):
        paragraphs = cell.paragraphs
        if paragraphs:
            operations.append(
                UpdateParagraphStyle(
                    paragraphs[0].start_index,
                    paragraphs[-1].end_index,
                    {"alignment": "CENTER"},
                    ["alignment"],
                )
            )
        for paragraph in paragraphs:
            for run in paragraph.elements:
                if not run.content.strip():
                    continue
                operations.append(
                    UpdateTextStyle(run.start_index, run.end_index, bold_style, bold_fields)
                )
        operations.append(
            UpdateTableCellStyle(table.start_index, 0, col_idx, background_style, background_fields)
        )
    return operations


def build_link_operations(index: int, text: str, url: str) -> List[EditOperation]:
    """
    Insert text and turn it into a hyperlink in one batch.

    Both indices are computed before either operation runs. The link covers
    exactly the inserted text, measured in UTF-16 code units like every
    document index.
    """
    link_style, link_fields = build_text_style(link=url)
    return [
        InsertText(index, text),
        UpdateTextStyle(index, index + utf16_length(text), link_style, link_fields),
    ]


def validate_rgb_color(color: Tuple[float, float, float]) -> None:
    """
    Raises:
        ValidationError: If any component is outside the 0-1 range
    """
    if len(color) != 3:
        raise ValidationError(f"Color must have red, green and blue components, got {color}")
    for name, value in zip(("red", "green", "blue"), color):
        if not 0 <= value <= 1:
            raise ValidationError(f"Invalid {name} value: {value}. Must be between 0 and 1.")


def build_format_text_operations(
    start_index: int,
    end_index: int,
    bold: Optional[bool] = None,
    italic: Optional[bool] = None,
    underline: Optional[bool] = None,
    foreground_color: Optional[Tuple[float, float, float]] = None,
) -> List[EditOperation]:
    if foreground_color is not None:
        validate_rgb_color(foreground_color)
    text_style, fields = build_text_style(
        bold=bold, italic=italic, underline=underline, foreground_color=foreground_color
    )
    if not fields:
        raise ValidationError(
            "No formatting provided. Set at least one of bold, italic, underline or foreground_color."
        )
    return [UpdateTextStyle(start_index, end_index, text_style, fields)]


def build_insert_image_operations(
    index: int,
    image_uri: str,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> List[EditOperation]:
    return [InsertInlineImage(index, image_uri, width, height)]

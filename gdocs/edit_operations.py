"""
Edit Operations

Immutable value objects describing one atomic document edit. Builders in
gdocs.batch_builders produce them; the gateway renders each one to a Docs
API request with to_api_request() exactly once, at submission time.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from core.errors import ValidationError
from gdocs.docs_helpers import (
    create_insert_text_request,
    create_delete_range_request,
    create_insert_table_request,
    create_update_text_style_request,
    create_update_table_cell_style_request,
    create_paragraph_style_request,
    create_insert_image_request,
)


def _check_index(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 1:
        raise ValidationError(f"{name} must be >= 1, got {value}")


def _check_range(start_index: int, end_index: int) -> None:
    _check_index("start_index", start_index)
    _check_index("end_index", end_index)
    if start_index >= end_index:
        raise ValidationError(
            f"Empty or inverted range: start_index {start_index} must be less than end_index {end_index}"
        )


def _check_fields(style: Dict[str, Any], fields: List[str]) -> None:
    if not fields:
        raise ValidationError("At least one style field is required")
    missing = [name for name in fields if name not in style]
    if missing:
        raise ValidationError(f"Style fields {missing} have no value in the style")


@dataclass(frozen=True)
class InsertText:
    index: int
    text: str

    def __post_init__(self):
        _check_index("index", self.index)
        if not self.text:
            raise ValidationError("Cannot insert empty text")


@dataclass(frozen=True)
class DeleteRange:
    start_index: int
    end_index: int

    def __post_init__(self):
        _check_range(self.start_index, self.end_index)


@dataclass(frozen=True)
class InsertTable:
    index: int
    rows: int
    columns: int

    def __post_init__(self):
        _check_index("index", self.index)
        if self.rows < 1 or self.columns < 1:
            raise ValidationError(
                f"Table must have at least one row and column, got {self.rows}x{self.columns}"
            )


@dataclass(frozen=True)
class UpdateTextStyle:
    start_index: int
    end_index: int
    text_style: Dict[str, Any]
    fields: List[str]

    def __post_init__(self):
        _check_range(self.start_index, self.end_index)
        _check_fields(self.text_style, self.fields)


@dataclass(frozen=True)
class UpdateTableCellStyle:
    table_start_index: int
    row_index: int
    column_index: int
    cell_style: Dict[str, Any]
    fields: List[str]
    row_span: int = 1
    column_span: int = 1

    def __post_init__(self):
        _check_index("table_start_index", self.table_start_index)
        if self.row_index < 0 or self.column_index < 0:
            raise ValidationError(
                f"Cell location must be non-negative, got ({self.row_index}, {self.column_index})"
            )
        _check_fields(self.cell_style, self.fields)


@dataclass(frozen=True)
class UpdateParagraphStyle:
    start_index: int
    end_index: int
    paragraph_style: Dict[str, Any]
    fields: List[str]

    def __post_init__(self):
        _check_range(self.start_index, self.end_index)
        _check_fields(self.paragraph_style, self.fields)


@dataclass(frozen=True)
class InsertInlineImage:
    index: int
    uri: str
    width: Optional[int] = None
    height: Optional[int] = None

    def __post_init__(self):
        _check_index("index", self.index)
        if not self.uri:
            raise ValidationError("Image URI cannot be empty")


EditOperation = Union[
    InsertText,
    DeleteRange,
    InsertTable,
    UpdateTextStyle,
    UpdateTableCellStyle,
    UpdateParagraphStyle,
    InsertInlineImage,
]


def to_api_request(operation: EditOperation) -> Dict[str, Any]:
    """
    Render an edit operation as a Docs API batchUpdate request.

    Raises:
        ValidationError: For anything that is not a known EditOperation
    """
    if isinstance(operation, InsertText):
        return create_insert_text_request(operation.index, operation.text)
    if isinstance(operation, DeleteRange):
        return create_delete_range_request(operation.start_index, operation.end_index)
    if isinstance(operation, InsertTable):
        return create_insert_table_request(operation.index, operation.rows, operation.columns)
    if isinstance(operation, UpdateTextStyle):
        return create_update_text_style_request(
            operation.start_index, operation.end_index, operation.text_style, operation.fields
        )
    if isinstance(operation, UpdateTableCellStyle):
        return create_update_table_cell_style_request(
            operation.table_start_index,
            operation.row_index,
            operation.column_index,
            operation.cell_style,
            operation.fields,
            operation.row_span,
            operation.column_span,
        )
    if isinstance(operation, UpdateParagraphStyle):
        return create_paragraph_style_request(
            operation.start_index, operation.end_index, operation.paragraph_style, operation.fields
        )
    if isinstance(operation, InsertInlineImage):
        return create_insert_image_request(
            operation.index, operation.uri, operation.width, operation.height
        )
    raise ValidationError(f"Unsupported edit operation: {type(operation).__name__}")


def describe_operation(operation: EditOperation) -> str:
    """Short human-readable description, used in log lines."""
    if isinstance(operation, InsertText):
        return f"insert {len(operation.text)} chars at {operation.index}"
    if isinstance(operation, DeleteRange):
        return f"delete {operation.start_index}-{operation.end_index}"
    if isinstance(operation, InsertTable):
        return f"insert {operation.rows}x{operation.columns} table at {operation.index}"
    if isinstance(operation, UpdateTextStyle):
        return f"style text {operation.start_index}-{operation.end_index} ({','.join(operation.fields)})"
    if isinstance(operation, UpdateTableCellStyle):
        return (
            f"style cell ({operation.row_index},{operation.column_index}) of table "
            f"at {operation.table_start_index} ({','.join(operation.fields)})"
        )
    if isinstance(operation, UpdateParagraphStyle):
        return f"style paragraph {operation.start_index}-{operation.end_index} ({','.join(operation.fields)})"
    if isinstance(operation, InsertInlineImage):
        return f"insert image at {operation.index}"
    return type(operation).__name__

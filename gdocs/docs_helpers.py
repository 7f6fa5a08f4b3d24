"""
Raw request bodies for ``documents.batchUpdate``.

Only the gateway's rendering step calls these; everything above it works
with the typed operations in gdocs.edit_operations.
"""
import logging
from typing import Dict, Any, Optional, Tuple, List

logger = logging.getLogger(__name__)

BLACK = (0.0, 0.0, 0.0)
HEADER_GRAY = (0.9, 0.9, 0.9)

TABLE_BORDER_SIDES = ("borderTop", "borderBottom", "borderLeft", "borderRight")


def _range(start_index: int, end_index: int) -> Dict[str, int]:
    return {'startIndex': start_index, 'endIndex': end_index}


def _points(value: float) -> Dict[str, Any]:
    return {'magnitude': value, 'unit': 'PT'}


def build_rgb_color(red: float, green: float, blue: float) -> Dict[str, Any]:
    """OptionalColor wrapper around an RGB triple in the 0-1 range."""
    return {'color': {'rgbColor': {'red': red, 'green': green, 'blue': blue}}}


def build_text_style(
    bold: bool = None,
    italic: bool = None,
    underline: bool = None,
    link: str = None,
    foreground_color: Optional[Tuple[float, float, float]] = None,
) -> tuple[Dict[str, Any], list[str]]:
    """
    Return ``(text_style, fields)`` for the options that were given.

    Options left as None are neither set nor listed in the field mask, so
    existing formatting for them is preserved. ``link=""`` clears a link.
    """
    flags = {'bold': bold, 'italic': italic, 'underline': underline}
    text_style: Dict[str, Any] = {name: value for name, value in flags.items() if value is not None}
    if link is not None:
        text_style['link'] = {'url': link} if link else None
    if foreground_color is not None:
        text_style['foregroundColor'] = build_rgb_color(*foreground_color)
    return text_style, list(text_style)


def build_border_style(
    color: Tuple[float, float, float] = BLACK,
    width_pt: float = 1,
    dash_style: str = "SOLID",
) -> Dict[str, Any]:
    return {
        'color': build_rgb_color(*color),
        'width': _points(width_pt),
        'dashStyle': dash_style,
    }


def build_all_borders_cell_style(**border_kwargs) -> tuple[Dict[str, Any], list[str]]:
    """Same border on every side of the cell."""
    border = build_border_style(**border_kwargs)
    return {side: border for side in TABLE_BORDER_SIDES}, list(TABLE_BORDER_SIDES)


def build_background_cell_style(
    color: Tuple[float, float, float]
) -> tuple[Dict[str, Any], list[str]]:
    return {'backgroundColor': build_rgb_color(*color)}, ['backgroundColor']


def create_insert_text_request(index: int, text: str) -> Dict[str, Any]:
    return {'insertText': {'location': {'index': index}, 'text': text}}


def create_delete_range_request(start_index: int, end_index: int) -> Dict[str, Any]:
    """Delete ``[start_index, end_index)``."""
    return {'deleteContentRange': {'range': _range(start_index, end_index)}}


def create_insert_table_request(index: int, rows: int, columns: int) -> Dict[str, Any]:
    """
    Insert an empty rows x columns table.

    The backend adds a newline before the table when ``index`` is not at the
    start of a paragraph, so the table usually starts at ``index + 1``.
    """
    return {'insertTable': {'location': {'index': index}, 'rows': rows, 'columns': columns}}


def create_update_text_style_request(
    start_index: int,
    end_index: int,
    text_style: Dict[str, Any],
    fields: List[str],
) -> Dict[str, Any]:
    return {
        'updateTextStyle': {
            'range': _range(start_index, end_index),
            'textStyle': text_style,
            'fields': ','.join(fields),
        }
    }


def create_paragraph_style_request(
    start_index: int,
    end_index: int,
    paragraph_style: Dict[str, Any],
    fields: List[str],
) -> Dict[str, Any]:
    """Style every paragraph overlapping the range, e.g. ``{'alignment': 'CENTER'}``."""
    return {
        'updateParagraphStyle': {
            'range': _range(start_index, end_index),
            'paragraphStyle': paragraph_style,
            'fields': ','.join(fields),
        }
    }


def create_update_table_cell_style_request(
    table_start_index: int,
    row_index: int,
    column_index: int,
    cell_style: Dict[str, Any],
    fields: List[str],
    row_span: int = 1,
    column_span: int = 1,
) -> Dict[str, Any]:
    """
    Style a block of cells.

    Cells are located by the table's start index plus row and column, which
    stays correct while the text inside the table grows.
    """
    location = {
        'tableStartLocation': {'index': table_start_index},
        'rowIndex': row_index,
        'columnIndex': column_index,
    }
    return {
        'updateTableCellStyle': {
            'tableCellStyle': cell_style,
            'tableRange': {
                'tableCellLocation': location,
                'rowSpan': row_span,
                'columnSpan': column_span,
            },
            'fields': ','.join(fields),
        }
    }


def create_insert_image_request(
    index: int,
    image_uri: str,
    width: int = None,
    height: int = None
) -> Dict[str, Any]:
    """
    Insert an inline image fetched by Google from ``image_uri``.

    ``width`` and ``height`` are in points; omitted ones keep the image's
    natural proportions.
    """
    body: Dict[str, Any] = {'location': {'index': index}, 'uri': image_uri}
    size = {name: _points(value) for name, value in (('width', width), ('height', height)) if value is not None}
    if size:
        body['objectSize'] = size
    return {'insertInlineImage': body}

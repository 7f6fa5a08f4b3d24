"""
Google Docs MCP Tools

This module provides MCP tools for reading and structurally editing Google Docs.
"""

import logging
from typing import List, Dict, Any, Optional

from fastmcp.exceptions import ToolError

# Auth & server utilities
from auth.service_decorator import require_google_service
from core.utils import handle_http_errors
from core.server import server

# Import operation managers for the editing engine
from gdocs.managers import DocumentEditManager
from gdocs.managers.validation_manager import get_validator

logger = logging.getLogger(__name__)


def _doc_link(document_id: str) -> str:
    return f"https://docs.google.com/document/d/{document_id}/edit"


def _check(result) -> None:
    """Raise the validator's message as a tool error when a check fails."""
    is_valid, error = result
    if not is_valid:
        raise ToolError(error)


def _check_plain(result, param_name: str, received: Any, expected: str) -> None:
    is_valid, error_msg = result
    if not is_valid:
        raise ToolError(
            get_validator().create_invalid_param_error(
                param_name=param_name,
                received=received,
                valid_values=[expected],
                context=error_msg,
            )
        )


@server.tool()
@handle_http_errors("create_document", service_type="docs")
@require_google_service("docs", "docs_write")
async def create_document(
    service: Any,
    title: str,
) -> str:
    """
    Creates a new, empty Google Doc.

    Args:
        title: Title of the new document

    Returns:
        str: Confirmation message with document ID and link.
    """
    logger.info(f"[create_document] Invoked. Title='{title}'")
    _check_plain(
        get_validator().validate_text_content(title, allow_empty=False),
        "title", title, "non-empty string",
    )

    manager = DocumentEditManager.for_service(service)
    doc = await manager.create_document(title)
    doc_id = doc["document_id"]
    link = _doc_link(doc_id)
    logger.info(f"Successfully created Google Doc '{title}' (ID: {doc_id}). Link: {link}")
    return f"Created Google Doc '{doc['title']}' (ID: {doc_id}). Link: {link}"


@server.tool()
@handle_http_errors("read_document", is_read_only=True, service_type="docs")
@require_google_service("docs", "docs_read")
async def read_document(
    service: Any,
    document_id: str,
) -> str:
    """
    Reads the plain text content of a Google Doc, including table cell text.

    Args:
        document_id: ID of the document to read

    Returns:
        str: The document text.
    """
    logger.info(f"[read_document] Invoked. Document ID: '{document_id}'")
    _check(get_validator().validate_document_id_structured(document_id))

    manager = DocumentEditManager.for_service(service)
    return await manager.read_document(document_id)


@server.tool()
@handle_http_errors("update_document", service_type="docs")
@require_google_service("docs", "docs_write")
async def update_document(
    service: Any,
    document_id: str,
    text: str,
) -> str:
    """
    Replaces the entire content of a Google Doc with the given text.

    Everything in the body is removed, tables included. Passing an empty
    string clears the document.

    Args:
        document_id: ID of the document to update
        text: New content of the document

    Returns:
        str: Confirmation message with link.
    """
    logger.info(f"[update_document] Invoked. Document ID: '{document_id}', {len(text)} chars")
    validator = get_validator()
    _check(validator.validate_document_id_structured(document_id))
    _check_plain(validator.validate_text_content(text), "text", f"<{len(text)} chars>", "string")

    manager = DocumentEditManager.for_service(service)
    await manager.replace_document(document_id, text)
    return f"Document updated successfully! Link: {_doc_link(document_id)}"


@server.tool()
@handle_http_errors("append_text_to_doc", service_type="docs")
@require_google_service("docs", "docs_write")
async def append_text_to_doc(
    service: Any,
    document_id: str,
    text: str,
) -> str:
    """
    Appends text at the end of a Google Doc.

    Args:
        document_id: ID of the document to update
        text: Text to append. Include a leading newline to start a new paragraph.

    Returns:
        str: Confirmation message with link.
    """
    logger.info(f"[append_text_to_doc] Invoked. Document ID: '{document_id}', {len(text)} chars")
    validator = get_validator()
    _check(validator.validate_document_id_structured(document_id))
    _check_plain(
        validator.validate_text_content(text, allow_empty=False),
        "text", text, "non-empty string",
    )

    manager = DocumentEditManager.for_service(service)
    await manager.append_text(document_id, text)
    return f"Text appended successfully! Link: {_doc_link(document_id)}"


@server.tool()
@handle_http_errors("insert_table_to_doc", service_type="docs")
@require_google_service("docs", "docs_write")
async def insert_table_to_doc(
    service: Any,
    document_id: str,
    index: int,
    rows: int,
    columns: int,
    data: Optional[List[List[str]]] = None,
    header_row: bool = False,
) -> str:
    """
    Inserts a table at the given index, fills it with data and adds borders.

    EXAMPLE DATA FORMAT:
    data = [
        ["Name", "Role"],       # Row 0 - header when header_row=True
        ["Alice", "Engineer"],  # Row 1
    ]

    DATA FORMAT REQUIREMENTS:
    - 2D list of strings in row-major order
    - Use empty strings "" for empty cells, never None
    - Missing cells stay empty; values beyond rows/columns are ignored

    The table is created in several steps. If a later step fails the table
    stays in the document; read the document before retrying.

    Args:
        document_id: ID of the document to update
        index: Document position for the table (1 = start of the document)
        rows: Number of rows
        columns: Number of columns
        data: Cell values
        header_row: Make the first row bold and centered on a gray background

    Returns:
        str: Confirmation with table details and link
    """
    logger.info(
        f"[insert_table_to_doc] Invoked. Document ID: '{document_id}', index={index}, "
        f"{rows}x{columns}, header_row={header_row}"
    )
    validator = get_validator()
    _check(validator.validate_document_id_structured(document_id))
    _check_plain(validator.validate_index(index, "index"), "index", index, "integer >= 1")
    _check_plain(
        validator.validate_table_dimensions(rows, columns),
        "rows/columns", f"{rows}x{columns}", "positive integers within table limits",
    )
    _check(validator.validate_table_data_structured(data))

    manager = DocumentEditManager.for_service(service)
    result = await manager.insert_table(document_id, index, rows, columns, data or [], header_row)
    return (
        f"Table inserted successfully!\n"
        f"Rows: {result['rows']}, Columns: {result['columns']}\n"
        f"Cells filled: {result['cells_filled']}"
        f"{', header row styled' if header_row else ''}\n"
        f"Link: {_doc_link(document_id)}"
    )


@server.tool()
@handle_http_errors("insert_link_to_doc", service_type="docs")
@require_google_service("docs", "docs_write")
async def insert_link_to_doc(
    service: Any,
    document_id: str,
    index: int,
    text: str,
    url: str,
) -> str:
    """
    Inserts linked text at the given index.

    Args:
        document_id: ID of the document to update
        index: Document position for the text (1 = start of the document)
        text: Visible link text
        url: Link target (http:// or https://)

    Returns:
        str: Confirmation message with link.
    """
    logger.info(f"[insert_link_to_doc] Invoked. Document ID: '{document_id}', index={index}, url='{url}'")
    validator = get_validator()
    _check(validator.validate_document_id_structured(document_id))
    _check_plain(validator.validate_index(index, "index"), "index", index, "integer >= 1")
    _check_plain(
        validator.validate_text_content(text, allow_empty=False),
        "text", text, "non-empty string",
    )
    _check_plain(validator.validate_url(url), "url", url, "http:// or https:// URL")

    manager = DocumentEditManager.for_service(service)
    await manager.insert_link(document_id, index, text, url)
    return f"Link '{text}' -> {url} inserted at index {index}. Link: {_doc_link(document_id)}"


@server.tool()
@handle_http_errors("format_text_in_doc", service_type="docs")
@require_google_service("docs", "docs_write")
async def format_text_in_doc(
    service: Any,
    document_id: str,
    start_index: int,
    end_index: int,
    bold: Optional[bool] = None,
    italic: Optional[bool] = None,
    underline: Optional[bool] = None,
    foreground_color: Optional[Dict[str, float]] = None,
) -> str:
    """
    Applies character formatting to the range [start_index, end_index).

    Args:
        document_id: ID of the document to update
        start_index: First index of the range (inclusive)
        end_index: End of the range (exclusive)
        bold: Set or clear bold
        italic: Set or clear italic
        underline: Set or clear underline
        foreground_color: Text color as {'red': 0-1, 'green': 0-1, 'blue': 0-1}

    Returns:
        str: Confirmation message with link.
    """
    logger.info(
        f"[format_text_in_doc] Invoked. Document ID: '{document_id}', "
        f"range={start_index}-{end_index}"
    )
    validator = get_validator()
    _check(validator.validate_document_id_structured(document_id))
    _check(validator.validate_index_range_structured(start_index, end_index))
    is_valid, _ = validator.validate_color(foreground_color)
    if not is_valid:
        raise ToolError(validator.create_invalid_color_error(foreground_color))
    if all(v is None for v in (bold, italic, underline, foreground_color)):
        raise ToolError(
            validator.create_invalid_param_error(
                param_name="formatting",
                received="none",
                valid_values=["bold", "italic", "underline", "foreground_color"],
                context="At least one formatting parameter must be provided",
            )
        )

    color = None
    if foreground_color is not None:
        color = tuple(float(foreground_color.get(c, 0)) for c in ("red", "green", "blue"))

    manager = DocumentEditManager.for_service(service)
    await manager.format_text(document_id, start_index, end_index, bold, italic, underline, color)
    return f"Text formatted successfully ({start_index}-{end_index}). Link: {_doc_link(document_id)}"


@server.tool()
@handle_http_errors("insert_image_to_doc", service_type="docs")
@require_google_service("docs", "docs_write")
async def insert_image_to_doc(
    service: Any,
    document_id: str,
    image_url: str,
    index: int,
    width: Optional[float] = None,
    height: Optional[float] = None,
) -> str:
    """
    Inserts an inline image from a publicly accessible URL.

    Args:
        document_id: ID of the document to update
        image_url: Public http(s) URL of a PNG, JPEG or GIF image
        index: Document position for the image (1 = start of the document)
        width: Optional width in points
        height: Optional height in points

    Returns:
        str: Confirmation message with link.
    """
    logger.info(f"[insert_image_to_doc] Invoked. Document ID: '{document_id}', index={index}, url='{image_url}'")
    validator = get_validator()
    _check(validator.validate_document_id_structured(document_id))
    _check_plain(validator.validate_index(index, "index"), "index", index, "integer >= 1")
    _check_plain(validator.validate_url(image_url, "image_url"), "image_url", image_url, "http:// or https:// URL")
    _check_plain(
        validator.validate_image_size(width, height),
        "width/height", f"{width}x{height}", "positive number of points",
    )

    manager = DocumentEditManager.for_service(service)
    await manager.insert_image(document_id, index, image_url, width, height)
    return f"Image inserted at index {index}. Link: {_doc_link(document_id)}"

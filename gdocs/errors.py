"""
Structured errors returned by the Google Docs tools.

Every failure surfaces to the MCP client as a JSON object with a stable
``code``, a short ``message`` and, where useful, a hint about what to do
next. Exceptions from the workspace taxonomy in core.errors are converted
here so the tools never leak raw HTTP payloads.
"""
import json
import logging
from enum import Enum
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from core.errors import (
    WorkspaceError,
    NotFoundError,
    StructuralNotFoundError,
    ValidationError,
    TransientError,
    AuthError,
)

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Machine-readable codes carried in the ``code`` field."""

    # Raised before any request is sent
    INVALID_PARAM_VALUE = "INVALID_PARAM_VALUE"
    INVALID_INDEX_RANGE = "INVALID_INDEX_RANGE"
    INVALID_TABLE_DATA = "INVALID_TABLE_DATA"
    INVALID_COLOR_FORMAT = "INVALID_COLOR_FORMAT"

    # Reported by the backend or the edit engine
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
    STRUCTURE_NOT_FOUND = "STRUCTURE_NOT_FOUND"
    INVALID_OPERATION = "INVALID_OPERATION"
    TRANSIENT_ERROR = "TRANSIENT_ERROR"
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    OPERATION_FAILED = "OPERATION_FAILED"


@dataclass
class ErrorContext:
    """Values echoed back so the caller can see what was rejected."""
    received: Optional[Dict[str, Any]] = None
    expected: Optional[Dict[str, Any]] = None
    document_id: Optional[str] = None
    phase: Optional[str] = None
    possible_causes: Optional[List[str]] = None


_OPTIONAL_FIELDS = ("reason", "suggestion", "example")


@dataclass
class StructuredError:
    """
    One error payload.

    ``phase`` inside the context names the step of a multi-step edit that
    failed (for example ``fill_cells``); ``retryable`` is only emitted when
    repeating the whole request could succeed.
    """
    error: bool = True
    code: str = ""
    message: str = ""
    reason: str = ""
    suggestion: str = ""
    example: Optional[Dict[str, Any]] = None
    context: Optional[ErrorContext] = None
    retryable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error, "code": self.code, "message": self.message}
        for name in _OPTIONAL_FIELDS:
            value = getattr(self, name)
            if value:
                payload[name] = value
        if self.context is not None:
            context = {k: v for k, v in asdict(self.context).items() if v is not None}
            if context:
                payload["context"] = context
        if self.retryable:
            payload["retryable"] = True
        return payload

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class DocsErrorBuilder:
    """Factory methods for the payloads above, one per failure kind."""

    @staticmethod
    def invalid_index_range(start_index: int, end_index: int) -> StructuredError:
        low, high = sorted((start_index, end_index))
        return StructuredError(
            code=ErrorCode.INVALID_INDEX_RANGE.value,
            message=f"Range {start_index}..{end_index} is empty or reversed",
            reason="end_index must be strictly greater than start_index.",
            suggestion="Pass the smaller index as start_index.",
            context=ErrorContext(
                received={"start_index": start_index, "end_index": end_index},
                expected={"start_index": low, "end_index": high},
            ),
        )

    @staticmethod
    def document_not_found(document_id: Optional[str], detail: str = "") -> StructuredError:
        return StructuredError(
            code=ErrorCode.DOCUMENT_NOT_FOUND.value,
            message=f"No accessible document with ID '{document_id}'",
            reason=detail or "Google Docs reported the document as missing.",
            suggestion=(
                "Copy the ID from the document URL "
                "(https://docs.google.com/document/d/<ID>/edit) and check sharing settings."
            ),
            context=ErrorContext(
                document_id=document_id,
                possible_causes=[
                    "The ID is mistyped or truncated",
                    "The document is in the trash or was deleted",
                    "The authenticated account cannot open it",
                    "Quotes or whitespace were pasted along with the ID",
                ],
            ),
        )

    @staticmethod
    def structure_not_found(
        detail: str,
        document_id: Optional[str] = None,
        phase: Optional[str] = None
    ) -> StructuredError:
        """A step succeeded but the element it created cannot be located afterwards."""
        return StructuredError(
            code=ErrorCode.STRUCTURE_NOT_FOUND.value,
            message=f"Could not locate edited structure: {detail}",
            reason="Steps that already ran were kept; nothing is rolled back.",
            suggestion=(
                "Read the document to see what was applied. A concurrent editor may have "
                "moved or removed the element; delete any partial result before retrying."
            ),
            context=ErrorContext(document_id=document_id, phase=phase),
        )

    @staticmethod
    def invalid_operation(
        detail: str,
        document_id: Optional[str] = None,
        phase: Optional[str] = None
    ) -> StructuredError:
        return StructuredError(
            code=ErrorCode.INVALID_OPERATION.value,
            message=f"Google Docs rejected the edit: {detail}",
            reason="The request itself is malformed, so retrying it unchanged will not help.",
            suggestion="Compare the indices with the current text from read_document.",
            context=ErrorContext(document_id=document_id, phase=phase),
        )

    @staticmethod
    def transient_failure(
        detail: str,
        document_id: Optional[str] = None,
        phase: Optional[str] = None
    ) -> StructuredError:
        if phase:
            suggestion = (
                f"Failed during '{phase}'. Earlier steps may already be in the document, "
                "so read the document before retrying the whole request."
            )
        else:
            suggestion = "Wait a moment and retry the whole request."
        return StructuredError(
            code=ErrorCode.TRANSIENT_ERROR.value,
            message=f"Google Docs is temporarily unavailable: {detail}",
            reason="Network error, rate limit or backend outage.",
            suggestion=suggestion,
            context=ErrorContext(document_id=document_id, phase=phase),
            retryable=True,
        )

    @staticmethod
    def authentication_required(detail: str) -> StructuredError:
        return StructuredError(
            code=ErrorCode.AUTHENTICATION_REQUIRED.value,
            message=detail,
            reason="No usable stored Google token.",
            suggestion="Run 'python main.py --authenticate' where the server runs, then call the tool again.",
        )

    @staticmethod
    def invalid_table_data(
        issue: str,
        row_index: Optional[int] = None,
        col_index: Optional[int] = None,
        value: Optional[Any] = None
    ) -> StructuredError:
        received: Dict[str, Any] = {"issue": issue}
        if row_index is not None:
            received["row"] = row_index
        if col_index is not None:
            received["column"] = col_index
        if value is not None:
            received["value"] = repr(value)

        return StructuredError(
            code=ErrorCode.INVALID_TABLE_DATA.value,
            message=f"Invalid table data: {issue}",
            reason="data is a list of rows, each row a list of cell strings.",
            suggestion="Use '' for a cell that should stay empty.",
            example={
                "data": "[['Name', 'Qty'], ['Apples', '3']]",
                "call": "insert_table_to_doc(document_id='...', index=1, rows=2, columns=2, data=[...])",
            },
            context=ErrorContext(received=received),
        )

    @staticmethod
    def invalid_param_value(
        param_name: str,
        received_value: Any,
        valid_values: List[str],
        context_description: str = ""
    ) -> StructuredError:
        message = f"Invalid value {received_value!r} for '{param_name}'"
        if context_description:
            message = f"{message}: {context_description}"
        return StructuredError(
            code=ErrorCode.INVALID_PARAM_VALUE.value,
            message=message,
            suggestion=f"Use one of: {', '.join(valid_values)}",
            context=ErrorContext(
                received={param_name: received_value},
                expected={param_name: valid_values},
            ),
        )

    @staticmethod
    def invalid_color_format(color_value: Any, param_name: str = "foreground_color") -> StructuredError:
        return StructuredError(
            code=ErrorCode.INVALID_COLOR_FORMAT.value,
            message=f"Invalid color for '{param_name}': {color_value!r}",
            reason="A color has red, green and blue components in the range 0 to 1.",
            suggestion="For pure red pass {'red': 1, 'green': 0, 'blue': 0}.",
            context=ErrorContext(
                received={param_name: repr(color_value)},
                expected={"format": "{'red': 0-1, 'green': 0-1, 'blue': 0-1}"},
            ),
        )

    @staticmethod
    def from_exception(error: WorkspaceError) -> StructuredError:
        """Translate a core.errors exception into its payload."""
        # StructuralNotFoundError subclasses NotFoundError, check it first
        if isinstance(error, StructuralNotFoundError):
            return DocsErrorBuilder.structure_not_found(error.message, error.document_id, error.phase)
        if isinstance(error, NotFoundError):
            structured = DocsErrorBuilder.document_not_found(error.document_id, error.message)
            structured.context.phase = error.phase
            return structured
        if isinstance(error, ValidationError):
            return DocsErrorBuilder.invalid_operation(error.message, error.document_id, error.phase)
        if isinstance(error, TransientError):
            return DocsErrorBuilder.transient_failure(error.message, error.document_id, error.phase)
        if isinstance(error, AuthError):
            return DocsErrorBuilder.authentication_required(error.message)
        return StructuredError(
            code=ErrorCode.OPERATION_FAILED.value,
            message=error.message,
            reason="Unclassified Google Docs API error.",
            context=ErrorContext(document_id=error.document_id, phase=error.phase),
        )


def simple_error(code: ErrorCode, message: str, suggestion: str = "") -> str:
    """JSON payload with just a code, message and optional suggestion."""
    return StructuredError(code=code.value, message=message, suggestion=suggestion).to_json()

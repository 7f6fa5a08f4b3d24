"""
Unit tests for structured error formatting and the workspace error taxonomy.
"""
import json

from core.errors import (
    AuthError,
    NotFoundError,
    StructuralNotFoundError,
    TransientError,
    ValidationError,
    WorkspaceError,
)
from gdocs.errors import (
    DocsErrorBuilder,
    ErrorCode,
    StructuredError,
    simple_error,
)


class TestWorkspaceError:

    def test_add_context_fills_only_missing_fields(self):
        error = NotFoundError("gone", document_id="doc-1")
        assert error.add_context(document_id="other", phase="fill_cells") is error
        assert error.document_id == "doc-1"
        assert error.phase == "fill_cells"

    def test_str_includes_context(self):
        error = TransientError("timeout", document_id="doc-1", phase="apply_borders")
        assert str(error) == "timeout (document=doc-1, phase=apply_borders)"

    def test_str_without_context(self):
        assert str(ValidationError("bad")) == "bad"

    def test_structural_not_found_is_not_found(self):
        assert issubclass(StructuralNotFoundError, NotFoundError)


class TestStructuredError:

    def test_to_dict_omits_empty_fields(self):
        error = StructuredError(code="X", message="m")
        assert error.to_dict() == {"error": True, "code": "X", "message": "m"}

    def test_to_json_roundtrip(self):
        error = DocsErrorBuilder.invalid_index_range(10, 3)
        parsed = json.loads(error.to_json())
        assert parsed["code"] == ErrorCode.INVALID_INDEX_RANGE.value
        assert parsed["context"]["expected"] == {"start_index": 3, "end_index": 10}

    def test_simple_error(self):
        parsed = json.loads(simple_error(ErrorCode.OPERATION_FAILED, "boom", "try again"))
        assert parsed == {
            "error": True,
            "code": "OPERATION_FAILED",
            "message": "boom",
            "suggestion": "try again",
        }


class TestFromException:
    """Each taxonomy class maps to its error code."""

    def test_structural_not_found(self):
        error = StructuralNotFoundError("no table", document_id="doc-1", phase="fill_cells")
        parsed = DocsErrorBuilder.from_exception(error).to_dict()
        assert parsed["code"] == "STRUCTURE_NOT_FOUND"
        assert parsed["context"] == {"document_id": "doc-1", "phase": "fill_cells"}
        assert "read the document" in parsed["suggestion"].lower()

    def test_not_found(self):
        parsed = DocsErrorBuilder.from_exception(NotFoundError("404", document_id="doc-1")).to_dict()
        assert parsed["code"] == "DOCUMENT_NOT_FOUND"
        assert "doc-1" in parsed["message"]

    def test_validation(self):
        parsed = DocsErrorBuilder.from_exception(ValidationError("bad index")).to_dict()
        assert parsed["code"] == "INVALID_OPERATION"
        assert "retryable" not in parsed

    def test_transient_is_retryable(self):
        error = TransientError("503", document_id="doc-1", phase="style_header")
        parsed = DocsErrorBuilder.from_exception(error).to_dict()
        assert parsed["code"] == "TRANSIENT_ERROR"
        assert parsed["retryable"] is True
        assert "style_header" in parsed["suggestion"]

    def test_auth(self):
        parsed = DocsErrorBuilder.from_exception(AuthError("no token")).to_dict()
        assert parsed["code"] == "AUTHENTICATION_REQUIRED"
        assert "--authenticate" in parsed["suggestion"]

    def test_other(self):
        parsed = DocsErrorBuilder.from_exception(WorkspaceError("409 conflict")).to_dict()
        assert parsed["code"] == "OPERATION_FAILED"


class TestBuilders:

    def test_invalid_table_data_context(self):
        parsed = DocsErrorBuilder.invalid_table_data("bad cell", row_index=1, col_index=2, value=3).to_dict()
        assert parsed["context"]["received"] == {"issue": "bad cell", "row": 1, "column": 2, "value": "3"}

    def test_invalid_param_value(self):
        parsed = DocsErrorBuilder.invalid_param_value("index", 0, ["integer >= 1"]).to_dict()
        assert parsed["code"] == "INVALID_PARAM_VALUE"
        assert parsed["suggestion"] == "Use one of: integer >= 1"

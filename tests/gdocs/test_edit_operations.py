"""
Unit tests for EditOperation validation and rendering to Docs API requests.
"""
import pytest

from core.errors import ValidationError
from gdocs.docs_helpers import build_all_borders_cell_style, build_text_style
from gdocs.edit_operations import (
    DeleteRange,
    InsertInlineImage,
    InsertTable,
    InsertText,
    UpdateParagraphStyle,
    UpdateTableCellStyle,
    UpdateTextStyle,
    describe_operation,
    to_api_request,
)


class TestOperationValidation:
    """Operations reject values the backend would reject."""

    def test_insert_text_rejects_empty_text(self):
        with pytest.raises(ValidationError):
            InsertText(1, "")

    def test_insert_text_rejects_index_zero(self):
        with pytest.raises(ValidationError):
            InsertText(0, "x")

    def test_delete_range_rejects_empty_range(self):
        with pytest.raises(ValidationError):
            DeleteRange(5, 5)

    def test_delete_range_rejects_inverted_range(self):
        with pytest.raises(ValidationError):
            DeleteRange(10, 3)

    def test_insert_table_rejects_zero_rows(self):
        with pytest.raises(ValidationError):
            InsertTable(1, 0, 2)

    def test_style_fields_must_be_present(self):
        with pytest.raises(ValidationError):
            UpdateTextStyle(1, 5, {"bold": True}, ["bold", "italic"])

    def test_style_requires_fields(self):
        with pytest.raises(ValidationError):
            UpdateParagraphStyle(1, 5, {"alignment": "CENTER"}, [])

    def test_cell_location_non_negative(self):
        with pytest.raises(ValidationError):
            UpdateTableCellStyle(2, -1, 0, {"backgroundColor": {}}, ["backgroundColor"])

    def test_operations_are_immutable(self):
        op = InsertText(1, "x")
        with pytest.raises(AttributeError):
            op.index = 3


class TestToApiRequest:
    """Rendering of each operation variant."""

    def test_insert_text(self):
        assert to_api_request(InsertText(7, "Hello")) == {
            "insertText": {"location": {"index": 7}, "text": "Hello"}
        }

    def test_delete_range(self):
        assert to_api_request(DeleteRange(1, 12)) == {
            "deleteContentRange": {"range": {"startIndex": 1, "endIndex": 12}}
        }

    def test_insert_table(self):
        assert to_api_request(InsertTable(4, 3, 2)) == {
            "insertTable": {"location": {"index": 4}, "rows": 3, "columns": 2}
        }

    def test_update_text_style_link(self):
        style, fields = build_text_style(link="https://example.com")
        request = to_api_request(UpdateTextStyle(10, 14, style, fields))
        assert request["updateTextStyle"]["range"] == {"startIndex": 10, "endIndex": 14}
        assert request["updateTextStyle"]["textStyle"] == {"link": {"url": "https://example.com"}}
        assert request["updateTextStyle"]["fields"] == "link"

    def test_update_table_cell_style_is_addressed_by_table_location(self):
        style, fields = build_all_borders_cell_style()
        request = to_api_request(UpdateTableCellStyle(5, 1, 2, style, fields))
        table_range = request["updateTableCellStyle"]["tableRange"]
        assert table_range["tableCellLocation"] == {
            "tableStartLocation": {"index": 5},
            "rowIndex": 1,
            "columnIndex": 2,
        }
        assert table_range["rowSpan"] == 1
        assert table_range["columnSpan"] == 1
        assert request["updateTableCellStyle"]["fields"] == "borderTop,borderBottom,borderLeft,borderRight"
        border = request["updateTableCellStyle"]["tableCellStyle"]["borderTop"]
        assert border["width"] == {"magnitude": 1, "unit": "PT"}
        assert border["dashStyle"] == "SOLID"
        assert border["color"]["color"]["rgbColor"] == {"red": 0.0, "green": 0.0, "blue": 0.0}

    def test_update_paragraph_style(self):
        request = to_api_request(UpdateParagraphStyle(3, 9, {"alignment": "CENTER"}, ["alignment"]))
        assert request == {
            "updateParagraphStyle": {
                "range": {"startIndex": 3, "endIndex": 9},
                "paragraphStyle": {"alignment": "CENTER"},
                "fields": "alignment",
            }
        }

    def test_insert_inline_image_with_size(self):
        request = to_api_request(InsertInlineImage(1, "https://example.com/a.png", 100, 50))
        body = request["insertInlineImage"]
        assert body["location"] == {"index": 1}
        assert body["uri"] == "https://example.com/a.png"
        assert body["objectSize"]["width"] == {"magnitude": 100, "unit": "PT"}
        assert body["objectSize"]["height"] == {"magnitude": 50, "unit": "PT"}

    def test_insert_inline_image_without_size(self):
        request = to_api_request(InsertInlineImage(1, "https://example.com/a.png"))
        assert "objectSize" not in request["insertInlineImage"]

    def test_unknown_operation_rejected(self):
        with pytest.raises(ValidationError):
            to_api_request({"insertText": {}})


class TestDescribeOperation:

    def test_descriptions(self):
        assert describe_operation(InsertText(3, "abc")) == "insert 3 chars at 3"
        assert describe_operation(DeleteRange(1, 4)) == "delete 1-4"
        assert describe_operation(InsertTable(2, 2, 3)) == "insert 2x3 table at 2"

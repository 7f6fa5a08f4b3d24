"""
Tests for DocumentEditManager against a mocked Docs service.
"""
import pytest

from core.errors import NotFoundError, ValidationError
from gdocs.managers import DocumentEditManager
from gdocs.managers.edit_state import EditState
from mock_documents import (
    create_empty_document,
    create_mock_docs_service,
    create_mock_document,
    create_mock_paragraph,
    create_mock_table,
    make_http_error,
    submitted_batches,
)

DOC_ID = "doc-123"


class TestReplaceDocument:

    @pytest.mark.asyncio
    async def test_empty_document_single_insert(self):
        service = create_mock_docs_service([create_empty_document(DOC_ID)])
        manager = DocumentEditManager.for_service(service)

        result = await manager.replace_document(DOC_ID, "Hello")

        assert submitted_batches(service) == [
            [{"insertText": {"location": {"index": 1}, "text": "Hello"}}]
        ]
        assert result == {"operations": 1, "previous_end_index": 2}
        assert manager.tracker.state == EditState.DONE

    @pytest.mark.asyncio
    async def test_existing_text(self):
        doc = create_mock_document([create_mock_paragraph("0123456789", 1)], DOC_ID)
        service = create_mock_docs_service([doc])

        await DocumentEditManager.for_service(service).replace_document(DOC_ID, "Bye")

        assert submitted_batches(service) == [[
            {"deleteContentRange": {"range": {"startIndex": 1, "endIndex": 11}}},
            {"insertText": {"location": {"index": 1}, "text": "Bye"}},
        ]]

    @pytest.mark.asyncio
    async def test_document_with_tables_fully_covered(self):
        table = create_mock_table(8, 2, 2, [["a", "b"], ["c", "d"]])
        tail = create_mock_paragraph("After", table["endIndex"])
        doc = create_mock_document([create_mock_paragraph("Intro", 1), table, tail], DOC_ID)
        service = create_mock_docs_service([doc])

        await DocumentEditManager.for_service(service).replace_document(DOC_ID, "X")

        [[delete, insert]] = submitted_batches(service)
        assert delete["deleteContentRange"]["range"] == {
            "startIndex": 1, "endIndex": tail["endIndex"] - 1
        }
        assert insert["insertText"]["text"] == "X"

    @pytest.mark.asyncio
    async def test_clearing_empty_document_submits_nothing(self):
        service = create_mock_docs_service([create_empty_document(DOC_ID)])

        result = await DocumentEditManager.for_service(service).replace_document(DOC_ID, "")

        assert submitted_batches(service) == []
        assert result["operations"] == 0

    @pytest.mark.asyncio
    async def test_not_found_is_annotated(self):
        service = create_mock_docs_service()
        service.documents.return_value.get.return_value.execute.side_effect = make_http_error(404)
        manager = DocumentEditManager.for_service(service)

        with pytest.raises(NotFoundError) as exc_info:
            await manager.replace_document(DOC_ID, "X")

        assert exc_info.value.document_id == DOC_ID
        assert exc_info.value.phase == "replace_document"
        assert manager.tracker.state == EditState.FAILED


class TestAppendText:

    @pytest.mark.asyncio
    async def test_appends_before_trailing_newline(self):
        doc = create_mock_document([create_mock_paragraph("Hello", 1)], DOC_ID)
        service = create_mock_docs_service([doc])

        await DocumentEditManager.for_service(service).append_text(DOC_ID, " world")

        assert submitted_batches(service) == [
            [{"insertText": {"location": {"index": 6}, "text": " world"}}]
        ]


class TestInsertLink:

    @pytest.mark.asyncio
    async def test_single_batch_without_read(self):
        service = create_mock_docs_service()

        await DocumentEditManager.for_service(service).insert_link(
            DOC_ID, 5, "click here", "https://example.com"
        )

        assert submitted_batches(service) == [[
            {"insertText": {"location": {"index": 5}, "text": "click here"}},
            {
                "updateTextStyle": {
                    "range": {"startIndex": 5, "endIndex": 15},
                    "textStyle": {"link": {"url": "https://example.com"}},
                    "fields": "link",
                }
            },
        ]]
        service.documents.return_value.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejected_link_keeps_phase(self):
        service = create_mock_docs_service()
        service.documents.return_value.batchUpdate.return_value.execute.side_effect = make_http_error(400)

        with pytest.raises(ValidationError) as exc_info:
            await DocumentEditManager.for_service(service).insert_link(
                DOC_ID, 500, "x", "https://example.com"
            )
        assert exc_info.value.phase == "insert_link"


class TestInsertTable:

    @pytest.mark.asyncio
    async def test_delegates_to_table_manager(self):
        table_doc = create_mock_document(
            [create_mock_paragraph("", 1), create_mock_table(2, 1, 2)], DOC_ID
        )
        service = create_mock_docs_service([table_doc, table_doc])
        manager = DocumentEditManager.for_service(service)

        result = await manager.insert_table(DOC_ID, 1, 1, 2, [["A", "B"]])

        assert result["rows"] == 1
        assert result["columns"] == 2
        assert len(submitted_batches(service)) == 3
        assert manager.tracker.operation == "insert_table"


class TestReadAndCreate:

    @pytest.mark.asyncio
    async def test_read_document_text(self):
        doc = create_mock_document([create_mock_paragraph("Line one", 1)], DOC_ID)
        service = create_mock_docs_service([doc])

        text = await DocumentEditManager.for_service(service).read_document(DOC_ID)

        assert text == "Line one\n"

    @pytest.mark.asyncio
    async def test_create_document(self):
        service = create_mock_docs_service(created={"documentId": "abc", "title": "Plan"})

        doc = await DocumentEditManager.for_service(service).create_document("Plan")

        assert doc == {"document_id": "abc", "title": "Plan"}


class TestFormatAndImage:

    @pytest.mark.asyncio
    async def test_format_text(self):
        service = create_mock_docs_service()

        await DocumentEditManager.for_service(service).format_text(
            DOC_ID, 1, 6, bold=True, foreground_color=(1, 0, 0)
        )

        [[request]] = submitted_batches(service)
        assert request["updateTextStyle"]["fields"] == "bold,foregroundColor"

    @pytest.mark.asyncio
    async def test_insert_image(self):
        service = create_mock_docs_service()

        await DocumentEditManager.for_service(service).insert_image(
            DOC_ID, 3, "https://example.com/logo.png", width=120
        )

        [[request]] = submitted_batches(service)
        assert request["insertInlineImage"]["uri"] == "https://example.com/logo.png"
        assert request["insertInlineImage"]["objectSize"] == {"width": {"magnitude": 120, "unit": "PT"}}

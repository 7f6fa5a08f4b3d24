"""
End-to-end checks of the editing engine against a real document.
"""
import pytest

import gdocs.docs_tools as docs_tools_module


@pytest.mark.asyncio
async def test_replace_append_and_read(test_document):
    doc_id = test_document["document_id"]

    await docs_tools_module.update_document.fn(document_id=doc_id, text="Hello")
    await docs_tools_module.append_text_to_doc.fn(document_id=doc_id, text=" world")

    assert await docs_tools_module.read_document.fn(document_id=doc_id) == "Hello world\n"


@pytest.mark.asyncio
async def test_replace_removes_tables(test_document):
    doc_id = test_document["document_id"]

    await docs_tools_module.update_document.fn(document_id=doc_id, text="Before\n")
    await docs_tools_module.insert_table_to_doc.fn(
        document_id=doc_id, index=1, rows=2, columns=2,
        data=[["A", "B"], ["C", "D"]], header_row=True,
    )
    text = await docs_tools_module.read_document.fn(document_id=doc_id)
    for value in ("A", "B", "C", "D"):
        assert f"{value}\n" in text

    await docs_tools_module.update_document.fn(document_id=doc_id, text="X")

    assert await docs_tools_module.read_document.fn(document_id=doc_id) == "X\n"


@pytest.mark.asyncio
async def test_insert_link(test_document):
    doc_id = test_document["document_id"]

    await docs_tools_module.update_document.fn(document_id=doc_id, text="See: ")
    await docs_tools_module.insert_link_to_doc.fn(
        document_id=doc_id, index=6, text="click here", url="https://example.com"
    )

    assert await docs_tools_module.read_document.fn(document_id=doc_id) == "See: click here\n"

"""
Pytest fixtures for Google Docs integration tests.

All test documents are:
- Named with "[TEST]" prefix for easy identification
- Automatically trashed after test completion (pass or fail)
- Created fresh for each test to ensure isolation
"""
import asyncio
import os
import re
import uuid

import pytest

import gdocs.docs_tools as docs_tools_module
from auth.google_auth import (
    CredentialProvider,
    WorkspaceContext,
    set_workspace_context,
)
from auth.scopes import SCOPES
from core.config import get_credentials_path


@pytest.fixture(scope="session")
def workspace_context():
    """
    Workspace context backed by a real stored token.

    Set via GOOGLE_TEST_TOKEN_PATH environment variable.
    """
    token_path = os.environ.get("GOOGLE_TEST_TOKEN_PATH")
    if not token_path:
        pytest.skip("GOOGLE_TEST_TOKEN_PATH environment variable not set")
    context = WorkspaceContext(CredentialProvider(get_credentials_path(), token_path, SCOPES))
    set_workspace_context(context)
    yield context
    set_workspace_context(None)


@pytest.fixture
async def test_document(workspace_context):
    """
    Create a fresh test document for each test.

    Yields:
        dict: Contains 'document_id' and 'title'
    """
    title = f"[TEST] Docs Integration Test {str(uuid.uuid4())[:8]}"
    result = await docs_tools_module.create_document.fn(title=title)

    # Format: "Created Google Doc 'Title' (ID: doc_id). Link: url"
    match = re.search(r'\(ID: ([a-zA-Z0-9_-]+)\)', result)
    if not match:
        raise ValueError(f"Could not extract document ID from result: {result}")
    document_id = match.group(1)

    yield {"document_id": document_id, "title": title}

    # Always trash the document, even if the test failed
    drive = workspace_context.get_service("drive", "v3")
    await asyncio.to_thread(
        drive.files().update(fileId=document_id, body={"trashed": True}).execute
    )

"""
Tests for the handle_http_errors tool decorator.
"""
import json

import pytest
from fastmcp.exceptions import ToolError

from core.errors import NotFoundError, TransientError, ValidationError
from core.utils import handle_http_errors


@pytest.fixture
def no_sleep(monkeypatch):
    sleeps = []

    async def fake_sleep(delay):
        sleeps.append(delay)

    monkeypatch.setattr("core.utils.asyncio.sleep", fake_sleep)
    return sleeps


class TestHandleHttpErrors:

    @pytest.mark.asyncio
    async def test_passes_result_through(self):
        @handle_http_errors("ok_tool")
        async def tool():
            return "done"

        assert await tool() == "done"

    @pytest.mark.asyncio
    async def test_workspace_error_becomes_structured_tool_error(self):
        @handle_http_errors("test_tool", service_type="docs")
        async def tool(document_id: str):
            raise NotFoundError("404 from backend")

        with pytest.raises(ToolError) as exc_info:
            await tool(document_id="test_doc_123")

        parsed = json.loads(str(exc_info.value))
        assert parsed["error"] is True
        assert parsed["code"] == "DOCUMENT_NOT_FOUND"
        assert "test_doc_123" in parsed["message"]

    @pytest.mark.asyncio
    async def test_read_only_retries_transient_errors(self, no_sleep):
        calls = []

        @handle_http_errors("read_tool", is_read_only=True)
        async def tool():
            calls.append(1)
            if len(calls) < 3:
                raise TransientError("503")
            return "finally"

        assert await tool() == "finally"
        assert no_sleep == [1, 2]

    @pytest.mark.asyncio
    async def test_read_only_gives_up_after_three_attempts(self, no_sleep):
        calls = []

        @handle_http_errors("read_tool", is_read_only=True)
        async def tool():
            calls.append(1)
            raise TransientError("503")

        with pytest.raises(ToolError) as exc_info:
            await tool()

        assert len(calls) == 3
        assert json.loads(str(exc_info.value))["retryable"] is True

    @pytest.mark.asyncio
    async def test_mutating_tools_are_not_retried(self, no_sleep):
        calls = []

        @handle_http_errors("write_tool")
        async def tool():
            calls.append(1)
            raise TransientError("503", phase="apply_borders")

        with pytest.raises(ToolError) as exc_info:
            await tool()

        assert len(calls) == 1
        assert no_sleep == []
        parsed = json.loads(str(exc_info.value))
        assert parsed["code"] == "TRANSIENT_ERROR"
        assert parsed["context"]["phase"] == "apply_borders"

    @pytest.mark.asyncio
    async def test_validation_errors_are_not_retried(self, no_sleep):
        calls = []

        @handle_http_errors("read_tool", is_read_only=True)
        async def tool():
            calls.append(1)
            raise ValidationError("bad request")

        with pytest.raises(ToolError):
            await tool()
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_tool_error_passes_through(self):
        @handle_http_errors("tool")
        async def tool():
            raise ToolError("already structured")

        with pytest.raises(ToolError, match="already structured"):
            await tool()

    @pytest.mark.asyncio
    async def test_unexpected_error(self):
        @handle_http_errors("tool")
        async def tool():
            raise RuntimeError("kaboom")

        with pytest.raises(ToolError) as exc_info:
            await tool()

        parsed = json.loads(str(exc_info.value))
        assert parsed["code"] == "OPERATION_FAILED"
        assert "kaboom" in parsed["message"]

import asyncio
import functools
import logging
from typing import Optional

from fastmcp.exceptions import ToolError

from core.errors import WorkspaceError, TransientError
from gdocs.errors import DocsErrorBuilder, ErrorCode, simple_error

logger = logging.getLogger(__name__)


def handle_http_errors(
    tool_name: str, is_read_only: bool = False, service_type: Optional[str] = None
):
    """
    Turn failures raised inside a tool into structured ToolErrors.

    WorkspaceError subclasses arrive already classified by the gateway; each
    is logged and re-raised as a ToolError carrying the JSON payload from
    DocsErrorBuilder. Anything else becomes OPERATION_FAILED.

    Read-only tools retry TransientError up to three attempts, sleeping 1s
    then 2s. Mutating tools fail on the first TransientError because the
    batch may already have been applied.

    Args:
        tool_name (str): Name used in log lines, e.g. 'read_document'.
        is_read_only (bool): Whether transient failures may be retried.
        service_type (str): Optional service label for log lines, e.g. 'docs'.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            max_retries = 3
            base_delay = 1

            for attempt in range(max_retries):
                try:
                    return await func(*args, **kwargs)
                except ToolError:
                    # Input validation inside the tool already produced a structured error
                    raise
                except TransientError as e:
                    if is_read_only and attempt < max_retries - 1:
                        delay = base_delay * (2**attempt)
                        logger.warning(
                            f"Transient error in {tool_name} on attempt {attempt + 1}: {e}. Retrying in {delay} seconds..."
                        )
                        await asyncio.sleep(delay)
                        continue
                    logger.error(
                        f"Transient error in {tool_name} after {attempt + 1} attempt(s): {e}"
                    )
                    raise ToolError(DocsErrorBuilder.from_exception(e).to_json()) from e
                except WorkspaceError as e:
                    if e.document_id is None:
                        e.add_context(document_id=kwargs.get("document_id"))
                    logger.error(
                        f"{service_type or 'API'} error in {tool_name}: {e}", exc_info=True
                    )
                    raise ToolError(DocsErrorBuilder.from_exception(e).to_json()) from e
                except Exception as e:
                    message = f"An unexpected error occurred in {tool_name}: {e}"
                    logger.exception(message)
                    raise ToolError(
                        simple_error(ErrorCode.OPERATION_FAILED, message)
                    ) from e

        return wrapper

    return decorator

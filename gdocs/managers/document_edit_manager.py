"""
Document Edit Manager

Orchestrates single-request document edits: read a fresh snapshot, resolve
the indices the edit needs, build the operation batch and submit it.
Multi-phase work (table insertion) is delegated to TableOperationManager.

There is no retry loop here. Backend errors propagate to the caller, which
owns the retry policy.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from core.errors import WorkspaceError
from gdocs.batch_builders import (
    build_replace_document_operations,
    build_append_operations,
    build_link_operations,
    build_format_text_operations,
    build_insert_image_operations,
)
from gdocs.docs_structure import document_end_index, extract_text
from gdocs.edit_operations import EditOperation
from gdocs.managers.docs_gateway import DocsGateway
from gdocs.managers.edit_state import EditState, EditTracker
from gdocs.managers.table_operation_manager import TableOperationManager

logger = logging.getLogger(__name__)


class DocumentEditManager:
    """
    High-level document edit operations against one Docs API client.
    """

    def __init__(self, gateway: DocsGateway):
        self.gateway = gateway
        self.tracker: Optional[EditTracker] = None

    @classmethod
    def for_service(cls, service) -> "DocumentEditManager":
        return cls(DocsGateway(service))

    async def create_document(self, title: str) -> Dict[str, Any]:
        """Create an empty document. Returns {'document_id', 'title'}."""
        doc = await self.gateway.create_document(title)
        return {"document_id": doc.get("documentId"), "title": doc.get("title", title)}

    async def read_document(self, document_id: str) -> str:
        """Plain text content of the document body."""
        self.tracker = EditTracker("read_document", document_id)
        try:
            self.tracker.transition(EditState.READING)
            snapshot = await self.gateway.get_snapshot(document_id)
        except WorkspaceError as e:
            self._fail(e, document_id, "read")
            raise
        self.tracker.transition(EditState.DONE)
        return extract_text(snapshot)

    async def replace_document(self, document_id: str, new_text: str) -> Dict[str, Any]:
        """
        Replace the entire body of the document with new_text.

        The delete range reaches the end of the last top-level element, so
        trailing tables are removed as well.
        """
        return await self._edit_at_end(
            "replace_document",
            document_id,
            lambda end_index: build_replace_document_operations(end_index, new_text),
        )

    async def append_text(self, document_id: str, text: str) -> Dict[str, Any]:
        """Append text at the end of the document, before its trailing newline."""
        return await self._edit_at_end(
            "append_text",
            document_id,
            lambda end_index: build_append_operations(end_index, text),
        )

    async def insert_table(
        self,
        document_id: str,
        index: int,
        rows: int,
        columns: int,
        data: Sequence[Sequence[str]],
        header_row: bool = False,
    ) -> Dict[str, Any]:
        table_manager = TableOperationManager(self.gateway)
        try:
            return await table_manager.create_and_populate_table(
                document_id, index, rows, columns, data, header_row
            )
        finally:
            self.tracker = table_manager.tracker

    async def insert_link(self, document_id: str, index: int, text: str, url: str) -> Dict[str, Any]:
        """Insert text at index and link it to url in a single batch."""
        return await self._edit_at_index(
            "insert_link", document_id, build_link_operations(index, text, url)
        )

    async def format_text(
        self,
        document_id: str,
        start_index: int,
        end_index: int,
        bold: Optional[bool] = None,
        italic: Optional[bool] = None,
        underline: Optional[bool] = None,
        foreground_color: Optional[Tuple[float, float, float]] = None,
    ) -> Dict[str, Any]:
        operations = build_format_text_operations(
            start_index, end_index, bold, italic, underline, foreground_color
        )
        return await self._edit_at_index("format_text", document_id, operations)

    async def insert_image(
        self,
        document_id: str,
        index: int,
        image_uri: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> Dict[str, Any]:
        operations = build_insert_image_operations(index, image_uri, width, height)
        return await self._edit_at_index("insert_image", document_id, operations)

    async def _edit_at_end(self, operation: str, document_id: str, build) -> Dict[str, Any]:
        """Read, resolve the end index, build with it, submit."""
        self.tracker = EditTracker(operation, document_id)
        try:
            self.tracker.transition(EditState.READING)
            snapshot = await self.gateway.get_snapshot(document_id)

            self.tracker.transition(EditState.RESOLVING)
            end_index = document_end_index(snapshot)

            self.tracker.transition(EditState.BUILDING)
            operations = build(end_index)
            await self._submit(document_id, operations)
        except WorkspaceError as e:
            self._fail(e, document_id, operation)
            raise

        self.tracker.transition(EditState.DONE)
        logger.info(
            f"[{operation}] {document_id}: applied {len(operations)} operations "
            f"(document end index was {end_index})"
        )
        return {"operations": len(operations), "previous_end_index": end_index}

    async def _edit_at_index(
        self, operation: str, document_id: str, operations: List[EditOperation]
    ) -> Dict[str, Any]:
        """Submit a batch whose indices were supplied by the caller."""
        self.tracker = EditTracker(operation, document_id)
        try:
            await self._submit(document_id, operations)
        except WorkspaceError as e:
            self._fail(e, document_id, operation)
            raise

        self.tracker.transition(EditState.DONE)
        logger.info(f"[{operation}] {document_id}: applied {len(operations)} operations")
        return {"operations": len(operations)}

    async def _submit(self, document_id: str, operations: List[EditOperation]) -> None:
        if not operations:
            logger.debug(f"Nothing to submit for {document_id}")
            return
        self.tracker.transition(EditState.SUBMITTING)
        await self.gateway.submit_batch(document_id, operations)

    def _fail(self, error: WorkspaceError, document_id: str, phase: str) -> None:
        error.add_context(document_id=document_id, phase=phase)
        self.tracker.fail(str(error))
        logger.error(f"{phase} failed for {document_id}: {error}")

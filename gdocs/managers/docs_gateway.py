"""
Docs Gateway

Thin wrapper around the Google Docs API client: reads document snapshots,
submits ordered batches of edit operations and classifies backend failures
into the workspace error taxonomy.
"""
import asyncio
import logging
import ssl
from typing import Any, Dict, Sequence

import httplib2
from googleapiclient.errors import HttpError

from core.errors import (
    WorkspaceError,
    NotFoundError,
    ValidationError,
    TransientError,
    AuthError,
)
from gdocs.docs_structure import DocumentSnapshot, parse_document_structure
from gdocs.edit_operations import EditOperation, describe_operation, to_api_request

logger = logging.getLogger(__name__)

TRANSIENT_STATUS_CODES = {429, 500, 502, 503, 504}

_NETWORK_ERRORS = (ssl.SSLError, TimeoutError, ConnectionError, httplib2.HttpLib2Error)


def classify_http_error(error: HttpError, document_id: str = None) -> WorkspaceError:
    """Map a Google API HttpError onto the workspace error taxonomy."""
    status = error.resp.status
    detail = f"Google Docs API returned {status}: {error}"

    if status == 400:
        return ValidationError(detail, document_id=document_id)
    if status in (401, 403):
        return AuthError(
            f"{detail}. The stored credentials may be expired, revoked, or lack access "
            "to this document.",
            document_id=document_id,
        )
    if status == 404:
        return NotFoundError(detail, document_id=document_id)
    if status in TRANSIENT_STATUS_CODES:
        return TransientError(detail, document_id=document_id)
    return WorkspaceError(detail, document_id=document_id)


class DocsGateway:
    """
    Snapshot reader and batch submitter for one Google Docs API client.

    Every call is a single blocking API request run in a worker thread.
    No state is kept between calls; snapshots are never cached.
    """

    def __init__(self, service):
        """
        Args:
            service: Google Docs API service instance
        """
        self.service = service

    async def get_snapshot(self, document_id: str) -> DocumentSnapshot:
        """
        Read the current structure of a document.

        Raises:
            NotFoundError: Unknown or inaccessible document
            TransientError: Network or backend failure
        """
        doc_data = await self._execute(
            self.service.documents().get(documentId=document_id).execute,
            document_id,
        )
        snapshot = parse_document_structure(doc_data)
        logger.debug(
            f"Read snapshot of {document_id}: {len(snapshot.content)} top-level elements"
        )
        return snapshot

    async def submit_batch(
        self, document_id: str, operations: Sequence[EditOperation]
    ) -> Dict[str, Any]:
        """
        Submit an ordered batch of edit operations in one batchUpdate call.

        Raises:
            ValidationError: Empty batch, unknown operation, or rejected by the backend
            TransientError: Network or backend failure
        """
        if not operations:
            raise ValidationError("Cannot submit an empty batch", document_id=document_id)

        requests = [to_api_request(operation) for operation in operations]
        logger.debug(
            f"Submitting {len(requests)} operations to {document_id}: "
            + "; ".join(describe_operation(op) for op in operations[:5])
        )
        return await self._execute(
            self.service.documents()
            .batchUpdate(documentId=document_id, body={"requests": requests})
            .execute,
            document_id,
        )

    async def create_document(self, title: str) -> Dict[str, Any]:
        return await self._execute(
            self.service.documents().create(body={"title": title}).execute
        )

    async def _execute(self, call, document_id: str = None) -> Dict[str, Any]:
        try:
            return await asyncio.to_thread(call)
        except HttpError as error:
            raise classify_http_error(error, document_id) from error
        except _NETWORK_ERRORS as error:
            raise TransientError(
                f"Network error talking to Google Docs: {error}", document_id=document_id
            ) from error

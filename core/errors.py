"""
Workspace Error Taxonomy

Exceptions raised by the document backend gateway, the credential provider
and the edit engine. Tool wrappers translate them into structured error
results (see gdocs.errors and core.utils.handle_http_errors).
"""
from typing import Optional


class WorkspaceError(Exception):
    """
    Base class for all workspace operation failures.

    Carries optional diagnostic context (document id and the phase of a
    multi-step operation) that is filled in as the error propagates.
    """

    def __init__(
        self,
        message: str,
        document_id: Optional[str] = None,
        phase: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.document_id = document_id
        self.phase = phase

    def add_context(
        self, document_id: Optional[str] = None, phase: Optional[str] = None
    ) -> "WorkspaceError":
        """Fill in context that is not already set. Returns self for re-raising."""
        if self.document_id is None:
            self.document_id = document_id
        if self.phase is None:
            self.phase = phase
        return self

    def __str__(self) -> str:
        details = []
        if self.document_id:
            details.append(f"document={self.document_id}")
        if self.phase:
            details.append(f"phase={self.phase}")
        if details:
            return f"{self.message} ({', '.join(details)})"
        return self.message


class NotFoundError(WorkspaceError):
    """The document (or a referenced element) is unknown to the backend."""


class StructuralNotFoundError(NotFoundError):
    """
    Structure expected after a successful edit is missing.

    Indicates an engine bug or a concurrent edit by another actor. Fatal
    for the request; never retried silently.
    """


class ValidationError(WorkspaceError):
    """A malformed operation or request parameter. Not retried."""


class TransientError(WorkspaceError):
    """Network or backend hiccup. Safe to retry the whole operation."""


class AuthError(WorkspaceError):
    """No usable stored credential. Fatal until credentials are refreshed."""

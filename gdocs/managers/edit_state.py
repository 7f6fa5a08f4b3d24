"""
Per-request state tracking for document edits.
"""
import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class EditState(str, Enum):
    """Lifecycle of one logical edit request."""
    IDLE = "idle"
    READING = "reading"
    RESOLVING = "resolving"
    BUILDING = "building"
    SUBMITTING = "submitting"
    DONE = "done"
    FAILED = "failed"


class EditTracker:
    """
    Records the state transitions of one request.

    Reading may follow Submitting when an operation has several phases.
    """

    def __init__(self, operation: str, document_id: Optional[str] = None):
        self.operation = operation
        self.document_id = document_id
        self.state = EditState.IDLE
        self.failure_reason: Optional[str] = None
        self.batches_submitted = 0

    def transition(self, state: EditState) -> None:
        logger.debug(
            f"[{self.operation}] {self.document_id}: {self.state.value} -> {state.value}"
        )
        self.state = state
        if state == EditState.SUBMITTING:
            self.batches_submitted += 1

    def fail(self, reason: str) -> None:
        logger.debug(f"[{self.operation}] {self.document_id}: {self.state.value} -> failed ({reason})")
        self.state = EditState.FAILED
        self.failure_reason = reason

"""
Google Docs Operation Managers

This package provides the document editing engine: the gateway to the Docs
API, the single-request edit manager, the multi-phase table manager and
input validation.
"""

from .docs_gateway import DocsGateway
from .document_edit_manager import DocumentEditManager
from .table_operation_manager import TableOperationManager
from .validation_manager import ValidationManager

__all__ = [
    "DocsGateway",
    "DocumentEditManager",
    "TableOperationManager",
    "ValidationManager",
]

"""
Table Operation Manager

Inserts a table, fills its cells and styles it. Google Docs does not return
the structure of a new table from the batch that creates it, so each step
re-reads the document and locates the table again before building index
dependent edits:

1. create_table  - newline at the requested index, then the table after it
2. fill_cells    - re-read, locate the cells, insert data highest index first
3. apply_borders - re-read, border every cell (addressed by row/column)
4. style_header  - re-read, bold + center + gray background on row 0 (optional)

Phases run strictly one after another. Nothing is rolled back: if a later
phase fails the table stays in the document, and the error names the phase.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from core.errors import WorkspaceError
from gdocs.batch_builders import (
    build_table_creation_operations,
    build_cell_fill_operations,
    build_border_operations,
    build_header_operations,
)
from gdocs.docs_structure import Table, locate_table
from gdocs.edit_operations import EditOperation
from gdocs.managers.docs_gateway import DocsGateway
from gdocs.managers.edit_state import EditState, EditTracker

logger = logging.getLogger(__name__)

PHASE_CREATE_TABLE = "create_table"
PHASE_FILL_CELLS = "fill_cells"
PHASE_APPLY_BORDERS = "apply_borders"
PHASE_STYLE_HEADER = "style_header"


class TableOperationManager:
    """
    High-level manager for creating and populating tables.
    """

    def __init__(self, gateway: DocsGateway):
        """
        Args:
            gateway: Gateway used for every read and batch submission
        """
        self.gateway = gateway
        self.tracker: Optional[EditTracker] = None

    async def create_and_populate_table(
        self,
        document_id: str,
        index: int,
        rows: int,
        columns: int,
        data: Sequence[Sequence[str]],
        header_row: bool = False,
    ) -> Dict[str, Any]:
        """
        Create a rows x columns table at index and fill it with data.

        Args:
            document_id: ID of the document to update
            index: Position where the table goes (a newline is inserted there first)
            rows: Number of table rows
            columns: Number of table columns
            data: Row-major cell values; missing or empty values leave cells blank
            header_row: Style row 0 as a header

        Returns:
            Metadata with the final table start index and counts

        Raises:
            StructuralNotFoundError: The created table or a cell could not be located
            WorkspaceError: Any backend failure, annotated with document id and phase
        """
        self.tracker = EditTracker("insert_table", document_id)
        phase = PHASE_CREATE_TABLE
        logger.info(
            f"Inserting {rows}x{columns} table into {document_id} at index {index}"
            f"{' with header row' if header_row else ''}"
        )

        try:
            self.tracker.transition(EditState.BUILDING)
            await self._submit(document_id, build_table_creation_operations(index, rows, columns))
            table_origin = index + 1

            phase = PHASE_FILL_CELLS
            table = await self._read_table(document_id, table_origin)
            self.tracker.transition(EditState.BUILDING)
            fill_operations = build_cell_fill_operations(table, rows, columns, data)
            if fill_operations:
                await self._submit(document_id, fill_operations)
            else:
                logger.debug(f"No cell data for table in {document_id}, skipping fill")

            phase = PHASE_APPLY_BORDERS
            table = await self._read_table(document_id, table_origin)
            self.tracker.transition(EditState.BUILDING)
            await self._submit(document_id, build_border_operations(table))

            if header_row:
                phase = PHASE_STYLE_HEADER
                table = await self._read_table(document_id, table_origin)
                self.tracker.transition(EditState.BUILDING)
                await self._submit(document_id, build_header_operations(table))

        except WorkspaceError as e:
            e.add_context(document_id=document_id, phase=phase)
            self.tracker.fail(str(e))
            logger.error(f"Table insertion into {document_id} failed during {phase}: {e}")
            raise

        self.tracker.transition(EditState.DONE)
        logger.info(
            f"Inserted table at index {table.start_index} in {document_id} "
            f"({len(fill_operations)} cells filled, {self.tracker.batches_submitted} batches)"
        )
        return {
            "table_start_index": table.start_index,
            "rows": table.row_count,
            "columns": table.column_count,
            "cells_filled": len(fill_operations),
            "header_row": header_row,
            "batches_submitted": self.tracker.batches_submitted,
        }

    async def _read_table(self, document_id: str, not_before: int) -> Table:
        self.tracker.transition(EditState.READING)
        snapshot = await self.gateway.get_snapshot(document_id)
        self.tracker.transition(EditState.RESOLVING)
        return locate_table(snapshot, not_before)

    async def _submit(self, document_id: str, operations: List[EditOperation]) -> None:
        if not operations:
            return
        self.tracker.transition(EditState.SUBMITTING)
        await self.gateway.submit_batch(document_id, operations)

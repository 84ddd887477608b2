"""
SheetStore Backend — Table Store Service
==========================================

What:  Reads and saves the grid of one sheet (getTable, saveTable).
How:   Looks up sheet_tables by collection_name. Saving is an upsert that
       replaces rows, columns and every cell; nothing from the previous
       save survives.
Who:   Called by app/routes/tables.py with the collection resolved by
       CollectionService.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import StorageError
from app.models.sheet import SheetTable
from app.schemas.sheet import (
    CellEntry,
    MessageResponse,
    SaveTableRequest,
    TableMetadata,
    TableResponse,
)

logger = logging.getLogger(__name__)


class TableService:

    async def _load_table(
        self, db: AsyncSession, collection: str
    ) -> Optional[SheetTable]:
        result = await db.execute(
            select(SheetTable)
            .where(SheetTable.collection_name == collection)
            .order_by(SheetTable.id)
            .limit(1)
        )
        return result.scalars().first()

    def default_table(self) -> TableResponse:
        """Placeholder grid for a collection that has never been saved."""
        return TableResponse(
            metadata=TableMetadata(
                rows=settings.default_table_rows,
                columns=settings.default_table_columns,
            ),
            data=[],
        )

    async def get_table(self, db: AsyncSession, collection: str) -> TableResponse:
        """
        Return the saved grid for `collection`, or the default placeholder.

        Raises:
            StorageError: the lookup failed (→ 500)
        """
        try:
            table = await self._load_table(db, collection)
        except Exception as e:
            logger.error("Database error fetching table %r: %s", collection, str(e), exc_info=True)
            raise StorageError(
                message="Error fetching table data",
                context={"collection": collection, "error_type": type(e).__name__},
            )

        if table is None:
            logger.debug("No table saved for %s; returning default grid", collection)
            return self.default_table()

        return TableResponse(
            metadata=TableMetadata(rows=table.rows, columns=table.columns),
            data=[CellEntry.model_validate(cell) for cell in table.data or []],
        )

    async def save_table(
        self, db: AsyncSession, collection: str, payload: SaveTableRequest
    ) -> MessageResponse:
        """
        Upsert the grid for `collection`, replacing whatever was stored.

        Raises:
            StorageError: the lookup or write failed (→ 500)
        """
        cells = [cell.model_dump() for cell in payload.data]
        try:
            table = await self._load_table(db, collection)
            if table is None:
                db.add(
                    SheetTable(
                        collection_name=collection,
                        rows=payload.rows,
                        columns=payload.columns,
                        data=cells,
                    )
                )
            else:
                table.rows = payload.rows
                table.columns = payload.columns
                table.data = cells
            await db.flush()
        except Exception as e:
            logger.error("Database error saving table %r: %s", collection, str(e), exc_info=True)
            raise StorageError(
                message="Error saving table data",
                context={"collection": collection, "error_type": type(e).__name__},
            )

        logger.info(
            "Table saved: %s (%dx%d, %d cells)",
            collection, payload.rows, payload.columns, len(cells),
        )
        return MessageResponse(message="Table data saved successfully")


# ── Singleton Instance ────────────────────────────────────────────────────
table_service = TableService()

"""
SheetStore Backend — Sheet Registry Service
=============================================

What:  Business logic for the sheet name registry (addSheet, getSheets,
       deleteSheet).
How:   Operates on the caller's AsyncSession; flushes but never commits.
       get_db_session() commits when the request succeeds and rolls back
       when it raises, so both steps of deleteSheet share one transaction.
Who:   Called by app/routes/sheets.py.

Error Handling Strategy:
    Presence checks raise ValidationError before any storage access.
    Any exception from SQLAlchemy is logged and wrapped in StorageError with
    the operation's generic message. deleteSheet raises NotFoundError after
    the storage work is done, so the registry update is already flushed.
"""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError, StorageError, ValidationError
from app.models.sheet import SheetMetadata, SheetTable
from app.schemas.sheet import SheetActionResponse, SheetListResponse

logger = logging.getLogger(__name__)


class SheetService:
    """
    Registry of sheet names, plus removal of a sheet's saved table.

    The registry is the first sheet_metadata row; it is created on the first
    successful addSheet.
    """

    async def _load_metadata(self, db: AsyncSession) -> Optional[SheetMetadata]:
        result = await db.execute(
            select(SheetMetadata).order_by(SheetMetadata.id).limit(1)
        )
        return result.scalars().first()

    async def add_sheet(
        self, db: AsyncSession, sheet_name: Optional[str]
    ) -> SheetActionResponse:
        """
        Register a new sheet name.

        Returns:
            success=True when the name was added; success=False with
            "Sheet already exists!" when it was already registered (no write).

        Raises:
            ValidationError: sheet_name is missing or empty (→ 400)
            StorageError: the registry could not be read or written (→ 500)
        """
        if not sheet_name:
            raise ValidationError(message="Sheet name is required!", field="sheetName")

        try:
            metadata = await self._load_metadata(db)
            if metadata is None:
                db.add(SheetMetadata(sheet_names=[sheet_name]))
            elif sheet_name in metadata.sheet_names:
                return SheetActionResponse(success=False, message="Sheet already exists!")
            else:
                # Reassign: in-place list mutation is invisible to the JSON column
                metadata.sheet_names = [*metadata.sheet_names, sheet_name]
            await db.flush()
        except Exception as e:
            logger.error("Database error adding sheet %r: %s", sheet_name, str(e), exc_info=True)
            raise StorageError(
                message="Error adding sheet",
                context={"sheet_name": sheet_name, "error_type": type(e).__name__},
            )

        logger.info("Sheet added: %s", sheet_name)
        return SheetActionResponse(success=True, message="Sheet added successfully")

    async def get_sheets(self, db: AsyncSession) -> SheetListResponse:
        """
        List registered sheet names, or [] when nothing was ever added.

        Raises:
            StorageError: the registry could not be read (→ 500)
        """
        try:
            metadata = await self._load_metadata(db)
        except Exception as e:
            logger.error("Database error fetching sheets: %s", str(e), exc_info=True)
            raise StorageError(
                message="Error fetching sheets",
                context={"error_type": type(e).__name__},
            )
        return SheetListResponse(sheets=list(metadata.sheet_names) if metadata else [])

    async def delete_sheet(
        self, db: AsyncSession, sheet_name: Optional[str]
    ) -> SheetActionResponse:
        """
        Remove a sheet: drop its name from the registry, delete its table.

        Steps:
            1. Remove sheet_name from the registry, if a registry exists
            2. Delete the sheet_tables row(s) for sheet_name

        Both steps run in the request's transaction. A storage failure in
        either step rolls back both. Deleting zero table rows is reported as
        NotFoundError, but step 1 is still flushed; the route commits it.

        Raises:
            ValidationError: sheet_name is missing or empty (→ 400)
            NotFoundError: no table record existed for sheet_name (→ 404)
            StorageError: either step failed; raw error exposed (→ 500)
        """
        if not sheet_name:
            raise ValidationError(message="Sheet name is required!", field="sheetName")

        try:
            metadata = await self._load_metadata(db)
            if metadata is not None:
                metadata.sheet_names = [
                    name for name in metadata.sheet_names if name != sheet_name
                ]
                await db.flush()

            result = await db.execute(
                delete(SheetTable).where(SheetTable.collection_name == sheet_name)
            )
            deleted_count = result.rowcount or 0
        except Exception as e:
            logger.error("Database error deleting sheet %r: %s", sheet_name, str(e), exc_info=True)
            raise StorageError(
                message="Internal Server Error",
                context={"sheet_name": sheet_name, "error": str(e)},
                expose=True,
            )

        if deleted_count == 0:
            logger.info("Sheet %s had no table record", sheet_name)
            raise NotFoundError(
                resource="sheet",
                resource_id=sheet_name,
                message="Sheet not found!",
            )

        logger.info("Sheet deleted: %s", sheet_name)
        return SheetActionResponse(
            success=True,
            message=f'Sheet "{sheet_name}" deleted successfully.',
        )


# ── Singleton Instance ────────────────────────────────────────────────────
sheet_service = SheetService()

"""
SheetStore Backend — Table Route Handlers
===========================================

What:  Handles GET /api/getTable and POST /api/saveTable.
How:   The target sheet comes from the request (`?collection=` or the body's
       `collection`), else the caller's active collection, else the default.
       TableService does the lookup/upsert.
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.sheet import (
    ErrorResponse,
    MessageResponse,
    SaveTableRequest,
    TableResponse,
)
from app.services.collection_service import collection_service, get_active_collection
from app.services.table_service import table_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Tables"])


@router.get(
    "/getTable",
    response_model=TableResponse,
    responses={500: {"description": "Storage error", "model": ErrorResponse}},
    summary="Fetch the active collection's grid",
    description=(
        "Returns rows, columns and non-empty cells of the active collection. "
        "A collection that was never saved returns an empty 5 x 5 grid."
    ),
)
async def get_table(
    collection: str = Depends(get_active_collection),
    db: AsyncSession = Depends(get_db_session),
) -> TableResponse:
    return await table_service.get_table(db, collection)


@router.post(
    "/saveTable",
    response_model=MessageResponse,
    responses={500: {"description": "Storage error", "model": ErrorResponse}},
    summary="Save the active collection's grid",
    description="Replaces the stored grid entirely; cells are not merged.",
)
async def save_table(
    request: Request,
    payload: SaveTableRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    collection = collection_service.resolve(request, payload.collection)
    return await table_service.save_table(db, collection, payload)

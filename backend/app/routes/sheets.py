"""
SheetStore Backend — Sheet Registry Route Handlers
====================================================

What:  Handles POST /api/addSheet, GET /api/getSheets, DELETE /api/deleteSheet.
How:   Extracts the sheet name from the JSON body, delegates to SheetService.
       Errors propagate to the global exception handlers in main.py.

Status codes:
    addSheet:    200 (check `success`), 400 missing name, 500 storage error
    getSheets:   200, 500 storage error
    deleteSheet: 200, 400 missing name, 404 no table record, 500 storage error
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import commit_or_raise, get_db_session
from app.exceptions import NotFoundError
from app.schemas.sheet import (
    ErrorResponse,
    SheetActionResponse,
    SheetListResponse,
    SheetNameRequest,
)
from app.services.sheet_service import sheet_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Sheets"])


@router.post(
    "/addSheet",
    response_model=SheetActionResponse,
    responses={
        200: {"description": "Sheet added, or already registered (success=false)"},
        400: {"description": "Sheet name missing", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Register a sheet name",
)
async def add_sheet(
    payload: Optional[SheetNameRequest] = None,
    db: AsyncSession = Depends(get_db_session),
) -> SheetActionResponse:
    sheet_name = payload.sheet_name if payload else None
    return await sheet_service.add_sheet(db, sheet_name)


@router.get(
    "/getSheets",
    response_model=SheetListResponse,
    responses={500: {"description": "Storage error", "model": ErrorResponse}},
    summary="List registered sheet names",
)
async def get_sheets(db: AsyncSession = Depends(get_db_session)) -> SheetListResponse:
    return await sheet_service.get_sheets(db)


@router.delete(
    "/deleteSheet",
    response_model=SheetActionResponse,
    responses={
        400: {"description": "Sheet name missing", "model": ErrorResponse},
        404: {"description": "No table record for the sheet", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Delete a sheet and its table",
    description=(
        "Removes the name from the registry and deletes the sheet's saved table "
        "in one transaction. If no table was saved for the sheet the response is "
        "404, but the name is still removed from the registry."
    ),
)
async def delete_sheet(
    payload: Optional[SheetNameRequest] = None,
    db: AsyncSession = Depends(get_db_session),
) -> SheetActionResponse:
    sheet_name = payload.sheet_name if payload else None
    try:
        result = await sheet_service.delete_sheet(db, sheet_name)
    except NotFoundError:
        # The registry update stands even though there was no table to delete;
        # commit it before the 404 reaches get_db_session's rollback
        await commit_or_raise(db, message="Internal Server Error", expose=True)
        raise
    # Committed here so a failed commit is reported before the response is sent
    await commit_or_raise(db, message="Internal Server Error", expose=True)
    return result

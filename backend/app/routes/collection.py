"""
SheetStore Backend — Active-Collection Route
==============================================

What:  Handles POST /api/setCollection.
How:   Stores the chosen sheet name in the caller's `active_collection`
       cookie via CollectionService. Later getTable/saveTable calls from the
       same client target that sheet; other clients are unaffected.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Response

from app.schemas.sheet import MessageResponse, SetCollectionRequest
from app.services.collection_service import collection_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Collection"])


@router.post(
    "/setCollection",
    response_model=MessageResponse,
    summary="Select the active collection",
    description=(
        "Sets the sheet targeted by this client's getTable and saveTable calls. "
        "No validation: any name is accepted, and the sheet need not exist yet."
    ),
)
async def set_collection(
    response: Response,
    payload: Optional[SetCollectionRequest] = None,
) -> MessageResponse:
    collection = payload.collection if payload else None
    return collection_service.select(response, collection)

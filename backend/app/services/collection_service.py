"""
SheetStore Backend — Active-Collection Selector
=================================================

What:  Decides which sheet table getTable/saveTable operate on.
Why:   A single process-wide "active collection" lets one client's
       setCollection redirect another client's save. The selection is
       therefore carried by each request instead.
How:   Resolution order for every table request:
           1. explicit `collection` on the request (query param / body field)
           2. the caller's `active_collection` cookie, set by setCollection
           3. settings.default_collection ("defaultCollection")
       Cookie values are percent-encoded so any sheet name round-trips.
       Cross-site frontends need COLLECTION_COOKIE_SAMESITE=none (always sent
       Secure) and credentialed requests; clients without cookies pass
       `collection` on every table request.
Who:   Used by the collection and table routes.
"""

import logging
from typing import Optional
from urllib.parse import quote, unquote

from fastapi import Query, Request, Response

from app.config import settings
from app.schemas.sheet import MessageResponse

logger = logging.getLogger(__name__)

COLLECTION_COOKIE = "active_collection"


class CollectionService:
    """Reads and writes the per-client active collection. Holds no state."""

    def __init__(
        self,
        default_collection: Optional[str] = None,
        cookie_samesite: Optional[str] = None,
        cookie_secure: Optional[bool] = None,
    ):
        self._default = default_collection
        self._samesite = cookie_samesite
        self._secure = cookie_secure

    @property
    def default_collection(self) -> str:
        return self._default or settings.default_collection

    def _cookie_attributes(self) -> dict:
        samesite = self._samesite or settings.collection_cookie_samesite
        secure = settings.collection_cookie_secure if self._secure is None else self._secure
        # Browsers drop SameSite=None cookies that are not Secure
        return {"samesite": samesite, "secure": secure or samesite == "none"}

    def resolve(self, request: Request, explicit: Optional[str] = None) -> str:
        """Return the collection this request targets."""
        if explicit:
            return explicit
        stored = request.cookies.get(COLLECTION_COOKIE)
        if stored:
            return unquote(stored)
        return self.default_collection

    def select(self, response: Response, collection: Optional[str]) -> MessageResponse:
        """
        Make `collection` the caller's active collection.

        Never fails. An empty or missing name clears the selection, which
        puts the caller back on the default collection.
        """
        attributes = self._cookie_attributes()
        if collection:
            response.set_cookie(
                COLLECTION_COOKIE,
                quote(collection, safe=""),
                httponly=True,
                **attributes,
            )
            active = collection
        else:
            response.delete_cookie(COLLECTION_COOKIE, httponly=True, **attributes)
            active = self.default_collection

        logger.info("Active collection set to %s", active)
        return MessageResponse(message=f"Active collection set to {active}")


collection_service = CollectionService()


async def get_active_collection(
    request: Request,
    collection: Optional[str] = Query(
        default=None,
        description="Target sheet for this request; overrides the active collection",
    ),
) -> str:
    """FastAPI dependency: the collection targeted by the current request."""
    return collection_service.resolve(request, collection)

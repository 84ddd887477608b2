"""
SheetStore Backend — Active-Collection Selector Tests
=======================================================

What:  Resolution order (explicit > cookie > default) and cookie writing.
"""

from starlette.requests import Request
from starlette.responses import Response

from app.services.collection_service import COLLECTION_COOKIE, CollectionService


def _request(cookie: str = "") -> Request:
    headers = [(b"cookie", cookie.encode())] if cookie else []
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


class TestResolve:

    def setup_method(self):
        self.service = CollectionService()

    def test_default_when_nothing_selected(self):
        assert self.service.resolve(_request()) == "defaultCollection"

    def test_cookie_selection(self):
        request = _request(f"{COLLECTION_COOKIE}=Sheet%201")
        assert self.service.resolve(request) == "Sheet 1"

    def test_explicit_beats_cookie(self):
        request = _request(f"{COLLECTION_COOKIE}=Sheet1")
        assert self.service.resolve(request, "Sheet2") == "Sheet2"

    def test_custom_default(self):
        service = CollectionService(default_collection="main")
        assert service.resolve(_request()) == "main"


class TestSelect:

    def setup_method(self):
        self.service = CollectionService()

    def test_select_sets_encoded_cookie(self):
        response = Response()

        result = self.service.select(response, "Q1 / Q2")

        assert result.message == "Active collection set to Q1 / Q2"
        assert f"{COLLECTION_COOKIE}=Q1%20%2F%20Q2" in response.headers["set-cookie"]

    def test_empty_selection_clears_cookie(self):
        response = Response()

        result = self.service.select(response, None)

        assert result.message == "Active collection set to defaultCollection"
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f"{COLLECTION_COOKIE}=")
        assert "Max-Age=0" in cookie

    def test_cross_site_cookie_forces_secure(self):
        service = CollectionService(cookie_samesite="none", cookie_secure=False)
        response = Response()

        service.select(response, "Sheet1")

        cookie = response.headers["set-cookie"].lower()
        assert "samesite=none" in cookie
        assert "secure" in cookie

    def test_clearing_uses_same_attributes(self):
        service = CollectionService(cookie_samesite="strict", cookie_secure=True)
        response = Response()

        service.select(response, "")

        cookie = response.headers["set-cookie"].lower()
        assert "samesite=strict" in cookie
        assert "secure" in cookie
        assert "max-age=0" in cookie

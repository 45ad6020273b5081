"""
Tests for Backend Services

The HTTP backend is exercised against httpx.MockTransport, so no network
is needed. Retry waits are disabled with retry_wait_multiplier=0.
"""

import asyncio
import json

import httpx
import pytest

from ledger_form.config import BackendSettings
from ledger_form.services.backend import (
    HttpBackend,
    RequestResult,
    RequestStatus,
    StaticBackend,
)


BASE_URL = "http://backend.test"


def make_backend(handler, max_retries: int = 3) -> HttpBackend:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url=BASE_URL,
    )
    settings = BackendSettings(url=BASE_URL, max_retries=max_retries)
    return HttpBackend(settings=settings, client=client, retry_wait_multiplier=0)


class TestRequestResult:
    """Tests for the RequestResult helpers."""

    def test_success(self):
        result = RequestResult.success(["Food"])
        assert result.ok
        assert result.status == RequestStatus.OK
        assert result.value == ["Food"]
        assert result.message is None

    def test_error_and_unreachable_are_not_ok(self):
        assert not RequestResult.error("bad").ok
        assert RequestResult.error("bad").message == "bad"
        assert RequestResult.unreachable("down").status == RequestStatus.UNREACHABLE


class TestBackendSettings:
    """Tests for backend URL normalization."""

    def test_trailing_slash_removed(self):
        assert BackendSettings(url="http://backend.test/api/").url == "http://backend.test/api"

    def test_blank_url_means_offline(self):
        assert BackendSettings(url="   ").url is None

    def test_fallback_categories_list(self):
        settings = BackendSettings(fallback_categories=" Food, ,Rent ,")
        assert settings.fallback_categories_list == ["Food", "Rent"]


class TestHttpBackendCategories:
    """Tests for fetching categories over HTTP."""

    def test_returns_category_list(self):
        """Test a JSON list of strings is returned as-is."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, request.url.path))
            return httpx.Response(200, json=["Groceries", "Rent"])

        result = asyncio.run(make_backend(handler).get_categories())

        assert result.ok
        assert result.value == ["Groceries", "Rent"]
        assert seen == [("GET", "/categories")]

    def test_error_status_is_reported_not_retried(self):
        """Test an HTTP error is an ERROR result after a single attempt."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500, text="boom")

        result = asyncio.run(make_backend(handler).get_categories())

        assert result.status == RequestStatus.ERROR
        assert result.message == "Backend returned 500: boom"
        assert len(calls) == 1

    def test_invalid_json(self):
        """Test a non-JSON body is an ERROR result."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>not json</html>")

        result = asyncio.run(make_backend(handler).get_categories())

        assert result.status == RequestStatus.ERROR
        assert "invalid JSON" in result.message

    @pytest.mark.parametrize("payload", [
        {"categories": ["Food"]},
        ["Food", 3],
        "Food",
    ])
    def test_unexpected_payload(self, payload):
        """Test anything but a list of strings is an ERROR result."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=payload)

        result = asyncio.run(make_backend(handler).get_categories())

        assert result.status == RequestStatus.ERROR

    def test_transport_failure_retried_then_unreachable(self):
        """Test connection errors are retried up to max_retries, then reported."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        result = asyncio.run(make_backend(handler, max_retries=3).get_categories())

        assert result.status == RequestStatus.UNREACHABLE
        assert "connection refused" in result.message
        assert len(calls) == 3

    def test_transport_failure_recovers(self):
        """Test a request succeeding on a later attempt is a success."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) < 2:
                raise httpx.ReadTimeout("timed out", request=request)
            return httpx.Response(200, json=["Food"])

        result = asyncio.run(make_backend(handler).get_categories())

        assert result.ok
        assert result.value == ["Food"]
        assert len(calls) == 2


class TestHttpBackendLogin:
    """Tests for posting login credentials over HTTP."""

    def test_login_posts_credentials(self):
        """Test credentials are sent as a JSON body."""
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.url.path == "/login"
            bodies.append(json.loads(request.content))
            return httpx.Response(204)

        result = asyncio.run(make_backend(handler).post_login("ana", "s3cret"))

        assert result.ok
        assert bodies == [{"username": "ana", "password": "s3cret"}]

    def test_login_rejected_uses_response_text(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, text="Invalid credentials")

        result = asyncio.run(make_backend(handler).post_login("ana", "wrong"))

        assert result.status == RequestStatus.ERROR
        assert result.message == "Invalid credentials"

    def test_login_rejected_without_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403)

        result = asyncio.run(make_backend(handler).post_login("ana", "wrong"))

        assert result.message == "Login failed with status 403"

    def test_login_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("no route to host", request=request)

        result = asyncio.run(make_backend(handler, max_retries=1).post_login("ana", "pw"))

        assert result.status == RequestStatus.UNREACHABLE


class TestHttpBackendConstruction:
    """Tests for HttpBackend construction."""

    def test_requires_url_or_client(self):
        """Test a backend with nowhere to send requests is rejected."""
        with pytest.raises(ValueError):
            HttpBackend(settings=BackendSettings(url=None))


class TestStaticBackend:
    """Tests for the offline backend."""

    def test_serves_given_categories(self):
        backend = StaticBackend(["Food", "Rent"])
        result = asyncio.run(backend.get_categories())
        assert result.ok
        assert result.value == ["Food", "Rent"]

    def test_returns_a_copy(self):
        """Test callers cannot mutate the backend's list."""
        backend = StaticBackend(["Food"])
        asyncio.run(backend.get_categories()).value.append("Rent")
        assert asyncio.run(backend.get_categories()).value == ["Food"]

    def test_login_requires_both_fields(self):
        backend = StaticBackend([])
        assert not asyncio.run(backend.post_login("", "pw")).ok
        assert not asyncio.run(backend.post_login("ana", "")).ok
        assert asyncio.run(backend.post_login("ana", "pw")).ok

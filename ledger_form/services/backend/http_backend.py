"""
HTTP Backend Implementation

Talks to the entries backend over HTTP:

    GET  {url}/categories  -> JSON list of category names
    POST {url}/login       -> JSON body {"username": ..., "password": ...}

DESIGN DECISION: Transport failures (connection refused, timeouts) are
retried with exponential backoff. HTTP error responses are NOT retried:
the backend answered, and its answer is reported to the user as-is.
"""

from typing import Optional

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ledger_form.config import BackendSettings, get_settings
from ledger_form.services.backend.interface import (
    BackendInterface,
    BackendUnreachableError,
    RequestResult,
)


logger = structlog.get_logger(__name__)


class HttpBackend(BackendInterface):
    """
    httpx implementation of the backend interface.

    A client can be injected (tests use httpx.MockTransport); otherwise a
    short-lived AsyncClient is created per request.
    """

    def __init__(
        self,
        settings: Optional[BackendSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
        retry_wait_multiplier: float = 1.0,
    ):
        """
        Initialize the HTTP backend.

        Args:
            settings: Backend settings; loaded from the environment if None
            client: Pre-built AsyncClient with base_url set
            retry_wait_multiplier: Backoff multiplier in seconds (0 disables waiting)
        """
        self._settings = settings or get_settings().backend
        if client is None and self._settings.url is None:
            raise ValueError("BACKEND_URL must be set to use the HTTP backend")
        self._client = client
        self._retry_wait_multiplier = retry_wait_multiplier

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Send one request, retrying transport failures."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._settings.max_retries),
            wait=wait_exponential(multiplier=self._retry_wait_multiplier, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    return await self._request(method, path, **kwargs)
        except httpx.TransportError as e:
            raise BackendUnreachableError(f"Backend unreachable: {e}") from e

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        if self._client is not None:
            return await self._client.request(method, path, **kwargs)
        async with httpx.AsyncClient(
            base_url=self._settings.url,
            timeout=self._settings.timeout_seconds,
        ) as client:
            return await client.request(method, path, **kwargs)

    async def get_categories(self) -> RequestResult:
        """Fetch categories; the payload must be a JSON list of strings."""
        try:
            response = await self._send("GET", "/categories")
        except BackendUnreachableError as e:
            logger.warning("categories_unreachable", error=str(e))
            return RequestResult.unreachable(str(e))

        if response.is_error:
            logger.warning("categories_request_failed", status_code=response.status_code)
            return RequestResult.error(
                f"Backend returned {response.status_code}: {response.text}"
            )

        try:
            payload = response.json()
        except ValueError:
            return RequestResult.error("Backend returned invalid JSON for categories")

        if not isinstance(payload, list) or not all(isinstance(c, str) for c in payload):
            return RequestResult.error("Backend returned an unexpected categories payload")

        logger.info("categories_fetched", count=len(payload))
        return RequestResult.success(payload)

    async def post_login(self, username: str, password: str) -> RequestResult:
        """Authenticate; any 2xx response means success."""
        try:
            response = await self._send(
                "POST",
                "/login",
                json={"username": username, "password": password},
            )
        except BackendUnreachableError as e:
            logger.warning("login_unreachable", error=str(e))
            return RequestResult.unreachable(str(e))

        if response.is_error:
            logger.info("login_rejected", username=username, status_code=response.status_code)
            return RequestResult.error(
                response.text or f"Login failed with status {response.status_code}"
            )

        return RequestResult.success()

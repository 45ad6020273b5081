"""
Static Backend Implementation

Serves a fixed category list and accepts any non-empty credentials.
Used when no backend URL is configured and in tests.
"""

from typing import Optional

from ledger_form.config import get_settings
from ledger_form.services.backend.interface import BackendInterface, RequestResult


class StaticBackend(BackendInterface):
    """Offline backend with a fixed category list."""

    def __init__(self, categories: Optional[list[str]] = None):
        if categories is None:
            categories = get_settings().backend.fallback_categories_list
        self._categories = list(categories)

    async def get_categories(self) -> RequestResult:
        return RequestResult.success(list(self._categories))

    async def post_login(self, username: str, password: str) -> RequestResult:
        if not username or not password:
            return RequestResult.error("Username and password are required")
        return RequestResult.success()

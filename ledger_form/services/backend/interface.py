"""
Abstract Backend Interface

DESIGN DECISION: We define an abstract interface for the entries backend.
This allows us to:
1. Run the form offline with a static backend
2. Use a fake backend in tests
3. Swap the HTTP transport without touching the pages

The interface is intentionally small: just the calls the form makes.

Backend calls never raise for expected failures. They return a
RequestResult that says whether the call succeeded, failed, or could
not reach the backend at all.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class RequestStatus(str, Enum):
    """Outcome of a backend call."""
    OK = "ok"
    ERROR = "error"              # Backend answered with an error
    UNREACHABLE = "unreachable"  # Backend could not be reached


class RequestResult(BaseModel):
    """Result of one backend call."""

    status: RequestStatus
    value: Optional[Any] = None
    message: Optional[str] = Field(
        default=None,
        description="Error text for ERROR/UNREACHABLE results"
    )

    @property
    def ok(self) -> bool:
        return self.status == RequestStatus.OK

    @classmethod
    def success(cls, value: Any = None) -> "RequestResult":
        return cls(status=RequestStatus.OK, value=value)

    @classmethod
    def error(cls, message: str) -> "RequestResult":
        return cls(status=RequestStatus.ERROR, message=message)

    @classmethod
    def unreachable(cls, message: str) -> "RequestResult":
        return cls(status=RequestStatus.UNREACHABLE, message=message)


class BackendInterface(ABC):
    """
    Abstract interface for the entries backend.

    Any backend implementation (HTTP, static, fake) must implement these methods.
    """

    @abstractmethod
    async def get_categories(self) -> RequestResult:
        """
        Fetch the list of entry categories.

        Returns:
            RequestResult whose value is a list[str] on success
        """
        pass

    @abstractmethod
    async def post_login(self, username: str, password: str) -> RequestResult:
        """
        Authenticate a user.

        Args:
            username: Login name
            password: Plain password (only sent, never logged)

        Returns:
            RequestResult with no value on success
        """
        pass


class BackendError(Exception):
    """Base exception for backend errors."""
    pass


class BackendUnreachableError(BackendError):
    """Backend could not be reached (connection refused, timeout, ...)."""
    pass

"""Services package."""

from ledger_form.services.backend import (
    BackendError,
    BackendInterface,
    BackendUnreachableError,
    HttpBackend,
    RequestResult,
    RequestStatus,
    StaticBackend,
)

__all__ = [
    "BackendError",
    "BackendInterface",
    "BackendUnreachableError",
    "HttpBackend",
    "RequestResult",
    "RequestStatus",
    "StaticBackend",
]

"""
Backend Services Package

Provides the abstract backend interface and its implementations.
HTTP is the real transport; the static backend keeps the form usable offline.
"""

from ledger_form.services.backend.interface import (
    BackendError,
    BackendInterface,
    BackendUnreachableError,
    RequestResult,
    RequestStatus,
)
from ledger_form.services.backend.http_backend import HttpBackend
from ledger_form.services.backend.static_backend import StaticBackend

__all__ = [
    # Interface
    "BackendInterface",
    "RequestResult",
    "RequestStatus",
    # Exceptions
    "BackendError",
    "BackendUnreachableError",
    # Implementations
    "HttpBackend",
    "StaticBackend",
]

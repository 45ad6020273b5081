"""
Ledger Form - Source Package

A form-entry UI for recording dated financial entries.

DESIGN PRINCIPLES:
1. The date a user picks is always a real date inside the allowed range
2. Unsatisfiable input degrades to "no value", never to a guess
3. No silent corrections
4. Every user action is logged
5. The backend is swappable
"""

__version__ = "1.0.0"
__author__ = "Ledger Form Team"

# Configures structlog for every module in the package
from ledger_form.audit import logger as _audit_logger  # noqa: E402,F401

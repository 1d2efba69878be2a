"""
Xero API client - validated, rate-limited access to Xero accounting.

Wraps the Xero accounting API (contacts, items, invoices, payments, contact
history notes) behind one façade per resource. Every call validates its
inputs, waits for a slot from a shared pacing limiter, forwards the request
and unwraps exactly one record where one is expected.

Key Features:
- One request per second by default, shared across threads
- Validation errors raised before anything is sent
- Typed query filters with upstream parameter names still accepted
- Bulk archive of seeded contacts with explicit failure policy

Usage:
    from xero_api import XeroClient

    with XeroClient.connect() as xero:
        item = xero.items.create("WIDGET", "Widget", "A widget", 12.3456)

    # Diagnostics
    python -m xero_api test-connection
"""

__version__ = "1.0.0"

from .client import XeroClient
from .config import XeroConfig
from .errors import (
    RequestCancelledError,
    ShapeMismatchError,
    XeroAuthError,
    XeroConnectionError,
    XeroError,
    XeroHTTPError,
    XeroTransportError,
    XeroValidationError,
)
from .precision import is_high_precision
from .query import Query, QueryMap
from .ratelimit import PacingLimiter

__all__ = [
    "XeroClient",
    "XeroConfig",
    "PacingLimiter",
    "Query",
    "QueryMap",
    "is_high_precision",
    "XeroError",
    "XeroValidationError",
    "ShapeMismatchError",
    "RequestCancelledError",
    "XeroAuthError",
    "XeroTransportError",
    "XeroConnectionError",
    "XeroHTTPError",
    "__version__",
]

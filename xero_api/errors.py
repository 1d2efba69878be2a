"""
Exception types raised by the Xero client.

Validation errors are raised before any network activity. Transport errors
wrap whatever requests raised and are passed through the façades unchanged.
"""
from __future__ import annotations
from typing import Optional


class XeroError(Exception):
    """Base class for every error raised by xero_api."""
    pass


class XeroValidationError(XeroError, ValueError):
    """Raised when a required field is blank, zero, malformed or out of order."""
    pass


class ShapeMismatchError(XeroError):
    """Raised when Xero returns zero or several records where exactly one was expected."""

    def __init__(self, resource: str, count: int):
        super().__init__(f"length of {resource} returned did not equal 1 (got {count})")
        self.resource = resource
        self.count = count


class RequestCancelledError(XeroError):
    """Raised when a request is abandoned while waiting on the rate limiter."""
    pass


class XeroAuthError(XeroError):
    """Raised when a session cannot be established."""

    def __init__(self, message: str, body: Optional[str] = None):
        super().__init__(message)
        self.body = body


class XeroTransportError(XeroError):
    pass


class XeroConnectionError(XeroTransportError):
    """Raised when Xero cannot be reached or the request times out."""
    pass


class XeroHTTPError(XeroTransportError):
    """Raised when Xero answers with a non-2xx status."""

    def __init__(self, status: int, message: str, body: Optional[str] = None):
        super().__init__(f"Xero HTTP {status}: {message}")
        self.status = status
        self.body = body

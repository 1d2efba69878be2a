"""
XeroClient: the context every façade call runs in.

Holds the configuration, the auth collaborator and its current session,
the transport and the rate limiter. Nothing here is global, so several
clients (one per tenant, say) can run side by side; pass the same
PacingLimiter to each to pace them together.
"""
from __future__ import annotations
import threading
from typing import Optional
from loguru import logger

from .auth import XeroAuth, XeroSession
from .config import XeroConfig
from .errors import RequestCancelledError
from .facades import ContactFacade, InvoiceFacade, ItemFacade, NoteFacade, PaymentFacade, UserFacade
from .models import User
from .provider import XeroProvider
from .ratelimit import PacingLimiter


class XeroClient:
    """
    Rate-limited client for the Xero accounting API.

    Usage:
        with XeroClient.connect() as xero:
            contact = xero.contacts.create("Acme", "Ada", "Lovelace", "ada@example.com")
            invoices = xero.invoices.list(page=1)
    """

    def __init__(
        self,
        config: Optional[XeroConfig] = None,
        *,
        auth: Optional[XeroAuth] = None,
        provider: Optional[XeroProvider] = None,
        limiter: Optional[PacingLimiter] = None,
        session: Optional[XeroSession] = None,
    ):
        self.config = config or XeroConfig.from_env()
        self.auth = auth or XeroAuth(self.config)
        self.provider = provider or XeroProvider(self.config)
        self.limiter = limiter or PacingLimiter(self.config.rate_limit, self.config.rate_period)
        self._session = session
        self._session_lock = threading.Lock()
        self._cancelled = threading.Event()

        self.contacts = ContactFacade(self)
        self.items = ItemFacade(self)
        self.invoices = InvoiceFacade(self)
        self.payments = PaymentFacade(self)
        self.notes = NoteFacade(self)
        self.users = UserFacade(self)

    @classmethod
    def connect(cls, config: Optional[XeroConfig] = None) -> "XeroClient":
        """Create a client and check the credentials work before returning it."""
        client = cls(config)
        try:
            client.verify()
        except Exception:
            client.close()
            raise
        return client

    @property
    def session(self) -> XeroSession:
        """The current session, started or refreshed on demand."""
        with self._session_lock:
            self._session = self.auth.ensure_valid(self._session)
            return self._session

    def take(self) -> None:
        """
        Wait for a rate limiter slot before a request.

        Raises:
            RequestCancelledError: If the client was cancelled or no slot came up
                within config.acquire_timeout
        """
        if not self.limiter.acquire(cancel=self._cancelled, timeout=self.config.acquire_timeout):
            raise RequestCancelledError("request cancelled while waiting for the rate limiter")

    def cancel(self) -> None:
        """Abort pending and future limiter waits; requests fail with RequestCancelledError."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def verify(self) -> list[User]:
        """List the organisation users as a connection check."""
        users = self.users.list()
        logger.info(f"Connected to Xero, {len(users)} users visible")
        for user in users:
            logger.debug(f"  {user.first_name} {user.last_name} <{user.email_address}> {user.organisation_role}")
        return users

    def close(self):
        """Cancel pending waits and close all connections."""
        self.cancel()
        self.provider.close()
        self.auth.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

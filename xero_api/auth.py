"""
Session handling for the Xero API.

A XeroSession is the opaque handle every transport call needs: a bearer
token, the tenant it is scoped to and when it stops being valid.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import requests
from loguru import logger

from .config import XeroConfig
from .errors import XeroAuthError
from .keys import read_credential_file

# Refresh a little early so a token never expires mid-request
EXPIRY_LEEWAY = timedelta(seconds=60)


@dataclass(frozen=True)
class XeroSession:
    access_token: str
    tenant_id: str = ""
    expires_at: Optional[datetime] = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return self.expires_at - EXPIRY_LEEWAY <= now

    def headers(self) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self.access_token}"}
        if self.tenant_id:
            headers["Xero-tenant-id"] = self.tenant_id
        return headers


class XeroAuth:
    """
    Establishes sessions for a Xero app.

    Supported methods:
    - client_credentials: Xero custom connection, token grant with HTTP basic auth
    - token: a pre-issued bearer token taken from config as is
    """

    def __init__(self, config: Optional[XeroConfig] = None, http: Optional[requests.Session] = None):
        self.config = config or XeroConfig.from_env()
        self.http = http or requests.Session()
        self._client_secret = self.config.client_secret
        if self.config.client_secret_file:
            self._client_secret = read_credential_file(self.config.client_secret_file)
        logger.debug(f"Xero auth method: {self.config.auth_method}")
        logger.debug(f"Xero client id: {self.config.client_id}")
        logger.debug(f"Xero token url: {self.config.token_url}")

    def begin_auth(self) -> XeroSession:
        """Establish a new session using the configured method."""
        method = self.config.auth_method
        if method == "token":
            if not self.config.access_token:
                raise XeroAuthError("XERO_ACCESS_TOKEN is required for token auth")
            return XeroSession(access_token=self.config.access_token, tenant_id=self.config.tenant_id)
        if method == "client_credentials":
            return self._client_credentials_grant()
        raise XeroAuthError(f"Unknown auth method: {method}")

    def ensure_valid(self, session: Optional[XeroSession]) -> XeroSession:
        """Return the session unchanged, or a fresh one if it is missing or expired."""
        if session is None or session.is_expired():
            return self.begin_auth()
        return session

    def _client_credentials_grant(self) -> XeroSession:
        if not self.config.client_id or not self._client_secret:
            raise XeroAuthError("client id and secret are required for client_credentials auth")

        data = {"grant_type": "client_credentials"}
        if self.config.scopes:
            data["scope"] = self.config.scopes

        try:
            r = self.http.post(
                self.config.token_url,
                data=data,
                auth=(self.config.client_id, self._client_secret),
                headers={"Accept": "application/json"},
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            raise XeroAuthError(f"Token request failed: {e}") from e

        if not r.ok:
            raise XeroAuthError(f"Token request failed: {r.status_code} {r.reason}", r.text)

        try:
            payload = r.json()
        except ValueError as e:
            raise XeroAuthError("Token response was not JSON", r.text) from e

        access_token = payload.get("access_token")
        expires_in = payload.get("expires_in")
        if not access_token or not expires_in:
            raise XeroAuthError("Token response missing required fields", r.text)

        expires_at = datetime.now(timezone.utc) + timedelta(seconds=int(expires_in))
        logger.info(f"Xero session established, expires at {expires_at.isoformat()}")
        return XeroSession(
            access_token=access_token,
            tenant_id=self.config.tenant_id,
            expires_at=expires_at,
        )

    def close(self):
        """Close the HTTP session."""
        self.http.close()

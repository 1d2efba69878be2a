"""
HTTP transport for the Xero accounting API.

Mirrors the shape of the Xero SDKs: collection-level create (PUT), update
(POST) and find (GET), plus a raw create for sub-resources such as contact
history. Reads are retried on connection failures; writes never are.
"""
from __future__ import annotations
import json
from typing import Any, Optional
import requests
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential
from loguru import logger

from .auth import XeroSession
from .config import XeroConfig
from .errors import XeroConnectionError, XeroHTTPError

DEFAULT_HEADERS = {
    "Accept": "application/json",
}


def parse_error_message(body: str) -> str:
    """Turn a Xero error body into a readable message."""
    try:
        error_data = json.loads(body)
    except (TypeError, ValueError):
        return body[:200] if body else "no response body"

    if not isinstance(error_data, dict):
        return body[:200]

    # Validation exceptions nest their messages per element
    if error_data.get("Type") == "ValidationException":
        messages = []
        for element in error_data.get("Elements") or []:
            for err in element.get("ValidationErrors") or []:
                messages.append(err.get("Message", "Unknown validation error"))
        if messages:
            return "Validation error: " + "; ".join(messages)

    for key in ("Message", "Detail", "Title"):
        if error_data.get(key):
            return str(error_data[key])
    return body[:200]


class XeroProvider:
    """
    HTTP client for the Xero API.

    Features:
    - Connection pooling via requests.Session
    - Configurable timeouts
    - Retry with exponential backoff for reads
    - Error bodies decoded into XeroHTTPError
    """

    def __init__(self, config: Optional[XeroConfig] = None):
        self.config = config or XeroConfig.from_env()
        self.base_url = self.config.api_url.rstrip("/")
        self.session = requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self.session.headers["User-Agent"] = self.config.user_agent

    def create(
        self,
        session: XeroSession,
        path: str,
        payload: dict[str, Any],
        params: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """Create the records in a collection payload (HTTP PUT)."""
        r = self._send("PUT", session, path, params=params, json_body=payload)
        return self._decode(r)

    def update(
        self,
        session: XeroSession,
        path: str,
        payload: dict[str, Any],
        params: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """Update the records in a collection payload (HTTP POST)."""
        r = self._send("POST", session, path, params=params, json_body=payload)
        return self._decode(r)

    def find(
        self,
        session: XeroSession,
        path: str,
        params: Optional[dict[str, str]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """
        Search a collection (HTTP GET).

        Args:
            session: Authenticated session
            path: Collection path, e.g. "Contacts"
            params: Query parameters (where, order, page, IDs, unitdp, ...)
            headers: Extra headers, e.g. If-Modified-Since

        Raises:
            XeroConnectionError: If Xero stays unreachable after all attempts
            XeroHTTPError: If Xero returns an error status
        """
        retrying = Retrying(
            wait=wait_exponential(multiplier=self.config.retry_delay, max=30),
            stop=stop_after_attempt(max(1, self.config.retry_attempts)),
            retry=retry_if_exception_type(XeroConnectionError),
            reraise=True,
            before_sleep=lambda retry_state: logger.warning(
                f"Retrying Xero GET {path} (attempt {retry_state.attempt_number})..."
            ),
        )
        for attempt in retrying:
            with attempt:
                r = self._send("GET", session, path, params=params, headers=headers)
        return self._decode(r)

    def create_raw(
        self,
        session: XeroSession,
        path: str,
        headers: dict[str, str],
        body: bytes,
    ) -> bytes:
        """PUT a pre-encoded body and return the raw response bytes."""
        r = self._send("PUT", session, path, headers=headers, data=body)
        return r.content

    def _send(
        self,
        method: str,
        session: XeroSession,
        path: str,
        *,
        params: Optional[dict[str, str]] = None,
        headers: Optional[dict[str, str]] = None,
        json_body: Optional[dict[str, Any]] = None,
        data: Optional[bytes] = None,
    ) -> requests.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        request_headers = session.headers()
        if headers:
            request_headers.update(headers)

        logger.debug(f"Xero {method} {path} params={params or {}}")
        try:
            r = self.session.request(
                method,
                url,
                params=params or None,
                headers=request_headers,
                json=json_body,
                data=data,
                timeout=self.config.request_timeout,
            )
        except requests.ConnectionError as e:
            logger.error(f"Failed to connect to Xero at {self.base_url}: {e}")
            raise XeroConnectionError(f"Cannot connect to Xero: {e}") from e
        except requests.Timeout as e:
            logger.error(f"Xero request timed out after {self.config.request_timeout}s")
            raise XeroConnectionError(f"Request timeout: {e}") from e
        except requests.RequestException as e:
            logger.error(f"Xero request failed: {e}")
            raise XeroConnectionError(f"Request failed: {e}") from e

        if not r.ok:
            message = parse_error_message(r.text)
            logger.error(f"Xero {method} {path} returned {r.status_code}: {message}")
            raise XeroHTTPError(r.status_code, message, r.text)
        return r

    def _decode(self, r: requests.Response) -> dict[str, Any]:
        try:
            payload = r.json()
        except ValueError as e:
            raise XeroHTTPError(r.status_code, "response was not JSON", r.text) from e
        if not isinstance(payload, dict):
            raise XeroHTTPError(r.status_code, "unexpected response shape", r.text)
        return payload

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

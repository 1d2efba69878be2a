"""
Configuration management for the Xero client.

Loads settings from environment variables (and a local .env) with sensible
defaults for a Xero custom connection.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

AUTH_METHODS = ("client_credentials", "token")
ARCHIVE_POLICIES = ("fail_fast", "best_effort")

DEFAULT_SCOPES = "accounting.transactions accounting.contacts accounting.settings"


def _optional_float(name: str) -> Optional[float]:
    """Parse an optional float env var; blank or malformed means unset."""
    env_val = os.getenv(name, "").strip()
    if not env_val:
        return None
    try:
        return float(env_val)
    except ValueError:
        return None


@dataclass
class XeroConfig:
    """Configuration settings for the Xero client."""

    # Credentials
    client_id: str = field(default_factory=lambda: os.getenv("XERO_CLIENT_ID", ""))
    client_secret: str = field(default_factory=lambda: os.getenv("XERO_CLIENT_SECRET", ""))
    # Read at startup instead of client_secret when set (e.g. a mounted secret)
    client_secret_file: Optional[str] = field(
        default_factory=lambda: os.getenv("XERO_CLIENT_SECRET_FILE") or None
    )
    auth_method: str = field(
        default_factory=lambda: os.getenv("XERO_AUTH_METHOD", "client_credentials").strip().lower()
    )
    access_token: str = field(default_factory=lambda: os.getenv("XERO_ACCESS_TOKEN", ""))
    tenant_id: str = field(default_factory=lambda: os.getenv("XERO_TENANT_ID", ""))
    scopes: str = field(default_factory=lambda: os.getenv("XERO_SCOPES", DEFAULT_SCOPES))

    # Endpoints
    api_url: str = field(
        default_factory=lambda: os.getenv("XERO_API_URL", "https://api.xero.com/api.xro/2.0")
    )
    token_url: str = field(
        default_factory=lambda: os.getenv("XERO_TOKEN_URL", "https://identity.xero.com/connect/token")
    )
    user_agent: str = field(default_factory=lambda: os.getenv("XERO_USER_AGENT", "xero-api/1.0"))

    # Transport
    request_timeout: int = field(
        default_factory=lambda: int(os.getenv("XERO_REQUEST_TIMEOUT", "30"))
    )
    retry_attempts: int = field(
        default_factory=lambda: int(os.getenv("XERO_RETRY_ATTEMPTS", "3"))
    )
    retry_delay: float = field(
        default_factory=lambda: float(os.getenv("XERO_RETRY_DELAY", "1.0"))
    )

    # Pacing: Xero allows 60 calls a minute per tenant
    rate_limit: int = field(default_factory=lambda: int(os.getenv("XERO_RATE_LIMIT", "1")))
    rate_period: float = field(
        default_factory=lambda: float(os.getenv("XERO_RATE_PERIOD", "1.0"))
    )
    acquire_timeout: Optional[float] = field(
        default_factory=lambda: _optional_float("XERO_ACQUIRE_TIMEOUT")
    )

    # Seeded (demo/test) contacts are recognised by this name prefix
    seed_prefix: str = field(default_factory=lambda: os.getenv("XERO_SEED_PREFIX", "HS "))
    archive_policy: str = field(
        default_factory=lambda: os.getenv("XERO_ARCHIVE_POLICY", "fail_fast").strip().lower()
    )

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("XERO_LOG_FILE"))

    @classmethod
    def from_env(cls) -> "XeroConfig":
        """Create config from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []
        if self.auth_method not in AUTH_METHODS:
            errors.append(f"XERO_AUTH_METHOD must be one of {', '.join(AUTH_METHODS)}")
        if self.auth_method == "client_credentials":
            if not self.client_id:
                errors.append("XERO_CLIENT_ID is required")
            if not self.client_secret and not self.client_secret_file:
                errors.append("XERO_CLIENT_SECRET or XERO_CLIENT_SECRET_FILE is required")
        if self.auth_method == "token" and not self.access_token:
            errors.append("XERO_ACCESS_TOKEN is required")
        if not self.api_url:
            errors.append("XERO_API_URL is required")
        if self.rate_limit <= 0 or self.rate_period <= 0:
            errors.append("XERO_RATE_LIMIT and XERO_RATE_PERIOD must be > 0")
        if self.archive_policy not in ARCHIVE_POLICIES:
            errors.append(f"XERO_ARCHIVE_POLICY must be one of {', '.join(ARCHIVE_POLICIES)}")
        return errors

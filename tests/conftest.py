"""Shared fixtures: a XeroClient wired to mocked transport and limiter."""
import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from xero_api.auth import XeroAuth, XeroSession
from xero_api.client import XeroClient
from xero_api.config import XeroConfig
from xero_api.provider import XeroProvider
from xero_api.ratelimit import PacingLimiter


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (requires Xero credentials)"
    )


def new_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def config():
    return XeroConfig(
        client_id="cid",
        client_secret="secret",
        client_secret_file=None,
        auth_method="client_credentials",
        access_token="",
        tenant_id="tenant-1",
        api_url="https://api.example.test/api.xro/2.0",
        token_url="https://identity.example.test/connect/token",
        request_timeout=5,
        retry_attempts=3,
        retry_delay=0,
        rate_limit=1,
        rate_period=1.0,
        acquire_timeout=None,
        seed_prefix="HS ",
        archive_policy="fail_fast",
    )


@pytest.fixture
def session():
    return XeroSession(
        access_token="token",
        tenant_id="tenant-1",
        expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
    )


@pytest.fixture
def provider():
    return Mock(spec=XeroProvider)


@pytest.fixture
def limiter():
    mock = Mock(spec=PacingLimiter)
    mock.acquire.return_value = True
    return mock


@pytest.fixture
def auth(session):
    mock = Mock(spec=XeroAuth)
    mock.ensure_valid.return_value = session
    return mock


@pytest.fixture
def client(config, auth, provider, limiter):
    return XeroClient(config, auth=auth, provider=provider, limiter=limiter)

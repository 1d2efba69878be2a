"""Tests for session establishment."""
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest
import requests

from xero_api.auth import XeroAuth, XeroSession
from xero_api.errors import XeroAuthError


def _token_response(status=200, payload=None):
    r = Mock()
    r.ok = status < 400
    r.status_code = status
    r.reason = "OK" if r.ok else "Unauthorized"
    r.text = str(payload)
    if payload is None:
        r.json.side_effect = ValueError("not json")
    else:
        r.json.return_value = payload
    return r


@pytest.fixture
def http():
    return Mock(spec=requests.Session)


class TestClientCredentials:

    def test_grant_posts_basic_auth(self, config, http):
        http.post.return_value = _token_response(payload={"access_token": "abc", "expires_in": 1800})
        auth = XeroAuth(config, http=http)

        session = auth.begin_auth()

        assert session.access_token == "abc"
        assert session.tenant_id == "tenant-1"
        assert session.expires_at > datetime.now(timezone.utc) + timedelta(minutes=29)
        args, kwargs = http.post.call_args
        assert args[0] == config.token_url
        assert kwargs["auth"] == ("cid", "secret")
        assert kwargs["data"]["grant_type"] == "client_credentials"

    def test_rejected_credentials(self, config, http):
        http.post.return_value = _token_response(status=401, payload={"error": "invalid_client"})
        with pytest.raises(XeroAuthError, match="401"):
            XeroAuth(config, http=http).begin_auth()

    def test_missing_token_fields(self, config, http):
        http.post.return_value = _token_response(payload={"token_type": "Bearer"})
        with pytest.raises(XeroAuthError, match="missing required fields"):
            XeroAuth(config, http=http).begin_auth()

    def test_non_json_token_response(self, config, http):
        http.post.return_value = _token_response(payload=None)
        with pytest.raises(XeroAuthError, match="not JSON"):
            XeroAuth(config, http=http).begin_auth()

    def test_network_failure(self, config, http):
        http.post.side_effect = requests.ConnectionError("down")
        with pytest.raises(XeroAuthError, match="Token request failed"):
            XeroAuth(config, http=http).begin_auth()

    def test_missing_secret(self, config, http):
        config.client_secret = ""
        with pytest.raises(XeroAuthError):
            XeroAuth(config, http=http).begin_auth()
        http.post.assert_not_called()

    def test_secret_read_from_file(self, config, http, tmp_path):
        secret_file = tmp_path / "client_secret"
        secret_file.write_text("from-file\n")
        config.client_secret = ""
        config.client_secret_file = str(secret_file)
        http.post.return_value = _token_response(payload={"access_token": "abc", "expires_in": 60})

        XeroAuth(config, http=http).begin_auth()

        assert http.post.call_args.kwargs["auth"] == ("cid", "from-file")


class TestTokenMethod:

    def test_static_token(self, config, http):
        config.auth_method = "token"
        config.access_token = "pre-issued"
        session = XeroAuth(config, http=http).begin_auth()
        assert session == XeroSession(access_token="pre-issued", tenant_id="tenant-1")
        http.post.assert_not_called()

    def test_static_token_required(self, config, http):
        config.auth_method = "token"
        with pytest.raises(XeroAuthError, match="XERO_ACCESS_TOKEN"):
            XeroAuth(config, http=http).begin_auth()

    def test_unknown_method(self, config, http):
        config.auth_method = "oauth1"
        with pytest.raises(XeroAuthError, match="Unknown auth method"):
            XeroAuth(config, http=http).begin_auth()


class TestEnsureValid:

    def test_keeps_live_session(self, config, http):
        live = XeroSession("live", expires_at=datetime.now(timezone.utc) + timedelta(hours=1))
        assert XeroAuth(config, http=http).ensure_valid(live) is live
        http.post.assert_not_called()

    def test_renews_expired_session(self, config, http):
        http.post.return_value = _token_response(payload={"access_token": "fresh", "expires_in": 1800})
        stale = XeroSession("stale", expires_at=datetime.now(timezone.utc) - timedelta(minutes=1))
        assert XeroAuth(config, http=http).ensure_valid(stale).access_token == "fresh"

    def test_creates_missing_session(self, config, http):
        http.post.return_value = _token_response(payload={"access_token": "new", "expires_in": 1800})
        assert XeroAuth(config, http=http).ensure_valid(None).access_token == "new"


def test_session_headers():
    assert XeroSession("abc").headers() == {"Authorization": "Bearer abc"}
    assert XeroSession("abc", tenant_id="t").headers() == {
        "Authorization": "Bearer abc",
        "Xero-tenant-id": "t",
    }

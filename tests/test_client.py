import json
from datetime import datetime, timedelta, timezone

import pytest
import responses

from nhostcli.client import Client
from nhostcli.credentials import Credentials, Session
from nhostcli.request import RequestError, RequestValidationError
from nhostcli.retryer import BasicRetryer

BASE = "http://localhost:4000/v1"

SESSION_BODY = {
    "session": {"accessToken": "token", "accessTokenExpiresIn": 900, "refreshToken": "secret"}
}


def _client():
    return Client(BASE, retryer=BasicRetryer(1, 1))


def test_login_success():
    password = "password"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, BASE + "/signin/email-password", json=SESSION_BODY)
        session = _client().login("user@example.com", password)
        body = json.loads(rsps.calls[0].request.body)

    assert session == Session("token", 900, "secret")
    assert body == {"email": "user@example.com", "password": "password"}


def test_login_failure_raises_request_error():
    password = "password"
    error_body = {"status": 401, "error": "invalid-email-password", "message": "bad"}
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, BASE + "/signin/email-password", json=error_body, status=401)
        with pytest.raises(RequestValidationError) as info:
            _client().login("user@example.com", password)

    cause = info.value.__cause__
    assert isinstance(cause, RequestError)
    assert cause.status == 401
    assert cause.error_code == "invalid-email-password"


def test_verify_email_sends_address():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, BASE + "/user/email/send-verification-email", json={})
        result = _client().verify_email("user@example.com")
        body = json.loads(rsps.calls[0].request.body)
    assert result is None
    assert body == {"email": "user@example.com"}


def test_login_pat_success_and_failure():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, BASE + "/signin/pat", json=SESSION_BODY)
        session = _client().login_pat("token")
        body = json.loads(rsps.calls[0].request.body)
    assert session.access_token == "token"
    assert body == {"personalAccessToken": "token"}

    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, BASE + "/signin/pat", body="denied", status=401)
        with pytest.raises(RequestValidationError) as info:
            _client().login_pat("token")
    assert "unexpected status code: 401, message: denied" in str(info.value.__cause__)


def test_create_pat():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.POST,
            BASE + "/pat",
            json={"id": "abc", "personalAccessToken": "token"},
        )
        creds = _client().create_pat("token")
        request = rsps.calls[0].request

    assert creds == Credentials(id="abc", personal_access_token="token")
    assert request.headers["Authorization"] == "Bearer token"
    body = json.loads(request.body)
    assert body["metadata"] == {"application": "nhost-cli"}
    expires = datetime.fromisoformat(body["expiresAt"].replace("Z", "+00:00"))
    delta = expires - datetime.now(timezone.utc)
    assert timedelta(days=89) < delta <= timedelta(days=90)


def test_refresh_token():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, BASE + "/token", json={"accessToken": "token"})
        result = _client().refresh_token("secret")
        body = json.loads(rsps.calls[0].request.body)
    assert result.access_token == "token"
    assert body == {"refreshToken": "secret"}


def test_retries_with_default_retryer():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, BASE + "/token", body="boom", status=500)
        client = Client(BASE, retryer=BasicRetryer(2, 2))
        with pytest.raises(RequestValidationError):
            client.refresh_token("secret")
        attempts = [c.request.headers["X-Request-Attempt"] for c in rsps.calls]
    assert attempts == ["1", "2"]
"""Client for the authentication endpoints of the platform."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import requests

from nhostcli.credentials import Credentials, Session
from nhostcli.request import RequestError, make_json_request
from nhostcli.retryer import BasicRetryer

PAT_DURATION = timedelta(days=90)
RETRYER_MAX_ATTEMPTS = 3
RETRYER_BASE_DELAY = 2


class _UnexpectedStatusError(Exception):
    pass


def _raise_request_error(response: requests.Response) -> None:
    if response.status_code == 200:
        return
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        raise RequestError.from_dict(data)
    raise RequestError(status=response.status_code, message=response.text)


def _raise_unexpected_status(response: requests.Response) -> None:
    if response.status_code != 200:
        raise _UnexpectedStatusError(
            f"unexpected status code: {response.status_code}, message: {response.text}"
        )


@dataclass(frozen=True)
class RefreshTokenResponse:
    access_token: str = ""


class Client:
    """Talks to the auth service at ``auth_url``."""

    def __init__(
        self,
        auth_url: str,
        session: requests.Session | None = None,
        retryer: BasicRetryer | None = None,
    ) -> None:
        self.base_url = auth_url
        self.session = session or requests.Session()
        self.retryer = retryer or BasicRetryer(RETRYER_MAX_ATTEMPTS, RETRYER_BASE_DELAY)

    def _post(self, path: str, body: Any, validator, headers: dict[str, str] | None = None) -> Any:
        return make_json_request(
            self.session,
            self.base_url + path,
            "POST",
            body,
            headers or {},
            validator,
            self.retryer,
        )

    def login(self, email: str, password: str) -> Session:
        data = self._post(
            "/signin/email-password",
            {"email": email, "password": password},
            _raise_request_error,
        )
        return Session.from_dict(data)

    def verify_email(self, email: str) -> None:
        self._post(
            "/user/email/send-verification-email",
            {"email": email},
            _raise_request_error,
        )

    def login_pat(self, pat: str) -> Session:
        data = self._post("/signin/pat", {"personalAccessToken": pat}, _raise_unexpected_status)
        return Session.from_dict(data)

    def create_pat(self, access_token: str) -> Credentials:
        expires_at = datetime.now(timezone.utc) + PAT_DURATION
        data = self._post(
            "/pat",
            {
                "expiresAt": expires_at.isoformat().replace("+00:00", "Z"),
                "metadata": {"application": "nhost-cli"},
            },
            _raise_unexpected_status,
            {"Authorization": "Bearer " + access_token},
        )
        return Credentials.from_dict(data)

    def refresh_token(self, refresh_token: str) -> RefreshTokenResponse:
        data = self._post("/token", {"refreshToken": refresh_token}, _raise_unexpected_status)
        return RefreshTokenResponse(access_token=str((data or {}).get("accessToken", "") or ""))
"""JSON requests with retries and response validation."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any

import requests

from nhostcli.retryer import BasicRetryer

ResponseValidator = Callable[[requests.Response], None]


class RequestError(Exception):
    """Error reported by the auth service in its JSON error body."""

    def __init__(self, status: int = 0, error_code: str = "", message: str = "") -> None:
        super().__init__(status, error_code, message)
        self.status = status
        self.error_code = error_code
        self.message = message

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RequestError:
        return cls(
            status=int(data.get("status", 0) or 0),
            error_code=str(data.get("error", "") or ""),
            message=str(data.get("message", "") or ""),
        )

    def __str__(self) -> str:
        return f"status: {self.status}, error: {self.error_code}, message: {self.message}"


class RequestValidationError(Exception):
    """Raised when a response validator rejects a response."""

    def __str__(self) -> str:
        return f"request validation failed: {self.__cause__}"


def make_json_request(
    session: requests.Session,
    url: str,
    method: str,
    request_body: Any,
    headers: Mapping[str, str] | None = None,
    response_validator: ResponseValidator | None = None,
    retryer: BasicRetryer | None = None,
) -> Any:
    """Send ``request_body`` as JSON and return the decoded JSON response."""
    retryer = retryer or BasicRetryer(1, 1)
    payload = json.dumps(request_body)

    def attempt(number: int) -> Any:
        request_headers = dict(headers or {})
        request_headers["Content-Type"] = "application/json"
        request_headers["X-Request-Attempt"] = str(number)

        with session.request(method, url, data=payload, headers=request_headers) as response:
            if response_validator is not None:
                try:
                    response_validator(response)
                except Exception as exc:
                    raise RequestValidationError() from exc
            return response.json()

    return retryer.retry(attempt)
"""Credentials and sessions returned by the auth service."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Credentials:
    """A personal access token and its identifier."""

    id: str = ""
    personal_access_token: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Credentials:
        data = data or {}
        return cls(
            id=str(data.get("id", "") or ""),
            personal_access_token=str(data.get("personalAccessToken", "") or ""),
        )


@dataclass(frozen=True)
class Session:
    """Tokens of a signed-in session."""

    access_token: str = ""
    access_token_expires_in: int = 0
    refresh_token: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Session:
        inner = (data or {}).get("session") or {}
        return cls(
            access_token=str(inner.get("accessToken", "") or ""),
            access_token_expires_in=int(inner.get("accessTokenExpiresIn", 0) or 0),
            refresh_token=str(inner.get("refreshToken", "") or ""),
        )
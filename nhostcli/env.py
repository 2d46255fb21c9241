"""Reading and writing of secrets files in TOML form."""

from __future__ import annotations

import tomllib
from collections.abc import Iterable
from dataclasses import dataclass

import tomli_w


@dataclass(frozen=True)
class Secret:
    name: str
    value: str


class UnsupportedTypeError(TypeError):
    """Raised when a value other than a collection of secrets is marshalled."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"unsupported type {type(value).__name__}")


def unmarshal(data: bytes | str) -> list[Secret]:
    """Parse a TOML document of string keys and string values into secrets."""
    text = data.decode() if isinstance(data, bytes) else data
    parsed = tomllib.loads(text)
    for name, value in parsed.items():
        if not isinstance(value, str):
            raise ValueError(f"secret {name!r} must be a string, got {type(value).__name__}")
    return [Secret(name, value) for name, value in parsed.items()]


def marshal(secrets: Iterable[Secret]) -> bytes:
    """Render secrets as a TOML document, keys in sorted order."""
    if isinstance(secrets, (str, bytes)) or not isinstance(secrets, Iterable):
        raise UnsupportedTypeError(secrets)
    items = list(secrets)
    if not all(isinstance(item, Secret) for item in items):
        raise UnsupportedTypeError(secrets)
    mapping = {item.name: item.value for item in items}
    return tomli_w.dumps(dict(sorted(mapping.items()))).encode()


def default_secrets() -> list[Secret]:
    """Secrets used by a freshly initialised local project."""
    return [
        Secret("HASURA_GRAPHQL_ADMIN_SECRET", "nhost-admin-secret"),
        Secret(
            "HASURA_GRAPHQL_JWT_SECRET",
            "0f987876650b4a085e64594fae9219e7781b17506bec02489ad061fba8cb22db",
        ),
        Secret("NHOST_WEBHOOK_SECRET", "nhost-webhook-secret"),
        Secret("GRAFANA_ADMIN_PASSWORD", "grafana-admin-password"),
    ]
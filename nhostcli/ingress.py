"""Traefik routing labels and local service URLs."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Rewrite:
    """A path rewrite applied by a traefik middleware."""

    regex: str
    replacement: str


@dataclass(frozen=True)
class Ingress:
    """A traefik router and service for one container port."""

    name: str
    tls: bool
    rule: str
    port: int
    rewrite: Rewrite | None = None

    def labels(self) -> dict[str, str]:
        """Return the container labels that configure this ingress."""
        router = f"traefik.http.routers.{self.name}"
        labels = {
            f"{router}.entrypoints": "web",
            f"{router}.rule": self.rule,
            f"{router}.service": self.name,
            f"{router}.tls": "true" if self.tls else "false",
            f"traefik.http.services.{self.name}.loadbalancer.server.port": str(self.port),
        }
        if self.rewrite is not None:
            middleware = f"traefik.http.middlewares.replace-{self.name}.replacepathregex"
            labels[f"{middleware}.regex"] = self.rewrite.regex
            labels[f"{middleware}.replacement"] = self.rewrite.replacement
            labels[f"{router}.middlewares"] = f"replace-{self.name}"
        return labels


def ingress_labels(ingresses: Iterable[Ingress]) -> dict[str, str]:
    """Merge the labels of several ingresses and enable traefik."""
    labels = {"traefik.enable": "true"}
    for ingress in ingresses:
        labels.update(ingress.labels())
    return labels


def traefik_host_match(name: str) -> str:
    """Rule matching any subdomain host of the local service ``name``."""
    return (
        rf"(HostRegexp(`^.+\.{name}\.local\.nhost\.run$`) || "
        f"Host(`local.{name}.nhost.run`))"
    )


def url(host: str, service: str, port: int, use_tls: bool) -> str:
    """URL of a local service, leaving out the port when it is the default."""
    if use_tls and port == 443:
        return f"https://{host}.{service}.local.nhost.run"
    if not use_tls and port == 80:
        return f"http://{host}.{service}.local.nhost.run"
    scheme = "https" if use_tls else "http"
    return f"{scheme}://{host}.{service}.local.nhost.run:{port}"
"""Auth client, retrying JSON requests, secrets files, Traefik labels, docker compose and release downloads."""

__version__ = "0.1.0"
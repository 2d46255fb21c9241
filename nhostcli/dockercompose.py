"""Driving ``docker compose`` for the local development environment."""

from __future__ import annotations

import dataclasses
import errno
import os
import pty
import subprocess
import sys
from collections.abc import Mapping
from typing import Any

import yaml

_HASURA_ENDPOINT = "http://graphql:8080"


class DockerComposeError(Exception):
    """Raised when docker compose cannot be run or fails."""


class DockerCompose:
    """A compose project described by one file in a working directory."""

    def __init__(
        self,
        working_dir: str,
        filepath: str,
        project_name: str,
        docker: str = "docker",
    ) -> None:
        self.working_dir = working_dir
        self.filepath = filepath
        self.project_name = project_name
        self.docker = docker

    def _base_args(self) -> list[str]:
        return [
            self.docker,
            "compose",
            "--project-directory",
            self.working_dir,
            "-f",
            self.filepath,
            "-p",
            self.project_name,
        ]

    def _run(self, args: list[str], failure: str, quiet: bool = False) -> None:
        output = subprocess.DEVNULL if quiet else None
        try:
            subprocess.run(args, check=True, stdout=output, stderr=output)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise DockerComposeError(f"{failure}: {exc}") from exc

    def _run_in_pty(self, args: list[str]) -> int:
        """Run ``args`` on a pseudo terminal, copying its output to stdout."""
        try:
            master, slave = pty.openpty()
        except OSError as exc:
            raise DockerComposeError(f"failed to start pty: {exc}") from exc
        try:
            process = subprocess.Popen(
                args, stdin=slave, stdout=slave, stderr=slave, close_fds=True
            )
        except OSError as exc:
            os.close(master)
            os.close(slave)
            raise DockerComposeError(f"failed to start pty: {exc}") from exc
        os.close(slave)

        try:
            while True:
                try:
                    chunk = os.read(master, 4096)
                except OSError as exc:
                    # the pty reports EIO once the process on it has exited
                    if exc.errno == errno.EIO:
                        break
                    raise DockerComposeError(f"failed to copy pty output: {exc}") from exc
                if not chunk:
                    break
                sys.stdout.write(chunk.decode(errors="replace"))
                sys.stdout.flush()
        finally:
            os.close(master)
            returncode = process.wait()
        return returncode

    def write_compose_file(self, compose_file: Mapping[str, Any] | Any) -> None:
        """Write the compose description as YAML to the project's file."""
        if dataclasses.is_dataclass(compose_file) and not isinstance(compose_file, type):
            compose_file = dataclasses.asdict(compose_file)
        try:
            document = yaml.safe_dump(dict(compose_file), sort_keys=False)
        except yaml.YAMLError as exc:
            raise DockerComposeError(f"failed to marshal docker-compose file: {exc}") from exc
        try:
            with open(self.filepath, "w", encoding="utf-8") as fh:
                fh.write(document)
        except OSError as exc:
            raise DockerComposeError(f"failed to write docker-compose file: {exc}") from exc

    def start(self) -> None:
        args = self._base_args() + ["up", "-d", "--wait", "--remove-orphans"]
        self._run(args, "failed to start docker compose")

    def stop(self, volumes: bool = False) -> None:
        args = self._base_args() + ["down"]
        if volumes:
            args.append("--volumes")
        self._run(args, "failed to stop docker compose")

    def logs(self, *args: str) -> None:
        self._run(self._base_args() + ["logs", *args], "failed to show logs from docker compose")

    def wrapper(self, *args: str) -> None:
        self._run(self._base_args() + list(args), "failed to run docker compose")

    def _console_args(self, *hasura_args: str) -> list[str]:
        return self._base_args() + ["exec", "console", "hasura-cli", *hasura_args]

    def apply_metadata(self) -> None:
        args = self._console_args(
            "metadata", "apply", "--endpoint", _HASURA_ENDPOINT, "--skip-update-check"
        )
        self._run(args, "failed to run docker compose", quiet=True)

    def reload_metadata(self) -> int:
        return self._run_in_pty(
            self._console_args(
                "metadata", "reload", "--endpoint", _HASURA_ENDPOINT, "--skip-update-check"
            )
        )

    def apply_migrations(self) -> int:
        return self._run_in_pty(
            self._console_args(
                "migrate",
                "apply",
                "--endpoint",
                _HASURA_ENDPOINT,
                "--all-databases",
                "--skip-update-check",
            )
        )

    def apply_seeds(self) -> int:
        return self._run_in_pty(
            self._console_args(
                "seed",
                "apply",
                "--endpoint",
                _HASURA_ENDPOINT,
                "--all-databases",
                "--skip-update-check",
            )
        )
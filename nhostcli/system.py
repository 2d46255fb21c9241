"""Helpers that touch the local system."""

from __future__ import annotations

import os


def add_to_gitignore(line: str, path: str | os.PathLike[str] = ".gitignore") -> None:
    """Append ``line`` to the ignore file unless its text already occurs there."""
    with open(path, "a+", encoding="utf-8") as fh:
        fh.seek(0)
        if line in fh.read():
            return
        fh.write(line)
"""Discovery and download of newer releases of the command-line tool."""

from __future__ import annotations

import io
import re
import shutil
import tarfile
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import IO, Any

import requests

RELEASES_URL = "https://api.github.com/repos/nhost/cli/releases"


class SoftwareError(Exception):
    """Raised when releases cannot be fetched or an asset cannot be extracted."""


def _parse_time(value: Any) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(str(value))


@dataclass(frozen=True)
class Author:
    login: str = ""
    id: int = 0
    node_id: str = ""
    avatar_url: str = ""
    gravatar_id: str = ""
    url: str = ""
    html_url: str = ""
    followers_url: str = ""
    following_url: str = ""
    gists_url: str = ""
    starred_url: str = ""
    subscriptions_url: str = ""
    organizations_url: str = ""
    repos_url: str = ""
    events_url: str = ""
    received_events_url: str = ""
    type: str = ""
    site_admin: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Author:
        data = data or {}
        names = cls.__dataclass_fields__
        return cls(**{key: value for key, value in data.items() if key in names and value is not None})


@dataclass(frozen=True)
class Asset:
    url: str = ""
    id: int = 0
    node_id: str = ""
    name: str = ""
    label: str = ""
    uploader: Author = field(default_factory=Author)
    content_type: str = ""
    state: str = ""
    size: int = 0
    download_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    browser_download_url: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Asset:
        data = dict(data or {})
        simple = {"url", "id", "node_id", "name", "label", "content_type", "state",
                  "size", "download_count", "browser_download_url"}
        values = {k: v for k, v in data.items() if k in simple and v is not None}
        return cls(
            uploader=Author.from_dict(data.get("uploader")),
            created_at=_parse_time(data.get("created_at")),
            updated_at=_parse_time(data.get("updated_at")),
            **values,
        )


@dataclass(frozen=True)
class Release:
    url: str = ""
    assets_url: str = ""
    upload_url: str = ""
    html_url: str = ""
    id: int = 0
    author: Author = field(default_factory=Author)
    node_id: str = ""
    tag_name: str = ""
    target_commitish: str = ""
    name: str = ""
    draft: bool = False
    prerelease: bool = False
    created_at: datetime | None = None
    published_at: datetime | None = None
    assets: list[Asset] = field(default_factory=list)
    tarball_url: str = ""
    zipball_url: str = ""
    body: str = ""
    mentions_count: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Release:
        data = dict(data or {})
        simple = {"url", "assets_url", "upload_url", "html_url", "id", "node_id",
                  "tag_name", "target_commitish", "name", "draft", "prerelease",
                  "tarball_url", "zipball_url", "body", "mentions_count"}
        values = {k: v for k, v in data.items() if k in simple and v is not None}
        return cls(
            author=Author.from_dict(data.get("author")),
            created_at=_parse_time(data.get("created_at")),
            published_at=_parse_time(data.get("published_at")),
            assets=[Asset.from_dict(a) for a in data.get("assets") or []],
            **values,
        )


def _fetch_releases(session: requests.Session, url: str) -> list[Release]:
    try:
        response = session.get(url)
    except requests.RequestException as exc:
        raise SoftwareError(f"failed to fetch releases: {exc}") from exc
    with response:
        if response.status_code != 200:
            raise SoftwareError(
                f"failed to fetch releases with status code ({response.status_code}): "
                f"{response.text}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise SoftwareError(f"failed to unmarshal releases: {exc}") from exc
    if not isinstance(payload, list):
        raise SoftwareError("failed to unmarshal releases: expected a list")
    return [Release.from_dict(item) for item in payload]


def get_releases(session: requests.Session | None = None) -> list[Release]:
    """Fetch the list of published releases."""
    return _fetch_releases(session or requests.Session(), RELEASES_URL)


_SEMVER = re.compile(
    r"^v(0|[1-9]\d*)"
    r"(?:\.(0|[1-9]\d*)"
    r"(?:\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*))*))?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r")?)?$"
)


def _parse_semver(version: str) -> tuple[tuple[int, int, int], list[str]] | None:
    match = _SEMVER.match(version)
    if match is None:
        return None
    major, minor, patch, pre = match.groups()
    core = (int(major), int(minor or 0), int(patch or 0))
    return core, (pre.split(".") if pre else [])


def _compare_prerelease(left: list[str], right: list[str]) -> int:
    if left == right:
        return 0
    if not left:
        return 1
    if not right:
        return -1
    for a, b in zip(left, right):
        if a == b:
            continue
        a_num, b_num = a.isdigit(), b.isdigit()
        if a_num and b_num:
            return -1 if int(a) < int(b) else 1
        if a_num != b_num:
            return -1 if a_num else 1
        return -1 if a < b else 1
    return -1 if len(left) < len(right) else 1


def _semver_compare(v: str, w: str) -> int:
    """Compare two ``v``-prefixed semantic versions; invalid ones sort lowest."""
    pv, pw = _parse_semver(v), _parse_semver(w)
    if pv is None and pw is None:
        return 0
    if pv is None:
        return -1
    if pw is None:
        return 1
    if pv[0] != pw[0]:
        return -1 if pv[0] < pw[0] else 1
    return _compare_prerelease(pv[1], pw[1])


def extract_tar_gz(stream: IO[bytes], dst: IO[bytes]) -> None:
    """Copy the first file of a gzipped tarball into ``dst``."""
    try:
        with tarfile.open(fileobj=stream, mode="r|gz") as archive:
            for member in archive:
                if member.isdir():
                    raise SoftwareError("expected a file inside tarball, found a directory instead")
                if member.isreg():
                    source = archive.extractfile(member)
                    if source is None:
                        raise SoftwareError(f"failed to copy file: {member.name}")
                    shutil.copyfileobj(source, dst)
                    return
                raise SoftwareError(f"unknown type: {ord(member.type):b} in {member.name}")
    except (tarfile.TarError, OSError, EOFError) as exc:
        raise SoftwareError(f"failed to read tarball: {exc}") from exc
    raise SoftwareError("no file found in tarball")


class Manager:
    """Finds releases newer than the running version and downloads them."""

    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session or requests.Session()
        self._cache: list[Release] | None = None

    def get_releases(self, version: str) -> list[Release]:
        """Return non-prerelease releases newer than ``version``, newest first."""
        releases = _fetch_releases(self.session, RELEASES_URL + "?per_page=100")
        newer = [
            release
            for release in releases
            if not release.prerelease and _semver_compare(version, release.tag_name) < 0
        ]
        self._cache = newer
        return newer

    def latest_release(self, version: str) -> Release:
        if self._cache is None:
            self.get_releases(version)
        if not self._cache:
            raise SoftwareError("no newer release found")
        return self._cache[0]

    def download_asset(self, url: str, dst: IO[bytes]) -> None:
        try:
            response = self.session.get(url)
        except requests.RequestException as exc:
            raise SoftwareError(f"failed to download release: {exc}") from exc
        with response:
            content = response.content
        extract_tar_gz(io.BytesIO(content), dst)
from __future__ import annotations

"""File-store backends the generator uploads to and the analyzer downloads from.

Only three capabilities are needed: list a project's files, fetch one file's
bytes, and put a local file into a project. Every failure surfaces as
``RemoteIOError``; there is no retry or partial-success bookkeeping here.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import requests

from .config import StoreConfig
from .errors import RemoteIOError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteFile:
    name: str
    # local path or download URL, depending on the backend
    location: str


class FileStore:
    def list_files(self, project: str) -> List[RemoteFile]:
        raise NotImplementedError

    def download(self, file: RemoteFile) -> bytes:
        raise NotImplementedError

    def upload(self, project: str, local_file: Path) -> RemoteFile:
        raise NotImplementedError


class LocalFileStore(FileStore):
    """Directory-backed store; each project is a subdirectory of ``root``."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _project_dir(self, project: str) -> Path:
        return self.root / project

    def list_files(self, project: str) -> List[RemoteFile]:
        d = self._project_dir(project)
        if not d.is_dir():
            raise RemoteIOError(f"Project directory not found: {d}")
        return [RemoteFile(p.name, str(p)) for p in sorted(d.iterdir()) if p.is_file()]

    def download(self, file: RemoteFile) -> bytes:
        try:
            return Path(file.location).read_bytes()
        except OSError as e:
            raise RemoteIOError(f"Could not read {file.location}: {e}") from e

    def upload(self, project: str, local_file: Path) -> RemoteFile:
        local_file = Path(local_file)
        dest = self._project_dir(project) / local_file.name
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(local_file, dest)
        except OSError as e:
            raise RemoteIOError(f"Could not copy {local_file} to {dest}: {e}") from e
        return RemoteFile(dest.name, str(dest))


class OSFFileStore(FileStore):
    """Open Science Framework storage via the v2 JSON API and the WaterButler file API.

    Listing public projects works anonymously; uploading needs a personal access
    token, which is sent as a bearer header and otherwise left alone.
    """

    def __init__(self, token: Optional[str] = None,
                 api_url: str = "https://api.osf.io/v2",
                 files_url: str = "https://files.osf.io/v1",
                 timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        self.api_url = api_url.rstrip("/")
        self.files_url = files_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

    def _get(self, url: str, **kwargs) -> requests.Response:
        try:
            resp = self.session.get(url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise RemoteIOError(f"GET {url} failed: {e}") from e
        return resp

    def _storage_listing(self, project: str) -> List[dict]:
        url = f"{self.api_url}/nodes/{project}/files/osfstorage/"
        entries: List[dict] = []
        params = {"page[size]": 100}
        while url:
            payload = self._get(url, params=params).json()
            entries.extend(payload.get("data", []))
            url = (payload.get("links") or {}).get("next")
            # the next link already carries the query string
            params = None
        return entries

    def list_files(self, project: str) -> List[RemoteFile]:
        out = []
        for entry in self._storage_listing(project):
            attrs = entry.get("attributes", {})
            if attrs.get("kind") != "file":
                continue
            links = entry.get("links", {})
            out.append(RemoteFile(attrs["name"], links["download"]))
        logger.info("Listed %d files in OSF project %s", len(out), project)
        return out

    def download(self, file: RemoteFile) -> bytes:
        return self._get(file.location).content

    def _put(self, url: str, params: dict, data: bytes) -> requests.Response:
        try:
            return self.session.put(url, params=params, data=data, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise RemoteIOError(f"PUT {url} failed: {e}") from e

    def upload(self, project: str, local_file: Path) -> RemoteFile:
        local_file = Path(local_file)
        try:
            data = local_file.read_bytes()
        except OSError as e:
            raise RemoteIOError(f"Could not read {local_file}: {e}") from e

        url = f"{self.files_url}/resources/{project}/providers/osfstorage/"
        resp = self._put(url, {"kind": "file", "name": local_file.name}, data)
        if resp.status_code == 409:
            # already there: push a new version to the existing file's upload link
            existing = self._find_entry(project, local_file.name)
            if existing is None:
                raise RemoteIOError(f"OSF reported a conflict for {local_file.name} but it is not listed")
            resp = self._put(existing["links"]["upload"], {"kind": "file"}, data)
        try:
            resp.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise RemoteIOError(f"Upload of {local_file.name} failed: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = {}
        links = (body.get("data") or {}).get("links", {})
        logger.info("Uploaded %s to OSF project %s", local_file.name, project)
        return RemoteFile(local_file.name, links.get("download", ""))

    def _find_entry(self, project: str, name: str) -> Optional[dict]:
        for entry in self._storage_listing(project):
            if entry.get("attributes", {}).get("name") == name:
                return entry
        return None


def build_store(cfg: StoreConfig) -> FileStore:
    if cfg.kind == "local":
        return LocalFileStore(cfg.root)
    if cfg.kind == "osf":
        store = OSFFileStore(token=os.environ.get(cfg.token_env),
                             api_url=cfg.api_url, files_url=cfg.files_url, timeout=cfg.timeout)
        store.session.headers.update(cfg.extra_headers)
        return store
    raise ValueError(f"Unknown store kind: {cfg.kind!r}")

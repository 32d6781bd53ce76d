"""Provider reading from a GitHub repository over HTTPS."""

from __future__ import annotations

import json
from typing import Any, Callable, List, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from .. import __version__
from ..logging import get_logger
from .base import SourceError, SourceNotFoundError, normalize_path

_LOGGER = get_logger("sources.github")

Opener = Callable[..., Any]


class GitHubSourceProvider:
    """Fetches raw files and contents-API directory listings."""

    RAW_BASE_URL = "https://raw.githubusercontent.com"
    API_BASE_URL = "https://api.github.com"
    USER_AGENT = f"uidocs/{__version__}"

    def __init__(
        self,
        owner: str = "grafana",
        repo: str = "grafana",
        branch: str = "main",
        *,
        token: Optional[str] = None,
        timeout: float = 10.0,
        opener: Opener | None = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.token = token
        self.timeout = timeout
        self._opener = opener or urlopen

    def fetch_text(self, path: str) -> str:
        relative = quote(normalize_path(path))
        url = f"{self.RAW_BASE_URL}/{self.owner}/{self.repo}/{self.branch}/{relative}"
        return self._get(url, path, accept="text/plain").decode("utf-8", errors="replace")

    def list_directory(self, path: str) -> List[str]:
        relative = quote(normalize_path(path))
        url = (
            f"{self.API_BASE_URL}/repos/{self.owner}/{self.repo}/contents/{relative}"
            f"?ref={quote(self.branch)}"
        )
        raw = self._get(url, path, accept="application/vnd.github+json")
        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise SourceError(f"GitHub returned invalid JSON for {path}") from exc
        if not isinstance(payload, list):
            raise SourceNotFoundError(f"Not a directory: {path}")
        names = [
            str(item["name"])
            for item in payload
            if isinstance(item, dict) and item.get("type") == "dir" and "name" in item
        ]
        return sorted(names)

    def _get(self, url: str, path: str, *, accept: str) -> bytes:
        headers = {"Accept": accept, "User-Agent": self.USER_AGENT}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        request = Request(url, headers=headers, method="GET")
        _LOGGER.debug("GET %s", url)
        try:
            with self._opener(request, timeout=self.timeout) as response:
                return response.read()
        except HTTPError as exc:
            if exc.code == 404:
                raise SourceNotFoundError(f"Not found on GitHub: {path}") from exc
            if exc.code in (403, 429):
                _LOGGER.warning("GitHub rate limit or permission error for %s", path)
            raise SourceError(f"GitHub request failed with status {exc.code}: {exc.reason}") from exc
        except URLError as exc:
            raise SourceError(f"GitHub request failed: {exc.reason}") from exc


__all__ = ["GitHubSourceProvider"]

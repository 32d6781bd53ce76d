"""Provider reading from a local repository checkout."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..logging import get_logger
from .base import SourceError, SourceNotFoundError, normalize_path

_LOGGER = get_logger("sources.local")


class LocalSourceProvider:
    """Reads files relative to ``root``; paths may not escape it."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root).expanduser().resolve()

    def fetch_text(self, path: str) -> str:
        target = self._resolve(path)
        if not target.is_file():
            raise SourceNotFoundError(f"File not found: {path}")
        _LOGGER.debug("Reading %s", target)
        try:
            return target.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise SourceError(f"Failed to read {path}: {exc}") from exc

    def list_directory(self, path: str) -> List[str]:
        target = self._resolve(path)
        if not target.is_dir():
            raise SourceNotFoundError(f"Directory not found: {path}")
        return sorted(entry.name for entry in target.iterdir() if entry.is_dir())

    def _resolve(self, path: str) -> Path:
        relative = normalize_path(path)
        target = (self.root / relative).resolve()
        if target != self.root and self.root not in target.parents:
            raise SourceNotFoundError(f"Path escapes the source root: {path}")
        return target


__all__ = ["LocalSourceProvider"]

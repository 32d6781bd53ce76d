"""Source provider protocol and error types."""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable


class SourceError(RuntimeError):
    """Raised when a source cannot be read for a reason other than absence."""


class SourceNotFoundError(SourceError, FileNotFoundError):
    """Raised when a requested path does not exist in the source."""


@runtime_checkable
class SourceProvider(Protocol):
    """Supplies raw file text and directory listings by repository-relative path."""

    def fetch_text(self, path: str) -> str:
        ...

    def list_directory(self, path: str) -> List[str]:
        """Return the names of the directories directly under ``path``."""
        ...


def normalize_path(path: str) -> str:
    """Strip surrounding slashes and collapse empty segments."""
    return "/".join(part for part in path.strip().split("/") if part and part != ".")


__all__ = ["SourceError", "SourceNotFoundError", "SourceProvider", "normalize_path"]

"""Source providers that supply raw component files."""

from __future__ import annotations

from ..config import UIDocsConfig
from ..logging import get_logger
from .base import SourceError, SourceNotFoundError, SourceProvider, normalize_path
from .cache import CachedSourceProvider, TTLCache
from .github import GitHubSourceProvider
from .local import LocalSourceProvider

_LOGGER = get_logger("sources")


def build_provider(config: UIDocsConfig) -> SourceProvider:
    """Create the provider described by ``config``, wrapped in a cache when enabled."""
    source = config.source
    provider: SourceProvider
    if source.local_path is not None:
        _LOGGER.debug("Using local checkout at %s", source.local_path)
        provider = LocalSourceProvider(source.local_path)
    else:
        _LOGGER.debug("Using GitHub %s/%s@%s", source.owner, source.repo, source.branch)
        provider = GitHubSourceProvider(
            source.owner,
            source.repo,
            source.branch,
            token=source.token,
            timeout=source.request_timeout,
        )
    if not config.cache.enabled:
        return provider
    return CachedSourceProvider(
        provider,
        TTLCache(config.cache.ttl_seconds),
        file_ttl=config.cache.source_ttl_seconds,
    )


__all__ = [
    "CachedSourceProvider",
    "GitHubSourceProvider",
    "LocalSourceProvider",
    "SourceError",
    "SourceNotFoundError",
    "SourceProvider",
    "TTLCache",
    "build_provider",
    "normalize_path",
]

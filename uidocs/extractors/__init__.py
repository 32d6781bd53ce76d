"""Pattern-based metadata extractors for UI component sources."""

from __future__ import annotations

from typing import Callable, Dict

from .components import parse_component_metadata
from .documentation import (
    extract_accessibility_guidelines,
    extract_usage_patterns,
    parse_mdx_content,
    parse_mdx_metadata,
)
from .stories import parse_story_metadata
from .themes import extract_theme_metadata, extract_theme_tokens, filter_tokens_by_category

EXTRACTORS: Dict[str, Callable[[str, str], object]] = {
    "component": parse_component_metadata,
    "stories": parse_story_metadata,
    "docs": parse_mdx_content,
    "theme": lambda _name, text: extract_theme_tokens(text),
}


def run_extractor(kind: str, name: str, text: str) -> object:
    """Dispatch ``text`` to the extractor registered under ``kind``."""
    try:
        extractor = EXTRACTORS[kind]
    except KeyError:
        known = ", ".join(sorted(EXTRACTORS))
        raise ValueError(f"Unknown extractor '{kind}' (expected one of: {known})") from None
    return extractor(name, text)


__all__ = [
    "EXTRACTORS",
    "extract_accessibility_guidelines",
    "extract_theme_metadata",
    "extract_theme_tokens",
    "extract_usage_patterns",
    "filter_tokens_by_category",
    "parse_component_metadata",
    "parse_mdx_content",
    "parse_mdx_metadata",
    "parse_story_metadata",
    "run_extractor",
]

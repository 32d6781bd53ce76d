"""Component library facade: resolves component files, fetches them, extracts metadata."""

from __future__ import annotations

import re
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Set

from .config import SourceConfig, UIDocsConfig
from .extractors.components import parse_component_metadata, parse_imports
from .extractors.documentation import (
    extract_accessibility_guidelines,
    extract_usage_patterns,
    parse_mdx_content,
    parse_mdx_metadata,
)
from .extractors.stories import parse_story_metadata
from .extractors.themes import extract_theme_metadata, extract_theme_tokens, filter_tokens_by_category
from .logging import get_logger
from .models import (
    ComponentMetadata,
    DependencyNode,
    DocumentationSummary,
    MDXContent,
    SearchResult,
    StoryMetadata,
    ThemeMetadata,
    ThemeTokens,
)
from .sources import SourceError, SourceNotFoundError, SourceProvider, build_provider

_LOGGER = get_logger("library")

SOURCE_SUFFIX = ".tsx"
STORY_SUFFIX = ".story.tsx"
DOCS_SUFFIX = ".mdx"
TEST_SUFFIX = ".test.tsx"

_SIBLING_COMPONENT = re.compile(r"^\.\./([A-Z]\w*)")


class ComponentLibrary:
    """Maps component names onto the ``{Name}/{Name}.*`` file layout."""

    def __init__(
        self,
        provider: SourceProvider,
        source: SourceConfig | None = None,
        *,
        max_workers: int = 8,
    ) -> None:
        self.provider = provider
        self.source = source or SourceConfig()
        self.max_workers = max_workers

    @classmethod
    def from_config(cls, config: UIDocsConfig) -> "ComponentLibrary":
        return cls(build_provider(config), config.source)

    # ------------------------------------------------------------------
    # Paths

    def component_path(self, name: str, suffix: str = SOURCE_SUFFIX) -> str:
        base = self.source.components_path.strip("/")
        return f"{base}/{name}/{name}{suffix}"

    def theme_path(self, filename: str) -> str:
        return f"{self.source.themes_path.strip('/')}/{filename}"

    # ------------------------------------------------------------------
    # Components

    def list_components(self) -> List[str]:
        return sorted(self.provider.list_directory(self.source.components_path))

    def get_component_source(self, name: str) -> str:
        return self._fetch(self.component_path(name))

    def get_component_metadata(self, name: str) -> ComponentMetadata:
        metadata = parse_component_metadata(name, self.get_component_source(name))
        metadata.has_stories = self._exists(self.component_path(name, STORY_SUFFIX))
        metadata.has_documentation = self._exists(self.component_path(name, DOCS_SUFFIX))
        metadata.has_tests = self._exists(self.component_path(name, TEST_SUFFIX))
        return metadata

    def get_stories(self, name: str) -> StoryMetadata:
        return parse_story_metadata(name, self._fetch(self.component_path(name, STORY_SUFFIX)))

    def get_documentation(self, name: str) -> MDXContent:
        return parse_mdx_content(name, self._fetch(self.component_path(name, DOCS_SUFFIX)))

    def get_documentation_summary(self, name: str) -> DocumentationSummary:
        text = self._fetch(self.component_path(name, DOCS_SUFFIX))
        return DocumentationSummary(
            metadata=parse_mdx_metadata(name, text),
            usage_patterns=extract_usage_patterns(text),
            accessibility_guidelines=extract_accessibility_guidelines(text),
        )

    def get_tests(self, name: str) -> str:
        return self._fetch(self.component_path(name, TEST_SUFFIX))

    def get_dependencies(self, name: str, *, deep: bool = False) -> DependencyNode:
        """Return external packages and sibling components imported by ``name``.

        With ``deep`` the sibling components are resolved recursively; a
        component is expanded at most once.
        """
        return self._dependency_node(name, self.get_component_source(name), deep, {name})

    def _dependency_node(self, name: str, source: str, deep: bool, visited: Set[str]) -> DependencyNode:
        metadata = parse_component_metadata(name, source)
        components = sibling_components(source)
        node = DependencyNode(name=name, dependencies=metadata.dependencies, components=components)
        if not deep:
            return node
        for component in components:
            if component in visited:
                node.children.append(DependencyNode(name=component))
                continue
            visited.add(component)
            try:
                child_source = self.get_component_source(component)
            except SourceNotFoundError:
                _LOGGER.debug("Skipping unresolved sibling component %s", component)
                continue
            node.children.append(self._dependency_node(component, child_source, deep, visited))
        return node

    def search(self, query: str, *, include_description: bool = False) -> List[SearchResult]:
        """Case-insensitive substring search over component names.

        With ``include_description`` the first line of each component's doc
        comment is searched too, and returned with every result.
        """
        needle = query.strip().lower()
        names = self.list_components()
        if not include_description:
            return [SearchResult(name=name) for name in names if needle in name.lower()]

        metadata = self.fetch_many(names)
        results: List[SearchResult] = []
        for name in names:
            description = metadata[name].description if name in metadata else None
            if needle in name.lower() or (description and needle in description.lower()):
                results.append(SearchResult(name=name, description=description))
        return results

    def fetch_many(self, names: Iterable[str]) -> Dict[str, ComponentMetadata]:
        """Fetch and extract several components concurrently.

        Components that fail to load are logged and left out of the result.
        """
        unique = list(dict.fromkeys(names))
        results: Dict[str, ComponentMetadata] = {}
        if not unique:
            return results
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(unique))) as pool:
            futures = {name: pool.submit(self.get_component_metadata, name) for name in unique}
            for name, future in futures.items():
                try:
                    results[name] = future.result()
                except SourceError as exc:
                    _LOGGER.warning("Failed to load component %s: %s", name, exc)
        return results

    # ------------------------------------------------------------------
    # Theme

    def get_theme_source(self) -> str:
        """Concatenate every configured theme file that exists."""
        texts: List[str] = []
        for filename in self.source.theme_files:
            try:
                texts.append(self._fetch(self.theme_path(filename)))
            except SourceNotFoundError:
                _LOGGER.debug("Theme file %s not found", filename)
        if not texts:
            raise SourceNotFoundError(f"No theme files found under {self.source.themes_path}")
        return "\n".join(texts)

    def get_theme_tokens(self, category: Optional[str] = None) -> ThemeTokens:
        tokens = extract_theme_tokens(self.get_theme_source())
        if category:
            return filter_tokens_by_category(tokens, category)
        return tokens

    def get_theme_metadata(self) -> ThemeMetadata:
        return extract_theme_metadata(self.get_theme_source())

    # ------------------------------------------------------------------
    # Internal helpers

    def _fetch(self, path: str) -> str:
        _LOGGER.debug("Fetching %s", path)
        return self.provider.fetch_text(path)

    def _exists(self, path: str) -> bool:
        try:
            self._fetch(path)
        except SourceNotFoundError:
            return False
        return True


def sibling_components(source: str) -> List[str]:
    """Names of components imported through ``../Name`` relative paths."""
    names: List[str] = []
    for definition in parse_imports(source):
        match = _SIBLING_COMPONENT.match(definition.module)
        if match:
            names.append(match.group(1))
    return list(dict.fromkeys(names))


__all__ = [
    "ComponentLibrary",
    "DOCS_SUFFIX",
    "SOURCE_SUFFIX",
    "STORY_SUFFIX",
    "TEST_SUFFIX",
    "sibling_components",
]

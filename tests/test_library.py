from __future__ import annotations

from typing import Dict, List

import pytest

from tests._fixtures.checkout import CheckoutBuilder
from uidocs.config import SourceConfig
from uidocs.library import ComponentLibrary, sibling_components
from uidocs.models import DependencyNode, SearchResult
from uidocs.sources import SourceError, SourceNotFoundError

BUTTON = """
import React from 'react';
import { css } from '@emotion/css';
import { Icon } from '../Icon/Icon';

/** Triggers an action. */
export const Button = () => <Icon />;
"""

ICON = """
import React from 'react';
import { Button } from '../Button/Button';
import { Tooltip } from '../Tooltip/Tooltip';

/** Renders an SVG glyph. */
export const Icon = () => null;
"""

BUTTON_GROUP = """
/** Lays out buttons side by side. */
export const ButtonGroup = () => null;
"""

BUTTON_STORY = """
export default { title: 'Buttons/Button', component: Button };
export const Basic = () => <Button />;
"""

BUTTON_DOCS = """
# Button

Buttons trigger actions.

## Usage

Use one primary button per view.
"""


@pytest.fixture
def library(checkout: CheckoutBuilder) -> ComponentLibrary:
    checkout.add_component("Button", BUTTON, story=BUTTON_STORY, docs=BUTTON_DOCS)
    checkout.add_component("Icon", ICON, tests="it('renders', () => {});")
    checkout.add_component("ButtonGroup", BUTTON_GROUP)
    return checkout.library()


def test_list_components_returns_directories(library: ComponentLibrary) -> None:
    assert library.list_components() == ["Button", "ButtonGroup", "Icon"]


def test_component_metadata_flags_sibling_files(library: ComponentLibrary) -> None:
    button = library.get_component_metadata("Button")
    icon = library.get_component_metadata("Icon")

    assert (button.has_stories, button.has_documentation, button.has_tests) == (True, True, False)
    assert (icon.has_stories, icon.has_documentation, icon.has_tests) == (False, False, True)
    assert button.description == "Triggers an action."
    assert button.dependencies == ["react", "@emotion/css"]


def test_stories_docs_and_tests(library: ComponentLibrary) -> None:
    assert library.get_stories("Button").meta.title == "Buttons/Button"
    assert library.get_documentation("Button").title == "Button"
    assert library.get_tests("Icon") == "it('renders', () => {});"


def test_documentation_summary(library: ComponentLibrary) -> None:
    summary = library.get_documentation_summary("Button")

    assert summary.metadata.has_usage_guidelines is True
    assert summary.usage_patterns == ["Use one primary button per view"]
    assert summary.accessibility_guidelines == []


def test_missing_files_raise_not_found(library: ComponentLibrary) -> None:
    with pytest.raises(SourceNotFoundError):
        library.get_documentation("Icon")
    with pytest.raises(SourceNotFoundError):
        library.get_component_source("Missing")


def test_shallow_dependencies(library: ComponentLibrary) -> None:
    assert library.get_dependencies("Button") == DependencyNode(
        name="Button", dependencies=["react", "@emotion/css"], components=["Icon"]
    )


def test_deep_dependencies_stop_at_cycles_and_skip_missing(library: ComponentLibrary) -> None:
    node = library.get_dependencies("Button", deep=True)

    assert [child.name for child in node.children] == ["Icon"]
    icon = node.children[0]
    assert icon.components == ["Button", "Tooltip"]
    assert icon.children == [DependencyNode(name="Button")]


def test_search_by_name(library: ComponentLibrary) -> None:
    assert library.search(" BUT ") == [SearchResult(name="Button"), SearchResult(name="ButtonGroup")]
    assert library.search("zzz") == []


def test_search_including_descriptions(library: ComponentLibrary) -> None:
    results = library.search("glyph", include_description=True)

    assert results == [SearchResult(name="Icon", description="Renders an SVG glyph.")]


def test_fetch_many_leaves_out_failures(library: ComponentLibrary) -> None:
    results = library.fetch_many(["Button", "Missing", "Button"])

    assert list(results) == ["Button"]


def test_theme_files_are_concatenated(checkout: CheckoutBuilder) -> None:
    checkout.add_theme("createShape.ts", "radius: { default: '2px' }")
    checkout.add_theme("zIndex.ts", "zIndex: { modal: 1060 }")
    library = checkout.library()

    tokens = library.get_theme_tokens()

    assert tokens.border_radius is not None and tokens.border_radius.default == "2px"
    assert tokens.z_index is not None and tokens.z_index.modal == 1060
    assert library.get_theme_tokens("z").border_radius is None
    assert library.get_theme_metadata().categories == ["borderRadius", "zIndex"]


def test_missing_theme_files_raise_not_found(checkout: CheckoutBuilder) -> None:
    with pytest.raises(SourceNotFoundError):
        checkout.library().get_theme_source()


class DictProvider:
    def __init__(self, files: Dict[str, str], broken: List[str]) -> None:
        self.files = files
        self.broken = broken

    def fetch_text(self, path: str) -> str:
        if path in self.broken:
            raise SourceError(f"boom: {path}")
        if path not in self.files:
            raise SourceNotFoundError(path)
        return self.files[path]

    def list_directory(self, path: str) -> List[str]:
        return ["Zeta", "Alpha"]


def test_library_works_against_any_provider() -> None:
    source = SourceConfig(components_path="ui/")
    provider = DictProvider({"ui/Alpha/Alpha.tsx": "export const Alpha = 1;"}, broken=["ui/Zeta/Zeta.tsx"])
    library = ComponentLibrary(provider, source)

    assert library.component_path("Alpha", ".mdx") == "ui/Alpha/Alpha.mdx"
    assert library.list_components() == ["Alpha", "Zeta"]
    assert list(library.fetch_many(["Alpha", "Zeta"])) == ["Alpha"]
    with pytest.raises(SourceError):
        library.get_component_metadata("Zeta")


def test_sibling_components_only_follow_parent_relative_imports() -> None:
    source = "import { A } from '../Alpha/Alpha';\nimport b from './beta';\nimport { C } from '../../Gamma';"

    assert sibling_components(source) == ["Alpha"]

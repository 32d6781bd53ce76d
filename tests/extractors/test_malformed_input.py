from __future__ import annotations

from typing import Callable

import pytest

from uidocs.extractors.components import parse_component_metadata
from uidocs.extractors.documentation import parse_mdx_content, parse_mdx_metadata
from uidocs.extractors.stories import parse_story_metadata
from uidocs.extractors.themes import extract_theme_metadata, extract_theme_tokens
from uidocs.models import (
    ComponentMetadata,
    MDXContent,
    MDXMetadata,
    StoryMetadata,
    ThemeMetadata,
    ThemeTokens,
)

MALFORMED = [
    "export interface ButtonProps {\n  label: string;\n  onClick: () => {",
    "/** never closed\nexport const Button = () => null;",
    "import { Button from '@grafana/ui\nconst x = \"unterminated",
    "---\n",
    "---\ntitle: Button\n# Heading without closing fence\n```tsx\n<Button>",
    "export default { title: 'Button', component: Button, argTypes: { size: { control: ",
    "export const Basic: StoryFn = () => <Button>;\nBasic.args = { label: ",
    "spacing: { gridSize: ² }\nzIndex: { modal: ³ }\nbreakpoints: { xs: ¹ }",
    "fontWeight: { bold: 'heavy' }\nlineHeight: { md: 1.2.3 }\nradius: {",
    "}}}{{{ :::: '\"` <<< >>> ``` ---",
]

ENTRY_POINTS: list[tuple[Callable[[str], object], type]] = [
    (lambda text: parse_component_metadata("Button", text), ComponentMetadata),
    (lambda text: parse_story_metadata("Button", text), StoryMetadata),
    (lambda text: parse_mdx_content("Button", text), MDXContent),
    (lambda text: parse_mdx_metadata("Button", text), MDXMetadata),
    (extract_theme_tokens, ThemeTokens),
    (extract_theme_metadata, ThemeMetadata),
]


@pytest.mark.parametrize("text", MALFORMED)
@pytest.mark.parametrize(
    ("extract", "record_type"),
    ENTRY_POINTS,
    ids=[
        "component",
        "stories",
        "mdx_content",
        "mdx_metadata",
        "theme_tokens",
        "theme_metadata",
    ],
)
def test_extractors_return_records_for_malformed_text(
    extract: Callable[[str], object], record_type: type, text: str
) -> None:
    assert isinstance(extract(text), record_type)

from __future__ import annotations

import textwrap

from uidocs.extractors.documentation import (
    extract_accessibility_guidelines,
    extract_component_references,
    extract_examples,
    extract_frontmatter,
    extract_imports,
    extract_sections,
    extract_title,
    extract_usage_patterns,
    parse_mdx_content,
    parse_mdx_metadata,
)
from uidocs.extractors.values import split_lines
from uidocs.models import MDXContent, MDXMetadata

BUTTON_DOCS = textwrap.dedent(
    """
    import { Meta } from '@storybook/blocks';
    import { Button } from './Button';

    # Button

    Buttons trigger actions.

    ## Usage

    Use a primary button for the main action. Avoid more than one per view! Keep labels short. Extra sentence.

    <ExampleFrame>
      <Button>Save</Button>
    </ExampleFrame>

    ```tsx
    <Button variant="primary">Save</Button>
    ```

    ## Accessibility

    Buttons are reachable by keyboard. Use aria-label for icon-only buttons.
    """
).lstrip("\n")


def test_frontmatter_and_single_section() -> None:
    text = "---\ntitle: Foo\n---\n# Foo\nBody text."

    content = parse_mdx_content("Ignored", text)

    assert content.title == "Foo"
    assert content.metadata == {"title": "Foo"}
    assert len(content.sections) == 1
    section = content.sections[0]
    assert (section.title, section.level, section.content) == ("Foo", 1, "Body text.")
    assert (section.start_line, section.end_line) == (3, 4)


def test_frontmatter_strips_quotes_and_splits_on_first_colon() -> None:
    text = "---\ntitle: \"Button\"\nurl: https://example.com\n---\n"

    assert extract_frontmatter(text) == {"title": "Button", "url": "https://example.com"}
    assert extract_frontmatter("# No front matter") == {}


def test_sections_tile_the_document_after_first_heading() -> None:
    sections = extract_sections(BUTTON_DOCS)
    lines = split_lines(BUTTON_DOCS)

    assert [(section.title, section.level) for section in sections] == [
        ("Button", 1),
        ("Usage", 2),
        ("Accessibility", 2),
    ]
    assert lines[sections[0].start_line] == "# Button"
    for previous, current in zip(sections, sections[1:]):
        assert current.start_line == previous.end_line + 1
    assert sections[-1].end_line == len(lines) - 1


def test_examples_are_mined_in_three_passes() -> None:
    examples = extract_examples(BUTTON_DOCS)

    assert [example.kind for example in examples] == ["example-frame", "code", "component", "component"]
    assert examples[0].code == "<Button>Save</Button>"
    assert examples[1].language == "tsx"
    assert examples[1].code == '<Button variant="primary">Save</Button>'
    assert examples[2].code.startswith("<ExampleFrame>")
    assert examples[2].description == "ExampleFrame usage example"
    assert examples[3].code == '<Button variant="primary">Save</Button>'


def test_code_fence_language_defaults_to_text() -> None:
    examples = extract_examples("```\nplain\n```")

    assert len(examples) == 1
    assert (examples[0].language, examples[0].code) == ("text", "plain")


def test_nested_elements_with_same_tag_are_balanced() -> None:
    examples = extract_examples("<Stack><Stack>inner</Stack> <Icon /></Stack> trailing")

    assert [example.code for example in examples] == ["<Stack><Stack>inner</Stack> <Icon /></Stack>"]


def test_self_closing_and_lowercase_elements_are_not_examples() -> None:
    assert extract_examples('<Meta title="X" />\n<div>plain</div>') == []


def test_title_falls_back_to_meta_then_name() -> None:
    assert extract_title('<Meta title="MDX/Button" />\nText') == "MDX/Button"
    assert extract_title("no headings") is None
    assert parse_mdx_content("Button", "no headings").title == "Button"


def test_imports_and_component_references() -> None:
    assert extract_imports(BUTTON_DOCS) == ["@storybook/blocks", "./Button"]
    assert extract_component_references(BUTTON_DOCS) == ["ExampleFrame", "Button"]


def test_parse_mdx_metadata_flags() -> None:
    metadata = parse_mdx_metadata("Button", BUTTON_DOCS)

    assert metadata == MDXMetadata(
        component_name="Button",
        title="Button",
        description="Buttons trigger actions.",
        sections=3,
        examples=4,
        has_props=False,
        has_usage_guidelines=True,
        has_accessibility_info=True,
    )


def test_props_section_detected_by_arg_types_block() -> None:
    metadata = parse_mdx_metadata("Button", "# Button\n\n## Reference\n\n<ArgTypes of={Button} />\n")

    assert metadata.has_props is True


def test_usage_patterns_take_first_three_sentences() -> None:
    assert extract_usage_patterns(BUTTON_DOCS) == [
        "Use a primary button for the main action",
        "Avoid more than one per view",
        "Keep labels short",
    ]


def test_accessibility_guidelines_include_mentions() -> None:
    assert extract_accessibility_guidelines(BUTTON_DOCS) == [
        "Buttons are reachable by keyboard",
        "Use aria-label for icon-only buttons",
        "Includes accessibility features: keyboard, aria-label",
    ]


def test_empty_document() -> None:
    assert parse_mdx_content("Button", "") == MDXContent(title="Button", content="")
    assert extract_usage_patterns("") == []
    assert extract_accessibility_guidelines("") == []

from __future__ import annotations

import json
from pathlib import Path

import pytest

from uidocs.models import (
    BorderRadiusTokens,
    ComponentMetadata,
    DependencyNode,
    ExportDefinition,
    PropDefinition,
    StoryDefinition,
    ThemeTokens,
)
from uidocs.presenter import Presenter, camel_case, to_json, to_payload


def _button() -> ComponentMetadata:
    return ComponentMetadata(
        name="Button",
        description="A clickable button.",
        props=[
            PropDefinition(name="size", type="'sm' | 'md'", required=False, default_value="'md'"),
            PropDefinition(name="label", type="string", required=True, description="Visible text"),
        ],
        exports=[ExportDefinition(name="Button", kind="component", is_default=True)],
        dependencies=["react"],
        has_stories=True,
    )


def test_camel_case() -> None:
    assert camel_case("has_accessibility_info") == "hasAccessibilityInfo"
    assert camel_case("z1") == "z1"


def test_to_payload_uses_camel_case_and_drops_none() -> None:
    payload = to_payload(_button())

    assert payload["hasStories"] is True
    assert payload["props"][0] == {"name": "size", "type": "'sm' | 'md'", "required": False, "defaultValue": "'md'"}
    assert "description" not in payload["props"][0]
    assert payload["exports"] == [{"name": "Button", "kind": "component", "isDefault": True}]


def test_to_payload_keeps_mapping_keys() -> None:
    story = StoryDefinition(name="Basic", source="...", args={"is_open": True, "max_width": 3})

    assert to_payload(story)["args"] == {"is_open": True, "max_width": 3}


def test_to_json_is_indented() -> None:
    text = to_json(ThemeTokens(border_radius=BorderRadiusTokens(default="2px")))

    assert json.loads(text) == {"borderRadius": {"default": "2px"}}
    assert "\n  " in text


def test_render_markdown_for_component() -> None:
    markdown = Presenter().render_markdown(_button())

    assert markdown.startswith("# Button\n")
    assert "A clickable button." in markdown
    assert "| `size` | `'sm' \\| 'md'` | no | 'md' |  |" in markdown
    assert "- `Button` (component, default)" in markdown
    assert markdown.endswith("\n")


def test_render_markdown_falls_back_to_json_block() -> None:
    markdown = Presenter().render_markdown(ThemeTokens(border_radius=BorderRadiusTokens(pill="9999px")))

    assert markdown.startswith("# ThemeTokens\n")
    assert "```json" in markdown
    assert '"pill": "9999px"' in markdown


def test_render_markdown_nests_dependency_children() -> None:
    node = DependencyNode(
        name="Button",
        dependencies=["react"],
        components=["Icon"],
        children=[DependencyNode(name="Icon", dependencies=["lodash"])],
    )

    markdown = Presenter().render_markdown(node)

    assert "Button" in markdown
    assert "Icon" in markdown
    assert "lodash" in markdown


def test_custom_templates_override_defaults(tmp_path: Path) -> None:
    (tmp_path / "component_metadata.md.j2").write_text("custom {{ record.name }}", encoding="utf-8")

    presenter = Presenter(tmp_path)

    assert presenter.render_markdown(_button()) == "custom Button\n"
    assert "```json" in presenter.render_markdown(ThemeTokens())


def test_render_dispatches_on_format() -> None:
    presenter = Presenter()

    assert json.loads(presenter.render(_button(), "json"))["name"] == "Button"
    assert presenter.render(_button(), "markdown").startswith("# Button")
    with pytest.raises(ValueError):
        presenter.render(_button(), "yaml")

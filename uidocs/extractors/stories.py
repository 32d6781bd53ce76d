"""Storybook story-file extractor."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from ..models import ObjectMapping, StoryDefinition, StorybookMeta, StoryMetadata
from .values import capture_after, capture_block, find_closing, first_comment_line, parse_object_literal, split_top_level

_TYPED_STORY = re.compile(
    r"export\s+const\s+(\w+)\s*:\s*(?:StoryFn|StoryObj|ComponentStory|Story)\b[^=]*=\s*([^;]+);?"
)
_PLAIN_STORY = re.compile(r"export\s+const\s+(\w+)\s*=\s*\(\s*\)\s*=>\s*")
_ARGS_ASSIGNMENT = re.compile(r"\b(\w+)\.args\s*=\s*")
_DEFAULT_EXPORT_OBJECT = re.compile(r"export\s+default\s*")
_DEFAULT_EXPORT_NAME = re.compile(r"export\s+default\s+(\w+)\s*;")
_TITLE = re.compile(r"\btitle:\s*['\"`]([^'\"`]+)['\"`]")
_COMPONENT = re.compile(r"\bcomponent:\s*(\w+)")
_RETURN_PAREN = re.compile(r"\breturn\s*\(")
_CONTROL_ENTRY = re.compile(r"\b(\w+)\s*:\s*(?=\{)")

INTERACTIVE_MARKERS: Tuple[str, ...] = (
    "action(",
    "userEvent",
    "fireEvent",
    "args.",
    "argTypes",
    "controls:",
)


def parse_story_metadata(component_name: str, story_code: str) -> StoryMetadata:
    """Extract stories and the default-export meta from a story file."""
    meta = extract_storybook_meta(story_code, component_name)
    meta.stories = extract_stories(story_code)
    return StoryMetadata(
        component_name=component_name,
        meta=meta,
        total_stories=len(meta.stories),
        has_interactive_stories=any(story.args for story in meta.stories),
        has_examples=bool(meta.stories),
    )


def extract_storybook_meta(story_code: str, component_name: str) -> StorybookMeta:
    meta = StorybookMeta(title="", component=component_name)
    content = _default_export_body(story_code)
    if content is None:
        return meta

    title = _TITLE.search(content)
    if title:
        meta.title = title.group(1)
    component = _COMPONENT.search(content)
    if component:
        meta.component = component.group(1)

    arg_types = capture_after(content, r"\bargTypes\s*:")
    if arg_types is not None:
        meta.arg_types = parse_object_literal(arg_types)
    parameters = capture_after(content, r"\bparameters\s*:")
    if parameters is not None:
        meta.parameters = parse_object_literal(parameters)
    decorators = extract_decorators(content)
    if decorators:
        meta.decorators = decorators
    return meta


def _default_export_body(story_code: str) -> Optional[str]:
    """Body of ``export default {...}`` or of the object a named default export points at."""
    body = capture_after(story_code, _DEFAULT_EXPORT_OBJECT)
    if body is not None:
        return body
    named = _DEFAULT_EXPORT_NAME.search(story_code)
    if named is None:
        return None
    declaration = re.compile(rf"(?:const|let|var)\s+{re.escape(named.group(1))}\b[^=]*=")
    return capture_after(story_code, declaration)


def extract_stories(story_code: str) -> List[StoryDefinition]:
    """Collect typed and plain story exports in source order.

    A plain match is dropped when a typed story with the same name exists.
    """
    found: List[Tuple[int, StoryDefinition]] = []
    typed_names = set()

    for match in _TYPED_STORY.finditer(story_code):
        name, expression = match.group(1), match.group(2)
        story = StoryDefinition(
            name=name,
            source=match.group(0),
            description=extract_story_description(story_code, name),
        )
        args_block = capture_after(expression, r"\bargs\s*:")
        if args_block is None:
            brace = expression.find("{")
            args_block = capture_block(expression, brace) if brace != -1 else None
        if args_block is not None:
            story.args = parse_object_literal(args_block)
        found.append((match.start(), story))
        typed_names.add(name)

    for match in _PLAIN_STORY.finditer(story_code):
        name = match.group(1)
        if name in typed_names:
            continue
        end = _expression_end(story_code, match.end())
        found.append(
            (
                match.start(),
                StoryDefinition(
                    name=name,
                    source=story_code[match.start() : end],
                    description=extract_story_description(story_code, name),
                ),
            )
        )

    found.sort(key=lambda item: item[0])
    stories = [story for _, story in found]
    _merge_assigned_args(story_code, stories)
    return stories


def _expression_end(text: str, start: int) -> int:
    """End offset of the arrow-function body starting at ``start``."""
    if start < len(text) and text[start] in "{(":
        closing = find_closing(text, start, text[start], "}" if text[start] == "{" else ")")
        if closing != -1:
            end = closing + 1
            return end + 1 if text[end : end + 1] == ";" else end
    for index in range(start, len(text)):
        if text[index] == ";":
            return index + 1
        if text[index] == "\n":
            return index
    return len(text)


def _merge_assigned_args(story_code: str, stories: List[StoryDefinition]) -> None:
    """Fold ``Story.args = {...}`` assignments into the matching stories."""
    by_name: Dict[str, StoryDefinition] = {story.name: story for story in stories}
    for match in _ARGS_ASSIGNMENT.finditer(story_code):
        story = by_name.get(match.group(1))
        if story is None:
            continue
        index = match.end()
        block = capture_block(story_code, index) if story_code[index : index + 1] == "{" else None
        if block is None:
            continue
        merged: ObjectMapping = dict(story.args or {})
        merged.update(parse_object_literal(block))
        story.args = merged


def extract_story_description(story_code: str, story_name: str) -> Optional[str]:
    pattern = re.compile(
        rf"/\*\*((?:[^*]|\*(?!/))*)\*/\s*export\s+const\s+{re.escape(story_name)}\b"
    )
    match = pattern.search(story_code)
    if match is None:
        return None
    return first_comment_line(match.group(1))


def extract_story_examples(story_code: str) -> List[str]:
    """Return the body of every ``return ( ... )`` block."""
    examples: List[str] = []
    for match in _RETURN_PAREN.finditer(story_code):
        body = capture_block(story_code, match.end() - 1, "(", ")")
        if body is not None and body.strip():
            examples.append(body.strip())
    return examples


def extract_story_controls(story_code: str) -> Dict[str, ObjectMapping]:
    """Map each ``argTypes`` entry to its mined control configuration."""
    controls: Dict[str, ObjectMapping] = {}
    block = capture_after(story_code, r"\bargTypes\s*:")
    if block is None:
        return controls

    position = 0
    while True:
        match = _CONTROL_ENTRY.search(block, position)
        if match is None:
            break
        config = capture_block(block, match.end())
        if config is None:
            break
        controls[match.group(1)] = parse_object_literal(config)
        position = match.end() + len(config) + 2
    return controls


def has_interactive_features(story_code: str) -> bool:
    return any(marker in story_code for marker in INTERACTIVE_MARKERS)


def extract_decorators(story_code: str) -> List[str]:
    """Return the raw entries of the first ``decorators: [...]`` array."""
    block = capture_after(story_code, r"\bdecorators\s*:", "[", "]")
    if block is None:
        return []
    return split_top_level(block, ",")


__all__ = [
    "INTERACTIVE_MARKERS",
    "extract_decorators",
    "extract_stories",
    "extract_story_controls",
    "extract_story_description",
    "extract_story_examples",
    "extract_storybook_meta",
    "has_interactive_features",
    "parse_story_metadata",
]

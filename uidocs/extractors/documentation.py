"""MDX documentation extractor.

Turns long-form component documentation into front-matter metadata, a flat
list of heading-delimited sections and the runnable examples embedded in the
text. Examples are mined three ways:

* ``<ExampleFrame>...</ExampleFrame>`` blocks become ``example-frame`` examples,
* fenced code blocks become ``code`` examples (language defaults to ``text``),
* balanced elements whose tag starts with an uppercase letter become
  ``component`` examples.

The same miner runs over the whole document and over each section body.
"""

from __future__ import annotations

import re
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..models import CodeExample, MDXContent, MDXMetadata, MDXSection
from .values import dedupe, scan_lines, split_lines

_FRONTMATTER = re.compile(r"---\n(.*?)\n---", re.DOTALL)
_IMPORT = re.compile(r"import\s+.*?\s+from\s+['\"]([^'\"]+)['\"]")
_COMPONENT_REFERENCE = re.compile(r"<([A-Z]\w+)")
_TITLE_HEADING = re.compile(r"^#\s+(.+)$", re.MULTILINE)
_META_TITLE = re.compile(r"<Meta\s+title=\"([^\"]+)\"")
_EXAMPLE_FRAME = re.compile(r"<ExampleFrame[^>]*>(.*?)</ExampleFrame>", re.DOTALL)
_CODE_FENCE = re.compile(r"```(\w+)?\n(.*?)\n```", re.DOTALL)
_OPEN_TAG = re.compile(r"<(\w+)[^>]*>")
_SENTENCE_BREAK = re.compile(r"[.!?]+")
_A11Y_TOKENS = re.compile(r"(aria-[\w-]+|role=|screen reader|keyboard|focus|accessible)", re.IGNORECASE)

_PROPS_KEYWORDS = ("props", "api")
_USAGE_KEYWORDS = ("usage", "example", "how to")
_PATTERN_KEYWORDS = ("usage", "example", "pattern")
_A11Y_TITLE_KEYWORDS = ("accessibility", "a11y")
_A11Y_CONTENT_KEYWORDS = ("screen reader", "aria-")


def parse_mdx_content(component_name: str, mdx_code: str) -> MDXContent:
    """Parse a documentation file; the title falls back to ``component_name``."""
    return MDXContent(
        title=extract_title(mdx_code) or component_name,
        content=mdx_code,
        sections=extract_sections(mdx_code),
        examples=extract_examples(mdx_code),
        metadata=extract_frontmatter(mdx_code),
        imports=extract_imports(mdx_code),
        components=extract_component_references(mdx_code),
    )


def extract_frontmatter(mdx_code: str) -> Dict[str, str]:
    """Flat ``key: value`` mapping from a leading ``---`` block."""
    match = _FRONTMATTER.match(mdx_code)
    if match is None:
        return {}

    metadata: Dict[str, str] = {}
    for line in split_lines(match.group(1)):
        colon = line.find(":")
        if colon > 0:
            key = line[:colon].strip()
            value = re.sub(r"^['\"]|['\"]$", "", line[colon + 1 :].strip())
            metadata[key] = value
    return metadata


def extract_imports(mdx_code: str) -> List[str]:
    return [match.group(1) for match in _IMPORT.finditer(mdx_code)]


def extract_component_references(mdx_code: str) -> List[str]:
    return dedupe(match.group(1) for match in _COMPONENT_REFERENCE.finditer(mdx_code))


def extract_title(mdx_code: str) -> Optional[str]:
    heading = _TITLE_HEADING.search(mdx_code)
    if heading:
        return heading.group(1).strip()
    meta = _META_TITLE.search(mdx_code)
    if meta:
        return meta.group(1)
    return None


def extract_sections(mdx_code: str) -> List[MDXSection]:
    """Split the document at heading lines.

    Lines before the first heading belong to no section. Every later line
    belongs to exactly one section, so consecutive ranges tile the rest of
    the document.
    """
    sections: List[MDXSection] = []
    lines = split_lines(mdx_code)
    current: Optional[Tuple[str, int, int]] = None
    body: List[str] = []

    for span in scan_lines(mdx_code):
        if span.kind == "heading":
            if current is not None:
                sections.append(_close_section(current, body, span.index - 1))
            current = (span.title, span.level, span.index)
            body = []
        elif current is not None:
            body.append(span.text)

    if current is not None:
        sections.append(_close_section(current, body, len(lines) - 1))
    return sections


def _close_section(opened: Tuple[str, int, int], body: Sequence[str], end_line: int) -> MDXSection:
    title, level, start_line = opened
    content = "\n".join(body).strip()
    return MDXSection(
        title=title,
        level=level,
        content=content,
        examples=extract_examples(content),
        start_line=start_line,
        end_line=end_line,
    )


def extract_examples(mdx_code: str) -> List[CodeExample]:
    """Mine example frames, fenced code and component elements, in that order."""
    examples: List[CodeExample] = []

    for match in _EXAMPLE_FRAME.finditer(mdx_code):
        examples.append(
            CodeExample(
                code=match.group(1).strip(),
                kind="example-frame",
                language="jsx",
                description="Interactive example",
            )
        )

    for match in _CODE_FENCE.finditer(mdx_code):
        language = match.group(1) or "text"
        examples.append(
            CodeExample(
                code=match.group(2),
                kind="code",
                language=language,
                description=f"{language} code example",
            )
        )

    for tag, element in _iter_elements(mdx_code):
        if tag[0].isupper():
            examples.append(
                CodeExample(
                    code=element,
                    kind="component",
                    language="jsx",
                    description=f"{tag} usage example",
                )
            )
    return examples


def _iter_elements(text: str) -> Iterator[Tuple[str, str]]:
    """Yield ``(tag, element)`` for each outermost element with a matching close tag."""
    position = 0
    while True:
        match = _OPEN_TAG.search(text, position)
        if match is None:
            return
        if match.group(0).endswith("/>"):
            position = match.end()
            continue
        end = _matching_close(text, match.group(1), match.end())
        if end == -1:
            position = match.start() + 1
            continue
        yield match.group(1), text[match.start() : end]
        position = end


def _matching_close(text: str, tag: str, start: int) -> int:
    if text.find(f"</{tag}", start) == -1:
        return -1
    depth = 1
    for match in re.finditer(rf"<(/?){re.escape(tag)}\b[^>]*>", text[start:]):
        if match.group(1):
            depth -= 1
            if depth == 0:
                return start + match.end()
        elif not match.group(0).endswith("/>"):
            depth += 1
    return -1


def parse_mdx_metadata(component_name: str, mdx_code: str) -> MDXMetadata:
    """Summarise a document: counts plus props/usage/accessibility flags."""
    content = parse_mdx_content(component_name, mdx_code)
    return MDXMetadata(
        component_name=component_name,
        title=content.title,
        description=extract_description(mdx_code),
        sections=len(content.sections),
        examples=len(content.examples),
        has_props=any(_is_props_section(section) for section in content.sections),
        has_usage_guidelines=any(
            _title_has(section, _USAGE_KEYWORDS) for section in content.sections
        ),
        has_accessibility_info=any(_is_accessibility_section(section) for section in content.sections),
    )


def extract_description(mdx_code: str) -> Optional[str]:
    """First prose line after the first level-1 heading."""
    found_title = False
    for line in split_lines(mdx_code):
        if re.match(r"#\s+", line):
            found_title = True
            continue
        if found_title and line.strip() and not line.startswith(("#", "<")):
            return line.strip()
    return None


def _title_has(section: MDXSection, keywords: Sequence[str]) -> bool:
    title = section.title.lower()
    return any(keyword in title for keyword in keywords)


def _is_props_section(section: MDXSection) -> bool:
    return _title_has(section, _PROPS_KEYWORDS) or "<ArgTypes" in section.content


def _is_accessibility_section(section: MDXSection) -> bool:
    if _title_has(section, _A11Y_TITLE_KEYWORDS):
        return True
    body = section.content.lower()
    return any(keyword in body for keyword in _A11Y_CONTENT_KEYWORDS)


def _sentences(text: str) -> List[str]:
    return [part.strip() for part in _SENTENCE_BREAK.split(text) if part.strip()]


def extract_usage_patterns(mdx_code: str) -> List[str]:
    """First three sentence fragments of every usage/example/pattern section."""
    patterns: List[str] = []
    for section in parse_mdx_content("", mdx_code).sections:
        if _title_has(section, _PATTERN_KEYWORDS):
            patterns.extend(_sentences(section.content)[:3])
    return patterns


def extract_accessibility_guidelines(mdx_code: str) -> List[str]:
    guidelines: List[str] = []
    for section in parse_mdx_content("", mdx_code).sections:
        if _is_accessibility_section(section):
            guidelines.extend(_sentences(section.content))

    mentions = dedupe(match.group(1) for match in _A11Y_TOKENS.finditer(mdx_code))
    if mentions:
        guidelines.append(f"Includes accessibility features: {', '.join(mentions)}")
    return guidelines


__all__ = [
    "extract_accessibility_guidelines",
    "extract_component_references",
    "extract_description",
    "extract_examples",
    "extract_frontmatter",
    "extract_imports",
    "extract_sections",
    "extract_title",
    "extract_usage_patterns",
    "parse_mdx_content",
    "parse_mdx_metadata",
]

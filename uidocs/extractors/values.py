"""Shared helpers for scanning delimited text in extractor implementations."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Union

from ..models import ObjectMapping, ObjectValue

_OBJECT_ENTRY = re.compile(r"\b(\w+):\s*([^,\n}]+)")
_DECIMAL = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_PREFIXED_INT = re.compile(r"^0([xXbBoO])([0-9a-fA-F]+)$")
_COMMENT_MARKERS = re.compile(r"/\*\*|\*/|\*|//")
_HEADING = re.compile(r"^(#{1,6})\s+(.+)$")

_QUOTES = ("'", '"', "`")


# Line helpers


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only, keeping a trailing empty line when present."""
    return text.split("\n")


def dedupe(items: Iterable[str]) -> List[str]:
    """Drop repeats while keeping first-occurrence order."""
    return list(dict.fromkeys(items))


def first_comment_line(comment: str) -> Optional[str]:
    """Return the first non-empty line of a comment with its markers removed."""
    cleaned = _COMMENT_MARKERS.sub("", comment)
    for line in cleaned.splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return None


@dataclass
class LineSpan:
    """A classified line from a markup document."""

    index: int
    kind: str
    text: str
    level: int = 0
    title: str = ""


def scan_lines(text: str) -> Iterator[LineSpan]:
    """Classify each line of ``text`` as ``heading``, ``fence`` or ``text``.

    Headings are recognised on every line, including lines inside fenced
    blocks, so downstream section splitting sees the same headings a plain
    per-line pattern would.
    """
    for index, line in enumerate(split_lines(text)):
        match = _HEADING.match(line)
        if match:
            yield LineSpan(
                index=index,
                kind="heading",
                text=line,
                level=len(match.group(1)),
                title=match.group(2).strip(),
            )
        elif line.lstrip().startswith("```"):
            yield LineSpan(index=index, kind="fence", text=line)
        else:
            yield LineSpan(index=index, kind="text", text=line)


# Bracket matching


def find_closing(text: str, open_index: int, open_char: str = "{", close_char: str = "}") -> int:
    """Return the index of the bracket closing ``text[open_index]``, or -1.

    Nesting is tracked with a counter. Quoted strings and comments are
    skipped; single and double quoted strings end at a line break so a stray
    apostrophe in prose cannot swallow the rest of the file.
    """
    if open_index < 0 or open_index >= len(text) or text[open_index] != open_char:
        return -1

    depth = 0
    index = open_index
    length = len(text)
    while index < length:
        char = text[index]
        if char in _QUOTES:
            index = _skip_string(text, index)
            continue
        if char == "/" and index + 1 < length:
            follower = text[index + 1]
            if follower == "/":
                newline = text.find("\n", index)
                index = length if newline == -1 else newline
                continue
            if follower == "*":
                end = text.find("*/", index + 2)
                index = length if end == -1 else end + 2
                continue
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return -1


def _skip_string(text: str, start: int) -> int:
    quote = text[start]
    index = start + 1
    length = len(text)
    while index < length:
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == quote:
            return index + 1
        if char == "\n" and quote != "`":
            return index
        index += 1
    return length


def capture_block(
    text: str, open_index: int, open_char: str = "{", close_char: str = "}"
) -> Optional[str]:
    """Return the text between the bracket at ``open_index`` and its partner.

    Unbalanced input falls back to the first closing bracket after the
    opener, which is what a single non-recursive pattern would capture.
    Returns ``None`` when no closing bracket follows at all.
    """
    if open_index < 0 or open_index >= len(text) or text[open_index] != open_char:
        return None
    close_index = find_closing(text, open_index, open_char, close_char)
    if close_index == -1:
        close_index = text.find(close_char, open_index + 1)
        if close_index == -1:
            return None
    return text[open_index + 1 : close_index]


def capture_after(
    text: str, pattern: Union[str, re.Pattern[str]], open_char: str = "{", close_char: str = "}"
) -> Optional[str]:
    """Find ``pattern`` (which must end right before an opener) and capture the block.

    The first match that is immediately followed by optional whitespace and
    ``open_char`` wins.
    """
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    for match in compiled.finditer(text):
        index = match.end()
        while index < len(text) and text[index].isspace():
            index += 1
        if index < len(text) and text[index] == open_char:
            return capture_block(text, index, open_char, close_char)
    return None


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split ``text`` on ``separator`` where no bracket or string is open."""
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char in _QUOTES:
            end = _skip_string(text, index)
            current.append(text[index:end])
            index = end
            continue
        if char in "([{":
            depth += 1
        elif char in ")]}" and depth > 0:
            depth -= 1
        elif char == separator and depth == 0:
            parts.append("".join(current).strip())
            current = []
            index += 1
            continue
        current.append(char)
        index += 1
    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return [part for part in parts if part]


# Object-literal mining


def parse_object_literal(content: str) -> ObjectMapping:
    """Mine ``key: value`` pairs from object-literal text.

    This is not a parser: every ``word: value`` occurrence is recorded, later
    keys overwrite earlier ones and nested objects are flattened into the
    same mapping.
    """
    result: ObjectMapping = {}
    for match in _OBJECT_ENTRY.finditer(content):
        key, raw = match.group(1), match.group(2)
        result[key] = coerce_value(raw)
    return result


def coerce_value(raw: str) -> ObjectValue:
    """Coerce literal text to a string, boolean or number."""
    value = raw.strip()
    if value.startswith(("'", '"')):
        return value[1:-1]
    if value in {"true", "false"}:
        return value == "true"
    number = coerce_number(value)
    if number is not None:
        return number
    return value


def coerce_number(value: str) -> Union[int, float, None]:
    if _DECIMAL.match(value):
        if any(marker in value for marker in (".", "e", "E")):
            number = float(value)
            return int(number) if number.is_integer() and "." not in value else number
        return int(value)
    prefixed = _PREFIXED_INT.match(value)
    if prefixed:
        base = {"x": 16, "b": 2, "o": 8}[prefixed.group(1).lower()]
        try:
            return int(prefixed.group(2), base)
        except ValueError:
            return None
    return None


__all__ = [
    "LineSpan",
    "capture_after",
    "capture_block",
    "coerce_number",
    "coerce_value",
    "dedupe",
    "find_closing",
    "first_comment_line",
    "parse_object_literal",
    "scan_lines",
    "split_lines",
    "split_top_level",
]

"""Design-token extractor for theme source files.

Every token family is recovered independently with leaf patterns applied to
the whole text, for example ``fontWeight`` followed somewhere before the next
colon by ``bold``, then a number. Patterns are not scoped to the declaration
that encloses them, so unrelated declarations sharing a leaf name can
cross-match.

When the flat form finds nothing for a leaf, the first ``prefix: { ... }``
block of the family is mined for an entry keyed by the leaf's camelCase name,
which covers the nested object layout used by most theme builders.
"""

from __future__ import annotations

import re
from dataclasses import fields, is_dataclass
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar, Union

from ..models import (
    ActionColors,
    BackgroundColors,
    BorderColors,
    BorderRadiusTokens,
    BreakpointTokens,
    ColorScale,
    ColorTokens,
    FontFamily,
    FontSizeScale,
    FontWeightScale,
    LetterSpacingScale,
    LineHeightScale,
    ShadowTokens,
    SpacingTokens,
    TextColors,
    ThemeMetadata,
    ThemeTokens,
    TypographyTokens,
    ZIndexTokens,
)
from .values import capture_block

T = TypeVar("T")
# (field, leaf) pairs; a leaf of several words must show them in order.
Leaves = Sequence[Tuple[str, str]]
Markers = Sequence[Tuple[str, Tuple[str, ...]]]

_QUOTED = r"['\"`]([^'\"`]+)['\"`]"
_INTEGER = r"(\d+)"
_DECIMAL = r"([\d.]+)"
_BARE = r"['\"`]?([^'\"`\s,}]+)['\"`]?"

DEFAULT_THEME_NAME = "Grafana Theme"
DEFAULT_THEME_VERSION = "1.0.0"
DARK_MODE_MARKERS: Tuple[str, ...] = ("dark", "night", "black")

COLOR_FAMILIES: Tuple[str, ...] = ("primary", "secondary", "success", "warning", "error", "info")

_COLOR_SCALE_LEAVES: Leaves = (
    ("main", "main"),
    ("light", "light"),
    ("dark", "dark"),
    ("contrast_text", "contrast"),
)
_TEXT_LEAVES: Leaves = (
    ("primary", "primary"),
    ("secondary", "secondary"),
    ("disabled", "disabled"),
    ("max_contrast", "maxContrast"),
    ("link", "link"),
)
_BACKGROUND_LEAVES: Leaves = (
    ("canvas", "canvas"),
    ("primary", "primary"),
    ("secondary", "secondary"),
    ("dropdown", "dropdown"),
    ("hover", "hover"),
)
_BORDER_LEAVES: Leaves = (("weak", "weak"), ("medium", "medium"), ("strong", "strong"))
_ACTION_LEAVES: Leaves = (
    ("hover", "hover"),
    ("focus", "focus"),
    ("selected", "selected"),
    ("selected_border", "selectedBorder"),
    ("disabled_background", "disabled background"),
    ("disabled_text", "disabled text"),
)
_FONT_SIZE_LEAVES: Leaves = tuple(
    (name, name) for name in ("xs", "sm", "md", "lg", "xl", "h1", "h2", "h3", "h4", "h5", "h6")
)
_FONT_WEIGHT_LEAVES: Leaves = tuple(
    (name, name) for name in ("light", "regular", "medium", "semibold", "bold")
)
_LINE_HEIGHT_LEAVES: Leaves = tuple((name, name) for name in ("xs", "sm", "md", "lg"))
_LETTER_SPACING_LEAVES: Leaves = (("normal", "normal"), ("wide", "wide"))

_SPACING_KEYS = ("xs", "sm", "md", "lg", "xl", "xxl")
_SPACING_BLOCKS = (re.compile(r"\bspacing\s*:"), re.compile(r"\bspace\s*:"))
_SPACING_ENTRY = re.compile(rf"\b(\w+):\s*{_BARE}")
_GRID_SIZE = re.compile(r"gridSize\s*:\s*(\d+)")

_SHADOW_MARKERS: Markers = (("z1", ("z1",)), ("z2", ("z2",)), ("z3", ("z3",)))
_RADIUS_MARKERS: Markers = (("default", ("default", "base")), ("pill", ("pill",)), ("circle", ("circle",)))
_Z_INDEX_MARKERS: Markers = tuple(
    (name, (name,)) for name in ("dropdown", "sticky", "fixed", "modal", "popover", "tooltip")
)
_BREAKPOINT_MARKERS: Markers = tuple(
    (name, (name,)) for name in ("xs", "sm", "md", "lg", "xxl", "xl")
)

_COLOR_OBJECT_BLOCKS = (
    re.compile(r"\bcolors?\s*:"),
    re.compile(r"\bpalette\s*:"),
    re.compile(r"\bcolor\s*="),
)
_COLOR_ENTRY = re.compile(rf"\b(\w+):\s*{_QUOTED}")

_THEME_NAME = re.compile(rf"name\s*:\s*{_QUOTED}")
_THEME_VERSION = re.compile(rf"version\s*:\s*{_QUOTED}")

CATEGORY_ALIASES: Dict[str, str] = {
    "colors": "colors",
    "color": "colors",
    "typography": "typography",
    "font": "typography",
    "spacing": "spacing",
    "space": "spacing",
    "shadows": "shadows",
    "shadow": "shadows",
    "radius": "border_radius",
    "borderradius": "border_radius",
    "border_radius": "border_radius",
    "zindex": "z_index",
    "z_index": "z_index",
    "z": "z_index",
    "breakpoints": "breakpoints",
    "breakpoint": "breakpoints",
}


# Public entry points


def extract_theme_tokens(theme_code: str) -> ThemeTokens:
    """Recover every token category that has at least one matching leaf."""
    return ThemeTokens(
        colors=extract_colors(theme_code),
        typography=extract_typography(theme_code),
        spacing=extract_spacing(theme_code),
        shadows=extract_shadows(theme_code),
        border_radius=extract_border_radius(theme_code),
        z_index=extract_z_index(theme_code),
        breakpoints=extract_breakpoints(theme_code),
    )


def extract_theme_metadata(theme_code: str) -> ThemeMetadata:
    tokens = extract_theme_tokens(theme_code)
    name = _THEME_NAME.search(theme_code)
    version = _THEME_VERSION.search(theme_code)
    return ThemeMetadata(
        name=name.group(1) if name else DEFAULT_THEME_NAME,
        mode=detect_theme_mode(theme_code),
        version=version.group(1) if version else DEFAULT_THEME_VERSION,
        tokens_count=count_tokens(tokens),
        categories=populated_categories(tokens),
        has_colors=tokens.colors is not None,
        has_typography=tokens.typography is not None,
        has_spacing=tokens.spacing is not None,
    )


def detect_theme_mode(theme_code: str) -> str:
    """``dark`` when any dark marker occurs anywhere in the text, else ``light``."""
    lowered = theme_code.lower()
    if any(marker in lowered for marker in DARK_MODE_MARKERS):
        return "dark"
    return "light"


def count_tokens(tokens: object) -> int:
    """Count populated leaves of a token tree."""
    count = 0
    for item in fields(tokens):
        value = getattr(tokens, item.name)
        if value is None:
            continue
        count += count_tokens(value) if is_dataclass(value) else 1
    return count


def populated_categories(tokens: ThemeTokens) -> List[str]:
    """Top-level category names (wire spelling) that carry tokens."""
    return [_camel(item.name) for item in fields(tokens) if getattr(tokens, item.name) is not None]


def filter_tokens_by_category(tokens: ThemeTokens, category: str) -> ThemeTokens:
    """Return only the aliased category, or ``tokens`` unchanged.

    Unknown aliases and empty categories both fall back to the full set.
    """
    key = CATEGORY_ALIASES.get(category.lower())
    if key is None:
        return tokens
    value = getattr(tokens, key)
    if value is None:
        return tokens
    return ThemeTokens(**{key: value})


# Colors


def extract_colors(theme_code: str) -> Optional[ColorTokens]:
    colors = ColorTokens()
    for family in COLOR_FAMILIES:
        setattr(colors, family, _collect(ColorScale, theme_code, family, _COLOR_SCALE_LEAVES, _QUOTED))
    colors.text = _collect(TextColors, theme_code, "text", _TEXT_LEAVES, _QUOTED)
    colors.background = _collect(BackgroundColors, theme_code, "background", _BACKGROUND_LEAVES, _QUOTED)
    colors.border = _collect(BorderColors, theme_code, "border", _BORDER_LEAVES, _QUOTED)
    colors.action = _collect(ActionColors, theme_code, "action", _ACTION_LEAVES, _QUOTED)
    return colors if _has_values(colors) else None


def parse_color_object(theme_code: str) -> Dict[str, str]:
    """Mine quoted ``key: value`` entries from ``colors``/``palette`` blocks.

    The result is informational only; :func:`extract_colors` does not merge it
    into the color tokens.
    """
    entries: Dict[str, str] = {}
    for pattern in _COLOR_OBJECT_BLOCKS:
        for body in _blocks(theme_code, pattern):
            for match in _COLOR_ENTRY.finditer(body):
                entries[match.group(1)] = match.group(2)
    return entries


# Typography


def extract_typography(theme_code: str) -> Optional[TypographyTokens]:
    typography = TypographyTokens(
        font_family=extract_font_family(theme_code),
        font_size=_collect(FontSizeScale, theme_code, "fontSize", _FONT_SIZE_LEAVES, _QUOTED),
        font_weight=_collect(
            FontWeightScale, theme_code, "fontWeight", _FONT_WEIGHT_LEAVES, _INTEGER, _to_int
        ),
        line_height=_collect(
            LineHeightScale, theme_code, "lineHeight", _LINE_HEIGHT_LEAVES, _DECIMAL, _to_float
        ),
        letter_spacing=_collect(
            LetterSpacingScale, theme_code, "letterSpacing", _LETTER_SPACING_LEAVES, _QUOTED
        ),
    )
    return typography if _has_values(typography) else None


def extract_font_family(theme_code: str) -> Optional[FontFamily]:
    families = [raw for _, raw in _flat_matches(theme_code, "fontFamily", _QUOTED)]
    if not families:
        return None
    sans = next((family for family in families if "mono" not in family), families[0])
    mono = next((family for family in families if "mono" in family), "monospace")
    return FontFamily(sans=sans, mono=mono)


# Spacing


def extract_spacing(theme_code: str) -> Optional[SpacingTokens]:
    spacing = SpacingTokens()
    for pattern in _SPACING_BLOCKS:
        for body in _blocks(theme_code, pattern):
            for match in _SPACING_ENTRY.finditer(body):
                key, raw = match.group(1), match.group(2)
                if key in _SPACING_KEYS:
                    setattr(spacing, key, raw)
                elif key == "gridSize" and raw.isdecimal():
                    spacing.grid_size = int(raw)
    for match in _GRID_SIZE.finditer(theme_code):
        spacing.grid_size = int(match.group(1))
    return spacing if _has_values(spacing) else None


# Shadows, radius, z-index, breakpoints


def extract_shadows(theme_code: str) -> Optional[ShadowTokens]:
    return _classify(ShadowTokens, theme_code, "shadow", _SHADOW_MARKERS, r"shadows?", _QUOTED)


def extract_border_radius(theme_code: str) -> Optional[BorderRadiusTokens]:
    return _classify(
        BorderRadiusTokens, theme_code, "radius", _RADIUS_MARKERS, r"(?:r|borderR)adius", _BARE
    )


def extract_z_index(theme_code: str) -> Optional[ZIndexTokens]:
    return _classify(ZIndexTokens, theme_code, "zIndex", _Z_INDEX_MARKERS, r"zIndex", _INTEGER, _to_int)


def extract_breakpoints(theme_code: str) -> Optional[BreakpointTokens]:
    return _classify(
        BreakpointTokens, theme_code, "breakpoint", _BREAKPOINT_MARKERS, r"breakpoints?", _INTEGER, _to_int
    )


# Helpers


def _collect(
    scale_type: Type[T],
    theme_code: str,
    prefix: str,
    leaves: Leaves,
    value: str,
    convert: Callable[[str], object] = str,
) -> Optional[T]:
    """Fill ``scale_type`` from flat ``prefix...leaf: value`` matches.

    Leaves without a flat match fall back to the first ``prefix: {...}`` block.
    """
    scale = scale_type()
    block: Optional[Dict[str, str]] = None
    for field_name, leaf in leaves:
        raw = next((raw for _, raw in _flat_matches(theme_code, prefix, value, leaf.split())), None)
        if raw is None:
            if block is None:
                block = _block_entries(theme_code, prefix, value)
            raw = block.get(_camel(field_name))
        converted = convert(raw) if raw is not None else None
        if converted is not None:
            setattr(scale, field_name, converted)
    return scale if _has_values(scale) else None


def _classify(
    scale_type: Type[T],
    theme_code: str,
    prefix: str,
    markers: Markers,
    block_prefix: str,
    value: str,
    convert: Callable[[str], object] = str,
) -> Optional[T]:
    """Assign each flat match to the first field whose marker occurs in it.

    Later matches overwrite earlier ones. Fields left empty are looked up by
    exact key in the first ``block_prefix: {...}`` block.
    """
    scale = scale_type()
    for label, raw in _flat_matches(theme_code, prefix, value):
        for field_name, field_markers in markers:
            if any(marker in label for marker in field_markers):
                converted = convert(raw)
                if converted is not None:
                    setattr(scale, field_name, converted)
                break

    block = _block_entries(theme_code, block_prefix, value)
    for field_name, field_markers in markers:
        if getattr(scale, field_name) is not None:
            continue
        raw = next((block[marker] for marker in field_markers if marker in block), None)
        converted = convert(raw) if raw is not None else None
        if converted is not None:
            setattr(scale, field_name, converted)
    return scale if _has_values(scale) else None


def _flat_matches(
    text: str, prefix: str, value: str, leaf: Sequence[str] = ()
) -> Iterator[Tuple[str, str]]:
    """Yield ``(label, raw)`` for each ``prefix ... leaf ... : value`` occurrence.

    The leaf words must appear in order between ``prefix`` and the next colon.
    Each colon is examined at most once, so the scan stays linear in the text.
    """
    value_pattern = re.compile(rf"\s*{value}")
    position = 0
    while True:
        start = text.find(prefix, position)
        if start < 0:
            return
        colon = text.find(":", start + len(prefix))
        if colon < 0:
            return
        position = colon + 1
        if not _in_order(text, leaf, start + len(prefix), colon):
            continue
        found = value_pattern.match(text, colon + 1)
        if found is None:
            continue
        position = found.end()
        yield text[start : found.end()], found.group(1)


def _in_order(text: str, words: Sequence[str], start: int, end: int) -> bool:
    for word in words:
        index = text.find(word, start, end)
        if index < 0:
            return False
        start = index + len(word)
    return True


def _blocks(text: str, pattern: re.Pattern[str]) -> Iterator[str]:
    """Yield the body of every ``{...}`` that directly follows a ``pattern`` match."""
    for match in pattern.finditer(text):
        index = match.end()
        while index < len(text) and text[index].isspace():
            index += 1
        body = capture_block(text, index)
        if body is not None:
            yield body


def _block_entries(text: str, prefix: str, value: str) -> Dict[str, str]:
    entries: Dict[str, str] = {}
    body = next(_blocks(text, re.compile(rf"\b{prefix}\s*[:=]")), None)
    if body is None:
        return entries
    for match in re.finditer(rf"\b(\w+)\s*:\s*{value}", body):
        entries.setdefault(match.group(1), match.group(2))
    return entries


def _has_values(record: object) -> bool:
    return any(getattr(record, item.name) is not None for item in fields(record))


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _to_int(raw: str) -> Optional[int]:
    return int(raw) if raw.isdecimal() else None


def _to_float(raw: str) -> Union[float, None]:
    try:
        return float(raw)
    except ValueError:
        return None


__all__ = [
    "CATEGORY_ALIASES",
    "COLOR_FAMILIES",
    "DARK_MODE_MARKERS",
    "DEFAULT_THEME_NAME",
    "DEFAULT_THEME_VERSION",
    "count_tokens",
    "detect_theme_mode",
    "extract_border_radius",
    "extract_breakpoints",
    "extract_colors",
    "extract_font_family",
    "extract_shadows",
    "extract_spacing",
    "extract_theme_metadata",
    "extract_theme_tokens",
    "extract_typography",
    "extract_z_index",
    "filter_tokens_by_category",
    "parse_color_object",
    "populated_categories",
]

"""Core data models shared across uidocs components."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

# Values recovered by the object-literal miner. Nested mappings are kept for
# callers that build them by hand; the miner itself only emits scalars.
ObjectValue = Union[str, int, float, bool, Dict[str, "ObjectValue"]]
ObjectMapping = Dict[str, ObjectValue]


# ---------------------------------------------------------------------------
# Component source
# ---------------------------------------------------------------------------


@dataclass
class PropDefinition:
    """A single field of a component's props shape."""

    name: str
    type: str
    required: bool
    description: Optional[str] = None
    default_value: Optional[str] = None


@dataclass
class ExportDefinition:
    """An exported symbol, classified by naming convention."""

    name: str
    kind: str
    is_default: bool = False


@dataclass
class ImportDefinition:
    """A structured import statement."""

    module: str
    imports: List[str]
    is_default: bool = False
    is_namespace: bool = False


@dataclass
class ComponentMetadata:
    """Metadata mined from a component source file."""

    name: str
    description: Optional[str] = None
    props: List[PropDefinition] = field(default_factory=list)
    exports: List[ExportDefinition] = field(default_factory=list)
    imports: List[ImportDefinition] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)
    has_tests: bool = False
    has_stories: bool = False
    has_documentation: bool = False


# ---------------------------------------------------------------------------
# Stories
# ---------------------------------------------------------------------------


@dataclass
class StoryDefinition:
    name: str
    source: str
    args: Optional[ObjectMapping] = None
    parameters: Optional[ObjectMapping] = None
    description: Optional[str] = None


@dataclass
class StorybookMeta:
    """The default-export configuration of a story file."""

    title: str
    component: str
    stories: List[StoryDefinition] = field(default_factory=list)
    arg_types: Optional[ObjectMapping] = None
    parameters: Optional[ObjectMapping] = None
    decorators: Optional[List[str]] = None


@dataclass
class StoryMetadata:
    component_name: str
    meta: StorybookMeta
    total_stories: int = 0
    has_interactive_stories: bool = False
    has_examples: bool = False


# ---------------------------------------------------------------------------
# Documentation
# ---------------------------------------------------------------------------


@dataclass
class CodeExample:
    """A runnable snippet found in documentation."""

    code: str
    kind: str
    language: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None


@dataclass
class MDXSection:
    """Heading-delimited span of a document; line indices are inclusive."""

    title: str
    level: int
    content: str
    examples: List[CodeExample]
    start_line: int
    end_line: int


@dataclass
class MDXContent:
    title: str
    content: str
    sections: List[MDXSection] = field(default_factory=list)
    examples: List[CodeExample] = field(default_factory=list)
    metadata: Dict[str, str] = field(default_factory=dict)
    imports: List[str] = field(default_factory=list)
    components: List[str] = field(default_factory=list)


@dataclass
class MDXMetadata:
    """Summary counts and flags derived from a parsed document."""

    component_name: str
    title: str
    description: Optional[str]
    sections: int
    examples: int
    has_props: bool
    has_usage_guidelines: bool
    has_accessibility_info: bool


# ---------------------------------------------------------------------------
# Theme tokens
# ---------------------------------------------------------------------------


@dataclass
class ColorScale:
    main: Optional[str] = None
    light: Optional[str] = None
    dark: Optional[str] = None
    contrast_text: Optional[str] = None


@dataclass
class TextColors:
    primary: Optional[str] = None
    secondary: Optional[str] = None
    disabled: Optional[str] = None
    max_contrast: Optional[str] = None
    link: Optional[str] = None


@dataclass
class BackgroundColors:
    canvas: Optional[str] = None
    primary: Optional[str] = None
    secondary: Optional[str] = None
    dropdown: Optional[str] = None
    hover: Optional[str] = None


@dataclass
class BorderColors:
    weak: Optional[str] = None
    medium: Optional[str] = None
    strong: Optional[str] = None


@dataclass
class ActionColors:
    hover: Optional[str] = None
    focus: Optional[str] = None
    selected: Optional[str] = None
    selected_border: Optional[str] = None
    disabled_background: Optional[str] = None
    disabled_text: Optional[str] = None


@dataclass
class ColorTokens:
    primary: Optional[ColorScale] = None
    secondary: Optional[ColorScale] = None
    success: Optional[ColorScale] = None
    warning: Optional[ColorScale] = None
    error: Optional[ColorScale] = None
    info: Optional[ColorScale] = None
    text: Optional[TextColors] = None
    background: Optional[BackgroundColors] = None
    border: Optional[BorderColors] = None
    action: Optional[ActionColors] = None


@dataclass
class FontFamily:
    sans: Optional[str] = None
    mono: Optional[str] = None


@dataclass
class FontSizeScale:
    xs: Optional[str] = None
    sm: Optional[str] = None
    md: Optional[str] = None
    lg: Optional[str] = None
    xl: Optional[str] = None
    h1: Optional[str] = None
    h2: Optional[str] = None
    h3: Optional[str] = None
    h4: Optional[str] = None
    h5: Optional[str] = None
    h6: Optional[str] = None


@dataclass
class FontWeightScale:
    light: Optional[int] = None
    regular: Optional[int] = None
    medium: Optional[int] = None
    semibold: Optional[int] = None
    bold: Optional[int] = None


@dataclass
class LineHeightScale:
    xs: Optional[float] = None
    sm: Optional[float] = None
    md: Optional[float] = None
    lg: Optional[float] = None


@dataclass
class LetterSpacingScale:
    normal: Optional[str] = None
    wide: Optional[str] = None


@dataclass
class TypographyTokens:
    font_family: Optional[FontFamily] = None
    font_size: Optional[FontSizeScale] = None
    font_weight: Optional[FontWeightScale] = None
    line_height: Optional[LineHeightScale] = None
    letter_spacing: Optional[LetterSpacingScale] = None


@dataclass
class SpacingTokens:
    xs: Optional[str] = None
    sm: Optional[str] = None
    md: Optional[str] = None
    lg: Optional[str] = None
    xl: Optional[str] = None
    xxl: Optional[str] = None
    grid_size: Optional[int] = None


@dataclass
class ShadowTokens:
    z1: Optional[str] = None
    z2: Optional[str] = None
    z3: Optional[str] = None


@dataclass
class BorderRadiusTokens:
    default: Optional[str] = None
    pill: Optional[str] = None
    circle: Optional[str] = None


@dataclass
class ZIndexTokens:
    dropdown: Optional[int] = None
    sticky: Optional[int] = None
    fixed: Optional[int] = None
    modal: Optional[int] = None
    popover: Optional[int] = None
    tooltip: Optional[int] = None


@dataclass
class BreakpointTokens:
    xs: Optional[int] = None
    sm: Optional[int] = None
    md: Optional[int] = None
    lg: Optional[int] = None
    xl: Optional[int] = None
    xxl: Optional[int] = None


@dataclass
class ThemeTokens:
    """Partial token tree; a category is ``None`` when nothing matched."""

    colors: Optional[ColorTokens] = None
    typography: Optional[TypographyTokens] = None
    spacing: Optional[SpacingTokens] = None
    shadows: Optional[ShadowTokens] = None
    border_radius: Optional[BorderRadiusTokens] = None
    z_index: Optional[ZIndexTokens] = None
    breakpoints: Optional[BreakpointTokens] = None


@dataclass
class ThemeMetadata:
    name: str
    mode: str
    version: str
    tokens_count: int
    categories: List[str]
    has_colors: bool
    has_typography: bool
    has_spacing: bool


# ---------------------------------------------------------------------------
# Library facade
# ---------------------------------------------------------------------------


@dataclass
class DocumentationSummary:
    """Derived view of a component's documentation."""

    metadata: MDXMetadata
    usage_patterns: List[str] = field(default_factory=list)
    accessibility_guidelines: List[str] = field(default_factory=list)


@dataclass
class DependencyNode:
    """External packages and sibling components a component imports.

    ``children`` is only populated for deep lookups; a component already
    visited higher up the tree appears again without children.
    """

    name: str
    dependencies: List[str] = field(default_factory=list)
    components: List[str] = field(default_factory=list)
    children: List["DependencyNode"] = field(default_factory=list)


@dataclass
class SearchResult:
    name: str
    description: Optional[str] = None

"""Component source extractor: imports, exports and the props shape."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from ..models import ComponentMetadata, ExportDefinition, ImportDefinition, PropDefinition
from .values import capture_after, capture_block, dedupe, first_comment_line, split_lines, split_top_level

_IMPORT_SPECIFIER = re.compile(r"import\s+[^;'\"]*?\s+from\s+['\"]([@\w/\-.]+)['\"]")
_IMPORT_STATEMENT = re.compile(
    r"import\s+(?:type\s+)?((?:\w+,\s*)?(?:\{[^}]*\}|\*\s+as\s+\w+|\w+))\s+from\s+['\"]([^'\"]+)['\"]"
)
_NAMESPACE_IMPORT = re.compile(r"\*\s+as\s+(\w+)")

_EXPORT_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"export\s+(?:type|interface)\s+(\w+)"),
    re.compile(r"export\s+(?:const|let|var)\s+(\w+)"),
    re.compile(r"export\s+(?:async\s+)?function\*?\s+(\w+)"),
    re.compile(r"export\s+(?:abstract\s+)?class\s+(\w+)"),
)
_NAMED_EXPORTS = re.compile(r"export\s+\{([^}]+)\}")
_DEFAULT_EXPORT = re.compile(r"export\s+default\s+(?:(?:async\s+)?function\s+|class\s+)?(\w+)")

_LOCAL_PREFIXES = ("./", "../", "@/")

_PROP_FIELD = re.compile(r"(/\*\*((?:[^*]|\*(?!/))*)\*/\s*)?(\w+)(\?)?:\s*")
_SIMPLE_PROP_FIELD = re.compile(r"(\w+)(\?)?:\s*([^;,\n]+)")
_COMMENT_SPAN = re.compile(r"//[^\n]*|/\*(?:[^*]|\*(?!/))*\*/")
_FALLBACK_PROPS_INTERFACE = "CommonProps"
_DESTRUCTURED_PARAMS = re.compile(r"\(\s*\{")

_TYPE_OPENERS = {"(": ")", "[": "]", "{": "}", "<": ">"}
_TYPE_CLOSERS = {")", "]", "}", ">"}


def parse_component_metadata(component_name: str, code: str) -> ComponentMetadata:
    """Mine ``code`` for the metadata of ``component_name``.

    The ``has_*`` flags stay ``False``; they describe sibling files and are
    filled in by whoever knows the file layout.
    """
    dependencies = extract_imports_from_code(code)
    exports = parse_exports(code)

    props_interface = find_props_interface(code, component_name)
    props = extract_props_from_code(code, props_interface) if props_interface else []
    if props:
        _apply_default_values(props, extract_default_values(code, component_name))

    return ComponentMetadata(
        name=component_name,
        description=extract_component_description(code, component_name),
        props=props,
        exports=exports,
        imports=parse_imports(code),
        dependencies=dependencies,
    )


def extract_imports_from_code(code: str) -> List[str]:
    """Return external module specifiers in first-import order."""
    dependencies: List[str] = []
    for match in _IMPORT_SPECIFIER.finditer(code):
        module = match.group(1)
        if module.startswith(_LOCAL_PREFIXES):
            continue
        dependencies.append(module)
    return dedupe(dependencies)


def extract_exports_from_code(code: str) -> List[str]:
    """Return exported identifiers, deduplicated in source order."""
    found: List[Tuple[int, str]] = []
    for pattern in _EXPORT_PATTERNS:
        for match in pattern.finditer(code):
            found.append((match.start(1), match.group(1)))

    for match in _NAMED_EXPORTS.finditer(code):
        offset = match.start(1)
        for entry in match.group(1).split(","):
            name = entry.strip().split(" as ")[0].strip()
            if name:
                found.append((offset, name))
            offset += len(entry) + 1

    found.sort(key=lambda item: item[0])
    return dedupe(name for _, name in found)


def parse_exports(code: str) -> List[ExportDefinition]:
    defaults = {match.group(1) for match in _DEFAULT_EXPORT.finditer(code)}
    return [
        ExportDefinition(name=name, kind=infer_export_kind(name), is_default=name in defaults)
        for name in extract_exports_from_code(code)
    ]


def infer_export_kind(name: str) -> str:
    """Classify an export by naming convention."""
    if name.endswith(("Props", "Type", "Interface")):
        return "type"
    first = name[:1]
    if first == first.upper() and "_" not in name:
        return "component"
    if "_" in name or name.upper() == name:
        return "const"
    return "function"


def parse_imports(code: str) -> List[ImportDefinition]:
    imports: List[ImportDefinition] = []
    for match in _IMPORT_STATEMENT.finditer(code):
        spec, module = match.group(1), match.group(2)
        namespace = _NAMESPACE_IMPORT.search(spec)
        if namespace:
            imports.append(
                ImportDefinition(module=module, imports=[namespace.group(1)], is_namespace=True)
            )
        elif "{" in spec:
            names = [name.strip() for name in re.sub(r"[{}]", "", spec).split(",")]
            imports.append(ImportDefinition(module=module, imports=[name for name in names if name]))
        else:
            imports.append(ImportDefinition(module=module, imports=[spec.strip()], is_default=True))
    return imports


def find_props_interface(code: str, component_name: str) -> Optional[str]:
    """Return the first declared props identifier for the component."""
    candidates = (
        f"{component_name}Props",
        f"I{component_name}Props",
        f"{component_name}Properties",
        _FALLBACK_PROPS_INTERFACE,
    )
    for candidate in candidates:
        if f"type {candidate}" in code or f"interface {candidate}" in code:
            return candidate
    return None


def extract_props_from_code(code: str, interface_name: str) -> List[PropDefinition]:
    """Extract the top-level fields of ``interface_name``'s declaration body."""
    declaration = re.compile(rf"(?:type|interface)\s+{re.escape(interface_name)}\b[^{{;]*")
    body = capture_after(code, declaration)
    if body is None:
        return []

    props = _extract_documented_fields(body)
    if not props:
        props = _extract_simple_fields(body)
    return props


def _extract_documented_fields(body: str) -> List[PropDefinition]:
    comments = [(match.start(), match.end()) for match in _COMMENT_SPAN.finditer(body)]
    props: List[PropDefinition] = []
    position = 0
    while True:
        match = _PROP_FIELD.search(body, position)
        if match is None:
            break
        name_start = match.start(3)
        inside = next((span for span in comments if span[0] <= name_start < span[1]), None)
        if inside is not None:
            position = inside[1]
            continue

        type_text, type_end = _read_type(body, match.end())
        position = max(type_end, match.end())
        if not type_text:
            continue
        comment = match.group(2)
        props.append(
            PropDefinition(
                name=match.group(3),
                type=type_text,
                required=not match.group(4),
                description=first_comment_line(comment) if comment else None,
            )
        )
    return props


def _extract_simple_fields(body: str) -> List[PropDefinition]:
    lines = split_lines(body)
    props: List[PropDefinition] = []
    for match in _SIMPLE_PROP_FIELD.finditer(body):
        name, optional, type_text = match.group(1), match.group(2), match.group(3)
        description = None
        line_index = next((i for i, line in enumerate(lines) if f"{name}:" in line), -1)
        if line_index > 0:
            previous = lines[line_index - 1].strip()
            if previous.startswith(("/**", "*", "//")):
                description = re.sub(r"/\*\*|\*/|\*|//", "", previous).strip() or None
        props.append(
            PropDefinition(
                name=name,
                type=type_text.strip(),
                required=not optional,
                description=description,
            )
        )
    return props


def _read_type(body: str, start: int) -> Tuple[str, int]:
    """Read a type expression up to a top-level ``,``, ``;`` or line break."""
    stack: List[str] = []
    index = start
    length = len(body)
    while index < length:
        char = body[index]
        if char in _TYPE_OPENERS:
            stack.append(_TYPE_OPENERS[char])
        elif char in _TYPE_CLOSERS:
            if char == ">" and index > 0 and body[index - 1] == "=":
                index += 1
                continue
            if stack and stack[-1] == char:
                stack.pop()
            elif not stack:
                break
        elif not stack and char in ",;\n":
            break
        index += 1
    return body[start:index].strip(), index


def extract_default_values(code: str, component_name: str) -> Dict[str, str]:
    """Return ``prop -> default`` pairs from the component's destructured parameters."""
    declaration = re.search(
        rf"(?:const|function)\s+{re.escape(component_name)}\b", code
    )
    if declaration is None:
        return {}
    arrow = code.find("=>", declaration.end())
    limit = arrow if arrow != -1 else len(code)
    opener = _DESTRUCTURED_PARAMS.search(code, declaration.end(), limit)
    if opener is None:
        return {}
    block = capture_block(code, opener.end() - 1)
    if block is None:
        return {}

    defaults: Dict[str, str] = {}
    for entry in split_top_level(block, ","):
        if "=" not in entry:
            continue
        key, value = entry.split("=", 1)
        key = key.split(":", 1)[0].strip()
        value = value.strip()
        if re.fullmatch(r"\w+", key) and value:
            defaults[key] = value
    return defaults


def _apply_default_values(props: List[PropDefinition], defaults: Dict[str, str]) -> None:
    for prop in props:
        if prop.name in defaults:
            prop.default_value = defaults[prop.name]


def extract_component_description(code: str, component_name: str) -> Optional[str]:
    """First line of the block comment directly preceding ``export const {name}``."""
    pattern = re.compile(
        rf"/\*\*((?:[^*]|\*(?!/))*)\*/\s*export\s+const\s+{re.escape(component_name)}\b"
    )
    match = pattern.search(code)
    if match is None:
        return None
    return first_comment_line(match.group(1))


__all__ = [
    "extract_component_description",
    "extract_default_values",
    "extract_exports_from_code",
    "extract_imports_from_code",
    "extract_props_from_code",
    "find_props_interface",
    "infer_export_kind",
    "parse_component_metadata",
    "parse_exports",
    "parse_imports",
]

"""Serialises extracted records to JSON payloads and Markdown."""

from __future__ import annotations

import json
import re
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

_CAMEL_BOUNDARY = re.compile(r"_([a-z0-9])")
_DEFAULT_TEMPLATES = Path(__file__).with_name("templates")


def camel_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub(lambda match: match.group(1).upper(), name)


def to_payload(record: Any) -> Any:
    """Convert records into JSON-ready structures.

    Dataclass fields become camelCase keys and ``None`` fields are dropped.
    Plain mappings (front matter, mined object literals) keep their keys.
    """
    if is_dataclass(record) and not isinstance(record, type):
        payload: Dict[str, Any] = {}
        for item in fields(record):
            value = getattr(record, item.name)
            if value is None:
                continue
            payload[camel_case(item.name)] = to_payload(value)
        return payload
    if isinstance(record, dict):
        return {str(key): to_payload(value) for key, value in record.items()}
    if isinstance(record, (list, tuple)):
        return [to_payload(value) for value in record]
    return record


def to_json(record: Any) -> str:
    return json.dumps(to_payload(record), indent=2)


def _table_cell(value: Any) -> str:
    text = "" if value is None else str(value)
    return text.replace("|", "\\|").replace("\n", " ")


def _template_name(record: Any) -> str:
    snake = re.sub(r"(?<!^)(?=[A-Z][a-z])", "_", type(record).__name__).lower()
    return f"{snake}.md.j2"


class Presenter:
    """Renders records through Jinja2 templates.

    ``templates_dir`` is searched before the packaged templates, so a single
    file there overrides the matching default.
    """

    def __init__(self, templates_dir: Path | None = None) -> None:
        search_path: List[str] = []
        if templates_dir is not None:
            search_path.append(str(templates_dir))
        search_path.append(str(_DEFAULT_TEMPLATES))
        self.templates_dir = templates_dir
        self._env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.filters["cell"] = _table_cell
        self._env.filters["to_json"] = to_json

    def render_markdown(self, record: Any, *, title: Optional[str] = None) -> str:
        try:
            template = self._env.get_template(_template_name(record))
        except TemplateNotFound:
            template = self._env.get_template("default.md.j2")
        rendered = template.render(record=record, title=title or type(record).__name__)
        return rendered.strip() + "\n"

    def render(self, record: Any, output_format: str = "json") -> str:
        if output_format == "markdown":
            return self.render_markdown(record)
        if output_format == "json":
            return to_json(record) + "\n"
        raise ValueError(f"Unsupported output format: {output_format}")


__all__ = ["Presenter", "camel_case", "to_json", "to_payload"]

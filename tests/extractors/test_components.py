from __future__ import annotations

import textwrap

from uidocs.extractors.components import (
    extract_component_description,
    extract_default_values,
    extract_exports_from_code,
    extract_imports_from_code,
    extract_props_from_code,
    find_props_interface,
    infer_export_kind,
    parse_component_metadata,
    parse_exports,
    parse_imports,
)
from uidocs.models import ComponentMetadata, ImportDefinition, PropDefinition

BUTTON_SOURCE = textwrap.dedent(
    """
    import React from 'react';
    import { css, cx } from '@emotion/css';
    import { Icon } from '../Icon/Icon';
    import { useStyles2 } from '../../themes';
    import * as icons from './icons';
    import { GrafanaTheme2 } from '@grafana/data';
    import ReactAlias from 'react';

    export interface ButtonProps {
      /** Size of the button */
      size?: 'sm' | 'md' | 'lg';
      variant?: string;
      onClick?: (event: MouseEvent, extra: { a: number }) => void;
      // legacy: boolean;
      label: string;
    }

    /**
     * A clickable button.
     * Supports icons.
     */
    export const Button = ({ size = 'md', variant = 'primary', onClick, label }: ButtonProps) => {
      return null;
    };

    export default Button;
    """
)


def test_documented_optional_prop() -> None:
    code = "export interface ButtonProps { /** primary action */ variant?: string }"

    metadata = parse_component_metadata("Button", code)

    assert metadata.props == [
        PropDefinition(name="variant", type="string", required=False, description="primary action")
    ]


def test_parse_component_metadata_collects_everything() -> None:
    metadata = parse_component_metadata("Button", BUTTON_SOURCE)

    assert metadata.name == "Button"
    assert metadata.description == "A clickable button."
    assert metadata.dependencies == ["react", "@emotion/css", "@grafana/data"]
    assert [prop.name for prop in metadata.props] == ["size", "variant", "onClick", "label"]
    assert metadata.has_stories is False
    assert metadata.has_documentation is False
    assert metadata.has_tests is False


def test_props_read_types_with_nested_brackets() -> None:
    props = {prop.name: prop for prop in parse_component_metadata("Button", BUTTON_SOURCE).props}

    assert props["size"].type == "'sm' | 'md' | 'lg'"
    assert props["size"].description == "Size of the button"
    assert props["size"].required is False
    assert props["onClick"].type == "(event: MouseEvent, extra: { a: number }) => void"
    assert props["label"].required is True
    assert props["label"].description is None


def test_props_pick_up_destructured_defaults() -> None:
    props = {prop.name: prop for prop in parse_component_metadata("Button", BUTTON_SOURCE).props}

    assert props["size"].default_value == "'md'"
    assert props["variant"].default_value == "'primary'"
    assert props["onClick"].default_value is None


def test_props_skip_nested_object_members() -> None:
    code = textwrap.dedent(
        """
        export type CardProps = {
          style?: { color: string; size: number };
          title: string;
        };
        """
    )

    props = extract_props_from_code(code, "CardProps")

    assert [prop.name for prop in props] == ["style", "title"]
    assert props[0].type == "{ color: string; size: number }"


def test_find_props_interface_uses_candidate_order() -> None:
    assert find_props_interface("interface IButtonProps {}", "Button") == "IButtonProps"
    assert find_props_interface("type CommonProps = {}", "Button") == "CommonProps"
    assert find_props_interface("const x = 1;", "Button") is None


def test_unterminated_props_body_yields_no_props() -> None:
    assert extract_props_from_code("export interface ButtonProps {", "ButtonProps") == []


def test_exports_are_deduplicated_in_source_order() -> None:
    code = textwrap.dedent(
        """
        export interface ButtonProps {}
        export const Button = () => null;
        export function useThing() {}
        export const BUTTON_SIZES = [];
        export { Button as Btn, helper };
        export default Button;
        """
    )

    assert extract_exports_from_code(code) == ["ButtonProps", "Button", "useThing", "BUTTON_SIZES", "helper"]
    exports = {export.name: export for export in parse_exports(code)}
    assert exports["ButtonProps"].kind == "type"
    assert exports["Button"].kind == "component"
    assert exports["Button"].is_default is True
    assert exports["useThing"].kind == "function"
    assert exports["BUTTON_SIZES"].kind == "const"
    assert exports["helper"].is_default is False


def test_infer_export_kind() -> None:
    assert infer_export_kind("SelectInterface") == "type"
    assert infer_export_kind("Modal") == "component"
    assert infer_export_kind("getStyles") == "function"
    assert infer_export_kind("max_size") == "const"


def test_imports_are_classified() -> None:
    imports = parse_imports(BUTTON_SOURCE)

    assert imports[0] == ImportDefinition(module="react", imports=["React"], is_default=True)
    assert imports[1] == ImportDefinition(module="@emotion/css", imports=["css", "cx"])
    assert ImportDefinition(module="./icons", imports=["icons"], is_namespace=True) in imports


def test_external_dependencies_skip_relative_and_alias_paths() -> None:
    code = "import a from './a';\nimport b from '../b';\nimport c from '@/c';\nimport d from 'lodash';"

    assert extract_imports_from_code(code) == ["lodash"]


def test_default_values_require_matching_component() -> None:
    assert extract_default_values(BUTTON_SOURCE, "Modal") == {}
    assert extract_default_values("function Button(props) { return null; }", "Button") == {}


def test_description_requires_adjacent_doc_comment() -> None:
    code = "/** Docs */\nconst other = 1;\nexport const Button = () => null;"

    assert extract_component_description(code, "Button") is None


def test_empty_source_yields_empty_metadata() -> None:
    assert parse_component_metadata("Button", "") == ComponentMetadata(name="Button")

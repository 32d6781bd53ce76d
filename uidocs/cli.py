"""CLI entrypoints for uidocs commands."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from .config import ConfigError, UIDocsConfig, load_config
from .library import ComponentLibrary
from .logging import configure_logging, get_logger
from .presenter import Presenter
from .sources import SourceError, SourceNotFoundError

_LOGGER = get_logger("cli")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _add_format_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=("json", "markdown"),
        default="json",
        help="Output format (default: json).",
    )


def _add_component_command(
    subparsers: Any, name: str, help_text: str, *, record: bool = True
) -> argparse.ArgumentParser:
    command = subparsers.add_parser(name, help=help_text)
    _add_verbose_option(command, suppress_default=True)
    command.add_argument("component", help="Component name, e.g. Button.")
    if record:
        _add_format_option(command)
    return command


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uidocs",
        description="Extract metadata from UI component sources, stories, docs and themes.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("."),
        help="Path to .uidocs.yml or the directory containing it.",
    )
    parser.add_argument(
        "--local",
        type=Path,
        default=None,
        help="Read components from a local checkout instead of GitHub.",
    )
    parser.add_argument(
        "--github-token",
        default=None,
        help="GitHub token (overrides GITHUB_PERSONAL_ACCESS_TOKEN / GITHUB_TOKEN).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write diagnostics to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List available components.")
    _add_verbose_option(list_parser, suppress_default=True)

    _add_component_command(subparsers, "source", "Print a component's source file.", record=False)
    _add_component_command(subparsers, "tests", "Print a component's test file.", record=False)
    _add_component_command(subparsers, "metadata", "Show props, exports and dependencies.")
    _add_component_command(subparsers, "stories", "Show a component's Storybook stories.")

    docs_parser = _add_component_command(subparsers, "docs", "Show a component's MDX documentation.")
    docs_parser.add_argument(
        "--summary",
        action="store_true",
        help="Show derived metadata, usage patterns and accessibility notes instead.",
    )

    deps_parser = _add_component_command(subparsers, "deps", "Show a component's dependencies.")
    deps_parser.add_argument(
        "--deep",
        action="store_true",
        help="Follow sibling component imports recursively.",
    )

    theme_parser = subparsers.add_parser("theme", help="Show theme tokens or theme metadata.")
    _add_verbose_option(theme_parser, suppress_default=True)
    _add_format_option(theme_parser)
    theme_parser.add_argument(
        "--category",
        default=None,
        help="Only show one token category (color, font, spacing, shadow, radius, z, breakpoint).",
    )
    theme_parser.add_argument(
        "--metadata",
        action="store_true",
        help="Show theme metadata instead of tokens.",
    )

    search_parser = subparsers.add_parser("search", help="Search components by name.")
    _add_verbose_option(search_parser, suppress_default=True)
    _add_format_option(search_parser)
    search_parser.add_argument("query", help="Case-insensitive substring to look for.")
    search_parser.add_argument(
        "--include-description",
        action="store_true",
        help="Also match component descriptions (fetches every component).",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default=None, help="Bind address (default from config).")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default from config).")

    return parser


def _load_settings(args: argparse.Namespace) -> UIDocsConfig:
    config = load_config(args.config)
    source = config.source
    if args.local is not None:
        source = replace(source, local_path=args.local.expanduser().resolve())
    if args.github_token:
        source = replace(source, token=args.github_token)
    return replace(config, source=source)


def _build_library(config: UIDocsConfig) -> ComponentLibrary:
    return ComponentLibrary.from_config(config)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for uidocs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = _load_settings(args)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "serve":
        from .service import run_service

        run_service(
            args.host or config.service.host,
            args.port or config.service.port,
            lambda: _build_library(config),
            presenter=Presenter(config.presenter.templates_dir),
        )
        return

    library = _build_library(config)
    presenter = Presenter(config.presenter.templates_dir)
    try:
        output = _run_command(args, library, presenter)
    except SourceNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except SourceError as exc:
        parser.exit(1, f"uidocs {args.command} failed: {exc}\nRun with --verbose for more details.\n")
    sys.stdout.write(output)


def _run_command(args: argparse.Namespace, library: ComponentLibrary, presenter: Presenter) -> str:
    command = args.command
    if command == "list":
        return "".join(f"{name}\n" for name in library.list_components())
    if command == "source":
        return library.get_component_source(args.component)
    if command == "tests":
        return library.get_tests(args.component)

    record: Any
    if command == "metadata":
        record = library.get_component_metadata(args.component)
    elif command == "stories":
        record = library.get_stories(args.component)
    elif command == "docs":
        if args.summary:
            record = library.get_documentation_summary(args.component)
        else:
            record = library.get_documentation(args.component)
    elif command == "deps":
        record = library.get_dependencies(args.component, deep=args.deep)
    elif command == "theme":
        record = library.get_theme_metadata() if args.metadata else library.get_theme_tokens(args.category)
    elif command == "search":
        record = library.search(args.query, include_description=args.include_description)
        if args.format == "markdown":
            return "".join(
                f"- {result.name}" + (f": {result.description}" if result.description else "") + "\n"
                for result in record
            )
    else:  # pragma: no cover - argparse enforces choices
        raise ValueError(f"Unknown command: {command}")
    _LOGGER.debug("Rendering %s as %s", type(record).__name__, args.format)
    return presenter.render(record, args.format)


if __name__ == "__main__":
    main(sys.argv[1:])

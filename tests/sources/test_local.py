from __future__ import annotations

from pathlib import Path

import pytest

from uidocs.sources import LocalSourceProvider, SourceNotFoundError, SourceProvider


def test_local_provider_reads_files_and_lists_directories(tmp_path: Path) -> None:
    components = tmp_path / "components"
    (components / "Button").mkdir(parents=True)
    (components / "Alert").mkdir()
    (components / "index.ts").write_text("export {};", encoding="utf-8")
    (components / "Button" / "Button.tsx").write_text("export const Button = 1;", encoding="utf-8")

    provider = LocalSourceProvider(tmp_path)

    assert isinstance(provider, SourceProvider)
    assert provider.fetch_text("/components/Button/Button.tsx") == "export const Button = 1;"
    assert provider.list_directory("components/") == ["Alert", "Button"]


def test_missing_paths_raise_not_found(tmp_path: Path) -> None:
    provider = LocalSourceProvider(tmp_path)

    with pytest.raises(SourceNotFoundError):
        provider.fetch_text("nope.tsx")
    with pytest.raises(FileNotFoundError):
        provider.list_directory("nope")


def test_paths_cannot_escape_root(tmp_path: Path) -> None:
    root = tmp_path / "checkout"
    root.mkdir()
    (tmp_path / "secret.txt").write_text("secret", encoding="utf-8")

    provider = LocalSourceProvider(root)

    with pytest.raises(SourceNotFoundError, match="escapes"):
        provider.fetch_text("../secret.txt")

from __future__ import annotations

import os
from pathlib import Path

import pytest

from variant_builder.discover import entries as entries_mod
from variant_builder.discover.entries import (
    discover_page_entries,
    discover_plugin_entries,
    is_plugin_dir,
)
from variant_builder.errors import FilesystemError


def test_page_entry_lists_shims_before_page(project: Path) -> None:
    entry = discover_page_entries(project / "demo", 9123)

    assert set(entry) == {"home", "nostyle"}
    assert entry["home"] == [
        "react-hot-loader/patch",
        "webpack-dev-server/client?http://0.0.0.0:9123/",
        "webpack/hot/only-dev-server",
        "home.scss",
        "home.jsx",
    ]


def test_page_without_stylesheet_still_gets_entry(project: Path) -> None:
    entry = discover_page_entries(project / "demo", 9123)
    # nostyle.scss does not exist on disk; it is listed anyway
    assert entry["nostyle"][-2:] == ["nostyle.scss", "nostyle.jsx"]


def test_page_discovery_ignores_other_files(project: Path) -> None:
    entry = discover_page_entries(project / "components", 9123)
    assert set(entry) == {"index", "liveDemo"}


def test_empty_directory_yields_no_entries(tmp_path: Path) -> None:
    assert discover_page_entries(tmp_path, 9123) == {}


def test_missing_directory_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(FilesystemError):
        discover_page_entries(tmp_path / "nope", 9123)


def test_plugin_discovery_skips_files_and_dirs_without_index(project: Path) -> None:
    entry = discover_plugin_entries(project / "components" / "plugins")

    assert entry == {
        "gauge": ["./plugins/gauge/index.jsx"],
        "map": ["./plugins/map/index.jsx"],
    }


def test_plugin_root_with_one_file_and_two_plugins(tmp_path: Path) -> None:
    root = tmp_path / "plugins"
    for name in ("a", "b"):
        (root / name).mkdir(parents=True)
        (root / name / "index.jsx").write_text("", encoding="utf-8")
    (root / "stray.jsx").write_text("", encoding="utf-8")

    assert sorted(discover_plugin_entries(root)) == ["a", "b"]


def test_is_plugin_dir_predicate(tmp_path: Path) -> None:
    (tmp_path / "ok").mkdir()
    (tmp_path / "ok" / "index.jsx").write_text("", encoding="utf-8")
    (tmp_path / "bare").mkdir()
    (tmp_path / "file.jsx").write_text("", encoding="utf-8")

    assert is_plugin_dir(tmp_path / "ok")
    assert not is_plugin_dir(tmp_path / "bare")
    assert not is_plugin_dir(tmp_path / "file.jsx")


def test_missing_plugin_root_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(FilesystemError):
        discover_plugin_entries(tmp_path / "plugins")


def test_hidden_page_files_are_skipped(tmp_path: Path) -> None:
    (tmp_path / ".draft.jsx").write_text("", encoding="utf-8")
    (tmp_path / "page.jsx").write_text("", encoding="utf-8")

    assert set(discover_page_entries(tmp_path, 9123)) == {"page"}


def test_stat_failure_on_a_plugin_folder_is_a_filesystem_error(
    project: Path, monkeypatch
) -> None:
    def locked(candidate: Path) -> bool:
        raise PermissionError(13, "Permission denied", str(candidate))

    monkeypatch.setattr(entries_mod, "is_plugin_dir", locked)
    with pytest.raises(FilesystemError):
        discover_plugin_entries(project / "components" / "plugins")


def test_stat_failure_on_a_page_is_a_filesystem_error(project: Path, monkeypatch) -> None:
    def locked(candidate: Path) -> bool:
        raise PermissionError(13, "Permission denied", str(candidate))

    monkeypatch.setattr(entries_mod, "is_page_file", locked)
    with pytest.raises(FilesystemError):
        discover_page_entries(project / "demo", 9123)


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root ignores permission bits"
)
def test_unreadable_plugin_folder_is_a_filesystem_error(project: Path) -> None:
    locked = project / "components" / "plugins" / "gauge"
    locked.chmod(0)
    try:
        with pytest.raises(FilesystemError):
            discover_plugin_entries(project / "components" / "plugins")
    finally:
        locked.chmod(0o755)


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root ignores permission bits"
)
def test_unreadable_page_directory_is_a_filesystem_error(project: Path) -> None:
    locked = project / "demo"
    locked.chmod(0)
    try:
        with pytest.raises(FilesystemError):
            discover_page_entries(locked, 9123)
    finally:
        locked.chmod(0o755)

"""Entry discovery from the filesystem.

Two shapes are produced:
- page entries: one bundle per ``*.jsx`` page directly under a directory,
  prefixed with the hot-reload shims and the page's stylesheet.
- plugin entries: one bundle per plugin sub-directory that holds ``index.jsx``.

A missing or unreadable directory raises FilesystemError; an empty one yields
an empty map.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from variant_builder.errors import FilesystemError
from variant_builder.logging import get_logger
from variant_builder.types import EntryMap

log = get_logger("variant_builder.discover")

PAGE_SUFFIX = ".jsx"
STYLE_SUFFIX = ".scss"
PLUGIN_INDEX = "index.jsx"
HOT_PATCH = "react-hot-loader/patch"
HOT_RUNTIME = "webpack/hot/only-dev-server"


def dev_server_client(port: int) -> str:
    return f"webpack-dev-server/client?http://0.0.0.0:{port}/"


@contextmanager
def _scanning(directory: Path) -> Iterator[None]:
    # stat calls on children can fail too (EACCES on a locked sub-folder)
    try:
        yield
    except FilesystemError:
        raise
    except OSError as exc:
        raise FilesystemError(f"Cannot scan {directory}: {exc}") from exc


def _list_dir(directory: Path) -> list[Path]:
    if not directory.is_dir():
        raise FilesystemError(f"Not a directory: {directory}")
    return list(directory.iterdir())


def page_entry(stem: str, port: int) -> list[str]:
    # Shims first: they must execute before the page's own imports.
    return [
        HOT_PATCH,
        dev_server_client(port),
        HOT_RUNTIME,
        f"{stem}{STYLE_SUFFIX}",
        f"{stem}{PAGE_SUFFIX}",
    ]


def is_page_file(candidate: Path) -> bool:
    return (
        not candidate.name.startswith(".")
        and candidate.suffix == PAGE_SUFFIX
        and candidate.is_file()
    )


def discover_page_entries(directory: Path, port: int) -> EntryMap:
    """Map every page source under *directory* to its dev bundle module list.

    Hidden files are skipped. The stylesheet is listed whether or not it exists
    on disk.
    """
    with _scanning(directory):
        pages = sorted(p for p in _list_dir(directory) if is_page_file(p))
    entry: EntryMap = {p.stem: page_entry(p.stem, port) for p in pages}
    log.info("discovered %d page entries in %s", len(entry), directory)
    return entry


def list_plugin_candidates(plugin_directory: Path) -> list[Path]:
    with _scanning(plugin_directory):
        return _list_dir(plugin_directory)


def is_plugin_dir(candidate: Path) -> bool:
    return candidate.is_dir() and (candidate / PLUGIN_INDEX).is_file()


def discover_plugin_entries(plugin_directory: Path) -> EntryMap:
    """Return ``{plugin: ["./plugins/<plugin>/index.jsx"]}`` for each plugin folder.

    Module paths are relative to the library source root (the bundler context).
    Key order is not meaningful.
    """
    entry: EntryMap = {}
    with _scanning(plugin_directory):
        for candidate in list_plugin_candidates(plugin_directory):
            if not is_plugin_dir(candidate):
                log.debug("skipping non-plugin entry %s", candidate.name)
                continue
            entry[candidate.name] = [f"./plugins/{candidate.name}/{PLUGIN_INDEX}"]
    log.info("discovered %d plugin entries in %s", len(entry), plugin_directory)
    return entry

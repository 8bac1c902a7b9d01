"""Plugin/theme selection: one themed bundle, or one bundle per plugin."""

from __future__ import annotations

import copy
import re

from variant_builder.base import BASE_ENTRY
from variant_builder.discover.entries import discover_plugin_entries
from variant_builder.errors import ConfigurationError
from variant_builder.settings import Settings
from variant_builder.types import ConfigDescriptor, EntryMap, ExternalSpec

_BUNDLE_NAME = re.compile(r"^[^\s/\\]+$")


def themed_entry(base_entry: EntryMap, theme_name: str) -> EntryMap:
    if not _BUNDLE_NAME.match(theme_name):
        raise ConfigurationError(f"Invalid theme name: {theme_name!r}")
    if BASE_ENTRY not in base_entry:
        raise ConfigurationError(
            f"Theme {theme_name!r} requires an {BASE_ENTRY!r} entry in the base descriptor"
        )
    return {theme_name: copy.deepcopy(base_entry[BASE_ENTRY])}


def select_entries(
    base_entry: EntryMap,
    settings: Settings,
    theme_name: str | None = None,
    is_plugin: bool = False,
) -> EntryMap:
    """Pick the entry map for a build.

    Plugin discovery is applied last, so it wins over a theme collapse when both
    are requested.
    """
    entry = copy.deepcopy(base_entry)
    if theme_name:
        entry = themed_entry(base_entry, theme_name)
    if is_plugin:
        entry = discover_plugin_entries(settings.plugin_dir)
    return entry


def apply_plugin_output(descriptor: ConfigDescriptor, settings: Settings) -> None:
    """Name each plugin bundle's global after the library and externalize the host."""
    descriptor.output.library = f"{settings.library_name}[name]"
    descriptor.externals[settings.package_name] = ExternalSpec.for_package(
        settings.library_name, settings.package_name
    )

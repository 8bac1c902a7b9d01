"""Variant composer: derive dev / prod / online descriptors from the base.

Each function deep-copies *base* first; the base and earlier results are never
touched. *ctx* is a ``core.BuildContext`` (settings, resolved port, progress sink).
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from variant_builder.discover.entries import discover_page_entries
from variant_builder.selector import apply_plugin_output, select_entries
from variant_builder.types import (
    ConfigDescriptor,
    OptimizationSpec,
    OutputSpec,
    PluginDirective,
)

if TYPE_CHECKING:
    from variant_builder.core import BuildContext

DEFAULT_THEME = "index"
SOURCE_MAP = "source-map"


def _define(version: str, theme: str) -> PluginDirective:
    return PluginDirective(
        kind="define",
        options={"__VERSION__": json.dumps(version), "__THEME__": json.dumps(theme)},
    )


def _progress(ctx: BuildContext) -> PluginDirective:
    return PluginDirective(kind="progress", handler=ctx.progress)


def _minimizers() -> OptimizationSpec:
    return OptimizationSpec(
        minimizer=[
            PluginDirective(kind="uglify-js", options={"uglifyOptions": {"output": {"comments": False}}}),
            PluginDirective(kind="optimize-css-assets"),
        ]
    )


def _clone_for_build(
    base: ConfigDescriptor,
    ctx: BuildContext,
    theme_name: str | None,
    is_plugin: bool,
) -> ConfigDescriptor:
    cfg = base.model_copy(deep=True)
    cfg.entry = select_entries(base.entry, ctx.settings, theme_name, is_plugin)
    if is_plugin:
        apply_plugin_output(cfg, ctx.settings)
    return cfg


def dev(base: ConfigDescriptor, ctx: BuildContext) -> ConfigDescriptor:
    """Local demo build: demo-rooted output, global React, hot-reload entries."""
    settings = ctx.settings
    demo = str(settings.demo_dir)

    cfg = base.model_copy(deep=True)
    cfg.port = ctx.port
    cfg.context = demo
    cfg.resolve.modules = [demo, "node_modules"]
    cfg.output = OutputSpec(path=demo, filename="[name].js", publicPath="/demo/")
    # the demo page loads React from script tags
    cfg.externals["react"] = "var React"
    cfg.externals["react-dom"] = "var ReactDOM"

    cfg.plugins.append(_progress(ctx))
    cfg.plugins.append(_define(settings.version, DEFAULT_THEME))
    cfg.devtool = SOURCE_MAP

    # source-directory live demos override demo pages of the same name
    cfg.entry = {
        **discover_page_entries(settings.demo_dir, ctx.port),
        **discover_page_entries(settings.src_dir, ctx.port),
    }
    return cfg


def prod(
    base: ConfigDescriptor,
    ctx: BuildContext,
    theme_name: str | None = None,
    is_plugin: bool = False,
) -> ConfigDescriptor:
    """Minified build for npm/CDN release."""
    cfg = _clone_for_build(base, ctx, theme_name, is_plugin)
    cfg.mode = "production"
    cfg.optimization = _minimizers()
    cfg.plugins.append(_define(ctx.settings.version, theme_name or DEFAULT_THEME))
    return cfg


def online(
    base: ConfigDescriptor,
    ctx: BuildContext,
    theme_name: str | None = None,
    is_plugin: bool = False,
) -> ConfigDescriptor:
    """Unminified, source-mapped CDN build; entries and externals match ``prod``."""
    cfg = _clone_for_build(base, ctx, theme_name, is_plugin)
    cfg.port = ctx.port
    cfg.plugins.append(_progress(ctx))
    cfg.plugins.append(_define(ctx.settings.version, DEFAULT_THEME))
    cfg.devtool = SOURCE_MAP
    return cfg


VARIANTS = {"dev": dev, "prod": prod, "online": online}

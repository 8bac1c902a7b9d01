"""Process-wide defaults: context, base descriptor and convenience variants.

The pure functions in ``variants`` take the base descriptor and context
explicitly; the helpers here bind them to one memoized default per process.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from variant_builder import variants
from variant_builder.base import build_base_descriptor
from variant_builder.errors import ConfigurationError
from variant_builder.ports import resolved_port
from variant_builder.progress import TerminalProgress
from variant_builder.settings import SRC_DIRNAME, Settings, default_root
from variant_builder.types import ConfigDescriptor, ProgressSink

SRC_PATH: Path = default_root() / SRC_DIRNAME


@dataclass
class BuildContext:
    settings: Settings
    port: int
    progress: ProgressSink = field(default_factory=TerminalProgress)

    @classmethod
    def create(cls, root: Path | str | None = None, progress: ProgressSink | None = None) -> BuildContext:
        settings = Settings.from_root(root)
        port = resolved_port(settings.preferred_port)
        return cls(settings=settings, port=port, progress=progress or TerminalProgress())


@lru_cache(maxsize=1)
def default_context() -> BuildContext:
    return BuildContext.create()


@lru_cache(maxsize=1)
def base_descriptor() -> ConfigDescriptor:
    ctx = default_context()
    return build_base_descriptor(ctx.settings, ctx.port)


def derive(
    variant: str,
    ctx: BuildContext,
    theme_name: str | None = None,
    is_plugin: bool = False,
) -> ConfigDescriptor:
    """Build *variant* ("dev" | "prod" | "online") for *ctx* with a fresh base."""
    base = build_base_descriptor(ctx.settings, ctx.port)
    if variant == "dev":
        if theme_name or is_plugin:
            raise ConfigurationError("dev takes no theme or plugin options")
        return variants.dev(base, ctx)
    try:
        fn = variants.VARIANTS[variant]
    except KeyError:
        raise ConfigurationError(f"Unknown variant: {variant}") from None
    return fn(base, ctx, theme_name, is_plugin)


def dev() -> ConfigDescriptor:
    return variants.dev(base_descriptor(), default_context())


def prod(theme_name: str | None = None, is_plugin: bool = False) -> ConfigDescriptor:
    return variants.prod(base_descriptor(), default_context(), theme_name, is_plugin)


def online(theme_name: str | None = None, is_plugin: bool = False) -> ConfigDescriptor:
    return variants.online(base_descriptor(), default_context(), theme_name, is_plugin)

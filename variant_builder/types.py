"""Shared Pydantic models for bundler configuration descriptors."""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel, Field

# bundle name -> ordered module identifiers (order is load order)
EntryMap = dict[str, list[str]]

ProgressSink = Callable[[float, str], None]


class OutputSpec(BaseModel):
    path: str
    filename: str = "[name].js"
    publicPath: str = "/"
    library: str | None = None
    libraryTarget: str | None = None


class ResolveSpec(BaseModel):
    modules: list[str] = Field(default_factory=list)
    extensions: list[str] = Field(default_factory=list)
    alias: dict[str, str] = Field(default_factory=dict)


class ExternalSpec(BaseModel):
    """How one import resolves in each consumption format."""

    root: str
    commonjs2: str
    commonjs: str
    amd: str

    @classmethod
    def for_package(cls, global_name: str, package: str) -> ExternalSpec:
        return cls(root=global_name, commonjs2=package, commonjs=package, amd=package)


class LoaderSpec(BaseModel):
    loader: str
    options: dict = Field(default_factory=dict)


class ModuleRule(BaseModel):
    test: str
    exclude: str | None = None
    use: list[LoaderSpec] = Field(default_factory=list)


class PluginDirective(BaseModel):
    """Opaque instruction for the bundler (``define``, ``progress``, ``css-extract`` ...).

    ``handler`` carries an injected callable (the progress sink) and is never
    serialized.
    """

    kind: str
    options: dict = Field(default_factory=dict)
    handler: ProgressSink | None = Field(default=None, exclude=True)


class OptimizationSpec(BaseModel):
    minimizer: list[PluginDirective] = Field(default_factory=list)


class ConfigDescriptor(BaseModel):
    """Everything the external bundler needs for one run."""

    context: str
    port: int | None = None
    mode: Literal["development", "production"] = "development"
    entry: EntryMap = Field(default_factory=dict)
    output: OutputSpec
    resolve: ResolveSpec = Field(default_factory=ResolveSpec)
    externals: dict[str, ExternalSpec | str] = Field(default_factory=dict)
    module_rules: list[ModuleRule] = Field(default_factory=list)
    plugins: list[PluginDirective] = Field(default_factory=list)
    devtool: str | None = None
    optimization: OptimizationSpec | None = None

    def plugin(self, kind: str) -> PluginDirective | None:
        """Return the first plugin directive of *kind*, if any."""
        for p in self.plugins:
            if p.kind == kind:
                return p
        return None

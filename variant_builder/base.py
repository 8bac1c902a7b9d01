"""Base descriptor: the template every variant is derived from.

Built once per context and never mutated; variants deep-copy it.
"""

from __future__ import annotations

from variant_builder.settings import Settings
from variant_builder.types import (
    ConfigDescriptor,
    ExternalSpec,
    LoaderSpec,
    ModuleRule,
    OutputSpec,
    PluginDirective,
    ResolveSpec,
)

BASE_ENTRY = "index"
FONT_PATTERN = r"\.(woff|woff2|eot|ttf|otf|svg)((\?|#).*)?$"


def _externals() -> dict[str, ExternalSpec | str]:
    return {
        "react": ExternalSpec.for_package("React", "react"),
        "react-dom": ExternalSpec.for_package("ReactDOM", "react-dom"),
    }


def _rules() -> list[ModuleRule]:
    return [
        ModuleRule(
            test=r"\.(js|jsx)$",
            exclude="node_modules",
            use=[LoaderSpec(loader="babel-loader")],
        ),
        ModuleRule(
            test=r"\.scss$",
            use=[
                LoaderSpec(loader="mini-css-extract-plugin/loader", options={"hmr": False}),
                LoaderSpec(loader="css-loader"),
                LoaderSpec(loader="sass-loader"),
            ],
        ),
        ModuleRule(
            test=FONT_PATTERN,
            use=[
                LoaderSpec(
                    loader="file-loader",
                    options={"name": "[name].[ext]", "publicPath": "./"},
                )
            ],
        ),
    ]


def build_base_descriptor(settings: Settings, port: int | None = None) -> ConfigDescriptor:
    src = str(settings.src_dir)
    return ConfigDescriptor(
        context=src,
        port=port,
        mode="development",
        entry={BASE_ENTRY: ["./index.scss", "./index.jsx"]},
        output=OutputSpec(
            path=str(settings.output_dir),
            filename="[name].js",
            publicPath=settings.public_path,
            library=settings.library_name,
            libraryTarget="umd",
        ),
        resolve=ResolveSpec(
            modules=[src, "node_modules"],
            extensions=[".js", ".jsx"],
            alias={
                settings.package_name: src,
                f"{settings.package_name}/lib": src,
                "@antv/data-set$": str(settings.src_dir / "common" / "dataSet"),
                "@antv/data-set/lib": "@antv/data-set/lib",
            },
        ),
        externals=_externals(),
        module_rules=_rules(),
        plugins=[PluginDirective(kind="css-extract", options={"filename": "[name].css"})],
    )

"""Project layout and library naming.

Paths are resolved against a project root that defaults to
``$VARIANT_BUILDER_ROOT`` or the current directory.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field

from variant_builder.errors import ConfigurationError

ROOT_ENV = "VARIANT_BUILDER_ROOT"
DEFAULT_VERSION = "0.0.0"
SRC_DIRNAME = "components"


def default_root() -> Path:
    return Path(os.environ.get(ROOT_ENV) or Path.cwd()).resolve()


def read_version(root: Path) -> str:
    """Return the ``version`` field of ``package.json`` under *root*.

    A missing file (or field) yields ``0.0.0``; a malformed file is an error.
    """
    pkg = root / "package.json"
    if not pkg.exists():
        return DEFAULT_VERSION
    try:
        data = json.loads(pkg.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Cannot read {pkg}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{pkg} must contain a JSON object")
    return str(data.get("version") or DEFAULT_VERSION)


class Settings(BaseModel):
    root: Path
    src_dir: Path
    demo_dir: Path
    output_dir: Path
    plugin_dir: Path
    library_name: str = "CloudCharts"
    package_name: str = "@alicloud/cloud-charts"
    preferred_port: int = Field(9009, ge=0, le=65535)
    public_path: str = "/build/"
    version: str = DEFAULT_VERSION

    @classmethod
    def from_root(cls, root: Path | str | None = None, **overrides) -> Settings:
        base = Path(root).resolve() if root is not None else default_root()
        values = {
            "root": base,
            "src_dir": base / SRC_DIRNAME,
            "demo_dir": base / "demo",
            "output_dir": base / "build",
            "plugin_dir": base / SRC_DIRNAME / "plugins",
            "version": read_version(base),
        }
        values.update(overrides)
        return cls(**values)

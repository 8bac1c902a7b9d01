"""Rendering descriptors for the bundler and schema validation."""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from variant_builder.types import ConfigDescriptor

# --- Schema loaders ---------------------------------------------------------


def _load_schema(package: str, resource_name: str) -> dict:
    with resources.files(package).joinpath(resource_name).open("r", encoding="utf-8") as f:
        return json.load(f)


def _config_schema() -> dict:
    return _load_schema("variant_builder.schema", "config.schema.json")


# --- Rendering --------------------------------------------------------------


def to_bundler_dict(descriptor: ConfigDescriptor) -> dict[str, Any]:
    """Render *descriptor* in the bundler's own layout.

    Rules move under ``module.rules`` and externals become a one-element list.
    Injected callables (progress handlers) are dropped.
    """
    data = descriptor.model_dump(mode="json", exclude_none=True)
    data["module"] = {"rules": data.pop("module_rules")}
    data["externals"] = [data["externals"]]
    return data


# --- Public validators ------------------------------------------------------


def validate_config(data: dict) -> None:
    Draft202012Validator(_config_schema()).validate(data)


def write_config(descriptor: ConfigDescriptor, path: Path) -> dict[str, Any]:
    """Validate and write *descriptor* as JSON to *path*; return the rendered dict."""
    data = to_bundler_dict(descriptor)
    validate_config(data)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return data

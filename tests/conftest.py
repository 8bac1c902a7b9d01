from __future__ import annotations

import json
from pathlib import Path

import pytest

from variant_builder.core import BuildContext
from variant_builder.progress import null_progress
from variant_builder.settings import Settings

TEST_PORT = 9123


def make_project(root: Path, version: str = "1.2.3") -> Path:
    """Create a small component-library tree: sources, demo pages and plugins."""
    src = root / "components"
    demo = root / "demo"
    plugins = src / "plugins"
    for d in (src, demo, plugins):
        d.mkdir(parents=True, exist_ok=True)

    (root / "package.json").write_text(
        json.dumps({"name": "@alicloud/cloud-charts", "version": version}), encoding="utf-8"
    )
    (src / "index.jsx").write_text("export default {};\n", encoding="utf-8")
    (src / "index.scss").write_text("", encoding="utf-8")
    (src / "liveDemo.jsx").write_text("", encoding="utf-8")
    (src / "liveDemo.scss").write_text("", encoding="utf-8")
    (src / "helpers.js").write_text("", encoding="utf-8")

    (demo / "home.jsx").write_text("", encoding="utf-8")
    (demo / "home.scss").write_text("", encoding="utf-8")
    (demo / "nostyle.jsx").write_text("", encoding="utf-8")

    for name in ("gauge", "map"):
        (plugins / name).mkdir()
        (plugins / name / "index.jsx").write_text("", encoding="utf-8")
    (plugins / "drafts").mkdir()
    (plugins / "README.md").write_text("plugins\n", encoding="utf-8")
    return root


@pytest.fixture
def project(tmp_path: Path) -> Path:
    return make_project(tmp_path / "lib")


@pytest.fixture
def ctx(project: Path) -> BuildContext:
    return BuildContext(settings=Settings.from_root(project), port=TEST_PORT, progress=null_progress)

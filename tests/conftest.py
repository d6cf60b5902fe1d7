"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
import tomlkit

ROOT_PYPROJECT = """\
[project]
name = "workspace-root"
version = "0.0.0"

[tool.uv.workspace]
members = ["packages/*"]
"""

PACKAGES = {
    "pkg-a": """\
[project]
name = "pkg-a"
version = "1.0.0"
# runtime deps
dependencies = ["requests>=2.0"]
""",
    "pkg-b": """\
[project]
name = "pkg-b"
version = "2.0.0"
dependencies = [
    "pkg-a>=1.0",
    "click>=8.0",
]
""",
    "pkg-c": """\
[project]
name = "pkg-c"
version = "3.0.0"
dependencies = ["pkg-b>=2.0"]

[project.optional-dependencies]
dev = ["pkg-a[extra]>=1.0", "pytest>=8.0"]
""",
}


@pytest.fixture
def tmp_pyproject(tmp_path: Path) -> Path:
    """Create a temporary pyproject.toml file."""
    content = """\
[project]
name = "test-package"
version = "1.0.0"
dependencies = [
    "requests>=2.0",
    "internal-dep>=1.0",
]

[project.optional-dependencies]
dev = ["pytest>=8.0", "another-internal>=0.5"]

[dependency-groups]
test = ["pytest>=8.0", "group-internal>=0.1"]
"""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(content)
    return pyproject


@pytest.fixture
def sample_toml_doc() -> tomlkit.TOMLDocument:
    """Create a sample TOML document."""
    content = """\
[project]
name = "my-package"
version = "2.0.0"
dependencies = ["click>=8.0", "pydantic>=2.0"]

[project.optional-dependencies]
dev = ["pytest>=8.0"]
docs = ["sphinx>=7.0"]

[dependency-groups]
test = ["hypothesis>=6.0"]

[tool.uv.workspace]
members = ["packages/*", "libs/*"]

[tool.ripple]
version-upgrade-step = "minor"
publish-blacklist = ["docs-site"]
"""
    return tomlkit.parse(content)


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A uv workspace where pkg-b depends on pkg-a and pkg-c on both.

    The working directory is switched to the workspace root.
    """
    (tmp_path / "pyproject.toml").write_text(ROOT_PYPROJECT)
    for name, content in PACKAGES.items():
        pkg_dir = tmp_path / "packages" / name
        pkg_dir.mkdir(parents=True)
        (pkg_dir / "pyproject.toml").write_text(content)
    monkeypatch.chdir(tmp_path)
    return tmp_path

"""In-place edits of package manifests.

Each edit is a scoped read-modify-write of `<package dir>/pyproject.toml`
through tomlkit: only the targeted value changes, every other byte of the
file is written back as it was read.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .deps import pin_dependency
from .errors import ManifestParseError
from .toml import load_pyproject, save_pyproject

MANIFEST_NAME = "pyproject.toml"


def manifest_path(package_path: str | Path) -> Path:
    """Return the pyproject.toml path for a package directory."""
    return Path(package_path) / MANIFEST_NAME


def set_own_version(package_path: str | Path, new_version: str) -> None:
    """Set [project].version of the package at `package_path`.

    Raises:
        ManifestParseError: If the manifest is unreadable, has no [project]
            table, or declares its version as dynamic.
    """
    path = manifest_path(package_path)
    doc = load_pyproject(path)

    project: Any = doc.get("project")
    if project is None or "version" not in project:
        raise ManifestParseError(f"{path}: no [project].version field to update")

    project["version"] = new_version
    save_pyproject(path, doc)


def set_dependency_version(
    package_path: str | Path, dependency_name: str, new_version: str
) -> None:
    """Pin `dependency_name` to `new_version` in the package at `package_path`.

    Raises:
        ManifestParseError: If the manifest is unreadable or does not
            declare `dependency_name` anywhere.
    """
    path = manifest_path(package_path)
    doc = load_pyproject(path)

    if not pin_dependency(doc, dependency_name, new_version):
        raise ManifestParseError(
            f"{path}: no dependency on {dependency_name} to update"
        )

    save_pyproject(path, doc)

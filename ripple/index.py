"""Workspace package discovery and lookup.

The index is built once per run from every workspace member, not just the
changed ones, so a dependent's path and snapshot version can be resolved
without rescanning the filesystem.
"""

from __future__ import annotations

import glob
from collections.abc import Iterable, Iterator
from pathlib import Path

from packaging.requirements import InvalidRequirement

from .deps import dep_canonical_name
from .errors import ConfigurationError, ManifestParseError
from .models import PackageInfo
from .shell import step
from .toml import (
    get_all_dependency_strings,
    get_project_name,
    get_project_version,
    get_workspace_member_globs,
    load_pyproject,
)


class PackageIndex:
    """Read-only lookup of workspace packages and their reverse dependencies."""

    def __init__(self, packages: Iterable[PackageInfo]) -> None:
        self._packages: dict[str, PackageInfo] = {p.name: p for p in packages}
        self._dependents: dict[str, list[PackageInfo]] = {
            n: [] for n in self._packages
        }
        for info in self._packages.values():
            for dep in info.deps:
                if dep in self._dependents:
                    self._dependents[dep].append(info)

    def find(self, name: str) -> PackageInfo | None:
        """Return the package called `name`, or None if it is not in the workspace."""
        return self._packages.get(name)

    def dependents_of(self, name: str) -> tuple[PackageInfo, ...]:
        """Packages that declare a dependency on `name`, in discovery order."""
        return tuple(self._dependents.get(name, ()))

    def names(self) -> list[str]:
        return list(self._packages)

    def __contains__(self, name: object) -> bool:
        return name in self._packages

    def __iter__(self) -> Iterator[PackageInfo]:
        return iter(self._packages.values())

    def __len__(self) -> int:
        return len(self._packages)


def discover_packages() -> PackageIndex:
    """Scan the workspace and index all packages.

    Reads [tool.uv.workspace].members from root pyproject.toml to find
    package directories, then extracts name, version, and internal deps
    from each package's pyproject.toml.

    Raises:
        ConfigurationError: If no workspace members or packages are found.
    """
    step("Discovering workspace packages")

    root = Path.cwd()
    root_doc = load_pyproject(root / "pyproject.toml")
    member_globs = get_workspace_member_globs(root_doc)

    # Expand globs to find all package directories
    member_dirs: list[Path] = []
    for pattern in member_globs:
        for match in sorted(glob.glob(str(root / pattern))):
            p = Path(match)
            if (p / "pyproject.toml").exists():
                member_dirs.append(p)

    if not member_dirs:
        raise ConfigurationError("No packages found matching workspace members")

    # First pass: collect basic info and raw dependency strings
    docs = {d: load_pyproject(d / "pyproject.toml") for d in member_dirs}
    names = {d: get_project_name(doc, d.name) for d, doc in docs.items()}
    workspace_names = set(names.values())

    # Second pass: keep only internal deps, ignoring external packages
    packages: list[PackageInfo] = []
    for d, doc in docs.items():
        internal: list[str] = []
        for dep_str in get_all_dependency_strings(doc):
            try:
                dep_name = dep_canonical_name(dep_str)
            except InvalidRequirement as exc:
                raise ManifestParseError(
                    f"{d / 'pyproject.toml'}: invalid dependency {dep_str!r}"
                ) from exc
            if dep_name in workspace_names and dep_name not in internal:
                internal.append(dep_name)
        packages.append(
            PackageInfo(
                name=names[d],
                version=get_project_version(doc),
                path=str(d.relative_to(root)),
                deps=tuple(internal),
            )
        )

    index = PackageIndex(packages)

    for info in index:
        deps = f" → [{', '.join(info.deps)}]" if info.deps else ""
        print(f"  {info.name} {info.version} ({info.path}){deps}")

    return index

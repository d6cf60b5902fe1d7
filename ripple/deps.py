"""Dependency handling utilities.

Provides functions for parsing PEP 508 dependency strings and pinning
internal workspace dependencies to exact versions inside a parsed
pyproject.toml document.
"""

from __future__ import annotations

from typing import Any

import tomlkit
from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import canonicalize_name


def dep_canonical_name(dep_str: str) -> str:
    """Extract the canonical package name from a PEP 508 dependency string.

    Handles version specifiers, extras, and normalizes the name per PEP 503
    (lowercase, hyphens instead of underscores).

    Examples:
        "requests>=2.0" → "requests"
        "My_Package[extra]~=1.0" → "my-package"
    """
    return canonicalize_name(Requirement(dep_str).name)


def pin_dep(dep_str: str, version: str) -> str:
    """Pin a PEP 508 dependency to an exact version.

    Preserves any extras and environment markers in the original dependency
    string, but replaces the version specifier with an exact pin.

    Examples:
        pin_dep("requests>=2.0", "2.31.0") → "requests==2.31.0"
        pin_dep("pkg[extra1,extra2]~=1.0", "1.5.0") → "pkg[extra1,extra2]==1.5.0"
        pin_dep('pkg>=1; python_version<"3.12"', "2.0.0")
            → 'pkg==2.0.0; python_version < "3.12"'
    """
    req = Requirement(dep_str)
    # Sort extras alphabetically for consistent output
    extras = f"[{','.join(sorted(req.extras))}]" if req.extras else ""
    marker = f"; {req.marker}" if req.marker else ""
    return f"{req.name}{extras}=={version}{marker}"


def pin_dependency(doc: tomlkit.TOMLDocument, name: str, version: str) -> int:
    """Pin every declaration of `name` in a pyproject document to `version`.

    Internal deps are pinned in all locations:
    - [project].dependencies
    - [project].optional-dependencies.*
    - [dependency-groups].*

    Args:
        doc: Parsed pyproject.toml document (modified in place).
        name: Dependency name; compared after PEP 503 normalization.
        version: Exact version to pin to.

    Returns:
        Number of dependency strings rewritten.
    """
    target = canonicalize_name(name)
    project: Any = doc.get("project", {})
    count = 0

    deps = project.get("dependencies")
    if isinstance(deps, list):
        count += _pin_dep_list(deps, target, version)

    opt_deps = project.get("optional-dependencies")
    if isinstance(opt_deps, dict):
        for group in opt_deps.values():
            if isinstance(group, list):
                count += _pin_dep_list(group, target, version)

    dep_groups = doc.get("dependency-groups")
    if isinstance(dep_groups, dict):
        for group in dep_groups.values():
            if isinstance(group, list):
                count += _pin_dep_list(group, target, version)

    return count


def _pin_dep_list(deps: list, target: str, version: str) -> int:
    """Pin matching dependencies in a list, modifying in place.

    Entries that are not PEP 508 strings (include-group tables) or that
    fail to parse are left untouched.
    """
    count = 0
    for i, dep in enumerate(deps):
        if not isinstance(dep, str):
            continue
        try:
            dep_name = dep_canonical_name(str(dep))
        except InvalidRequirement:
            continue
        if dep_name == target:
            deps[i] = pin_dep(str(dep), version)
            count += 1
    return count

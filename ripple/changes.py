"""Change detection against the last release tag.

Produces the ordered list of changed packages, each with its direct
dependents, that the propagation step consumes.
"""

from __future__ import annotations

from collections.abc import Iterable

from .errors import ConfigurationError
from .graph import release_order
from .index import PackageIndex
from .models import ChangedPackage
from .shell import git, step


def find_last_tag() -> str | None:
    """Find the most recent release tag (v* pattern).

    Tags are sorted by version, so v2024.01.15-abc comes after v2024.01.14-xyz.
    Returns None if no release tags exist yet.
    """
    step("Finding last release tag")
    tags = git("tag", "--list", "v*", "--sort=-v:refname", check=False)
    tag = tags.splitlines()[0] if tags else None
    print(f"  {tag or '<none, every package is new>'}")
    return tag


def detect_changes(
    index: PackageIndex, last_tag: str | None, force_all: bool
) -> list[str]:
    """Determine which packages changed since the last release.

    A package is changed if:
    1. force_all is True
    2. There is no previous release tag (first release)
    3. Any file in the package directory changed since last_tag

    Only direct changes are reported. Dependents are handled by propagation.

    Returns:
        Changed package names, dependencies first.
    """
    step("Detecting changes")

    if force_all or not last_tag:
        dirty = set(index.names())
        reason = "force release" if force_all else "first release"
        print(f"  {reason}: all packages marked changed")
    else:
        changed_files = set(git("diff", "--name-only", last_tag, "HEAD").splitlines())
        dirty = set()
        for info in index:
            prefix = info.path.rstrip("/") + "/"
            if any(f.startswith(prefix) for f in changed_files):
                dirty.add(info.name)
                print(f"  {info.name}: changed since {last_tag}")

    return release_order(index, dirty)


def changed_entries(index: PackageIndex, names: Iterable[str]) -> list[ChangedPackage]:
    """Attach each changed package's dependents, looked up before any edits.

    Raises:
        ConfigurationError: If a name is not a workspace member.
    """
    entries: list[ChangedPackage] = []
    for name in names:
        info = index.find(name)
        if info is None:
            raise ConfigurationError(
                f"Changed package {name} is not a workspace member"
            )
        entries.append(
            ChangedPackage(package=info, dependents=index.dependents_of(name))
        )
    return entries

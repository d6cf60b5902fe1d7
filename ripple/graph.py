"""Release ordering for changed packages.

Changed packages are published dependencies first, so every pin a
dependent receives points at a version that is already uploaded. The walk
covers the whole workspace graph: a changed package that reaches another
changed package only through unchanged members still comes after it.
"""

from __future__ import annotations

from collections.abc import Iterable

from .errors import ConfigurationError
from .index import PackageIndex


def release_order(index: PackageIndex, names: Iterable[str]) -> list[str]:
    """Order `names` so each package follows the workspace packages it needs.

    Depth-first over every member in discovery order, emitting a package
    once all of its internal dependencies are done. Unrelated packages keep
    their discovery order.

    Raises:
        ConfigurationError: If a name is not a workspace member, or if the
            workspace dependency graph has a cycle.

    Example:
        pkg-c needs pkg-b, pkg-b needs pkg-a:
        release_order(index, ["pkg-c", "pkg-a"]) → ["pkg-a", "pkg-c"]
    """
    selected = set(names)
    unknown = sorted(n for n in selected if n not in index)
    if unknown:
        raise ConfigurationError(f"Not workspace members: {', '.join(unknown)}")

    done: set[str] = set()
    path: list[str] = []
    order: list[str] = []

    def visit(name: str) -> None:
        if name in done:
            return
        if name in path:
            cycle = path[path.index(name):] + [name]
            raise ConfigurationError(
                f"Dependency cycle detected: {' → '.join(cycle)}"
            )

        path.append(name)
        for dep in index.find(name).deps:
            if dep in index:
                visit(dep)
        path.pop()

        done.add(name)
        if name in selected:
            order.append(name)

    for info in index:
        visit(info.name)
    return order

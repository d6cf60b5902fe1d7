"""Version propagation from changed packages to their direct dependents.

For every changed package, in input order:

1. Skip it entirely if it is blacklisted.
2. Publish it with a bumped version.
3. If cascading is enabled, for each direct dependent, in order:
   - skip blacklisted dependents (no manifest rewrite, no publish);
   - pin the dependent's requirement on the package to the new version;
   - publish the dependent too, unless it is itself in the changed set
     (its own iteration handles it) or was already published this run.

Propagation is one hop only. Dependents are bumped from the version
recorded at discovery, never from a value updated earlier in the run.
"""

from __future__ import annotations

from collections.abc import Sequence

from .errors import ConfigurationError
from .index import PackageIndex
from .manifest import set_dependency_version
from .models import ChangedPackage, PublishedPackage
from .publish import ReleaseContext, publish_package


def propagate(
    changed: Sequence[ChangedPackage],
    index: PackageIndex,
    context: ReleaseContext,
) -> list[PublishedPackage]:
    """Publish changed packages and cascade to their dependents.

    Args:
        changed: Changed packages with their dependents, in release order.
        index: Index of every workspace package.
        context: Run state; its audit trail receives every publish.

    Returns:
        The audit trail, in publish order. Each name appears at most once.

    Raises:
        ConfigurationError: If a changed package is not in the index.
    """
    changed_names = {entry.name for entry in changed}

    for entry in changed:
        if context.is_blacklisted(entry.name):
            print(f"  {entry.name}: blacklisted, skipped")
            continue

        member = index.find(entry.name)
        if member is None:
            raise ConfigurationError(
                f"Changed package {entry.name} is not a workspace member"
            )

        if entry.name in context.scheduled:
            # Duplicate entry in the changed list
            continue
        # The entry's version is bumped; the index only supplies the location
        package = entry.package.model_copy(update={"path": member.path})
        record = publish_package(package, context)

        if not context.cascade:
            continue

        for dependent in entry.dependents:
            if context.is_blacklisted(dependent.name):
                print(f"  {dependent.name}: blacklisted, not updated")
                continue

            set_dependency_version(dependent.path, entry.name, record.new_version)
            print(f"  {dependent.name}: pinned {entry.name}=={record.new_version}")

            if dependent.name in changed_names or dependent.name in context.scheduled:
                continue
            publish_package(dependent, context)

    return context.published

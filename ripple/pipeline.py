"""Release pipeline: discover → diff → propagate → publish → commit.

This module orchestrates the ripple release process:
1. Load [tool.ripple] settings
2. Discover all packages in the workspace
3. Detect which packages changed since the last release tag
4. Bump and publish each changed package
5. Pin the new version in each direct dependent and republish it
6. Commit the edited manifests and push to the configured branch

Nothing is rolled back on failure: packages published before an error
stay published and their manifests stay edited.
"""

from __future__ import annotations

from .changes import changed_entries, detect_changes, find_last_tag
from .commit import commit_release
from .config import ReleaseConfig, load_config
from .index import discover_packages
from .models import PublishedPackage
from .propagate import propagate
from .publish import Publisher, ReleaseContext, format_report, uv_publish
from .shell import step


def run_release(
    *,
    config: ReleaseConfig | None = None,
    force_all: bool = False,
    publisher: Publisher = uv_publish,
) -> list[PublishedPackage]:
    """Execute the full release pipeline.

    Args:
        config: Release settings. Loaded from pyproject.toml if omitted.
        force_all: If True, treat every package as changed.
        publisher: Callable that uploads one package.

    Returns:
        The audit trail of published packages, in publish order.
    """
    config = config or load_config()

    # Phase 1: Discovery
    index = discover_packages()
    last_tag = find_last_tag()
    changed_names = detect_changes(index, last_tag, force_all)

    if not changed_names:
        print("\nNothing changed since last release.")
        return []

    # Phase 2: Publish
    step(f"Publishing {len(changed_names)} changed packages ({config.policy})")
    context = ReleaseContext.from_config(config, publisher=publisher)
    published = propagate(changed_entries(index, changed_names), index, context)

    step("Published packages")
    print(format_report(published) or "  <none>")

    # Phase 3: Commit
    if config.commit_branch:
        commit_release(
            published,
            config.commit_branch,
            config.commit_message,
            tag=config.tag_release,
        )

    print(f"\n{'=' * 60}\nDone!\n{'=' * 60}")
    return published

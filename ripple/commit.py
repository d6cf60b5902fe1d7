"""Committing and pushing the manifest edits of a release run."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from .models import PublishedPackage
from .shell import git, step


def build_commit_message(template: str, published: Sequence[PublishedPackage]) -> str:
    """Join the configured message and one '- name@version' line per package."""
    details = "\n".join(f"- {p.name}@{p.new_version}" for p in published)
    return f"{template}\n\n{details}" if details else template


def push_target(commit_branch: str) -> str:
    """Strip a leading 'origin/' so 'origin/main' pushes to 'main'."""
    return commit_branch.removeprefix("origin/")


def create_tag() -> str:
    """Create a release tag with format vYYYY.MM.DD-<short-sha>."""
    short_sha = git("rev-parse", "--short", "HEAD")
    date = datetime.now(timezone.utc).strftime("%Y.%m.%d")
    tag = f"v{date}-{short_sha}"
    git("tag", tag)
    print(f"  Tagged {tag}")
    return tag


def commit_release(
    published: Sequence[PublishedPackage],
    commit_branch: str,
    commit_message: str,
    *,
    tag: bool = True,
) -> str | None:
    """Commit every working-tree change and push it to `commit_branch`.

    The commit subject is `commit_message`; the body lists each published
    package. When `tag` is set, a release tag is created on the new commit
    and pushed too, so the next run can diff against it.

    Returns:
        The release tag, or None if no tag was created.

    Raises:
        ExternalOperationError: If any git command fails.
    """
    step("Committing release")

    if not published:
        print("  Nothing published, nothing to commit")
        return None

    git("add", ".")
    git("commit", "-m", build_commit_message(commit_message, published))
    print("  Committed")

    release_tag = create_tag() if tag else None

    branch = push_target(commit_branch)
    git("push", "origin", f"HEAD:{branch}")
    if release_tag:
        git("push", "origin", release_tag)
    print(f"  Pushed to {branch}")
    return release_tag

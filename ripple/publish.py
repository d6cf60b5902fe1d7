"""Publishing a single package and recording the outcome.

The ReleaseContext carries everything a run shares: the bump policy, the
git revision used for prerelease suffixes, the registry, the blacklist, and
the audit trail of published packages that later becomes the release commit
message.
"""

from __future__ import annotations

import tempfile
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .config import ReleaseConfig
from .manifest import set_own_version
from .models import PackageInfo, PublishedPackage
from .shell import current_revision, run
from .versions import BumpPolicy, next_version, require_pep440

Publisher = Callable[[PackageInfo, str | None], None]


def uv_publish(package: PackageInfo, registry: str | None) -> None:
    """Build a package with uv and upload it to `registry`.

    Artifacts go to a temporary directory outside the working tree, so the
    release commit never picks them up and stale files from earlier runs
    are never uploaded. With no registry, uv's default index is used.

    Raises:
        ExternalOperationError: If the build or the upload fails.
    """
    with tempfile.TemporaryDirectory(prefix=f"ripple-{package.name}-") as out_dir:
        run("uv", "build", package.path, "--out-dir", out_dir)

        cmd = ["uv", "publish"]
        if registry:
            cmd.extend(["--publish-url", registry])
        cmd.append(str(Path(out_dir) / "*"))
        run(*cmd)


@dataclass
class ReleaseContext:
    """State shared by every step of one release run.

    Attributes:
        policy: Version bump policy for the run.
        revision: Git revision for prerelease suffixes (None for other bumps).
        registry: Upload URL passed to the publisher.
        blacklist: Package names that are never published or rewritten.
        cascade: Whether dependents of a changed package are republished.
        publisher: Callable that uploads one package.
        published: Audit trail, in publish order.
        scheduled: Names already published in this run.
    """

    policy: BumpPolicy
    revision: str | None = None
    registry: str | None = None
    blacklist: frozenset[str] = frozenset()
    cascade: bool = True
    publisher: Publisher = uv_publish
    published: list[PublishedPackage] = field(default_factory=list)
    scheduled: set[str] = field(default_factory=set)

    @classmethod
    def from_config(
        cls, config: ReleaseConfig, publisher: Publisher = uv_publish
    ) -> ReleaseContext:
        """Create a context for a run, resolving the revision once if needed."""
        policy = config.policy
        revision = current_revision() if policy.kind == "prerelease" else None
        return cls(
            policy=policy,
            revision=revision,
            registry=config.publish_registry,
            blacklist=config.publish_blacklist,
            cascade=config.should_publish_when_dependency_published,
            publisher=publisher,
        )

    def is_blacklisted(self, name: str) -> bool:
        return name in self.blacklist

    def next_version(self, current: str) -> str:
        return require_pep440(next_version(current, self.policy, self.revision))


def publish_package(package: PackageInfo, context: ReleaseContext) -> PublishedPackage:
    """Bump, upload and record one package.

    Rewrites the package's own version, runs the publisher, then appends
    the record to the audit trail. A publisher failure propagates and ends
    the run; the manifest edit is not undone.
    """
    new_version = context.next_version(package.version)
    print(f"  {package.name}: {package.version} → {new_version}")

    set_own_version(package.path, new_version)
    context.publisher(package, context.registry)

    record = PublishedPackage(
        name=package.name,
        previous_version=package.version,
        new_version=new_version,
    )
    context.published.append(record)
    context.scheduled.add(package.name)
    return record


def format_report(published: Iterable[PublishedPackage]) -> str:
    """Render the audit trail as 'name previous => new' lines."""
    return "\n".join(
        f"{p.name} {p.previous_version} => {p.new_version}" for p in published
    )

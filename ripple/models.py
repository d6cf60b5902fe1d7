"""Data models for ripple.

These Pydantic models represent the core data structures used throughout
the release pipeline. All of them are frozen snapshots: versions recorded
at discovery are not refreshed when manifests are edited during a run.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PackageInfo(BaseModel):
    """Metadata for a single package in the monorepo workspace.

    Attributes:
        name: Canonical (PEP 503) package name.
        version: Version string from pyproject.toml at discovery time.
        path: Relative path from workspace root to the package directory.
        deps: Internal (workspace) dependency names. External deps are not
              tracked since only internal pins are ever rewritten.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    path: str
    deps: tuple[str, ...] = ()


class ChangedPackage(BaseModel):
    """A package that changed since the last release, plus its dependents.

    `dependents` are the packages whose manifests declare a dependency on
    this one, computed from the package index before any version changes.
    """

    model_config = ConfigDict(frozen=True)

    package: PackageInfo
    dependents: tuple[PackageInfo, ...] = ()

    @property
    def name(self) -> str:
        return self.package.name

    @property
    def version(self) -> str:
        return self.package.version

    @property
    def path(self) -> str:
        return self.package.path


class PublishedPackage(BaseModel):
    """Records one package published during a release run.

    Attributes:
        name: Package name.
        previous_version: Version before the release.
        new_version: Version the package was published as.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    previous_version: str
    new_version: str

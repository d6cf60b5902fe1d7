"""Version parsing and bumping utilities.

Maps a package's current version and the configured bump policy to the
version it will be published as.
"""

from __future__ import annotations

import re
from typing import Literal

import semver
from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, ConfigDict

from .errors import ConfigurationError, VersionFormatError

BumpKind = Literal["major", "minor", "patch", "prerelease"]

# Prerelease tags end up as a semver prerelease identifier.
_TAG_RE = re.compile(r"^[0-9A-Za-z-]+$")


class BumpPolicy(BaseModel):
    """How versions are bumped for a release run.

    Attributes:
        kind: Which component to bump, or "prerelease".
        tag: Prerelease label (e.g. "alpha"). Only set for prerelease.
    """

    model_config = ConfigDict(frozen=True)

    kind: BumpKind
    tag: str | None = None

    @classmethod
    def parse(cls, step: str) -> BumpPolicy:
        """Build a policy from a version-upgrade-step setting.

        "major", "minor" and "patch" select that bump. Any other value is
        used as the prerelease tag, so "beta" gives 1.2.3-beta.<rev>.

        Raises:
            ConfigurationError: If the step is empty or not a valid tag.
        """
        step = step.strip()
        if step in ("major", "minor", "patch"):
            return cls(kind=step)
        if not step or not _TAG_RE.match(step):
            raise ConfigurationError(
                f"Unrecognized version-upgrade-step {step!r}: expected major, "
                "minor, patch or a prerelease tag like 'alpha'"
            )
        return cls(kind="prerelease", tag=step)

    def __str__(self) -> str:
        return self.tag if self.kind == "prerelease" and self.tag else self.kind


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    The string must be a full major.minor.patch triple, optionally with
    prerelease or build metadata ("1.2.3", "1.2.3-alpha.abc1234").

    Raises:
        VersionFormatError: If the string is not a valid triple.
    """
    try:
        return semver.Version.parse(version_str.strip())
    except (TypeError, ValueError) as exc:
        raise VersionFormatError(
            f"Invalid version {version_str!r}: expected major.minor.patch"
        ) from exc


def next_version(
    current: str, policy: BumpPolicy, revision: str | None = None
) -> str:
    """Compute the version a package is published as.

    Examples (current "1.2.3"):
        major → "2.0.0"
        minor → "1.3.0"
        patch → "1.2.4"
        prerelease("alpha"), revision "a1b2c3d4..." → "1.2.3-alpha.a1b2c3d"

    Any existing prerelease or build suffix on `current` is dropped first.
    Prerelease bumps keep the patch number and append the first 7 characters
    of `revision`, so every prerelease in one run shares the same suffix.

    Raises:
        VersionFormatError: If `current` is not a valid version.
        ConfigurationError: If a prerelease bump has no revision.
    """
    base = parse_version(current).finalize_version()

    if policy.kind == "major":
        return str(base.bump_major())
    if policy.kind == "minor":
        return str(base.bump_minor())
    if policy.kind == "patch":
        return str(base.bump_patch())

    if not revision:
        raise ConfigurationError(
            f"Prerelease bump '{policy}' needs the current git revision"
        )
    return f"{base}-{policy.tag}.{revision[:7]}"


def require_pep440(version: str) -> str:
    """Return `version` unchanged if it can go in a pyproject.toml.

    Build backends and requirement pins only accept PEP 440 versions:
    "1.2.3-rc.1234567" qualifies, "1.2.3-alpha.a1b2c3d" does not.

    Raises:
        ConfigurationError: If packaging rejects the version.
    """
    try:
        Version(version)
    except InvalidVersion as exc:
        raise ConfigurationError(
            f"Version {version!r} is not a valid PEP 440 version; prerelease "
            "tags must be a PEP 440 label such as a, b, rc or dev, and the "
            "git revision must be numeric"
        ) from exc
    return version

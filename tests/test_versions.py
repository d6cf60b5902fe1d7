"""Tests for ripple.versions."""

from __future__ import annotations

import pytest

from ripple.errors import ConfigurationError, VersionFormatError
from ripple.versions import BumpPolicy, next_version, parse_version, require_pep440

REVISION = "a1b2c3d4e5f60718293a4b5c6d7e8f9012345678"


class TestParseVersion:
    def test_full_semver(self) -> None:
        v = parse_version("1.2.3")
        assert v.major == 1
        assert v.minor == 2
        assert v.patch == 3

    def test_prerelease_suffix(self) -> None:
        v = parse_version("1.2.3-alpha.a1b2c3d")
        assert v.patch == 3
        assert v.prerelease == "alpha.a1b2c3d"

    @pytest.mark.parametrize("bad", ["1.2", "5", "v1.2.3", "abc", "", "1.2.x"])
    def test_malformed_raises(self, bad: str) -> None:
        with pytest.raises(VersionFormatError, match="Invalid version"):
            parse_version(bad)


class TestBumpPolicyParse:
    @pytest.mark.parametrize("step", ["major", "minor", "patch"])
    def test_named_steps(self, step: str) -> None:
        policy = BumpPolicy.parse(step)
        assert policy.kind == step
        assert policy.tag is None

    def test_other_value_is_prerelease_tag(self) -> None:
        policy = BumpPolicy.parse("beta")
        assert policy.kind == "prerelease"
        assert policy.tag == "beta"
        assert str(policy) == "beta"

    def test_strips_whitespace(self) -> None:
        assert BumpPolicy.parse(" minor ").kind == "minor"

    @pytest.mark.parametrize("step", ["", "   ", "alpha.1", "rc 1"])
    def test_invalid_step_raises(self, step: str) -> None:
        with pytest.raises(ConfigurationError):
            BumpPolicy.parse(step)


class TestNextVersion:
    def test_major(self) -> None:
        assert next_version("1.2.3", BumpPolicy(kind="major")) == "2.0.0"

    def test_minor(self) -> None:
        assert next_version("1.2.3", BumpPolicy(kind="minor")) == "1.3.0"

    def test_patch(self) -> None:
        assert next_version("1.2.3", BumpPolicy(kind="patch")) == "1.2.4"

    def test_patch_high_number(self) -> None:
        assert next_version("1.0.99", BumpPolicy(kind="patch")) == "1.0.100"

    def test_zero_version(self) -> None:
        assert next_version("0.0.0", BumpPolicy(kind="minor")) == "0.1.0"

    def test_prerelease_keeps_patch_and_appends_short_revision(self) -> None:
        policy = BumpPolicy.parse("alpha")
        assert next_version("1.2.3", policy, REVISION) == "1.2.3-alpha.a1b2c3d"

    def test_prerelease_is_stable_within_a_run(self) -> None:
        policy = BumpPolicy.parse("alpha")
        first = next_version("1.2.3", policy, REVISION)
        assert next_version("1.2.3", policy, REVISION) == first

    def test_prerelease_replaces_existing_suffix(self) -> None:
        policy = BumpPolicy.parse("beta")
        result = next_version("1.2.3-alpha.abcdef0", policy, REVISION)
        assert result == "1.2.3-beta.a1b2c3d"

    def test_patch_drops_existing_prerelease(self) -> None:
        assert next_version("1.2.3-alpha.abcdef0", BumpPolicy(kind="patch")) == "1.2.4"

    def test_prerelease_without_revision_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="revision"):
            next_version("1.2.3", BumpPolicy.parse("alpha"))

    def test_malformed_version_raises(self) -> None:
        with pytest.raises(VersionFormatError):
            next_version("1.2", BumpPolicy(kind="patch"))


class TestRequirePep440:
    @pytest.mark.parametrize(
        "version", ["1.2.4", "1.2.3-rc.1234567", "1.2.3-alpha.1234567", "1.2.3-dev.42"]
    )
    def test_accepts_installable_versions(self, version: str) -> None:
        assert require_pep440(version) == version

    @pytest.mark.parametrize("version", ["1.2.3-alpha.a1b2c3d", "1.2.3-nightly.1234567"])
    def test_rejects_what_pyproject_cannot_hold(self, version: str) -> None:
        with pytest.raises(ConfigurationError, match="PEP 440"):
            require_pep440(version)

"""Release configuration from [tool.ripple] in the root pyproject.toml.

Example:

    [tool.ripple]
    version-upgrade-step = "patch"
    publish-registry = "https://test.pypi.org/legacy/"
    publish-blacklist = ["internal-tools"]
    should-publish-when-dependency-published = true
    commit-branch = "origin/main"
    commit-message = "chore: publish packages"
"""

from __future__ import annotations

from pathlib import Path

from packaging.utils import canonicalize_name
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .toml import get_tool_table, load_pyproject
from .versions import BumpPolicy


def _kebab(name: str) -> str:
    return name.replace("_", "-")


class ReleaseConfig(BaseModel):
    """Settings for one release run. Read-only once loaded."""

    model_config = ConfigDict(
        alias_generator=_kebab,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    version_upgrade_step: str = "patch"
    publish_registry: str | None = None
    publish_blacklist: frozenset[str] = Field(default_factory=frozenset)
    should_publish_when_dependency_published: bool = True
    commit_branch: str | None = None
    commit_message: str = "chore: publish packages"
    tag_release: bool = True

    @field_validator("version_upgrade_step")
    @classmethod
    def _check_step(cls, value: str) -> str:
        try:
            BumpPolicy.parse(value)
        except ConfigurationError as exc:
            raise ValueError(str(exc)) from exc
        return value.strip()

    @field_validator("publish_blacklist")
    @classmethod
    def _canonical_names(cls, value: frozenset[str]) -> frozenset[str]:
        return frozenset(canonicalize_name(n) for n in value)

    @field_validator("commit_branch", "publish_registry")
    @classmethod
    def _blank_is_unset(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @property
    def policy(self) -> BumpPolicy:
        return BumpPolicy.parse(self.version_upgrade_step)


def load_config(root: Path | None = None, **overrides: object) -> ReleaseConfig:
    """Load [tool.ripple] from the workspace root pyproject.toml.

    Keyword overrides (e.g. from CLI options) replace file values; None
    values are ignored so unset options fall through to the file.

    Raises:
        ConfigurationError: If a setting is unknown or invalid.
    """
    root = root or Path.cwd()
    table = get_tool_table(load_pyproject(root / "pyproject.toml"), "ripple")
    table.update(
        {_kebab(k): v for k, v in overrides.items() if v is not None}
    )
    try:
        return ReleaseConfig.model_validate(table)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid [tool.ripple] settings:\n{exc}") from exc

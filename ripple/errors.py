"""Error types raised by the release pipeline.

None of these are retried or swallowed inside the pipeline. They propagate
to the CLI, which reports the message and exits non-zero. Anything already
published before the failure stays published.
"""

from __future__ import annotations


class ReleaseError(Exception):
    """Base class for every error the release pipeline raises on purpose."""


class ConfigurationError(ReleaseError):
    """Invalid [tool.ripple] settings or an unusable workspace layout."""


class ManifestParseError(ReleaseError):
    """A pyproject.toml is missing, unreadable, or lacks the targeted field."""


class ExternalOperationError(ReleaseError):
    """A git or uv command exited non-zero."""


class VersionFormatError(ReleaseError):
    """A version string is not a major.minor.patch triple."""

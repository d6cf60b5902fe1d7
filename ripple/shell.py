"""Shell and git utilities.

Provides simple wrappers around subprocess calls for running shell commands
and git operations, plus output formatting helpers.
"""

from __future__ import annotations

import subprocess
import sys

from .errors import ExternalOperationError


def git(*args: str, check: bool = True) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "status", "--short").
        check: If True (default), raise on non-zero exit. Set to False
               for commands that may legitimately fail (e.g., tag lookup).

    Returns:
        Stripped stdout from the git command.

    Raises:
        ExternalOperationError: If check is True and git exits non-zero.
    """
    result = subprocess.run(["git", *args], capture_output=True, text=True)
    if check and result.returncode != 0:
        detail = result.stderr.strip() or result.stdout.strip()
        raise ExternalOperationError(
            f"git {' '.join(args)} failed (exit {result.returncode}): {detail}"
        )
    return result.stdout.strip()


def run(*args: str, check: bool = True) -> subprocess.CompletedProcess[bytes]:
    """Run an arbitrary shell command.

    Unlike git(), this doesn't capture output - it streams directly to
    the terminal so users can see build and upload progress.

    Args:
        *args: Command and arguments (e.g., "uv", "build", "pkg/").
        check: If True (default), raise on non-zero exit.

    Returns:
        CompletedProcess with returncode for checking success.

    Raises:
        ExternalOperationError: If check is True and the command fails.
    """
    result = subprocess.run(args)
    if check and result.returncode != 0:
        raise ExternalOperationError(
            f"{' '.join(args)} failed (exit {result.returncode})"
        )
    return result


def current_revision() -> str:
    """Return the full commit hash of HEAD."""
    return git("rev-parse", "HEAD")


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate major phases of the release pipeline in terminal output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def fatal(msg: str) -> None:
    """Print an error message and exit with code 1.

    Use for unrecoverable errors that should halt the pipeline.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)

"""CLI entry point for ripple."""

from __future__ import annotations

import click

from ripple.changes import changed_entries, detect_changes, find_last_tag
from ripple.config import load_config
from ripple.errors import ReleaseError
from ripple.index import discover_packages
from ripple.pipeline import run_release
from ripple.shell import fatal


@click.group()
@click.version_option(package_name="ripple-release")
def cli() -> None:
    """Monorepo releaser: bump what changed and republish its dependents."""


@cli.command()
@click.option(
    "--step",
    "version_upgrade_step",
    default=None,
    help="major, minor, patch, or a prerelease tag such as 'alpha'.",
)
@click.option("--registry", "publish_registry", default=None, help="Upload URL.")
@click.option(
    "--cascade/--no-cascade",
    "should_publish_when_dependency_published",
    default=None,
    help="Republish packages that depend on a changed package.",
)
@click.option(
    "--commit-branch",
    default=None,
    help="Branch to push the release commit to, e.g. origin/main.",
)
@click.option("--force-all", is_flag=True, help="Release every package.")
def release(force_all: bool, **overrides: object) -> None:
    """Bump, publish, commit and push changed packages."""
    try:
        config = load_config(**overrides)
        run_release(config=config, force_all=force_all)
    except ReleaseError as exc:
        fatal(str(exc))


@cli.command()
@click.option("--force-all", is_flag=True, help="Treat every package as changed.")
def changed(force_all: bool) -> None:
    """List packages that would be released, with their dependents."""
    try:
        index = discover_packages()
        names = detect_changes(index, find_last_tag(), force_all)
    except ReleaseError as exc:
        fatal(str(exc))
        return

    click.echo()
    if not names:
        click.echo("Nothing changed since last release.")
        return
    for entry in changed_entries(index, names):
        dependents = ", ".join(d.name for d in entry.dependents)
        suffix = f" ← [{dependents}]" if dependents else ""
        click.echo(f"{entry.name} {entry.version}{suffix}")

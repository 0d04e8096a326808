"""lockstep CLI application."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from lockstep.commands import CommandContext, PublishOptions, VersionOptions
from lockstep.commands.publish import PublishCommand
from lockstep.commands.version import VersionCommand, VersionResult
from lockstep.config import load_config
from lockstep.errors import LockstepError
from lockstep.versioning import BumpType

BUMP_CHOICES = ("patch", "minor", "major", "auto")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from lockstep import __version__

        print(f"lockstep {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="lockstep",
    help="Monorepo lockstep versioning and ordered publishing",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def _app_callback(
    version: Annotated[  # noqa: ARG001
        bool,
        typer.Option("--version", "-V", help="Show version and exit", callback=version_callback),
    ] = False,
) -> None:
    """Monorepo lockstep versioning tool."""
    pass


console = Console()
error_console = Console(stderr=True)

RootOption = Annotated[
    Path | None,
    typer.Option("--root", "-r", help="Workspace root (defaults to current directory)"),
]


def fail(error: LockstepError) -> typer.Exit:
    """Print a lockstep error and build the matching exit."""
    error_console.print(f"[red]Error:[/red] {escape(error.message)}")
    return typer.Exit(1)


def get_context(root: Path | None = None) -> CommandContext:
    """Load configuration and wire the default collaborators."""
    try:
        return CommandContext.from_config(load_config(root))
    except LockstepError as e:
        raise fail(e) from e


def parse_bump(value: str) -> BumpType | None:
    """Parse a --type value; ``auto`` maps to None."""
    if value not in BUMP_CHOICES:
        error_console.print(f"[red]Error:[/red] --type must be {'|'.join(BUMP_CHOICES)}")
        raise typer.Exit(1)
    if value == "auto":
        return None
    return BumpType(value)


def print_version_result(result: VersionResult) -> None:
    """Render the outcome of a version bump."""
    if result.classification is not None:
        classification = result.classification
        if result.release_marker is None:
            console.print("No previous tags found, defaulting to patch version bump")
        else:
            console.print(
                f"Analyzing {len(classification.commits)} commits since {result.release_marker}:"
            )
            for commit in classification.commits:
                console.print(f"  - {escape(commit.subject)}")
        console.print(
            f"{classification.reason} -> [bold]{result.bump.value}[/bold] version bump\n"
        )

    for name in result.packages:
        console.print(f"[green]✔[/green] {name} -> {result.new_version}")
    if result.root_updated:
        console.print(f"[green]✔[/green] root -> {result.new_version}")

    if result.committed:
        console.print(f"\nAll packages bumped to v{result.new_version} and tagged.")
    else:
        console.print(
            f"\nAll packages bumped to v{result.new_version}. Git commit and tag skipped."
        )


@app.command("version")
def version_cmd(
    bump_type: Annotated[
        str,
        typer.Option("--type", "-t", help="Bump type (patch, minor, major, auto)"),
    ] = "patch",
    ci: Annotated[
        bool,
        typer.Option("--ci", help="Add [skip ci] to the release commit"),
    ] = False,
    no_git_commit: Annotated[
        bool,
        typer.Option("--no-git-commit", help="Skip git commit and tag"),
    ] = False,
    root: RootOption = None,
) -> None:
    """Bump all packages to the next shared version."""
    bump = parse_bump(bump_type)
    context = get_context(root)
    command = VersionCommand(
        context,
        VersionOptions(bump=bump, skip_ci=ci, no_git_commit=no_git_commit),
    )

    try:
        if not command.has_changes():
            console.print("[yellow]No changes since last tag; skipping version bump.[/yellow]")
            return
        result = command.execute()
    except LockstepError as e:
        raise fail(e) from e

    print_version_result(result)


@app.command("publish")
def publish_cmd(
    tag: Annotated[
        str,
        typer.Option("--tag", help="Distribution tag (required)"),
    ] = "",
    access: Annotated[
        str | None,
        typer.Option("--access", help="Registry access level (public, restricted)"),
    ] = None,
    dry: Annotated[
        bool,
        typer.Option("--dry", help="Dry run, nothing is published"),
    ] = False,
    git_push: Annotated[
        bool,
        typer.Option("--git-push", help="Push commits and tags after publishing"),
    ] = False,
    root: RootOption = None,
) -> None:
    """Publish all packages in dependency order."""
    context = get_context(root)
    options = PublishOptions(
        tag=tag,
        access=access,
        dry_run=dry,
        git_push=git_push,
        on_publish=lambda name: console.print(f"[bold]Publishing {name}[/bold]"),
    )

    try:
        result = PublishCommand(context, options).execute()
    except LockstepError as e:
        raise fail(e) from e

    console.print(f"\nPublish order: {' -> '.join(result.order)}")
    console.print(f"Dist-tag: [bold]{result.dist_tag}[/bold]")
    if result.dist_tag != tag:
        console.print(f"Branch: {result.branch}, Original tag: {tag}")
    console.print(f"Using package manager: {context.config.resolve_package_manager().value}")
    if result.dry_run:
        console.print("[yellow]Dry run - nothing was published[/yellow]")
    if result.pushed:
        console.print("[green]✔[/green] Git changes and tags pushed to remote")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()

"""
Command-line interface for Stable Manager.

This module provides the ``stable-manager`` entry point and maps each
command onto :class:`~stable_manager.manager.SnapshotManager`.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from typer.core import TyperGroup

from stable_manager import __version__
from stable_manager.config import Settings
from stable_manager.confirm import make_confirmer
from stable_manager.manager import (
    NoStableFileError,
    SnapshotManager,
    WorkingFileNotFoundError,
)
from stable_manager.paths import resolve_path

# Results go to stdout, diagnostics and errors to stderr
console = Console()
err_console = Console(stderr=True)
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
)
logger = logging.getLogger("stable_manager")

USAGE = """\
Usage:
  stable-manager promote <path/to/file> [--force]   Copy working → stable (creates/updates <file>-stable.ext)
  stable-manager restore <path/to/file> [--force]   Copy stable → working (restores baseline, saves backup)
  stable-manager clean [--force]                    Remove all *-stable.* and *-backup.* files
  stable-manager list [dir] [--deep] [--json]       Show *-stable.* and *-backup.* files
  stable-manager help | -h | --help                 Show this message
  stable-manager version | -v | --version           Show version

Examples:
  stable-manager promote src/core/snap-core.js
  stable-manager restore src/core/snap-core.js
  stable-manager list src --deep
  stable-manager clean

--force   Skip confirmations (use with care!)
"""

TIP = (
    "Tip: 'restore' creates backups automatically. "
    "Use 'clean' to remove all stables and backups."
)


def show_usage(version: str) -> None:
    """Print the banner and the usage text."""
    console.print(f"\nStable Manager v{version}\n", markup=False, highlight=False)
    console.print(USAGE, markup=False, highlight=False, soft_wrap=True)


def show_help(settings: Settings) -> None:
    """Print usage followed by the currently tracked stable files."""
    show_usage(settings.version)

    stables = _manager(settings).find_special_files(stable_only=True)
    if stables:
        console.print("Currently tracked stable files:")
        for path in stables:
            console.print(f"  - {escape(str(path))}", soft_wrap=True)
    else:
        console.print(
            "No stable files found yet. Use 'promote <file>' to create one."
        )
    console.print(f"\n{TIP}\n", markup=False, highlight=False, soft_wrap=True)


def report_error(message: str, hint: Optional[str] = None) -> None:
    """Print an error (and optional hint) to stderr."""
    logger.debug(message)
    err_console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)
    if hint:
        err_console.print(f"   {escape(hint)}", soft_wrap=True)


class StableManagerGroup(TyperGroup):
    """Command group that answers unknown commands with the usage text."""

    def resolve_command(self, ctx: typer.Context, args: List[str]):  # type: ignore[override]
        cmd_name = args[0] if args else None
        if (
            cmd_name is not None
            and not cmd_name.startswith("-")
            and self.get_command(ctx, cmd_name) is None
        ):
            report_error(f"Unknown command: {cmd_name}")
            show_usage(__version__)
            ctx.exit(1)
        return super().resolve_command(ctx, args)


# -h/--help on the top level is handled by the callback so it can list the
# tracked stable files; subcommands keep the generated help.
COMMAND_HELP_OPTIONS = ["-h", "--help"]
HELP_SETTINGS = {"help_option_names": COMMAND_HELP_OPTIONS}
FILE_COMMAND_SETTINGS = {
    "help_option_names": COMMAND_HELP_OPTIONS,
    "ignore_unknown_options": True,
}

app = typer.Typer(
    cls=StableManagerGroup,
    help="Manage working/stable snapshots of individual project files.",
    add_completion=False,
    context_settings={"help_option_names": []},
)


def _manager(settings: Settings) -> SnapshotManager:
    return SnapshotManager(settings.root, settings.config.exclude_dirs)


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug output."),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        envvar="STABLE_MANAGER_CONFIG",
        help="Path to the config file. Uses STABLE_MANAGER_CONFIG if not set.",
    ),
    version: bool = typer.Option(
        False, "--version", "-v", help="Show the application version and exit."
    ),
    help_flag: bool = typer.Option(
        False,
        "--help",
        "-h",
        help="Show usage and the tracked stable files, then exit.",
    ),
) -> None:
    """
    Stable Manager: promote a working file to a stable baseline, restore it later.
    """
    if version:
        console.print(f"Stable Manager v{__version__}", highlight=False)
        raise typer.Exit()

    logger.setLevel(logging.DEBUG if verbose else logging.NOTSET)
    if verbose:
        logger.debug("Verbose logging enabled")

    settings = Settings.resolve(__version__, config)
    ctx.obj = settings

    if help_flag:
        show_help(settings)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        show_help(settings)


@app.command(context_settings=FILE_COMMAND_SETTINGS)
def promote(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="Working file to promote."),
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip the confirmation prompt."
    ),
) -> None:
    """
    Copy working → stable (creates/updates <file>-stable.ext).
    """
    settings: Settings = ctx.obj
    if file is None or file.startswith("--"):
        show_help(settings)
        return

    manager = _manager(settings)
    paths = manager.paths_for(file)
    try:
        manager.check_promotable(paths)
    except WorkingFileNotFoundError as e:
        report_error(f"Working file not found: {manager.display(e.working)}")
        raise typer.Exit(1) from e

    working = manager.display(paths.working)
    stable = manager.display(paths.stable)
    if not make_confirmer(force, console).confirm(f"Promote {working} → {stable}?"):
        console.print("Aborted.")
        return

    try:
        manager.promote(paths)
    except OSError as e:
        report_error(f"Failed to promote {working}: {e}")
        raise typer.Exit(1) from e

    forced = " (forced)" if force else ""
    console.print(
        f"[green]Stable version created/updated{forced}:[/green] {escape(stable)}",
        soft_wrap=True,
    )


@app.command(context_settings=FILE_COMMAND_SETTINGS)
def restore(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="Working file to restore."),
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip the confirmation prompt."
    ),
) -> None:
    """
    Copy stable → working (restores baseline, saves backup).
    """
    settings: Settings = ctx.obj
    if file is None or file.startswith("--"):
        show_help(settings)
        return

    manager = _manager(settings)
    paths = manager.paths_for(file)
    try:
        manager.check_restorable(paths)
    except NoStableFileError as e:
        report_error(
            f"No stable file exists yet: {manager.display(e.stable)}",
            hint='Run "promote" first to create a stable baseline.',
        )
        raise typer.Exit(1) from e

    working = manager.display(paths.working)
    stable = manager.display(paths.stable)
    prompt = f"Restore {stable} → {working} (backup will be saved)?"
    if not make_confirmer(force, console).confirm(prompt):
        console.print("Aborted.")
        return

    try:
        backup = manager.restore(paths)
    except OSError as e:
        hint = None
        if paths.backup.is_file():
            hint = f"Backup on disk: {manager.display(paths.backup)}"
        report_error(f"Failed to restore {working}: {e}", hint=hint)
        raise typer.Exit(1) from e

    if backup is not None:
        console.print(
            f"Backup saved: {escape(manager.display(backup))}", soft_wrap=True
        )
    forced = " (forced)" if force else ""
    console.print(
        f"[green]Working version restored{forced}:[/green] {escape(working)}",
        soft_wrap=True,
    )


@app.command(context_settings=HELP_SETTINGS)
def clean(
    ctx: typer.Context,
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip the confirmation prompt."
    ),
) -> None:
    """
    Remove all *-stable.* and *-backup.* files below the project root.
    """
    manager = _manager(ctx.obj)
    files = manager.find_special_files()
    if not files:
        console.print("No stable/backup files to remove.")
        return

    prompt = f"Remove ALL stable/backup files ({len(files)} found)?"
    if not make_confirmer(force, console).confirm(prompt):
        console.print("Aborted.")
        return

    for relative in files:
        try:
            manager.remove(relative)
        except OSError as e:
            report_error(f"Failed to remove {relative}: {e}")
            continue
        console.print(f"Removed: {escape(str(relative))}", soft_wrap=True)

    console.print("[green]Clean complete.[/green]")


@app.command(name="list", context_settings=HELP_SETTINGS)
def list_files(
    ctx: typer.Context,
    directory: Optional[str] = typer.Argument(
        None, help="Directory to scan (default: project root)."
    ),
    deep: bool = typer.Option(
        False, "--deep", "-d", help="Scan subdirectories as well."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output the file list in JSON format."
    ),
) -> None:
    """
    List *-stable.* and *-backup.* files without changing anything.
    """
    settings: Settings = ctx.obj
    manager = _manager(settings)

    start = resolve_path(directory, Path.cwd()) if directory else settings.root
    if not start.is_dir():
        report_error(f"Directory not found: {manager.display(start)}")
        raise typer.Exit(1)

    files = manager.find_special_files(start, recursive=deep)

    if json_output:
        console.print(
            json.dumps([str(f) for f in files], indent=2),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        return

    if not files:
        console.print("No stable/backup files found.")
        return

    console.print(f"Found {len(files)} stable/backup file(s):")
    for path in files:
        console.print(f"  - {escape(str(path))}", soft_wrap=True)


@app.command(name="help", context_settings=HELP_SETTINGS)
def help_command(ctx: typer.Context) -> None:
    """Show usage and the currently tracked stable files."""
    show_help(ctx.obj)


@app.command(context_settings=HELP_SETTINGS)
def version(ctx: typer.Context) -> None:
    """Show the application version and exit."""
    console.print(f"Stable Manager v{ctx.obj.version}", highlight=False)


if __name__ == "__main__":
    app()

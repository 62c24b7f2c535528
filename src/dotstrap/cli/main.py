"""CLI entry point for the dotstrap bootstrap tool."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from dotstrap.backends.registry import default_installers
from dotstrap.cli.renderers import (
    banner,
    console,
    header,
    manifest_table,
    status_line,
    summary_table,
)
from dotstrap.core import manifest
from dotstrap.core.config import DEFAULT_MANIFEST, discover_env
from dotstrap.core.driver import run
from dotstrap.core.errors import (
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    DotstrapError,
    SystemError,
    UserError,
    format_error_message,
    suggest_fix,
)
from dotstrap.core.logging import configure_logging, get_logger
from dotstrap.core.models import Mode, Platform, Selection

log = get_logger(__name__)

app = typer.Typer(help="dotstrap: bootstrap a workstation from a package manifest.")


def handle_error(error: Exception) -> int:
    """Handle errors and return appropriate exit codes.

    Args:
        error: The exception to handle.

    Returns:
        An integer exit code.
    """
    if isinstance(error, DotstrapError):
        log.error(
            "cli_error",
            error_type=type(error).__name__,
            message=error.message,
            context=error.context,
            exc_info=True
        )
        console.print(f"\n{format_error_message(error)}\n", style="bold red", markup=False)

        suggestion = suggest_fix(error)
        if suggestion:
            console.print(suggestion, style="dim", markup=False)

        if isinstance(error, UserError):
            return EXIT_USER_ERROR
        elif isinstance(error, SystemError):
            return EXIT_SYSTEM_ERROR
        else:
            return EXIT_USER_ERROR
    else:
        log.error(
            "unexpected_error",
            error=str(error),
            exc_info=True
        )
        console.print(
            f"\n⚠ Unexpected error occurred: {error}\n",
            style="bold red",
            markup=False
        )
        return EXIT_SYSTEM_ERROR


@app.command()
def install(
    manifest_path: Path = typer.Option(
        DEFAULT_MANIFEST, "--manifest", "-m", help="Path to the package manifest"
    ),
    work: bool = typer.Option(False, "--work", help="Include work packages"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Preview changes without applying them"
    ),
    force_brew: bool = typer.Option(
        False, "--force-brew", help="Use Homebrew on Linux (for container testing)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Debug logging, also echoed to stderr"
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Write the structured log here"
    ),
) -> None:
    """Install every package in the manifest that is missing.

    Args:
        manifest_path: Path to the package manifest.
        work: Include packages tagged as work packages.
        dry_run: Report what would happen without installing anything.
        force_brew: Route packages through Homebrew on a Linux host.
        verbose: Enable debug logging.
        log_file: Optional log file location.
    """
    configure_logging(
        level="DEBUG" if verbose else "INFO",
        log_file=log_file,
        enable_console=verbose,
        force=True,
    )

    try:
        env = discover_env(force_brew=force_brew)
        entries = manifest.load(manifest_path)
        selection = Selection(include_restricted=work)
        mode = Mode.DRY_RUN if dry_run else Mode.EXECUTE

        if dry_run:
            console.print(banner("DRY-RUN MODE - No changes will be made"))
        console.print(header(env, selection))

        if env.platform is Platform.LINUX:
            console.print(
                "  ⚠ Non-Fedora Linux detected: CLI packages need DNF.\n"
                "    Use --force-brew to install them via Homebrew on Linux.\n",
                style="yellow",
                markup=False,
            )

        if not manifest.query(entries, selection):
            console.print("  No packages to install (filtered by --work flag)")

        summary = run(
            entries,
            env.platform,
            selection,
            mode,
            default_installers(env),
            report=lambda result: console.print(status_line(result, env.platform)),
        )

        console.print()
        console.print(summary_table(summary))
        if dry_run:
            console.print(banner("Run without --dry-run to apply changes."))
        elif summary.clean:
            console.print("  ✓ Package installation complete", style="bold green")
        else:
            console.print(
                f"  ⚠ Package installation finished with {summary.failed} failure(s)",
                style="bold yellow",
            )
    except Exception as e:
        sys.exit(handle_error(e))


@app.command(name="list")
def list_packages(
    manifest_path: Path = typer.Option(
        DEFAULT_MANIFEST, "--manifest", "-m", help="Path to the package manifest"
    ),
    work: bool = typer.Option(False, "--work", help="Include work packages"),
    force_brew: bool = typer.Option(
        False, "--force-brew", help="Resolve as if on macOS"
    ),
) -> None:
    """Show the manifest resolved for this platform.

    Args:
        manifest_path: Path to the package manifest.
        work: Include packages tagged as work packages.
        force_brew: Resolve for Homebrew on a Linux host.
    """
    try:
        env = discover_env(force_brew=force_brew)
        entries = manifest.query(manifest.load(manifest_path), Selection(include_restricted=work))
        if not entries:
            console.print("  No packages matched filters")
            return

        console.print(manifest_table(entries, env.platform, gui=False))
        console.print(manifest_table(entries, env.platform, gui=True))
    except Exception as e:
        sys.exit(handle_error(e))


if __name__ == "__main__":
    app()

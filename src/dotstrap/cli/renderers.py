"""Renderers for displaying bootstrap progress in the CLI using Rich."""

from __future__ import annotations

from typing import Iterable

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dotstrap.core.config import BootstrapEnv
from dotstrap.core.errors import UnsupportedPlatformError
from dotstrap.core.models import (
    BackendFamily,
    EntryResult,
    Mode,
    OutcomeKind,
    PackageEntry,
    Platform,
    RunSummary,
    Selection,
)
from dotstrap.core.resolver import backend_family, resolve

console = Console()

METHOD_TAGS = {
    BackendFamily.CASK: " [dim]\\[cask][/dim]",
    BackendFamily.FLATPAK: " [dim]\\[flatpak][/dim]",
}


def status_line(result: EntryResult, platform: Platform) -> str:
    """Render the one-line status for a visited entry.

    Args:
        result: The entry result to render.
        platform: The platform the run resolved against.

    Returns:
        A Rich markup string.
    """
    outcome = result.outcome
    label = escape(result.label)
    name = escape(result.entry.name)
    tag = METHOD_TAGS.get(result.family, "")

    if outcome.kind is OutcomeKind.ALREADY_INSTALLED:
        return f"  [green]✓[/green] {label} (already installed){tag}"
    if outcome.kind is OutcomeKind.INSTALLED:
        if outcome.projected:
            return f"  [magenta italic]\\[DRY-RUN][/magenta italic] {label} (would install){tag}"
        return f"  [green]✓ {label} installed[/green]{tag}"
    if outcome.kind is OutcomeKind.SKIPPED_FOR_PLATFORM:
        return f"  [dim]✗ {name} (not available on {platform.value})[/dim]"
    if outcome.kind is OutcomeKind.SKIPPED_BY_FILTER:
        return f"  [dim]- {name} (work package, use --work)[/dim]"

    reason = outcome.reason.splitlines()[0] if outcome.reason else "unknown error"
    return f"  [yellow]✗ Failed to install {label}[/yellow]{tag}: [dim]{escape(reason)}[/dim]"


def header(env: BootstrapEnv, selection: Selection) -> Table:
    """Create the run header describing host and filters."""
    t = Table(box=box.MINIMAL_HEAVY_HEAD, show_header=False)
    t.add_column("Field", style="bold")
    t.add_column("Value")
    platform = env.platform.value
    if env.forced:
        platform += f" (forced on {env.host})"
    t.add_row("OS", platform)
    t.add_row("Container", "yes" if env.in_container else "no")
    t.add_row(
        "Filter",
        "--work (including work packages)"
        if selection.include_restricted
        else "personal packages only (use --work to include work packages)",
    )
    return t


def banner(text: str) -> Panel:
    return Panel(Text(text, justify="center", style="bold magenta"), box=box.DOUBLE)


def summary_table(summary: RunSummary) -> Table:
    """Create a Rich Table with the end-of-run counts.

    Args:
        summary: The finished run summary.

    Returns:
        A Rich Table of outcome counts.
    """
    installed_label = "Would install" if summary.mode is Mode.DRY_RUN else "Installed"

    t = Table(box=box.MINIMAL_HEAVY_HEAD, title="Summary")
    t.add_column("Outcome", style="bold")
    t.add_column("Count", justify="right")
    t.add_row(f"{installed_label} (CLI)", str(summary.installed_cli))
    t.add_row(f"{installed_label} (GUI)", str(summary.installed_gui))
    t.add_row("Already installed", str(summary.already_installed))
    t.add_row("Skipped (platform)", str(summary.skipped_platform))
    t.add_row("Skipped (filter)", str(summary.skipped_filter))
    t.add_row(
        "Failed",
        f"[red]{summary.failed}[/red]" if summary.failed else "0",
    )
    return t


def manifest_table(
    entries: Iterable[PackageEntry], platform: Platform, gui: bool
) -> Table:
    """Create a Rich Table of entries resolved for a platform.

    Only entries whose ``gui`` flag matches are listed.

    Args:
        entries: Manifest entries, already filtered by selection.
        platform: The active platform.
        gui: Whether to list GUI or CLI entries.

    Returns:
        A Rich Table with one row per entry.
    """
    t = Table(box=box.MINIMAL_HEAVY_HEAD, title="GUI Packages" if gui else "CLI Packages")
    t.add_column("Name", style="bold")
    t.add_column("Install ID")
    t.add_column("Backend")
    t.add_column("Description", style="dim")

    for entry in entries:
        if entry.gui != gui:
            continue
        resolved = resolve(entry, platform)
        name = escape(entry.name) + (" [yellow]\\[work][/yellow]" if entry.work else "")
        if resolved.skipped:
            t.add_row(
                name,
                f"[dim]not available on {platform.value}[/dim]",
                "-",
                escape(entry.description),
            )
            continue
        try:
            family = backend_family(platform, entry.gui).value
        except UnsupportedPlatformError:
            family = "[yellow]unsupported[/yellow]"
        t.add_row(name, escape(resolved.install_id), family, escape(entry.description))

    return t

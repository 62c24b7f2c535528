"""Resolution and execution driver for manifest entries."""

from __future__ import annotations

import time
from typing import Callable, Mapping, Sequence

from dotstrap.backends.base import PackageInstaller
from dotstrap.core.errors import BackendMissingError, DotstrapError, UnsupportedPlatformError
from dotstrap.core.logging import get_logger
from dotstrap.core.models import (
    BackendFamily,
    EntryResult,
    InstallationOutcome,
    Mode,
    OutcomeKind,
    PackageEntry,
    Platform,
    RunSummary,
    Selection,
)
from dotstrap.core.resolver import backend_family, resolve

log = get_logger(__name__)

Installers = Mapping[BackendFamily, PackageInstaller]
Reporter = Callable[[EntryResult], None]


def preflight(
    entries: Sequence[PackageEntry],
    platform: Platform,
    selection: Selection,
    installers: Installers,
) -> set[BackendFamily]:
    """Check that every required backend needed by the run is available.

    Args:
        entries: All manifest entries.
        platform: The active platform.
        selection: The entry selection for this run.
        installers: Installers keyed by backend family.

    Returns:
        The backend families the run will use.

    Raises:
        BackendMissingError: If a required backend binary is absent.
    """
    needed: set[BackendFamily] = set()
    for entry in entries:
        if not selection.admits(entry) or resolve(entry, platform).skipped:
            continue
        try:
            needed.add(backend_family(platform, entry.gui))
        except UnsupportedPlatformError:
            continue

    for family in sorted(needed, key=lambda f: f.value):
        installer = installers[family]
        if installer.required and not installer.available():
            log.error("preflight_backend_missing", family=family.value, binary=installer.binary)
            raise BackendMissingError(binary=installer.binary, family=family.value)

    log.debug("preflight_complete", families=sorted(f.value for f in needed))
    return needed


def run(
    entries: Sequence[PackageEntry],
    platform: Platform,
    selection: Selection,
    mode: Mode,
    installers: Installers,
    report: Reporter | None = None,
) -> RunSummary:
    """Visit every manifest entry once and install what is missing.

    In DRY_RUN mode every decision is made exactly as in EXECUTE mode, but
    packages that would be installed are recorded as projected installs
    and no installer is invoked.

    Args:
        entries: Manifest entries in manifest order.
        platform: The active platform.
        selection: Which entries are admitted.
        mode: EXECUTE or DRY_RUN.
        installers: Installers keyed by backend family.
        report: Optional callback invoked with each entry's result.

    Returns:
        The RunSummary for this run.

    Raises:
        BackendMissingError: In EXECUTE mode, if a required backend is absent.
    """
    start = time.perf_counter()
    log.info(
        "run_start",
        platform=platform.value,
        mode=mode.value,
        include_restricted=selection.include_restricted,
        count=len(entries)
    )

    if mode is Mode.EXECUTE:
        preflight(entries, platform, selection, installers)
    else:
        try:
            preflight(entries, platform, selection, installers)
        except BackendMissingError as e:
            log.warning("preflight_dry_run_warning", error=e.message, **e.context)

    summary = RunSummary(mode=mode, platform=platform)

    for entry in entries:
        result = _visit(entry, platform, selection, mode, installers)
        summary.record(result)
        log.info(
            "entry_complete",
            package=entry.name,
            index=entry.index,
            install_id=result.resolved.install_id if result.resolved else None,
            family=result.family.value if result.family else None,
            outcome=result.outcome.kind.value,
            projected=result.outcome.projected or None,
            error=result.outcome.reason
        )
        if report is not None:
            report(result)

    duration_ms = int((time.perf_counter() - start) * 1000)
    log.info(
        "run_complete",
        mode=mode.value,
        installed_cli=summary.installed_cli,
        installed_gui=summary.installed_gui,
        already_installed=summary.already_installed,
        skipped_platform=summary.skipped_platform,
        skipped_filter=summary.skipped_filter,
        failed=summary.failed,
        duration_ms=duration_ms
    )

    return summary


def _visit(
    entry: PackageEntry,
    platform: Platform,
    selection: Selection,
    mode: Mode,
    installers: Installers,
) -> EntryResult:
    if not selection.admits(entry):
        return EntryResult(entry, InstallationOutcome.of(OutcomeKind.SKIPPED_BY_FILTER))

    resolved = resolve(entry, platform)
    if resolved.skipped:
        return EntryResult(
            entry, InstallationOutcome.of(OutcomeKind.SKIPPED_FOR_PLATFORM), resolved
        )

    try:
        family = backend_family(platform, entry.gui)
    except UnsupportedPlatformError as e:
        log.warning(
            "entry_unsupported",
            package=entry.name,
            platform=platform.value,
            hint="use --force-brew"
        )
        return EntryResult(entry, InstallationOutcome.failed(e.message), resolved)

    installer = installers[family]
    install_id = resolved.install_id

    try:
        if installer.is_installed(install_id):
            outcome = InstallationOutcome.of(OutcomeKind.ALREADY_INSTALLED)
        elif mode is Mode.DRY_RUN:
            outcome = InstallationOutcome.installed(projected=True)
        else:
            outcome = installer.install(install_id)
    except (DotstrapError, OSError) as e:
        log.error(
            "entry_error",
            package=entry.name,
            install_id=install_id,
            family=family.value,
            error=str(e),
            exc_info=True
        )
        outcome = InstallationOutcome.failed(str(e))

    return EntryResult(entry, outcome, resolved, family)

"""Data models for manifest entries, resolution and run outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class Platform(Enum):
    """Enumeration of supported platforms."""

    MACOS = "macos"
    LINUX_FEDORA = "linux-fedora"
    LINUX = "linux"

    @property
    def override_key(self) -> str:
        """Manifest override key consulted for this platform."""
        return "macos" if self is Platform.MACOS else "linux"

    @property
    def is_linux(self) -> bool:
        return self in (Platform.LINUX_FEDORA, Platform.LINUX)


OVERRIDE_KEYS = ("macos", "linux")


class OverrideKind(Enum):
    """Enumeration of per-platform override kinds."""

    INHERIT = auto()
    SKIP = auto()
    RENAME = auto()


@dataclass(frozen=True)
class Override:
    """A per-platform instruction attached to a manifest entry."""

    kind: OverrideKind
    name: str | None = None

    @classmethod
    def inherit(cls) -> Override:
        return cls(OverrideKind.INHERIT)

    @classmethod
    def skip(cls) -> Override:
        return cls(OverrideKind.SKIP)

    @classmethod
    def rename(cls, name: str) -> Override:
        return cls(OverrideKind.RENAME, name)


@dataclass
class PackageEntry:
    """Represents one manifest record."""

    name: str
    description: str = ""
    gui: bool = False
    work: bool = False
    overrides: dict[str, Override] = field(default_factory=dict)
    index: int = 0

    def override_for(self, platform: Platform) -> Override:
        """Get the override for a platform, inheriting when none is declared.

        Args:
            platform: The active platform.

        Returns:
            The declared Override, or an INHERIT override.
        """
        return self.overrides.get(platform.override_key, Override.inherit())


@dataclass(frozen=True)
class Selection:
    """Filter applied to manifest entries before resolution."""

    include_restricted: bool = False

    def admits(self, entry: PackageEntry) -> bool:
        return not entry.work or self.include_restricted


class Mode(Enum):
    """Enumeration of run modes."""

    EXECUTE = "execute"
    DRY_RUN = "dry-run"


class BackendFamily(Enum):
    """Enumeration of installer backends."""

    FORMULA = "formula"
    CASK = "cask"
    SYSTEM_PACKAGE = "system-package"
    FLATPAK = "flatpak"


@dataclass(frozen=True)
class ResolvedPackage:
    """Result of applying a platform to a manifest entry.

    ``install_id`` is None when the entry is skipped on the platform.
    """

    install_id: str | None

    @property
    def skipped(self) -> bool:
        return self.install_id is None


SKIPPED_FOR_PLATFORM = ResolvedPackage(None)


class OutcomeKind(Enum):
    """Enumeration of terminal per-entry states."""

    ALREADY_INSTALLED = "already-installed"
    INSTALLED = "installed"
    FAILED = "failed"
    SKIPPED_FOR_PLATFORM = "skipped-for-platform"
    SKIPPED_BY_FILTER = "skipped-by-filter"


@dataclass(frozen=True)
class InstallationOutcome:
    """Terminal state of a manifest entry for one run."""

    kind: OutcomeKind
    reason: str | None = None
    projected: bool = False

    @classmethod
    def installed(cls, projected: bool = False) -> InstallationOutcome:
        return cls(OutcomeKind.INSTALLED, projected=projected)

    @classmethod
    def failed(cls, reason: str) -> InstallationOutcome:
        return cls(OutcomeKind.FAILED, reason=reason)

    @classmethod
    def of(cls, kind: OutcomeKind) -> InstallationOutcome:
        return cls(kind)


@dataclass
class EntryResult:
    """Outcome of visiting a single manifest entry."""

    entry: PackageEntry
    outcome: InstallationOutcome
    resolved: ResolvedPackage | None = None
    family: BackendFamily | None = None

    @property
    def label(self) -> str:
        """Install id when resolved, otherwise the manifest name."""
        if self.resolved is not None and self.resolved.install_id:
            return self.resolved.install_id
        return self.entry.name


@dataclass
class RunSummary:
    """Aggregate counts for one run, real or dry-run."""

    mode: Mode
    platform: Platform
    installed_cli: int = 0
    installed_gui: int = 0
    already_installed: int = 0
    skipped_platform: int = 0
    skipped_filter: int = 0
    failed: int = 0
    results: list[EntryResult] = field(default_factory=list)

    def record(self, result: EntryResult) -> None:
        """Add a per-entry result, incrementing exactly one counter."""
        kind = result.outcome.kind
        if kind is OutcomeKind.INSTALLED:
            if result.entry.gui:
                self.installed_gui += 1
            else:
                self.installed_cli += 1
        elif kind is OutcomeKind.ALREADY_INSTALLED:
            self.already_installed += 1
        elif kind is OutcomeKind.SKIPPED_FOR_PLATFORM:
            self.skipped_platform += 1
        elif kind is OutcomeKind.SKIPPED_BY_FILTER:
            self.skipped_filter += 1
        else:
            self.failed += 1

        self.results.append(result)

    @property
    def installed(self) -> int:
        return self.installed_cli + self.installed_gui

    @property
    def total(self) -> int:
        return (
            self.installed
            + self.already_installed
            + self.skipped_platform
            + self.skipped_filter
            + self.failed
        )

    @property
    def clean(self) -> bool:
        return self.failed == 0

    def counts(self) -> dict[OutcomeKind, int]:
        """Count per outcome kind, CLI and GUI installs combined."""
        return {
            OutcomeKind.INSTALLED: self.installed,
            OutcomeKind.ALREADY_INSTALLED: self.already_installed,
            OutcomeKind.SKIPPED_FOR_PLATFORM: self.skipped_platform,
            OutcomeKind.SKIPPED_BY_FILTER: self.skipped_filter,
            OutcomeKind.FAILED: self.failed,
        }

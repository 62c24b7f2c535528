"""Resolve manifest entries to platform-specific package identifiers."""

from __future__ import annotations

from dotstrap.core.errors import UnsupportedPlatformError
from dotstrap.core.models import (
    SKIPPED_FOR_PLATFORM,
    BackendFamily,
    OverrideKind,
    PackageEntry,
    Platform,
    ResolvedPackage,
)

_FAMILIES = {
    (Platform.MACOS, False): BackendFamily.FORMULA,
    (Platform.MACOS, True): BackendFamily.CASK,
    (Platform.LINUX_FEDORA, False): BackendFamily.SYSTEM_PACKAGE,
    (Platform.LINUX_FEDORA, True): BackendFamily.FLATPAK,
    (Platform.LINUX, True): BackendFamily.FLATPAK,
}


def resolve(entry: PackageEntry, platform: Platform) -> ResolvedPackage:
    """Apply a platform's override to a manifest entry.

    Args:
        entry: The manifest entry.
        platform: The active platform.

    Returns:
        The resolved package, or SKIPPED_FOR_PLATFORM.
    """
    override = entry.override_for(platform)
    if override.kind is OverrideKind.SKIP:
        return SKIPPED_FOR_PLATFORM
    if override.kind is OverrideKind.RENAME:
        return ResolvedPackage(override.name)
    return ResolvedPackage(entry.name)


def backend_family(platform: Platform, gui: bool) -> BackendFamily:
    """Select the installer family for a platform and package kind.

    Raises:
        UnsupportedPlatformError: If the platform has no installer for the kind.
    """
    try:
        return _FAMILIES[(platform, gui)]
    except KeyError:
        kind = "GUI" if gui else "CLI"
        raise UnsupportedPlatformError(
            f"No {kind} package installer on {platform.value}",
            platform=platform.value,
        ) from None

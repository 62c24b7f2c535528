"""Configuration module for the dotstrap environment."""

from __future__ import annotations

import os
import platform as _platform
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from dotstrap.core.errors import UnsupportedPlatformError
from dotstrap.core.models import Platform

DOTSTRAP_HOME = Path(os.environ.get("DOTSTRAP_HOME", Path.home() / ".dotstrap"))
LOG_DIR = DOTSTRAP_HOME / "logs"
DEFAULT_MANIFEST = Path(os.environ.get("DOTSTRAP_MANIFEST", "packages.yaml"))
FLATPAK_REMOTE = os.environ.get("DOTSTRAP_FLATPAK_REMOTE", "flathub")

_CONTAINER_MARKERS = ("docker", "lxc", "podman", "containerd")


@dataclass(frozen=True)
class BootstrapEnv:
    """Host facts probed once at the start of a run."""
    host: str
    platform: Platform
    forced: bool = False
    in_container: bool = False
    is_root: bool = False
    flatpak_remote: str = FLATPAK_REMOTE


def detect_platform(
    system: str | None = None, which: Callable[[str], str | None] | None = None
) -> Platform:
    """Map the host operating system to a Platform.

    Args:
        system: Operating system name as reported by ``platform.system()``.
        which: Lookup used to find the ``dnf`` binary.

    Returns:
        The detected Platform.

    Raises:
        UnsupportedPlatformError: If the operating system is not macOS or Linux.
    """
    system = system or _platform.system()
    which = which or shutil.which
    if system == "Darwin":
        return Platform.MACOS
    if system == "Linux":
        return Platform.LINUX_FEDORA if which("dnf") else Platform.LINUX
    raise UnsupportedPlatformError(
        "Only macOS and Linux are supported",
        platform=system or "unknown",
    )


def is_container(
    root: Path = Path("/"), environ: dict[str, str] | None = None
) -> bool:
    """Check whether we are running inside a container."""
    env = os.environ if environ is None else environ

    if (root / ".dockerenv").exists():
        return True
    if env.get("container") or env.get("KUBERNETES_SERVICE_HOST"):
        return True

    cgroup = root / "proc" / "1" / "cgroup"
    try:
        text = cgroup.read_text()
    except OSError:
        return False
    return any(marker in text for marker in _CONTAINER_MARKERS)


def discover_env(
    force_brew: bool = False, flatpak_remote: str = FLATPAK_REMOTE
) -> BootstrapEnv:
    """Discover the bootstrap environment based on system settings.

    Args:
        force_brew: Route packages through Homebrew even on a Linux host.
        flatpak_remote: Flatpak remote to install GUI apps from.

    Returns:
        A BootstrapEnv describing the host.
    """
    host = _platform.system()
    platform = detect_platform(host)
    forced = force_brew and platform.is_linux
    if forced:
        platform = Platform.MACOS

    return BootstrapEnv(
        host=host,
        platform=platform,
        forced=forced,
        in_container=is_container(),
        is_root=hasattr(os, "geteuid") and os.geteuid() == 0,
        flatpak_remote=flatpak_remote,
    )

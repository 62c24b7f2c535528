"""Wiring from backend families to installer instances."""

from __future__ import annotations

from dotstrap.core.config import BootstrapEnv
from dotstrap.core.models import BackendFamily

from .base import PackageInstaller
from .brew_cask import BrewCaskInstaller
from .brew_formula import BrewFormulaInstaller
from .dnf import DnfInstaller
from .flatpak import FlatpakInstaller


def default_installers(env: BootstrapEnv) -> dict[BackendFamily, PackageInstaller]:
    """Build one installer per backend family for the given host.

    Args:
        env: The discovered bootstrap environment.

    Returns:
        dict[BackendFamily, PackageInstaller]: Installers keyed by family.
    """
    return {
        BackendFamily.FORMULA: BrewFormulaInstaller(),
        BackendFamily.CASK: BrewCaskInstaller(),
        BackendFamily.SYSTEM_PACKAGE: DnfInstaller(use_sudo=not env.is_root),
        BackendFamily.FLATPAK: FlatpakInstaller(remote=env.flatpak_remote),
    }

"""Module for installing Homebrew Casks."""

from __future__ import annotations

from dotstrap.core.models import BackendFamily

from .common import CommandInstaller


class BrewCaskInstaller(CommandInstaller):
    """GUI applications on macOS."""

    family = BackendFamily.CASK
    binary = "brew"

    def check_command(self, install_id: str) -> list[str]:
        return ["brew", "list", "--cask", install_id]

    def install_command(self, install_id: str) -> list[str]:
        return ["brew", "install", "--cask", install_id]

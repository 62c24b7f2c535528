"""Module for installing Homebrew formulae."""

from __future__ import annotations

from dotstrap.core.models import BackendFamily

from .common import CommandInstaller


class BrewFormulaInstaller(CommandInstaller):
    """CLI packages on macOS (or Linux with --force-brew)."""

    family = BackendFamily.FORMULA
    binary = "brew"

    def check_command(self, install_id: str) -> list[str]:
        return ["brew", "list", "--formula", install_id]

    def install_command(self, install_id: str) -> list[str]:
        return ["brew", "install", install_id]

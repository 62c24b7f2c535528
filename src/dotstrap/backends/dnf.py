"""Module for installing Fedora system packages with DNF."""

from __future__ import annotations

from dotstrap.core.models import BackendFamily

from .common import CommandInstaller


class DnfInstaller(CommandInstaller):
    """CLI packages on Fedora-like Linux.

    Installs go through ``sudo`` unless we are already root, as in most
    containers where ``sudo`` is not installed.
    """

    family = BackendFamily.SYSTEM_PACKAGE
    binary = "dnf"

    def __init__(self, use_sudo: bool = True) -> None:
        self.use_sudo = use_sudo

    def check_command(self, install_id: str) -> list[str]:
        return ["rpm", "-q", install_id]

    def install_command(self, install_id: str) -> list[str]:
        prefix = ["sudo"] if self.use_sudo else []
        return [*prefix, "dnf", "install", "-y", install_id]

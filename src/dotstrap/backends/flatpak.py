"""Module for installing Flatpak applications."""

from __future__ import annotations

from dotstrap.core.config import FLATPAK_REMOTE
from dotstrap.core.models import BackendFamily

from .common import CommandInstaller


class FlatpakInstaller(CommandInstaller):
    """GUI applications on Linux, identified by application ID.

    Flatpak is optional: when it is missing each GUI entry fails on its
    own instead of aborting the run.
    """

    family = BackendFamily.FLATPAK
    binary = "flatpak"
    required = False

    def __init__(self, remote: str = FLATPAK_REMOTE) -> None:
        self.remote = remote

    def check_command(self, install_id: str) -> list[str]:
        return ["flatpak", "info", install_id]

    def install_command(self, install_id: str) -> list[str]:
        return ["flatpak", "install", "-y", "--noninteractive", self.remote, install_id]

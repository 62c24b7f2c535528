"""Protocol definitions for package installer backends."""

from __future__ import annotations

from typing import Protocol

from dotstrap.core.models import BackendFamily, InstallationOutcome


class PackageInstaller(Protocol):
    """Protocol for package installer backends."""

    family: BackendFamily
    binary: str
    required: bool

    def available(self) -> bool:
        """Check whether the backend tool is present on this host.

        Returns:
            bool: True if the backend binary can be run.
        """
        ...

    def is_installed(self, install_id: str) -> bool:
        """Check whether a package is installed, without side effects.

        Args:
            install_id (str): The platform-specific package identifier.

        Returns:
            bool: True if the package is present.
        """
        ...

    def install(self, install_id: str) -> InstallationOutcome:
        """Install a package that is not yet present.

        Args:
            install_id (str): The platform-specific package identifier.

        Returns:
            InstallationOutcome: INSTALLED or FAILED; never raises.
        """
        ...

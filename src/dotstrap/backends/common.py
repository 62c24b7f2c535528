"""Common command-driven installer behaviour."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod

from dotstrap.core.logging import get_logger
from dotstrap.core.models import BackendFamily, InstallationOutcome
from dotstrap.core.shell import command_exists, excerpt, probe, run_capture

log = get_logger(__name__)


class CommandInstaller(ABC):
    """Installer driven by a fixed check command and install command.

    Subclasses set ``family`` and ``binary`` and build the two commands.
    """

    family: BackendFamily
    binary: str
    required: bool = True

    def available(self) -> bool:
        return command_exists(self.binary)

    @abstractmethod
    def check_command(self, install_id: str) -> list[str]:
        """Read-only command that exits 0 when the package is present."""

    @abstractmethod
    def install_command(self, install_id: str) -> list[str]:
        """Command that installs the package without prompting."""

    def is_installed(self, install_id: str) -> bool:
        """Check whether a package is installed.

        Args:
            install_id: The platform-specific package identifier.

        Returns:
            True if the check command exits 0. A missing tool counts as
            not installed.
        """
        installed = probe(*self.check_command(install_id))
        log.debug(
            "installed_check",
            family=self.family.value,
            install_id=install_id,
            installed=installed
        )
        return installed

    def install(self, install_id: str) -> InstallationOutcome:
        """Install a package non-interactively.

        Args:
            install_id: The platform-specific package identifier.

        Returns:
            INSTALLED on success, otherwise FAILED with a short excerpt
            of the command output.
        """
        if not self.available():
            log.warning(
                "install_backend_unavailable",
                family=self.family.value,
                install_id=install_id,
                binary=self.binary
            )
            return InstallationOutcome.failed(f"{self.binary} not available")

        cmd = self.install_command(install_id)
        start = time.perf_counter()
        log.info("install_start", family=self.family.value, install_id=install_id)

        try:
            output, code = run_capture(*cmd)
        except OSError as e:
            log.error(
                "install_spawn_failed",
                family=self.family.value,
                install_id=install_id,
                command=" ".join(cmd),
                error=str(e)
            )
            return InstallationOutcome.failed(str(e))

        duration_ms = int((time.perf_counter() - start) * 1000)

        if code != 0:
            reason = excerpt(output) or f"exit code {code}"
            log.warning(
                "install_failed",
                family=self.family.value,
                install_id=install_id,
                command=" ".join(cmd),
                returncode=code,
                error=reason,
                duration_ms=duration_ms
            )
            return InstallationOutcome.failed(reason)

        log.info(
            "install_complete",
            family=self.family.value,
            install_id=install_id,
            duration_ms=duration_ms
        )
        return InstallationOutcome.installed()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(family={self.family.value})"

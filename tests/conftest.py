"""
Shared test fixtures and configuration.
"""

import os
import tempfile
import textwrap
from pathlib import Path

import pytest

# Keep log files out of the real home directory.
os.environ.setdefault("DOTSTRAP_HOME", tempfile.mkdtemp(prefix="dotstrap-test-"))

from dotstrap.core.models import BackendFamily, InstallationOutcome  # noqa: E402


class FakeInstaller:
    """In-memory installer recording every check and install."""

    def __init__(
        self,
        family: BackendFamily,
        installed=(),
        fail=(),
        available: bool = True,
        required: bool = True,
        forbid_install: bool = False,
    ):
        self.family = family
        self.binary = f"fake-{family.value}"
        self.required = required
        self.installed = set(installed)
        self.fail = set(fail)
        self._available = available
        self.forbid_install = forbid_install
        self.checks: list[str] = []
        self.installs: list[str] = []

    def available(self) -> bool:
        return self._available

    def is_installed(self, install_id: str) -> bool:
        self.checks.append(install_id)
        return install_id in self.installed

    def install(self, install_id: str) -> InstallationOutcome:
        if self.forbid_install:
            pytest.fail(f"install({install_id!r}) called in dry-run mode")
        self.installs.append(install_id)
        if install_id in self.fail:
            return InstallationOutcome.failed(f"{install_id}: no match for argument")
        self.installed.add(install_id)
        return InstallationOutcome.installed()


@pytest.fixture
def make_installers():
    """Factory for a full family -> FakeInstaller mapping."""
    def factory(**kwargs) -> dict[BackendFamily, FakeInstaller]:
        return {family: FakeInstaller(family, **kwargs) for family in BackendFamily}
    return factory


@pytest.fixture
def write_manifest(tmp_path: Path):
    """Write dedented YAML to a manifest file and return its path."""
    def writer(content: str, name: str = "packages.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content))
        return path
    return writer

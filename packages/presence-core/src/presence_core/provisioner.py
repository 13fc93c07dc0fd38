"""Dependency provisioning for presences.

A presence that ships a package.json gets its dependencies installed into its
own directory before it is bundled. Installed packages are left in place.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from presence_core.config import DEFAULT_INSTALL_COMMAND
from presence_core.errors import DependencyInstallError

if TYPE_CHECKING:
    from presence_core.models import PresenceUnit
    from presence_core.reporting import Reporter

logger = structlog.get_logger(__name__)


class DependencyProvisioner:
    """Runs the package installer for presences that declare dependencies.

    The installer runs synchronously; nothing else proceeds while it does.

    Attributes:
        command: Installer command line, run with the presence directory as cwd
    """

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_INSTALL_COMMAND,
        reporter: Reporter | None = None,
    ) -> None:
        self.command = list(command)
        self.reporter = reporter
        self._log = logger.bind(component="dependency_provisioner")

    def provision(self, unit: PresenceUnit) -> bool:
        """Install a presence's dependencies if it has a manifest.

        Args:
            unit: Presence to provision.

        Returns:
            True if the installer ran, False if there was nothing to install.

        Raises:
            DependencyInstallError: If the installer is missing or exits non-zero.
        """
        if not unit.has_manifest:
            self._log.debug("dependencies_skipped", presence=unit.name, reason="no manifest")
            return False

        if self.reporter is not None:
            self.reporter.info(f"Installing dependencies for {unit.path.name}")
        self._log.info("dependencies_installing", presence=unit.name, command=self.command)

        try:
            subprocess.run(
                self.command,
                cwd=unit.path,
                check=True,
                capture_output=True,
                text=True,
            )
        except subprocess.CalledProcessError as e:
            raise DependencyInstallError(
                unit.name,
                exit_code=e.returncode,
                internal_details=(e.stderr or e.stdout or "").strip() or None,
            ) from e
        except OSError as e:
            raise DependencyInstallError(unit.name, internal_details=str(e)) from e

        self._log.info("dependencies_installed", presence=unit.name)
        return True

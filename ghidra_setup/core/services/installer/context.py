"""
Install context — the transient state of one run.

Holds the settings, the adapter registry, host facts and everything
earlier steps learn for later ones (architecture, Homebrew prefix,
environment overrides). Nothing here is persisted.
"""

from __future__ import annotations

import logging
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path

from ghidra_setup.adapters.registry import AdapterRegistry
from ghidra_setup.core.models.action import Action, Receipt
from ghidra_setup.core.models.settings import InstallSettings
from ghidra_setup.core.services.installer.data.constants import DEFAULT_SHELL, PROBE_TIMEOUT

logger = logging.getLogger(__name__)


def _login_shell() -> str:
    return os.path.basename(os.environ.get("SHELL", "")) or DEFAULT_SHELL


@dataclass
class InstallContext:
    """Mutable state threaded through every install step."""

    settings: InstallSettings
    registry: AdapterRegistry
    machine: str = field(default_factory=platform.machine)
    system: str = field(default_factory=platform.system)
    shell: str = field(default_factory=_login_shell)

    # Filled in by the steps
    arch: str | None = None
    brew_prefix: Path | None = None
    java_version: str | None = None
    env: dict[str, str] = field(default_factory=dict)

    # ── Paths derived from the Homebrew prefix ───────────────────

    @property
    def prefix(self) -> Path:
        if self.brew_prefix is None:
            raise RuntimeError("Homebrew prefix used before architecture was resolved")
        return self.brew_prefix

    @property
    def brew_bin(self) -> Path:
        return self.prefix / "bin"

    @property
    def jdk_home(self) -> Path:
        return self.prefix / "opt" / self.settings.jdk_formula

    @property
    def jdk_bundle(self) -> Path:
        """The ``.jdk`` bundle macOS' ``/usr/bin/java`` wrappers look for."""
        return self.jdk_home / "libexec" / "openjdk.jdk"

    @property
    def jdk_symlink(self) -> Path:
        return self.settings.jvm_dir / self.settings.jdk_symlink_name

    @property
    def app_path(self) -> Path:
        return self.settings.applications_dir / self.settings.app_name

    # ── Command helpers ──────────────────────────────────────────

    def run(
        self,
        action_id: str,
        command: list[str],
        *,
        needs_sudo: bool = False,
        interactive: bool = False,
        merge_stderr: bool = False,
        probe: bool = False,
    ) -> Receipt:
        """Run a command through the shell adapter.

        Probes get a short timeout; installs get ``command_timeout``.
        """
        action = Action(
            id=action_id,
            name=" ".join(command),
            adapter="shell",
            params={
                "command": command,
                "needs_sudo": needs_sudo,
                "interactive": interactive,
                "merge_stderr": merge_stderr,
            },
        )
        timeout = PROBE_TIMEOUT if probe else self.settings.command_timeout
        if not probe:
            logger.info("Running: %s", action.name)
        return self.registry.execute_action(action, env=self.env, timeout=timeout)

    def fs(self, action_id: str, operation: str, source: Path, dest: Path) -> Receipt:
        """Move or symlink through the filesystem adapter."""
        action = Action(
            id=action_id,
            name=f"{operation} {source} {dest}",
            adapter="filesystem",
            params={"operation": operation, "source": str(source), "dest": str(dest)},
        )
        logger.info("Filesystem %s: %s → %s", operation, source, dest)
        return self.registry.execute_action(
            action, env=self.env, timeout=self.settings.command_timeout,
        )

    def prepend_path(self, directory: Path) -> None:
        """Put ``directory`` first on the PATH seen by later commands."""
        current = self.env.get("PATH", os.environ.get("PATH", ""))
        entries = [p for p in current.split(os.pathsep) if p and p != str(directory)]
        self.env["PATH"] = os.pathsep.join([str(directory), *entries])

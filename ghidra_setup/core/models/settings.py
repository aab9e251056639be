"""
InstallSettings — tunables for an install run.

Every field has a default matching a stock macOS + Homebrew setup, so
an empty (or missing) config file is valid.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"


class InstallSettings(BaseModel):
    """Validated install configuration (``ghidra-setup.yml``)."""

    # ── Target application ───────────────────────────────────────
    cask: str = "ghidra"
    app_name: str = "Ghidra.app"
    launcher: str = "ghidraRun"
    applications_dir: Path = Path("/Applications")
    relocate_app: bool = True

    # ── Java runtime ─────────────────────────────────────────────
    jdk_formula: str = "openjdk@21"
    min_java_version: str = "21"
    legacy_jdk_formulas: list[str] = Field(default_factory=lambda: ["openjdk@17"])
    remove_legacy_jdk: bool = False
    jvm_dir: Path = Path("/Library/Java/JavaVirtualMachines")

    # ── Homebrew ─────────────────────────────────────────────────
    brew_prefix: Path | None = None          # None = derive from architecture
    homebrew_install_url: str = HOMEBREW_INSTALL_URL
    homebrew_install_sha256: str | None = None

    # ── Host ─────────────────────────────────────────────────────
    require_macos: bool = True
    shell_profile: Path | None = None        # None = derive from $SHELL
    command_timeout: int = 1800              # seconds; brew downloads are slow

    @field_validator("min_java_version")
    @classmethod
    def _check_min_version(cls, v: str) -> str:
        from ghidra_setup.core.services.installer.domain.version import parse_version

        parse_version(v)  # raises ValueError on garbage
        return v

    @field_validator("command_timeout")
    @classmethod
    def _check_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("command_timeout must be positive")
        return v

    @property
    def jdk_major(self) -> int:
        """Major version the JDK formula provides, e.g. 21 for ``openjdk@21``."""
        from ghidra_setup.core.services.installer.domain.version import parse_version

        _, _, suffix = self.jdk_formula.partition("@")
        return parse_version(suffix or self.min_java_version)[0]

    @property
    def jdk_symlink_name(self) -> str:
        return f"openjdk-{self.jdk_major}.jdk"

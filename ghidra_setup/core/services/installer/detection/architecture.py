"""
L3 Detection — Host architecture and Homebrew prefix.

Pure mapping plus the host gate; raises ``UnsupportedEnvironment``.
"""

from __future__ import annotations

from pathlib import Path

from ghidra_setup.core.services.installer.data.constants import BREW_PREFIXES, MACHINE_ARCH
from ghidra_setup.core.services.installer.domain.errors import UnsupportedEnvironment


def resolve_architecture(machine: str) -> str:
    """Map a machine string (``uname -m``) to an architecture tag.

    Returns:
        ``"intel"`` or ``"apple-silicon"``.

    Raises:
        UnsupportedEnvironment: For anything else.
    """
    arch = MACHINE_ARCH.get(machine.strip().lower())
    if arch is None:
        raise UnsupportedEnvironment(
            f"Unsupported architecture: {machine or '(unknown)'}. "
            "Only Intel (x86_64) and Apple Silicon (arm64) Macs are supported.",
            machine=machine,
        )
    return arch


def brew_prefix_for(arch: str) -> Path:
    """Homebrew's default install prefix for an architecture tag."""
    try:
        return BREW_PREFIXES[arch]
    except KeyError:
        raise UnsupportedEnvironment(f"No Homebrew prefix for architecture '{arch}'") from None


def check_host_system(system: str, *, require_macos: bool = True) -> None:
    """Refuse to run on anything but macOS unless told otherwise."""
    if require_macos and system != "Darwin":
        raise UnsupportedEnvironment(
            f"Unsupported operating system: {system or '(unknown)'}. "
            "This installer targets macOS (set require_macos: false to override).",
            system=system,
        )

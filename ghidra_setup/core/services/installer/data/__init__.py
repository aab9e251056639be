"""
L0 Data — static tables (no logic).
"""

from ghidra_setup.core.services.installer.data.constants import (  # noqa: F401
    ARCH_LABELS,
    BREW_PREFIXES,
    DEFAULT_SHELL,
    MACHINE_ARCH,
    PROBE_TIMEOUT,
    PROFILE_MARKER,
    SHELL_PROFILES,
)

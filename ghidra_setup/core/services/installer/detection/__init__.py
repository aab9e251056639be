"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
"""

from ghidra_setup.core.services.installer.detection.architecture import (  # noqa: F401
    brew_prefix_for,
    check_host_system,
    resolve_architecture,
)
from ghidra_setup.core.services.installer.detection.ghidra_location import (  # noqa: F401
    GhidraLocation,
    latest_version_dir,
    locate_ghidra,
)
from ghidra_setup.core.services.installer.detection.java_version import (  # noqa: F401
    get_java_version,
    parse_java_version_output,
)
from ghidra_setup.core.services.installer.detection.probes import (  # noqa: F401
    cask_installed,
    formula_installed,
    has_homebrew,
    has_xcode_clt,
)

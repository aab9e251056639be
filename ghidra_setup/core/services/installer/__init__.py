"""
Ghidra installer service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate onion layer (data → domain → detection → execution →
orchestration)::

    from ghidra_setup.core.services.installer import InstallContext, run_steps
"""

# ── L0: Data ──
from ghidra_setup.core.services.installer.data.constants import (  # noqa: F401
    BREW_PREFIXES,
    MACHINE_ARCH,
    SHELL_PROFILES,
)

# ── L1: Domain ──
from ghidra_setup.core.services.installer.domain.errors import (  # noqa: F401
    ErrorKind,
    InstallError,
)

# ── Run state ──
from ghidra_setup.core.services.installer.context import InstallContext  # noqa: F401

# ── L3: Detection ──
from ghidra_setup.core.services.installer.detection.ghidra_location import (  # noqa: F401
    GhidraLocation,
    locate_ghidra,
)

# ── L5: Orchestration ──
from ghidra_setup.core.services.installer.orchestration.orchestrator import (  # noqa: F401
    run_steps,
)
from ghidra_setup.core.services.installer.orchestration.steps import (  # noqa: F401
    INSTALL_STEPS,
    Step,
)

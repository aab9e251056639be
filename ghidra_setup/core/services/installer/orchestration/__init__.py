"""
L5 Orchestration — step records and the linear step runner.
"""

from ghidra_setup.core.services.installer.orchestration.orchestrator import (  # noqa: F401
    run_steps,
)
from ghidra_setup.core.services.installer.orchestration.steps import (  # noqa: F401
    INSTALL_STEPS,
    Step,
)

"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from ghidra_setup.core.models import Action, Receipt, InstallSettings, InstallReport
"""

from ghidra_setup.core.models.action import Action, Receipt
from ghidra_setup.core.models.report import InstallReport, StepResult
from ghidra_setup.core.models.settings import InstallSettings

__all__ = [
    # action.py
    "Action",
    # report.py
    "InstallReport",
    # settings.py
    "InstallSettings",
    "Receipt",
    "StepResult",
]

"""
L1 Domain — Install error taxonomy.

Every failure of a required step is fatal. Step functions raise one of
these; the orchestrator turns it into a failed ``StepResult`` carrying
the kind, the step name and any details.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    UNSUPPORTED_ENVIRONMENT = "unsupported-environment"
    DEPENDENCY_INSTALL_FAILURE = "dependency-install-failure"
    DEPENDENCY_UPDATE_FAILURE = "dependency-update-failure"
    VERIFICATION_FAILURE = "verification-failure"
    CONFIGURATION_ERROR = "configuration-error"


class InstallError(Exception):
    """Base class for fatal install failures."""

    kind: ErrorKind = ErrorKind.DEPENDENCY_INSTALL_FAILURE

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class UnsupportedEnvironment(InstallError):
    kind = ErrorKind.UNSUPPORTED_ENVIRONMENT


class DependencyInstallFailure(InstallError):
    kind = ErrorKind.DEPENDENCY_INSTALL_FAILURE


class DependencyUpdateFailure(InstallError):
    kind = ErrorKind.DEPENDENCY_UPDATE_FAILURE


class VerificationFailure(InstallError):
    kind = ErrorKind.VERIFICATION_FAILURE

"""
L1 Domain — pure logic, no I/O.
"""

from ghidra_setup.core.services.installer.domain.errors import (  # noqa: F401
    DependencyInstallFailure,
    DependencyUpdateFailure,
    ErrorKind,
    InstallError,
    UnsupportedEnvironment,
    VerificationFailure,
)
from ghidra_setup.core.services.installer.domain.version import (  # noqa: F401
    is_below,
    parse_version,
    version_sort_key,
)

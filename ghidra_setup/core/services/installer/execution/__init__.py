"""
L4 Execution — functions that CHANGE system state.

All external commands go through the adapter registry held by the
``InstallContext``; the shell profile is the only file written directly.
"""

from ghidra_setup.core.services.installer.execution.homebrew import (  # noqa: F401
    brew_install,
    brew_uninstall,
    brew_update,
    install_homebrew,
    load_shellenv,
    parse_shellenv,
)
from ghidra_setup.core.services.installer.execution.script_verify import (  # noqa: F401
    cleanup_script,
    download_and_verify_script,
    sha256_file,
)
from ghidra_setup.core.services.installer.execution.shell_profile import (  # noqa: F401
    missing_lines,
    resolve_profile_path,
    shell_config_line,
    upsert_profile_lines,
)

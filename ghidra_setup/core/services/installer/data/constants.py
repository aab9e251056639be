"""
L0 Data — Constants.

Architecture names and the Homebrew prefix each one installs into.
"""

from __future__ import annotations

from pathlib import Path

# ``uname -m`` / ``platform.machine()`` → architecture tag
MACHINE_ARCH: dict[str, str] = {
    "x86_64": "intel",
    "amd64": "intel",
    "arm64": "apple-silicon",
    "aarch64": "apple-silicon",
}

# Architecture tag → Homebrew install prefix
BREW_PREFIXES: dict[str, Path] = {
    "intel": Path("/usr/local"),
    "apple-silicon": Path("/opt/homebrew"),
}

ARCH_LABELS: dict[str, str] = {
    "intel": "Intel (x86_64)",
    "apple-silicon": "Apple Silicon (arm64)",
}

# Marker written above lines we add to a shell profile
PROFILE_MARKER = "# Added by ghidra-setup"

# Short probes should never hang the run
PROBE_TIMEOUT = 30

# Shell name (basename of $SHELL) → rc file that interactive shells read.
# macOS Terminal starts login shells, but zsh reads ~/.zshrc for those too.
SHELL_PROFILES: dict[str, str] = {
    "zsh": "~/.zshrc",
    "bash": "~/.bash_profile",
    "fish": "~/.config/fish/config.fish",
    "sh": "~/.profile",
}
DEFAULT_SHELL = "zsh"

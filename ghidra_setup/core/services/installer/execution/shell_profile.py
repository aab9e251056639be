"""
L4 Execution — Shell profile persistence.

Writes PATH / env exports to the user's shell profile. Writes are
IDEMPOTENT: the profile is read first and only export lines that are
not already present (exact line match) get appended.
"""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path
from typing import Any

from ghidra_setup.core.services.installer.data.constants import (
    PROFILE_MARKER,
    SHELL_PROFILES,
)

logger = logging.getLogger(__name__)


def shell_config_line(
    shell_type: str,
    *,
    path_entry: str | None = None,
    env_var: tuple[str, str] | None = None,
) -> str:
    """Generate shell-specific PATH or env export line.

    Args:
        shell_type: ``"bash"`` | ``"zsh"`` | ``"fish"`` | etc.
        path_entry: Directory to add to PATH, e.g. ``"/opt/homebrew/opt/openjdk@21/bin"``.
        env_var: Tuple of ``(name, value)`` e.g. ``("JAVA_HOME", "/opt/...")``.

    Returns:
        Shell-specific export line.
    """
    if shell_type == "fish":
        if path_entry:
            return f"set -gx PATH {path_entry} $PATH"
        if env_var:
            return f"set -gx {env_var[0]} {env_var[1]}"
    else:
        # POSIX (bash, zsh, sh)
        if path_entry:
            return f'export PATH="{path_entry}:$PATH"'
        if env_var:
            return f'export {env_var[0]}="{env_var[1]}"'
    return ""


def resolve_profile_path(shell_type: str, override: Path | None = None) -> Path:
    """Profile file for a shell, honouring an explicit override."""
    if override is not None:
        return Path(override).expanduser()
    rc_file = SHELL_PROFILES.get(shell_type, SHELL_PROFILES["sh"])
    return Path(rc_file).expanduser()


def _read_profile(profile: Path) -> str:
    # Old profiles may carry Latin-1 bytes; keep them opaque
    return profile.read_text(encoding="utf-8", errors="surrogateescape")


def missing_lines(profile: Path, lines: list[str]) -> list[str]:
    """Lines from ``lines`` that the profile does not contain yet."""
    existing: set[str] = set()
    if profile.is_file():
        existing = {ln.strip() for ln in _read_profile(profile).splitlines()}
    return [ln for ln in lines if ln.strip() and ln.strip() not in existing]


def upsert_profile_lines(profile: Path, lines: list[str]) -> dict[str, Any]:
    """Append the missing ``lines`` to ``profile`` under a marker comment.

    The existing profile is backed up (``<file>.backup.<epoch>``)
    before it is modified.

    Returns:
        ``{"ok": True, "lines_added": N, "file": "...", "backup": ...}``
        or ``{"ok": False, "error": "..."}``.
    """
    try:
        new_lines = missing_lines(profile, lines)
    except OSError as exc:
        return {"ok": False, "error": f"Cannot read {profile}: {exc}"}

    if not new_lines:
        return {
            "ok": True,
            "lines_added": 0,
            "file": str(profile),
            "note": "all lines already present",
        }

    backup: str | None = None
    existing_content = ""
    if profile.is_file():
        existing_content = _read_profile(profile)
        backup = f"{profile}.backup.{int(time.time())}"
        try:
            shutil.copy2(profile, backup)
        except OSError as exc:
            logger.warning("Could not back up %s: %s", profile, exc)
            backup = None

    try:
        profile.parent.mkdir(parents=True, exist_ok=True)
        with open(profile, "a", encoding="utf-8") as f:
            if existing_content and not existing_content.endswith("\n"):
                f.write("\n")
            f.write(f"\n{PROFILE_MARKER}\n")
            for ln in new_lines:
                f.write(f"{ln}\n")
    except OSError as exc:
        return {"ok": False, "error": f"Failed to write {profile}: {exc}"}

    logger.info("Added %d line(s) to %s", len(new_lines), profile)
    return {
        "ok": True,
        "lines_added": len(new_lines),
        "file": str(profile),
        "backup": backup,
        "lines": new_lines,
    }

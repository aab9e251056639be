"""
L4 Execution — Homebrew commands.

Thin wrappers that build the brew command lines and hand them to the
shell adapter. Each returns the ``Receipt``; callers decide what a
failure means.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping

from ghidra_setup.core.models.action import Receipt
from ghidra_setup.core.services.installer.context import InstallContext
from ghidra_setup.core.services.installer.execution.script_verify import (
    cleanup_script,
    download_and_verify_script,
)

logger = logging.getLogger(__name__)

_EXPORT_RE = re.compile(r'export\s+([A-Za-z_][A-Za-z0-9_]*)="([^"]*)"')
_ALT_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\+([^}]*)\}")
_DEFAULT_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*):?-([^}]*)\}")
_VAR_RE = re.compile(r"\$\{?([A-Za-z_][A-Za-z0-9_]*)\}?")


def install_homebrew(ctx: InstallContext) -> Receipt:
    """Download the official installer and run it once, interactively.

    The installer prompts for the user's password and confirmation, so
    it inherits the terminal.
    """
    settings = ctx.settings
    dl = download_and_verify_script(
        ctx, settings.homebrew_install_url, settings.homebrew_install_sha256,
    )
    if not dl["ok"]:
        return Receipt.failure(adapter="shell", action_id="install-homebrew", error=dl["error"])

    try:
        return ctx.run("install-homebrew", ["/bin/bash", dl["path"]], interactive=True)
    finally:
        cleanup_script(dl["path"])


def _expand(value: str, current: Mapping[str, str]) -> str:
    """Expand the small subset of shell parameter syntax ``brew shellenv`` emits."""
    value = _ALT_RE.sub(
        lambda m: _expand(m.group(2), current) if m.group(1) in current else "", value,
    )
    value = _DEFAULT_RE.sub(lambda m: current.get(m.group(1)) or m.group(2), value)
    return _VAR_RE.sub(lambda m: current.get(m.group(1), ""), value)


def parse_shellenv(output: str, current: Mapping[str, str]) -> dict[str, str]:
    """Turn ``brew shellenv`` output into concrete environment values.

    Only ``export NAME="value"`` statements are honoured; references to
    other variables are resolved against ``current`` (and earlier
    exports in the same output).
    """
    resolved: dict[str, str] = {}
    for line in output.splitlines():
        if line.lstrip().startswith("["):
            continue  # conditional MANPATH tweak
        for name, raw in _EXPORT_RE.findall(line):
            resolved[name] = _expand(raw, {**current, **resolved})
    return resolved


def load_shellenv(ctx: InstallContext) -> dict[str, str]:
    """Evaluate ``<prefix>/bin/brew shellenv`` into the run's environment."""
    brew = str(ctx.brew_bin / "brew")
    receipt = ctx.run("brew-shellenv", [brew, "shellenv"], probe=True)
    if not receipt.ok:
        logger.warning("brew shellenv failed (%s); adding %s to PATH", receipt.error, ctx.brew_bin)
        ctx.prepend_path(ctx.brew_bin)
        return {}

    current = {**os.environ, **ctx.env}
    exports = parse_shellenv(receipt.output, current)
    ctx.env.update(exports)
    if "PATH" not in exports:
        ctx.prepend_path(ctx.brew_bin)
    logger.debug("brew shellenv exported: %s", ", ".join(sorted(exports)))
    return exports


def brew_update(ctx: InstallContext) -> Receipt:
    return ctx.run("brew-update", ["brew", "update"])


def brew_install(ctx: InstallContext, name: str, *, cask: bool = False) -> Receipt:
    if cask:
        return ctx.run(f"brew-install-cask-{name}", ["brew", "install", "--cask", name])
    return ctx.run(f"brew-install-{name}", ["brew", "install", name])


def brew_uninstall(ctx: InstallContext, name: str) -> Receipt:
    return ctx.run(f"brew-uninstall-{name}", ["brew", "uninstall", name])

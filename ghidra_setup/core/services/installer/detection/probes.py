"""
L3 Detection — Presence probes for Homebrew, the toolchain and casks.

These functions READ system state but never WRITE. Each returns a
plain bool; a probe that cannot run counts as "absent".
"""

from __future__ import annotations

from ghidra_setup.core.services.installer.context import InstallContext


def has_homebrew(ctx: InstallContext) -> bool:
    """``brew`` resolves on the run's PATH and answers ``--version``."""
    return ctx.run("probe-brew", ["brew", "--version"], probe=True).ok


def has_xcode_clt(ctx: InstallContext) -> bool:
    """Xcode Command Line Tools are selected (``xcode-select -p``)."""
    return ctx.run("probe-xcode-clt", ["xcode-select", "-p"], probe=True).ok


def cask_installed(ctx: InstallContext, cask: str) -> bool:
    return ctx.run(
        f"probe-cask-{cask}", ["brew", "list", "--cask", "--versions", cask], probe=True,
    ).ok


def formula_installed(ctx: InstallContext, formula: str) -> bool:
    """``brew list --versions`` prints nothing (and exits 1) when absent."""
    receipt = ctx.run(
        f"probe-formula-{formula}", ["brew", "list", "--versions", formula], probe=True,
    )
    return receipt.ok and bool(receipt.output.strip())

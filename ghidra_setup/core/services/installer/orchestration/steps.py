"""
L5 Orchestration — The install steps.

Each step is a ``Step`` record: an optional read-only ``probe`` that
says whether the step is already satisfied, and an ``apply`` that does
the work and returns a ``StepResult`` or raises an ``InstallError``.
``INSTALL_STEPS`` is the fixed order the orchestrator runs them in.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ghidra_setup.core.models.report import StepResult
from ghidra_setup.core.services.installer.context import InstallContext
from ghidra_setup.core.services.installer.data.constants import ARCH_LABELS
from ghidra_setup.core.services.installer.detection.architecture import (
    brew_prefix_for,
    check_host_system,
    resolve_architecture,
)
from ghidra_setup.core.services.installer.detection.ghidra_location import locate_ghidra
from ghidra_setup.core.services.installer.detection.java_version import get_java_version
from ghidra_setup.core.services.installer.detection.probes import (
    cask_installed,
    formula_installed,
    has_homebrew,
    has_xcode_clt,
)
from ghidra_setup.core.services.installer.domain.errors import (
    DependencyInstallFailure,
    DependencyUpdateFailure,
    VerificationFailure,
)
from ghidra_setup.core.services.installer.domain.version import is_below
from ghidra_setup.core.services.installer.execution.homebrew import (
    brew_install,
    brew_uninstall,
    brew_update,
    install_homebrew,
    load_shellenv,
)
from ghidra_setup.core.services.installer.execution.shell_profile import (
    resolve_profile_path,
    shell_config_line,
    upsert_profile_lines,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    """One gate in the install chain.

    ``after`` runs once the step is satisfied (probed or applied) and
    must be read-only; it loads environment the next steps rely on.
    ``read_only`` steps run their ``apply`` even in dry-run mode.
    """

    name: str
    description: str
    apply: Callable[[InstallContext], StepResult]
    probe: Callable[[InstallContext], bool] | None = None
    satisfied: Callable[[InstallContext], str] | None = None
    after: Callable[[InstallContext], dict[str, Any] | None] | None = None
    optional: bool = False
    read_only: bool = False


# ── 1. Architecture ─────────────────────────────────────────────


def apply_architecture(ctx: InstallContext) -> StepResult:
    check_host_system(ctx.system, require_macos=ctx.settings.require_macos)
    arch = resolve_architecture(ctx.machine)
    ctx.arch = arch
    ctx.brew_prefix = ctx.settings.brew_prefix or brew_prefix_for(arch)
    # brew may be installed but not yet on the user's PATH
    ctx.prepend_path(ctx.brew_bin)
    return StepResult(
        step="architecture",
        message=f"Detected {ARCH_LABELS[arch]} architecture.",
        details={"machine": ctx.machine, "arch": arch, "brew_prefix": str(ctx.brew_prefix)},
    )


# ── 2. Homebrew ─────────────────────────────────────────────────


def apply_homebrew(ctx: InstallContext) -> StepResult:
    receipt = install_homebrew(ctx)
    if not receipt.ok:
        raise DependencyInstallFailure(
            "Failed to install Homebrew. Please install it manually and rerun ghidra-setup.",
            **receipt.failure_details(),
        )
    if not has_homebrew(ctx):
        raise DependencyInstallFailure(
            f"Homebrew installer finished but brew is still not available in {ctx.brew_bin}.",
        )
    return StepResult(step="homebrew", message="Homebrew installed successfully.")


def _homebrew_env(ctx: InstallContext) -> dict[str, Any]:
    exports = load_shellenv(ctx)
    return {"shellenv": sorted(exports)}


# ── 3. Homebrew update ──────────────────────────────────────────


def apply_homebrew_update(ctx: InstallContext) -> StepResult:
    receipt = brew_update(ctx)
    if not receipt.ok:
        raise DependencyUpdateFailure(
            "Failed to update Homebrew. Please check your internet connection or permissions.",
            **receipt.failure_details(),
        )
    return StepResult(step="homebrew-update", message="Homebrew is up to date.")


# ── 4. Xcode Command Line Tools ─────────────────────────────────


def apply_xcode_clt(ctx: InstallContext) -> StepResult:
    receipt = ctx.run("install-xcode-clt", ["xcode-select", "--install"])
    raise DependencyInstallFailure(
        "Xcode Command Line Tools are not installed. Follow the installer prompts, "
        "then rerun ghidra-setup.",
        installer_launched=receipt.ok,
        **receipt.failure_details(),
    )


# ── 5. Java runtime ─────────────────────────────────────────────


def probe_jdk(ctx: InstallContext) -> bool:
    # The formula is keg-only: make an installed copy visible before probing
    java_bin = ctx.jdk_home / "bin"
    if (java_bin / "java").exists():
        ctx.prepend_path(java_bin)
        ctx.env["JAVA_HOME"] = str(ctx.jdk_home)

    version = get_java_version(ctx)
    ctx.java_version = version
    if version is None:
        return False
    try:
        return not is_below(version, ctx.settings.min_java_version)
    except ValueError:
        logger.warning("Unrecognised Java version %r; treating it as too old", version)
        return False


def persist_java_environment(ctx: InstallContext) -> dict[str, Any]:
    """Upsert PATH/JAVA_HOME into the shell profile and apply them to this run."""
    java_bin = ctx.jdk_home / "bin"
    lines = [
        shell_config_line(ctx.shell, path_entry=str(java_bin)),
        shell_config_line(ctx.shell, env_var=("JAVA_HOME", str(ctx.jdk_home))),
    ]
    profile = resolve_profile_path(ctx.shell, ctx.settings.shell_profile)
    result = upsert_profile_lines(profile, lines)
    if not result["ok"]:
        raise DependencyInstallFailure(
            f"Java installed but the shell profile could not be updated: {result['error']}",
            profile=str(profile),
        )

    ctx.prepend_path(java_bin)
    ctx.env["JAVA_HOME"] = str(ctx.jdk_home)
    return result


def _remove_legacy_jdks(ctx: InstallContext) -> list[str]:
    settings = ctx.settings
    removed: list[str] = []
    for formula in settings.legacy_jdk_formulas:
        if formula == settings.jdk_formula:
            continue
        if not settings.remove_legacy_jdk:
            logger.info("Leaving %s installed (remove_legacy_jdk is off)", formula)
            continue
        if not formula_installed(ctx, formula):
            continue
        receipt = brew_uninstall(ctx, formula)
        if receipt.ok:
            removed.append(formula)
        else:
            logger.warning("Could not uninstall %s: %s", formula, receipt.error)
    return removed


def apply_jdk(ctx: InstallContext) -> StepResult:
    settings = ctx.settings
    formula = settings.jdk_formula
    previous = ctx.java_version

    if previous is None:
        receipt = brew_install(ctx, formula)
        if not receipt.ok:
            raise DependencyInstallFailure(
                f"Failed to install {formula}. Please install it manually "
                f"(brew install {formula}) and rerun ghidra-setup.",
                **receipt.failure_details(),
            )
        removed: list[str] = []
        message = f"{formula} installed and configured."
    else:
        removed = _remove_legacy_jdks(ctx)
        receipt = brew_install(ctx, formula)
        if not receipt.ok:
            raise DependencyUpdateFailure(
                f"Java {previous} is too old and {formula} could not be installed.",
                previous_version=previous,
                **receipt.failure_details(),
            )
        message = f"Java {previous} was too old; {formula} installed and configured."

    profile = persist_java_environment(ctx)
    return StepResult(
        step="jdk",
        message=message,
        details={
            "previous_version": previous,
            "formula": formula,
            "java_home": str(ctx.jdk_home),
            "removed": removed,
            "profile": profile.get("file"),
            "profile_lines_added": profile.get("lines_added", 0),
        },
    )


# ── 6. Ghidra cask ──────────────────────────────────────────────


def apply_ghidra(ctx: InstallContext) -> StepResult:
    cask = ctx.settings.cask
    receipt = brew_install(ctx, cask, cask=True)
    if not receipt.ok:
        raise DependencyInstallFailure(
            "Failed to install Ghidra. Please check the brew output and try again.",
            **receipt.failure_details(),
        )
    return StepResult(step="ghidra", message="Ghidra installed successfully.")


# ── 7. Verify / relocate ────────────────────────────────────────


def apply_verify(ctx: InstallContext) -> StepResult:
    location = locate_ghidra(ctx)
    details: dict[str, Any] = {"location": location.to_dict()}

    if location.where == "primary":
        return StepResult(
            step="verify",
            message=f"Ghidra is installed at {location.path}. Launch it with 'open {location.path}'.",
            details=details,
        )

    if location.where == "secondary":
        message = (
            f"Ghidra is installed at {location.version_dir}. "
            f"Launch it with './{ctx.settings.launcher}' from that directory."
        )
        if location.app_bundle is not None and ctx.settings.relocate_app:
            receipt = ctx.fs("relocate-app", "move", location.app_bundle, ctx.app_path)
            details["relocated"] = receipt.ok
            if receipt.ok:
                message = (
                    f"Ghidra moved to {ctx.app_path}. Launch it with 'open {ctx.app_path}'."
                )
            else:
                logger.warning("Could not move %s: %s", location.app_bundle, receipt.error)
                details["relocation_error"] = receipt.error
        return StepResult(step="verify", message=message, details=details)

    if location.where == "incomplete":
        raise VerificationFailure(
            f"Ghidra installation verification failed. "
            f"Please check manually in {location.version_dir}.",
            **details,
        )

    raise VerificationFailure(
        "Ghidra installation verification failed. Please check manually in "
        + " or ".join(str(p) for p in location.searched) + ".",
        **details,
    )


# ── 8. JDK symlink ──────────────────────────────────────────────


def apply_jdk_symlink(ctx: InstallContext) -> StepResult:
    if not ctx.jdk_bundle.exists():
        return StepResult(
            step="jdk-symlink",
            status="skipped",
            message=f"No Homebrew JDK bundle at {ctx.jdk_bundle}; nothing to link.",
        )
    if ctx.jdk_symlink.exists() and not ctx.jdk_symlink.is_symlink():
        return StepResult(
            step="jdk-symlink",
            status="skipped",
            message=f"{ctx.jdk_symlink} already exists and is not a symlink; leaving it alone.",
        )
    receipt = ctx.fs("jdk-symlink", "symlink", ctx.jdk_bundle, ctx.jdk_symlink)
    if not receipt.ok:
        raise DependencyInstallFailure(
            f"Could not symlink {ctx.jdk_symlink} for the system Java wrappers.",
            **receipt.failure_details(),
        )
    return StepResult(
        step="jdk-symlink",
        message=f"{ctx.settings.jdk_formula} symlinked for system Java wrappers.",
        details={"link": str(ctx.jdk_symlink), "target": str(ctx.jdk_bundle)},
    )


INSTALL_STEPS: tuple[Step, ...] = (
    Step(
        name="architecture",
        description="detect the CPU architecture",
        apply=apply_architecture,
        read_only=True,
    ),
    Step(
        name="homebrew",
        description="install Homebrew",
        apply=apply_homebrew,
        probe=has_homebrew,
        satisfied=lambda ctx: "Homebrew is already installed.",
        after=_homebrew_env,
    ),
    Step(
        name="homebrew-update",
        description="run brew update",
        apply=apply_homebrew_update,
    ),
    Step(
        name="xcode-clt",
        description="install the Xcode Command Line Tools",
        apply=apply_xcode_clt,
        probe=has_xcode_clt,
        satisfied=lambda ctx: "Xcode Command Line Tools are already installed.",
    ),
    Step(
        name="jdk",
        description="install or upgrade the Java runtime",
        apply=apply_jdk,
        probe=probe_jdk,
        satisfied=lambda ctx: f"Java {ctx.java_version} is compatible with Ghidra.",
    ),
    Step(
        name="ghidra",
        description="install the Ghidra cask",
        apply=apply_ghidra,
        probe=lambda ctx: cask_installed(ctx, ctx.settings.cask),
        satisfied=lambda ctx: "Ghidra is already installed.",
    ),
    Step(
        name="verify",
        description="verify the Ghidra install location",
        apply=apply_verify,
    ),
    Step(
        name="jdk-symlink",
        description="symlink the JDK for system Java wrappers",
        apply=apply_jdk_symlink,
        probe=lambda ctx: ctx.jdk_symlink.is_symlink(),
        satisfied=lambda ctx: f"{ctx.settings.jdk_formula} is already symlinked for system use.",
        optional=True,
    ),
)

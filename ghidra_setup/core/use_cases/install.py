"""
Install use case — load settings, build the run context, run the steps.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ghidra_setup.adapters.registry import AdapterRegistry, default_registry
from ghidra_setup.core.config.loader import ConfigError, load_settings
from ghidra_setup.core.models.report import InstallReport, StepResult
from ghidra_setup.core.models.settings import InstallSettings
from ghidra_setup.core.services.installer.context import InstallContext
from ghidra_setup.core.services.installer.domain.errors import ErrorKind
from ghidra_setup.core.services.installer.orchestration.orchestrator import run_steps


@dataclass
class InstallResult:
    """Outcome of an install (or dry-run) invocation."""

    report: InstallReport | None = None
    settings: InstallSettings | None = None
    error: str | None = None
    error_kind: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.report is not None and self.report.succeeded

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        if self.error:
            return {"status": "failed", "error": self.error, "error_kind": self.error_kind}
        assert self.report is not None
        return self.report.to_dict()


def run_install(
    config_path: Path | None = None,
    *,
    dry_run: bool = False,
    registry: AdapterRegistry | None = None,
    on_result: Callable[[StepResult], None] | None = None,
    **context_overrides: Any,
) -> InstallResult:
    """Run the full install chain.

    Args:
        config_path: Optional explicit path to ghidra-setup.yml.
        dry_run: Probe only; report what would change.
        registry: Adapter registry (default: real shell + filesystem).
        on_result: Progress callback, one call per step.
        **context_overrides: Host facts for ``InstallContext``
            (``machine``, ``system``, ``shell``).

    Returns:
        InstallResult with the report, or the configuration error.
    """
    result = InstallResult()

    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        result.error = str(e)
        result.error_kind = ErrorKind.CONFIGURATION_ERROR.value
        return result
    result.settings = settings

    ctx = InstallContext(
        settings=settings,
        registry=registry or default_registry(),
        **context_overrides,
    )
    result.report = run_steps(ctx, dry_run=dry_run, on_result=on_result)
    return result

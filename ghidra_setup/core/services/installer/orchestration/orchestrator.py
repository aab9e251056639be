"""
L5 Orchestration — Run the install steps in order.

A satisfied probe skips the step; otherwise ``apply`` runs. The first
required step that raises stops the run. Optional steps only warn.
In dry-run mode only probes (and read-only steps) execute; anything
that would change the system is reported as ``planned``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from ghidra_setup.core.models.report import InstallReport, StepResult
from ghidra_setup.core.services.installer.context import InstallContext
from ghidra_setup.core.services.installer.domain.errors import InstallError
from ghidra_setup.core.services.installer.orchestration.steps import INSTALL_STEPS, Step

logger = logging.getLogger(__name__)


def _run_one(ctx: InstallContext, step: Step, dry_run: bool) -> StepResult:
    if step.probe is not None and step.probe(ctx):
        message = step.satisfied(ctx) if step.satisfied else "Already satisfied."
        result = StepResult(step=step.name, status="skipped", message=message)
    elif dry_run and not step.read_only:
        return StepResult(step=step.name, status="planned", message=f"Would {step.description}.")
    else:
        result = step.apply(ctx)

    if step.after is not None:
        result.details.update(step.after(ctx) or {})
    return result


def run_steps(
    ctx: InstallContext,
    steps: Iterable[Step] = INSTALL_STEPS,
    *,
    dry_run: bool = False,
    on_result: Callable[[StepResult], None] | None = None,
) -> InstallReport:
    """Execute ``steps`` against ``ctx`` and collect an ``InstallReport``.

    Args:
        ctx: Run state shared by every step.
        steps: Ordered steps; defaults to the full install chain.
        dry_run: Only probe; never change the system.
        on_result: Called with each result as soon as it is known.

    Returns:
        The report. ``report.failed_step`` is the step that stopped the
        run, or None.
    """
    report = InstallReport(dry_run=dry_run)

    for step in steps:
        logger.debug("Step %s: starting", step.name)
        start = time.monotonic()
        try:
            result = _run_one(ctx, step, dry_run)
        except InstallError as exc:
            result = StepResult(
                step=step.name,
                status="failed",
                message=exc.message,
                error_kind=exc.kind.value,
                details=exc.details,
            )

        result.step = step.name
        result.optional = step.optional
        result.duration_ms = int((time.monotonic() - start) * 1000)
        report.add(result)
        if on_result is not None:
            on_result(result)

        if result.failed:
            if step.optional:
                logger.warning("Optional step %s failed: %s", step.name, result.message)
                continue
            logger.error("Step %s failed (%s): %s", step.name, result.error_kind, result.message)
            break
        logger.info("Step %s: %s", step.name, result.status)

    report.finish()
    return report

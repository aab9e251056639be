"""
Step results and the install report.

A ``StepResult`` is the structured outcome of one install step; the
``InstallReport`` is the ordered list of them for a whole run.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

StepStatus = Literal["ok", "skipped", "failed", "planned"]


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class StepResult(BaseModel):
    """Outcome of a single install step."""

    step: str
    status: StepStatus = "ok"
    message: str = ""
    error_kind: str | None = None
    optional: bool = False
    duration_ms: int = 0
    details: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status in ("ok", "skipped", "planned")

    @property
    def failed(self) -> bool:
        return self.status == "failed"


class InstallReport(BaseModel):
    """Ordered step results for one run."""

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = ""
    dry_run: bool = False
    results: list[StepResult] = Field(default_factory=list)

    def add(self, result: StepResult) -> None:
        self.results.append(result)

    def finish(self) -> None:
        self.ended_at = _now_iso()

    @property
    def failed_step(self) -> StepResult | None:
        """The first required step that failed, if any."""
        for r in self.results:
            if r.failed and not r.optional:
                return r
        return None

    @property
    def warnings(self) -> list[StepResult]:
        """Optional steps that failed without stopping the run."""
        return [r for r in self.results if r.failed and r.optional]

    @property
    def status(self) -> str:
        if self.failed_step is not None:
            return "failed"
        if self.warnings:
            return "partial"
        return "ok"

    @property
    def succeeded(self) -> bool:
        return self.failed_step is None

    def to_dict(self) -> dict[str, Any]:
        failed = self.failed_step
        return {
            "status": self.status,
            "dry_run": self.dry_run,
            "started_at": self.started_at,
            "ended_at": self.ended_at,
            "failed_step": failed.step if failed else None,
            "error_kind": failed.error_kind if failed else None,
            "steps": [r.model_dump() for r in self.results],
        }

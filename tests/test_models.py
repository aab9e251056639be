"""
Tests for domain models — receipts, step results and the install report.
"""

import json

from ghidra_setup.core.models import Action, InstallReport, Receipt, StepResult


class TestActionReceipt:
    def test_action_defaults(self):
        a = Action(id="brew-update")
        assert a.adapter == "shell"
        assert a.params == {}

    def test_success_receipt(self):
        r = Receipt.success(adapter="shell", action_id="x", output="done", return_code=0)
        assert r.ok
        assert not r.failed
        assert r.error is None

    def test_failure_receipt(self):
        r = Receipt.failure(adapter="shell", action_id="x", error="boom", return_code=2)
        assert r.failed
        assert r.return_code == 2

    def test_receipt_roundtrip(self):
        r = Receipt.success(adapter="shell", action_id="x", metadata={"mock": True})
        assert Receipt.model_validate_json(r.model_dump_json()) == r


class TestInstallReport:
    def _report(self, *results: StepResult) -> InstallReport:
        report = InstallReport()
        for r in results:
            report.add(r)
        report.finish()
        return report

    def test_all_ok(self):
        report = self._report(
            StepResult(step="architecture"),
            StepResult(step="homebrew", status="skipped"),
        )
        assert report.succeeded
        assert report.status == "ok"
        assert report.failed_step is None
        assert report.ended_at

    def test_required_failure(self):
        report = self._report(
            StepResult(step="architecture"),
            StepResult(step="homebrew", status="failed", error_kind="dependency-install-failure"),
        )
        assert not report.succeeded
        assert report.status == "failed"
        assert report.failed_step.step == "homebrew"

    def test_optional_failure_is_partial(self):
        report = self._report(
            StepResult(step="verify"),
            StepResult(step="jdk-symlink", status="failed", optional=True),
        )
        assert report.succeeded
        assert report.status == "partial"
        assert len(report.warnings) == 1

    def test_planned_counts_as_ok(self):
        assert StepResult(step="ghidra", status="planned").ok

    def test_to_dict_is_json_serializable(self):
        report = self._report(
            StepResult(step="verify", details={"location": {"where": "primary"}}),
        )
        data = json.loads(json.dumps(report.to_dict()))
        assert data["status"] == "ok"
        assert data["steps"][0]["details"]["location"]["where"] == "primary"

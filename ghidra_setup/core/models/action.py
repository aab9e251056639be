"""
Action and Receipt models — the command contract.

An Action names one external operation (``brew-update``,
``probe-java``, ``relocate-app``...) and the parameters its adapter
needs. A Receipt is what came back. Adapters report failure in the
Receipt, never by raising; install steps decide what a failure means.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class Action(BaseModel):
    """One command or filesystem operation to hand to an adapter.

    ``id`` is stable per logical operation, so tests can script
    responses by id and logs stay greppable.
    """

    id: str
    name: str = ""                  # human-readable, e.g. the command line
    adapter: str = "shell"
    params: dict[str, Any] = Field(default_factory=dict)


class Receipt(BaseModel):
    """Outcome of one adapter execution."""

    adapter: str
    action_id: str
    status: Literal["ok", "failed"] = "ok"
    return_code: int | None = None  # None when no process ran
    output: str = ""
    error: str | None = None
    duration_ms: int = 0
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    def failure_details(self) -> dict[str, Any]:
        """``error`` / ``return_code`` for attaching to an InstallError."""
        return {"action": self.action_id, "error": self.error, "return_code": self.return_code}

    @classmethod
    def success(cls, adapter: str, action_id: str, output: str = "", **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, output=output, **kwargs)

    @classmethod
    def failure(cls, adapter: str, action_id: str, error: str, **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, status="failed", error=error, **kwargs)

"""
Adapter base — how install steps reach the outside world.

Steps never call subprocess or privileged filesystem operations
themselves; they send an Action through the registry to an adapter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from ghidra_setup.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """An action plus the run-time knobs it executes under.

    ``env`` holds overrides accumulated during the run (PATH from
    ``brew shellenv``, JAVA_HOME) layered over ``os.environ``.
    """

    action: Action
    env: dict[str, str] = Field(default_factory=dict)
    timeout: int = 1800

    @property
    def params(self) -> dict[str, Any]:
        return self.action.params


class Adapter(ABC):
    """Performs one kind of side effect.

    ``execute`` reports every failure (bad exit code, missing binary,
    timeout, permission error) in the returned Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry key: ``shell``, ``filesystem``."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Check the action's params; returns ``(ok, reason)``."""

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Run the action."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"

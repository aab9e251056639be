"""
Mock adapter — scripted test double for the shell adapter.

Returns success for everything by default. Responses can be scripted
per action id, including a sequence of receipts for an action that is
executed more than once (probe → install → re-probe).
"""

from __future__ import annotations

from ghidra_setup.adapters.base import Adapter, ExecutionContext
from ghidra_setup.core.models.action import Receipt


class MockAdapter(Adapter):
    """Universal mock adapter for testing.

    By default, returns success for everything. Can be configured
    with custom responses per action ID.
    """

    def __init__(
        self,
        adapter_name: str = "shell",
        default_output: str = "[mock] executed",
    ):
        self._name = adapter_name
        self._default_output = default_output
        self._responses: dict[str, list[Receipt]] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    @property
    def called_ids(self) -> list[str]:
        """Action ids in call order."""
        return [ctx.action.id for ctx in self._call_log]

    def calls_for(self, action_id: str) -> list[ExecutionContext]:
        return [ctx for ctx in self._call_log if ctx.action.id == action_id]

    def set_response(self, action_id: str, *receipts: Receipt) -> None:
        """Script the receipts for an action ID.

        With several receipts, each call consumes the next one; the
        last one repeats once the sequence is exhausted.
        """
        self._responses[action_id] = list(receipts)

    def set_output(self, action_id: str, output: str) -> None:
        """Configure a specific action to succeed with the given output."""
        self.set_response(
            action_id,
            Receipt.success(adapter=self._name, action_id=action_id, output=output),
        )

    def set_failure(
        self, action_id: str, error: str = "Mock failure", return_code: int = 1,
    ) -> None:
        """Configure a specific action to fail."""
        self.set_response(
            action_id,
            Receipt.failure(
                adapter=self._name,
                action_id=action_id,
                error=error,
                return_code=return_code,
            ),
        )

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)

        queue = self._responses.get(context.action.id)
        if queue:
            receipt = queue.pop(0) if len(queue) > 1 else queue[0]
            return receipt.model_copy(deep=True)

        return Receipt.success(
            adapter=self._name,
            action_id=context.action.id,
            output=self._default_output,
            return_code=0,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()

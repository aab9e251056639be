"""
Adapter registry — name → adapter dispatch.

Install steps build an Action and hand it to ``execute_action``; the
registry picks the adapter, validates, runs it and stamps the
duration. Whatever goes wrong comes back as a failed Receipt.
"""

from __future__ import annotations

import logging
import time

from ghidra_setup.adapters.base import Adapter, ExecutionContext
from ghidra_setup.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Holds the adapters for one run, keyed by ``Adapter.name``."""

    def __init__(self) -> None:
        self._adapters: dict[str, Adapter] = {}

    def register(self, adapter: Adapter) -> None:
        if adapter.name in self._adapters:
            logger.warning("Replacing adapter %r", adapter.name)
        self._adapters[adapter.name] = adapter

    def get(self, name: str) -> Adapter | None:
        return self._adapters.get(name)

    def list_adapters(self) -> list[str]:
        return list(self._adapters)

    def execute_action(
        self,
        action: Action,
        *,
        env: dict[str, str] | None = None,
        timeout: int = 1800,
    ) -> Receipt:
        """Run ``action`` on its adapter. Never raises.

        Args:
            action: What to run; ``action.adapter`` selects the adapter.
            env: Environment overrides layered over ``os.environ``.
            timeout: Seconds before the adapter gives up.
        """
        start = time.monotonic()
        receipt = self._dispatch(action, ExecutionContext(
            action=action, env=dict(env or {}), timeout=timeout,
        ))
        receipt.duration_ms = int((time.monotonic() - start) * 1000)
        logger.debug(
            "%s:%s → %s (%dms)", action.adapter, action.id, receipt.status, receipt.duration_ms,
        )
        return receipt

    def _dispatch(self, action: Action, context: ExecutionContext) -> Receipt:
        adapter = self._adapters.get(action.adapter)
        if adapter is None:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"No adapter registered for '{action.adapter}'",
            )

        try:
            valid, reason = adapter.validate(context)
        except Exception as e:
            valid, reason = False, str(e)
        if not valid:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Validation failed: {reason}",
            )

        try:
            return adapter.execute(context)
        except Exception as e:
            # Adapters must not raise; contain it anyway
            logger.error("Adapter %s raised on %s: %s", action.adapter, action.id, e)
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Unexpected error: {e}",
            )


def default_registry() -> AdapterRegistry:
    """Registry wired with the real shell and filesystem adapters."""
    from ghidra_setup.adapters.shell.command import ShellCommandAdapter
    from ghidra_setup.adapters.shell.filesystem import FilesystemAdapter

    shell = ShellCommandAdapter()
    registry = AdapterRegistry()
    registry.register(shell)
    registry.register(FilesystemAdapter(shell=shell))
    return registry

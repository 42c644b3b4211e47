"""
Adapter registry — central dispatch for all adapter operations.

The engine never talks to adapters directly, always through the registry.
"""

from __future__ import annotations

import logging
import time

from kdcontext.adapters.base import Adapter, ExecutionContext
from kdcontext.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Registry and dispatcher for adapters."""

    def __init__(self) -> None:
        self._adapters: dict[str, Adapter] = {}

    def register(self, adapter: Adapter) -> None:
        name = adapter.name
        if name in self._adapters:
            logger.warning("Overwriting existing adapter: %s", name)
        self._adapters[name] = adapter
        logger.debug("Registered adapter: %s", name)

    def get(self, name: str) -> Adapter | None:
        return self._adapters.get(name)

    def execute_action(self, action: Action, project_root: str = ".") -> Receipt:
        """Resolve, validate and execute one action. Never raises.

        Args:
            action: The action to execute.
            project_root: Scaffold root that relative paths resolve against.

        Returns:
            Receipt with execution results and timing.
        """
        start_time = time.monotonic()

        context = ExecutionContext(action=action, project_root=project_root)

        adapter = self._adapters.get(action.adapter)
        if adapter is None:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"No adapter registered for '{action.adapter}'",
            )

        try:
            is_valid, error_msg = adapter.validate(context)
        except Exception as e:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Validation error: {e}",
            )
        if not is_valid:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Validation failed: {error_msg}",
            )

        try:
            receipt = adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised during execution: %s", action.adapter, e)
            receipt = Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Unexpected error: {e}",
            )

        receipt.duration_ms = int((time.monotonic() - start_time) * 1000)
        return receipt


def default_registry() -> AdapterRegistry:
    """Registry with the real filesystem and git adapters."""
    from kdcontext.adapters.shell.filesystem import FilesystemAdapter
    from kdcontext.adapters.vcs.git import GitAdapter

    registry = AdapterRegistry()
    registry.register(FilesystemAdapter())
    registry.register(GitAdapter())
    return registry

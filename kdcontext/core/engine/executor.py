"""
Engine executor — runs a scaffold step's actions through the registry.

Flow:
    step → build actions → execute in order → collect receipts

Execution stops at the first failed receipt; nothing is retried or rolled
back.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from kdcontext.adapters.registry import AdapterRegistry
from kdcontext.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


@dataclass
class ExecutionPlan:
    """The ordered actions of one scaffold step."""

    operation_id: str = ""
    step: str = ""
    actions: list[Action] = field(default_factory=list)

    @property
    def total_actions(self) -> int:
        return len(self.actions)

    def add(self, adapter: str, key: str | None = None, **params: Any) -> Action:
        """Append an action and return it.

        The action ID is ``<operation>:<step>:<key>``; ``key`` defaults to
        the action's position in the plan.
        """
        if key is None:
            key = str(len(self.actions))
        action = Action(
            id=f"{self.operation_id}:{self.step}:{key}",
            adapter=adapter,
            step=self.step,
            params=params,
        )
        self.actions.append(action)
        return action


@dataclass
class ExecutionReport:
    """Result of executing a plan."""

    operation_id: str = ""
    step: str = ""
    receipts: list[Receipt] = field(default_factory=list)
    planned: int = 0

    @property
    def total(self) -> int:
        return len(self.receipts)

    @property
    def first_failure(self) -> Receipt | None:
        return next((r for r in self.receipts if r.failed), None)


def execute_plan(
    plan: ExecutionPlan,
    registry: AdapterRegistry,
    project_root: str = ".",
) -> ExecutionReport:
    """Execute the actions of a plan in order.

    Args:
        plan: The execution plan.
        registry: Adapter registry for dispatch.
        project_root: Scaffold root directory.

    Returns:
        ExecutionReport with one receipt per executed action.
    """
    report = ExecutionReport(
        operation_id=plan.operation_id,
        step=plan.step,
        planned=plan.total_actions,
    )

    for action in plan.actions:
        receipt = registry.execute_action(action, project_root=project_root)
        report.receipts.append(receipt)

        status_marker = "✓" if receipt.ok else "✗" if receipt.failed else "⊘"
        logger.info(
            "%s %s [%s %s] → %s",
            status_marker,
            plan.step,
            action.adapter,
            action.params.get("path") or action.params.get("operation", ""),
            receipt.status,
        )

        if receipt.failed:
            logger.debug(
                "Stopping %s after %d/%d actions", plan.step, report.total, plan.total_actions
            )
            break

    return report


def generate_operation_id() -> str:
    """Generate a unique operation ID."""
    now = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    short = uuid.uuid4().hex[:6]
    return f"op-{now}-{short}"

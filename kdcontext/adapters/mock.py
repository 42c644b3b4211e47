"""
Mock adapter — test double that stands in for the filesystem or git
adapter without touching either.
"""

from __future__ import annotations

from kdcontext.adapters.base import Adapter, ExecutionContext
from kdcontext.core.models.action import Receipt


class MockAdapter(Adapter):
    """Returns success for everything unless told otherwise.

    Responses can be overridden per action ID, or per operation param
    (e.g. make every git 'commit' fail).
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        default_output: str = "[mock] executed",
    ):
        self._name = adapter_name
        self._available = available
        self._default_output = default_output
        self._responses: dict[str, Receipt] = {}
        self._operation_failures: dict[str, str] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def is_available(self) -> bool:
        return self._available

    def set_response(self, action_id: str, receipt: Receipt) -> None:
        self._responses[action_id] = receipt

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        self._responses[action_id] = Receipt.failure(
            adapter=self._name,
            action_id=action_id,
            error=error,
        )

    def fail_operation(self, operation: str, error: str = "Mock failure") -> None:
        """Fail every action whose 'operation' param matches."""
        self._operation_failures[operation] = error

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)

        if context.action.id in self._responses:
            return self._responses[context.action.id]

        operation = context.params.get("operation", "")
        if operation in self._operation_failures:
            return Receipt.failure(
                adapter=self._name,
                action_id=context.action.id,
                error=self._operation_failures[operation],
            )

        return Receipt.success(
            adapter=self._name,
            action_id=context.action.id,
            output=self._default_output,
            metadata={"mock": True},
        )

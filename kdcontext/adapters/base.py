"""
Adapter base — the contract between the scaffold engine and the tools
that touch the outside world (the filesystem, git).

The engine only talks to adapters through this protocol.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel

from kdcontext.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """Everything an adapter needs to execute an action."""

    action: Action
    project_root: str = "."

    @property
    def params(self) -> dict:
        return self.action.params

    def target(self, relative_path: str) -> Path:
        """Resolve a path from the action params against the project root."""
        path = Path(relative_path)
        if path.is_absolute():
            return path
        return Path(self.project_root) / path


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters perform side effects and return receipts.
    They never raise — failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier ('filesystem', 'git')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the underlying tool can be used. Fast, never raises."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Check the action's params before executing.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Execute the action. Failures become a 'failed' Receipt."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"

"""
Filesystem adapter — file and directory creation for the scaffold.

Every operation is idempotent: writing the same content twice, or
creating a directory that already exists, leaves the same tree behind.
"""

from __future__ import annotations

import logging
from pathlib import Path

from kdcontext.adapters.base import Adapter, ExecutionContext
from kdcontext.core.models.action import Receipt

logger = logging.getLogger(__name__)

_OPERATIONS = {"write", "mkdir", "touch"}


class FilesystemAdapter(Adapter):
    """File and directory operations with receipts.

    Action params:
        operation (str): One of 'write', 'mkdir', 'touch'.
        path (str): Target path, relative to the project root.
        content (str): Content to write (for 'write').
    """

    @property
    def name(self) -> str:
        return "filesystem"

    def is_available(self) -> bool:
        return True

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.params.get("operation", "")
        if not operation:
            return False, "Missing required param: 'operation'"

        if operation not in _OPERATIONS:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(sorted(_OPERATIONS))}"

        if not context.params.get("path", ""):
            return False, "Missing required param: 'path'"

        if operation == "write" and "content" not in context.params:
            return False, "Missing required param: 'content' for write operation"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        operation = context.params["operation"]
        target = context.target(context.params["path"])

        try:
            if operation == "write":
                return self._write(context, target)
            elif operation == "mkdir":
                return self._mkdir(context, target)
            elif operation == "touch":
                return self._touch(context, target)
            else:
                return Receipt.failure(
                    adapter=self.name,
                    action_id=context.action.id,
                    error=f"Unknown operation: {operation}",
                )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Filesystem error: {e}",
                metadata={"operation": operation, "path": str(target)},
            )

    def _write(self, ctx: ExecutionContext, target: Path) -> Receipt:
        content: str = ctx.params["content"]
        target.parent.mkdir(parents=True, exist_ok=True)
        replaced = target.is_file()
        # newline="" keeps the literal content byte-for-byte on every platform
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.debug("Wrote %s (%d chars, replaced=%s)", target, len(content), replaced)
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=f"Written {len(content)} chars to {target}",
            metadata={"path": str(target), "size": len(content), "replaced": replaced},
        )

    def _mkdir(self, ctx: ExecutionContext, target: Path) -> Receipt:
        existed = target.is_dir()
        target.mkdir(parents=True, exist_ok=True)
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=f"Directory {'exists' if existed else 'created'}: {target}",
            metadata={"path": str(target), "existed": existed},
        )

    def _touch(self, ctx: ExecutionContext, target: Path) -> Receipt:
        target.parent.mkdir(parents=True, exist_ok=True)
        existed = target.exists()
        target.touch(exist_ok=True)
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=f"{'Touched' if existed else 'Created'} {target}",
            metadata={"path": str(target), "existed": existed},
        )

"""
Git adapter — repository detection, initialisation and the snapshot commit.

Uses the git CLI through subprocess, never a library binding.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from kdcontext.adapters.base import Adapter, ExecutionContext
from kdcontext.core.models.action import Receipt

logger = logging.getLogger(__name__)

_OPERATIONS = {"detect", "init", "commit"}

GIT_DIR = ".git"


class GitAdapter(Adapter):
    """Git operations used by the scaffold.

    Action params:
        operation (str): One of 'detect', 'init', 'commit'.
        message (str): Commit message (for 'commit').
        timeout (int): Timeout in seconds (default: 30).
    """

    @property
    def name(self) -> str:
        return "git"

    def is_available(self) -> bool:
        return shutil.which("git") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.params.get("operation", "")
        if not operation:
            return False, "Missing required param: 'operation'"

        if operation not in _OPERATIONS:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(sorted(_OPERATIONS))}"

        if operation == "commit" and not context.params.get("message", ""):
            return False, "Missing required param: 'message' for commit operation"

        # detect only looks at the filesystem
        if operation != "detect" and not self.is_available():
            return False, "git executable not found on PATH"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        operation = context.params["operation"]
        try:
            if operation == "detect":
                return self._detect(context)
            elif operation == "init":
                return self._init(context)
            elif operation == "commit":
                return self._commit(context)
            else:
                return Receipt.failure(
                    adapter=self.name,
                    action_id=context.action.id,
                    error=f"Unknown operation: {operation}",
                )
        except subprocess.TimeoutExpired as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Git error: command timed out after {e.timeout}s",
            )
        except (RuntimeError, OSError) as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Git error: {e}",
            )

    # ── Operations ──────────────────────────────────────────────

    def _detect(self, ctx: ExecutionContext) -> Receipt:
        initialized = ctx.target(GIT_DIR).is_dir()
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=f"initialized={initialized}",
            metadata={"initialized": initialized},
        )

    def _init(self, ctx: ExecutionContext) -> Receipt:
        if ctx.target(GIT_DIR).is_dir():
            return Receipt.skip(
                adapter=self.name,
                action_id=ctx.action.id,
                reason="Git repository already exists, skipping initialization",
                metadata={"initialized": True},
            )
        output = self._git(["init"], ctx)
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=output.strip(),
            metadata={"initialized": True},
        )

    def _commit(self, ctx: ExecutionContext) -> Receipt:
        message = ctx.params["message"]

        self._git(["add", "-A"], ctx)

        # exit 0: index matches HEAD, 1: staged changes
        diff = self._run(["diff", "--cached", "--quiet"], ctx)
        if diff.returncode == 0:
            logger.info("Nothing to commit in %s, skipping commit", ctx.project_root)
            return Receipt.skip(
                adapter=self.name,
                action_id=ctx.action.id,
                reason="nothing to commit",
                metadata={"message": message, "changes": 0},
            )
        if diff.returncode != 1:
            raise RuntimeError(_error_text(diff, "diff"))

        staged = self._git(["diff", "--cached", "--name-only"], ctx)
        output = self._git(["commit", "-m", message], ctx)
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=output.strip(),
            metadata={"message": message, "changes": len(staged.strip().splitlines())},
        )

    # ── Helpers ─────────────────────────────────────────────────

    def _run(self, args: list[str], ctx: ExecutionContext) -> subprocess.CompletedProcess:
        """Run a git command in the project root."""
        timeout = ctx.params.get("timeout", 30)
        logger.debug("git %s (cwd=%s)", " ".join(args), ctx.project_root)
        return subprocess.run(
            ["git", *args],
            cwd=ctx.project_root,
            capture_output=True,
            text=True,
            timeout=timeout,
        )

    def _git(self, args: list[str], ctx: ExecutionContext) -> str:
        """Run a git command and return stdout; non-zero exit raises RuntimeError."""
        result = self._run(args, ctx)
        if result.returncode != 0:
            raise RuntimeError(_error_text(result, args[0]))
        return result.stdout


def _error_text(result: subprocess.CompletedProcess, command: str) -> str:
    """Best error message git gave; some failures only write to stdout."""
    return result.stderr.strip() or result.stdout.strip() or f"git {command} failed"

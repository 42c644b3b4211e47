"""
Scaffold use case — materialise the kernel development context skeleton.

Order of steps:
    ensure_repository → write_files → ensure_directories
    → write_placeholders → write_ignore_file → commit_snapshot

Every step but the commit is idempotent, so an interrupted run can simply
be repeated.  The first failing step raises ScaffoldError; the steps after
it never run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from kdcontext.adapters.registry import AdapterRegistry, default_registry
from kdcontext.adapters.vcs.git import GIT_DIR
from kdcontext.core.config.loader import load_layout
from kdcontext.core.engine.executor import (
    ExecutionPlan,
    ExecutionReport,
    execute_plan,
    generate_operation_id,
)
from kdcontext.core.models.layout import DirSpec, FileSpec, Layout, RepositoryState

logger = logging.getLogger(__name__)

# reporter(event, message) with event in {"start", "done", "skipped"}
Reporter = Callable[[str, str], None]

STEP_REPOSITORY = "ensure_repository"
STEP_FILES = "write_files"
STEP_DIRECTORIES = "ensure_directories"
STEP_PLACEHOLDERS = "write_placeholders"
STEP_IGNORE = "write_ignore_file"
STEP_COMMIT = "commit_snapshot"


class ScaffoldError(Exception):
    """A scaffold step failed; the run stops here."""

    def __init__(self, step: str, message: str):
        super().__init__(f"{step} failed: {message}")
        self.step = step
        self.message = message


@dataclass
class StepResult:
    """Outcome of one scaffold step."""

    step: str
    status: str = "ok"          # ok | skipped
    message: str = ""
    reports: list[ExecutionReport] = field(default_factory=list)

    @property
    def actions(self) -> int:
        return sum(r.total for r in self.reports)

    def to_dict(self) -> dict:
        return {
            "step": self.step,
            "status": self.status,
            "message": self.message,
            "actions": self.actions,
        }


@dataclass
class ScaffoldResult:
    """Everything a run did, in order."""

    root: Path
    operation_id: str = ""
    repository: RepositoryState | None = None
    steps: list[StepResult] = field(default_factory=list)

    @property
    def committed(self) -> bool:
        return any(s.step == STEP_COMMIT and s.status == "ok" for s in self.steps)

    def step(self, name: str) -> StepResult | None:
        return next((s for s in self.steps if s.step == name), None)

    def to_dict(self) -> dict:
        return {
            "root": str(self.root),
            "operation_id": self.operation_id,
            "repository_existed": self.repository.initialized if self.repository else False,
            "committed": self.committed,
            "steps": [s.to_dict() for s in self.steps],
        }


def _silent(event: str, message: str) -> None:
    pass


class Scaffolder:
    """Writes the fixed skeleton under ``root`` through the adapter registry.

    Args:
        root: Scaffold root directory.
        registry: Adapter registry; defaults to the real filesystem and git adapters.
        reporter: Progress callback, see ``Reporter``.
        operation_id: Prefix for action IDs; generated when omitted.
    """

    def __init__(
        self,
        root: Path,
        registry: AdapterRegistry | None = None,
        reporter: Reporter | None = None,
        operation_id: str | None = None,
    ):
        self.root = Path(root)
        self.registry = registry or default_registry()
        self.reporter = reporter or _silent
        self.operation_id = operation_id or generate_operation_id()

    # ── Steps ───────────────────────────────────────────────────

    def detect_repository(self) -> RepositoryState:
        """Read whether a git repository already exists under the root."""
        plan = self._plan(STEP_REPOSITORY)
        plan.add("git", key="detect", operation="detect")
        report = self._execute(plan)
        initialized = bool(report.receipts[0].metadata.get("initialized", False))
        return RepositoryState(root=str(self.root), initialized=initialized)

    def ensure_repository(self) -> StepResult:
        """Initialise a git repository unless one already exists."""
        state = self.detect_repository()
        if state.initialized:
            message = "Git repository already exists, skipping initialization"
            logger.info("%s: %s", self.root / GIT_DIR, message)
            self.reporter("skipped", f"⚠️  {message}")
            return StepResult(step=STEP_REPOSITORY, status="skipped", message=message)

        self.reporter("start", "📦 Initializing git repository...")
        plan = self._plan(STEP_REPOSITORY)
        plan.add("git", key="init", operation="init")
        report = self._execute(plan)

        # the directory can appear between detect and init
        receipt = report.receipts[0]
        if receipt.skipped:
            message = receipt.output or "Git repository already exists, skipping initialization"
            self.reporter("skipped", f"⚠️  {message}")
            return StepResult(step=STEP_REPOSITORY, status="skipped", message=message, reports=[report])

        self.reporter("done", "✓ Git repository initialized")
        return StepResult(
            step=STEP_REPOSITORY,
            message="Git repository initialized",
            reports=[report],
        )

    def write_files(self, specs: list[FileSpec]) -> StepResult:
        """Write each FileSpec in order, overwriting existing files."""
        result = StepResult(step=STEP_FILES, message=f"{len(specs)} files written")
        for spec in specs:
            self.reporter("start", f"📝 Creating {spec.relative_path}...")
            result.reports.append(self._write(STEP_FILES, spec))
            self.reporter("done", f"✓ {spec.relative_path} created")
        return result

    def ensure_directories(self, specs: list[DirSpec]) -> StepResult:
        """Create every directory (and its parents) that does not exist yet."""
        self.reporter("start", "📁 Creating directory structure...")
        plan = self._plan(STEP_DIRECTORIES)
        for spec in specs:
            plan.add("filesystem", key=spec.relative_path, operation="mkdir", path=spec.relative_path)
        report = self._execute(plan)

        created = sum(1 for r in report.receipts if not r.metadata.get("existed", False))
        self.reporter("done", "✓ Directory structure created")
        return StepResult(
            step=STEP_DIRECTORIES,
            message=f"{created} of {len(specs)} directories created",
            reports=[report],
        )

    def write_placeholders(self, specs: list[FileSpec]) -> StepResult:
        """Create empty placeholder files; existing ones keep their content."""
        self.reporter("start", "📄 Creating placeholder files...")
        plan = self._plan(STEP_PLACEHOLDERS)
        for spec in specs:
            plan.add("filesystem", key=spec.relative_path, operation="touch", path=spec.relative_path)
        report = self._execute(plan)

        self.reporter("done", "✓ Placeholder files created")
        return StepResult(
            step=STEP_PLACEHOLDERS,
            message=f"{len(specs)} placeholder files",
            reports=[report],
        )

    def write_ignore_file(self, spec: FileSpec) -> StepResult:
        """Write the canonical ignore-rules file."""
        self.reporter("start", f"📝 Creating {spec.relative_path}...")
        report = self._write(STEP_IGNORE, spec)
        self.reporter("done", f"✓ {spec.relative_path} created")
        return StepResult(step=STEP_IGNORE, message=spec.relative_path, reports=[report])

    def commit_snapshot(self, message: str) -> StepResult:
        """Stage everything and commit. Skipped when nothing changed."""
        self.reporter("start", "💾 Creating initial commit...")
        plan = self._plan(STEP_COMMIT)
        plan.add("git", key="commit", operation="commit", message=message)
        report = self._execute(plan)

        if report.receipts[0].skipped:
            self.reporter("skipped", "⚠️  Nothing to commit, skipping commit")
            return StepResult(
                step=STEP_COMMIT,
                status="skipped",
                message="nothing to commit",
                reports=[report],
            )

        self.reporter("done", "✓ Initial commit created")
        return StepResult(step=STEP_COMMIT, message=message.splitlines()[0], reports=[report])

    # ── Orchestration ───────────────────────────────────────────

    def run(self, layout: Layout | None = None) -> ScaffoldResult:
        """Run every step in order.

        Raises:
            ScaffoldError: On the first failing step.
            LayoutError: If the packaged layout cannot be loaded.
        """
        layout = layout or load_layout()
        result = ScaffoldResult(root=self.root, operation_id=self.operation_id)

        logger.info("Scaffolding %s (%s)", self.root, self.operation_id)

        repository_step = self.ensure_repository()
        result.repository = RepositoryState(
            root=str(self.root),
            initialized=repository_step.status == "skipped",
        )
        result.steps.append(repository_step)
        result.steps.append(self.write_files(layout.files))
        result.steps.append(self.ensure_directories(layout.directories))
        result.steps.append(self.write_placeholders(layout.placeholders))
        result.steps.append(self.write_ignore_file(layout.ignore_file))
        result.steps.append(self.commit_snapshot(layout.commit_message))

        logger.info(
            "Scaffold %s finished: %s",
            self.operation_id,
            ", ".join(f"{s.step}={s.status}" for s in result.steps),
        )
        return result

    # ── Helpers ─────────────────────────────────────────────────

    def _plan(self, step: str) -> ExecutionPlan:
        return ExecutionPlan(operation_id=self.operation_id, step=step)

    def _write(self, step: str, spec: FileSpec) -> ExecutionReport:
        plan = self._plan(step)
        plan.add(
            "filesystem",
            key=spec.relative_path,
            operation="write",
            path=spec.relative_path,
            content=spec.literal_content,
        )
        return self._execute(plan)

    def _execute(self, plan: ExecutionPlan) -> ExecutionReport:
        report = execute_plan(plan, self.registry, project_root=str(self.root))
        failure = report.first_failure
        if failure is not None:
            logger.debug("%s failed: %s", plan.step, failure.error)
            raise ScaffoldError(plan.step, failure.error or "unknown error")
        return report


def run(
    root: Path | None = None,
    layout: Layout | None = None,
    registry: AdapterRegistry | None = None,
    reporter: Reporter | None = None,
) -> ScaffoldResult:
    """Scaffold ``root`` (default: the current directory)."""
    scaffolder = Scaffolder(root or Path.cwd(), registry=registry, reporter=reporter)
    return scaffolder.run(layout)


def project_tree(root: Path, max_depth: int = 2) -> list[str]:
    """List the tree under ``root`` down to ``max_depth`` levels, sorted.

    Directories carry a trailing slash.  The contents of ``.git`` are left
    out but the directory itself is listed.
    """
    entries: list[str] = []

    def walk(directory: Path, depth: int) -> None:
        for child in directory.iterdir():
            rel = child.relative_to(root).as_posix()
            if child.is_dir():
                entries.append(f"{rel}/")
                if depth < max_depth and child.name != GIT_DIR:
                    walk(child, depth + 1)
            else:
                entries.append(rel)

    walk(root, 1)
    return sorted(entries)

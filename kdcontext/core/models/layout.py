"""
Layout models — the fixed project skeleton.

A Layout is authored once (``core/data/layout.yml``) and never mutated
at runtime.  Paths are always relative to the scaffold root.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FileSpec(BaseModel):
    """A file path plus its exact intended contents.

    Attributes:
        relative_path:   Path from the scaffold root, POSIX separators.
        literal_content: Full file content. Empty for placeholders.
    """

    model_config = ConfigDict(frozen=True)

    relative_path: str
    literal_content: str = ""


class DirSpec(BaseModel):
    """A directory that must exist after scaffolding."""

    model_config = ConfigDict(frozen=True)

    relative_path: str


class Layout(BaseModel):
    """The whole skeleton, in the order the scaffold writes it."""

    model_config = ConfigDict(frozen=True)

    files: list[FileSpec] = Field(default_factory=list)
    directories: list[DirSpec] = Field(default_factory=list)
    placeholders: list[FileSpec] = Field(default_factory=list)
    ignore_file: FileSpec
    commit_message: str

    def all_files(self) -> list[FileSpec]:
        """Every file the scaffold produces, top-level docs first."""
        return [*self.files, *self.placeholders, self.ignore_file]


class RepositoryState(BaseModel):
    """Whether the scaffold root already holds a git repository."""

    root: str
    initialized: bool = False

"""
Layout loader — reads layout.yml into a validated Layout.

Reads YAML, resolves every ``source:`` reference to its literal text,
checks that all paths stay inside the scaffold root, and returns typed
models.  Any problem is a LayoutError.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from pydantic import ValidationError

from kdcontext.core.data import LAYOUT_FILE
from kdcontext.core.models.layout import DirSpec, FileSpec, Layout

logger = logging.getLogger(__name__)

CONTENT_DIRNAME = "content"


class LayoutError(Exception):
    """Raised when the layout manifest is missing or invalid."""


def load_layout(path: Path | None = None) -> Layout:
    """Load and validate a layout manifest.

    Args:
        path: Manifest to read. Defaults to the packaged layout.yml.

    Returns:
        Validated Layout with literal contents filled in.

    Raises:
        LayoutError: If the file is missing, unreadable or invalid.
    """
    path = path or LAYOUT_FILE

    if not path.is_file():
        raise LayoutError(f"Layout file not found: {path}")

    logger.debug("Loading layout from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LayoutError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise LayoutError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise LayoutError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    content_dir = path.parent / CONTENT_DIRNAME

    if "ignore_file" not in data:
        raise LayoutError(f"Missing 'ignore_file' in {path}")

    try:
        layout = Layout(
            files=[_file_spec(entry, content_dir) for entry in data.get("files") or []],
            directories=[
                DirSpec(relative_path=_check_path(d)) for d in data.get("directories") or []
            ],
            placeholders=[
                FileSpec(relative_path=_check_path(p)) for p in data.get("placeholders") or []
            ],
            ignore_file=_file_spec(data["ignore_file"], content_dir),
            commit_message=data.get("commit_message", ""),
        )
    except ValidationError as e:
        raise LayoutError(f"Invalid layout in {path}: {e}") from e

    if not layout.commit_message.strip():
        raise LayoutError(f"Empty 'commit_message' in {path}")

    logger.info(
        "Loaded layout: %d files, %d directories, %d placeholders",
        len(layout.files) + 1,
        len(layout.directories),
        len(layout.placeholders),
    )
    return layout


def _file_spec(entry: Any, content_dir: Path) -> FileSpec:
    """Build a FileSpec from a ``{path, source}`` or ``{path, content}`` entry."""
    if not isinstance(entry, dict) or "path" not in entry:
        raise LayoutError(f"File entry needs a 'path': {entry!r}")

    relative_path = _check_path(entry["path"])

    if "content" in entry:
        return FileSpec(relative_path=relative_path, literal_content=str(entry["content"]))

    source = entry.get("source")
    if not source:
        raise LayoutError(f"File entry '{relative_path}' needs 'source' or 'content'")

    source_path = content_dir / source
    try:
        # newline="" keeps the text exactly as authored
        with open(source_path, encoding="utf-8", newline="") as f:
            text = f.read()
    except OSError as e:
        raise LayoutError(f"Cannot read content for '{relative_path}': {e}") from e

    return FileSpec(relative_path=relative_path, literal_content=text)


def _check_path(value: Any) -> str:
    """Reject empty, absolute and root-escaping paths."""
    if not isinstance(value, str) or not value.strip():
        raise LayoutError(f"Invalid path: {value!r}")

    path = PurePosixPath(value)
    if path.is_absolute() or ".." in path.parts:
        raise LayoutError(f"Path must stay inside the scaffold root: {value}")

    return str(path)

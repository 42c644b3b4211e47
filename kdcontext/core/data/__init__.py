"""
Packaged scaffold data.

``layout.yml`` declares the skeleton; ``content/`` holds the literal
texts it references.  Both ship as package data and are read through
``kdcontext.core.config.loader``.
"""

from __future__ import annotations

from pathlib import Path

DATA_DIR = Path(__file__).parent
CONTENT_DIR = DATA_DIR / "content"
LAYOUT_FILE = DATA_DIR / "layout.yml"

"""Configuration — the packaged layout manifest."""

from kdcontext.core.config.loader import LayoutError, load_layout

__all__ = ["LayoutError", "load_layout"]

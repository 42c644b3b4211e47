"""
Domain models — Pydantic types for the scaffolder.

    from kdcontext.core.models import Action, Receipt, FileSpec, DirSpec, Layout
"""

from kdcontext.core.models.action import Action, Receipt
from kdcontext.core.models.layout import DirSpec, FileSpec, Layout, RepositoryState

__all__ = [
    # action.py
    "Action",
    "Receipt",
    # layout.py
    "DirSpec",
    "FileSpec",
    "Layout",
    "RepositoryState",
]

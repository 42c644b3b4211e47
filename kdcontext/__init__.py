"""Kernel Development Context — project scaffolder."""

__version__ = "0.1.0"

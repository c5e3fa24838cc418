"""Stable import point for the engine.

The implementation lives in `core.py`; callers import from here so the
engine can be split further without changing public imports.
"""

from .core import FormatError, cli, main, tavol

__all__ = ["FormatError", "tavol", "cli", "main"]

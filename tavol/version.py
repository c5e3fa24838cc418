"""Runtime engine version; setup.py reads the same constant."""

from .main import tavol

__version__ = tavol.ENGINE_VERSION

__all__ = ["__version__"]

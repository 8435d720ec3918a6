"""Progression and reward core for the wave-survival run mode."""
from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]

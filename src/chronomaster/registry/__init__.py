"""Format registry module.

Exports ``FormatRegistry`` and the built-in pattern list.
"""
from __future__ import annotations

from chronomaster.registry.registry import BUILTIN_PATTERNS, FormatRegistry

__all__ = ["BUILTIN_PATTERNS", "FormatRegistry"]

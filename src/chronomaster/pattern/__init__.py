"""Date/time pattern module.

Exports the pattern lexer, the compiled ``DatePattern`` and the
``compile_pattern`` cache.
"""
from __future__ import annotations

from chronomaster.pattern.compiled import (
    DateFields,
    DatePattern,
    PatternMismatch,
    compile_pattern,
)
from chronomaster.pattern.lexer import PatternLexer, PatternSyntaxError, tokenize_pattern
from chronomaster.pattern.tokens import FieldKind, PatternToken

__all__ = [
    "DateFields",
    "DatePattern",
    "FieldKind",
    "PatternLexer",
    "PatternMismatch",
    "PatternSyntaxError",
    "PatternToken",
    "compile_pattern",
    "tokenize_pattern",
]

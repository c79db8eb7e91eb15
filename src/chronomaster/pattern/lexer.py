"""Pattern lexer: converts a date/time pattern string into tokens.

The lexer is a single-pass character scanner.  Pattern letters follow
the ``java.time`` conventions (see ``chronomaster.pattern.tokens.LETTERS``):

- a run of one ASCII letter is a field, its length is the field width
- text between single quotes is literal; ``''`` is one literal quote
- every other non-letter character is literal
- unknown ASCII letters and the reserved characters ``[ ] { } #`` are
  errors, so typos fail at registration instead of at parse time

Adjacent literal characters are merged into one ``LITERAL`` token.
"""
from __future__ import annotations

from chronomaster.pattern.tokens import LETTERS, RESERVED, FieldKind, PatternToken


class PatternSyntaxError(ValueError):
    """Raised when a pattern string is not a valid date/time pattern.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    pattern:
        The complete pattern string.
    offset:
        0-based position in the pattern where the error was found.
    """

    def __init__(self, message: str, pattern: str, offset: int) -> None:
        super().__init__(f"Invalid pattern {pattern!r} at {offset}: {message}")
        self.pattern_message = message
        self.pattern = pattern
        self.offset = offset


class PatternLexer:
    """Single-pass pattern lexer.

    Parameters
    ----------
    pattern:
        The complete pattern string to tokenize.
    """

    __slots__ = ("_pattern", "_pos", "_tokens", "_literal", "_literal_start")

    def __init__(self, pattern: str) -> None:
        self._pattern: str = pattern
        self._pos: int = 0
        self._tokens: list[PatternToken] = []
        self._literal: list[str] = []
        self._literal_start: int = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self) -> list[PatternToken]:
        """Scan the whole pattern and return its tokens.

        Raises
        ------
        PatternSyntaxError
            On an empty pattern, an unknown or over-long letter run, a
            reserved character, or an unterminated quote.
        """
        if not self._pattern:
            raise PatternSyntaxError("pattern is empty", self._pattern, 0)
        while self._pos < len(self._pattern):
            self._scan_one()
        self._flush_literal()
        return self._tokens

    # ------------------------------------------------------------------
    # Internal scanner
    # ------------------------------------------------------------------

    def _current(self) -> str:
        return self._pattern[self._pos] if self._pos < len(self._pattern) else ""

    def _peek(self, offset: int = 1) -> str:
        idx = self._pos + offset
        return self._pattern[idx] if idx < len(self._pattern) else ""

    def _error(self, message: str, offset: int) -> PatternSyntaxError:
        return PatternSyntaxError(message, self._pattern, offset)

    def _append_literal(self, text: str, start: int) -> None:
        if not self._literal:
            self._literal_start = start
        self._literal.append(text)

    def _flush_literal(self) -> None:
        if self._literal:
            self._tokens.append(
                PatternToken(
                    kind=FieldKind.LITERAL,
                    width=0,
                    text="".join(self._literal),
                    offset=self._literal_start,
                )
            )
            self._literal = []

    def _scan_one(self) -> None:
        start = self._pos
        ch = self._current()

        if ch == "'":
            self._scan_quoted(start)
            return

        if ch.isascii() and ch.isalpha():
            self._scan_field(start, ch)
            return

        if ch in RESERVED:
            raise self._error(f"reserved character {ch!r} is not supported", start)

        self._append_literal(ch, start)
        self._pos += 1

    def _scan_field(self, start: int, letter: str) -> None:
        rule = LETTERS.get(letter)
        if rule is None:
            raise self._error(f"unknown pattern letter {letter!r}", start)
        while self._current() == letter:
            self._pos += 1
        width = self._pos - start
        if width < rule.min_width:
            raise self._error(f"too few pattern letters: {letter * width}", start)
        if rule.max_width is not None and width > rule.max_width:
            raise self._error(f"too many pattern letters: {letter * width}", start)
        self._flush_literal()
        self._tokens.append(
            PatternToken(kind=rule.kind, width=width, text=letter * width, offset=start)
        )

    def _scan_quoted(self, start: int) -> None:
        """Consume ``'...'``; ``''`` anywhere stands for one quote."""
        if self._peek() == "'":
            self._append_literal("'", start)
            self._pos += 2
            return
        self._pos += 1  # opening quote
        buf: list[str] = []
        while self._pos < len(self._pattern):
            ch = self._current()
            if ch == "'":
                if self._peek() == "'":
                    buf.append("'")
                    self._pos += 2
                    continue
                self._pos += 1  # closing quote
                self._append_literal("".join(buf), start)
                return
            buf.append(ch)
            self._pos += 1
        raise self._error("unterminated quoted literal", start)


def tokenize_pattern(pattern: str) -> list[PatternToken]:
    """Tokenize a date/time pattern string.

    Example
    -------
    ::

        from chronomaster.pattern import tokenize_pattern
        tokens = tokenize_pattern("dd/MM/yyyy")
        [str(t) for t in tokens]
        # ['DAY_OF_MONTH(dd)', "LITERAL('/')", 'MONTH(MM)', "LITERAL('/')", 'YEAR(yyyy)']
    """
    return PatternLexer(pattern).tokenize()

"""
Pull-based scanner that classifies the text at a given cursor.

The scanner holds no cursor of its own. The parser asks it for the lexeme
starting at an index, decides what to do with it, and moves its own cursor.
"""

from enum import Enum
from typing import NamedTuple

from pyconlang.grammar import (
    DIGIT_SET,
    PUNCTUATION_SET,
    QUOTE_MARK_SET,
    WORD_DISALLOWED_SET,
    WS_SET,
)


class LexemeKind(Enum):
    WORD = "word"
    DIGITS = "digits"
    PUNCTUATION = "punctuation"
    WHITESPACE = "whitespace"
    ILLEGAL = "illegal"
    END = "end"

    def __str__(self) -> str:
        return self.value


class Lexeme(NamedTuple):
    kind: LexemeKind
    start: int
    end: int
    text: str


class Scanner:
    """Locates lexeme boundaries within an immutable input text."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._length = len(text)

    @property
    def text(self) -> str:
        return self._text

    def scan(self, index: int) -> Lexeme:
        """
        Returns the lexeme starting at `index`.

        The end of the input is reported as an `END` lexeme.
        Quote marks are reported as single-character `ILLEGAL` lexemes.
        A word run made only of ASCII digits is reported as `DIGITS`.
        """

        self._check_index(index)
        if index == self._length:
            return Lexeme(LexemeKind.END, index, index, "")

        c = self._text[index]
        if c in WS_SET:
            end = self.whitespace_end(index)
            kind = LexemeKind.WHITESPACE
        elif c in PUNCTUATION_SET:
            end = index + 1
            kind = LexemeKind.PUNCTUATION
        elif c in QUOTE_MARK_SET:
            end = index + 1
            kind = LexemeKind.ILLEGAL
        else:
            end = self.word_end(index)
            if self.digits_end(index) == end:
                kind = LexemeKind.DIGITS
            else:
                kind = LexemeKind.WORD
        return Lexeme(kind, index, end, self._text[index:end])

    def word_end(self, index: int) -> int:
        """
        Returns the end of the maximal word run starting at `index`,
        which is `index` itself if no word starts there.
        """

        self._check_index(index)
        text = self._text
        end = index
        while end < self._length and text[end] not in WORD_DISALLOWED_SET:
            end += 1
        return end

    def digits_end(self, index: int) -> int:
        """Returns the end of the maximal run of ASCII digits at `index`."""

        self._check_index(index)
        text = self._text
        end = index
        while end < self._length and text[end] in DIGIT_SET:
            end += 1
        return end

    def whitespace_end(self, index: int) -> int:
        """Returns the end of the maximal whitespace run at `index`."""

        self._check_index(index)
        text = self._text
        end = index
        while end < self._length and text[end] in WS_SET:
            end += 1
        return end

    def is_word_boundary(self, index: int) -> bool:
        """Whether no word run continues through `index`."""

        self._check_index(index)
        return index == self._length or self._text[index] in WORD_DISALLOWED_SET

    def _check_index(self, index: int) -> None:
        if not 0 <= index <= self._length:
            raise IndexError(
                f"Cursor {index} is outside of the input text "
                f"(length {self._length})"
            )

"""Shared constants of the conlang notation."""

import re
import string
from typing import FrozenSet, Literal


# General

EMPTY = ""
"""Returned by the parser's `_peek()` at the end of the input."""

LINE_SEPARATOR = "\n"


# Whitespace

WS_SET = frozenset(" \t\n\r\f\v")
"""
ASCII whitespace. Other Unicode space characters are ordinary
word constituents.
"""


# Punctuation

SENTENCE_STOP = "."
DECLENSION_MARK = ":"
"""Joins a prefix to its value. No whitespace is allowed on either side."""

COMMA_DELIMITER: "DelimiterMarkType" = ","
SEMICOLON_DELIMITER: "DelimiterMarkType" = ";"
DelimiterMarkType = Literal[",", ";"]
DELIMITER_MARK_SET: FrozenSet[DelimiterMarkType] = frozenset(
    DelimiterMarkType.__args__
)

PUNCTUATION_SET = DELIMITER_MARK_SET.union((SENTENCE_STOP, DECLENSION_MARK))

SINGLE_QUOTE_MARK = "'"
DOUBLE_QUOTE_MARK = '"'
QUOTE_MARK_SET = frozenset((SINGLE_QUOTE_MARK, DOUBLE_QUOTE_MARK))
"""
Excluded from words, but no production uses them yet.
Any bare occurrence is a lexical error.
"""

RESERVED_CHAR_SET = PUNCTUATION_SET.union(QUOTE_MARK_SET)

WORD_DISALLOWED_SET = RESERVED_CHAR_SET.union(WS_SET)
"""A `word` is a maximal run of characters outside this set."""


# `number`

SignType = Literal["-", "+"]
ExponentPrefixType = Literal["E", "e"]

SIGN_SET: FrozenSet[SignType] = frozenset(SignType.__args__)
DIGIT_SET = frozenset(string.digits)
DECIMAL_MARK = "."
EXPONENT_PREFIX_SET: FrozenSet[ExponentPrefixType] = frozenset(
    ExponentPrefixType.__args__
)
NUMBER_START_SET = DIGIT_SET.union(SIGN_SET)
NUMBER_LITERAL_PATTERN = re.compile(
    r"[+-]?[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?"
)
"""The whole text of a `Number`. ASCII digits only."""


# Limits

DEFAULT_MAX_NESTING_DEPTH = 100
"""
How deeply values may nest inside complements before parsing fails
with a `NestingDepthError` instead of exhausting the interpreter stack.
"""

"""
Parse a conlang `document` into a `Document` by calling `parse`.

```python
document = parse("item:a item:b item:c. 1, 2, 3.")

assert document == Document((
    Sentence(Complement(
        head=PrefixedValue(Word("item"), Word("a")),
        tail=Sequence(Delimiter.SYNTHETIC, (Word("b"), Word("c"))),
    )),
    Sentence(Sequence(
        Delimiter.COMMA, (Number("1"), Number("2"), Number("3"))
    )),
))
```
"""

import logging
import sys
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple, Type

from pyconlang._ast import (
    Complement,
    Delimiter,
    Document,
    Number,
    PrefixedValue,
    Sentence,
    Sequence,
    Value,
    Word,
)
from pyconlang._conlang_error import (
    ConlangError,
    IncompleteInputError,
    InconsistentDelimiterError,
    LexicalError,
    NestingDepthError,
    PrefixMismatchError,
    UnexpectedTokenError,
)
from pyconlang._number import NumberReader
from pyconlang._parser_metadata import Span
from pyconlang._scanner import Scanner
from pyconlang.grammar import (
    DECIMAL_MARK,
    DECLENSION_MARK,
    DEFAULT_MAX_NESTING_DEPTH,
    DELIMITER_MARK_SET,
    EMPTY,
    LINE_SEPARATOR,
    QUOTE_MARK_SET,
    SENTENCE_STOP,
    WS_SET,
)


logger = logging.getLogger(__name__)


class DelimiterPolicy(Enum):
    """What a sequence does when it meets the other delimiter."""

    STRICT = "strict"
    """Raise an `InconsistentDelimiterError`."""

    TERMINATE = "terminate"
    """
    End the sequence and leave the delimiter for the enclosing value,
    which may start a sequence of its own with it.
    """

    def __str__(self) -> str:
        return self.value


DEFAULT_DELIMITER_POLICY = DelimiterPolicy.STRICT

_VALUE_EXPECTATION = "a value (word, number, sequence or complement)"

_FRAMES_PER_NESTING_LEVEL = 6
"""
Most interpreter frames one level of nesting can take:
`_parse_nested_value`, `_parse_value`, `_parse_sequence_after_first`,
`_parse_element`, `_parse_complement` and `_parse_prefixed_value`.
"""

_RESERVED_FRAMES = 250
"""Frames left for the caller, error reporting and the innermost value."""


def max_supported_depth() -> int:
    """
    Returns the largest `max_depth` that the current interpreter
    recursion limit can parse to without a `RecursionError`.
    """

    return (
        sys.getrecursionlimit() - _RESERVED_FRAMES
    ) // _FRAMES_PER_NESTING_LEVEL


def parse(
    text: str,
    *,
    max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
    delimiter_policy: DelimiterPolicy = DEFAULT_DELIMITER_POLICY,
) -> Document:
    """
    Parse the input text into a `Document`.

    The input text should be a series of sentences, each of which is
    a single value followed by a period. Otherwise, raises a `ConlangError`.
    """

    parser = Parser(
        text, max_depth=max_depth, delimiter_policy=delimiter_policy
    )
    return parser.parse()


def parse_value(
    text: str,
    start: int = 0,
    *,
    max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
    delimiter_policy: DelimiterPolicy = DEFAULT_DELIMITER_POLICY,
) -> Tuple[Value, int]:
    """
    Parse a single value starting exactly at index `start` of the text,
    for embedding the notation inside a larger format.

    Returns the value and the index just after it. Nothing after the value
    is consumed, including whitespace and any terminating period.
    """

    parser = Parser(
        text, max_depth=max_depth, delimiter_policy=delimiter_policy
    )
    return parser.parse_value_at(start)


class _ParseState(NamedTuple):
    index: int
    line_num: int
    line_start: int


class Parser:
    """Recursive descent parser for the conlang notation."""

    _text: str
    """Internal memory of the input text. Never modified."""

    _index: int
    """Tracks the current index within `self._text`."""

    _line_num: int
    """
    Line number (within the text) of the current line.

    NOTE:
    This is 1-indexed in line with the convention used by many compilers
    and text editors, unlike every other index in this package,
    hence 'line_num' instead of 'line_index'.
    """

    _line_start: int
    """Start index (0-indexed within the input text) of the current line."""

    _depth: int
    """How many prefixed values enclose the value being parsed."""

    _evaluation: Optional[Document]
    """Cached result of parsing the input text."""

    def __init__(
        self,
        text: str,
        *,
        max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
        delimiter_policy: DelimiterPolicy = DEFAULT_DELIMITER_POLICY,
        line_offset: int = 0,
    ) -> None:
        """
        Args:
            text:
                The input text.
            max_depth:
                How deeply values may nest inside complements.
                Deeper nesting raises a `NestingDepthError`.
                At most `max_supported_depth()`.
            delimiter_policy:
                What a sequence does when it meets the other delimiter.
            line_offset:
                Added to every line number reported, for callers that
                feed a larger text to the parser one line at a time.
        """

        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        supported_depth = max_supported_depth()
        if max_depth > supported_depth:
            raise ValueError(
                f"max_depth must be at most {supported_depth} under the "
                f"current recursion limit ({sys.getrecursionlimit()}), "
                f"got {max_depth}"
            )

        self._text = text
        self._scanner = Scanner(text)
        self._numbers = NumberReader(text, self._scanner)
        self._max_depth = max_depth
        self._delimiter_policy = DelimiterPolicy(delimiter_policy)
        self._line_offset = line_offset
        self.reset()

    def reset(self) -> None:
        self._index = 0
        self._line_num = 1 + self._line_offset
        self._line_start = 0
        self._depth = 0
        self._evaluation = None

    def parse(self) -> Document:
        if self._evaluation is None:
            self._evaluation = self._parse_document()
        return self._evaluation

    def parse_value_at(self, start: int) -> Tuple[Value, int]:
        """Parses one value at `start` and returns it with its end index."""

        if not 0 <= start <= len(self._text):
            raise IndexError(
                f"start={start} is outside of the input text "
                f"(length {len(self._text)})"
            )
        self.reset()
        self._index = start
        self._line_num += self._text.count(LINE_SEPARATOR, 0, start)
        self._line_start = self._text.rfind(LINE_SEPARATOR, 0, start) + 1
        value = self._parse_value()
        return value, self._index

    def _parse_document(self) -> Document:
        """
        Parse the input text as a series of sentences.
        This is the entry point to all of the internal parsing implementation.
        """

        logger.debug("Parsing document of %d characters", len(self._text))
        document_start = self._save()
        sentences: List[Sentence] = []
        while True:
            self._consume_optional_ws()
            if self._is_at_end():
                break
            sentences.append(self._parse_sentence())

        logger.debug("Parsed %d sentence(s)", len(sentences))
        return Document(
            tuple(sentences), span=self._make_span(document_start)
        )

    def _parse_sentence(self) -> Sentence:
        start = self._save()
        value = self._parse_value()
        self._consume_optional_ws()
        if self._peek() != SENTENCE_STOP:
            raise self._make_unexpected_error(
                f"Expected '{SENTENCE_STOP}' to end the sentence",
                expected=f"'{SENTENCE_STOP}'",
            )
        self._advance()
        return Sentence(value, span=self._make_span(start))

    # Input interface

    def _is_at_end(self) -> bool:
        return self._index == len(self._text)

    def _peek(self) -> str:
        return self._peek_at(self._index)

    def _peek_at(self, index: int) -> str:
        return self._text[index:index + 1]

    def _advance(self) -> None:
        self._index += 1

    def _get_range(self, start_index: int, end_index: int) -> str:
        """
        Returns the substring of the input text specified by the given indices.
        Includes `start_index`, excludes `end_index`.
        """

        return self._text[start_index:end_index]

    def _save(self) -> _ParseState:
        return _ParseState(self._index, self._line_num, self._line_start)

    def _restore(self, state: _ParseState) -> None:
        self._index, self._line_num, self._line_start = state

    def _make_span(self, start: _ParseState) -> Span:
        return Span(
            start_index=start.index,
            end_index=self._index,
            line_start=start.line_start,
            line_num=start.line_num,
        )

    def _consume_optional_ws(self) -> str:
        """
        Consumes and returns any consecutive whitespace,
        keeping track of line separators.
        """

        start_index = self._index
        end_index = self._scanner.whitespace_end(start_index)
        line_count = self._text.count(LINE_SEPARATOR, start_index, end_index)
        if line_count:
            self._line_num += line_count
            self._line_start = self._text.rfind(
                LINE_SEPARATOR, start_index, end_index
            ) + 1
        self._index = end_index
        return self._get_range(start_index, end_index)

    # Error reporting

    def _make_error(
        self,
        error_class: Type[ConlangError],
        reason: str,
        *,
        start_index: Optional[int] = None,
        end_index: Optional[int] = None,
        expected: Optional[str] = None,
    ) -> ConlangError:
        """
        Internal convenience function to instantiate a `ConlangError`.

        Args:
            error_class:
                `ConlangError` subclass to instantiate.
            reason:
                Why the identified part cannot be parsed.
                This should be a continuous line of text in sentence case.
            start_index:
                Start index (0-indexed within the input text, inclusive)
                of the part identified as invalid.
                If `None`, set to `self._index`.
            end_index:
                End index (0-indexed within the input text, exclusive)
                of the part identified as invalid.
                If `None`, set to `start_index + 1`.
            expected:
                What would have been valid at `start_index`.
        """

        if start_index is None:
            start_index = self._index
        return error_class.make_parse_error(
            reason,
            text=self._text,
            start_index=start_index,
            end_index=end_index,
            expected=expected,
            line_offset=self._line_offset,
        )

    def _make_unexpected_error(
        self, expectation: str, *, expected: str
    ) -> ConlangError:
        """
        Reports that the character at the cursor is not the `expected` one,
        picking the error class by what was found instead.
        """

        c = self._peek()
        if c == EMPTY:
            return self._make_error(
                IncompleteInputError,
                f"{expectation}, but reached the end of the input.",
                expected=expected,
            )
        elif c in QUOTE_MARK_SET:
            return self._make_error(
                LexicalError,
                f"{expectation}, but got the reserved character {repr(c)}, "
                "which cannot appear outside of a word.",
                expected=expected,
            )
        else:
            return self._make_error(
                UnexpectedTokenError,
                f"{expectation}, but got {repr(c)}.",
                expected=expected,
            )

    # Values

    def _parse_value(self) -> Value:
        """
        Entry point for every value. Parses a complement, number or word,
        then looks past any whitespace for a delimiter that would make it
        the first element of a sequence.
        """

        start = self._save()
        first = self._parse_element()

        after_first = self._save()
        self._consume_optional_ws()
        c = self._peek()
        if c in DELIMITER_MARK_SET:
            return self._parse_sequence_after_first(first, start, c)
        else:
            self._restore(after_first)
            return first

    def _parse_element(self) -> Value:
        """
        Parses a complement, number or word: anything except a sequence.

        The checks are ordered. A word run immediately followed by the
        declension mark is a prefix even when it looks like a number.
        """

        start = self._save()
        word_end = self._scanner.word_end(start.index)

        # Complement
        if word_end > start.index and self._peek_at(word_end) == DECLENSION_MARK:
            return self._parse_complement()

        # Number
        number_end = self._numbers.match(start.index)
        if number_end is not None:
            if self._scanner.is_word_boundary(number_end):
                if self._peek_at(number_end) == DECLENSION_MARK:
                    raise self._make_error(
                        UnexpectedTokenError,
                        "A number cannot be the prefix of a complement.",
                        start_index=start.index,
                        end_index=number_end + 1,
                        expected=f"anything but '{DECLENSION_MARK}'",
                    )
                self._index = number_end
                return Number(
                    self._get_range(start.index, number_end),
                    span=self._make_span(start),
                )
            if DECIMAL_MARK in self._get_range(start.index, number_end):
                # Falling back to a word would split the text at the mark
                raise self._make_error(
                    LexicalError,
                    "Invalid number. Unexpected character "
                    f"{repr(self._peek_at(number_end))} after the literal.",
                    start_index=number_end,
                    expected="end of number",
                )

        # Word
        if word_end > start.index:
            self._index = word_end
            return Word(
                self._get_range(start.index, word_end),
                span=self._make_span(start),
            )

        raise self._make_unexpected_error(
            "Expected a value", expected=_VALUE_EXPECTATION
        )

    # `sequence`

    def _parse_sequence_after_first(
        self, first: Value, start: _ParseState, delimiter_mark: str
    ) -> Sequence:
        """
        Parses the remaining elements of a sequence, starting at the
        delimiter after its first element. That delimiter fixes the one
        required between every later pair of elements.
        """

        elements: List[Value] = [first]
        while True:
            self._advance()
            self._consume_optional_ws()
            elements.append(self._parse_element())

            after_element = self._save()
            self._consume_optional_ws()
            c = self._peek()
            if c == delimiter_mark:
                continue
            if (
                c in DELIMITER_MARK_SET
                and self._delimiter_policy == DelimiterPolicy.STRICT
            ):
                raise self._make_error(
                    InconsistentDelimiterError,
                    f"Inconsistent delimiter. Expected '{delimiter_mark}' "
                    f"like the rest of the sequence starting on line "
                    f"{start.line_num} at index "
                    f"{start.index - start.line_start}, but got '{c}'.",
                    expected=f"'{delimiter_mark}'",
                )
            self._restore(after_element)
            break

        return Sequence(
            Delimiter(delimiter_mark),
            tuple(elements),
            span=self._make_span(start),
        )

    # `complement`

    def _parse_complement(self) -> Complement:
        """
        Parses the prefixed head, then collects every further prefixed value
        with the same prefix, folding their values into the tail.
        """

        start = self._save()
        head = self._parse_prefixed_value()

        tail_values: List[Value] = []
        while True:
            before_tail = self._save()
            self._consume_optional_ws()
            try:
                tail = self._parse_prefixed_value(head.prefix.text)
            except PrefixMismatchError:
                self._restore(before_tail)
                break
            tail_values.append(tail.value)

        return Complement.fold(
            head, tuple(tail_values), span=self._make_span(start)
        )

    def _parse_prefixed_value(
        self, required_prefix: Optional[str] = None
    ) -> PrefixedValue:
        """
        Parses a prefix, the declension mark and the value after it.

        If `required_prefix` is given and the text at the cursor is not that
        prefix followed by the declension mark, raises a
        `PrefixMismatchError` without consuming anything.
        """

        start = self._save()
        word_end = self._scanner.word_end(start.index)
        prefix_text = self._get_range(start.index, word_end)
        if required_prefix is not None and (
            prefix_text != required_prefix
            or self._peek_at(word_end) != DECLENSION_MARK
        ):
            raise self._make_error(
                PrefixMismatchError,
                f"Expected the prefix '{required_prefix}{DECLENSION_MARK}'.",
                expected=f"'{required_prefix}{DECLENSION_MARK}'",
            )

        self._index = word_end
        prefix = Word(prefix_text, span=self._make_span(start))
        if self._peek() != DECLENSION_MARK:
            raise self._make_unexpected_error(
                f"Expected '{DECLENSION_MARK}' after the prefix "
                f"'{prefix_text}'",
                expected=f"'{DECLENSION_MARK}'",
            )
        self._advance()

        c = self._peek()
        if c in WS_SET:
            raise self._make_error(
                UnexpectedTokenError,
                f"Expected a value immediately after '{DECLENSION_MARK}', "
                "but got whitespace.",
                end_index=self._scanner.whitespace_end(self._index),
                expected=_VALUE_EXPECTATION,
            )
        if c == EMPTY:
            raise self._make_error(
                IncompleteInputError,
                f"Expected a value after '{prefix_text}{DECLENSION_MARK}', "
                "but reached the end of the input.",
                expected=_VALUE_EXPECTATION,
            )

        value = self._parse_nested_value()
        return PrefixedValue(prefix, value, span=self._make_span(start))

    def _parse_nested_value(self) -> Value:
        if self._depth >= self._max_depth:
            raise self._make_error(
                NestingDepthError,
                f"Values nest more than {self._max_depth} levels deep.",
                expected="a less deeply nested value",
            )
        self._depth += 1
        try:
            return self._parse_value()
        finally:
            self._depth -= 1

"""
Decimal literals: an optional sign, digits, an optional fractional part
and an optional exponent.

```python
number = parse_number_literal("-1.5e3")

assert number.text == "-1.5e3"
assert number.value == -1500.0
```
"""

from typing import Optional

from pyconlang._ast import Number
from pyconlang._conlang_error import (
    ConlangError,
    IncompleteInputError,
    LexicalError,
)
from pyconlang._parser_metadata import Span
from pyconlang._scanner import Scanner
from pyconlang.grammar import (
    DECIMAL_MARK,
    EMPTY,
    EXPONENT_PREFIX_SET,
    NUMBER_START_SET,
    SIGN_SET,
)


def parse_number_literal(text: str) -> Number:
    """
    Parse the whole input text as a single number literal.

    Raises an `IncompleteInputError` if the text ends before a sign,
    decimal mark or exponent prefix gets its digits,
    and a `LexicalError` for any other character outside the literal.
    """

    reader = NumberReader(text)
    end = reader.read_strict(0)
    return Number(text, span=Span(0, end, 0, 1))


class NumberReader:
    """Reads number literals at a given index of a text."""

    def __init__(self, text: str, scanner: Optional[Scanner] = None) -> None:
        self._text = text
        self._scanner = Scanner(text) if scanner is None else scanner

    def _peek(self, index: int) -> str:
        return self._text[index:index + 1]

    def match(self, start: int) -> Optional[int]:
        """
        Returns the end of the longest number literal starting at `start`,
        or `None` if no literal starts there.

        The fractional part and the exponent are only taken when
        the digits they require follow, so `3.` ends before the `.`
        and `3e` ends before the `e`.
        """

        if self._peek(start) not in NUMBER_START_SET:
            return None

        index = start
        if self._peek(index) in SIGN_SET:
            index += 1
        integral_end = self._scanner.digits_end(index)
        if integral_end == index:
            return None
        index = integral_end

        if self._peek(index) == DECIMAL_MARK:
            fraction_end = self._scanner.digits_end(index + 1)
            if fraction_end > index + 1:
                index = fraction_end

        if self._peek(index) in EXPONENT_PREFIX_SET:
            exponent_start = index + 1
            if self._peek(exponent_start) in SIGN_SET:
                exponent_start += 1
            exponent_end = self._scanner.digits_end(exponent_start)
            if exponent_end > exponent_start:
                index = exponent_end

        return index

    def read_strict(self, start: int) -> int:
        """
        Consumes a number literal that must span from `start` to the end
        of the text, and returns that end.
        """

        index = start
        if self._peek(index) in SIGN_SET:
            index += 1
        index = self._consume_digits(
            index, "Invalid number. Expected at least 1 digit "
            "before any decimal mark or exponent."
        )

        if self._peek(index) == DECIMAL_MARK:
            index = self._consume_digits(
                index + 1, "Invalid number. Expected at least 1 digit "
                f"after the decimal mark ('{DECIMAL_MARK}')."
            )

        c = self._peek(index)
        if c in EXPONENT_PREFIX_SET:
            index += 1
            sign = self._peek(index)
            if sign in SIGN_SET:
                index += 1
            else:
                sign = ""
            index = self._consume_digits(
                index, "Invalid exponent. Expected at least 1 digit "
                f"in the exponent (after '{c}{sign}')."
            )

        if index != len(self._text):
            raise LexicalError.make_parse_error(
                "Invalid number. Unexpected character "
                f"{repr(self._peek(index))} after the literal.",
                text=self._text,
                start_index=index,
                expected="end of number",
            )
        return index

    def _consume_digits(self, index: int, reason: str) -> int:
        end = self._scanner.digits_end(index)
        if end == index:
            raise self._make_digit_error(index, reason)
        return end

    def _make_digit_error(self, index: int, reason: str) -> ConlangError:
        error_class = (
            IncompleteInputError if self._peek(index) == EMPTY else LexicalError
        )
        return error_class.make_parse_error(
            reason,
            text=self._text,
            start_index=index,
            expected="digit",
        )

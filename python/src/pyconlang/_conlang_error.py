from enum import Enum
from typing import Optional, Type, TypeVar

from pyconlang.grammar import EMPTY, LINE_SEPARATOR, WS_SET


ERROR_POINTER_CHAR = "^"
ERROR_ELLIPSIS = "..."

MAX_ERROR_CONTEXT_LEN = 80
"""
The maximum number of characters around the invalid input
to include in the error message.

Error messages will attempt to display the entire line
containing the invalid input.
However, if the part of the line before the invalid input
is longer than this, then it will be truncated such that
only the substring of this length adjacent to the invalid input
will be included.
The same applies to the part of the line after the invalid input.
"""

END_OF_INPUT = "end of input"

_SPACE = " "


class ConlangErrorCategory(Enum):
    LEXICAL = "lexical"
    UNEXPECTED_TOKEN = "unexpected token"
    INCONSISTENT_DELIMITER = "inconsistent delimiter"
    PREFIX_MISMATCH = "prefix mismatch"
    INCOMPLETE_INPUT = "incomplete input"
    NESTING_DEPTH = "nesting depth"


class ConlangError(Exception):
    """Indicates a failure to parse a part of the input text."""

    Self = TypeVar("Self", bound="ConlangError")

    category: ConlangErrorCategory = ConlangErrorCategory.UNEXPECTED_TOKEN
    """Default category for instances of this class."""

    def __init__(
        self,
        error_message: str,
        *,
        error_category: Optional[ConlangErrorCategory] = None,
        reason: str,
        position: int,
        expected: Optional[str] = None,
        found: str = END_OF_INPUT,
        line_num: int = 0,
        column: int = 0,
    ) -> None:
        """
        Args:
            error_message:
                The formatted error message to be displayed.
            error_category:
                Category that the error belongs to.
                If `None`, the class default `category` is used.
            reason:
                Why the identified part is invalid.
                This should be a complete sentence.
            position:
                Offset (0-indexed within the input text) at which
                recognition broke.
            expected:
                Human-readable description of what would have been valid
                at `position`, if there is one.
            found:
                What was actually found at `position`.
            line_num:
                The line number (within the text) of the line containing
                `position`. This is 1-indexed in line with the convention
                used by many compilers and text editors.
                A value of 0 indicates that this is not applicable.
            column:
                Index (0-indexed within the line) of `position`.
        """

        super().__init__(error_message)
        self.error_category = (
            self.category if error_category is None else error_category
        )
        self.reason = reason
        self.position = position
        self.expected = expected
        self.found = found
        self.line_num = line_num
        self.column = column

    @classmethod
    def make_parse_error(
        cls: Type[Self],
        reason: str,
        *,
        text: str,
        start_index: int,
        end_index: Optional[int] = None,
        expected: Optional[str] = None,
        error_category: Optional[ConlangErrorCategory] = None,
        line_offset: int = 0,
    ) -> Self:
        """
        Factory method for errors located within a single line
        of the input `text`.

        Args:
            reason:
                Why the identified part cannot be parsed.
                This should be a complete sentence.
            text:
                The full input text.
            start_index:
                Start index (0-indexed within `text`, inclusive)
                of the part identified as invalid.
            end_index:
                End index (0-indexed within `text`, exclusive)
                of the part identified as invalid.
                If `None`, set to `start_index + 1`.
            expected:
                What would have been valid at `start_index`.
            error_category:
                Overrides the class default category.
            line_offset:
                Added to the computed line number, for callers that
                feed the text to the parser one line at a time.
        """

        if end_index is None:
            end_index = start_index + 1

        # Validation
        text_length = len(text)
        if not (0 <= start_index < end_index <= text_length + 1):
            raise ValueError(
                "At least one invalid index given when specifying "
                "the location of the invalid conlang input. "
                f"start_index={start_index}, end_index={end_index}, "
                f"text_length={text_length}"
            )

        line_start = text.rfind(LINE_SEPARATOR, 0, start_index) + 1
        line_end = text.find(LINE_SEPARATOR, start_index)
        if line_end == -1:
            line_end = text_length
        line = text[line_start:line_end].rstrip("\r")
        line_num = text.count(LINE_SEPARATOR, 0, start_index) + 1 + line_offset
        column = start_index - line_start
        end_index = min(end_index, line_start + max(len(line), column) + 1)

        found_char = text[start_index:start_index + 1]
        found = END_OF_INPUT if found_char == EMPTY else repr(found_char)

        error_message = (
            f"{reason}\n"
            f"Line {line_num}, from index {column} "
            f"to {end_index - line_start}:\n"
            f"{_format_context(line, column, end_index - line_start)}"
        )

        return cls(
            error_message=error_message,
            error_category=error_category,
            reason=reason,
            position=start_index,
            expected=expected,
            found=found,
            line_num=line_num,
            column=column,
        )


class LexicalError(ConlangError):
    """An illegal character appears where a token was required."""
    category = ConlangErrorCategory.LEXICAL


class NestingDepthError(LexicalError):
    """Values nest more deeply than the parser allows."""
    category = ConlangErrorCategory.NESTING_DEPTH


class UnexpectedTokenError(ConlangError):
    """A required token is missing or a different token is present."""
    category = ConlangErrorCategory.UNEXPECTED_TOKEN


class InconsistentDelimiterError(ConlangError):
    """A sequence changes its delimiter after the first element."""
    category = ConlangErrorCategory.INCONSISTENT_DELIMITER


class PrefixMismatchError(ConlangError):
    """
    Ends the collection of complement tails. Never raised to callers,
    since a differing prefix simply belongs to whatever follows.
    """
    category = ConlangErrorCategory.PREFIX_MISMATCH


class IncompleteInputError(ConlangError):
    """The input ends in the middle of a construct."""
    category = ConlangErrorCategory.INCOMPLETE_INPUT


def _format_context(line: str, start: int, end: int) -> str:
    """
    Returns the `line` truncated such that the parts before and after
    the invalid substring each have a length of at most
    `MAX_ERROR_CONTEXT_LEN`, followed by a line pointing at the substring.
    """

    if MAX_ERROR_CONTEXT_LEN < len(line) - end:
        line = f"{line[:end + MAX_ERROR_CONTEXT_LEN]}{ERROR_ELLIPSIS}"
    initial_strip_index = _len_leading_space(line[:start])
    line = line[initial_strip_index:]
    len_before_invalid = start - initial_strip_index
    if MAX_ERROR_CONTEXT_LEN < len_before_invalid:
        truncate_index = len_before_invalid - MAX_ERROR_CONTEXT_LEN
        line = f"{ERROR_ELLIPSIS}{line[truncate_index:]}"
        len_before_invalid = MAX_ERROR_CONTEXT_LEN + len(ERROR_ELLIPSIS)

    return (
        f"{line}\n"
        f"{_SPACE * len_before_invalid}"
        f"{ERROR_POINTER_CHAR * max(end - start, 1)}"
    )


def _len_leading_space(s: str) -> int:
    for i, c in enumerate(s):
        if c not in WS_SET:
            return i
    return len(s)

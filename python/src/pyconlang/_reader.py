"""
Read one value per line, as typed at a prompt.

```python
reader = ConlangReader(["item:a item:b", "1, 2, 3."])

assert [str(value) for value in reader] == [
    "('item':'a' . 'b')",
    "[1, 2, 3]",
]
```
"""

import logging
from typing import Iterable, Iterator

from pyconlang._ast import Value
from pyconlang._conlang_error import UnexpectedTokenError
from pyconlang._parser import (
    DEFAULT_DELIMITER_POLICY,
    DelimiterPolicy,
    Parser,
)
from pyconlang._scanner import Scanner
from pyconlang.grammar import (
    DEFAULT_MAX_NESTING_DEPTH,
    LINE_SEPARATOR,
    SENTENCE_STOP,
)


logger = logging.getLogger(__name__)


class ConlangReader:
    """
    Iterates over the values in `lines`, one value per non-blank line.
    The period ending each value is optional.

    Raises a `ConlangError` for the first line that does not hold exactly
    one value. Line numbers in the error count every line read so far.
    """

    def __init__(
        self,
        lines: Iterable[str],
        *,
        max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
        delimiter_policy: DelimiterPolicy = DEFAULT_DELIMITER_POLICY,
    ) -> None:
        self._lines = iter(lines)
        self._max_depth = max_depth
        self._delimiter_policy = delimiter_policy
        self._line_num = 0

    @property
    def line_num(self) -> int:
        """Line number of the line read most recently (1-indexed)."""
        return self._line_num

    def __iter__(self) -> Iterator[Value]:
        return self

    def __next__(self) -> Value:
        for line in self._lines:
            self._line_num += 1
            line = line.rstrip(f"\r{LINE_SEPARATOR}")
            if line.strip():
                return self.parse_line(line)
        raise StopIteration

    def parse_line(self, line: str) -> Value:
        """Parses a single line holding one value."""

        scanner = Scanner(line)
        parser = Parser(
            line,
            max_depth=self._max_depth,
            delimiter_policy=self._delimiter_policy,
            line_offset=max(self._line_num - 1, 0),
        )
        value, end = parser.parse_value_at(scanner.whitespace_end(0))

        end = scanner.whitespace_end(end)
        if line[end:end + 1] == SENTENCE_STOP:
            end = scanner.whitespace_end(end + 1)
        if end != len(line):
            logger.debug("Extra input on line %d: %r", self._line_num, line)
            raise UnexpectedTokenError.make_parse_error(
                "Too much input. Expected a single value on the line, "
                f"optionally followed by '{SENTENCE_STOP}', "
                f"but got {repr(line[end])}.",
                text=line,
                start_index=end,
                end_index=len(line),
                expected="end of line",
                line_offset=max(self._line_num - 1, 0),
            )
        return value

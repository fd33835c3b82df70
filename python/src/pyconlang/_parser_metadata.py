from enum import Enum
from typing import NamedTuple


class ValueKind(Enum):
    WORD = "word"
    NUMBER = "number"
    SEQUENCE = "sequence"
    COMPLEMENT = "complement"

    def __str__(self) -> str:
        return self.value


class Span(NamedTuple):
    """Where a node was found in the input text."""
    start_index: int
    end_index: int
    line_start: int
    line_num: int

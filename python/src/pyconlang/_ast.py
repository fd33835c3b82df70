"""
Immutable syntax tree produced by the parser.

`Value` is a closed union of `Word`, `Number`, `Sequence` and `Complement`.
Consumers dispatch with an `isinstance` chain over all four classes
and raise `TypeError` for anything else.

Equality is structural. The `span` of each node records where it was found
in the input text, and is ignored when comparing nodes.
"""

import dataclasses
from enum import Enum
from typing import Any, ClassVar, Iterator, Optional, Tuple, Union

from pyconlang._parser_metadata import Span, ValueKind
from pyconlang.grammar import (
    COMMA_DELIMITER,
    DECLENSION_MARK,
    NUMBER_LITERAL_PATTERN,
    SEMICOLON_DELIMITER,
    WORD_DISALLOWED_SET,
)


class Delimiter(Enum):
    COMMA = COMMA_DELIMITER
    SEMICOLON = SEMICOLON_DELIMITER
    SYNTHETIC = "synthetic"
    """Produced by folding complement tails; never written in the text."""

    def __str__(self) -> str:
        return self.value


def _span_field() -> Any:
    return dataclasses.field(default=None, compare=False, repr=False)


@dataclasses.dataclass(frozen=True)
class Word:
    kind: ClassVar[ValueKind] = ValueKind.WORD

    text: str
    span: Optional[Span] = _span_field()

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("A word cannot be empty")
        if not WORD_DISALLOWED_SET.isdisjoint(self.text):
            raise ValueError(
                "A word cannot contain whitespace or any of the reserved "
                f"characters: {repr(self.text)}"
            )

    def __str__(self) -> str:
        return repr(self.text)


@dataclasses.dataclass(frozen=True)
class Number:
    """
    A decimal literal. The source `text` is kept as written,
    and only evaluated on request.
    """

    kind: ClassVar[ValueKind] = ValueKind.NUMBER

    text: str
    span: Optional[Span] = _span_field()

    def __post_init__(self) -> None:
        if NUMBER_LITERAL_PATTERN.fullmatch(self.text) is None:
            raise ValueError(
                f"Not a valid number literal: {repr(self.text)}"
            )

    @property
    def value(self) -> Union[int, float]:
        """`int` when there is no fractional part and no exponent."""
        if self.text.isdigit() or self.text[1:].isdigit():
            return int(self.text)
        return float(self.text)

    def __str__(self) -> str:
        return self.text


@dataclasses.dataclass(frozen=True)
class Sequence:
    kind: ClassVar[ValueKind] = ValueKind.SEQUENCE

    delimiter: Delimiter
    elements: Tuple["Value", ...]
    span: Optional[Span] = _span_field()

    def __post_init__(self) -> None:
        # Accept any iterable, but store a tuple to stay hashable
        object.__setattr__(self, "elements", tuple(self.elements))
        if not self.elements:
            raise ValueError("A sequence must contain at least 1 element")

    @property
    def is_synthetic(self) -> bool:
        return self.delimiter == Delimiter.SYNTHETIC

    def __len__(self) -> int:
        return len(self.elements)

    def __str__(self) -> str:
        separator = (
            " " if self.is_synthetic else f"{self.delimiter.value} "
        )
        return f"[{separator.join(str(e) for e in self.elements)}]"


@dataclasses.dataclass(frozen=True)
class PrefixedValue:
    prefix: Word
    value: "Value"
    span: Optional[Span] = _span_field()

    def __str__(self) -> str:
        return f"{self.prefix}{DECLENSION_MARK}{self.value}"


@dataclasses.dataclass(frozen=True)
class Complement:
    """
    A prefixed head, followed by the values of any further
    occurrences of the same prefix.

    `tail` is `None` when there are no further occurrences, the value itself
    when there is exactly 1, and a synthetic `Sequence` otherwise.
    """

    kind: ClassVar[ValueKind] = ValueKind.COMPLEMENT

    head: PrefixedValue
    tail: Optional["Value"] = None
    span: Optional[Span] = _span_field()

    def __post_init__(self) -> None:
        if (
            isinstance(self.tail, Sequence)
            and self.tail.is_synthetic
            and len(self.tail) < 2
        ):
            raise ValueError(
                "A folded tail must hold at least 2 values; "
                "a single tail value is stored without wrapping"
            )

    @classmethod
    def fold(
        cls,
        head: PrefixedValue,
        tail_values: Tuple["Value", ...],
        span: Optional[Span] = None,
    ) -> "Complement":
        """Builds a complement from its head and every tail value found."""
        if len(tail_values) == 0:
            tail = None
        elif len(tail_values) == 1:
            tail = tail_values[0]
        else:
            tail = Sequence(Delimiter.SYNTHETIC, tuple(tail_values))
        return cls(head=head, tail=tail, span=span)

    @property
    def prefix(self) -> Word:
        return self.head.prefix

    @property
    def tail_values(self) -> Tuple["Value", ...]:
        """The tail unfolded back into the values in encounter order."""
        if self.tail is None:
            return ()
        if isinstance(self.tail, Sequence) and self.tail.is_synthetic:
            return self.tail.elements
        return (self.tail,)

    def __str__(self) -> str:
        if self.tail is None:
            return f"({self.head})"
        return f"({self.head} . {self.tail})"


Value = Union[Word, Number, Sequence, Complement]
VALUE_TYPES = (Word, Number, Sequence, Complement)


@dataclasses.dataclass(frozen=True)
class Sentence:
    value: Value
    span: Optional[Span] = _span_field()

    def __str__(self) -> str:
        return f"{self.value}."


@dataclasses.dataclass(frozen=True)
class Document:
    sentences: Tuple[Sentence, ...] = ()
    span: Optional[Span] = _span_field()

    def __post_init__(self) -> None:
        object.__setattr__(self, "sentences", tuple(self.sentences))

    def __iter__(self) -> Iterator[Sentence]:
        return iter(self.sentences)

    def __len__(self) -> int:
        return len(self.sentences)

    def __str__(self) -> str:
        return "\n".join(str(s) for s in self.sentences)

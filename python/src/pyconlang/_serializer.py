"""
This module provides 2 ways to write a syntax tree back out as text.
1. Call `to_conlang()`.
2. Instantiate a `ConlangSerializer` and call its `to_conlang()` method.

Both have the same configuration options and defaults.
Refer to their documentation for details.

Approach #1 simply does approach #2 under the hood.
Approach #2 may be useful if you want to set a configuration once
and reuse that for serialization multiple times.

The output is not byte-for-byte the text that was parsed. What holds is
that parsing the output gives back a tree equal to the one serialized.

```python
from pyconlang import ConlangSerializer, parse, to_conlang

document = parse("item:a   item:b ;  c.")

# Approach #1
text = to_conlang(document)

# Approach #2
serializer = ConlangSerializer(space_after_delimiter=False)
compact_text = serializer.to_conlang(document)

assert parse(text) == parse(compact_text) == document
```
"""

from typing import Iterator, List, Union

from pyconlang._ast import (
    Complement,
    Document,
    Number,
    PrefixedValue,
    Sentence,
    Sequence,
    Value,
    Word,
)
from pyconlang._number import NumberReader
from pyconlang.grammar import (
    DECLENSION_MARK,
    LINE_SEPARATOR,
    SENTENCE_STOP,
    WS_SET,
)


# Default settings
DEFAULT_SPACE_AFTER_DELIMITER = True
DEFAULT_SENTENCE_SEPARATOR = LINE_SEPARATOR

Node = Union[Document, Sentence, Value]


def to_conlang(
    node: Node,
    *,
    space_after_delimiter: bool = DEFAULT_SPACE_AFTER_DELIMITER,
    sentence_separator: str = DEFAULT_SENTENCE_SEPARATOR,
) -> str:
    """
    Serializes the input `node` as conlang text.

    This function has the same configuration options and defaults
    as `ConlangSerializer`.
    For details, refer to the `ConlangSerializer` documentation.
    """

    serializer = ConlangSerializer(
        space_after_delimiter=space_after_delimiter,
        sentence_separator=sentence_separator,
    )
    return serializer.to_conlang(node)


class ConlangSerializer:
    """
    Converts syntax trees to conlang text.

    Some trees built by hand have no text that parses back into them,
    such as a sequence directly inside another sequence. Serializing
    one of those raises a `ValueError`.
    """

    def __init__(
        self,
        *,
        space_after_delimiter: bool = DEFAULT_SPACE_AFTER_DELIMITER,
        sentence_separator: str = DEFAULT_SENTENCE_SEPARATOR,
    ) -> None:
        """
        Args:
            space_after_delimiter:
                If `True`, follow each sequence delimiter with a space
                (`a, b`). Otherwise, elements are packed (`a,b`).
            sentence_separator:
                The `str` with which to separate adjacent sentences of
                a `Document`. Must be non-empty whitespace, since
                `1.` followed directly by `5.` reads as `1.5.`
        """

        if not sentence_separator or not WS_SET.issuperset(sentence_separator):
            raise ValueError(
                "sentence_separator must be non-empty whitespace, "
                f"but got {repr(sentence_separator)}"
            )
        self._space_after_delimiter = space_after_delimiter
        self._sentence_separator = sentence_separator

    def to_conlang(self, node: Node) -> str:
        """
        Serializes a `Document` as its sentences, a `Sentence` as its value
        followed by a period, and a bare value without any period.
        """

        if isinstance(node, Document):
            return self._sentence_separator.join(
                self.to_conlang(sentence) for sentence in node.sentences
            )
        elif isinstance(node, Sentence):
            return f"{self.to_value(node.value)}{SENTENCE_STOP}"
        else:
            return self.to_value(node)

    def to_value(self, value: Value) -> str:
        if isinstance(value, Word):
            return self.to_word(value)
        elif isinstance(value, Number):
            return self.to_number(value)
        elif isinstance(value, Sequence):
            return self.to_sequence(value)
        elif isinstance(value, Complement):
            return self.to_complement(value)
        else:
            raise TypeError(
                "Expected a Word, Number, Sequence or Complement, "
                f"but got {type(value).__name__}"
            )

    def to_word(self, word: Word) -> str:
        if _reads_as_number(word.text):
            raise ValueError(
                f"Word {repr(word.text)} would be read back as a number"
            )
        return word.text

    def to_number(self, number: Number) -> str:
        return number.text

    def to_sequence(self, sequence: Sequence) -> str:
        if sequence.is_synthetic:
            raise ValueError(
                "A synthetic sequence can only be serialized as "
                "the tail of a complement"
            )
        if len(sequence) < 2:
            raise ValueError(
                "A sequence of 1 element would be read back as "
                "the element alone"
            )

        for element in sequence.elements[:-1]:
            if not isinstance(element, (Word, Number)):
                raise ValueError(
                    f"A {element.kind} before the last element of "
                    "a sequence would absorb the elements after it"
                )
        if isinstance(sequence.elements[-1], Sequence):
            raise ValueError(
                "A sequence cannot be the last element of another sequence"
            )

        delimiter = sequence.delimiter.value
        if self._space_after_delimiter:
            delimiter = f"{delimiter} "
        return delimiter.join(self.to_value(e) for e in sequence.elements)

    def to_complement(self, complement: Complement) -> str:
        prefix = complement.prefix.text
        prefixed_values = [complement.head.value, *complement.tail_values]

        # Every value followed by another same-prefix value must not end
        # in a complement that would take that value as its own tail.
        for value in prefixed_values[:-1]:
            if prefix in _trailing_complement_prefixes(value):
                raise ValueError(
                    f"A complement with prefix {repr(prefix)} at the end of "
                    f"a value prefixed by {repr(prefix)} would absorb "
                    "the tail after it"
                )

        pieces: List[str] = [
            self.to_prefixed_value(PrefixedValue(complement.prefix, value))
            for value in prefixed_values
        ]
        return " ".join(pieces)

    def to_prefixed_value(self, prefixed_value: PrefixedValue) -> str:
        return (
            f"{prefixed_value.prefix.text}{DECLENSION_MARK}"
            f"{self.to_value(prefixed_value.value)}"
        )


def _reads_as_number(text: str) -> bool:
    end = NumberReader(text).match(0)
    return end == len(text)


def _trailing_complement_prefixes(value: Value) -> Iterator[str]:
    """Yields the prefix of every complement along the right edge of `value`."""

    while True:
        if isinstance(value, Complement):
            yield value.prefix.text
            if value.tail is None:
                value = value.head.value
            else:
                value = value.tail_values[-1]
        elif isinstance(value, Sequence):
            value = value.elements[-1]
        else:
            return

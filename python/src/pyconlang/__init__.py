"""
Python package for parsing conlang text into a syntax tree.

The notation is made of words, numbers, sequences delimited by `,` or `;`,
and complements that attach values to a prefix with `:`.
"""

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
    ConlangErrorCategory,
    IncompleteInputError,
    InconsistentDelimiterError,
    LexicalError,
    NestingDepthError,
    PrefixMismatchError,
    UnexpectedTokenError,
)
from pyconlang._number import parse_number_literal
from pyconlang._parser import (
    DelimiterPolicy,
    Parser,
    max_supported_depth,
    parse,
    parse_value,
)
from pyconlang._parser_metadata import Span, ValueKind
from pyconlang._reader import ConlangReader
from pyconlang._scanner import Lexeme, LexemeKind, Scanner
from pyconlang._serializer import ConlangSerializer, to_conlang

import unittest

import pytest

import pyconlang
from pyconlang._number import NumberReader
from pyconlang.grammar import WORD_DISALLOWED_SET

hypothesis = pytest.importorskip("hypothesis")
strategies = hypothesis.strategies

_WORD_TEXT = strategies.text(
    alphabet=strategies.characters(
        exclude_categories=("Cs",),
        exclude_characters="".join(WORD_DISALLOWED_SET),
    ),
    min_size=1,
)
_NUMBER_TEXT = strategies.from_regex(
    r"[+-]?[0-9]+(\.[0-9]+)?([eE][+-]?[0-9]+)?", fullmatch=True
)
# Mostly the notation's own characters, so that some inputs parse
_NOTATION_TEXT = strategies.text(alphabet="ab1-e:.,; \n", max_size=40)


class WordAndNumberProperties(unittest.TestCase):
    @hypothesis.given(_WORD_TEXT)
    def test_word_run_reads_as_word(self, text: str) -> None:
        hypothesis.assume(NumberReader(text).match(0) != len(text))
        document = pyconlang.parse(f"{text}.")
        self.assertEqual(document.sentences[0].value, pyconlang.Word(text))

    @hypothesis.given(_NUMBER_TEXT)
    def test_number_literal_reads_as_number(self, text: str) -> None:
        document = pyconlang.parse(f"{text}.")
        self.assertEqual(document.sentences[0].value, pyconlang.Number(text))
        self.assertEqual(pyconlang.parse_number_literal(text).text, text)


class FuzzTests(unittest.TestCase):
    @hypothesis.given(strategies.text())
    def test_fuzz_parser_stability(self, trash_text: str) -> None:
        try:
            pyconlang.parse(trash_text)
        except pyconlang.ConlangError as e:
            # Tail collection stops on this one; it must never escape
            self.assertNotIsInstance(e, pyconlang.PrefixMismatchError)

    @hypothesis.given(_NOTATION_TEXT)
    def test_serialized_document_parses_back(self, text: str) -> None:
        try:
            document = pyconlang.parse(text)
        except pyconlang.ConlangError:
            return
        serialized = pyconlang.to_conlang(document)
        self.assertEqual(pyconlang.parse(serialized), document)


if __name__ == "__main__":  # pragma: no cover
    unittest.main(verbosity=2)

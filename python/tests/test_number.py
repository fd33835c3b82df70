import unittest

import pyconlang
from pyconlang import (
    IncompleteInputError,
    LexicalError,
    Number,
    parse_number_literal,
)
from pyconlang._number import NumberReader


class NumberLiteralTests(unittest.TestCase):
    def test_valid_literals_keep_their_text(self) -> None:
        for text in ("0", "123", "+7", "-42", "3.14", "-0.5", "1e9",
                     "2E-3", "6.02e+23", "007"):
            with self.subTest(text=text):
                number = parse_number_literal(text)
                self.assertEqual(number, Number(text))
                self.assertEqual(number.text, text)

    def test_evaluation(self) -> None:
        self.assertEqual(parse_number_literal("123").value, 123)
        self.assertIsInstance(parse_number_literal("-42").value, int)
        self.assertEqual(parse_number_literal("-42").value, -42)
        self.assertEqual(parse_number_literal("123.4").value, 123.4)
        self.assertEqual(parse_number_literal("123e4").value, 123e4)
        self.assertIsInstance(parse_number_literal("1e2").value, float)

    def test_missing_digits_at_end_is_incomplete(self) -> None:
        for text, position in (("", 0), ("+", 1), ("-", 1), ("1.", 2),
                               ("1e", 2), ("1e-", 3), ("1.5E+", 5)):
            with self.subTest(text=text):
                with self.assertRaises(IncompleteInputError) as ctx:
                    parse_number_literal(text)
                self.assertEqual(ctx.exception.position, position)
                self.assertEqual(ctx.exception.found, "end of input")

    def test_illegal_characters_are_lexical_errors(self) -> None:
        for text, position in (("x", 0), ("+x", 1), (".5", 0), ("1.x", 2),
                               ("1ex", 2), ("12a", 2), ("1.5.5", 3)):
            with self.subTest(text=text):
                with self.assertRaises(LexicalError) as ctx:
                    parse_number_literal(text)
                self.assertEqual(ctx.exception.position, position)

    def test_error_category(self) -> None:
        with self.assertRaises(pyconlang.ConlangError) as ctx:
            parse_number_literal("1e")
        self.assertEqual(
            ctx.exception.error_category,
            pyconlang.ConlangErrorCategory.INCOMPLETE_INPUT,
        )
        self.assertIn("exponent", ctx.exception.reason)


class NumberNodeTests(unittest.TestCase):
    def test_text_must_be_a_literal(self) -> None:
        for text in ("", "abc", "1_000", "1e", "1.", ".5", "+", " 1",
                     "0x10", "inf", "\u0661"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    Number(text)

    def test_literal_text_is_accepted(self) -> None:
        self.assertEqual(Number("-0.5e+3").value, -500.0)
        self.assertEqual(Number("007").value, 7)


class NumberReaderMatchTests(unittest.TestCase):
    def _match(self, text: str, start: int = 0):
        return NumberReader(text).match(start)

    def test_no_digit_means_no_match(self) -> None:
        self.assertIsNone(self._match("abc"))
        self.assertIsNone(self._match("-abc"))
        self.assertIsNone(self._match("+"))
        self.assertIsNone(self._match(".5"))

    def test_optional_parts_need_their_digits(self) -> None:
        self.assertEqual(self._match("3."), 1)
        self.assertEqual(self._match("3.5."), 3)
        self.assertEqual(self._match("3e"), 1)
        self.assertEqual(self._match("3e+"), 1)
        self.assertEqual(self._match("3e+2,"), 4)

    def test_match_from_offset(self) -> None:
        self.assertEqual(self._match("a, -1.5e3;", 3), 9)


if __name__ == "__main__":  # pragma: no cover
    unittest.main(verbosity=2)

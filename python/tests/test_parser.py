import unittest

from pyconlang import (
    Complement,
    Delimiter,
    Document,
    LexicalError,
    Number,
    Parser,
    PrefixedValue,
    Sentence,
    Sequence,
    Span,
    UnexpectedTokenError,
    Word,
    parse,
    parse_value,
)


def _single_value(text: str):
    document = parse(text)
    assert len(document) == 1, document
    return document.sentences[0].value


class WordAndNumberTests(unittest.TestCase):
    def test_word(self) -> None:
        self.assertEqual(_single_value("Mary."), Word("Mary"))

    def test_word_with_symbols(self) -> None:
        self.assertEqual(_single_value("foo_bar-baz!?."), Word("foo_bar-baz!?"))

    def test_number(self) -> None:
        self.assertEqual(_single_value("123."), Number("123"))
        self.assertEqual(_single_value("-1.5e3."), Number("-1.5e3"))

    def test_number_keeps_source_text(self) -> None:
        number = _single_value("+0.50.")
        self.assertEqual(number.text, "+0.50")
        self.assertEqual(number.value, 0.5)

    def test_numeric_looking_word(self) -> None:
        # The number grammar has to end on a word boundary
        self.assertEqual(_single_value("3rd."), Word("3rd"))
        self.assertEqual(_single_value("1e."), Word("1e"))
        self.assertEqual(_single_value("-."), Word("-"))

    def test_fraction_running_into_a_word_is_lexical_error(self) -> None:
        with self.assertRaises(LexicalError) as ctx:
            parse("1.5x.")
        self.assertEqual(ctx.exception.position, 3)

    def test_whitespace_around_sentences(self) -> None:
        document = parse("  a .\n\n\tb.  ")
        self.assertEqual(
            document,
            Document((Sentence(Word("a")), Sentence(Word("b")))),
        )


class DisambiguationTests(unittest.TestCase):
    def test_complement_before_word(self) -> None:
        self.assertEqual(
            _single_value("subj:Mary."),
            Complement(PrefixedValue(Word("subj"), Word("Mary"))),
        )

    def test_numeric_looking_prefix(self) -> None:
        value = _single_value("n3:5.")
        self.assertEqual(
            value, Complement(PrefixedValue(Word("n3"), Number("5")))
        )

    def test_digit_run_prefix(self) -> None:
        value = _single_value("3:x.")
        self.assertEqual(value, Complement(PrefixedValue(Word("3"), Word("x"))))

    def test_number_cannot_be_a_prefix(self) -> None:
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parse("1.5:x.")
        self.assertEqual(ctx.exception.position, 0)
        self.assertIn("prefix", ctx.exception.reason)

    def test_space_before_colon_is_not_a_prefix(self) -> None:
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parse("item : a.")
        self.assertEqual(ctx.exception.position, 5)
        self.assertEqual(ctx.exception.found, "':'")
        self.assertEqual(ctx.exception.expected, "'.'")

    def test_space_after_colon_is_rejected(self) -> None:
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parse("item: a.")
        self.assertEqual(ctx.exception.position, 5)

    def test_nesting(self) -> None:
        self.assertEqual(
            _single_value("outer:inner:5."),
            Complement(
                PrefixedValue(
                    Word("outer"),
                    Complement(PrefixedValue(Word("inner"), Number("5"))),
                )
            ),
        )

    def test_sentence_stop_after_number(self) -> None:
        document = parse("3.\n4.5.")
        self.assertEqual(
            [s.value for s in document], [Number("3"), Number("4.5")]
        )


class DocumentTests(unittest.TestCase):
    def test_empty_document(self) -> None:
        self.assertEqual(parse(""), Document(()))
        self.assertEqual(parse(" \n\t "), Document(()))

    def test_several_sentences(self) -> None:
        document = parse("subj:Mary. obj:John.")
        self.assertEqual(len(document), 2)
        self.assertEqual(document.sentences[1].value.prefix, Word("obj"))

    def test_spans(self) -> None:
        document = parse("a.\n  item:b, c.")
        second = document.sentences[1]
        self.assertEqual(second.span, Span(5, 15, 3, 2))
        complement = second.value
        self.assertEqual(complement.span, Span(5, 14, 3, 2))
        self.assertEqual(complement.head.value.span, Span(10, 14, 3, 2))
        self.assertEqual(complement.prefix.span, Span(5, 9, 3, 2))

    def test_spans_do_not_affect_equality(self) -> None:
        self.assertEqual(Word("a", span=Span(0, 1, 0, 1)), Word("a"))

    def test_parser_caches_result(self) -> None:
        parser = Parser("a. b.")
        first = parser.parse()
        self.assertIs(parser.parse(), first)
        parser.reset()
        self.assertEqual(parser.parse(), first)

    def test_invalid_max_depth(self) -> None:
        with self.assertRaises(ValueError):
            Parser("a.", max_depth=0)


class ParseValueTests(unittest.TestCase):
    def test_value_and_end(self) -> None:
        value, end = parse_value("a, b. rest")
        self.assertEqual(
            value, Sequence(Delimiter.COMMA, (Word("a"), Word("b")))
        )
        self.assertEqual(end, 4)

    def test_start_offset(self) -> None:
        value, end = parse_value("  k:v k:w. more", 2)
        self.assertEqual(
            value,
            Complement(PrefixedValue(Word("k"), Word("v")), Word("w")),
        )
        self.assertEqual(end, 9)

    def test_value_must_start_at_offset(self) -> None:
        with self.assertRaises(UnexpectedTokenError):
            parse_value("  k:v", 0)

    def test_trailing_whitespace_is_not_consumed(self) -> None:
        value, end = parse_value("word   ")
        self.assertEqual(value, Word("word"))
        self.assertEqual(end, 4)

    def test_start_out_of_range(self) -> None:
        with self.assertRaises(IndexError):
            parse_value("abc", 4)


if __name__ == "__main__":  # pragma: no cover
    unittest.main(verbosity=2)

"""Command line entry point: parse a file, or read values at a prompt."""

import argparse
import logging
import sys
from typing import Iterator, List, Optional, TextIO

from pyconlang._ast import Document, Value
from pyconlang._conlang_error import ConlangError
from pyconlang._parser import (
    DEFAULT_DELIMITER_POLICY,
    DelimiterPolicy,
    max_supported_depth,
    parse,
)
from pyconlang._reader import ConlangReader
from pyconlang._serializer import to_conlang
from pyconlang.grammar import DEFAULT_MAX_NESTING_DEPTH


logger = logging.getLogger(__name__)

PROMPT = "? "
OUTPUT_FORMATS = ("tree", "text")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyconlang",
        description="Parse conlang text and print its syntax tree.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Document to parse ('-' for standard input). "
        "Without it, values are read one per line at a prompt.",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="tree",
        help="Print each value as a tree, or written back out as text",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_NESTING_DEPTH,
        help="How deeply values may nest inside complements",
    )
    parser.add_argument(
        "--delimiter-policy",
        choices=[str(policy) for policy in DelimiterPolicy],
        default=str(DEFAULT_DELIMITER_POLICY),
        help="What a sequence does when it meets the other delimiter",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )
    return parser


def format_value(value: Value, output_format: str) -> str:
    if output_format == "text":
        return to_conlang(value)
    return str(value)


def run_file(
    source: TextIO,
    *,
    output_format: str,
    max_depth: int,
    delimiter_policy: DelimiterPolicy,
    out: TextIO,
) -> Document:
    document = parse(
        source.read(), max_depth=max_depth, delimiter_policy=delimiter_policy
    )
    for sentence in document:
        print(format_value(sentence.value, output_format), file=out)
    return document


def run_repl(
    lines: Iterator[str],
    *,
    output_format: str,
    max_depth: int,
    delimiter_policy: DelimiterPolicy,
    out: TextIO,
) -> None:
    """Prints each value read from `lines`, and each error, until exhausted."""

    reader = ConlangReader(
        lines, max_depth=max_depth, delimiter_policy=delimiter_policy
    )
    while True:
        try:
            value = next(reader)
        except StopIteration:
            return
        except ConlangError as e:
            logger.debug("Line %d rejected: %s", reader.line_num, e.reason)
            print(e, file=out)
            continue
        try:
            print(format_value(value, output_format), file=out)
        except ValueError as e:
            print(e, file=out)


def prompt_lines(prompt: str = PROMPT) -> Iterator[str]:
    while True:
        try:
            yield input(prompt)
        except EOFError:
            return


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    supported_depth = max_supported_depth()
    if not 1 <= args.max_depth <= supported_depth:
        print(
            f"--max-depth must be between 1 and {supported_depth}",
            file=sys.stderr,
        )
        return 2

    options = dict(
        output_format=args.format,
        max_depth=args.max_depth,
        delimiter_policy=DelimiterPolicy(args.delimiter_policy),
        out=sys.stdout,
    )

    if args.file is None:
        run_repl(prompt_lines(), **options)
        return 0

    try:
        if args.file == "-":
            run_file(sys.stdin, **options)
        else:
            with open(args.file, "r", encoding="utf-8") as f:
                run_file(f, **options)
    except ConlangError as e:
        print(e, file=sys.stderr)
        return 1
    except ValueError as e:
        # A tree with no text form under --format text
        print(e, file=sys.stderr)
        return 1
    return 0

import argparse
import io
import sys
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import TextIO, cast

from ctok.diag import FrontendError
from ctok.frontend import format_line, iter_lines, read_source
from ctok.options import ReaderOptions

_SWITCHES = ("tokenize", "unindent", "line_numbers", "debug")


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ctok",
        description="Strip comments from C source and print it as preprocessing tokens.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="path to a C source file, or - to read from stdin",
    )
    parser.add_argument(
        "--no-tokenize",
        dest="tokenize",
        action="store_const",
        const=False,
        default=None,
        help="print lines with comments removed but not split into tokens",
    )
    parser.add_argument(
        "--no-unindent",
        dest="unindent",
        action="store_const",
        const=False,
        default=None,
        help="keep leading indentation as the first token of each line",
    )
    parser.add_argument(
        "--no-linenums",
        dest="line_numbers",
        action="store_const",
        const=False,
        default=None,
        help="omit the physical line number prefix",
    )
    parser.add_argument(
        "--debug",
        dest="debug",
        action="store_const",
        const=True,
        default=None,
        help="trace every comment-stripping step on stderr",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    parser = _build_arg_parser()
    effective_argv = list(argv) if argv is not None else sys.argv[1:]
    try:
        args = parser.parse_args(effective_argv)
    except SystemExit as error:
        return cast(int, error.code)
    overrides = {
        name: getattr(args, name) for name in _SWITCHES if getattr(args, name) is not None
    }
    options = replace(ReaderOptions.from_environ(environ), **overrides)
    try:
        filename, source = read_source(args.input, stdin=stdin)
    except (OSError, UnicodeError) as error:
        print(f"ctok: I/O error: {error}", file=sys.stderr)
        return 1
    try:
        for line in iter_lines(
            io.StringIO(source), filename=filename, options=options, trace=sys.stderr
        ):
            print(format_line(line.number, line.text, line_numbers=options.line_numbers))
    except FrontendError as error:
        print(error, file=sys.stderr)
        return 1
    return 0

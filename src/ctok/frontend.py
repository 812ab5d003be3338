import io
import re
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from ctok.diag import Diagnostic, FrontendError
from ctok.options import ReaderOptions, normalize_options
from ctok.stripper import LexicalStripper, ReaderError
from ctok.tokenizer import tokenize

_LINE_END_RE = re.compile(r"(?:\r\n|\n|\r)\Z")


@dataclass(frozen=True)
class NumberedLine:
    number: int
    text: str


class CLineReader:
    def __init__(
        self,
        stream: TextIO,
        *,
        options: ReaderOptions | None = None,
        trace: TextIO | None = None,
    ) -> None:
        self._options = normalize_options(options)
        if self._options.debug and trace is None:
            trace = sys.stderr
        self._stripper = LexicalStripper(stream, trace=trace if self._options.debug else None)
        self._next_number = 1
        self.line_number = 0

    @property
    def pending_line_number(self) -> int:
        return self._next_number

    def next_line(self) -> str | None:
        processed = self._stripper.next_line()
        if processed is None:
            return None
        self.line_number = self._next_number
        self._next_number += processed.physical_lines
        if not self._options.tokenize:
            return processed.text
        return tokenize(processed.text, keep_indent=not self._options.unindent)

    def __iter__(self) -> Iterator[NumberedLine]:
        while True:
            text = self.next_line()
            if text is None:
                return
            if text.strip():
                yield NumberedLine(self.line_number, text)


def iter_lines(
    stream: TextIO,
    *,
    filename: str = "<input>",
    options: ReaderOptions | None = None,
    trace: TextIO | None = None,
) -> Iterator[NumberedLine]:
    reader = CLineReader(stream, options=options, trace=trace)
    try:
        yield from reader
    except ReaderError as error:
        diagnostic = Diagnostic("strip", filename, str(error), reader.pending_line_number)
        raise FrontendError(diagnostic) from error


def format_line(number: int, text: str, *, line_numbers: bool = True) -> str:
    text = _LINE_END_RE.sub("", text)
    if not line_numbers:
        return text
    return f"{number:05d}: {text}"


def render(
    source: str,
    *,
    filename: str = "<input>",
    options: ReaderOptions | None = None,
    trace: TextIO | None = None,
) -> list[str]:
    options = normalize_options(options)
    return [
        format_line(line.number, line.text, line_numbers=options.line_numbers)
        for line in iter_lines(io.StringIO(source), filename=filename, options=options, trace=trace)
    ]


def read_source(path: str, *, stdin: TextIO | None = None) -> tuple[str, str]:
    if path == "-":
        stream = sys.stdin if stdin is None else stdin
        return "<stdin>", stream.read()
    resolved = Path(path)
    return str(resolved), resolved.read_text(encoding="utf-8")

# Initial processing, modelled on https://gcc.gnu.org/onlinedocs/cpp/Initial-processing.html

import re
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from ctok.lines import LineAssembler

# A backslash and the character after it form one unit; a lone backslash never matches.
ESCAPED_CHAR = r"(?:\\.|[^\\\n])"

_HSPACE = r"[ \t\f\v]*"
_LINE_END = r"(?:\r\n|\n|\r)"

_QUOTE_CHARS = {
    "double quote": '"',
    "single quote": "'",
}


class LexState(Enum):
    DEFAULT = "default"
    CHECK = "check"
    DOUBLE_QUOTE = "dquote"
    SINGLE_QUOTE = "squote"
    COMMENT = "comment"


_QUOTE_STATES = frozenset({LexState.DOUBLE_QUOTE, LexState.SINGLE_QUOTE})


class ReaderError(ValueError):
    pass


class UnterminatedLiteralError(ReaderError):
    def __init__(self, quote: str) -> None:
        super().__init__(f"No matching end {quote}({_QUOTE_CHARS[quote]})")
        self.quote = quote


class GrammarExhaustionError(ReaderError):
    def __init__(self, state: LexState) -> None:
        super().__init__(f"Couldn't find any match in state {state.value}")
        self.state = state


@dataclass(frozen=True)
class GrammarRule:
    pattern: re.Pattern[str] | None = None
    plus: str = ""
    next_state: LexState | None = None
    remain: str | None = None
    fatal: str | None = None


@dataclass(frozen=True)
class Step:
    state: LexState
    output: str
    remaining: str


@dataclass(frozen=True)
class ProcessedLine:
    text: str
    physical_lines: int


def _rule(
    pattern: str | None = None,
    *,
    plus: str = "",
    next_state: LexState | None = None,
    remain: str | None = None,
    fatal: str | None = None,
) -> GrammarRule:
    compiled = None if pattern is None else re.compile(pattern)
    return GrammarRule(compiled, plus, next_state, remain, fatal)


GRAMMAR: dict[LexState, tuple[GrammarRule, ...]] = {
    LexState.DEFAULT: (
        _rule(rf"({ESCAPED_CHAR}*?)(?=[\"'/])", next_state=LexState.CHECK),
        _rule(r"(?s)(.*)"),
    ),
    LexState.CHECK: (
        _rule(r'(")', next_state=LexState.DOUBLE_QUOTE),
        _rule(r"(')", next_state=LexState.SINGLE_QUOTE),
        _rule(rf"{_HSPACE}//[^\r\n]*(?={_LINE_END}?\Z)", next_state=LexState.DEFAULT),
        _rule(rf"{_HSPACE}/\*", plus=" ", next_state=LexState.COMMENT),
        _rule(r"(?s)(\\.|.)", next_state=LexState.DEFAULT),
    ),
    LexState.COMMENT: (
        _rule(rf"{ESCAPED_CHAR}*?\*/{_HSPACE}", next_state=LexState.DEFAULT),
        _rule(remain=""),
    ),
    LexState.DOUBLE_QUOTE: (
        _rule(rf'({ESCAPED_CHAR}*?")', next_state=LexState.DEFAULT),
        _rule(fatal="double quote"),
    ),
    LexState.SINGLE_QUOTE: (
        _rule(rf"({ESCAPED_CHAR}*?')", next_state=LexState.DEFAULT),
        _rule(fatal="single quote"),
    ),
}


def step(state: LexState, text: str) -> Step:
    for rule in GRAMMAR[state]:
        output = ""
        remaining = text
        if rule.pattern is not None:
            match = rule.pattern.match(text)
            if match is None:
                continue
            if rule.pattern.groups:
                output = match.group(1)
            remaining = text[match.end() :]
        if rule.fatal is not None:
            raise UnterminatedLiteralError(rule.fatal)
        if rule.remain is not None:
            remaining = rule.remain
        return Step(rule.next_state or state, output + rule.plus, remaining)
    raise GrammarExhaustionError(state)


class LexicalStripper:
    def __init__(self, stream: TextIO, *, trace: TextIO | None = None) -> None:
        self._lines = LineAssembler(stream)
        self._trace = trace
        self.state = LexState.DEFAULT

    @property
    def physical_lines(self) -> int:
        return self._lines.physical_lines

    def next_line(self) -> ProcessedLine | None:
        output: list[str] = []
        count = 0
        while True:
            logical = self._lines.read()
            if logical is None:
                # Text swallowed by a block comment left open at end of input is dropped.
                return None
            count += logical.physical_lines
            text = logical.text
            while text:
                self._debug(f"state {self.state.value} at '{''.join(output)}' : '{text}'")
                result = step(self.state, text)
                self.state = result.state
                output.append(result.output)
                text = result.remaining
            if self.state in _QUOTE_STATES:
                # A literal opened at the very end of the input has nothing left to close it.
                step(self.state, text)
            if self.state is LexState.DEFAULT:
                break
        line = "".join(output)
        self._debug(f"final line is '{line}'")
        return ProcessedLine(line, count)

    def _debug(self, message: str) -> None:
        if self._trace is not None:
            print(f"DEBUG: {message}", file=self._trace)


def strip_source(stream: TextIO) -> list[ProcessedLine]:
    stripper = LexicalStripper(stream)
    lines: list[ProcessedLine] = []
    while True:
        line = stripper.next_line()
        if line is None:
            return lines
        lines.append(line)

# Tokenization, modelled on https://gcc.gnu.org/onlinedocs/cpp/Tokenization.html

import re
from dataclasses import dataclass
from enum import Enum, auto

from ctok.stripper import ESCAPED_CHAR

OPERATORS: tuple[str, ...] = (
    "++",
    "--",
    "->",
    "<<",
    ">>",
    "<=",
    ">=",
    "==",
    "!=",
    "&&",
    "||",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "<<=",
    ">>=",
    "&=",
    "^=",
    "|=",
    "##",
)

OPERATORS_SORTED: tuple[str, ...] = tuple(sorted(OPERATORS, key=len, reverse=True))


class TokenKind(Enum):
    INDENT = auto()
    HEADER_NAME = auto()
    IDENT = auto()
    PP_NUMBER = auto()
    STRING_LITERAL = auto()
    CHAR_CONST = auto()
    OPERATOR = auto()
    PUNCTUATOR = auto()
    NEWLINE = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str


_H = r"[ \t\f\v]*"
_HSPACE_RE = re.compile(_H)
_LINE_END_RE = re.compile(rf"{_H}(\r\n|\n|\r)")
_LAYOUT_KINDS = frozenset({TokenKind.INDENT, TokenKind.NEWLINE})

# Tried in order; the first pattern that matches wins.
_TOKEN_RULES: tuple[tuple[tuple[TokenKind, ...], re.Pattern[str]], ...] = (
    # Header names hold characters that would otherwise split, e.g. "/" and ".".
    (
        (TokenKind.PUNCTUATOR, TokenKind.IDENT, TokenKind.HEADER_NAME),
        re.compile(rf"{_H}(#){_H}(include){_H}(<[^>\r\n]*>){_H}(?=(?:\r\n|\n|\r)?\Z)"),
    ),
    # "$" is accepted, as VMS identifiers may contain it.
    ((TokenKind.IDENT,), re.compile(rf"{_H}((?:[^\W\d]|\$)(?:\w|\$)*){_H}")),
    ((TokenKind.PP_NUMBER,), re.compile(rf"{_H}(\.?[0-9](?:[eEpP][-+]|\w|\.)*){_H}")),
    ((TokenKind.STRING_LITERAL,), re.compile(rf'{_H}("{ESCAPED_CHAR}*?"){_H}')),
    ((TokenKind.CHAR_CONST,), re.compile(rf"{_H}('{ESCAPED_CHAR}*?'){_H}")),
    (
        (TokenKind.OPERATOR,),
        re.compile(rf"{_H}({'|'.join(re.escape(op) for op in OPERATORS_SORTED)}){_H}"),
    ),
    ((TokenKind.PUNCTUATOR,), re.compile(rf"(?s){_H}(.){_H}")),
)


def split_tokens(line: str, *, keep_indent: bool = False) -> list[Token]:
    tokens: list[Token] = []
    indent = _HSPACE_RE.match(line)
    if keep_indent and indent is not None and indent.group(0):
        tokens.append(Token(TokenKind.INDENT, indent.group(0)))
    rest = line
    while rest:
        end = _LINE_END_RE.fullmatch(rest)
        if end is not None:
            tokens.append(Token(TokenKind.NEWLINE, end.group(1)))
            break
        if _HSPACE_RE.fullmatch(rest):
            break
        for kinds, pattern in _TOKEN_RULES:
            match = pattern.match(rest)
            if match is None:
                continue
            tokens.extend(Token(kind, text) for kind, text in zip(kinds, match.groups()))
            rest = rest[match.end() :]
            break
    return tokens


def tokenize(line: str, *, keep_indent: bool = False) -> str:
    tokens = split_tokens(line, keep_indent=keep_indent)
    if all(token.kind in _LAYOUT_KINDS for token in tokens):
        return ""
    words = [token.text for token in tokens if token.kind is not TokenKind.NEWLINE]
    newline = tokens[-1].text if tokens[-1].kind is TokenKind.NEWLINE else ""
    return " ".join(words) + newline

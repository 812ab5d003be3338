import unittest

from tests import _bootstrap  # noqa: F401
from ctok.tokenizer import OPERATORS, OPERATORS_SORTED, Token, TokenKind, split_tokens, tokenize


class TokenizeTests(unittest.TestCase):
    def test_simple_statement(self) -> None:
        self.assertEqual(tokenize("int x = 5; \n"), "int x = 5 ;\n")

    def test_tokens_are_single_space_separated(self) -> None:
        self.assertEqual(tokenize("a  b\t\tc   \n"), "a b c\n")
        self.assertEqual(tokenize("f(a,b);\n"), "f ( a , b ) ;\n")

    def test_line_without_terminator(self) -> None:
        self.assertEqual(tokenize("a b"), "a b")
        self.assertEqual(tokenize("a b  "), "a b")

    def test_string_literal_is_one_token(self) -> None:
        self.assertEqual(tokenize('x = "a//b";\n'), 'x = "a//b" ;\n')
        self.assertEqual(tokenize('s="a  \\" b";\n'), 's = "a  \\" b" ;\n')

    def test_char_literal_is_one_token(self) -> None:
        self.assertEqual(tokenize("c='\\'';\n"), "c = '\\'' ;\n")

    def test_include_directive(self) -> None:
        self.assertEqual(
            split_tokens("#include <foo/bar.h>\n"),
            [
                Token(TokenKind.PUNCTUATOR, "#"),
                Token(TokenKind.IDENT, "include"),
                Token(TokenKind.HEADER_NAME, "<foo/bar.h>"),
                Token(TokenKind.NEWLINE, "\n"),
            ],
        )
        self.assertEqual(tokenize("  #  include\t<sys/types.h>  \n"), "# include <sys/types.h>\n")

    def test_include_must_exhaust_line(self) -> None:
        self.assertEqual(tokenize("#include <a.h> x\n"), "# include < a . h > x\n")

    def test_quoted_include(self) -> None:
        self.assertEqual(tokenize('#include "foo/bar.h"\n'), '# include "foo/bar.h"\n')

    def test_multi_character_operators(self) -> None:
        cases = {
            "a<<=b\n": "a <<= b\n",
            "a>>=b\n": "a >>= b\n",
            "p->q\n": "p -> q\n",
            "x+++y\n": "x ++ + y\n",
            "a&&b||c\n": "a && b || c\n",
            "a##b\n": "a ## b\n",
            "x=-1\n": "x = - 1\n",
            "a!=b\n": "a != b\n",
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                self.assertEqual(tokenize(source), expected)

    def test_operators_sorted_longest_first(self) -> None:
        self.assertEqual(set(OPERATORS_SORTED), set(OPERATORS))
        self.assertEqual(OPERATORS_SORTED[:2], ("<<=", ">>="))

    def test_identifiers(self) -> None:
        tokens = split_tokens("$var _x1 été\n")
        self.assertEqual(
            [t.text for t in tokens if t.kind == TokenKind.IDENT], ["$var", "_x1", "été"]
        )

    def test_pp_numbers(self) -> None:
        tokens = split_tokens("1e+5 0x1p-3 .5f 1.2.3 1abc 7E-2\n")
        numbers = [t.text for t in tokens if t.kind == TokenKind.PP_NUMBER]
        self.assertEqual(numbers, ["1e+5", "0x1p-3", ".5f", "1.2.3", "1abc", "7E-2"])

    def test_member_access_is_not_a_number(self) -> None:
        self.assertEqual(tokenize("a.b\n"), "a . b\n")

    def test_token_kinds(self) -> None:
        kinds = [t.kind for t in split_tokens("x += 'c' + \"s\";\n")]
        self.assertEqual(
            kinds,
            [
                TokenKind.IDENT,
                TokenKind.OPERATOR,
                TokenKind.CHAR_CONST,
                TokenKind.PUNCTUATOR,
                TokenKind.STRING_LITERAL,
                TokenKind.PUNCTUATOR,
                TokenKind.NEWLINE,
            ],
        )

    def test_blank_lines(self) -> None:
        for line in ("\n", "   \t\n", "", "  ", "\r\n"):
            with self.subTest(line=line):
                self.assertEqual(tokenize(line), "")
                self.assertEqual(tokenize(line, keep_indent=True), "")

    def test_indentation(self) -> None:
        self.assertEqual(tokenize("    return 0;\n"), "return 0 ;\n")
        self.assertEqual(tokenize("    return 0;\n", keep_indent=True), "     return 0 ;\n")
        self.assertEqual(split_tokens("\tx\n", keep_indent=True)[0], Token(TokenKind.INDENT, "\t"))

    def test_crlf_terminator(self) -> None:
        self.assertEqual(tokenize("a = b;  \r\n"), "a = b ;\r\n")


if __name__ == "__main__":
    unittest.main()

"""Tests for the Ember tokenizer.

Covers:
- Token kinds for every structural character
- Identifiers and number literals (greedy longest match)
- Lexical errors: unknown symbols, malformed numbers
- Token equality and payload accessors
"""

from __future__ import annotations

import pytest

from ember.core.errors import LexError, MalformedNumber, TokenPayloadError, UnknownSymbol
from ember.core.lang.tokenizer import Lexer, Token, TokenKind, tokenize


class TestTokenizer:
    """Tokenizer produces correct token sequences."""

    def test_structural_tokens(self) -> None:
        tokens = tokenize("{ } ; = + - * / ( )")
        assert [t.kind for t in tokens] == [
            TokenKind.BEGIN,
            TokenKind.END,
            TokenKind.SEMICOLON,
            TokenKind.ASSIGN,
            TokenKind.ADD,
            TokenKind.SUB,
            TokenKind.MUL,
            TokenKind.DIV,
            TokenKind.LPAR,
            TokenKind.RPAR,
            TokenKind.EOF,
        ]

    def test_integer_is_float(self) -> None:
        tok = tokenize("42")[0]
        assert tok.kind == TokenKind.NUMBER
        assert tok.value == 42.0
        assert isinstance(tok.value, float)

    def test_float(self) -> None:
        tok = tokenize("94.40")[0]
        assert tok == Token.number(94.4)

    def test_leading_dot(self) -> None:
        assert tokenize(".88")[0] == Token.number(0.88)

    def test_trailing_dot(self) -> None:
        assert tokenize("3.")[0] == Token.number(3.0)

    def test_identifier(self) -> None:
        tok = tokenize("text84_yes")[0]
        assert tok.kind == TokenKind.IDENTIFIER
        assert tok.value == "text84_yes"

    def test_identifier_leading_underscore(self) -> None:
        assert tokenize("_tmp")[0] == Token.identifier("_tmp")

    def test_identifier_is_greedy(self) -> None:
        tokens = tokenize("abc1+x")
        assert tokens[:3] == [Token.identifier("abc1"), Token.basic(TokenKind.ADD), Token.identifier("x")]

    def test_number_then_identifier(self) -> None:
        # Digits never start an identifier
        assert tokenize("12ab")[:2] == [Token.number(12), Token.identifier("ab")]

    def test_empty_source(self) -> None:
        assert tokenize("") == [Token.basic(TokenKind.EOF)]

    def test_whitespace_only(self) -> None:
        assert tokenize(" \t\n\r ") == [Token.basic(TokenKind.EOF)]

    def test_mixed_expression(self) -> None:
        expected = [
            Token.identifier("identifier"),
            Token.basic(TokenKind.ADD),
            Token.number(1234),
            Token.basic(TokenKind.LPAR),
            Token.identifier("text84_yes"),
            Token.basic(TokenKind.DIV),
            Token.number(94.40),
            Token.basic(TokenKind.RPAR),
            Token.basic(TokenKind.ADD),
            Token.number(0.88),
            Token.basic(TokenKind.EOF),
        ]
        assert tokenize("   identifier +   1234 (   text84_yes/94.40 ) + .88   ") == expected

    def test_program(self) -> None:
        expected = [
            Token.basic(TokenKind.BEGIN),
            Token.identifier("x"),
            Token.basic(TokenKind.ASSIGN),
            Token.number(23),
            Token.basic(TokenKind.ADD),
            Token.number(4),
            Token.basic(TokenKind.SEMICOLON),
            Token.identifier("y"),
            Token.basic(TokenKind.ASSIGN),
            Token.identifier("x"),
            Token.basic(TokenKind.DIV),
            Token.number(2),
            Token.basic(TokenKind.SEMICOLON),
            Token.basic(TokenKind.END),
            Token.basic(TokenKind.EOF),
        ]
        assert tokenize("{ x = 23 + 4; y = x / 2; }") == expected

    def test_positions(self) -> None:
        tokens = tokenize("ab + 7")
        assert [t.pos for t in tokens] == [0, 3, 5, 6]


class TestLexer:
    """Lexer is pulled one token at a time."""

    def test_next_token_is_lazy(self) -> None:
        # The bad symbol is only reached on the third pull
        lexer = Lexer("x = @")
        assert lexer.next_token() == Token.identifier("x")
        assert lexer.next_token() == Token.basic(TokenKind.ASSIGN)
        with pytest.raises(UnknownSymbol):
            lexer.next_token()

    def test_eof_repeats(self) -> None:
        lexer = Lexer("1")
        lexer.next_token()
        assert lexer.next_token().kind == TokenKind.EOF
        assert lexer.next_token().kind == TokenKind.EOF

    def test_iteration_stops_after_eof(self) -> None:
        kinds = [t.kind for t in Lexer("a*b")]
        assert kinds == [TokenKind.IDENTIFIER, TokenKind.MUL, TokenKind.IDENTIFIER, TokenKind.EOF]


class TestLexErrors:
    """Lexical failures surface the right error type."""

    def test_unknown_symbol(self) -> None:
        with pytest.raises(UnknownSymbol, match="Unknown symbol") as exc_info:
            tokenize("@")
        assert exc_info.value.symbol == "@"

    def test_unknown_symbol_location(self) -> None:
        with pytest.raises(UnknownSymbol) as exc_info:
            tokenize("{ x = 1;\n  y = 2 # 3 }")
        ctx = exc_info.value.context
        assert ctx is not None
        assert (ctx.line, ctx.column) == (2, 9)
        assert ctx.snippet == "  y = 2 # 3 }"

    def test_malformed_number(self) -> None:
        with pytest.raises(MalformedNumber) as exc_info:
            tokenize("1.2.3")
        assert exc_info.value.text == "1.2.3"

    def test_lone_dot(self) -> None:
        with pytest.raises(MalformedNumber):
            tokenize(".")

    def test_errors_share_base(self) -> None:
        for source in ("$", "4..2"):
            with pytest.raises(LexError):
                tokenize(source)


class TestToken:
    """Token equality, payloads and rendering."""

    def test_equality_ignores_position(self) -> None:
        assert Token.number(42, pos=0) == Token.number(42, pos=9)

    def test_number_inequality(self) -> None:
        assert Token.number(69) != Token.number(420)

    def test_identifier_equality(self) -> None:
        assert Token.identifier("hello world!") == Token.identifier("hello world!")
        assert Token.identifier("hello world!") != Token.identifier("xyz")

    def test_basic_equality(self) -> None:
        assert Token.basic(TokenKind.MUL) == Token.basic(TokenKind.MUL)
        assert Token.basic(TokenKind.MUL) != Token.basic(TokenKind.ADD)

    def test_get_number(self) -> None:
        assert Token.number(42).get_number() == 42.0

    def test_get_number_wrong_kind(self) -> None:
        with pytest.raises(TokenPayloadError):
            Token.identifier("x").get_number()

    def test_get_identifier_wrong_kind(self) -> None:
        with pytest.raises(TokenPayloadError):
            Token.number(1).get_identifier()

    def test_basic_rejects_payload_kinds(self) -> None:
        with pytest.raises(TokenPayloadError):
            Token.basic(TokenKind.NUMBER)

    def test_copy_is_equal_and_distinct(self) -> None:
        tok = Token.identifier("name", pos=4)
        dup = tok.copy()
        assert dup == tok
        assert dup is not tok
        assert dup.pos == 4

    def test_str(self) -> None:
        assert str(Token.number(42)) == "Token(number, 42)"
        assert str(Token.number(0.5)) == "Token(number, 0.5)"
        assert str(Token.identifier("x")) == "Token(identifier, x)"
        assert str(Token.basic(TokenKind.ADD)) == "Token(add, null)"

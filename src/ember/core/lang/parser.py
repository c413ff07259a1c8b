"""
Recursive descent parser for the Ember language.

Grammar (precedence low to high):
    program     → block EOF
    block       → "{" statement (";" statement)* "}"
    statement   → assignment | block | ε
    assignment  → IDENT "=" expr
    expr        → term (("+" | "-") term)*
    term        → factor (("*" | "/") factor)*
    factor      → ("+" | "-") factor | NUMBER | IDENT | "(" expr ")"

The parser keeps exactly one token of lookahead and pulls the next token
from the lexer only when the current one is eaten. It never recovers from
a mismatch. Nesting deeper than the Python stack allows fails with
``NestingTooDeep``.
"""

from __future__ import annotations

import logging
from typing import NoReturn

from ember.core.errors import NestingTooDeep, UnexpectedToken, context_at
from ember.core.ir.nodes import Assign, BinOp, Block, Node, NoOp, Number, UnaryOp, Variable
from ember.core.lang.tokenizer import Lexer, Token, TokenKind

logger = logging.getLogger(__name__)

_ADDITIVE = (TokenKind.ADD, TokenKind.SUB)
_MULTIPLICATIVE = (TokenKind.MUL, TokenKind.DIV)
_FACTOR_START = (
    TokenKind.ADD,
    TokenKind.SUB,
    TokenKind.NUMBER,
    TokenKind.IDENTIFIER,
    TokenKind.LPAR,
)


class Parser:
    """Recursive descent parser over a lazily pulled token stream."""

    def __init__(self, source: str, file: str | None = None) -> None:
        self.source = source
        self.file = file
        self.lexer = Lexer(source, file)
        self._current: Token | None = None

    @property
    def current(self) -> Token:
        if self._current is None:
            self._current = self.lexer.next_token()
        return self._current

    def eat(self, kind: TokenKind) -> Token:
        """Consume the current token if it is ``kind``, else fail."""
        tok = self.current
        if tok.kind != kind:
            self._fail(kind)
        self._current = self.lexer.next_token()
        return tok

    def _fail(self, expected: TokenKind | tuple[TokenKind, ...]) -> NoReturn:
        tok = self.current
        raise UnexpectedToken(expected, tok.kind, context_at(self.source, tok.pos, self.file))

    def _too_deep(self) -> NestingTooDeep:
        pos = self._current.pos if self._current is not None else self.lexer.pos
        return NestingTooDeep(context_at(self.source, pos, self.file))

    # -- Entry points --

    def parse(self) -> Block:
        """program → block EOF"""
        try:
            root = self.parse_block()
        except RecursionError:
            raise self._too_deep() from None
        self.eat(TokenKind.EOF)
        logger.debug("Parsed program with %d top-level statements", len(root.children))
        return root

    def parse_expression(self) -> Node:
        """A single expression followed by EOF."""
        try:
            node = self.parse_expr()
        except RecursionError:
            raise self._too_deep() from None
        self.eat(TokenKind.EOF)
        return node

    # -- Grammar rules --

    def parse_block(self) -> Block:
        """'{' statement (';' statement)* '}'"""
        begin = self.eat(TokenKind.BEGIN)
        children = [self.parse_statement()]
        while self.current.kind == TokenKind.SEMICOLON:
            self.eat(TokenKind.SEMICOLON)
            children.append(self.parse_statement())
        self.eat(TokenKind.END)
        return Block(token=begin, children=children)

    def parse_statement(self) -> Node:
        """assignment | block | ε"""
        if self.current.kind == TokenKind.IDENTIFIER:
            return self.parse_assignment()
        if self.current.kind == TokenKind.BEGIN:
            return self.parse_block()
        return NoOp()

    def parse_assignment(self) -> Assign:
        """IDENT '=' expr"""
        target = Variable(token=self.eat(TokenKind.IDENTIFIER))
        assign = self.eat(TokenKind.ASSIGN)
        value = self.parse_expr()
        return Assign(token=assign, left=target, right=value)

    def parse_expr(self) -> Node:
        """term (('+' | '-') term)*"""
        node = self.parse_term()
        while self.current.kind in _ADDITIVE:
            op = self.eat(self.current.kind)
            node = BinOp(token=op, left=node, right=self.parse_term())
        return node

    def parse_term(self) -> Node:
        """factor (('*' | '/') factor)*"""
        node = self.parse_factor()
        while self.current.kind in _MULTIPLICATIVE:
            op = self.eat(self.current.kind)
            node = BinOp(token=op, left=node, right=self.parse_factor())
        return node

    def parse_factor(self) -> Node:
        """('+' | '-') factor | NUMBER | IDENT | '(' expr ')'"""
        tok = self.current

        if tok.kind in _ADDITIVE:
            self.eat(tok.kind)
            return UnaryOp(token=tok, operand=self.parse_factor())

        if tok.kind == TokenKind.NUMBER:
            return Number(token=self.eat(TokenKind.NUMBER))

        if tok.kind == TokenKind.IDENTIFIER:
            return Variable(token=self.eat(TokenKind.IDENTIFIER))

        if tok.kind == TokenKind.LPAR:
            self.eat(TokenKind.LPAR)
            node = self.parse_expr()
            self.eat(TokenKind.RPAR)
            return node

        self._fail(_FACTOR_START)


def parse(source: str, file: str | None = None) -> Block:
    """Parse a program into its root Block.

    Args:
        source: Program text (e.g., "{ x = 1; result = x + 1 }")
        file: Optional source name used in error locations

    Returns:
        Root Block of the program.

    Raises:
        UnexpectedToken: If the token stream does not match the grammar.
        LexError: If tokenization fails.
    """
    return Parser(source, file).parse()


def parse_expr(source: str) -> Node:
    """Parse a single expression (e.g., "2 + 7 * 3") into an AST."""
    return Parser(source).parse_expression()

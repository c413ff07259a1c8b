"""
AST node types for the Ember language.

The node set is closed: Number, Variable, BinOp, UnaryOp, Assign, Block and
NoOp. Every node keeps the token it was built from and validates that token
on construction, so a node built from the wrong kind of token fails with
``BadTokenForNodeType`` instead of producing a tree the interpreter cannot
walk.

Nodes are frozen; a parent owns its children. ``clone()`` gives a fully
independent deep copy.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ember.core.errors import BadTokenForNodeType, InvalidAssignmentTarget
from ember.core.lang.tokenizer import Token, TokenKind, format_number

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOperator(StrEnum):
    """Binary arithmetic operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


class UnaryOperator(StrEnum):
    """Unary sign operators."""

    PLUS = "+"
    NEG = "-"


_BINARY_OPS: dict[TokenKind, BinaryOperator] = {
    TokenKind.ADD: BinaryOperator.ADD,
    TokenKind.SUB: BinaryOperator.SUB,
    TokenKind.MUL: BinaryOperator.MUL,
    TokenKind.DIV: BinaryOperator.DIV,
}

_UNARY_OPS: dict[TokenKind, UnaryOperator] = {
    TokenKind.ADD: UnaryOperator.PLUS,
    TokenKind.SUB: UnaryOperator.NEG,
}

_NODE_CONFIG = ConfigDict(frozen=True, arbitrary_types_allowed=True)


def _require(node_type: str, token: Token, *kinds: TokenKind) -> None:
    if token.kind not in kinds:
        raise BadTokenForNodeType(node_type, token.kind)


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Number(BaseModel):
    """A numeric literal."""

    token: Token = Field(description="NUMBER token holding the literal")

    model_config = _NODE_CONFIG

    @model_validator(mode="after")
    def _check_token(self) -> Self:
        _require("Number", self.token, TokenKind.NUMBER)
        return self

    @property
    def value(self) -> float:
        return self.token.get_number()

    def __str__(self) -> str:
        return format_number(self.value)


class Variable(BaseModel):
    """A reference to a variable; the identifier text is its name."""

    token: Token = Field(description="IDENTIFIER token naming the variable")

    model_config = _NODE_CONFIG

    @model_validator(mode="after")
    def _check_token(self) -> Self:
        _require("Variable", self.token, TokenKind.IDENTIFIER)
        return self

    @property
    def name(self) -> str:
        return self.token.get_identifier()

    def __str__(self) -> str:
        return self.name


class BinOp(BaseModel):
    """Binary operation: left op right."""

    token: Token = Field(description="Operator token (add, sub, mul or div)")
    left: Node
    right: Node

    model_config = _NODE_CONFIG

    @model_validator(mode="after")
    def _check_token(self) -> Self:
        _require("BinOp", self.token, *_BINARY_OPS)
        return self

    @property
    def op(self) -> BinaryOperator:
        return _BINARY_OPS[self.token.kind]

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


class UnaryOp(BaseModel):
    """Unary sign applied to a single operand."""

    token: Token = Field(description="Sign token (add or sub)")
    operand: Node

    model_config = _NODE_CONFIG

    @model_validator(mode="after")
    def _check_token(self) -> Self:
        _require("UnaryOp", self.token, *_UNARY_OPS)
        return self

    @property
    def op(self) -> UnaryOperator:
        return _UNARY_OPS[self.token.kind]

    def __str__(self) -> str:
        return f"{self.op.value}{self.operand}"


class Assign(BaseModel):
    """Assignment statement: variable = expression."""

    token: Token = Field(description="ASSIGN token")
    left: Node = Field(description="Target; always a Variable")
    right: Node = Field(description="Value expression")

    model_config = _NODE_CONFIG

    @model_validator(mode="after")
    def _check_token(self) -> Self:
        _require("Assign", self.token, TokenKind.ASSIGN)
        if not isinstance(self.left, Variable):
            raise InvalidAssignmentTarget(type(self.left).__name__)
        return self

    @property
    def target(self) -> str:
        assert isinstance(self.left, Variable)
        return self.left.name

    def __str__(self) -> str:
        return f"{self.left} = {self.right}"


class Block(BaseModel):
    """
    Sequence of statements delimited by braces.

    Children are evaluated in list order.
    """

    token: Token = Field(description="BEGIN token")
    children: list[Node] = Field(default_factory=list, description="Statements in order")

    model_config = _NODE_CONFIG

    @model_validator(mode="after")
    def _check_token(self) -> Self:
        _require("Block", self.token, TokenKind.BEGIN)
        return self

    def __str__(self) -> str:
        return "{ " + "; ".join(str(c) for c in self.children) + " }"


class NoOp(BaseModel):
    """The empty statement."""

    model_config = _NODE_CONFIG

    def __str__(self) -> str:
        return ""


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Node = Number | Variable | BinOp | UnaryOp | Assign | Block | NoOp

# Rebuild models for recursive forward references
BinOp.model_rebuild()
UnaryOp.model_rebuild()
Assign.model_rebuild()
Block.model_rebuild()


# ---------------------------------------------------------------------------
# Tree operations
# ---------------------------------------------------------------------------


def clone(node: Node) -> Node:
    """Return a structurally independent deep copy of ``node``."""
    return node.model_copy(deep=True)


def dump(node: Node, indent: int = 0) -> str:
    """
    Render ``node`` as an indented tree, one node per line.

    Example:
        >>> print(dump(parse_expr("2 + 7 * 3")))
        BinOp(+)
          Number(2)
          BinOp(*)
            Number(7)
            Number(3)
    """
    lines: list[str] = []
    _dump_into(node, indent, lines)
    return "\n".join(lines)


def _dump_into(node: Node, depth: int, lines: list[str]) -> None:
    pad = "  " * depth
    if isinstance(node, Number):
        lines.append(f"{pad}Number({node})")
    elif isinstance(node, Variable):
        lines.append(f"{pad}Variable({node.name})")
    elif isinstance(node, BinOp):
        lines.append(f"{pad}BinOp({node.op.value})")
        _dump_into(node.left, depth + 1, lines)
        _dump_into(node.right, depth + 1, lines)
    elif isinstance(node, UnaryOp):
        lines.append(f"{pad}UnaryOp({node.op.value})")
        _dump_into(node.operand, depth + 1, lines)
    elif isinstance(node, Assign):
        lines.append(f"{pad}Assign")
        _dump_into(node.left, depth + 1, lines)
        _dump_into(node.right, depth + 1, lines)
    elif isinstance(node, Block):
        lines.append(f"{pad}Block")
        for child in node.children:
            _dump_into(child, depth + 1, lines)
    else:
        lines.append(f"{pad}NoOp")

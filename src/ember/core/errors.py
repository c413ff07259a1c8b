"""
Error types for Ember lexing, parsing, AST construction and evaluation.

Every failure raised by the core derives from ``EmberError``. A failure
aborts the whole interpretation; nothing in the core catches these.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class EmberError(Exception):
    """Base exception for all Ember errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


# ---------------------------------------------------------------------------
# Lexical
# ---------------------------------------------------------------------------


class LexError(EmberError):
    """
    Raised when source text cannot be split into tokens.

    Examples:
    - Unrecognized character
    - Number literal with more than one '.'
    """

    pass


class UnknownSymbol(LexError):
    def __init__(self, symbol: str, context: ErrorContext | None = None):
        self.symbol = symbol
        super().__init__(f"Unknown symbol: {symbol!r}", context)


class MalformedNumber(LexError):
    def __init__(self, text: str, context: ErrorContext | None = None):
        self.text = text
        super().__init__(f"Malformed number literal: {text!r}", context)


# ---------------------------------------------------------------------------
# Syntactic
# ---------------------------------------------------------------------------


class ParseError(EmberError):
    """
    Raised when the token stream does not match the grammar.

    The parser never recovers: the first mismatch aborts the parse.
    """

    pass


class UnexpectedToken(ParseError):
    def __init__(self, expected: Any, actual: Any, context: ErrorContext | None = None):
        self.expected = expected
        self.actual = actual
        if isinstance(expected, tuple):
            wanted = "one of " + ", ".join(str(e) for e in expected)
        else:
            wanted = str(expected)
        super().__init__(f"Expected {wanted}, got {actual}", context)


class NestingTooDeep(ParseError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Expression nesting is too deep", context)


# ---------------------------------------------------------------------------
# AST construction
# ---------------------------------------------------------------------------


class NodeConstructionError(EmberError):
    """
    Raised when an AST factory receives input it cannot build a node from.

    Under correct parsing this never happens; seeing one means the parser
    and the AST factories disagree.
    """

    pass


class BadTokenForNodeType(NodeConstructionError):
    def __init__(self, node_type: str, token_kind: Any):
        self.node_type = node_type
        self.token_kind = token_kind
        super().__init__(f"Cannot build {node_type} node from {token_kind} token")


class InvalidAssignmentTarget(NodeConstructionError):
    def __init__(self, node_type: str):
        self.node_type = node_type
        super().__init__(f"Assignment target must be a Variable, got {node_type}")


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


class EvaluationError(EmberError):
    """Raised when a well-formed tree cannot be evaluated."""

    pass


class VariableDoesNotExist(EvaluationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Variable does not exist: {name}")


class UnexpectedStatement(EvaluationError):
    def __init__(self, node_type: str):
        self.node_type = node_type
        super().__init__(f"{node_type} is not a statement")


class UnexpectedNode(EvaluationError):
    def __init__(self, node_type: str):
        self.node_type = node_type
        super().__init__(f"{node_type} is not an expression")


class EvaluationTooDeep(EvaluationError):
    def __init__(self) -> None:
        super().__init__("Tree nesting is too deep to evaluate")


# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------


class TokenPayloadError(EmberError):
    """Raised when a payload accessor is called on a token of another kind."""

    pass


class ConfigError(EmberError):
    """Raised when ember.toml cannot be loaded."""

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line showing the error location
        file: Optional name of the source the error occurred in
    """

    line: int
    column: int
    snippet: str | None = None
    file: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "prog.em:3:7"
        """
        location = f"{self.file or '<source>'}:{self.line}:{self.column}"
        if self.snippet is not None:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format the source line with its line number and an error marker."""
        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^"
        return f"{prefix}{self.snippet}\n{marker}"


def context_at(source: str, pos: int, file: str | None = None) -> ErrorContext:
    """
    Build an ErrorContext for a 0-based offset into ``source``.

    Args:
        source: Full source text
        pos: Offset of the offending character
        file: Optional source name

    Returns:
        ErrorContext with 1-indexed line/column and the offending line
    """
    pos = max(0, min(pos, len(source)))
    line_start = source.rfind("\n", 0, pos) + 1
    line_end = source.find("\n", pos)
    if line_end == -1:
        line_end = len(source)
    line = source.count("\n", 0, pos) + 1
    column = pos - line_start + 1
    return ErrorContext(line=line, column=column, snippet=source[line_start:line_end], file=file)

"""
Ember - a small imperative expression language.

Source text is tokenized, parsed by a recursive-descent parser into an
AST and evaluated by a tree-walking interpreter.

Usage:
    from ember import interpret

    interpret("{ x = 12 / 8; y = x - 4; result = (x + y) * 12 - 8 }")
    # -20.0
"""

from __future__ import annotations

from ember._version import get_version
from ember.core.errors import (
    EmberError,
    EvaluationError,
    LexError,
    NodeConstructionError,
    ParseError,
)
from ember.core.lang.interpreter import (
    Environment,
    Interpreter,
    evaluate,
    evaluate_expression,
    interpret,
)
from ember.core.lang.parser import parse, parse_expr
from ember.core.lang.tokenizer import tokenize

__version__ = get_version()

__all__ = [
    "__version__",
    "Environment",
    "Interpreter",
    "evaluate",
    "evaluate_expression",
    "interpret",
    "parse",
    "parse_expr",
    "tokenize",
    "EmberError",
    "LexError",
    "ParseError",
    "NodeConstructionError",
    "EvaluationError",
]

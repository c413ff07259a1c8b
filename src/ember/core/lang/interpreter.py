"""
Tree-walking interpreter for the Ember language.

Evaluates a parsed program against a single flat Environment. Pure
evaluation: no I/O, and nothing survives an ``interpret()`` call except its
result and the inspectable environment of the last run.
"""

from __future__ import annotations

import logging
import math

from ember.core.errors import (
    EvaluationTooDeep,
    UnexpectedNode,
    UnexpectedStatement,
    VariableDoesNotExist,
)
from ember.core.ir.nodes import (
    Assign,
    BinaryOperator,
    BinOp,
    Block,
    Node,
    NoOp,
    Number,
    UnaryOp,
    UnaryOperator,
    Variable,
)
from ember.core.lang.parser import parse, parse_expr

logger = logging.getLogger(__name__)

DEFAULT_RESULT_VARIABLE = "result"


class Environment:
    """Flat mapping of variable name to its most recently assigned value."""

    def __init__(self) -> None:
        self._values: dict[str, float] = {}

    def assign(self, name: str, value: float) -> None:
        self._values[name] = value

    def lookup(self, name: str) -> float:
        try:
            return self._values[name]
        except KeyError:
            raise VariableDoesNotExist(name) from None

    def get(self, name: str) -> float | None:
        return self._values.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def as_dict(self) -> dict[str, float]:
        return dict(self._values)

    def __repr__(self) -> str:
        return f"Environment({self._values!r})"


def evaluate(node: Node, env: Environment | None = None) -> float:
    """Evaluate an expression node.

    Args:
        node: Expression AST (Number, Variable, BinOp or UnaryOp).
        env: Variables visible to the expression; empty if omitted.

    Returns:
        The computed value.

    Raises:
        VariableDoesNotExist: If a referenced variable was never assigned.
        EvaluationTooDeep: If the tree is nested deeper than the stack allows.
        UnexpectedNode: If a statement node appears inside the expression.
    """
    try:
        return _value_of(node, env if env is not None else Environment())
    except RecursionError:
        raise EvaluationTooDeep() from None


def _value_of(node: Node, env: Environment) -> float:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(node, Number):
        return node.value

    if isinstance(node, Variable):
        return env.lookup(node.name)

    if isinstance(node, BinOp):
        return _value_of_binary(node, env)

    if isinstance(node, UnaryOp):
        operand = _value_of(node.operand, env)
        return -operand if node.op == UnaryOperator.NEG else operand

    raise UnexpectedNode(type(node).__name__)


def _value_of_binary(node: BinOp, env: Environment) -> float:
    left = _value_of(node.left, env)
    right = _value_of(node.right, env)

    if node.op == BinaryOperator.ADD:
        return left + right
    if node.op == BinaryOperator.SUB:
        return left - right
    if node.op == BinaryOperator.MUL:
        return left * right
    return _divide(left, right)


def _divide(left: float, right: float) -> float:
    """Divide with IEEE 754 results for a zero divisor (inf, -inf or nan)."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


class Interpreter:
    """
    Runs programs, one fresh Environment per ``interpret()`` or ``run()`` call.

    The environment of the most recent successful run stays available as
    ``environment`` for inspection; a failed run leaves it untouched.
    """

    def __init__(self, result_variable: str = DEFAULT_RESULT_VARIABLE) -> None:
        self.result_variable = result_variable
        self.environment = Environment()

    def interpret(self, source: str, file: str | None = None) -> float | None:
        """Parse and run ``source``; return the final value of the result variable."""
        return self.run(parse(source, file))

    def run(self, root: Block) -> float | None:
        """Run an already parsed program in a fresh Environment."""
        env = Environment()
        try:
            self.execute(root, env)
        except RecursionError:
            raise EvaluationTooDeep() from None
        self.environment = env
        value = env.get(self.result_variable)
        logger.debug("%s = %s", self.result_variable, value)
        return value

    def execute(self, node: Node, env: Environment) -> None:
        """Run one statement against ``env``."""
        if isinstance(node, Block):
            for child in node.children:
                self.execute(child, env)
            return

        if isinstance(node, Assign):
            value = _value_of(node.right, env)
            env.assign(node.target, value)
            logger.debug("assign %s = %r", node.target, value)
            return

        if isinstance(node, NoOp):
            return

        raise UnexpectedStatement(type(node).__name__)


def interpret(source: str, result_variable: str = DEFAULT_RESULT_VARIABLE) -> float | None:
    """Run a program and report the value bound to ``result_variable``.

    Args:
        source: Program text, e.g. "{ x = 12 / 8; result = x * 2 }"
        result_variable: Variable whose final value is returned

    Returns:
        The variable's final value, or None if it was never assigned.

    Raises:
        EmberError: Any lexing, parsing or evaluation failure.
    """
    return Interpreter(result_variable).interpret(source)


def evaluate_expression(source: str) -> float:
    """Parse and evaluate a single expression with no variables bound."""
    return evaluate(parse_expr(source))

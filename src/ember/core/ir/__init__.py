"""
Ember intermediate representation: the abstract syntax tree.

Usage:
    from ember.core.ir import BinOp, Number, clone, dump
"""

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
    clone,
    dump,
)

__all__ = [
    "Assign",
    "BinOp",
    "BinaryOperator",
    "Block",
    "Node",
    "NoOp",
    "Number",
    "UnaryOp",
    "UnaryOperator",
    "Variable",
    "clone",
    "dump",
]

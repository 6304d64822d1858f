"""Render Lox ASTs as parenthesized prefix expressions.

`1 + 2 * 3` prints as `(+ 1 (* 2 3))` and `(1 + 2) * 3` as
`(* (group (+ 1 2)) 3)`. Useful for checking how a program was parsed.
"""

from __future__ import annotations

from typing import Any, Iterable

from .ast import (
    Literal, Unary, Binary, Grouping, Variable, Assign,
    Expression, Print, Var, Block,
)
from .values import to_string


def parenthesize(name: str, *parts: Any) -> str:
    inner = ' '.join([name] + [print_ast(p) for p in parts])
    return f"({inner})"


def print_ast(node: Any) -> str:
    if isinstance(node, Literal):
        return to_string(node.value)
    if isinstance(node, Unary):
        return parenthesize(node.operator.lexeme, node.right)
    if isinstance(node, Binary):
        return parenthesize(node.operator.lexeme, node.left, node.right)
    if isinstance(node, Grouping):
        return parenthesize('group', node.expression)
    if isinstance(node, Variable):
        return node.name.lexeme
    if isinstance(node, Assign):
        return f"(= {node.name.lexeme} {print_ast(node.value)})"
    if isinstance(node, Expression):
        return parenthesize('expr', node.expression)
    if isinstance(node, Print):
        return parenthesize('print', node.expression)
    if isinstance(node, Var):
        if node.initializer is None:
            return f"(var {node.name.lexeme})"
        return f"(var {node.name.lexeme} {print_ast(node.initializer)})"
    if isinstance(node, Block):
        return parenthesize('block', *node.statements)
    raise TypeError(f"cannot print node {type(node).__name__}")


def print_program(statements: Iterable[Any]) -> str:
    return '\n'.join(print_ast(stmt) for stmt in statements)

"""JSON serialization/deserialization for Lox ASTs.

This module converts between the AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. A parsed program (a list of
statements) survives a full round trip, tokens and the `nil` value included.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Literal,
    Unary,
    Binary,
    Grouping,
    Variable,
    Assign,
    Expression,
    Print,
    Var,
    Block,
)
from .tokens import Token
from .values import NIL, NilVal


def token_to_obj(t: Token) -> Dict[str, Any]:
    return {"type": t.type, "lexeme": t.lexeme, "literal": value_to_obj(t.literal), "line": t.line}


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(o["type"], o["lexeme"], value_from_obj(o.get("literal")), o["line"])


def value_to_obj(value: Any) -> Any:
    if isinstance(value, NilVal):
        return {"__type__": "Nil"}
    return value


def value_from_obj(obj: Any) -> Any:
    if isinstance(obj, dict) and obj.get("__type__") == "Nil":
        return NIL
    # JSON has a single number type; Lox numbers are always floats
    if isinstance(obj, int) and not isinstance(obj, bool):
        return float(obj)
    return obj


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, (list, tuple)):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node]}

    if isinstance(node, Literal):
        return {"type": "Literal", "value": value_to_obj(node.value)}
    if isinstance(node, Unary):
        return {"type": "Unary", "operator": token_to_obj(node.operator), "right": ast_to_obj(node.right)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": token_to_obj(node.name)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": token_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, Expression):
        return {"type": "Expression", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Print):
        return {"type": "Print", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Var):
        return {"type": "Var", "name": token_to_obj(node.name), "initializer": ast_to_obj(node.initializer)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return [ast_from_obj(n) for n in obj["body"]]
    if t == "Literal":
        return Literal(value=value_from_obj(obj["value"]))
    if t == "Unary":
        return Unary(operator=token_from_obj(obj["operator"]), right=ast_from_obj(obj["right"]))
    if t == "Binary":
        return Binary(
            left=ast_from_obj(obj["left"]),
            operator=token_from_obj(obj["operator"]),
            right=ast_from_obj(obj["right"]),
        )
    if t == "Grouping":
        return Grouping(expression=ast_from_obj(obj["expression"]))
    if t == "Variable":
        return Variable(name=token_from_obj(obj["name"]))
    if t == "Assign":
        return Assign(name=token_from_obj(obj["name"]), value=ast_from_obj(obj["value"]))
    if t == "Expression":
        return Expression(expression=ast_from_obj(obj["expression"]))
    if t == "Print":
        return Print(expression=ast_from_obj(obj["expression"]))
    if t == "Var":
        return Var(name=token_from_obj(obj["name"]), initializer=ast_from_obj(obj.get("initializer")))
    if t == "Block":
        return Block(statements=tuple(ast_from_obj(s) for s in obj["statements"]))

    raise ValueError(f"Unknown AST node type: {t}")

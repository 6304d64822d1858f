"""Tree-walking interpreter for Lox.

The interpreter executes statement nodes against a chain of `Environment`
scopes and evaluates expression nodes to Lox values (see `lox.values`).
Variable references are resolved when they are evaluated, by walking the
scope chain outward from the current scope.

Operator rules are strict. Arithmetic and comparison need two Numbers, with
one exception: `+` also joins two Texts. Unary `!` needs a Boolean; no
truthiness coercion is done. `==` and `!=` accept any operands, and
operands of different types are simply unequal. Division follows float64
rules, so dividing by zero gives an infinity or NaN.

A runtime error aborts the top-level statement that raised it. The bindings
made by earlier statements stay in place, and `interpret` carries on with the
next statement.
"""

from __future__ import annotations

import math
import sys
from typing import Any, List, Optional

from .ast import (
    Stmt, Expr, Literal, Unary, Binary, Grouping, Variable, Assign,
    Expression, Print, Var, Block,
)
from .environment import Environment
from .errors import LoxError, LoxRuntimeError, LoxSyntaxError
from .parser import ParseResult, parse_source
from .tokens import Token
from .values import NIL, is_number, to_string, type_name, values_equal


class Interpreter:
    """Core interpreter that executes Lox ASTs."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.globals = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None
        self.had_error = False
        self.had_runtime_error = False

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def interpret(self, results: List[ParseResult], env: Optional[Environment] = None) -> List[LoxError]:
        """Report syntax errors and run every parsed statement.

        Each top-level statement runs on its own: a runtime error is reported
        and the next statement still runs. Returns every error seen.
        """
        if env is None:
            env = self.globals
        errors: List[LoxError] = []
        for result in results:
            if isinstance(result, LoxSyntaxError):
                self.had_error = True
                self.report(result)
                errors.append(result)
                continue
            try:
                self.execute(result, env)
            except LoxRuntimeError as error:
                self.had_runtime_error = True
                self.report(error)
                errors.append(error)
            except RecursionError:
                error = LoxRuntimeError('RecursionError', 'Expression nests too deeply.')
                self.had_runtime_error = True
                self.report(error)
                errors.append(error)
        return errors

    def report(self, error: LoxError):
        print(str(error), file=sys.stderr)

    def execute_block(self, statements, env: Environment) -> None:
        for stmt in statements:
            self.execute(stmt, env)

    def execute(self, node: Stmt, env: Environment) -> None:
        if self.debug_level >= 1:
            self.debug(f"execute {type(node).__name__}")
        if isinstance(node, Expression):
            self.evaluate(node.expression, env)
            return None
        if isinstance(node, Print):
            value = self.evaluate(node.expression, env)
            print(to_string(value))
            return None
        if isinstance(node, Var):
            value = NIL
            if node.initializer is not None:
                value = self.evaluate(node.initializer, env)
            env.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name.lexeme}: {type_name(value)} = {to_string(value)}")
            return None
        if isinstance(node, Block):
            # the child scope is dropped on exit, also when an error escapes
            self.execute_block(node.statements, env.child())
            return None
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr, env: Environment) -> Any:
        value = self._evaluate(node, env)
        if self.debug_level >= 3:
            self.debug(f"evaluate {type(node).__name__} -> {to_string(value)}")
        return value

    def _evaluate(self, node: Expr, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression, env)
        if isinstance(node, Variable):
            return env.get(node.name.lexeme, node.name.line)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.assign(node.name.lexeme, value, node.name.line)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name.lexeme} = {to_string(value)}")
            return value
        if isinstance(node, Unary):
            operand = self.evaluate(node.right, env)
            return self.apply_unary_op(node.operator, operand)
        if isinstance(node, Binary):
            return self.evaluate_binary(node, env)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def evaluate_binary(self, node: Binary, env: Environment) -> Any:
        # walk the left spine so long left-associative chains use one frame
        spine = []
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left
        value = self.evaluate(node, env)
        for binary in reversed(spine):
            right = self.evaluate(binary.right, env)
            value = self.apply_binary_op(binary.operator, value, right)
            if self.debug_level >= 3 and binary is not spine[0]:
                self.debug(f"evaluate Binary -> {to_string(value)}")
        return value

    def apply_unary_op(self, op: Token, operand: Any) -> Any:
        if op.type == 'MINUS':
            if not is_number(operand):
                raise LoxRuntimeError('TypeError', f'Operand must be a number, got {type_name(operand)}.', op.line)
            return -operand
        if op.type == 'BANG':
            if not isinstance(operand, bool):
                raise LoxRuntimeError('TypeError', f'Operand must be a boolean, got {type_name(operand)}.', op.line)
            return not operand
        raise LoxRuntimeError('TypeError', f'unsupported unary operator {op.lexeme}', op.line)

    def apply_binary_op(self, op: Token, a: Any, b: Any) -> Any:
        kind = op.type
        if kind == 'EQUAL_EQUAL':
            return values_equal(a, b)
        if kind == 'BANG_EQUAL':
            return not values_equal(a, b)
        if kind == 'PLUS':
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            if is_number(a) and is_number(b):
                return a + b
            raise LoxRuntimeError(
                'TypeError',
                f'Operands must be two numbers or two strings, got {type_name(a)} and {type_name(b)}.',
                op.line,
            )
        if not (is_number(a) and is_number(b)):
            raise LoxRuntimeError(
                'TypeError',
                f'Operands of {op.lexeme} must be numbers, got {type_name(a)} and {type_name(b)}.',
                op.line,
            )
        if kind == 'MINUS':
            return a - b
        if kind == 'STAR':
            return a * b
        if kind == 'SLASH':
            return divide(a, b)
        if kind == 'GREATER':
            return a > b
        if kind == 'GREATER_EQUAL':
            return a >= b
        if kind == 'LESS':
            return a < b
        if kind == 'LESS_EQUAL':
            return a <= b
        raise LoxRuntimeError('TypeError', f'unknown operator {op.lexeme}', op.line)


def divide(a: float, b: float) -> float:
    """Float64 division: x/0 is a signed infinity, 0/0 and nan/0 are nan."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def run_program(source: str, debug_level: int = 0) -> Interpreter:
    """Convenience function to parse and run a Lox program from source."""
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.interpret(parse_source(source))
    finally:
        interpreter.close()
    return interpreter

"""Recursive-descent parser for Lox.

Each grammar rule is one method. The binary-operator levels
(equality, comparison, term, factor) accumulate left-associative chains in a
loop rather than recursing once per operator:

    program    := declaration* EOF
    declaration:= varDecl | statement
    varDecl    := "var" IDENTIFIER ("=" expression)? ";"
    statement  := printStmt | block | exprStmt
    block      := "{" declaration* "}"
    expression := assignment
    assignment := IDENTIFIER "=" assignment | equality
    equality   := comparison ( ("==" | "!=") comparison )*
    comparison := term ( ("<" | "<=" | ">" | ">=") term )*
    term       := factor ( ("+" | "-") factor )*
    factor     := unary ( ("*" | "/") unary )*
    unary      := ("-" | "!") unary | primary
    primary    := NUMBER | STRING | "true" | "false" | "nil" | IDENTIFIER
                | "(" expression ")"

The parser never stops at the first syntax error. A failing declaration is
recorded, the token stream is synchronized to the next statement boundary
and parsing carries on, so `parse` reports every independent error in one
pass. The result is a list holding statements and `LoxSyntaxError`
instances in source order.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Union

from .ast import (
    Expr, Stmt, Literal, Unary, Binary, Grouping, Variable, Assign,
    Expression, Print, Var, Block,
)
from .errors import LoxSyntaxError
from .scanner import Scanner
from .tokens import Token, EOF, STATEMENT_STARTS
from .values import NIL

ParseResult = Union[Stmt, LoxSyntaxError]


class Parser:
    def __init__(self, tokens: Iterable[Token]):
        self.tokens: List[Token] = list(tokens)
        if not self.tokens or self.tokens[-1].type != EOF:
            line = self.tokens[-1].line if self.tokens else 1
            self.tokens.append(Token(EOF, '', None, line))
        self.current = 0
        # errors recovered inside nested blocks, not yet handed out
        self.nested_errors: List[LoxSyntaxError] = []

    # Token stream helpers

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def is_at_end(self) -> bool:
        return self.peek().type == EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def check(self, token_type: str) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type == token_type

    def match(self, *token_types: str) -> bool:
        for token_type in token_types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type: str, expected: str, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        raise self.error(self.peek(), message, kind='ExpectedToken', expected=expected)

    def error(self, token: Token, message: str, kind: str = 'UnexpectedToken',
              expected: Optional[str] = None) -> LoxSyntaxError:
        lexeme = None if token.type == EOF else token.lexeme
        return LoxSyntaxError(kind, token.line, lexeme, message, expected=expected)

    def synchronize(self, in_block: bool = False) -> None:
        """Discard tokens until a likely statement boundary.

        Inside a block the closing `}` is also a boundary and is left in
        place, so the block can still be closed normally.
        """
        if in_block and self.check('RIGHT_BRACE'):
            return
        self.advance()
        while not self.is_at_end():
            if self.previous().type == 'SEMICOLON':
                return
            if self.peek().type in STATEMENT_STARTS:
                return
            if in_block and self.check('RIGHT_BRACE'):
                return
            self.advance()

    # Declarations and statements

    def parse(self) -> List[ParseResult]:
        results: List[ParseResult] = []
        while not self.is_at_end():
            try:
                stmt = self.declaration()
            except LoxSyntaxError as error:
                self.synchronize()
                results.extend(self.nested_errors)
                results.append(error)
            else:
                if self.nested_errors:
                    results.extend(self.nested_errors)
                else:
                    results.append(stmt)
            self.nested_errors = []
        return results

    def declaration(self) -> Stmt:
        if self.match('VAR'):
            return self.var_declaration()
        return self.statement()

    def var_declaration(self) -> Var:
        name = self.consume('IDENTIFIER', 'variable name', 'Expect variable name.')
        initializer = None
        if self.match('EQUAL'):
            initializer = self.expression()
        self.consume('SEMICOLON', ';', "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def statement(self) -> Stmt:
        if self.match('PRINT'):
            return self.print_statement()
        if self.match('LEFT_BRACE'):
            return Block(tuple(self.block()))
        return self.expression_statement()

    def print_statement(self) -> Print:
        value = self.expression()
        self.consume('SEMICOLON', ';', "Expect ';' after value.")
        return Print(value)

    def expression_statement(self) -> Expression:
        expr = self.expression()
        self.consume('SEMICOLON', ';', "Expect ';' after expression.")
        return Expression(expr)

    def block(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.check('RIGHT_BRACE') and not self.is_at_end():
            try:
                statements.append(self.declaration())
            except LoxSyntaxError as error:
                # recover inside the block so its remaining statements still parse
                self.nested_errors.append(error)
                self.synchronize(in_block=True)
        self.consume('RIGHT_BRACE', '}', "Expect '}' after block.")
        return statements

    # Expressions

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.equality()
        if self.match('EQUAL'):
            equals = self.previous()
            value = self.assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            raise self.error(equals, 'Invalid assignment target.', kind='InvalidAssignmentTarget')
        return expr

    def equality(self) -> Expr:
        expr = self.comparison()
        while self.match('BANG_EQUAL', 'EQUAL_EQUAL'):
            operator = self.previous()
            right = self.comparison()
            expr = Binary(expr, operator, right)
        return expr

    def comparison(self) -> Expr:
        expr = self.term()
        while self.match('GREATER', 'GREATER_EQUAL', 'LESS', 'LESS_EQUAL'):
            operator = self.previous()
            right = self.term()
            expr = Binary(expr, operator, right)
        return expr

    def term(self) -> Expr:
        expr = self.factor()
        while self.match('MINUS', 'PLUS'):
            operator = self.previous()
            right = self.factor()
            expr = Binary(expr, operator, right)
        return expr

    def factor(self) -> Expr:
        expr = self.unary()
        while self.match('SLASH', 'STAR'):
            operator = self.previous()
            right = self.unary()
            expr = Binary(expr, operator, right)
        return expr

    def unary(self) -> Expr:
        if self.match('BANG', 'MINUS'):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)
        return self.primary()

    def primary(self) -> Expr:
        if self.match('FALSE'):
            return Literal(False)
        if self.match('TRUE'):
            return Literal(True)
        if self.match('NIL'):
            return Literal(NIL)
        if self.match('NUMBER', 'STRING'):
            return Literal(self.previous().literal)
        if self.match('IDENTIFIER'):
            return Variable(self.previous())
        if self.match('LEFT_PAREN'):
            expr = self.expression()
            self.consume('RIGHT_PAREN', ')', "Expect ')' after expression.")
            return Grouping(expr)
        raise self.error(self.peek(), 'Expect expression.')


def parse(tokens: Iterable[Token]) -> List[ParseResult]:
    return Parser(tokens).parse()


def parse_source(source: str) -> List[ParseResult]:
    """Scan and parse source text. Scan errors come first in the result."""
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    results: List[ParseResult] = list(scanner.errors)
    results.extend(Parser(tokens).parse())
    return results


def split_results(results: List[ParseResult]):
    """Separate parse results into (statements, errors)."""
    statements = [r for r in results if not isinstance(r, LoxSyntaxError)]
    errors = [r for r in results if isinstance(r, LoxSyntaxError)]
    return statements, errors

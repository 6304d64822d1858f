"""Scanner for Lox source text.

The lexicon is written as a Lark grammar and tokenized with Lark's basic
lexer; nothing is parsed with it. Lark tokens are converted into Lox
`Token` objects carrying the token type, the matched lexeme, the literal
value for numbers and strings, and the 1-based source line. The resulting
list always ends with an `EOF` token.

Bad input does not stop the scan. An unexpected character is recorded in
`Scanner.errors` and blanked out, and the text is tokenized again; an
unterminated string blanks out the rest of the source.
"""

from __future__ import annotations

from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LoxSyntaxError
from .tokens import Token, EOF


LOX_LEXICON = r"""
    start: token*

    token: LEFT_PAREN | RIGHT_PAREN | LEFT_BRACE | RIGHT_BRACE
         | COMMA | DOT | MINUS | PLUS | SEMICOLON | SLASH | STAR
         | BANG | BANG_EQUAL | EQUAL | EQUAL_EQUAL
         | GREATER | GREATER_EQUAL | LESS | LESS_EQUAL
         | IDENTIFIER | STRING | NUMBER
         | AND | CLASS | ELSE | FALSE | FUN | FOR | IF | NIL | OR
         | PRINT | RETURN | SUPER | THIS | TRUE | VAR | WHILE

    LEFT_PAREN: "("
    RIGHT_PAREN: ")"
    LEFT_BRACE: "{"
    RIGHT_BRACE: "}"
    COMMA: ","
    DOT: "."
    MINUS: "-"
    PLUS: "+"
    SEMICOLON: ";"
    SLASH: "/"
    STAR: "*"

    BANG: "!"
    BANG_EQUAL: "!="
    EQUAL: "="
    EQUAL_EQUAL: "=="
    GREATER: ">"
    GREATER_EQUAL: ">="
    LESS: "<"
    LESS_EQUAL: "<="

    // Keywords are matched by IDENTIFIER first and then retyped by Lark
    AND: "and"
    CLASS: "class"
    ELSE: "else"
    FALSE: "false"
    FUN: "fun"
    FOR: "for"
    IF: "if"
    NIL: "nil"
    OR: "or"
    PRINT: "print"
    RETURN: "return"
    SUPER: "super"
    THIS: "this"
    TRUE: "true"
    VAR: "var"
    WHILE: "while"

    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/
    STRING: /"[^"]*"/
    NUMBER: /[0-9]+(\.[0-9]+)?/

    COMMENT: /\/\/[^\n]*/
    %ignore COMMENT

    %import common.WS
    %ignore WS
"""


LOX_LEXER = Lark(
    LOX_LEXICON,
    parser='lalr',
    lexer='basic',
)


class Scanner:
    """Turns Lox source text into a list of tokens."""
    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = []
        self.errors: List[LoxSyntaxError] = []

    def scan_tokens(self) -> List[Token]:
        text = self.source
        while True:
            try:
                raw_tokens = list(LOX_LEXER.lex(text))
                break
            except UnexpectedCharacters as e:
                text = self._skip_bad_input(text, e)
        self.tokens = [self._convert(tok) for tok in raw_tokens]
        last_line = self.source.count('\n') + 1
        self.tokens.append(Token(EOF, '', None, last_line))
        return self.tokens

    def _skip_bad_input(self, text: str, e: UnexpectedCharacters) -> str:
        pos = e.pos_in_stream
        if text[pos] == '"':
            self.errors.append(LoxSyntaxError('UnterminatedString', e.line, '"', 'Unterminated string.'))
            # keep newlines so later line numbers stay right
            rest = ''.join(c if c == '\n' else ' ' for c in text[pos:])
            return text[:pos] + rest
        self.errors.append(LoxSyntaxError('UnexpectedCharacter', e.line, text[pos], 'Unexpected character.'))
        return text[:pos] + ' ' + text[pos + 1:]

    def _convert(self, tok) -> Token:
        lexeme = str(tok.value)
        if tok.type == 'NUMBER':
            return Token('NUMBER', lexeme, float(lexeme), tok.line)
        if tok.type == 'STRING':
            return Token('STRING', lexeme, lexeme[1:-1], tok.line)
        return Token(tok.type, lexeme, None, tok.line)


def scan(source: str) -> List[Token]:
    """Scan source text, raising the first scan error if there was one."""
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    if scanner.errors:
        raise scanner.errors[0]
    return tokens

from dataclasses import dataclass
from typing import Any, Optional


# Reserved words and their token types. Token type names double as the
# terminal names of the scanner grammar.
KEYWORDS = {
    'and': 'AND',
    'class': 'CLASS',
    'else': 'ELSE',
    'false': 'FALSE',
    'fun': 'FUN',
    'for': 'FOR',
    'if': 'IF',
    'nil': 'NIL',
    'or': 'OR',
    'print': 'PRINT',
    'return': 'RETURN',
    'super': 'SUPER',
    'this': 'THIS',
    'true': 'TRUE',
    'var': 'VAR',
    'while': 'WHILE',
}

EOF = 'EOF'

# Keywords that begin a declaration or statement; the parser resumes here
# after a syntax error.
STATEMENT_STARTS = frozenset({'CLASS', 'FUN', 'VAR', 'FOR', 'IF', 'WHILE', 'PRINT', 'RETURN'})


@dataclass(frozen=True)
class Token:
    type: str
    lexeme: str
    literal: Optional[Any]
    line: int

    def __repr__(self) -> str:
        return f"Token({self.type} {self.lexeme!r} line {self.line})"

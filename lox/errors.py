from typing import Optional


class LoxError(Exception):
    """Base class for every error the Lox front end and evaluator raise."""


class LoxSyntaxError(LoxError):
    """A scan or parse failure.

    `kind` is one of 'UnexpectedToken', 'ExpectedToken',
    'InvalidAssignmentTarget', 'UnexpectedCharacter' or
    'UnterminatedString'. `lexeme` is None when the error sits at the end of
    input. `expected` names the missing token for 'ExpectedToken'.
    """
    def __init__(self, kind: str, line: int, lexeme: Optional[str], message: str,
                 expected: Optional[str] = None):
        self.kind = kind
        self.line = line
        self.lexeme = lexeme
        self.message = message
        self.expected = expected
        super().__init__(self.render())

    def render(self) -> str:
        where = 'end' if self.lexeme is None else f"'{self.lexeme}'"
        return f"[line {self.line}] Error at {where}: {self.message}"


class LoxRuntimeError(LoxError):
    """An evaluation failure: kind is 'TypeError', 'UndefinedVariable' or
    'RecursionError'."""
    def __init__(self, kind: str, message: str, line: Optional[int] = None):
        self.kind = kind
        self.message = message
        self.line = line
        super().__init__(self.render())

    def render(self) -> str:
        if self.line is None:
            return f"{self.kind}: {self.message}"
        return f"[line {self.line}] {self.kind}: {self.message}"

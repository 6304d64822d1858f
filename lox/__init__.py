# Lox language package
# This package provides a scanner, parser and tree-walking interpreter for Lox.
from .errors import LoxError, LoxSyntaxError, LoxRuntimeError
from .environment import Environment
from .parser import Parser, parse, parse_source
from .interpreter import Interpreter, run_program
from .scanner import Scanner

__all__ = [
    'LoxError',
    'LoxSyntaxError',
    'LoxRuntimeError',
    'Environment',
    'Parser',
    'parse',
    'parse_source',
    'Interpreter',
    'run_program',
    'Scanner',
]

"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv] [program_file]
    python -m lox [-v...] --emit-ast <program_file>
    python -m lox [-v...] --ast <ast_json_file>
    python -m lox --print-ast <program_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .lox file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --print-ast   Parse the given .lox file and print its AST in prefix form

Without a program file an interactive prompt is started; type `exit` or
send end-of-input to leave it. Debug information is written to `debug.txt`
in the current directory when verbosity is greater than zero.

Exit codes: 64 for usage errors, 65 when the program has syntax errors,
70 when a runtime error occurred.
"""

import argparse
import json
import sys
from pathlib import Path
from .ast_json import ast_to_obj, ast_from_obj
from .interpreter import Interpreter
from .parser import parse_source, split_results
from .printer import print_ast

EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70


def read_source(path_arg: str) -> str:
    program_file = Path(path_arg)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(EX_USAGE)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def run_prompt(interpreter: Interpreter) -> None:
    while True:
        try:
            line = input('> ')
        except EOFError:
            print()
            return
        if line.strip() == 'exit':
            return
        interpreter.interpret(parse_source(line))
        # one bad line must not end the session
        interpreter.had_error = False
        interpreter.had_runtime_error = False


def exit_status(interpreter: Interpreter) -> int:
    if interpreter.had_error:
        return EX_DATAERR
    if interpreter.had_runtime_error:
        return EX_SOFTWARE
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given .lox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--print-ast', metavar='LOX_FILE', help='print the parsed AST in prefix form')
    parser.add_argument('program', nargs='?', help='Lox program file (.lox) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        statements, errors = split_results(parse_source(read_source(args.emit_ast)))
        if errors:
            for error in errors:
                print(str(error), file=sys.stderr)
            sys.exit(EX_DATAERR)
        obj = ast_to_obj(statements)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Print AST mode
    if args.print_ast:
        statements, errors = split_results(parse_source(read_source(args.print_ast)))
        for stmt in statements:
            print(print_ast(stmt))
        if errors:
            for error in errors:
                print(str(error), file=sys.stderr)
            sys.exit(EX_DATAERR)
        return

    interpreter = Interpreter(debug_level=args.v)
    try:
        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                print(f"Error: file {ast_path} not found", file=sys.stderr)
                sys.exit(EX_USAGE)
            with open(ast_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            interpreter.interpret(ast_from_obj(data))
        elif args.program:
            interpreter.interpret(parse_source(read_source(args.program)))
        else:
            run_prompt(interpreter)
    finally:
        interpreter.close()
    status = exit_status(interpreter)
    if status:
        sys.exit(status)


if __name__ == '__main__':
    main()

from pathlib import Path
from lox.parser import parse_source
from lox.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_shadowing(capsys):
    with open(EXAMPLES / 'program_3.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    interp = Interpreter()
    interp.interpret(parse_source(source))
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['2', '1']
    assert interp.globals.get('x') == 1.0

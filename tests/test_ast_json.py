import json

from lox.ast_json import ast_from_obj, ast_to_obj
from lox.interpreter import Interpreter
from lox.parser import parse_source, split_results
from lox.printer import print_program
from lox.values import NIL


SOURCE = '''
var a = 1.5;
var b;
{
  var c = !(a >= 2) == true;
  b = "s" + "t";
  print -a * (a - 1) / 2 != nil;
}
print b;
'''


def test_json_round_trip_preserves_ast():
    statements, errors = split_results(parse_source(SOURCE))
    assert errors == []
    text = json.dumps(ast_to_obj(statements))
    restored = ast_from_obj(json.loads(text))
    assert restored == statements
    assert print_program(restored) == print_program(statements)


def test_nil_literal_survives_json():
    statements, _ = split_results(parse_source('print nil;'))
    restored = ast_from_obj(json.loads(json.dumps(ast_to_obj(statements))))
    assert restored[0].expression.value is NIL


def test_restored_program_runs(capsys):
    statements, _ = split_results(parse_source(SOURCE))
    restored = ast_from_obj(json.loads(json.dumps(ast_to_obj(statements))))
    Interpreter().interpret(restored)
    assert capsys.readouterr().out.split() == ['true', 'st']


def test_print_program_shapes():
    statements, _ = split_results(parse_source('var x; var y = x = 2; { print y; }'))
    assert print_program(statements).split('\n') == [
        '(var x)',
        '(var y (= x 2))',
        '(block (print y))',
    ]

import pytest
from lox.ast import Assign, Binary, Block, Expression, Grouping, Literal, Print, Unary, Var, Variable
from lox.errors import LoxSyntaxError
from lox.parser import Parser, parse_source, split_results
from lox.printer import print_ast
from lox.scanner import scan
from lox.tokens import Token
from lox.values import NIL


def parse_one(source):
    statements, errors = split_results(parse_source(source))
    assert errors == []
    assert len(statements) == 1
    return statements[0]


def expr_of(source):
    stmt = parse_one(source + ';')
    assert isinstance(stmt, Expression)
    return stmt.expression


def test_precedence_and_associativity():
    assert print_ast(expr_of('1 + 2 * 3')) == '(+ 1 (* 2 3))'
    assert print_ast(expr_of('8 - 3 - 2')) == '(- (- 8 3) 2)'
    assert print_ast(expr_of('(1 + 2) * 3')) == '(* (group (+ 1 2)) 3)'
    assert print_ast(expr_of('1 < 2 == 3 >= 4')) == '(== (< 1 2) (>= 3 4))'
    assert print_ast(expr_of('-!-x')) == '(- (! (- x)))'


def test_primary_literals():
    assert expr_of('true') == Literal(True)
    assert expr_of('false') == Literal(False)
    assert expr_of('nil').value is NIL
    assert expr_of('"text"') == Literal('text')
    assert isinstance(expr_of('(4)'), Grouping)


def test_assignment_is_right_associative():
    expr = expr_of('a = b = 1')
    assert isinstance(expr, Assign)
    assert expr.name.lexeme == 'a'
    assert isinstance(expr.value, Assign)
    assert expr.value.name.lexeme == 'b'


def test_statements():
    assert isinstance(parse_one('print 1;'), Print)
    var = parse_one('var x;')
    assert isinstance(var, Var)
    assert var.initializer is None
    block = parse_one('{ var y = 2; print y; }')
    assert isinstance(block, Block)
    assert isinstance(block.statements, tuple)
    assert [type(s) for s in block.statements] == [Var, Print]


def test_invalid_assignment_target():
    results = parse_source('1 = 5;')
    assert len(results) == 1
    error = results[0]
    assert isinstance(error, LoxSyntaxError)
    assert error.kind == 'InvalidAssignmentTarget'
    assert error.lexeme == '='
    assert error.line == 1


def test_invalid_assignment_target_binary_on_left():
    error = parse_source('\na + b = 1;')[0]
    assert error.kind == 'InvalidAssignmentTarget'
    assert error.line == 2


def test_missing_right_paren():
    error = parse_source('print (1 + 2;')[0]
    assert error.kind == 'ExpectedToken'
    assert error.expected == ')'
    assert error.lexeme == ';'
    assert str(error) == "[line 1] Error at ';': Expect ')' after expression."


def test_error_at_end_of_input():
    error = parse_source('print 1')[0]
    assert error.kind == 'ExpectedToken'
    assert error.lexeme is None
    assert 'Error at end' in str(error)


def test_two_independent_errors_in_one_pass():
    results = parse_source('print 1 +; var = 3; print 2;')
    statements, errors = split_results(results)
    assert [e.kind for e in errors] == ['UnexpectedToken', 'ExpectedToken']
    assert len(statements) == 1
    assert print_ast(statements[0]) == '(print 2)'


def test_synchronize_stops_before_statement_keyword():
    # no semicolon after the bad expression; parsing resumes at `print`
    results = parse_source('1 + * 2 print 3;')
    statements, errors = split_results(results)
    assert len(errors) == 1
    assert print_ast(statements[0]) == '(print 3)'


def test_errors_inside_block_are_recovered():
    results = parse_source('{ print 1 +; print 2; var = 1; }\nprint 3;')
    assert [type(r) for r in results] == [LoxSyntaxError, LoxSyntaxError, Print]
    assert print_ast(results[2]) == '(print 3)'


def test_block_error_at_closing_brace():
    # the `}` that triggered the error still closes the block
    results = parse_source('{ print 1 }\nprint 2;')
    assert [type(r) for r in results] == [LoxSyntaxError, Print]
    assert str(results[0]) == "[line 1] Error at '}': Expect ';' after value."
    assert print_ast(results[1]) == '(print 2)'


def test_block_recovery_stops_before_closing_brace():
    results = parse_source('{ { print (1 } print 2; }\nprint 3;')
    assert [type(r) for r in results] == [LoxSyntaxError, Print]
    assert results[0].kind == 'ExpectedToken'
    assert results[0].lexeme == '}'
    assert print_ast(results[1]) == '(print 3)'


def test_unsupported_keywords_are_rejected():
    results = parse_source('while (true) print 1;')
    assert isinstance(results[0], LoxSyntaxError)
    assert results[0].lexeme == 'while'


def test_parser_appends_missing_eof():
    tokens = [
        Token('PRINT', 'print', None, 1),
        Token('NUMBER', '1', 1.0, 1),
        Token('SEMICOLON', ';', None, 1),
    ]
    results = Parser(tokens).parse()
    assert print_ast(results[0]) == '(print 1)'


def test_parser_accepts_scanned_tokens():
    results = Parser(scan('var a = -1;')).parse()
    var = results[0]
    assert isinstance(var.initializer, Unary)
    assert var.initializer.operator.type == 'MINUS'


def test_nodes_are_immutable():
    expr = expr_of('1 + x')
    assert isinstance(expr, Binary)
    assert isinstance(expr.right, Variable)
    with pytest.raises(AttributeError):
        expr.left = Literal(2.0)

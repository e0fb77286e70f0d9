'''
Command line tests
'''

import logging

from pytest import raises

from stepcalc.cli import CLI
from stepcalc.lexer import Lexer


def run(capsys, *args):
    CLI().run(args=list(args))
    return capsys.readouterr()


def test_evaluate(capsys):
    out = run(capsys, '-e', '2+3*4', '2^3^2')
    assert out.out.splitlines() == ['14', '512']
    assert out.err == ''


def test_blank_lines_are_skipped(capsys):
    assert run(capsys, '-e', ' ', '1').out == '1\n'


def test_policy_flags(capsys):
    assert run(capsys, '-m', 'round', '-k', '2', '-e', '1/3').out == '0.33\n'
    assert run(capsys, '-m', 'round', '-k', '3', '-S',
               '-e', '1/3000').out == '0.000333\n'
    assert run(capsys, '-b', 'float', '-m', 'truncate', '-k', '2',
               '-e', '2/3').out == '0.66\n'


def test_steps(capsys):
    out = run(capsys, '-s', '-e', '2+3*4')
    assert out.out.splitlines() == [
        '3 * 4 => Multiply 3 by 4 => 12',
        '2 + 12 => Add 2 and 12 => 14',
        '14',
    ]


def test_errors_go_to_stderr(capsys):
    out = run(capsys, '-e', '1/0')
    assert out.out == '0\n'
    assert out.err == 'Error: Division by zero => Error => Undefined\n'


def test_define(capsys):
    out = run(capsys, '-d', 'X=2.5', '-d', 'y = 4', '-e', 'x*y')
    assert out.out == '10\n'


def test_bad_definition(capsys):
    with raises(SystemExit) as info:
        run(capsys, '-d', 'x', '-e', '1')
    assert info.value.code == 1
    assert 'Bad definition x' in capsys.readouterr().err


def test_non_finite_definition(capsys):
    with raises(SystemExit):
        run(capsys, '-d', 'x=abc', '-e', '1')


def test_too_long(capsys):
    out = run(capsys, '-e', '+'.join(['1'] * 26))
    assert out.out == ''
    assert out.err.splitlines()[-1] == 'Expression too long'


def test_strict(capsys):
    out = run(capsys, '--strict', '-e', '(1', '2')
    assert out.out == '2\n'
    assert out.err == "missing-paren '' at line 1, column 3\n"


def test_dump(capsys):
    out = run(capsys, '-D', '-e', 'sin(x)')
    assert out.out.splitlines() == [
        '<type>\t<repr(text)>\t<line:column>',
        "FUNCTION\t'sin'\t1:1",
        "LEFT_PAREN\t'('\t1:4",
        "VARIABLE\t'x'\t1:5",
        "RIGHT_PAREN\t')'\t1:6",
        "END\t''\t1:7",
    ]


def test_tree(capsys):
    out = run(capsys, '-T', '-e', '2*-3')
    assert out.out.splitlines() == [
        '0\tNumberNode',
        '1\tNumberNode',
        '2\tNumberNode',
        '3\tBinaryNode\t2\t1',
        '4\tBinaryNode\t0\t3',
        '2 * -3',
    ]


def test_raw_grammar(capsys):
    assert run(capsys, '-G', '-e').out == Lexer.LEXEME + '\n'


def test_verbose_logs_to_stderr(capsys):
    out = run(capsys, '-v', '-e', '1')
    assert out.out == '1\n'
    assert 'DEBUG' in out.err and 'stepcalc.' in out.err
    assert logging.getLogger('stepcalc').level == logging.DEBUG
    out = run(capsys, '-e', '1')
    assert out.err == ''
    assert logging.getLogger('stepcalc').level == logging.WARNING

'''
Stack machine tests
'''

import math

from pytest import approx, raises

from rpnsearch.machine import evaluate, is_valid, stack_height
from rpnsearch.tokens import BinaryOperator, Operand, UnaryOperator
from rpnsearch.util import InvalidExpressionError, RPNError


ONE = Operand('1.0', 1.0)
TWO = Operand('2.0', 2.0)
THREE = Operand('3.0', 3.0)
FOUR = Operand('4.0', 4.0)
FIVE = Operand('5.0', 5.0)
SQUARE = UnaryOperator('^2', lambda a: a * a)
SQRT = UnaryOperator('sqrt', math.sqrt)
PLUS = BinaryOperator('+', lambda a, b: a + b)
MINUS = BinaryOperator('-', lambda a, b: a - b)
TIMES = BinaryOperator('*', lambda a, b: a * b)


def test_unary_then_binary():
    assert evaluate([ONE, TWO, SQUARE, PLUS]) == 5.0


def test_binary_chain():
    assert evaluate([TWO, THREE, PLUS, FOUR, TIMES]) == 20.0


def test_sqrt():
    assert evaluate([FIVE, SQRT]) == approx(math.sqrt(5.0), abs=1e-9)


def test_left_operand_is_deeper():
    assert evaluate([TWO, THREE, MINUS]) == -1.0
    assert evaluate([THREE, TWO, MINUS]) == 1.0


def test_single_operand():
    assert evaluate((FIVE,)) == 5.0


def test_binary_needs_two_operands():
    assert not is_valid([ONE, PLUS])
    with raises(InvalidExpressionError, match='stack underflow'):
        evaluate([ONE, PLUS])


def test_empty():
    assert not is_valid([])
    with raises(InvalidExpressionError):
        evaluate([])


def test_leftover_values():
    assert not is_valid([ONE, TWO])
    with raises(InvalidExpressionError, match='leaves 2 values'):
        evaluate([ONE, TWO])


def test_unary_first():
    assert not is_valid([SQRT, ONE])


def test_invalid_expression_is_rpn_error():
    with raises(RPNError):
        evaluate([PLUS])


def test_stack_height():
    assert stack_height([]) == 0
    assert stack_height([ONE, TWO, THREE, PLUS]) == 2
    assert stack_height([ONE, SQRT, SQRT]) == 1
    assert stack_height([ONE, PLUS, TWO]) is None


def test_domain_errors_are_values(default):
    e, pi = default.lookup('e'), default.lookup('pi')
    # sqrt(e - pi)
    assert math.isnan(evaluate([e, pi, default.lookup('-'),
                                default.lookup('sqrt')]))
    # e / (pi - pi)
    assert evaluate([e, pi, pi, default.lookup('-'),
                     default.lookup('/')]) == math.inf

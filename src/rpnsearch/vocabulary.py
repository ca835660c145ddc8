'''
Symbols the search builds expressions from.

The default table has the three constants and the usual real functions.
Everything here is immutable and shared freely between workers.
'''

from collections import namedtuple
from functools import partial
import math

import numpy as np
from scipy import special

from .tokens import Operand, UnaryOperator, BinaryOperator
from .util import wrap_user_errors


EULER_GAMMA = 0.57721566490153286060651209


def _evaluate(f, *args):
    with np.errstate(all='ignore'):
        return float(f(*args))


def ieee(f):
    '''
    Make f, a numpy function, a float function with IEEE 754 results.

    Domain errors give NaN and poles and overflow give a signed infinity,
    silently: a candidate that hits one just doesn't match.

    A partial of a module level function, so that tables stay picklable for
    worker processes.
    '''
    return partial(_evaluate, f)


def coth(x):
    return np.divide(np.cosh(x), np.sinh(x))


def csch(x):
    return np.reciprocal(np.sinh(x))


def sech(x):
    return np.reciprocal(np.cosh(x))


def cot(x):
    return np.divide(np.cos(x), np.sin(x))


def csc(x):
    return np.reciprocal(np.sin(x))


def sec(x):
    return np.reciprocal(np.cos(x))


def sinc(x):
    # Unnormalized, unlike np.sinc
    return 1.0 if x == 0 else np.divide(np.sin(x), x)


def gamma(x):
    return special.gamma(x)


def factorial(x):
    '''
    Gamma function shifted by one, so 5 ! is 120 and 0.5 ! is defined.
    '''
    return special.gamma(np.add(x, 1.0))


OPERANDS = {
    'e': math.e,
    'pi': math.pi,
    '\N{GREEK SMALL LETTER GAMMA}': EULER_GAMMA,
}

UNARY = {
    # Trigonometric
    'sin': ieee(np.sin),
    'cos': ieee(np.cos),
    'tan': ieee(np.tan),
    'asin': ieee(np.arcsin),
    'acos': ieee(np.arccos),
    'atan': ieee(np.arctan),

    # Hyperbolic
    'sinh': ieee(np.sinh),
    'cosh': ieee(np.cosh),
    'tanh': ieee(np.tanh),
    'asinh': ieee(np.arcsinh),
    'acosh': ieee(np.arccosh),
    'atanh': ieee(np.arctanh),
    'coth': ieee(coth),
    'csch': ieee(csch),
    'sech': ieee(sech),

    # Reciprocal trigonometric
    'cot': ieee(cot),
    'csc': ieee(csc),
    'sec': ieee(sec),
    'sinc': ieee(sinc),

    'sqrt': ieee(np.sqrt),
    'abs': ieee(np.fabs),
    'ln': ieee(np.log),
    'log': ieee(np.log10),
    'gamma': ieee(gamma),
    '!': ieee(factorial),
    'floor': ieee(np.floor),
    'ceil': ieee(np.ceil),
}

BINARY = {
    '+': ieee(np.add),
    '-': ieee(np.subtract),
    '*': ieee(np.multiply),
    '/': ieee(np.divide),
    '^': ieee(np.power),
    'mod': ieee(np.fmod),
    # Ignore a NaN argument
    'min': ieee(np.fmin),
    'max': ieee(np.fmax),
    'atan2': ieee(np.arctan2),
}


class Vocabulary(namedtuple('Vocabulary', 'operands unary binary')):
    '''
    Ordered, immutable operands and operators.

    Table order is enumeration order.
    '''
    __slots__ = ()

    def __new__(cls, operands=(), unary=(), binary=()):
        return super().__new__(cls, tuple(operands), tuple(unary),
                               tuple(binary))

    @classmethod
    def from_tables(cls, operands, unary=None, binary=None):
        '''
        Build from {symbol: value} and {symbol: function} mappings.
        '''
        return cls([Operand(symbol, float(value))
                    for symbol, value
                    in operands.items()],
                   [UnaryOperator(symbol, function)
                    for symbol, function
                    in (unary or {}).items()],
                   [BinaryOperator(symbol, function)
                    for symbol, function
                    in (binary or {}).items()])

    @classmethod
    def default(cls):
        return cls.from_tables(OPERANDS, UNARY, BINARY)

    def tokens(self):
        '''
        All tokens, operands first, then unary, then binary operators.
        '''
        return self.operands + self.unary + self.binary

    def symbols(self):
        '''
        Map symbols to tokens. Operands shadow operators of the same name.
        '''
        return {token.symbol: token
                for token
                in reversed(self.tokens())}

    @wrap_user_errors('Unknown symbol {1}')
    def lookup(self, symbol):
        return self.symbols()[symbol]

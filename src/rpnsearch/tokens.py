'''
Expression tokens.

A token is one of three immutable tuples, told apart by their arity: operands
push a value, unary operators replace the top of the stack, binary operators
replace the top two. Sequences of tokens are plain tuples.
'''

from collections import namedtuple


class Operand(namedtuple('Operand', 'symbol value')):
    __slots__ = ()
    arity = 0

    def __str__(self):
        return self.symbol


class UnaryOperator(namedtuple('UnaryOperator', 'symbol function')):
    __slots__ = ()
    arity = 1

    def __str__(self):
        return self.symbol


class BinaryOperator(namedtuple('BinaryOperator', 'symbol function')):
    __slots__ = ()
    arity = 2

    def __str__(self):
        return self.symbol


def render(sequence):
    '''
    Return the space separated symbols of a sequence, e.g. "e pi * sqrt".
    '''
    return ' '.join(token.symbol for token in sequence)

'''
Backtracking enumeration of balanced postfix sequences.

The budget of a sequence, its depth, is the number of operands plus the
number of unary operators. A sequence with n operands always has n - 1 binary
operators, so a depth d splits into u unary operators and d - u operands for
every u < d.

Only balanced sequences are ever built: a unary operator is tried only when
the stack holds a value, a binary operator only when it holds two. Choices
are tried operands first, then unary, then binary operators, each in
vocabulary order, which fixes the order of the stream.
'''

from collections import namedtuple
from math import comb


class Quota(namedtuple('Quota', 'operands unary binary height')):
    '''
    Tokens still to place, and the stack height so far.
    '''
    __slots__ = ()

    @property
    def exhausted(self):
        return not (self.operands or self.unary or self.binary)


def _choices(vocabulary, quota):
    '''
    Yield every legal next token with the quota left after placing it.
    '''
    operands, unary, binary, height = quota
    if operands:
        for operand in vocabulary.operands:
            yield operand, Quota(operands - 1, unary, binary, height + 1)
    if unary and height >= 1:
        for operator in vocabulary.unary:
            yield operator, Quota(operands, unary - 1, binary, height)
    if binary and height >= 2:
        for operator in vocabulary.binary:
            yield operator, Quota(operands, unary, binary - 1, height - 1)


def _backtrack(vocabulary, quota):
    '''
    Depth first search over token choices, on an explicit stack of choice
    iterators rather than Python recursion.
    '''
    sequence = []
    frames = [_choices(vocabulary, quota)]
    while frames:
        for token, left in frames[-1]:
            sequence.append(token)
            if left.exhausted:
                if left.height == 1:
                    yield tuple(sequence)
                sequence.pop()
                continue
            frames.append(_choices(vocabulary, left))
            break
        else:
            # Choices at this level exhausted, undo the token that led here.
            frames.pop()
            if sequence:
                sequence.pop()


def generate_depth(vocabulary, depth):
    '''
    Yield every balanced sequence of exactly this depth.
    '''
    for unary in range(depth):
        operands = depth - unary
        yield from _backtrack(vocabulary,
                              Quota(operands, unary, operands - 1, 0))


def generate(vocabulary, max_depth):
    '''
    Yield every balanced sequence of depth 1 to max_depth, shallowest first.

    Deterministic: calling again yields the same stream.
    '''
    for depth in range(1, max_depth + 1):
        yield from generate_depth(vocabulary, depth)


def catalan(n):
    return comb(2 * n, n) // (n + 1)


def count(vocabulary, depth):
    '''
    Return how many sequences generate_depth yields, without generating them.

    n operands and n - 1 binary operators form catalan(n - 1) tree shapes of
    2n - 1 tokens; u unary operators can follow any of those tokens, in
    comb(2n - 2 + u, u) ways.
    '''
    total = 0
    for unary in range(depth):
        operands = depth - unary
        total += (catalan(operands - 1) *
                  comb(2 * operands - 2 + unary, unary) *
                  len(vocabulary.operands) ** operands *
                  len(vocabulary.unary) ** unary *
                  len(vocabulary.binary) ** (operands - 1))
    return total

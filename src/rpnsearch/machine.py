'''
Stack machine for token sequences.

Validation runs the machine on stack heights alone; evaluation runs it on
values.
'''

from .util import InvalidExpressionError


def stack_height(sequence):
    '''
    Return the stack height left by a sequence, or None if it underflows.

    A token of arity k needs k values on the stack and leaves one in their
    place.
    '''
    height = 0
    for token in sequence:
        if height < token.arity:
            return None
        height += 1 - token.arity
    return height


def is_valid(sequence):
    '''
    Return True if sequence is a non-empty balanced postfix expression.
    '''
    return stack_height(sequence) == 1


def evaluate(sequence):
    '''
    Run sequence on an empty stack and return the one value left.

    NaN and infinities are ordinary results. Raise InvalidExpressionError,
    before doing any work, if the sequence isn't balanced.
    '''
    height = stack_height(sequence)
    if height != 1:
        raise InvalidExpressionError('Invalid RPN sequence {}: {}'.format(
            repr(' '.join(map(str, sequence))),
            'stack underflow' if height is None else
            'leaves {} values on stack'.format(height)))
    stack = []
    for token in sequence:
        if not token.arity:
            stack.append(token.value)
        elif token.arity == 1:
            stack.append(token.function(stack.pop()))
        else:
            right = stack.pop()
            left = stack.pop()
            stack.append(token.function(left, right))
    return stack.pop()

from pytest import fixture

from rpnsearch.vocabulary import BINARY, UNARY, Vocabulary


@fixture
def small():
    '''
    Two operands, one unary and two binary operators.

    Built from the default table's functions, so it pickles for worker
    processes.
    '''
    return Vocabulary.from_tables({'1': 1.0, '2': 2.0},
                                  {'sqrt': UNARY['sqrt']},
                                  {'+': BINARY['+'], '*': BINARY['*']})


@fixture
def default():
    return Vocabulary.default()

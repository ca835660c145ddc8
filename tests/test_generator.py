'''
Generator tests
'''

from rpnsearch.generator import count, generate, generate_depth
from rpnsearch.machine import is_valid
from rpnsearch.tokens import render
from rpnsearch.vocabulary import Vocabulary


def arities(sequence):
    return [sum(1 for token in sequence if token.arity == arity)
            for arity in (0, 1, 2)]


def test_all_valid(small, default):
    assert all(is_valid(sequence) for sequence in generate(small, 6))
    assert all(is_valid(sequence) for sequence in generate(default, 3))


def test_depth_decomposition(small):
    for depth in range(1, 6):
        for sequence in generate_depth(small, depth):
            operands, unary, binary = arities(sequence)
            assert operands + unary == depth
            assert binary == operands - 1


def test_depth_one(small):
    assert [render(s) for s in generate_depth(small, 1)] == ['1', '2']


def test_order(small):
    assert [render(s) for s in generate_depth(small, 2)] == [
        '1 1 +', '1 1 *', '1 2 +', '1 2 *',
        '2 1 +', '2 1 *', '2 2 +', '2 2 *',
        '1 sqrt', '2 sqrt',
    ]


def test_order_within_depth(small):
    sequences = [render(s) for s in generate_depth(small, 3)]
    assert sequences[0] == '1 1 1 + +'
    assert sequences[-1] == '2 sqrt sqrt'


def test_shallowest_first(small):
    depths = [sum(1 for token in sequence if token.arity < 2)
              for sequence in generate(small, 5)]
    assert depths == sorted(depths)


def test_no_duplicates(small):
    sequences = [render(s) for s in generate(small, 5)]
    assert len(sequences) == len(set(sequences))


def test_count(small, default):
    for depth in range(0, 6):
        assert count(small, depth) == \
            sum(1 for _ in generate_depth(small, depth))
    for depth in range(1, 4):
        assert count(default, depth) == \
            sum(1 for _ in generate_depth(default, depth))
    assert count(default, 3) == 13122


def test_restartable(small):
    assert list(generate(small, 4)) == list(generate(small, 4))


def test_zero_depth(small):
    assert list(generate(small, 0)) == []
    assert list(generate_depth(small, 0)) == []


def test_no_operands():
    vocabulary = Vocabulary.from_tables({}, {'-': lambda a: -a},
                                        {'+': lambda a, b: a + b})
    assert list(generate(vocabulary, 4)) == []
    assert count(vocabulary, 4) == 0


def test_no_unary(small):
    vocabulary = Vocabulary(small.operands, (), small.binary)
    sequences = list(generate_depth(vocabulary, 3))
    assert len(sequences) == count(vocabulary, 3) == 2 * 8 * 4
    assert all(arities(sequence)[1] == 0 for sequence in sequences)


def test_no_binary(small):
    vocabulary = Vocabulary(small.operands, small.unary, ())
    assert [render(s) for s in generate_depth(vocabulary, 3)] == [
        '1 sqrt sqrt', '2 sqrt sqrt',
    ]


def test_deep_budget_without_recursion():
    vocabulary = Vocabulary.from_tables({'x': 1.0}, {'f': abs})
    sequences = list(generate_depth(vocabulary, 500))
    assert len(sequences) == 1
    assert len(sequences[0]) == 500

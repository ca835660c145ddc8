'''
Brute force search for RPN expressions approximating a number.

Enumerates every balanced postfix expression over a vocabulary of constants
(e, pi, γ) and real functions (sin, sqrt, +, ^, …) up to a budget of
operands plus unary operators, evaluates them in parallel, and prints those
within a tolerance of the target:

    $ rpn-search -t 613 -e 0.1 -d 5

Not meant to find *interesting* identities, just close ones. There's no
simplification: "e pi +" and "pi e +" are both reported.
'''

from .cli import CLI
from .generator import count, generate, generate_depth
from .lexer import Lexer
from .machine import evaluate, is_valid
from .search import (MatchWriter, Search, SearchConfig, SearchState,
                     reference_scan)
from .tokens import BinaryOperator, Operand, UnaryOperator, render
from .util import ConfigurationError, InvalidExpressionError, RPNError
from .vocabulary import Vocabulary


__all__ = (
    'CLI', 'Lexer',
    'generate', 'generate_depth', 'count',
    'evaluate', 'is_valid',
    'Search', 'SearchConfig', 'SearchState', 'MatchWriter', 'reference_scan',
    'Operand', 'UnaryOperator', 'BinaryOperator', 'render',
    'Vocabulary',
    'RPNError', 'InvalidExpressionError', 'ConfigurationError',
)

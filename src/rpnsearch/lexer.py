from functools import reduce
import operator

import regex

from .tokens import Operand
from .util import RPNError, wrap_user_errors


class Lexer:
    '''
    Lexer for RPN expressions, as the search prints them.

    Lexemes are vocabulary symbols and decimal numbers, separated by
    whitespace. Numbers become operands of their own.
    '''
    # Integral part of a number
    INTEGRAL = r'''
                # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                (?:
                    # 1, 12, or the 1 in 1_200.
                    \d{1,3}
                    (?:
                        # The 4, 45, etc. in 1234, 12345, etc.
                        \d
                        |
                        # Support not just digits, but thousands separators
                        (?:
                            _\d{3}
                        )
                    )*
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                  (?:
                      \d+
                      |
                      (?:
                          \d{3}
                          (?:
                              _\d{3}
                          )*
                          (?:
                              _\d{1,2}
                          )?
                      )
                  )
                  '''
    NUMBER = r'''
              (?:
                  # 1, 12, 1_200, 1_200. (notice trailing dot), 1.3
                  {INTEGRAL}
                  (?:
                      \.
                      {FRACTIONAL}?
                  )?
              )|(?:
                  # .2, 0.2, 0.200_200
                  {INTEGRAL}?
                  \.
                  {FRACTIONAL}
              )
              '''.format(INTEGRAL=INTEGRAL, FRACTIONAL=FRACTIONAL)
    SPACE = r'\s+'
    # A lexeme runs up to whitespace: "pin" is not "pi" followed by "n".
    BOUNDARY = r'(?=\s|$)'
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def __init__(self, vocabulary):
        '''
        Create lexer for the symbols of vocabulary.
        '''
        self.symbols = vocabulary.symbols()
        if self.symbols:
            symbol = r'(?:' + r'|'.join(map(regex.escape,
                                            sorted(self.symbols,
                                                   key=len,
                                                   reverse=True))) + r')'
        else:
            symbol = r'(?!)'
        self.lexeme = r'(?<symbol>' + symbol + r')' + self.BOUNDARY + r'|' \
                      r'(?<number>' + self.NUMBER + r')' + self.BOUNDARY + \
                      r'|' \
                      r'(?<space>' + self.SPACE + r')'
        self.pattern = regex.compile(self.lexeme, flags=type(self).FLAGS)

    def lex(self, line):
        '''
        Take a line and yield all lexemes.

        Raise RPNError on the first bad lexeme.
        '''
        while line:
            match = self.pattern.match(line)
            if match is None or not match.group(0):
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise RPNError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme is a token rather than whitespace.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

    def parse(self, groups):
        '''
        Turn a lexeme's groups into a token.
        '''
        if 'symbol' in groups:
            return self.symbols[groups['symbol']]
        elif 'number' in groups:
            return Operand(groups['number'], self._convert(groups['number']))
        raise RPNError('Not a token: {}'.format(groups))

    def tokens(self, line):
        '''
        Return the token sequence written on a line.
        '''
        return tuple(self.parse(self.matchedgroups(match))
                     for match
                     in self.lex(line)
                     if self.isfeedable(match))

    @wrap_user_errors('Cannot convert {1}')
    def _convert(self, number):
        return float(number.replace('_', ''))

from collections import namedtuple
from enum import Enum
from functools import reduce
import logging
import operator

import regex

from .variables import PI_GLYPH, PHI_GLYPH


logger = logging.getLogger(__name__)

MAX_TOKEN_LENGTH = 20


class TokenType(Enum):
    NONE = 'none'
    NUMBER = 'number'
    VARIABLE = 'variable'
    FUNCTION = 'function'
    PLUS = '+'
    MINUS = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    POWER = '^'
    LEFT_PAREN = '('
    RIGHT_PAREN = ')'
    COMMA = ','
    FACTORIAL = '!'
    PI = 'pi'
    PHI = 'phi'
    END = 'end'


# Offsets are 0-based, end inclusive; line and column are 1-based.
SourcePosition = namedtuple('SourcePosition', 'start end line column')

# value is the parsed real for NUMBER, PI and PHI tokens, None otherwise.
Token = namedtuple('Token', 'type text position value')


class Lexer:
    '''
    Tokenizer for the infix expression grammar.

    Streams tokens on demand, holding one token of lookahead in current.
    Identifiers are lower-cased as they are read.
    '''
    # Number, with optional scientific suffix.
    NUMBER = r'''
              (?:
                  (?:
                      # 12, 12. (notice trailing dot), 12.5
                      [0-9]+
                      (?:
                          \.
                          [0-9]*
                      )?
                  |
                      # .5
                      \.
                      [0-9]+
                  )
                  (?:
                      # Only when a digit follows: 2e and 2e+ leave the e alone.
                      [eE]
                      [+-]?
                      [0-9]+
                  )?
              )|(?:
                  # A lone dot reads as zero, and never takes an exponent.
                  \.
              )
              '''
    # ASCII only; the high-plane glyphs are single-character tokens.
    IDENTIFIER = r'''
                  [A-Za-z_]
                  [A-Za-z0-9_]*
                  '''
    # All multi-character lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<identifier>' + IDENTIFIER + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)
    PATTERN = regex.compile(LEXEME, flags=FLAGS)

    WHITESPACE = ' \t\n\r'

    SINGLES = {
        '+': TokenType.PLUS,
        '-': TokenType.MINUS,
        '*': TokenType.MULTIPLY,
        '/': TokenType.DIVIDE,
        '^': TokenType.POWER,
        '(': TokenType.LEFT_PAREN,
        ')': TokenType.RIGHT_PAREN,
        ',': TokenType.COMMA,
        '!': TokenType.FACTORIAL,
        PI_GLYPH: TokenType.PI,
        '\N{GREEK SMALL LETTER PI}': TokenType.PI,
        PHI_GLYPH: TokenType.PHI,
        '\N{GREEK SMALL LETTER PHI}': TokenType.PHI,
    }
    RESERVED = {
        'pi': TokenType.PI,
        'phi': TokenType.PHI,
    }
    FUNCTIONS = frozenset({'sin', 'cos', 'tan', 'log', 'ln', 'sqrt'})

    def __init__(self, reals, text=''):
        self.reals = reals
        self.init(text)

    def init(self, text):
        '''
        Start over on text, priming the lookahead.
        '''
        self.input = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.current = self.next()

    def _advance(self, count=1):
        for char in self.input[self.position:self.position + count]:
            if char == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.position += count

    def _skip_whitespace(self):
        while self.position < len(self.input) and \
              self.input[self.position] in type(self).WHITESPACE:
            self._advance()

    def _token(self, type_, text, start, line, column, value=None):
        position = SourcePosition(start, max(self.position - 1, start),
                                  line, column)
        token = Token(type_, text, position, value)
        logger.debug('token %s %r at %d:%d', type_.name, text, line, column)
        return token

    def next(self):
        '''
        Read and return the token following the current position.
        '''
        self._skip_whitespace()
        start, line, column = self.position, self.line, self.column
        if self.position >= len(self.input):
            return self._token(TokenType.END, '', start, line, column)

        match = type(self).PATTERN.match(self.input, self.position)
        if match is not None:
            lexeme = match.group(0)
            self._advance(len(lexeme))
            text = lexeme[:MAX_TOKEN_LENGTH]
            if match.group('number') is not None:
                return self._token(TokenType.NUMBER, text, start, line, column,
                                   self.reals.parse(text))
            text = text.lower()
            if text in type(self).RESERVED:
                return self._constant(type(self).RESERVED[text], text,
                                      start, line, column)
            elif text in type(self).FUNCTIONS:
                return self._token(TokenType.FUNCTION, text,
                                   start, line, column)
            return self._token(TokenType.VARIABLE, text, start, line, column)

        char = self.input[self.position]
        self._advance()
        type_ = type(self).SINGLES.get(char, TokenType.NONE)
        if type_ in (TokenType.PI, TokenType.PHI):
            return self._constant(type_, char, start, line, column)
        return self._token(type_, char, start, line, column)

    def _constant(self, type_, text, start, line, column):
        value = self.reals.pi if type_ is TokenType.PI else self.reals.phi
        return self._token(type_, text, start, line, column, value)

    def advance(self):
        '''
        Consume the lookahead token, returning it.
        '''
        token = self.current
        self.current = self.next()
        return token

    def __iter__(self):
        '''
        Yield the remaining tokens, End included.
        '''
        while True:
            token = self.advance()
            yield token
            if token.type is TokenType.END:
                return

'''
Recursive descent parser for infix expressions.

Grammar, one token of lookahead::

    expression := term ( ('+' | '-') term )*
    term       := factor ( ('*' | '/') factor )*
    factor     := primary ( '^' factor )? ( '!' )?
    primary    := Number | Pi | Phi | Variable
                | Function '(' expression ')'
                | '(' expression ')'
                | '-' factor

By default malformed input is recovered from silently: a missing ')' is
ignored and an unexpected token reads as 0. Strict parsers raise ParseError
instead.
'''

import logging

from .lexer import Lexer, TokenType
from .nodes import (Arena, BinaryOp, FunctionKind, NumberNode, VariableNode,
                    BinaryNode, FunctionNode, FactorialNode, ParenthesisNode)
from .util import ArenaExhausted, ParseError


logger = logging.getLogger(__name__)


class Parser:
    '''
    Builds expression trees into an arena.
    '''

    ADDITIVE = {
        TokenType.PLUS: BinaryOp.ADD,
        TokenType.MINUS: BinaryOp.SUB,
    }
    MULTIPLICATIVE = {
        TokenType.MULTIPLY: BinaryOp.MUL,
        TokenType.DIVIDE: BinaryOp.DIV,
    }

    def __init__(self, reals, arena=None, strict=False):
        self.reals = reals
        self.arena = arena if arena is not None else Arena()
        self.strict = strict
        self.lexer = Lexer(reals)

    def parse(self, text):
        '''
        Parse text into the arena, returning the root index.

        The arena is cleared first. Returns None if the tree doesn't fit.
        '''
        self.arena.reset()
        logger.debug('Parsing %r', text)
        self.lexer.init(text)
        try:
            root = self._expression()
        except ArenaExhausted as e:
            logger.warning('Failed to parse %r: %s', text, e)
            return None
        token = self.lexer.current
        if token.type is not TokenType.END:
            self._fail(ParseError.TRAILING_INPUT, token)
        logger.debug('Parsed %r into %d nodes', text, len(self.arena))
        return root

    def _fail(self, kind, token):
        if self.strict:
            raise ParseError(kind, token.position, token.text)
        logger.debug('Ignoring %s %r', kind, token.text)

    def _expect(self, type_):
        '''
        Consume the current token if it is of type_; report whether it was.
        '''
        if self.lexer.current.type is type_:
            self.lexer.advance()
            return True
        self._fail(ParseError.MISSING_PAREN, self.lexer.current)
        return False

    def _expression(self):
        left = self._term()
        while self.lexer.current.type in type(self).ADDITIVE:
            token = self.lexer.advance()
            right = self._term()
            left = self.arena.alloc(BinaryNode(type(self).ADDITIVE[token.type],
                                               left, right, token.position))
        return left

    def _term(self):
        left = self._factor()
        while self.lexer.current.type in type(self).MULTIPLICATIVE:
            token = self.lexer.advance()
            right = self._factor()
            op = type(self).MULTIPLICATIVE[token.type]
            left = self.arena.alloc(BinaryNode(op, left, right,
                                               token.position))
        return left

    def _factor(self):
        left = self._primary()
        if self.lexer.current.type is TokenType.POWER:
            token = self.lexer.advance()
            # Right-associative: 2^3^2 is 2^9.
            right = self._factor()
            left = self.arena.alloc(BinaryNode(BinaryOp.POW, left, right,
                                               token.position))
        if self.lexer.current.type is TokenType.FACTORIAL:
            token = self.lexer.advance()
            left = self.arena.alloc(FactorialNode(left, token.position))
        return left

    def _primary(self):
        token = self.lexer.current
        if token.type in (TokenType.NUMBER, TokenType.PI, TokenType.PHI):
            self.lexer.advance()
            return self.arena.alloc(NumberNode(token.value, token.position))
        elif token.type is TokenType.VARIABLE:
            self.lexer.advance()
            return self.arena.alloc(VariableNode(token.text, token.position))
        elif token.type is TokenType.FUNCTION:
            self.lexer.advance()
            return self._function(FunctionKind(token.text), token.position)
        elif token.type is TokenType.LEFT_PAREN:
            self.lexer.advance()
            inner = self._expression()
            self._expect(TokenType.RIGHT_PAREN)
            return self.arena.alloc(ParenthesisNode(inner, token.position))
        elif token.type is TokenType.MINUS:
            self.lexer.advance()
            operand = self._factor()
            zero = self.arena.alloc(NumberNode(self.reals.zero,
                                               token.position))
            return self.arena.alloc(BinaryNode(BinaryOp.SUB, zero, operand,
                                               token.position))
        # Left in place for the caller to trip over.
        self._fail(ParseError.UNEXPECTED_TOKEN, token)
        return self.arena.alloc(NumberNode(self.reals.zero, token.position))

    def _function(self, kind, position):
        self._expect(TokenType.LEFT_PAREN)
        argument = self._expression()
        self._expect(TokenType.RIGHT_PAREN)
        return self.arena.alloc(FunctionNode(kind, argument, position))

'''
Step-by-step expression calculator.

Takes a typed arithmetic expression, parses it into a tree, evaluates it on a
fixed-width decimal (or host floats), and records every operation on the way
so the calculation can be replayed: operator precedence, right-associative
powers, unary minus, factorials, and the usual sin, cos, tan, log, ln and
sqrt, with constants pi, e and phi.

Every intermediate value can be truncated or rounded, to decimal places or
significant digits, like a handheld set to Fix or Sci mode.

Not a computer algebra system. No complex numbers, no user functions, no
assignment.
'''

from .cli import CLI
from .engine import Engine, default_engine, evaluate
from .lexer import Lexer
from .parser import Parser
from .policy import ArithmeticType, Unit
from .util import CalcError, ParseError


__all__ = ('Engine', 'default_engine', 'evaluate', 'Lexer', 'Parser',
           'ArithmeticType', 'Unit', 'CalcError', 'ParseError', 'CLI')

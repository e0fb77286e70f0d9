'''
Expression engine: parser, evaluator and their shared state behind one API.
'''

import logging

from .evaluator import Evaluator
from .nodes import Arena, MAX_NODES
from .parser import Parser
from .policy import ArithmeticPolicy
from .real import BACKENDS
from .steps import CalculationResult, MAX_STEPS
from .variables import VariableTable, MAX_VARIABLES


logger = logging.getLogger(__name__)

MAX_INPUT_LENGTH = 100


class Engine:
    '''
    One calculator: arena, variables and arithmetic policy, plus the parser
    and evaluator working on them.

    Not thread-safe; use one engine per thread.

    :param backend: Name of the real backend, see real.BACKENDS.
    :param strict: Raise ParseError on malformed input instead of recovering.
    '''

    DEFAULT_BACKEND = 'decimal'

    def __init__(self, backend=None, nodes=MAX_NODES,
                 variables=MAX_VARIABLES, steps=MAX_STEPS, strict=False):
        self.reals = BACKENDS[backend or type(self).DEFAULT_BACKEND]()
        self.arena = Arena(nodes)
        self.variables = VariableTable(self.reals, variables)
        self.policy = ArithmeticPolicy(self.reals)
        self.parser = Parser(self.reals, self.arena, strict=strict)
        self.evaluator = Evaluator(self.arena, self.variables, self.policy,
                                   self.reals)
        self.max_steps = steps

    def init(self):
        '''
        Clear the arena and all variables.
        '''
        self.arena.reset()
        self.variables.clear()
        logger.debug('Engine initialized (%s)', self.reals.name)

    def teardown(self):
        self.arena.reset()
        self.variables.clear()
        logger.debug('Engine torn down')

    def set_variable(self, name, value):
        return self.variables.set(name, self.reals.coerce(value))

    def get_variable(self, name):
        return self.variables.get(name)

    def set_arithmetic_mode(self, mode, precision=None, unit=None):
        self.policy.set(mode, precision, unit)

    def get_arithmetic_mode(self):
        return self.policy.mode

    def get_precision(self):
        return self.policy.precision

    def get_unit(self):
        return self.policy.unit

    def parse(self, text):
        '''
        Parse text into the arena, returning the root index or None.
        '''
        if isinstance(text, bytes):
            # Keeps the 0xC4/0xD1 glyphs single characters.
            text = text.decode('latin-1')
        return self.parser.parse(text[:MAX_INPUT_LENGTH])

    def evaluate(self, text):
        '''
        Evaluate text, returning (CalculationResult, ok).

        ok is False only when the expression doesn't fit the arena; the
        result then holds zero and no steps.
        '''
        result = CalculationResult(self.policy.snapshot(), self.max_steps,
                                   value=self.reals.zero)
        root = self.parse(text)
        if root is None:
            result.formatted_text = self.format_real(result.value)
            return result, False
        result.expression = self.arena.render(root, self.reals)
        result.value = self.evaluator.evaluate_with_steps(root, result)
        result.formatted_text = self.format_real(result.value)
        logger.debug('%s = %s (%d steps)', result.expression,
                     result.formatted_text, result.step_count)
        return result, True

    def format_real(self, value):
        return self.policy.format(value)


_default_engine = None


def default_engine():
    '''
    Return the process-wide engine, creating it on first use.
    '''
    global _default_engine
    if _default_engine is None:
        _default_engine = Engine()
    return _default_engine


def evaluate(text):
    '''
    Evaluate text on the default engine.
    '''
    return default_engine().evaluate(text)

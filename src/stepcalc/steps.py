'''
Calculation steps, and the bounded buffer recording them.
'''

from collections import namedtuple
from enum import Enum
import logging


logger = logging.getLogger(__name__)

MAX_STEPS = 20


class StepKind(Enum):
    BINARY = 'binary'
    # Operator left of its operand, e.g. sin(x); operand kept in right.
    UNARY_LEFT = 'unary-left'
    # Operator right of its operand, e.g. x!; operand kept in left.
    UNARY_RIGHT = 'unary-right'
    SUBSTITUTE = 'substitute'
    ERROR = 'error'


class Step(namedtuple('Step', 'kind operation expression result left right')):
    '''
    One evaluation event, as text formatted when it happened.
    '''
    __slots__ = ()

    def __new__(cls, kind, operation, expression, result,
                left=None, right=None):
        return super().__new__(cls, kind, operation, expression, result,
                               left, right)

    def __str__(self):
        return '{} => {} => {}'.format(self.expression, self.operation,
                                       self.result)


class StepRecorder:
    '''
    Ordered step buffer of fixed capacity; steps past capacity are dropped.
    '''

    def __init__(self, capacity=MAX_STEPS):
        self.capacity = capacity
        self._steps = []

    @property
    def full(self):
        return len(self._steps) >= self.capacity

    def record(self, step):
        if self.full:
            logger.debug('Step buffer full, dropping %s', step)
            return False
        self._steps.append(step)
        return True

    def __len__(self):
        return len(self._steps)

    def __iter__(self):
        return iter(self._steps)

    def __getitem__(self, index):
        return self._steps[index]


class CalculationResult:
    '''
    Outcome of evaluating one expression.

    :param policy_snapshot: Arithmetic policy in force for the evaluation.
    :param capacity: Maximum number of steps kept.
    '''

    def __init__(self, policy_snapshot, capacity=MAX_STEPS, value=None):
        self.value = value
        self.formatted_text = ''
        self.expression = ''
        self.policy_snapshot = policy_snapshot
        self.recorder = StepRecorder(capacity)

    @property
    def steps(self):
        return list(self.recorder)

    @property
    def step_count(self):
        return len(self.recorder)

    @property
    def errors(self):
        return [step for step in self.recorder if step.kind is StepKind.ERROR]

    def __str__(self):
        return 'Value: {}, Step: {}, Result: {}'.format(self.value,
                                                       self.step_count,
                                                       self.formatted_text)

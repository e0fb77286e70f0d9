'''
Tree-walking evaluator, optionally recording every step it takes.

Every value, operand or result, goes through the arithmetic policy on its way
up. Errors never escape: they are recorded as Error steps and the offending
subtree evaluates to zero.
'''

import logging

from .nodes import (BinaryOp, FunctionKind, NumberNode, VariableNode,
                    BinaryNode, FunctionNode, FactorialNode, ParenthesisNode)
from .steps import Step, StepKind


logger = logging.getLogger(__name__)

MAX_FACTORIAL = 1000

UNDEFINED = 'Undefined'


class Evaluator:
    '''
    Evaluates trees stored in an arena.

    Both entry points share one walk, so they always agree on the value.
    '''

    # Facade method, step expression and step operation for each operator.
    OPERATIONS = {
        BinaryOp.ADD: ('add', '{0} + {1}', 'Add {0} and {1}'),
        BinaryOp.SUB: ('sub', '{0} - {1}', 'Subtract {1} from {0}'),
        BinaryOp.MUL: ('mul', '{0} * {1}', 'Multiply {0} by {1}'),
        BinaryOp.DIV: ('div', '{0} / {1}', 'Divide {0} by {1}'),
        BinaryOp.POW: ('pow', '{0} ^ {1}', 'Raise {0} to power {1}'),
    }
    # Facade method for each function.
    FUNCTIONS = {
        FunctionKind.SIN: 'sin',
        FunctionKind.COS: 'cos',
        FunctionKind.TAN: 'tan',
        FunctionKind.LOG10: 'log10',
        FunctionKind.LN: 'ln',
        FunctionKind.SQRT: 'sqrt',
    }

    def __init__(self, arena, variables, policy, reals,
                 max_factorial=MAX_FACTORIAL):
        self.arena = arena
        self.variables = variables
        self.policy = policy
        self.reals = reals
        self.max_factorial = max_factorial

    def evaluate(self, root):
        '''
        Return the value of the tree at root.
        '''
        return self._evaluate(root, None)

    def evaluate_with_steps(self, root, result):
        '''
        Return the value of the tree at root, recording steps into result.
        '''
        return self._evaluate(root, result.recorder)

    def _evaluate(self, index, steps):
        node = self.arena[index]
        return type(self).HANDLERS[type(node)](self, node, steps)

    def _text(self, value):
        return self.policy.format(value)

    def _record(self, steps, kind, operation, expression, result,
                left=None, right=None):
        if steps is not None:
            steps.record(Step(kind, operation, expression, result,
                              left, right))

    def _error(self, steps, expression):
        logger.debug('Error: %s', expression)
        self._record(steps, StepKind.ERROR, 'Error', expression, UNDEFINED)
        return self.reals.zero

    def _number(self, node, steps):
        return self.policy.apply(node.value)

    def _variable(self, node, steps):
        value, found = self.variables.get(node.name)
        operation = 'Substitute {}'.format(node.name)
        if not found:
            logger.debug('Undefined variable %s', node.name)
            self._record(steps, StepKind.ERROR, operation, node.name,
                         self._text(self.reals.zero))
            return self.reals.zero
        value = self.policy.apply(value)
        self._record(steps, StepKind.SUBSTITUTE, operation, node.name,
                     self._text(value))
        return value

    def _binary(self, node, steps):
        left = self._evaluate(node.left, steps)
        right = self._evaluate(node.right, steps)
        if node.op is BinaryOp.DIV and self.reals.is_zero(right):
            return self._error(steps, 'Division by zero')
        method, expression, operation = type(self).OPERATIONS[node.op]
        value = self.policy.apply(getattr(self.reals, method)(left, right))
        logger.debug('%s %s %s -> %s', left, node.op.value, right, value)
        if steps is not None:
            left_text, right_text = self._text(left), self._text(right)
            self._record(steps, StepKind.BINARY,
                         operation.format(left_text, right_text),
                         expression.format(left_text, right_text),
                         self._text(value), left_text, right_text)
        return value

    def _in_domain(self, kind, argument):
        if kind in (FunctionKind.LN, FunctionKind.LOG10):
            return self.reals.sign(argument) > 0
        elif kind is FunctionKind.SQRT:
            return self.reals.sign(argument) >= 0
        return True

    def _function(self, node, steps):
        argument = self._evaluate(node.argument, steps)
        name = node.kind.value
        if not self._in_domain(node.kind, argument):
            return self._error(steps, '{} domain error'.format(name))
        method = type(self).FUNCTIONS[node.kind]
        value = self.policy.apply(getattr(self.reals, method)(argument))
        logger.debug('%s(%s) -> %s', name, argument, value)
        if steps is not None:
            text = self._text(argument)
            self._record(steps, StepKind.UNARY_LEFT,
                         'Calculate {} of {}'.format(name, text),
                         '{}({})'.format(name, text),
                         self._text(value), right=text)
        return value

    def _factorial(self, node, steps):
        operand = self._evaluate(node.operand, steps)
        reals = self.reals
        if not reals.is_finite(operand) or reals.sign(operand) < 0 or \
           not reals.is_integer(operand):
            return self._error(steps, 'Factorial domain error')
        n = reals.to_int(operand)
        if n > self.max_factorial:
            return self._error(steps, 'Factorial too large')
        value = reals.one
        for i in range(2, n + 1):
            value = reals.mul(value, reals.from_int(i))
        value = self.policy.apply(value)
        logger.debug('%d! -> %s', n, value)
        if steps is not None:
            text = self._text(operand)
            self._record(steps, StepKind.UNARY_RIGHT,
                         'Calculate factorial of {}'.format(text),
                         '{}!'.format(text),
                         self._text(value), left=text)
        return value

    def _parenthesis(self, node, steps):
        return self._evaluate(node.inner, steps)

    HANDLERS = {
        NumberNode: _number,
        VariableNode: _variable,
        BinaryNode: _binary,
        FunctionNode: _function,
        FactorialNode: _factorial,
        ParenthesisNode: _parenthesis,
    }

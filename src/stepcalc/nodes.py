'''
Expression tree nodes and the bounded arena they live in.

Nodes refer to their children by arena index. The arena only ever grows
during a parse, so every child index is smaller than its parent's.
'''

from collections import namedtuple
from enum import Enum
import logging

from .util import ArenaExhausted


logger = logging.getLogger(__name__)

MAX_NODES = 50


class BinaryOp(Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    POW = '^'


class FunctionKind(Enum):
    SIN = 'sin'
    COS = 'cos'
    TAN = 'tan'
    LOG10 = 'log'
    LN = 'ln'
    SQRT = 'sqrt'


NumberNode = namedtuple('NumberNode', 'value position')
VariableNode = namedtuple('VariableNode', 'name position')
BinaryNode = namedtuple('BinaryNode', 'op left right position')
FunctionNode = namedtuple('FunctionNode', 'kind argument position')
FactorialNode = namedtuple('FactorialNode', 'operand position')
# Semantically transparent, kept so trees re-print the way they were typed.
ParenthesisNode = namedtuple('ParenthesisNode', 'inner position')


class Arena:
    '''
    Fixed-capacity pool of nodes, cleared as a whole.
    '''

    def __init__(self, capacity=MAX_NODES):
        self.capacity = capacity
        self._nodes = []

    def reset(self):
        self._nodes.clear()

    def alloc(self, node):
        '''
        Store node in the next slot and return its index.
        '''
        if len(self._nodes) >= self.capacity:
            raise ArenaExhausted(self.capacity)
        self._nodes.append(node)
        logger.debug('node %d: %s', len(self._nodes) - 1,
                     type(node).__name__)
        return len(self._nodes) - 1

    def __getitem__(self, index):
        return self._nodes[index]

    def __len__(self):
        return len(self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    def children(self, index):
        node = self._nodes[index]
        if isinstance(node, BinaryNode):
            return (node.left, node.right)
        elif isinstance(node, FunctionNode):
            return (node.argument,)
        elif isinstance(node, FactorialNode):
            return (node.operand,)
        elif isinstance(node, ParenthesisNode):
            return (node.inner,)
        return ()

    def is_negation(self, index):
        '''
        Return True if the node is a unary minus, i.e. 0 - x typed as -x.
        '''
        node = self._nodes[index]
        if not isinstance(node, BinaryNode) or node.op is not BinaryOp.SUB:
            return False
        left = self._nodes[node.left]
        return isinstance(left, NumberNode) and \
            left.position == node.position

    def render(self, index, reals):
        '''
        Re-print the tree rooted at index as expression text.
        '''
        node = self._nodes[index]
        if isinstance(node, NumberNode):
            return reals.to_text(node.value)
        elif isinstance(node, VariableNode):
            return node.name
        elif self.is_negation(index):
            return '-' + self.render(node.right, reals)
        elif isinstance(node, BinaryNode):
            return '{} {} {}'.format(self.render(node.left, reals),
                                     node.op.value,
                                     self.render(node.right, reals))
        elif isinstance(node, FunctionNode):
            return '{}({})'.format(node.kind.value,
                                   self.render(node.argument, reals))
        elif isinstance(node, FactorialNode):
            return self.render(node.operand, reals) + '!'
        return '({})'.format(self.render(node.inner, reals))

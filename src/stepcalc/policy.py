'''
Arithmetic policy: how every intermediate value gets rounded or truncated.
'''

from collections import namedtuple
from enum import Enum
import logging


logger = logging.getLogger(__name__)


class ArithmeticType(Enum):
    NORMAL = 'normal'
    TRUNCATE = 'truncate'
    ROUND = 'round'


class Unit(Enum):
    DECIMAL_PLACES = 'places'
    SIGNIFICANT_DIGITS = 'digits'


PolicySnapshot = namedtuple('PolicySnapshot', 'mode precision unit')


class ArithmeticPolicy:
    '''
    Current formatting mode and precision, applied to any real.

    Precision counts decimal places or significant digits depending on unit.
    Normal mode ignores both.
    '''

    DEFAULT_MODE = ArithmeticType.NORMAL
    DEFAULT_PRECISION = 4
    DEFAULT_UNIT = Unit.DECIMAL_PLACES
    MAX_PRECISION = 10

    # Normal -> Truncate -> Round -> Normal
    CYCLE = {
        ArithmeticType.NORMAL: ArithmeticType.TRUNCATE,
        ArithmeticType.TRUNCATE: ArithmeticType.ROUND,
        ArithmeticType.ROUND: ArithmeticType.NORMAL,
    }

    def __init__(self, reals, mode=None, precision=None, unit=None):
        self.reals = reals
        self.mode = type(self).DEFAULT_MODE
        self.unit = type(self).DEFAULT_UNIT
        self.precision = type(self).DEFAULT_PRECISION
        self.set(mode, precision, unit)

    @property
    def precision(self):
        return self._precision

    @precision.setter
    def precision(self, precision):
        self._precision = min(max(int(precision), 0),
                              type(self).MAX_PRECISION)

    def set(self, mode=None, precision=None, unit=None):
        '''
        Change any of mode, precision or unit; None keeps the current one.
        '''
        if mode is not None:
            self.mode = ArithmeticType(mode)
        if precision is not None:
            self.precision = precision
        if unit is not None:
            self.unit = Unit(unit)
        logger.debug('Arithmetic policy now %s', self.snapshot())

    def cycle_mode(self):
        self.mode = type(self).CYCLE[self.mode]
        return self.mode

    def toggle_unit(self):
        if self.unit is Unit.DECIMAL_PLACES:
            self.unit = Unit.SIGNIFICANT_DIGITS
        else:
            self.unit = Unit.DECIMAL_PLACES
        return self.unit

    def snapshot(self):
        return PolicySnapshot(self.mode, self.precision, self.unit)

    @property
    def significant(self):
        return self.unit is Unit.SIGNIFICANT_DIGITS

    def apply(self, value):
        '''
        Round or truncate value according to the policy.
        '''
        reals = self.reals
        if self.mode is ArithmeticType.NORMAL or not reals.is_finite(value):
            return value
        if reals.is_zero(value):
            return reals.zero
        if self.mode is ArithmeticType.TRUNCATE:
            quantize = reals.truncate_to_places
        else:
            quantize = reals.round_to_places
        if self.significant:
            # Last kept significant digit at 10^(magnitude - digits + 1).
            digits = max(self.precision, 1)
            result = quantize(value, digits - reals.magnitude(value) - 1)
        else:
            result = quantize(value, self.precision)
        if reals.is_zero(result):
            return reals.zero
        return result

    def format(self, value):
        '''
        Render value as text: fixed places in decimal-places modes, free
        precision otherwise.
        '''
        if self.mode is ArithmeticType.NORMAL or self.significant:
            return self.reals.to_text(value)
        return self.reals.to_text(value, self.precision)

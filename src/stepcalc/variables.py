'''
Named values, with the built-in constants pi, e and phi.
'''

import logging


logger = logging.getLogger(__name__)

MAX_VARIABLES = 10
MAX_NAME_LENGTH = 20

# Single-byte glyphs of the handheld character set, read as Latin-1.
PI_GLYPH = '\xc4'
PHI_GLYPH = '\xd1'


class VariableTable:
    '''
    Small store of user variables.

    Constants shadow user variables of the same spelling. Once capacity is
    reached, setting a new name is silently ignored.
    '''

    CONSTANTS = {
        'pi': 'pi',
        'PI': 'pi',
        PI_GLYPH: 'pi',
        '\N{GREEK SMALL LETTER PI}': 'pi',
        'e': 'e',
        'E': 'e',
        'phi': 'phi',
        'PHI': 'phi',
        PHI_GLYPH: 'phi',
        '\N{GREEK SMALL LETTER PHI}': 'phi',
    }

    def __init__(self, reals, capacity=MAX_VARIABLES):
        self.reals = reals
        self.capacity = capacity
        self.values = dict()

    def is_constant(self, name):
        return name in type(self).CONSTANTS

    def set(self, name, value):
        name = name[:MAX_NAME_LENGTH]
        if name not in self.values and len(self.values) >= self.capacity:
            logger.warning('Variable table full, ignoring %s', name)
            return False
        self.values[name] = value
        logger.debug('Variable %s = %s', name, value)
        return True

    def get(self, name):
        '''
        Return (value, found); value is zero when not found.
        '''
        constant = type(self).CONSTANTS.get(name)
        if constant is not None:
            return getattr(self.reals, constant), True
        try:
            return self.values[name[:MAX_NAME_LENGTH]], True
        except KeyError:
            logger.debug('Variable %s not found', name)
            return self.reals.zero, False

    def clear(self):
        self.values.clear()

    def names(self):
        return list(self.values)

    def __contains__(self, name):
        return self.get(name)[1]

    def __len__(self):
        return len(self.values)

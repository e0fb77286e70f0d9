from functools import wraps


class CalcError(Exception):
    pass


class ArenaExhausted(CalcError):
    '''
    Raised by the node arena when a parse needs more nodes than it holds.
    '''
    def __init__(self, capacity):
        super().__init__('Expression needs more than {} nodes'.format(capacity))
        self.capacity = capacity


class ParseError(CalcError):
    '''
    Structural error in an expression.

    Only raised by strict parsers; the default parser recovers silently.
    '''
    MISSING_PAREN = 'missing-paren'
    UNEXPECTED_TOKEN = 'unexpected-token'
    TRAILING_INPUT = 'trailing-input'

    def __init__(self, kind, position, text=''):
        message = '{} {!r} at line {}, column {}'.format(kind, text,
                                                       position.line,
                                                       position.column)
        super().__init__(message)
        self.kind = kind
        self.position = position
        self.text = text


def wrap_user_errors(fmt):
    '''
    Decorator that converts stray exceptions on user input to CalcErrors.

    Passes through CalcErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except Exception as e:
                raise CalcError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator

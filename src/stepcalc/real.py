'''
Real number facades.

The engine never does arithmetic on numbers directly; everything goes through
a Real backend, so the same evaluator runs on a fixed-width decimal (like the
handheld's) or on host floats.

Backends never raise. Out-of-domain operations come back as NaN or infinities
and it is up to the evaluator to guard the ones it cares about.
'''

from decimal import (Decimal, Context, localcontext,
                     ROUND_HALF_UP, ROUND_HALF_EVEN, ROUND_DOWN,
                     ROUND_FLOOR, ROUND_CEILING)
import math


PI_TEXT = '3.14159265358979323846'
E_TEXT = '2.71828182845904523536'
PHI_TEXT = '1.61803398874989484820'

# Significant digits carried by the decimal backend.
DIGITS = 14

# Free-precision text stays in plain notation for orders within this range.
PLAIN_MIN_ORDER = -10
PLAIN_MAX_ORDER = DIGITS

# Higher-order angles don't reduce; their sin and cos come out NaN.
MAX_REDUCTION_DIGITS = 1000

# Wide enough for any exact rescaling of a backend value.
_EXACT = Context(prec=60, traps=[])


def _places(digits):
    '''
    Quantum for rounding to digits fractional places (negative for tens, …).
    '''
    return Decimal(1).scaleb(-digits)


class Real:
    '''
    Arithmetic facade over one concrete number type.

    Subclasses implement the primitives. Text rendering is shared and always
    done in decimal space, via to_decimal().
    '''

    name = None

    def __init__(self):
        self.zero = self.from_int(0)
        self.one = self.from_int(1)
        self.ten = self.from_int(10)
        self.pi = self.parse(PI_TEXT)
        self.e = self.parse(E_TEXT)
        self.phi = self.parse(PHI_TEXT)

    def coerce(self, value):
        '''
        Convert user-supplied text, int or float to this backend's type.
        '''
        if isinstance(value, str):
            return self.parse(value)
        elif isinstance(value, bool):
            return self.from_int(int(value))
        elif isinstance(value, int):
            return self.from_int(value)
        elif isinstance(value, float):
            return self.from_float(value)
        return value

    def is_zero(self, value):
        return self.sign(value) == 0

    def is_integer(self, value):
        return self.compare(value, self.round_to_places(value, 0)) == 0

    def to_text(self, value, digits=None):
        '''
        Render value as text.

        :param digits: None for free precision (trailing zeros and a bare
                       decimal point stripped), otherwise exactly that many
                       fractional digits.
        '''
        number = self.to_decimal(value)
        if not number.is_finite():
            return str(number)
        if digits is not None and number.adjusted() + digits < _EXACT.prec:
            number = number.quantize(_places(max(digits, 0)),
                                     rounding=ROUND_HALF_UP,
                                     context=_EXACT)
            text = '{:f}'.format(number)
            return text.lstrip('-') if number.is_zero() else text
        if number.is_zero():
            return '0'
        number = number.normalize(_EXACT)
        order = number.adjusted()
        if PLAIN_MIN_ORDER <= order < PLAIN_MAX_ORDER:
            text = '{:f}'.format(number)
            if '.' in text:
                text = text.rstrip('0').rstrip('.')
            return text
        mantissa = number.scaleb(-order, _EXACT)
        return '{:f}e{:+d}'.format(mantissa, order)

    def __repr__(self):
        return '<{} {}>'.format(type(self).__name__, self.name)


class DecimalReal(Real):
    '''
    Fixed-width decimal reals, DIGITS significant digits.
    '''

    name = 'decimal'

    def __init__(self, digits=DIGITS):
        self.context = Context(prec=digits, rounding=ROUND_HALF_EVEN,
                               traps=[])
        super().__init__()

    def from_int(self, n):
        return self.context.create_decimal(n)

    def from_float(self, x):
        return self.context.create_decimal_from_float(x)

    def to_int(self, value):
        return int(value)

    def to_decimal(self, value):
        return value

    def parse(self, text):
        if text.strip() in ('', '.'):
            return self.from_int(0)
        return self.context.create_decimal(text.strip())

    def add(self, left, right):
        return self.context.add(left, right)

    def sub(self, left, right):
        return self.context.subtract(left, right)

    def mul(self, left, right):
        return self.context.multiply(left, right)

    def div(self, left, right):
        if right.is_zero():
            return self.zero
        return self.context.divide(left, right)

    def pow(self, base, exponent):
        if exponent.is_zero():
            return self.one
        return self.context.power(base, exponent)

    def neg(self, value):
        return self.context.minus(value)

    def abs(self, value):
        return self.context.abs(value)

    def floor(self, value):
        return value.to_integral_value(rounding=ROUND_FLOOR,
                                       context=self.context)

    def ceil(self, value):
        return value.to_integral_value(rounding=ROUND_CEILING,
                                       context=self.context)

    def int_part(self, value):
        return value.to_integral_value(rounding=ROUND_DOWN,
                                       context=self.context)

    def round_to_places(self, value, places):
        return self._quantize(value, places, ROUND_HALF_UP)

    def truncate_to_places(self, value, places):
        return self._quantize(value, places, ROUND_DOWN)

    def _quantize(self, value, places, rounding):
        if not value.is_finite() or value.as_tuple().exponent >= -places:
            return value
        return value.quantize(_places(places), rounding=rounding,
                              context=self.context)

    def scale(self, value, power):
        return value.scaleb(power, self.context)

    def sign(self, value):
        if value.is_zero():
            return 0
        return -1 if value.is_signed() else 1

    def compare(self, left, right):
        result = self.context.compare(left, right)
        return 0 if result.is_nan() else int(result)

    def is_finite(self, value):
        return value.is_finite()

    def magnitude(self, value):
        return value.adjusted()

    def _reduced(self, angle):
        # Folded into [-pi, pi]. The integer quotient must fit the working
        # precision, so widen it by the angle's order, up to a limit.
        with localcontext() as ctx:
            ctx.prec += min(max(angle.adjusted(), 0), MAX_REDUCTION_DIGITS)
            return angle.remainder_near(2 * Decimal(PI_TEXT))

    def _series(self, angle, first):
        # Taylor series of sin (first == 1) or cos (first == 0).
        with localcontext(self.context) as ctx:
            ctx.prec += 4
            x = self._reduced(angle)
            if x.is_nan():
                return x
            i, lasts, fact, sign = first, 0, 1, 1
            num = x if first else Decimal(1)
            s = num
            while s != lasts:
                lasts = s
                i += 2
                fact *= i * (i - 1)
                num *= x * x
                sign *= -1
                s += num / fact * sign
        return self.context.plus(s)

    def sin(self, value):
        return self._series(value, 1)

    def cos(self, value):
        return self._series(value, 0)

    def tan(self, value):
        return self.div(self.sin(value), self.cos(value))

    def ln(self, value):
        return self.context.ln(value)

    def log10(self, value):
        # Exact on powers of ten, unlike ln(x) / ln(10) at this width.
        return self.context.log10(value)

    def sqrt(self, value):
        return self.context.sqrt(value)


class FloatReal(Real):
    '''
    Host double-precision reals.

    Rounding, scaling and rendering go through the shortest repr of the
    float, so they happen in decimal space like on the handheld.
    '''

    name = 'float'

    def from_int(self, n):
        return float(n)

    def from_float(self, x):
        return float(x)

    def to_int(self, value):
        return int(value)

    def to_decimal(self, value):
        return Decimal(repr(value))

    def parse(self, text):
        if text.strip() in ('', '.'):
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan

    def add(self, left, right):
        return left + right

    def sub(self, left, right):
        return left - right

    def mul(self, left, right):
        return left * right

    def div(self, left, right):
        if right == 0:
            return 0.0
        return left / right

    def pow(self, base, exponent):
        if exponent == 0:
            return 1.0
        try:
            return math.pow(base, exponent)
        except OverflowError:
            return math.inf
        except ValueError:
            return math.nan

    def neg(self, value):
        return -value

    def abs(self, value):
        return abs(value)

    def _integral(self, f, value):
        if not math.isfinite(value):
            return value
        return float(f(value))

    def floor(self, value):
        return self._integral(math.floor, value)

    def ceil(self, value):
        return self._integral(math.ceil, value)

    def int_part(self, value):
        return self._integral(math.trunc, value)

    def round_to_places(self, value, places):
        return self._quantize(value, places, ROUND_HALF_UP)

    def truncate_to_places(self, value, places):
        return self._quantize(value, places, ROUND_DOWN)

    def _quantize(self, value, places, rounding):
        # In decimal space, so values near the float limit never overflow.
        if not math.isfinite(value):
            return value
        number = self.to_decimal(value)
        if number.as_tuple().exponent >= -places:
            return value
        return float(number.quantize(_places(places), rounding=rounding,
                                     context=_EXACT))

    def scale(self, value, power):
        if not math.isfinite(value):
            return value
        return float(self.to_decimal(value).scaleb(power, _EXACT))

    def sign(self, value):
        return self.compare(value, 0.0)

    def compare(self, left, right):
        return (left > right) - (left < right)

    def is_finite(self, value):
        return math.isfinite(value)

    def magnitude(self, value):
        return self.to_decimal(value).adjusted()

    def _guarded(self, f, value):
        try:
            return f(value)
        except ValueError:
            return math.nan

    def sin(self, value):
        return self._guarded(math.sin, value)

    def cos(self, value):
        return self._guarded(math.cos, value)

    def tan(self, value):
        return self._guarded(math.tan, value)

    def ln(self, value):
        if value == 0:
            return -math.inf
        return self._guarded(math.log, value)

    def log10(self, value):
        if value == 0:
            return -math.inf
        return self._guarded(math.log10, value)

    def sqrt(self, value):
        return self._guarded(math.sqrt, value)


BACKENDS = {
    DecimalReal.name: DecimalReal,
    FloatReal.name: FloatReal,
}

# Rational keeps numerator and denominator as BigInt, reduced and with the
# sign on the numerator. every constructor and operator goes through
# _normalize, so gcd(|numerator|, denominator) == 1 and denominator > 0 always hold.

import fractions
import operator
import re

import exbigint
from exbigint import BigInt, gcd
from exerrors import DivisionByZero, ParseError

FLOAT_PRECISION = 30

_LITERAL = re.compile(r'(-?[0-9]+)(?:/([0-9]+))?')

class Rational:
    __slots__ = ('_numerator', '_denominator')

    def __init__(self, numerator=0, denominator=None):
        if denominator is None:
            if type(numerator) is Rational:
                self._numerator = numerator._numerator
                self._denominator = numerator._denominator
                return
            if isinstance(numerator, str):
                numerator = parse(numerator)
                self._numerator = numerator._numerator
                self._denominator = numerator._denominator
                return
            denominator = 1
        self._numerator, self._denominator = _normalize(BigInt(numerator), BigInt(denominator))

    @classmethod
    def _make(cls, numerator, denominator):
        self = object.__new__(cls)
        self._numerator, self._denominator = _normalize(numerator, denominator)
        return self

    @property
    def numerator(self):
        return self._numerator
    @property
    def denominator(self):
        return self._denominator

    def __neg__(a):
        return Rational._make(-a._numerator, a._denominator)
    def __pos__(a):
        return a
    def __abs__(a):
        return Rational._make(abs(a._numerator), a._denominator)

    def __add__(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        common = a._denominator * b._denominator // gcd(a._denominator, b._denominator)
        numerator = (a._numerator * (common // a._denominator) +
                     b._numerator * (common // b._denominator))
        return Rational._make(numerator, common)
    __radd__ = __add__
    def __sub__(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        return a + -b
    def __rsub__(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        return b + -a

    def __mul__(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        return Rational._make(a._numerator * b._numerator, a._denominator * b._denominator)
    __rmul__ = __mul__

    def __truediv__(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        if not b:
            raise DivisionByZero(f'{a} / 0')
        # _normalize moves a negative denominator's sign onto the numerator
        return Rational._make(a._numerator * b._denominator, a._denominator * b._numerator)
    def __rtruediv__(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        return b / a

    def __eq__(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        return a._numerator == b._numerator and a._denominator == b._denominator
    def __hash__(self):
        return hash(fractions.Fraction(int(self._numerator), int(self._denominator)))

    def __bool__(self):
        return bool(self._numerator)
    def __int__(self):
        return int(self._numerator // self._denominator)
    def __float__(self):
        return float(self.as_decimal(FLOAT_PRECISION))

    def as_decimal(self, precision=0):
        '''Fixed point text with exactly `precision` fractional digits, truncated.'''
        precision = operator.index(precision)
        if precision < 0:
            raise ValueError(f'precision must be non-negative, got {precision}')
        scaled = abs(self._numerator) * BigInt(10) ** precision // self._denominator
        result = exbigint.format(scaled).rjust(precision, '0')
        if precision > 0:
            point = len(result) - precision
            if point == 0:
                result = '0.' + result
            else:
                result = result[:point] + '.' + result[point:]
        if self._numerator.is_negative:
            result = '-' + result
        return result

    def __str__(self):
        return format(self)
    def __repr__(self):
        return f"Rational('{format(self)}')"

def __RationalComparison(opname):
    test = getattr(operator, opname.strip('_'))
    def op(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        return test(a._numerator * b._denominator, b._numerator * a._denominator)
    op.__name__ = opname
    return op
for opname in ['__lt__', '__le__', '__gt__', '__ge__']:
    setattr(Rational, opname, __RationalComparison(opname))

def _coerce(value):
    if type(value) is Rational:
        return value
    value = exbigint._coerce(value)
    if value is None:
        return None
    return Rational._make(value, BigInt(1))

def _normalize(numerator, denominator):
    if not denominator:
        raise DivisionByZero(f'zero denominator for {numerator}')
    if denominator.is_negative:
        numerator, denominator = -numerator, -denominator
    common = gcd(numerator, denominator)
    if common != 1:
        numerator = numerator // common
        denominator = denominator // common
    return numerator, denominator

# text

def parse(text):
    '''Rational from ``n`` or ``n/d`` with decimal integer parts.'''
    if not isinstance(text, str):
        raise TypeError(f'expected str, got {type(text).__name__}')
    match = _LITERAL.fullmatch(text)
    if match is None:
        raise ParseError(text, 'not a rational literal')
    numerator, denominator = match.groups()
    if denominator is None:
        return Rational(exbigint.parse(numerator))
    return Rational(exbigint.parse(numerator), exbigint.parse(denominator))

def format(value):
    if value.denominator == 1:
        return exbigint.format(value.numerator)
    return exbigint.format(value.numerator) + '/' + exbigint.format(value.denominator)

if __name__ == '__main__':
    assert Rational(1, 3).as_decimal(5) == '0.33333'
    assert Rational(-7, 2).as_decimal(2) == '-3.50'
    assert str(Rational(4, 2)) == '2'
    third = Rational(1, 3)
    total = sum([third] * 3, Rational())
    assert total == 1
    print(total, float(Rational(22, 7)))

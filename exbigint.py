# BigInt is a sign tag plus a frozen limb array from exlimbs.
# every operator builds a new value; nothing reachable from a BigInt is ever written.
# products go through exfft, quotients and remainders through exdiv.

import operator
import re

import numpy as np

import exdiv
import exfft
import exlimbs
from exerrors import ParseError
from exlimbs import Sign

_LITERAL = re.compile(r'-?[0-9]+')

class BigInt:
    '''Arbitrary precision signed integer.

    Accepts a python integer, a decimal string, or another BigInt. Mixed
    arithmetic with python integers coerces them to BigInt.

    ``//`` and ``%`` follow long division on magnitudes: the quotient is
    truncated toward zero and the remainder takes the sign of the dividend,
    so ``(a // b) * b + a % b == a`` and ``abs(a % b) < abs(b)``.
    '''
    __slots__ = ('_sign', '_digits')

    def __init__(self, data=0):
        if type(data) is BigInt:
            self._sign = data._sign
            self._digits = data._digits
            return
        if isinstance(data, str):
            data = parse(data)
            self._sign = data._sign
            self._digits = data._digits
            return
        try:
            number = operator.index(data)
        except TypeError:
            raise TypeError(f'cannot build BigInt from {type(data).__name__}') from None
        self._sign = Sign.NEGATIVE if number < 0 else Sign.NON_NEGATIVE
        self._digits = exlimbs.freeze(exlimbs.check_format(exlimbs.from_int(abs(number))))

    @classmethod
    def _make(cls, sign, digits):
        self = object.__new__(cls)
        digits = exlimbs.check_format(exlimbs.normalize(digits))
        if exlimbs.is_zero(digits):
            sign = Sign.NON_NEGATIVE
        self._sign = sign
        self._digits = exlimbs.freeze(digits)
        return self

    @property
    def sign(self):
        return self._sign
    @property
    def digits(self):
        '''Read-only limbs, least significant first.'''
        return self._digits
    @property
    def is_negative(self):
        return self._sign is Sign.NEGATIVE
    @property
    def is_zero(self):
        return bool(exlimbs.is_zero(self._digits))

    def is_even(self):
        return bool(exlimbs.is_even(self._digits))
    def halve(self):
        '''Magnitude halved, rounding down, with the sign kept.'''
        return BigInt._make(self._sign, exlimbs.halve(self._digits))

    def __neg__(a):
        return BigInt._make(a._sign.flipped, a._digits)
    def __pos__(a):
        return a
    def __abs__(a):
        return BigInt._make(Sign.NON_NEGATIVE, a._digits)

    def __add__(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        return _add_signed(a._sign, a._digits, b._sign, b._digits)
    __radd__ = __add__
    def __sub__(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        return _add_signed(a._sign, a._digits, b._sign.flipped, b._digits)
    def __rsub__(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        return b - a

    def __mul__(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        return BigInt._make(exlimbs.combine_signs(a._sign, b._sign),
                            exfft.multiply(a._digits, b._digits))
    __rmul__ = __mul__

    def __divmod__(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        quotient, remainder = exdiv.divmod_magnitude(a._digits, b._digits)
        return (BigInt._make(exlimbs.combine_signs(a._sign, b._sign), quotient),
                BigInt._make(a._sign, remainder))
    def __rdivmod__(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        return divmod(b, a)
    def __floordiv__(a, b):
        result = a.__divmod__(b)
        if result is NotImplemented:
            return result
        return result[0]
    def __rfloordiv__(a, b):
        result = a.__rdivmod__(b)
        if result is NotImplemented:
            return result
        return result[0]
    def __mod__(a, b):
        result = a.__divmod__(b)
        if result is NotImplemented:
            return result
        return result[1]
    def __rmod__(a, b):
        result = a.__rdivmod__(b)
        if result is NotImplemented:
            return result
        return result[1]

    def __pow__(a, exponent):
        try:
            exponent = operator.index(exponent)
        except TypeError:
            return NotImplemented
        if exponent < 0:
            raise ValueError(f'negative exponent {exponent}')
        result = BigInt(1)
        while exponent:
            if exponent & 1:
                result = result * a
            exponent >>= 1
            if exponent:
                a = a * a
        return result

    def __eq__(a, b):
        if isinstance(b, float):
            # same as int == float: only integral floats can match
            return b.is_integer() and a == int(b)
        b = _coerce(b)
        if b is None:
            return NotImplemented
        return a._sign is b._sign and np.array_equal(a._digits, b._digits)
    def __hash__(self):
        return hash(int(self))

    def __bool__(self):
        return not self.is_zero
    def __int__(self):
        magnitude = exlimbs.to_int(self._digits)
        return -magnitude if self.is_negative else magnitude
    __index__ = __int__
    def __float__(self):
        return float(int(self))

    def __str__(self):
        return format(self)
    def __repr__(self):
        return f"BigInt('{format(self)}')"

def __BigIntComparison(opname):
    test = getattr(operator, opname.strip('_'))
    def op(a, b):
        b = _coerce(b)
        if b is None:
            return NotImplemented
        return test(_compare(a, b), 0)
    op.__name__ = opname
    return op
for opname in ['__lt__', '__le__', '__gt__', '__ge__']:
    setattr(BigInt, opname, __BigIntComparison(opname))

def _coerce(value):
    if type(value) is BigInt:
        return value
    if isinstance(value, (int, np.integer)):
        return BigInt(value)
    return None

def _require(value):
    coerced = _coerce(value)
    if coerced is None:
        raise TypeError(f'expected an integer, got {type(value).__name__}')
    return coerced

def _compare(a, b):
    if a._sign is not b._sign:
        return -1 if a.is_negative else 1
    order = exlimbs.compare_magnitude(a._digits, b._digits)
    return -order if a.is_negative else order

def _add_signed(sign_a, a, sign_b, b):
    if sign_a is sign_b:
        return BigInt._make(sign_a, exlimbs.add_magnitude(a, b))
    # signs differ: the larger magnitude wins the sign
    if exlimbs.less_abs(a, b):
        return BigInt._make(sign_b, exlimbs.subtract_magnitude(b, a))
    return BigInt._make(sign_a, exlimbs.subtract_magnitude(a, b))

# text

def parse(text):
    '''BigInt from a decimal literal ``-?[0-9]+``; raises ParseError otherwise.'''
    if not isinstance(text, str):
        raise TypeError(f'expected str, got {type(text).__name__}')
    if not _LITERAL.fullmatch(text):
        raise ParseError(text)
    negative = text.startswith('-')
    digits = exlimbs.from_decimal(text[1:] if negative else text)
    return BigInt._make(Sign.NEGATIVE if negative else Sign.NON_NEGATIVE, digits)

def format(value):
    '''Canonical decimal text: no leading zeros, '-' only when negative.'''
    text = exlimbs.to_decimal(value.digits)
    return '-' + text if value.is_negative else text

# divisors

def gcd(a, b):
    '''Greatest common divisor of |a| and |b| using halving, subtraction and parity only.'''
    x = _require(a).digits
    y = _require(b).digits
    if exlimbs.is_zero(x):
        return BigInt._make(Sign.NON_NEGATIVE, y)
    if exlimbs.is_zero(y):
        return BigInt._make(Sign.NON_NEGATIVE, x)
    shift = 0
    while exlimbs.is_even(x) and exlimbs.is_even(y):
        x = exlimbs.halve(x)
        y = exlimbs.halve(y)
        shift += 1
    while not exlimbs.is_zero(x) and not exlimbs.is_zero(y):
        while exlimbs.is_even(x):
            x = exlimbs.halve(x)
        while exlimbs.is_even(y):
            y = exlimbs.halve(y)
        # both odd, so the difference is even
        if exlimbs.less_abs(x, y):
            y = exlimbs.halve(exlimbs.subtract_magnitude(y, x))
        else:
            x = exlimbs.halve(exlimbs.subtract_magnitude(x, y))
    common = BigInt._make(Sign.NON_NEGATIVE, y if exlimbs.is_zero(x) else x)
    if shift:
        common = common * BigInt(2) ** shift
    return common

def euclid_gcd(a, b):
    '''Greatest common divisor by repeated remainders.'''
    a = abs(_require(a))
    b = abs(_require(b))
    while b:
        a, b = b, a % b
    return a

def lcm(a, b):
    a = _require(a)
    b = _require(b)
    if not a or not b:
        return BigInt(0)
    return abs(a * b) // gcd(a, b)

if __name__ == '__main__':
    x = BigInt('123456789123456789')
    y = BigInt('987654321987654321')
    assert int(x * y) == 123456789123456789 * 987654321987654321
    assert gcd(BigInt(48), BigInt(18)) == BigInt(6)
    assert gcd(48, 18) == euclid_gcd(48, 18)
    assert str(BigInt('-000')) == '0'
    print(x * y)

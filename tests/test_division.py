"""
Tests for long division of magnitudes.
"""

import random

import numpy as np
import pytest

import exdiv
import exlimbs
from exerrors import DivisionByZero


def divide(x, y):
    quotient, remainder = exdiv.divmod_magnitude(exlimbs.from_int(x), exlimbs.from_int(y))
    exlimbs.check_format(quotient)
    exlimbs.check_format(remainder)
    return exlimbs.to_int(quotient), exlimbs.to_int(remainder)


class TestLongDivision:
    """Quotient digit search and the running remainder."""

    def test_small(self) -> None:
        assert divide(7, 2) == (3, 1)
        assert divide(100, 10) == (10, 0)
        assert divide(9999, 99) == (101, 0)

    def test_dividend_smaller_than_divisor(self) -> None:
        assert divide(5, 12345) == (0, 5)
        assert divide(0, 3) == (0, 0)

    def test_equal_operands(self) -> None:
        assert divide(10 ** 30 + 7, 10 ** 30 + 7) == (1, 0)

    def test_quotient_digits_at_both_ends_of_the_search(self) -> None:
        # every quotient limb is 99, then every quotient limb is 1 or 0
        assert divide(99 * 10 ** 20 + 98, 1) == (99 * 10 ** 20 + 98, 0)
        assert divide(10 ** 40, 10 ** 20 - 1) == divmod(10 ** 40, 10 ** 20 - 1)

    def test_against_python_divmod(self) -> None:
        rng = random.Random(5)
        for _ in range(150):
            x = rng.getrandbits(rng.randint(1, 700))
            y = rng.getrandbits(rng.randint(1, 400)) + 1
            assert divide(x, y) == divmod(x, y)

    def test_remainder_is_dividend_minus_product(self) -> None:
        x = 3 ** 200
        y = 7 ** 50
        quotient, remainder = divide(x, y)
        assert quotient * y + remainder == x
        assert remainder < y

    def test_zero_divisor(self) -> None:
        with pytest.raises(DivisionByZero):
            exdiv.divmod_magnitude(exlimbs.from_int(10), exlimbs.zero())

    def test_zero_divisor_is_zero_division_error(self) -> None:
        with pytest.raises(ZeroDivisionError):
            exdiv.divmod_magnitude(exlimbs.zero(), exlimbs.zero())

    def test_dividend_untouched(self) -> None:
        dividend = exlimbs.freeze(exlimbs.from_int(10 ** 25 + 3))
        exdiv.divmod_magnitude(dividend, exlimbs.from_int(17))
        assert exlimbs.to_int(dividend) == 10 ** 25 + 3
        assert not dividend.flags.writeable
        assert np.array_equal(dividend, exlimbs.from_int(10 ** 25 + 3))

import logging

import numpy as np

import exlimbs
from exerrors import DivisionByZero
from exlimbs import BASE, LIMB_DTYPE

log = logging.getLogger(__name__)

def divmod_magnitude(dividend, divisor):
    '''Quotient and remainder of two normalized magnitudes by long division in radix BASE.

    Dividend limbs are brought down one at a time from the top into a running
    remainder. Each quotient digit d is the largest with divisor * d <= remainder,
    found by binary search over [0, BASE-1], after which divisor * d is
    subtracted. The final running remainder is dividend - quotient * divisor.
    '''
    if exlimbs.is_zero(divisor):
        raise DivisionByZero('division by zero')
    if exlimbs.less_abs(dividend, divisor):
        return exlimbs.zero(), dividend
    log.debug('long division %d / %d limbs', dividend.shape[0], divisor.shape[0])

    multiples = {0: exlimbs.zero(), 1: divisor}
    def multiple(digit):
        product = multiples.get(digit)
        if product is None:
            product = multiples[digit] = exlimbs.multiply_short(divisor, digit)
        return product

    quotient = np.zeros(dividend.shape[0], dtype=LIMB_DTYPE)
    current = exlimbs.zero()
    for position in range(dividend.shape[0] - 1, -1, -1):
        current = exlimbs.shift_in(current, int(dividend[position]))
        low, high = 0, BASE - 1
        while low < high:
            middle = (low + high + 1) // 2
            if exlimbs.compare_magnitude(multiple(middle), current) <= 0:
                low = middle
            else:
                high = middle - 1
        quotient[position] = low
        if low:
            current = exlimbs.subtract_magnitude(current, multiple(low))
    return exlimbs.normalize(quotient), current

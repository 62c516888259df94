# polynomial multiplication of magnitudes over complex128.
#
# the limbs of each operand are the coefficients of a polynomial in BASE.
# both are transformed, multiplied pointwise, transformed back and rounded,
# and the rounded convolution is carried back into limbs.
#
# rounding bound:
#  each exact convolution coefficient is at most min(len a, len b) * (BASE-1)**2.
#  the floating error of a forward/inverse round trip grows like
#    (BASE-1)**2 * m * log2(m) * 2**-53 for transform length m.
#  with BASE = 100 and m = 2**22 that is about 9801 * 2**22 * 22 * 1.1e-16 ~ 1e-4,
#    leaving a wide margin under the 0.5 that rounding can absorb.
#  longer transforms go to the exact schoolbook product instead, and any product
#    whose observed rounding error exceeds ROUNDING_TOLERANCE is redone exactly.
#
# scratch polynomials are allocated per call and never shared between calls.

import logging
import math

import numpy as np

import exlimbs
from exlimbs import LIMB_DTYPE

log = logging.getLogger(__name__)

FFT_MAX_LENGTH = 1 << 22
ROUNDING_TOLERANCE = 0.25

def ceil_exp_2(size):
    return 1 << (int(size) - 1).bit_length()

def fft_length(a_limbs, b_limbs):
    '''Smallest power of two holding twice the longer operand.'''
    return ceil_exp_2(2 * max(a_limbs, b_limbs))

def bit_reverse_permutation(size):
    bits = size.bit_length() - 1
    index = np.arange(size)
    reversed_index = np.zeros(size, dtype=index.dtype)
    for bit in range(bits):
        reversed_index |= ((index >> bit) & 1) << (bits - 1 - bit)
    return reversed_index

def fft(poly, inverse=False):
    '''Iterative radix-2 Cooley-Tukey transform of a power of two length sequence.

    The forward transform uses the roots exp(+2*pi*i/length) and the inverse
    uses exp(-2*pi*i/length). The inverse is not scaled by 1/size.
    Returns a new array, poly is left untouched.
    '''
    size = poly.shape[0]
    if size & (size - 1):
        raise ValueError(f'transform length must be a power of two, got {size}')
    direction = -1 if inverse else 1
    poly = poly[bit_reverse_permutation(size)]
    length = 2
    while length <= size:
        half = length // 2
        # all butterflies of one stage at once, one row per block
        roots = np.exp(1j * (direction * 2 * math.pi / length) * np.arange(half))
        blocks = poly.reshape(size // length, length)
        left = blocks[:, :half]
        right = blocks[:, half:] * roots
        poly = np.concatenate([left + right, left - right], axis=1).reshape(size)
        length *= 2
    return poly

def multiply(a, b):
    '''Product of two normalized magnitudes.'''
    if exlimbs.is_zero(a) or exlimbs.is_zero(b):
        return exlimbs.zero()
    size = fft_length(a.shape[0], b.shape[0])
    if size > FFT_MAX_LENGTH:
        log.debug('transform length %d over %d, schoolbook product', size, FFT_MAX_LENGTH)
        return exlimbs.schoolbook_multiply(a, b)

    poly_a = np.zeros(size, dtype=np.complex128)
    poly_b = np.zeros(size, dtype=np.complex128)
    poly_a[:a.shape[0]] = a
    poly_b[:b.shape[0]] = b
    product = fft(fft(poly_a) * fft(poly_b), inverse=True) / size

    coefficients = np.rint(product.real)
    error = float(np.max(np.abs(product.real - coefficients)))
    log.debug('fft product %d x %d limbs, length %d, rounding error %.3g',
              a.shape[0], b.shape[0], size, error)
    if error > ROUNDING_TOLERANCE:
        log.warning('fft rounding error %.3g over %.3g at length %d, redoing with schoolbook',
                    error, ROUNDING_TOLERANCE, size)
        return exlimbs.schoolbook_multiply(a, b)
    return exlimbs.propagate_carry(coefficients.astype(LIMB_DTYPE))

if __name__ == '__main__':
    import random
    from timeit import timeit

    random.seed(0)
    for limbs in [1, 2, 3, 17, 64, 500, 4000]:
        a = exlimbs.from_int(random.getrandbits(limbs * 7))
        b = exlimbs.from_int(random.getrandbits(limbs * 6))
        assert np.array_equal(multiply(a, b), exlimbs.schoolbook_multiply(a, b))

    a = exlimbs.from_int(random.getrandbits(20000))
    b = exlimbs.from_int(random.getrandbits(20000))
    print('fft', timeit('multiply(a, b)', globals=locals(), number=10))
    print('schoolbook', timeit('exlimbs.schoolbook_multiply(a, b)', globals=locals(), number=10))

# representation:
#  a magnitude is a 1-d int64 ndarray of limbs in radix BASE, least significant first.
#  the sign is kept beside the limbs as a Sign tag, not folded into the words.
#  a normalized magnitude has no zero limbs at the top, except zero itself which is [0].
#  intermediate buffers may hold any int64 (sums, convolution coefficients, borrows)
#    until propagate_carry folds them back into [0, BASE).
# NOTE: BASE must stay even, parity of a magnitude is then the parity of limb 0.

import enum

import numpy as np

WANT_ASSERT = True
BASE = 100
BASE_DIGITS = 2
LIMB_DTYPE = np.int64

# int64 headroom for the short multiply used by long division
SHORT_FACTOR_MAX = 1 << 40

class Sign(enum.Enum):
    NON_NEGATIVE = 0
    NEGATIVE = 1

    @property
    def flipped(self):
        return Sign.NEGATIVE if self is Sign.NON_NEGATIVE else Sign.NON_NEGATIVE

def combine_signs(a, b):
    '''Sign of a product or quotient of values signed a and b.'''
    return Sign.NON_NEGATIVE if a is b else Sign.NEGATIVE

def zero():
    return np.zeros(1, dtype=LIMB_DTYPE)

def freeze(limbs):
    limbs.setflags(write=False)
    return limbs

def normalize(limbs):
    '''Strip most significant zero limbs, keeping at least one.'''
    nonzero = np.nonzero(limbs)[0]
    if nonzero.shape[0] == 0:
        return zero()
    return limbs[:int(nonzero[-1]) + 1]

def is_zero(limbs):
    return limbs.shape[0] == 1 and limbs[0] == 0

def is_even(limbs):
    return limbs[0] % 2 == 0

if WANT_ASSERT:
    def check_format(limbs):
        assert limbs.ndim == 1 and limbs.shape[0] >= 1
        assert limbs.dtype == LIMB_DTYPE
        assert np.all(limbs >= 0) and np.all(limbs < BASE)
        assert limbs.shape[0] == 1 or limbs[-1] != 0
        return limbs
else:
    def check_format(limbs):
        return limbs

# conversions

# limbs per native word when converting, 100**9 < 2**63
CHUNK_LIMBS = 9

def from_int(number):
    '''Limbs of a non-negative python integer.'''
    if number < 0:
        raise ValueError(f'magnitude must be non-negative, got {number}')
    chunk = BASE ** CHUNK_LIMBS
    chunks = []
    while True:
        number, low = divmod(number, chunk)
        chunks.append(low)
        if not number:
            break
    chunks = np.asarray(chunks, dtype=LIMB_DTYPE)
    powers = BASE ** np.arange(CHUNK_LIMBS, dtype=LIMB_DTYPE)
    limbs = (chunks[:, None] // powers) % BASE
    return normalize(limbs.reshape(-1))

def to_int(limbs):
    '''Python integer of a magnitude, joining word sized chunks pairwise.'''
    padded = np.zeros(-(-limbs.shape[0] // CHUNK_LIMBS) * CHUNK_LIMBS, dtype=LIMB_DTYPE)
    padded[:limbs.shape[0]] = limbs
    powers = BASE ** np.arange(CHUNK_LIMBS, dtype=LIMB_DTYPE)
    words = (padded.reshape(-1, CHUNK_LIMBS) * powers).sum(axis=1).tolist()
    radix = BASE ** CHUNK_LIMBS
    while len(words) > 1:
        if len(words) % 2:
            words.append(0)
        words = [low + high * radix for low, high in zip(words[::2], words[1::2])]
        radix *= radix
    return words[0]

def from_decimal(digits):
    '''Limbs of a string of ascii decimal digits, grouped from the least significant end.'''
    pad = -len(digits) % BASE_DIGITS
    raw = np.frombuffer(('0' * pad + digits).encode('ascii'), dtype=np.uint8)
    groups = (raw.astype(LIMB_DTYPE) - ord('0')).reshape(-1, BASE_DIGITS)
    weights = 10 ** np.arange(BASE_DIGITS - 1, -1, -1, dtype=LIMB_DTYPE)
    limbs = (groups * weights).sum(axis=1)[::-1]
    return normalize(np.ascontiguousarray(limbs))

def to_decimal(limbs):
    high = limbs[::-1].tolist()
    return str(high[0]) + ''.join(f'{limb:0{BASE_DIGITS}d}' for limb in high[1:])

# linear time operations

def compare_magnitude(a, b):
    '''Three-way comparison of normalized magnitudes: -1, 0 or 1.'''
    if a.shape[0] != b.shape[0]:
        return -1 if a.shape[0] < b.shape[0] else 1
    differ = np.nonzero(a != b)[0]
    if differ.shape[0] == 0:
        return 0
    top = differ[-1]
    return -1 if a[top] < b[top] else 1

def less_abs(a, b):
    return compare_magnitude(a, b) < 0

def propagate_carry(limbs):
    '''Fold every limb back into [0, BASE), growing the buffer as needed.

    Takes ownership of limbs and edits it in place. Limbs may be negative
    (pending borrows) as long as the value they represent is not.

    Wide carries are moved in whole-array rounds, each dividing them by BASE,
    until no limb carries more than one. The remaining unit carries and
    borrows are then settled in one pass each by _settle, so a ripple across
    any number of limbs costs the same as a single round.
    '''
    limbs = np.asarray(limbs, dtype=LIMB_DTYPE)
    while True:
        carry = limbs // BASE
        if carry.min() >= -1 and carry.max() <= 1:
            break
        limbs -= carry * BASE
        if carry[-1] != 0:
            # highest limb carries, grow by one
            limbs = np.concatenate([limbs, np.zeros(1, dtype=LIMB_DTYPE)])
        limbs[1:] += carry[:limbs.shape[0] - 1]
    if not carry.any():
        return normalize(limbs)
    digits = np.zeros(limbs.shape[0] + 1, dtype=LIMB_DTYPE)
    digits[:-1] = limbs - carry * BASE
    digits[1:] += carry == 1
    digits = _settle(digits, 1)
    digits[1:carry.shape[0] + 1] -= carry == -1
    return normalize(_settle(digits, -1))

def _settle(digits, step):
    '''Resolve unit carries (step 1, digits in [0, BASE]) or unit borrows
    (step -1, digits in [-1, BASE - 1]) with a prefix scan instead of a ripple.

    A limb generates when it overflows on its own and passes when it overflows
    only if something arrives from below. The limb a carry leaving position i
    starts from is the nearest one at or below i that does not just pass it on.
    '''
    if step > 0:
        generates = digits >= BASE
        passes = digits == BASE - 1
    else:
        generates = digits < 0
        passes = digits == 0
    if not generates.any():
        return digits
    position = np.arange(digits.shape[0])
    source = np.maximum.accumulate(np.where(passes, -1, position))
    outgoing = (source >= 0) & generates[np.maximum(source, 0)]
    if outgoing[-1]:
        if step < 0:
            raise ValueError('borrow out of the top limb, value is negative')
        digits = np.concatenate([digits, np.zeros(1, dtype=LIMB_DTYPE)])
        outgoing = np.concatenate([outgoing, np.zeros(1, dtype=bool)])
    digits -= step * BASE * outgoing
    digits[1:] += step * outgoing[:-1]
    return digits

def add_magnitude(a, b):
    if a.shape[0] < b.shape[0]:
        a, b = b, a
    total = np.array(a, dtype=LIMB_DTYPE)
    total[:b.shape[0]] += b
    return propagate_carry(total)

def subtract_magnitude(a, b):
    '''a - b for magnitudes where a >= b.'''
    if WANT_ASSERT:
        assert compare_magnitude(a, b) >= 0
    difference = np.array(a, dtype=LIMB_DTYPE)
    difference[:b.shape[0]] -= b
    return propagate_carry(difference)

def multiply_short(limbs, factor):
    '''Product of a magnitude and a small non-negative native integer.'''
    if WANT_ASSERT:
        assert 0 <= factor < SHORT_FACTOR_MAX
    return propagate_carry(limbs * factor)

def schoolbook_multiply(a, b):
    '''Exact O(n*m) product, one shifted short product per limb of the shorter operand.'''
    if a.shape[0] < b.shape[0]:
        a, b = b, a
    product = np.zeros(a.shape[0] + b.shape[0], dtype=LIMB_DTYPE)
    for offset, limb in enumerate(b.tolist()):
        if limb:
            product[offset:offset + a.shape[0]] += a * limb
    return propagate_carry(product)

def halve(limbs):
    '''floor(limbs / 2).'''
    halved = limbs // 2
    halved[:-1] += (limbs[1:] % 2) * (BASE // 2)
    return normalize(halved)

def shift_in(limbs, limb):
    '''limbs * BASE + limb, the step that brings down the next dividend limb.'''
    low = np.asarray([limb], dtype=LIMB_DTYPE)
    if is_zero(limbs):
        return low
    return np.concatenate([low, limbs])

if __name__ == '__main__':
    import random
    random.seed(0)
    for _ in range(200):
        x = random.getrandbits(random.randint(1, 400))
        y = random.getrandbits(random.randint(1, 400))
        a, b = from_int(x), from_int(y)
        check_format(a)
        assert to_int(a) == x
        assert to_int(from_decimal(str(x))) == x
        assert to_decimal(a) == str(x)
        assert to_int(add_magnitude(a, b)) == x + y
        assert to_int(schoolbook_multiply(a, b)) == x * y
        assert to_int(halve(a)) == x // 2
        if x >= y:
            assert to_int(subtract_magnitude(a, b)) == x - y
        assert compare_magnitude(a, b) == (x > y) - (x < y)

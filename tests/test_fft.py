"""
Tests for FFT multiplication: the transform itself, cross-validation against
the schoolbook product, and the exact fallbacks.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

import exfft
import exlimbs


def random_limbs(rng, count):
    values = rng.integers(0, exlimbs.BASE, size=count, dtype=exlimbs.LIMB_DTYPE)
    values[-1] = rng.integers(1, exlimbs.BASE)
    return values


class TestTransform:
    """The iterative Cooley-Tukey transform."""

    def test_bit_reverse_permutation(self) -> None:
        assert exfft.bit_reverse_permutation(8).tolist() == [0, 4, 2, 6, 1, 5, 3, 7]
        assert exfft.bit_reverse_permutation(1).tolist() == [0]

    def test_forward_uses_positive_exponent(self) -> None:
        rng = np.random.default_rng(0)
        poly = rng.standard_normal(64) + 1j * rng.standard_normal(64)
        assert np.allclose(exfft.fft(poly), np.fft.ifft(poly) * 64)

    def test_inverse_uses_negative_exponent(self) -> None:
        rng = np.random.default_rng(1)
        poly = rng.standard_normal(32) + 1j * rng.standard_normal(32)
        assert np.allclose(exfft.fft(poly, inverse=True), np.fft.fft(poly))

    def test_round_trip(self) -> None:
        rng = np.random.default_rng(2)
        poly = rng.standard_normal(128).astype(np.complex128)
        assert np.allclose(exfft.fft(exfft.fft(poly), inverse=True) / 128, poly)

    def test_input_untouched(self) -> None:
        poly = np.arange(8, dtype=np.complex128)
        exfft.fft(poly)
        assert poly.tolist() == list(range(8))

    def test_length_must_be_power_of_two(self) -> None:
        with pytest.raises(ValueError):
            exfft.fft(np.zeros(6, dtype=np.complex128))

    def test_fft_length(self) -> None:
        assert exfft.fft_length(1, 1) == 2
        assert exfft.fft_length(3, 5) == 16
        assert exfft.fft_length(8, 2) == 16


class TestMultiply:
    """FFT products against the exact schoolbook product."""

    def test_matches_schoolbook(self) -> None:
        rng = np.random.default_rng(3)
        for count_a, count_b in [(1, 1), (1, 5), (2, 3), (7, 7), (64, 13), (257, 256), (1000, 999), (5000, 3)]:
            a = random_limbs(rng, count_a)
            b = random_limbs(rng, count_b)
            product = exfft.multiply(a, b)
            exlimbs.check_format(product)
            assert np.array_equal(product, exlimbs.schoolbook_multiply(a, b))

    def test_all_nines_worst_case(self) -> None:
        nines = np.full(3000, exlimbs.BASE - 1, dtype=exlimbs.LIMB_DTYPE)
        assert np.array_equal(exfft.multiply(nines, nines), exlimbs.schoolbook_multiply(nines, nines))

    def test_against_python_int(self) -> None:
        x = 123456789123456789
        y = 987654321987654321
        product = exfft.multiply(exlimbs.from_int(x), exlimbs.from_int(y))
        assert exlimbs.to_int(product) == x * y
        assert len(exlimbs.to_decimal(product)) == 36

    def test_zero_operand(self) -> None:
        zero = exlimbs.zero()
        assert np.array_equal(exfft.multiply(zero, exlimbs.from_int(10 ** 20)), zero)
        assert np.array_equal(exfft.multiply(exlimbs.from_int(7), zero), zero)

    def test_concurrent_products_do_not_interfere(self) -> None:
        rng = np.random.default_rng(4)
        pairs = [(random_limbs(rng, 300 + i), random_limbs(rng, 200 + 3 * i)) for i in range(16)]
        expected = [exlimbs.schoolbook_multiply(a, b) for a, b in pairs]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda pair: exfft.multiply(*pair), pairs))
        for result, reference in zip(results, expected):
            assert np.array_equal(result, reference)


class TestFallback:
    """Exact schoolbook product above the length bound or on rounding trouble."""

    def test_length_bound_uses_schoolbook(self, monkeypatch) -> None:
        calls = []
        schoolbook = exlimbs.schoolbook_multiply
        def spy(a, b):
            calls.append((a.shape[0], b.shape[0]))
            return schoolbook(a, b)
        monkeypatch.setattr(exlimbs, 'schoolbook_multiply', spy)
        monkeypatch.setattr(exfft, 'FFT_MAX_LENGTH', 4)
        product = exfft.multiply(exlimbs.from_int(123456), exlimbs.from_int(654321))
        assert exlimbs.to_int(product) == 123456 * 654321
        assert calls == [(3, 3)]

    def test_rounding_error_falls_back_with_warning(self, monkeypatch, caplog) -> None:
        monkeypatch.setattr(exfft, 'ROUNDING_TOLERANCE', -1.0)
        with caplog.at_level(logging.WARNING, logger='exfft'):
            product = exfft.multiply(exlimbs.from_int(99999), exlimbs.from_int(88888))
        assert exlimbs.to_int(product) == 99999 * 88888
        assert 'redoing with schoolbook' in caplog.text

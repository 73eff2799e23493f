"""Mixed-radix complex FFT and an odd-frequency real FFT built on top of it."""

from __future__ import annotations

import math
from collections.abc import Iterable

from .numeric import twiddle

_W3 = complex(-0.5, -math.sqrt(0.75))


def factorize(n: int) -> list[int]:
    """Split ``n`` into the radices used by the FFT stages, in stage order.

    Radices 4 and 6 are preferred over 2 and 3, then the smallest prime
    factor is taken.
    """
    if n < 1:
        raise ValueError(f"cannot factorize {n}")
    factors = []
    while n > 1:
        p = _next_radix(n)
        factors.append(p)
        n //= p
    return factors


def _next_radix(n: int) -> int:
    for p in (4, 6, 2):
        if n % p == 0:
            return p
    p = 3
    while n % p:
        p += 2
        if p * p > n:
            return n
    return p


def _times_neg_i(z: complex) -> complex:
    return complex(z.imag, -z.real)


def _times_i(z: complex) -> complex:
    return complex(-z.imag, z.real)


def _butterfly(y: list[complex]) -> list[complex]:
    p = len(y)
    if p == 2:
        a, b = y
        return [a + b, a - b]
    if p == 3:
        a, b, c = y
        w, wc = _W3, _W3.conjugate()
        return [a + b + c, a + b * w + c * wc, a + b * wc + c * w]
    if p == 4:
        a, b, c, d = y
        return [
            a + b + c + d,
            a + _times_neg_i(b) - c + _times_i(d),
            a - b + c - d,
            a + _times_i(b) - c + _times_neg_i(d),
        ]
    return [sum((v * twiddle(n * l, p) for n, v in enumerate(y)), 0j) for l in range(p)]


def _as_complex(values: Iterable[complex], size: int) -> list[complex]:
    result = [complex(v) for v in values]
    if len(result) != size:
        raise ValueError(f"expected {size} values, got {len(result)}")
    return result


class FFT:
    """Complex discrete Fourier transform of a fixed size."""

    def __init__(self, n: int) -> None:
        if n < 1:
            raise ValueError(f"FFT size must be positive, got {n}")
        self.size = n
        self._twiddles = [twiddle(i, n) for i in range(n)]
        self._stages: list[tuple[int, int]] = []
        rest = n
        for radix in factorize(n):
            rest //= radix
            self._stages.append((radix, rest))

    def error_bound(self) -> float:
        """Roundoff bound in units of the working precision; pass to ``epsilon``."""
        if not self._stages:
            return 0.0
        total = sum(2.0 * math.sqrt(m) * (m + 1) for m, _ in self._stages)
        total += 5.0 * (len(self._stages) - 1)
        return self.size * total

    def forward(self, x: Iterable[complex]) -> list[complex]:
        """Return the forward transform of ``x``."""
        return self._transform(_as_complex(x, self.size))

    def inverse(self, X: Iterable[complex]) -> list[complex]:
        """Return the inverse transform of ``X``, scaled by ``1 / size``."""
        spectrum = [v.conjugate() for v in _as_complex(X, self.size)]
        n = self.size
        return [complex(v.real / n, -v.imag / n) for v in self._transform(spectrum)]

    def _transform(self, x: list[complex]) -> list[complex]:
        if not self._stages:
            return list(x)
        return self._stage(x, 0, 0)

    def _stage(self, x: list[complex], start: int, depth: int) -> list[complex]:
        radix, rest = self._stages[depth]
        stride = self.size // (radix * rest)
        if rest == 1:
            out = x[start : start + stride * radix : stride]
        else:
            out = []
            for k in range(radix):
                out.extend(self._stage(x, start + stride * k, depth + 1))
        w = self._twiddles
        for k in range(rest):
            column = [v * w[j * k * stride] for j, v in enumerate(out[k::rest])]
            out[k::rest] = _butterfly(column)
        return out


class RealFFT:
    """Transform of real signals onto the odd frequency bins ``(2k + 1) / (2n)``.

    A signal of ``n`` samples (``n`` even) maps to ``n / 2`` complex bins.
    """

    def __init__(self, n: int) -> None:
        if n < 2 or n % 2:
            raise ValueError(f"real FFT size must be a positive even number, got {n}")
        self.size = n
        self._half = FFT(n // 2)
        self._twiddles = [twiddle(i, 2 * n) for i in range(n)]

    def error_bound(self) -> float:
        """Roundoff bound in units of the working precision; pass to ``epsilon``."""
        return self._half.error_bound()

    def forward(self, x: Iterable[float]) -> list[complex]:
        """Return the ``size / 2`` odd-frequency bins of the real signal ``x``."""
        values = [float(v) for v in x]
        if len(values) != self.size:
            raise ValueError(f"expected {self.size} values, got {len(values)}")
        w = self._twiddles
        folded = [
            complex(re, im) * t for re, im, t in zip(values[0::2], values[1::2], w[0::2])
        ]
        z = self._half.forward(folded)
        spectrum = []
        for zk, zl, t in zip(z, reversed(z), w[1::2]):
            mirror = zl.conjugate()
            even = 0.5 * (zk + mirror)
            odd = _times_neg_i(0.5 * (zk - mirror))
            spectrum.append(even + odd * t)
        return spectrum

    def inverse(self, X: Iterable[complex]) -> list[float]:
        """Return the real signal whose odd-frequency bins are ``X``."""
        spectrum = _as_complex(X, self.size // 2)
        w = self._twiddles
        z = []
        for xk, xl, t in zip(spectrum, reversed(spectrum), w[1::2]):
            mirror = xl.conjugate()
            even = 0.5 * (xk + mirror)
            odd = _times_i(0.5 * (xk - mirror))
            z.append(even + odd * t.conjugate())
        signal = []
        for v, t in zip(self._half.inverse(z), w[0::2]):
            p = v * t.conjugate()
            signal.extend((p.real, p.imag))
        return signal
"""Scalar helpers shared by the transforms and filters."""

from __future__ import annotations

import math
import random

_DEFAULT_RNG = random.Random()


def epsilon(x: float) -> float:
    """Return the smallest ``x / 2**k`` that still changes ``x`` when added to it.

    The result is the spacing of floating-point numbers near ``x`` (between
    one and two units in the last place). ``epsilon(0.0)`` is ``0.0``.
    """
    if math.isnan(x):
        raise ValueError("epsilon of NaN is undefined")
    e = x
    while x + e / 2 != x:
        e /= 2
    return e


def gauss(rng: random.Random | None = None) -> float:
    """Draw a standard normal sample with the Box-Muller method."""
    source = rng if rng is not None else _DEFAULT_RNG
    u = source.random()
    while u <= 0.0:
        u = source.random()
    t = source.uniform(0.0, math.pi)
    return math.sqrt(-2.0 * math.log(u)) * math.cos(t)


def clip(x: float, low: float, high: float) -> float:
    """Limit ``x`` to ``[low, high]``; NaN is treated as ``high``."""
    if math.isnan(x):
        x = high
    return max(min(x, high), low)


def round_half_away(x: float) -> int:
    """Round to the nearest integer, halfway cases away from zero."""
    if not math.isfinite(x):
        raise ValueError(f"cannot round {x!r} to an integer")
    magnitude = abs(x)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if x < 0 else whole


def twiddle(m: int, n: int) -> complex:
    """Return the root of unity ``exp(-2j * pi * m / n)``."""
    t = -(m / n) * (2.0 * math.pi)
    return complex(math.cos(t), math.sin(t))
import math
import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from sigkit.filter import BiquadCascade, FilterType
from sigkit.numeric import epsilon, gauss

BUF_SIZE = 1024
M = 20
L = 4
TOL = epsilon(float(BUF_SIZE >> 4)) * 2**20


def random_section(rng):
    first_order = rng.random() < 0.5
    f0 = rng.uniform(0.125, 0.375)
    q = rng.uniform(0.5, 1.0)
    gains = [gauss(rng) for _ in range(3)]
    return first_order, f0, q, gains


def random_cascade(rng, sections=None, channels=1):
    n = sections if sections is not None else rng.randint(1, 4)
    cascade = BiquadCascade(n, channels)
    for i in range(n):
        cascade.configure(i, *random_section(rng))
    return cascade


def filtered(cascade, signal):
    cascade.reset()
    return [frame[0] for frame in cascade.run([v] for v in signal)]


@pytest.mark.parametrize("seed", range(M))
def test_linearity(seed):
    rng = random.Random(seed)
    x = [gauss(rng) for _ in range(BUF_SIZE)]
    y = [gauss(rng) for _ in range(BUF_SIZE)]
    z = [a + b for a, b in zip(x, y)]
    cascade = random_cascade(rng)
    X, Y, Z = filtered(cascade, x), filtered(cascade, y), filtered(cascade, z)
    for xv, yv, zv in zip(X, Y, Z):
        assert abs(zv - (xv + yv)) <= TOL


@pytest.mark.parametrize("seed", range(len(FilterType) * L))
def test_poles(seed):
    rng = random.Random(1000 + seed)
    first_order, f0, q, gains = random_section(rng)
    cascade = BiquadCascade(1, 1)
    cascade.configure(0, first_order, f0, q, gains)
    w0 = 2.0 * math.pi * f0
    cc, ss = math.cos(w0), math.sin(w0)
    n = 64
    x = [gauss(rng) for _ in range(n)]
    y = [(1.0 if i == 0 else 0.0) - v for i, v in enumerate(x)]
    h = [a + b for a, b in zip(filtered(cascade, x), filtered(cascade, y))]
    if first_order:
        pole = (1.0 + cc - ss) / (1.0 + cc + ss)
        for i in range(1, n):
            assert abs(pole ** (i - 1) * h[1] - h[i]) <= TOL
    else:
        t = math.sqrt(1.0 - 0.25 / (q * q))
        t = math.atan2(t * ss, cc)
        r = ss / (2.0 * q)
        r = 0.5 * math.log((1.0 - r) / (1.0 + r))
        for i in range(1, n):
            c1 = math.exp(r * (i - 1)) * math.sin(t * (i - 2)) / math.sin(t)
            c2 = math.exp(r * (i - 2)) * math.sin(t * (i - 1)) / math.sin(t)
            expected = c2 * h[2] - c1 * h[1]
            assert abs(expected - h[i]) <= TOL


@pytest.mark.parametrize("seed", range(len(FilterType) * L))
def test_dc_response(seed):
    rng = random.Random(2000 + seed)
    first_order, f0, q, gains = random_section(rng)
    cascade = BiquadCascade(1, 1)
    cascade.configure(0, first_order, f0, q, gains)
    x = [gauss(rng) for _ in range(BUF_SIZE)]
    y = [1.0 - v for v in x]
    out = filtered(cascade, x)[-1] + filtered(cascade, y)[-1]
    assert abs(out - gains[0]) <= TOL


@pytest.mark.parametrize("seed", range(len(FilterType) * L))
def test_nyquist_response(seed):
    rng = random.Random(3000 + seed)
    first_order, f0, q, gains = random_section(rng)
    cascade = BiquadCascade(1, 1)
    cascade.configure(0, first_order, f0, q, gains)
    x = [gauss(rng) for _ in range(BUF_SIZE)]
    y = [(-1.0 if i % 2 else 1.0) - v for i, v in enumerate(x)]
    out = filtered(cascade, x)[-1] + filtered(cascade, y)[-1]
    assert abs(out + gains[1 if first_order else 2]) <= TOL


@pytest.mark.parametrize("seed", range(M))
def test_time_invariance(seed):
    rng = random.Random(4000 + seed)
    x = [gauss(rng) if i else 0.0 for i in range(BUF_SIZE)]
    shifted = x[1:] + x[:1]
    cascade = random_cascade(rng)

    def split_response(signal):
        part = [gauss(rng) for _ in range(BUF_SIZE)]
        rest = [a - b for a, b in zip(signal, part)]
        return [a + b for a, b in zip(filtered(cascade, part), filtered(cascade, rest))]

    X = split_response(x)
    for _ in range(L + 1):
        again = split_response(x)
        assert all(abs(a - b) <= TOL for a, b in zip(X, again))
    Y = split_response(shifted)
    for _ in range(L + 1):
        again = split_response(shifted)
        assert all(abs(a - b) <= TOL for a, b in zip(Y, again))
    for i in range(BUF_SIZE - 1):
        assert abs(X[i + 1] - Y[i]) <= TOL


@pytest.mark.parametrize("seed", range(M))
def test_combination(seed):
    rng = random.Random(5000 + seed)
    x = [gauss(rng) for _ in range(BUF_SIZE)]
    n1, n2 = rng.randint(1, 4), rng.randint(1, 4)
    first = BiquadCascade(n1)
    second = BiquadCascade(n2)
    combined = BiquadCascade(n1 + n2)
    for i in range(n1):
        params = random_section(rng)
        first.configure(i, *params)
        combined.configure(i, *params)
    for i in range(n2):
        params = random_section(rng)
        second.configure(i, *params)
        combined.configure(n1 + i, *params)
    chained = filtered(second, filtered(first, x))
    direct = filtered(combined, x)
    for a, b in zip(chained, direct):
        assert abs(a - b) <= TOL


@pytest.mark.parametrize("seed", range(M))
def test_channels(seed):
    rng = random.Random(6000 + seed)
    c = rng.randint(1, 3)
    frames = BUF_SIZE // c
    x = [gauss(rng) for _ in range(frames)]
    y = [[gauss(rng) for _ in range(c)] for _ in range(frames)]
    z = [[xv - v for v in row] for xv, row in zip(x, y)]
    n = rng.randint(1, 4)
    single = BiquadCascade(n, 1)
    multi = BiquadCascade(n, c)
    for i in range(n):
        params = random_section(rng)
        single.configure(i, *params)
        multi.configure(i, *params)
    X = filtered(single, x)
    multi.reset()
    Y = multi.run(y)
    multi.reset()
    Z = multi.run(z)
    for xv, yrow, zrow in zip(X, Y, Z):
        assert len(yrow) == c
        for yv, zv in zip(yrow, zrow):
            assert abs(xv - (yv + zv)) <= TOL


@pytest.mark.parametrize(
    "first_order, gains", [(True, (1.0, 1.0)), (False, (1.0, 1.0, 1.0))]
)
def test_unit_gains_pass_signal_through(first_order, gains):
    rng = random.Random(7)
    x = [gauss(rng) for _ in range(200)]
    cascade = BiquadCascade(1)
    cascade.configure(0, first_order, 0.2, 0.7, gains)
    for a, b in zip(filtered(cascade, x), x):
        assert abs(a - b) <= TOL


def test_filter_type_gains_follow_header():
    assert FilterType.LP_FO.gains == (1.0, 0.0)
    assert FilterType.HP_FO.first_order
    assert not FilterType.BP.first_order
    assert FilterType.HP.gains == (0.0, 0.0, 1.0)
    kind = FilterType.HP
    cascade = BiquadCascade(1)
    cascade.configure(0, kind.first_order, 0.25, 0.8, kind.gains)
    dc = filtered(cascade, [1.0] * BUF_SIZE)
    assert abs(dc[-1]) <= TOL
    nyquist = filtered(cascade, [-1.0 if i % 2 else 1.0 for i in range(BUF_SIZE)])
    assert abs(nyquist[-1] + 1.0) <= TOL


def test_lowpass_type_passes_dc():
    kind = FilterType.LP
    cascade = BiquadCascade(1)
    cascade.configure(0, kind.first_order, 0.25, 0.8, kind.gains)
    out = filtered(cascade, [1.0] * BUF_SIZE)
    assert abs(out[-1] - 1.0) <= TOL


def test_unconfigured_cascade_outputs_silence():
    cascade = BiquadCascade(2)
    assert filtered(cascade, [1.0, -2.0, 3.0]) == [0.0, 0.0, 0.0]


@settings(max_examples=30, deadline=None)
@given(st.lists(st.floats(min_value=-10, max_value=10), min_size=1, max_size=50))
def test_reset_makes_runs_repeatable(signal):
    cascade = random_cascade(random.Random(11))
    first = filtered(cascade, signal)
    second = filtered(cascade, signal)
    assert len(first) == len(signal)
    assert first == second
    doubled = filtered(cascade, [2.0 * v for v in signal])
    for a, b in zip(doubled, first):
        assert abs(a - 2.0 * b) <= TOL


def test_invalid_sizes_raise():
    with pytest.raises(ValueError):
        BiquadCascade(0)
    with pytest.raises(ValueError):
        BiquadCascade(1, 0)


def test_configure_index_out_of_range():
    cascade = BiquadCascade(2)
    with pytest.raises(IndexError):
        cascade.configure(2, True, 0.2, 0.7, (1.0, 0.0))
    with pytest.raises(IndexError):
        cascade.configure(-1, True, 0.2, 0.7, (1.0, 0.0))


def test_configure_requires_enough_gains():
    cascade = BiquadCascade(1)
    with pytest.raises(ValueError):
        cascade.configure(0, False, 0.2, 0.7, (1.0, 0.0))


def test_process_rejects_wrong_frame_width():
    cascade = BiquadCascade(1, 2)
    with pytest.raises(ValueError):
        cascade.process([1.0])
"""Cascaded biquad filters designed from the Audio EQ Cookbook."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum


class FilterType(Enum):
    """Standard responses expressed as the gains taken by ``configure``.

    A first-order section realises ``(g1 * s + g0) / (s + 1)``; a second-order
    section realises ``(g2 * s**2 + g1 * s / Q + g0) / (s**2 + s / Q + 1)``.
    """

    LP_FO = (True, (1.0, 0.0))
    HP_FO = (True, (0.0, 1.0))
    LP = (False, (1.0, 0.0, 0.0))
    BP = (False, (0.0, 1.0, 0.0))
    HP = (False, (0.0, 0.0, 1.0))

    @property
    def first_order(self) -> bool:
        return self.value[0]

    @property
    def gains(self) -> tuple[float, ...]:
        return self.value[1]


@dataclass(frozen=True)
class _Section:
    a1: float = 0.0
    a2: float = 0.0
    b0: float = 0.0
    b1: float = 0.0
    b2: float = 0.0


def _design(first_order: bool, f0: float, q: float, gains: Sequence[float]) -> _Section:
    w0 = 2.0 * math.pi * f0
    cc, ss = math.cos(w0), math.sin(w0)
    a2 = b2 = 0.0
    if first_order:
        if len(gains) < 2:
            raise ValueError("a first-order section needs two gains")
        g0, g1 = gains[0], gains[1]
        x = 1.0 + cc
        a0 = ss + x
        a1 = ss - x
        b0 = g0 * ss + g1 * x
        b1 = g0 * ss - g1 * x
    else:
        if len(gains) < 3:
            raise ValueError("a second-order section needs three gains")
        g0, g1, g2 = gains[0], gains[1], gains[2]
        aa = ss / (2.0 * q)
        a0 = 1.0 + aa
        a1 = -2.0 * cc
        a2 = 1.0 - aa
        lo = 1.0 - cc
        hi = 1.0 + cc
        b0 = g0 * lo * 0.5 + g1 * aa + g2 * hi * 0.5
        b1 = g0 * lo - g2 * hi
        b2 = g0 * lo * 0.5 - g1 * aa + g2 * hi * 0.5
    return _Section(a1 / a0, a2 / a0, b0 / a0, b1 / a0, b2 / a0)


class BiquadCascade:
    """A chain of first- and second-order sections applied to every channel.

    Sections start with all coefficients zero until configured.
    """

    def __init__(self, sections: int, channels: int = 1) -> None:
        if sections < 1:
            raise ValueError(f"a cascade needs at least one section, got {sections}")
        if channels < 1:
            raise ValueError(f"a cascade needs at least one channel, got {channels}")
        self.sections = sections
        self.channels = channels
        self._sections = [_Section() for _ in range(sections)]
        self._history: list[list[list[float]]] = []
        self.reset()

    def reset(self) -> None:
        """Clear the delay lines of every section and channel."""
        self._history = [
            [[0.0, 0.0] for _ in range(self.channels)] for _ in range(self.sections + 1)
        ]

    def configure(
        self,
        index: int,
        first_order: bool,
        f0: float,
        q: float,
        gains: Sequence[float],
    ) -> None:
        """Design section ``index`` at normalised frequency ``f0`` (cycles per sample)."""
        if not 0 <= index < self.sections:
            raise IndexError(f"section {index} out of range for {self.sections} sections")
        self._sections[index] = _design(first_order, f0, q, gains)

    def process(self, frame: Iterable[float]) -> list[float]:
        """Filter one frame holding a sample for each channel."""
        values = [float(v) for v in frame]
        if len(values) != self.channels:
            raise ValueError(f"expected {self.channels} samples, got {len(values)}")
        out = []
        for j, y in enumerate(values):
            for section, before, after in zip(
                self._sections, self._history, self._history[1:]
            ):
                inputs, outputs = before[j], after[j]
                x = y
                y = section.b0 * x + section.b1 * inputs[0] + section.b2 * inputs[1]
                inputs[1], inputs[0] = inputs[0], x
                y = y - section.a1 * outputs[0] - section.a2 * outputs[1]
            last = self._history[-1][j]
            last[1], last[0] = last[0], y
            out.append(y)
        return out

    def run(self, frames: Iterable[Iterable[float]]) -> list[list[float]]:
        """Filter a sequence of frames, keeping state between them."""
        return [self.process(frame) for frame in frames]
"""Reading and writing PCM WAV files as floating-point sample buffers."""

from __future__ import annotations

import os
import struct
import wave
from dataclasses import dataclass, field

from .numeric import clip, round_half_away

_PCM16_SCALE = 0x7FFF


@dataclass
class AudioFile:
    """Samples normalised to ``[-1, 1]``.

    With ``interleaved`` the buffer holds frame after frame; otherwise it
    holds all samples of the first channel, then of the second, and so on.
    """

    rate: float
    channels: int
    samples: int
    buffer: list[float] = field(default_factory=list)
    interleaved: bool = True

    def __post_init__(self) -> None:
        if self.channels < 1:
            raise ValueError(f"an audio file needs at least one channel, got {self.channels}")
        if self.samples < 0:
            raise ValueError(f"sample count cannot be negative, got {self.samples}")
        self.buffer = [float(v) for v in self.buffer]
        if len(self.buffer) != self.channels * self.samples:
            raise ValueError(
                f"buffer holds {len(self.buffer)} values, "
                f"expected {self.channels * self.samples}"
            )


def _decode(raw: bytes, width: int) -> list[float]:
    if width == 1:
        return [(b - 128) / 128 for b in raw]
    scale = 1 << (8 * width - 1)
    return [
        int.from_bytes(chunk, "little", signed=True) / scale
        for (chunk,) in struct.iter_unpack(f"<{width}s", raw)
    ]


def _to_pcm16(value: float) -> int:
    return round(clip(value, -1.0, 1.0) * _PCM16_SCALE)


def read_audio(path: str | os.PathLike[str], interleaved: bool = True) -> AudioFile:
    """Load a PCM WAV file into an ``AudioFile`` with the requested layout."""
    try:
        with wave.open(os.fspath(path), "rb") as wav:
            channels = wav.getnchannels()
            width = wav.getsampwidth()
            rate = wav.getframerate()
            raw = wav.readframes(wav.getnframes())
    except (wave.Error, EOFError) as exc:
        raise ValueError(f"cannot read audio from {os.fspath(path)}: {exc}") from exc
    values = _decode(raw, width)
    samples = len(values) // channels
    values = values[: samples * channels]
    if not interleaved:
        values = [v for j in range(channels) for v in values[j::channels]]
    return AudioFile(
        rate=float(rate),
        channels=channels,
        samples=samples,
        buffer=values,
        interleaved=interleaved,
    )


def write_audio(audio: AudioFile, path: str | os.PathLike[str]) -> None:
    """Write ``audio`` as a 16-bit PCM WAV file, clipping to ``[-1, 1]``."""
    if audio.interleaved:
        values = audio.buffer
    else:
        n = audio.samples
        planes = [audio.buffer[j * n : (j + 1) * n] for j in range(audio.channels)]
        values = [v for frame in zip(*planes) for v in frame]
    payload = struct.pack(f"<{len(values)}h", *(_to_pcm16(v) for v in values))
    rate = round_half_away(audio.rate)
    try:
        with wave.open(os.fspath(path), "wb") as wav:
            wav.setnchannels(audio.channels)
            wav.setsampwidth(2)
            wav.setframerate(rate)
            wav.writeframes(payload)
    except wave.Error as exc:
        raise ValueError(f"cannot write audio to {os.fspath(path)}: {exc}") from exc
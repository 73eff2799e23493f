"""Mixed-radix FFTs, biquad filter cascades and PCM WAV audio I/O."""

__version__ = "0.1.0"
__all__ = ["numeric", "fft", "filter", "audiofile"]
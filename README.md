# sigkit

A small signal-processing toolkit. It uses only the standard library.

- `sigkit.fft.FFT`: complex discrete Fourier transform of any positive
  length. It uses mixed-radix stages with dedicated radix-2, 3 and 4
  butterflies. It tries radices 4, 6 and 2 first, then the smallest prime
  factor.
- `sigkit.fft.RealFFT`: transform of real signals of even length `n` onto
  the `n / 2` odd frequency bins `(2k + 1) / (2n)`. It is built on an
  `FFT` of half the length.
- `sigkit.fft.factorize`: the list of radices the FFT stages use.
- `sigkit.filter.BiquadCascade`: a chain of first- and second-order IIR
  sections, designed from the Audio EQ Cookbook and run over one or more
  channels.
- `sigkit.filter.FilterType`: the standard low-pass, band-pass and
  high-pass responses, given as gain tuples.
- `sigkit.audiofile`: reads and writes PCM WAV files (`read_audio`,
  `write_audio`, `AudioFile`).
- `sigkit.numeric`: scalar helpers `epsilon`, `gauss`, `clip`,
  `round_half_away` and `twiddle`.

## Installation

```
pip install .
```

## FFT

```python
from sigkit.fft import FFT, RealFFT

fft = FFT(12)
spectrum = fft.forward([complex(i, 0) for i in range(12)])
signal = fft.inverse(spectrum)        # scaled by 1 / 12

rfft = RealFFT(16)
half_spectrum = rfft.forward([float(i) for i in range(16)])  # 8 bins
samples = rfft.inverse(half_spectrum)  # 16 real values
```

`forward` and `inverse` take any iterable. They raise `ValueError` if its
length does not match the transform. `FFT` needs a positive size. `RealFFT`
needs a positive even size. Both raise `ValueError` otherwise.

`error_bound()` returns a round-off estimate for the transform, in units of
the working precision. Pass it to `sigkit.numeric.epsilon` to get an
absolute tolerance:

```python
from sigkit.numeric import epsilon

tolerance = epsilon(fft.error_bound())
```

## Filters

```python
from sigkit.filter import BiquadCascade, FilterType

cascade = BiquadCascade(sections=2, channels=1)
# second-order low-pass at 0.1 x sample rate, Q = 0.707
cascade.configure(0, False, 0.1, 0.707, (1.0, 0.0, 0.0))
# first-order high-pass at 0.05 x sample rate (Q is ignored)
hp = FilterType.HP_FO
cascade.configure(1, hp.first_order, 0.05, 1.0, hp.gains)
cascade.reset()
out = cascade.run([[x] for x in (1.0, 0.0, 0.0, 0.0)])
```

`configure(index, first_order, f0, q, gains)` designs one section. `f0` is
a fraction of the sample rate. The gains give these responses:

- first order: `(g1 * s + g0) / (s + 1)`. `g0` is the DC response and
  `g1` the Nyquist response.
- second order: `(g2 * s**2 + g1 * s / Q + g0) / (s**2 + s / Q + 1)`.
  `g0` is the DC response, `g1` the band-pass weight and `g2` the
  high-pass (Nyquist) weight.

A section keeps all coefficients at zero until it is configured, so it
outputs zero. `process(frame)` filters one frame, with one sample per
channel. `run(frames)` filters a sequence of frames. Filter state is kept
between calls until `reset()`. A bad section index raises `IndexError`. A
frame of the wrong length raises `ValueError`.

## Audio files

```python
from sigkit.audiofile import AudioFile, read_audio, write_audio

audio = read_audio("in.wav", interleaved=False)   # planar: channel after channel
write_audio(audio, "out.wav")

tone = AudioFile(rate=8000.0, channels=1, samples=3, buffer=[0.0, 0.5, -0.5])
write_audio(tone, "tone.wav")
```

Samples are floats normalised to `[-1, 1]`. `read_audio` accepts integer
PCM WAV files of 8, 16, 24 or 32 bits per sample. `write_audio` always
writes 16-bit PCM. It clips samples to `[-1, 1]` and rounds the sample rate
to the nearest integer. Both functions raise `ValueError` when the file
cannot be read or written.

## Limits

- There is no command-line tool. The package is a library only.
- Only integer PCM WAV files can be read. Floating-point WAV and other
  audio formats are not supported.

## Tests

```
pip install .[test]
pytest
```
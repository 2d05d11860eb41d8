# color.py

"""
Color Model

Represents a color in additive (RGB) and perceptual (HSL) form and converts
between the two. Explosion palettes are derived by jittering an HSL base
color and converting back to RGB for drawing.

Data Contract:
- Color: r, g, b are ints in [0, 255].
- HslColor: h is in degrees [0, 360), s and l are percentages [0, 100].
- Invariants: Color -> HslColor -> Color reproduces every channel within 1.
"""

import math
import numba
import numpy as np
from typing import NamedTuple

# --- JIT-Compiled Conversion Kernels ---
# Kept outside the color classes and limited to scalar floats, as required by
# Numba's nopython mode.

@numba.jit(nopython=True)
def _rgb_to_hsl_jit(r, g, b):
    """Standard RGB -> HSL conversion. Channels in [0, 255], returns (deg, %, %)."""
    r /= 255.0
    g /= 255.0
    b /= 255.0
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2.0

    if high == low:
        # Achromatic: hue is undefined, report 0.
        return 0.0, 0.0, lightness * 100.0

    delta = high - low
    if lightness > 0.5:
        saturation = delta / (2.0 - high - low)
    else:
        saturation = delta / (high + low)

    if high == r:
        hue = (g - b) / delta
        if g < b:
            hue += 6.0
    elif high == g:
        hue = (b - r) / delta + 2.0
    else:
        hue = (r - g) / delta + 4.0

    return hue * 60.0, saturation * 100.0, lightness * 100.0

@numba.jit(nopython=True)
def _hue_to_channel_jit(p, q, t):
    if t < 0.0:
        t += 1.0
    if t > 1.0:
        t -= 1.0
    if t < 1.0 / 6.0:
        return p + (q - p) * 6.0 * t
    if t < 0.5:
        return q
    if t < 2.0 / 3.0:
        return p + (q - p) * (2.0 / 3.0 - t) * 6.0
    return p

@numba.jit(nopython=True)
def _to_byte_jit(channel):
    value = float(math.floor(channel * 255.0 + 0.5))
    return min(max(value, 0.0), 255.0)

@numba.jit(nopython=True)
def _hsl_to_rgb_jit(h, s, l):
    """Standard HSL -> RGB conversion. Returns byte-valued floats."""
    h = (h % 360.0) / 360.0
    s = min(max(s, 0.0), 100.0) / 100.0
    l = min(max(l, 0.0), 100.0) / 100.0

    if s == 0.0:
        grey = _to_byte_jit(l)
        return grey, grey, grey

    if l < 0.5:
        q = l * (1.0 + s)
    else:
        q = l + s - l * s
    p = 2.0 * l - q

    return (
        _to_byte_jit(_hue_to_channel_jit(p, q, h + 1.0 / 3.0)),
        _to_byte_jit(_hue_to_channel_jit(p, q, h)),
        _to_byte_jit(_hue_to_channel_jit(p, q, h - 1.0 / 3.0)),
    )


def round_half_away(value):
    """
    Rounds to the nearest integer, ties away from zero.
    Accepts scalars or NumPy arrays.
    """
    return np.copysign(np.floor(np.abs(value) + 0.5), value)


class Color(NamedTuple):
    """An opaque RGB color. Being a tuple, it can be handed straight to pygame."""
    r: int
    g: int
    b: int

    @classmethod
    def from_rgb(cls, r, g, b) -> "Color":
        return cls(int(r), int(g), int(b))

    def as_hsl(self) -> "HslColor":
        return HslColor(*_rgb_to_hsl_jit(float(self.r), float(self.g), float(self.b)))

    def scaled(self, factor: float) -> "Color":
        """
        Returns this color with every channel multiplied by `factor`,
        rounded to the nearest level and clamped to [0, 255].
        """
        channels = np.clip(round_half_away(np.array(self, dtype=float) * factor), 0, 255)
        return Color.from_rgb(*channels)


class HslColor(NamedTuple):
    """A color as hue (degrees), saturation (%) and lightness (%)."""
    h: float
    s: float
    l: float

    @classmethod
    def from_rgb(cls, color: Color) -> "HslColor":
        return color.as_hsl()

    def as_rgb(self) -> Color:
        return Color.from_rgb(*_hsl_to_rgb_jit(float(self.h), float(self.s), float(self.l)))

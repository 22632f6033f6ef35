"""
Color helpers: pure functions on (r, g, b) tuples in 0..255.

HSL values follow the CSS convention: hue in degrees, saturation and
lightness in percent.
"""

from typing import Callable, Tuple

RGB = Tuple[int, int, int]


def hex_to_rgb(value: str) -> RGB:
    """'#b7183c' or 'b7183c' (or the 3-digit short form) → (183, 24, 60)."""
    digits = value.lstrip('#')
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    if len(digits) != 6:
        raise ValueError(f"Not a hex color: {value!r}")
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def rgb_to_css(rgb: RGB) -> str:
    r, g, b = rgb
    return f"rgb({r}, {g}, {b})"


def map_range(in_min: float, in_max: float,
              out_min: float, out_max: float, value: float) -> float:
    """Linearly remap value from [in_min, in_max] onto [out_min, out_max]."""
    if in_max == in_min:
        return out_min
    return out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min)


def interpolate(start: RGB, end: RGB) -> Callable[[float], RGB]:
    """Two-stop gradient: returns f(progress) with f(0) = start, f(1) = end."""
    def color_at(progress: float) -> RGB:
        return tuple(int(round(a + (b - a) * progress))
                     for a, b in zip(start, end))
    return color_at


def rgb_to_hsl(r: float, g: float, b: float) -> Tuple[float, float, float]:
    r, g, b = r / 255.0, g / 255.0, b / 255.0
    hi, lo = max(r, g, b), min(r, g, b)
    l = (hi + lo) / 2

    if hi == lo:
        h = s = 0.0  # achromatic
    else:
        d = hi - lo
        s = d / (2 - hi - lo) if l > 0.5 else d / (hi + lo)
        if hi == r:
            h = (g - b) / d + (6 if g < b else 0)
        elif hi == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4
        h /= 6

    return h * 360, s * 100, l * 100


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[float, float, float]:
    h, s, l = h / 360, s / 100, l / 100

    if s == 0:
        r = g = b = l  # achromatic
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)

    return r * 255, g * 255, b * 255


def saturate(rgb: RGB, amount: float) -> RGB:
    """Raise HSL saturation by `amount` percent points, capped at 100."""
    h, s, l = rgb_to_hsl(*rgb)
    s = min(100.0, s + amount)
    return tuple(int(round(c)) for c in hsl_to_rgb(h, s, l))

"""Colour helpers exposed to templates.

All functions are pure. `color` may be a Color or a hex string; strings go
through Color.parse so template authors can pass literals directly:

    {{ with_alpha(light.primary, 0.2) }}          -> #11223333
    {{ rgba(color=dark.background, alpha=0.85) }} -> rgba(13, 17, 23, 0.850)
    {{ hsla(accents.info, 0.6) }}                 -> hsla(198.675, 0.648, 0.543, 0.600)
    {{ rgba_floats(light.text, 1) }}              -> 0.901961 0.929412 0.952941 1.000000
    {{ light.primary | lowercase }}

The string formatters print `alpha` as given, without clamping. with_alpha
has to produce a valid channel, so it rejects alpha outside [0, 1].
"""

from __future__ import annotations

import math
from collections.abc import Callable

from veneer.core.color import Color

_ASCII_LOWER = str.maketrans('ABCDEFGHIJKLMNOPQRSTUVWXYZ', 'abcdefghijklmnopqrstuvwxyz')


def _as_color(color: Color | str) -> Color:
    if isinstance(color, Color):
        return color
    return Color.parse(color)


def round_half_up(value: float) -> int:
    """Round to nearest int, .5 away from zero for positive values (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def with_alpha(color: Color | str, alpha: float) -> Color:
    """Same RGB, alpha channel set to round(alpha * 255)."""
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f'alpha must be between 0.0 and 1.0, got {alpha}')
    c = _as_color(color)
    return Color(c.r, c.g, c.b, round_half_up(alpha * 255))


def rgba_css(color: Color | str, alpha: float) -> str:
    c = _as_color(color)
    return f'rgba({c.r}, {c.g}, {c.b}, {alpha:.3f})'


def hsla_css(color: Color | str, alpha: float) -> str:
    h, s, lightness = _as_color(color).as_hsl()
    return f'hsla({h:.3f}, {s:.3f}, {lightness:.3f}, {alpha:.3f})'


def rgba_floats(color: Color | str, alpha: float) -> str:
    """Space-separated unit floats: 'r g b a', six decimals each."""
    r, g, b, _a = _as_color(color).as_unit_floats()
    return f'{r:.6f} {g:.6f} {b:.6f} {alpha:.6f}'


def lowercase(text: Color | str) -> str:
    """ASCII-only lowercase. Non-ASCII letters are left alone."""
    if isinstance(text, Color):
        text = text.to_hex()
    if not isinstance(text, str):
        raise TypeError(f'lowercase filter expects a string, got {type(text).__name__}')
    return text.translate(_ASCII_LOWER)


# Names the template engine sees
HELPERS: dict[str, Callable[[Color | str, float], Color | str]] = {
    'with_alpha': with_alpha,
    'rgba': rgba_css,
    'hsla': hsla_css,
    'rgba_floats': rgba_floats,
}

FILTERS: dict[str, Callable[[Color | str], str]] = {
    'lowercase': lowercase,
}

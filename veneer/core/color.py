"""Colour codec: `#rrggbb[aa]` literals to RGBA values and back.

A Color is immutable. Its canonical text form is lowercase hex with 6 digits
when fully opaque and 8 digits otherwise; str() returns that form so colours
drop straight into rendered templates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from veneer.core.errors import InvalidColorFormat

HEX_RE = re.compile(r'#([0-9A-Fa-f]{6})([0-9A-Fa-f]{2})?')


@dataclass(frozen=True)
class Color:
    """An 8-bit-per-channel RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ('r', 'g', 'b', 'a'):
            value = getattr(self, name)
            # bool is an int subclass but never a channel
            if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 255:
                raise ValueError(f'channel {name} must be an int in [0, 255], got {value!r}')

    @classmethod
    def parse(cls, text: str) -> Color:
        """Parse `#RRGGBB` or `#RRGGBBAA` (any case)."""
        m = HEX_RE.fullmatch(text) if isinstance(text, str) else None
        if not m:
            raise InvalidColorFormat(text)
        rgb, alpha = m.group(1), m.group(2)
        return cls(
            int(rgb[0:2], 16),
            int(rgb[2:4], 16),
            int(rgb[4:6], 16),
            int(alpha, 16) if alpha else 255,
        )

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        if self.a == 255:
            return f'#{self.r:02x}{self.g:02x}{self.b:02x}'
        return f'#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}'

    def as_unit_floats(self) -> tuple[float, float, float, float]:
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a / 255.0)

    def as_hsl(self) -> tuple[float, float, float]:
        """Standard RGB -> HSL. Hue in degrees [0, 360), saturation and lightness in [0, 1]."""
        r, g, b, _a = self.as_unit_floats()
        hi = max(r, g, b)
        lo = min(r, g, b)
        lightness = (hi + lo) / 2.0

        # Compare the integer channels so greys are detected exactly
        if max(self.rgb) == min(self.rgb):
            return (0.0, 0.0, lightness)

        d = hi - lo
        if lightness > 0.5:
            saturation = d / (2.0 - hi - lo)
        else:
            saturation = d / (hi + lo)

        if hi == r:
            hue = ((g - b) / d) % 6.0
        elif hi == g:
            hue = (b - r) / d + 2.0
        else:
            hue = (r - g) / d + 4.0
        hue *= 60.0
        if hue >= 360.0:
            hue -= 360.0
        return (hue, saturation, lightness)

    def luminance(self) -> float:
        """Perceived brightness in [0, 1] (Rec. 601 weights)."""
        return (0.299 * self.r + 0.587 * self.g + 0.114 * self.b) / 255.0

    def __str__(self) -> str:
        return self.to_hex()

"""Report builder — swatch table, JSON dump, and error diagnostics for the CLI."""

import json
from pathlib import Path

from veneer.core.color import Color
from veneer.core.errors import (
    CyclicReference,
    DanglingReference,
    InvalidColorFormat,
    MalformedDocument,
    PaletteFileError,
    RenderError,
)
from veneer.core.types import ANSI_NAMES, ResolvedPalette

SECTION_TITLES = {
    'colors.light': 'Colors (Light)',
    'colors.dark': 'Colors (Dark)',
    'accents': 'Accents',
    'ansi.light.normal': 'ANSI (Light / Normal)',
    'ansi.light.bright': 'ANSI (Light / Bright)',
    'ansi.dark.normal': 'ANSI (Dark / Normal)',
    'ansi.dark.bright': 'ANSI (Dark / Bright)',
}

SWATCH_WIDTH = 6
MIN_LABEL_WIDTH = 8


def swatch(color: Color, ansi: bool = True) -> str:
    """A block of 24-bit background colour, with black or white text depending on luminance."""
    if not ansi:
        return ' ' * SWATCH_WIDTH
    text = 255 if color.luminance() < 0.5 else 0
    r, g, b = color.rgb
    return f'\x1b[48;2;{r};{g};{b}m\x1b[38;2;{text};{text};{text}m{" " * SWATCH_WIDTH}\x1b[0m'


def label_width(palette: ResolvedPalette) -> int:
    names = [name for leaves in palette.sections.values() for name in leaves]
    return max([len(n) for n in names + list(ANSI_NAMES)] + [MIN_LABEL_WIDTH])


def format_text(palette: ResolvedPalette, palette_path: str | Path | None = None, ansi: bool = True) -> str:
    """Format the palette as sections of key / swatch / hex rows."""
    lines = []
    header = f'Palette: {palette.meta.name}'
    if palette_path:
        header += f' ({palette_path})'
    lines.append(header)
    if palette.meta.version:
        lines.append(f'Version: {palette.meta.version}')
    lines.append(f'Slug: {palette.meta.slug or "<none>"}')
    lines.append('')

    width = label_width(palette)
    for section, leaves in palette.sections.items():
        if not leaves:
            continue
        lines.append(SECTION_TITLES.get(section, section))
        lines.append(f'{"key":<{width}}  {"swatch":<{SWATCH_WIDTH}}  hex')
        lines.append(f'{"":-<{width}}  {"":-<{SWATCH_WIDTH}}  ----')
        for name, color in leaves.items():
            lines.append(f'{name:<{width}}  {swatch(color, ansi)}  {color.to_hex()}')
        lines.append('')
    return '\n'.join(lines)


def format_json(palette: ResolvedPalette) -> str:
    """Format the resolved palette as JSON, shaped like the source TOML."""
    return json.dumps(palette.to_dict(), indent=2)


def format_error(err: Exception) -> str:
    """One-line diagnostic for an error raised by the core."""
    if isinstance(err, MalformedDocument):
        where = err.path or 'document'
        return f'malformed palette: {where}: {err.reason}'
    if isinstance(err, InvalidColorFormat):
        if err.path:
            return f'{err.path} has invalid hex colour: {err.text!r}'
        return f'invalid hex colour: {err.text!r}'
    if isinstance(err, DanglingReference):
        return (
            f'{err.path} references missing path {err.target_path!r}; '
            'expected colors.*, accents.*, or ansi.*.*.* pointing at a colour'
        )
    if isinstance(err, CyclicReference):
        return f'cycle detected: {" -> ".join(err.cycle)}'
    if isinstance(err, PaletteFileError):
        return f'{err.path}: {err.reason}'
    if isinstance(err, RenderError):
        return f'{err.template}: {err.reason}'
    return str(err)

"""PNG swatch sheet: one row per palette section, one square cell per colour.

Built as an RGBA numpy array and handed to PIL. Cells keep the colour's own
alpha; the gaps between cells are transparent.
"""

from pathlib import Path

import numpy as np
from PIL import Image

from veneer.core.errors import RenderError
from veneer.core.types import ResolvedPalette

CELL_SIZE = 48
GAP = 4


def swatch_sheet(palette: ResolvedPalette, cell: int = CELL_SIZE, gap: int = GAP) -> Image.Image:
    rows = [list(leaves.values()) for leaves in palette.sections.values() if leaves]
    cols = max((len(row) for row in rows), default=1)
    height = len(rows) * (cell + gap) + gap
    width = cols * (cell + gap) + gap

    arr = np.zeros((height, width, 4), dtype=np.uint8)
    for i, row in enumerate(rows):
        y = gap + i * (cell + gap)
        for j, color in enumerate(row):
            x = gap + j * (cell + gap)
            arr[y : y + cell, x : x + cell] = (color.r, color.g, color.b, color.a)
    return Image.fromarray(arr)


def save_swatch_sheet(palette: ResolvedPalette, path: str | Path) -> Path:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        swatch_sheet(palette).save(path, format='PNG')
    except OSError as exc:
        raise RenderError(str(path), f'cannot write swatch sheet: {exc}') from exc
    return path

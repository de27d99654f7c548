"""Palette facade: decoded document -> ResolvedPalette.

load_and_resolve is the single entry point for callers that already hold a
decoded mapping. load_palette_file adds the TOML read in front of it.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from veneer.core.document import Document, parse_document
from veneer.core.errors import PaletteFileError
from veneer.core.resolver import Resolver
from veneer.core.types import ResolvedPalette


def load_and_resolve(document: Mapping[str, Any] | Document) -> ResolvedPalette:
    """Parse (if needed) and resolve a palette document. Raises a PaletteError subclass on failure."""
    if not isinstance(document, Document):
        document = parse_document(document)
    return Resolver(document).resolve()


def read_palette_file(path: str | Path) -> dict[str, Any]:
    """Read and decode a palette TOML file."""
    path = Path(path)
    try:
        with open(path, 'rb') as f:
            return tomllib.load(f)
    except OSError as exc:
        raise PaletteFileError(str(path), exc.strerror or str(exc)) from exc
    except tomllib.TOMLDecodeError as exc:
        raise PaletteFileError(str(path), f'invalid TOML: {exc}') from exc


def load_palette_file(path: str | Path) -> ResolvedPalette:
    return load_and_resolve(read_palette_file(path))

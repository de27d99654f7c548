"""Exception hierarchy for veneer.

Palette errors carry structured context (offending paths and text) as
attributes. Turning them into user-facing text is the CLI's job, see
veneer.core.report.format_error.
"""

from __future__ import annotations


class VeneerError(Exception):
    """Base exception for all veneer errors."""


class PaletteError(VeneerError):
    """The palette document could not be resolved."""


class MalformedDocument(PaletteError):
    """A section or leaf has the wrong shape."""

    def __init__(self, path: str, reason: str):
        super().__init__(path, reason)
        self.path = path
        self.reason = reason


class InvalidColorFormat(PaletteError):
    """A literal is not `#` followed by 6 or 8 hex digits."""

    def __init__(self, text: str, path: str | None = None):
        super().__init__(text, path)
        self.text = text
        self.path = path


class DanglingReference(PaletteError):
    """A reference points at a path that is missing or is not a leaf."""

    def __init__(self, path: str, target_path: str):
        super().__init__(path, target_path)
        self.path = path
        self.target_path = target_path


class CyclicReference(PaletteError):
    """A reference chain came back to a path still being resolved.

    `cycle` runs from the first repeated path back to itself, so a
    self-reference at P is reported as (P, P).
    """

    def __init__(self, cycle: tuple[str, ...]):
        super().__init__(cycle)
        self.cycle = cycle


class PaletteFileError(VeneerError):
    """The palette file could not be read or is not valid TOML."""

    def __init__(self, path: str, reason: str):
        super().__init__(path, reason)
        self.path = path
        self.reason = reason


class RenderError(VeneerError):
    """A template failed to load, render, or be written out."""

    def __init__(self, template: str, reason: str):
        super().__init__(template, reason)
        self.template = template
        self.reason = reason

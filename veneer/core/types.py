"""Shared types for veneer: Meta, ResolvedPalette, Command."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from veneer.core.color import Color

# Colour-bearing sections, in document order
SECTIONS = (
    'colors.light',
    'colors.dark',
    'accents',
    'ansi.light.normal',
    'ansi.light.bright',
    'ansi.dark.normal',
    'ansi.dark.bright',
)

ANSI_NAMES = ('black', 'red', 'green', 'yellow', 'blue', 'magenta', 'cyan', 'white')


@dataclass(frozen=True)
class Meta:
    """The [meta] table. Opaque to the resolver."""

    name: str
    version: str | None = None
    slug: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Present fields only. An absent version or slug is left out, not None."""
        fields = {'name': self.name, 'version': self.version, 'slug': self.slug}
        return {key: value for key, value in fields.items() if value is not None}


@dataclass(frozen=True)
class ResolvedPalette:
    """Every colour-bearing section with each leaf reduced to a Color.

    `sections` maps a section path ('colors.light', 'ansi.dark.bright', ...)
    to a read-only mapping of leaf name -> Color, in document order.
    """

    meta: Meta
    sections: Mapping[str, Mapping[str, Color]]

    @classmethod
    def build(cls, meta: Meta, sections: Mapping[str, Mapping[str, Color]]) -> ResolvedPalette:
        frozen = {name: MappingProxyType(dict(leaves)) for name, leaves in sections.items()}
        return cls(meta=meta, sections=MappingProxyType(frozen))

    def section(self, path: str) -> Mapping[str, Color]:
        if path not in self.sections:
            raise KeyError(f'Unknown section: {path}. Available: {", ".join(self.sections)}')
        return self.sections[path]

    @property
    def light(self) -> Mapping[str, Color]:
        return self.section('colors.light')

    @property
    def dark(self) -> Mapping[str, Color]:
        return self.section('colors.dark')

    @property
    def accents(self) -> Mapping[str, Color]:
        return self.section('accents')

    @property
    def ansi(self) -> dict[str, dict[str, Mapping[str, Color]]]:
        """ansi[tone][level][name], e.g. ansi['dark']['bright']['red']."""
        return {
            tone: {level: self.section(f'ansi.{tone}.{level}') for level in ('normal', 'bright')}
            for tone in ('light', 'dark')
        }

    def get(self, path: str) -> Color:
        """Look up one colour by dotted path, e.g. 'colors.dark.primary'."""
        section, _, name = path.rpartition('.')
        return self.section(section)[name]

    def items(self) -> Iterator[tuple[str, Color]]:
        for section, leaves in self.sections.items():
            for name, color in leaves.items():
                yield f'{section}.{name}', color

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dict with hex strings, shaped like the source document."""
        out: dict[str, Any] = {'meta': self.meta.to_dict()}
        for section, leaves in self.sections.items():
            node = out
            for segment in section.split('.'):
                node = node.setdefault(segment, {})
            node.update({name: color.to_hex() for name, color in leaves.items()})
        return out


class Command:
    """A self-registering CLI subcommand.

    Usage in a command module:

        command = Command(name='show', help='Print palette swatches')

        @command.arguments
        def arguments(parser):
            parser.add_argument('--json', action='store_true')

        @command.run
        def run(args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._arguments_fn: Callable[[argparse.ArgumentParser], None] | None = None
        self._run_fn: Callable | None = None

    def arguments(self, fn: Callable[[argparse.ArgumentParser], None]) -> Callable:
        """Decorator to register the function that adds this command's arguments."""
        self._arguments_fn = fn
        return fn

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def configure(self, parser: argparse.ArgumentParser) -> None:
        if self._arguments_fn is not None:
            self._arguments_fn(parser)

    def execute(self, args: argparse.Namespace) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(args)

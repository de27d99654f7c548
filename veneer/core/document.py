"""Palette document model.

Turns an already-decoded TOML mapping into a Document: a flat arena keyed by
dotted path ('colors.light.primary') whose values are Literal or Reference
leaves. Each leaf is classified exactly once, here:

  - a string starting with '#' is a Literal; its hex syntax is only checked
    when the resolver needs the value, so a bad literal and a bad reference
    fail with different errors
  - any other string is a Reference, split on '.'

Shape problems (missing section, non-string leaf, incomplete ANSI row) raise
MalformedDocument immediately.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from veneer.core.errors import MalformedDocument
from veneer.core.types import ANSI_NAMES, SECTIONS, Meta


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Reference:
    segments: tuple[str, ...]

    @property
    def target(self) -> str:
        return '.'.join(self.segments)


Leaf = Literal | Reference


@dataclass
class Document:
    """Parsed palette: meta, every leaf by dotted path, and section layout."""

    meta: Meta
    leaves: dict[str, Leaf] = field(default_factory=dict)
    sections: dict[str, tuple[str, ...]] = field(default_factory=dict)  # section path -> leaf names

    def lookup(self, path: str) -> Leaf | None:
        return self.leaves.get(path)

    def paths(self) -> Iterator[str]:
        """All leaf paths in document order."""
        for section, names in self.sections.items():
            for name in names:
                yield f'{section}.{name}'


def classify_leaf(path: str, value: Any) -> Leaf:
    if not isinstance(value, str):
        raise MalformedDocument(path, f'expected a colour string, got {type(value).__name__}')
    if value.startswith('#'):
        return Literal(value)
    segments = tuple(value.split('.'))
    if not all(segments):
        raise MalformedDocument(path, f'reference {value!r} has an empty path segment')
    return Reference(segments)


def parse_document(raw: Mapping[str, Any]) -> Document:
    """Build a Document from a decoded nested mapping."""
    if not isinstance(raw, Mapping):
        raise MalformedDocument('', f'document must be a table, got {type(raw).__name__}')

    doc = Document(meta=_parse_meta(raw.get('meta')))
    for section in SECTIONS:
        table = _lookup_table(raw, section)
        if section.startswith('ansi.'):
            _check_ansi_row(section, table)
        names = []
        for key, value in table.items():
            if not key or '.' in key:
                raise MalformedDocument(section, f'invalid key {key!r}')
            path = f'{section}.{key}'
            doc.leaves[path] = classify_leaf(path, value)
            names.append(key)
        doc.sections[section] = tuple(names)
    return doc


def _parse_meta(meta: Any) -> Meta:
    if meta is None:
        raise MalformedDocument('meta', 'missing section')
    if not isinstance(meta, Mapping):
        raise MalformedDocument('meta', f'expected a table, got {type(meta).__name__}')
    name = meta.get('name')
    if not isinstance(name, str):
        raise MalformedDocument('meta.name', 'required string is missing')
    for key in ('version', 'slug'):
        value = meta.get(key)
        if value is not None and not isinstance(value, str):
            raise MalformedDocument(f'meta.{key}', f'expected a string, got {type(value).__name__}')
    return Meta(name=name, version=meta.get('version'), slug=meta.get('slug'))


def _lookup_table(raw: Mapping[str, Any], section: str) -> Mapping[str, Any]:
    """Walk a dotted section path, checking every step is a table."""
    node: Any = raw
    walked: list[str] = []
    for segment in section.split('.'):
        walked.append(segment)
        here = '.'.join(walked)
        if segment not in node:
            raise MalformedDocument(here, 'missing section')
        node = node[segment]
        if not isinstance(node, Mapping):
            raise MalformedDocument(here, f'expected a table, got {type(node).__name__}')
    return node


def _check_ansi_row(section: str, table: Mapping[str, Any]) -> None:
    missing = [name for name in ANSI_NAMES if name not in table]
    if missing:
        raise MalformedDocument(section, f'missing ANSI colours: {", ".join(missing)}')
    extra = sorted(set(table) - set(ANSI_NAMES))
    if extra:
        raise MalformedDocument(section, f'unknown ANSI colours: {", ".join(extra)}')

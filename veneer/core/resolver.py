"""Reference resolver: reduce every leaf of a Document to a Color.

Each leaf path carries one of three states, kept in a flat dict private to a
single Resolver:

    UNVISITED -> IN_PROGRESS -> RESOLVED

Hitting an IN_PROGRESS path means the reference chain has looped. The chain
of paths currently being resolved is kept alongside so the error can name
the exact cycle. Results are memoised, so the palette is the same whatever
order the leaves are visited in.

Resolution is all-or-nothing: the first bad leaf aborts the run.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable

from veneer.core.color import Color
from veneer.core.document import Document, Literal
from veneer.core.errors import CyclicReference, DanglingReference, InvalidColorFormat
from veneer.core.types import ResolvedPalette


class LeafState(enum.Enum):
    UNVISITED = 'unvisited'
    IN_PROGRESS = 'in_progress'
    RESOLVED = 'resolved'


class Resolver:
    """One resolution pass over one Document. Not reusable across documents."""

    def __init__(self, document: Document):
        self._doc = document
        self._state: dict[str, LeafState] = dict.fromkeys(document.leaves, LeafState.UNVISITED)
        self._colors: dict[str, Color] = {}
        self._chain: list[str] = []

    def state(self, path: str) -> LeafState:
        return self._state[path]

    def resolve(self, order: Iterable[str] | None = None) -> ResolvedPalette:
        """Resolve every leaf, visiting them in `order` (default: document order)."""
        for path in order if order is not None else self._doc.paths():
            self.resolve_path(path)
        # Paths not named in `order` still have to resolve
        for path in self._doc.paths():
            self.resolve_path(path)

        sections = {
            section: {name: self._colors[f'{section}.{name}'] for name in names}
            for section, names in self._doc.sections.items()
        }
        return ResolvedPalette.build(self._doc.meta, sections)

    def resolve_path(self, path: str) -> Color:
        """Resolve the leaf at `path`. Raises KeyError if there is no such leaf.

        The reference chain is followed iteratively, so its length is not bounded
        by the interpreter's recursion limit. If resolution fails, every path
        pushed by this call goes back to UNVISITED.
        """
        state = self._state[path]
        if state is LeafState.RESOLVED:
            return self._colors[path]

        base = len(self._chain)
        current = path
        try:
            while True:
                state = self._state[current]
                if state is LeafState.RESOLVED:
                    color = self._colors[current]
                    break
                if state is LeafState.IN_PROGRESS:
                    start = self._chain.index(current)
                    raise CyclicReference(tuple(self._chain[start:]) + (current,))

                self._state[current] = LeafState.IN_PROGRESS
                self._chain.append(current)

                leaf = self._doc.leaves[current]
                if isinstance(leaf, Literal):
                    try:
                        color = Color.parse(leaf.text)
                    except InvalidColorFormat:
                        raise InvalidColorFormat(leaf.text, path=current) from None
                    break

                target = leaf.target
                if self._doc.lookup(target) is None:
                    raise DanglingReference(current, target)
                current = target

            for hop in self._chain[base:]:
                self._state[hop] = LeafState.RESOLVED
                self._colors[hop] = color
        finally:
            for hop in self._chain[base:]:
                if self._state[hop] is LeafState.IN_PROGRESS:
                    self._state[hop] = LeafState.UNVISITED
            del self._chain[base:]
        return color


def resolve_document(document: Document, order: Iterable[str] | None = None) -> ResolvedPalette:
    return Resolver(document).resolve(order)

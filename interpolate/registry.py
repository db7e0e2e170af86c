"""Identifier registry for named placeholders."""

from __future__ import annotations

from bisect import insort
from collections.abc import Iterator


class IdentifierRegistry:
    """Deduplicated identifier set with sorted iteration and stable slots.

    Two views are kept: the sorted names returned to callers, and the order of
    first occurrence, which decides each name's slot. Slots returned by
    ``register`` are relative to the start of the named block; the renderer
    shifts them past any positional slots the template uses.
    """

    __slots__ = ("_slots", "_sorted")

    def __init__(self) -> None:
        self._slots: dict[str, int] = {}
        self._sorted: list[str] = []

    def register(self, name: str) -> int:
        slot = self._slots.get(name)
        if slot is None:
            slot = len(self._slots)
            self._slots[name] = slot
            insort(self._sorted, name)
        return slot

    def slots(self, *, offset: int = 0) -> dict[str, int]:
        """Return ``name -> slot`` in first-occurrence order."""
        return {name: offset + slot for name, slot in self._slots.items()}

    @property
    def identifiers(self) -> tuple[str, ...]:
        return tuple(self)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sorted)

    def __len__(self) -> int:
        return len(self._sorted)

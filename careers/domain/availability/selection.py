"""The candidate's in-progress set of picked half-hour cells."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Iterator

from careers.domain.availability.slot_keys import decode


def group_by_date(keys: Iterable[str]) -> dict[date, list[str]]:
    """Map each date to its sorted start times; dates come out in ascending order."""
    grouped: defaultdict[date, list[str]] = defaultdict(list)
    for key in keys:
        day, start_time = decode(key)
        grouped[day].append(start_time)
    return {day: sorted(grouped[day]) for day in sorted(grouped)}


class SelectionSet:
    """
    Unordered set of slot keys with click and drag semantics.

    ``toggle`` flips one cell. ``drag_extend`` only ever adds, so dragging
    across an already-picked cell keeps it picked. Every key is decoded on the
    way in, so a bad key fails here rather than at save time.
    """

    def __init__(self, keys: Iterable[str] = ()):
        self._keys: set[str] = set()
        for key in keys:
            self.add(key)

    def add(self, key: str) -> None:
        decode(key)
        self._keys.add(key)

    def toggle(self, key: str) -> bool:
        """Flip ``key``; return True when it ends up selected."""
        decode(key)
        if key in self._keys:
            self._keys.remove(key)
            return False
        self._keys.add(key)
        return True

    def drag_extend(self, key: str) -> None:
        self.add(key)

    def clear(self) -> None:
        self._keys.clear()

    def copy(self) -> "SelectionSet":
        clone = SelectionSet()
        clone._keys = set(self._keys)
        return clone

    def group_by_date(self) -> dict[date, list[str]]:
        return group_by_date(self._keys)

    def keys(self) -> frozenset[str]:
        return frozenset(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._keys))

    def __len__(self) -> int:
        return len(self._keys)

    def __bool__(self) -> bool:
        return bool(self._keys)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SelectionSet):
            return self._keys == other._keys
        if isinstance(other, (set, frozenset)):
            return self._keys == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"SelectionSet({sorted(self._keys)!r})"


__all__ = ["SelectionSet", "group_by_date"]

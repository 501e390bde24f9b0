"""
Key map and position map kept alongside the backing list.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence

from .document import get_key


class KeyIndex:
    def __init__(self, key_field: str) -> None:
        self.key_field = key_field
        # key -> element
        self.by_key: dict[Hashable, object] = {}
        # key -> position in the backing list
        self.position_of: dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self.by_key)

    def register(self, item: object) -> None:
        self.by_key[get_key(item, self.key_field)] = item

    def discard(self, key: Hashable) -> None:
        self.by_key.pop(key, None)
        self.position_of.pop(key, None)

    def update_positions(self, elements: Sequence[object], start: int = 0) -> None:
        """
        Record positions for `elements[start:]` without touching earlier entries.
        """
        for position in range(start, len(elements)):
            self.position_of[get_key(elements[position], self.key_field)] = position

    def reindex_positions(self, elements: Sequence[object]) -> None:
        self.position_of.clear()
        self.update_positions(elements)

    def rebuild(self, elements: Sequence[object]) -> None:
        """
        Rebuild both maps from scratch with one scan over `elements`.
        """
        self.by_key.clear()
        self.position_of.clear()
        for position, item in enumerate(elements):
            key = get_key(item, self.key_field)
            self.by_key[key] = item
            self.position_of[key] = position

    def lookup(self, key: Hashable) -> object | None:
        return self.by_key.get(key)

    def position(self, key: Hashable) -> int:
        return self.position_of.get(key, -1)

"""
Ordered sequence of records with O(1) lookup, replacement and deletion by key.

The backing list, the key map and the position map are kept in sync by every
public method. Writing through the backing list directly bypasses the maps
and is not supported.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator, Sequence
from typing import overload

from .document import get_key, merge_into, normalize_input, require_key, require_keys
from .errors import EmptyCollectionError, KeyNotFoundError
from .index import KeyIndex

BULK_CHUNK_SIZE = 10_000
DEFAULT_KEY_FIELD = "id"


def is_sequence_like(obj: object) -> bool:
    """
    True for lists, tuples, IndexedSequence and other non-string sequences.

    Named tuples are records, not sequences of elements, and return False.
    """
    if isinstance(obj, tuple) and hasattr(obj, "_fields"):
        return False
    return isinstance(obj, Sequence) and not isinstance(obj, (str, bytes, bytearray))


class IndexedSequence(Sequence):
    """
    List-like container that also indexes its elements by one key field.
    """

    def __init__(
        self,
        data: object = None,
        key_field: str = DEFAULT_KEY_FIELD,
        chunk_size: int = BULK_CHUNK_SIZE,
    ) -> None:
        """
        `data` may be None, an iterable of records, or a mapping whose values
        are the records. A bare string is rejected with TypeError rather than
        taken as the key field name; pass `key_field=` instead.
        """
        if not isinstance(chunk_size, int) or chunk_size <= 0:
            raise ValueError("chunk_size must be a positive integer")
        self._key_field = key_field
        self.chunk_size = chunk_size
        self._elements: list[object] = []
        self._index = KeyIndex(key_field)
        self.bulk_append_end(normalize_input(data))

    @property
    def key_field(self) -> str:
        return self._key_field

    @property
    def elements(self) -> list[object]:
        """
        The backing list. Read it freely; never assign through it.
        """
        return self._elements

    # --- sequence protocol ------------------------------------------------

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[object]:
        return iter(self._elements)

    @overload
    def __getitem__(self, position: int) -> object: ...

    @overload
    def __getitem__(self, position: slice) -> IndexedSequence: ...

    def __getitem__(self, position):
        if isinstance(position, slice):
            return self._derive(self._elements[position])
        return self._elements[position]

    def __contains__(self, item: object) -> bool:
        return item in self._elements

    def __add__(self, other: object) -> IndexedSequence:
        return self.concat(other)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IndexedSequence):
            return self._key_field == other._key_field and self._elements == other._elements
        if isinstance(other, list):
            return self._elements == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._elements!r}, key_field={self._key_field!r})"

    def to_list(self) -> list[object]:
        return list(self._elements)

    # --- insertion --------------------------------------------------------

    def append_end(self, *items: object) -> int:
        """
        Add elements to the end and return the new length.

        Every element is checked for a key before the list is touched.
        """
        require_keys(items, self._key_field)
        for item in items:
            self._index.register(item)
        old_length = len(self._elements)
        self._elements.extend(items)
        self._index.update_positions(self._elements, old_length)
        return len(self._elements)

    def append(self, item: object) -> int:
        return self.append_end(item)

    def append_start(self, *items: object) -> int:
        """
        Add elements to the front, keeping their relative order, and return
        the new length. Every existing position shifts, so all positions are
        recomputed.
        """
        require_keys(items, self._key_field)
        for item in items:
            self._index.register(item)
        self._elements[:0] = items
        self._index.reindex_positions(self._elements)
        return len(self._elements)

    def bulk_append_end(self, items: Iterable[object]) -> int:
        """
        Append an arbitrarily large batch in chunks of `chunk_size`.
        """
        pages = self._paginate(items)
        for page in pages:
            self.append_end(*page)
        return len(self._elements)

    def extend(self, items: Iterable[object]) -> int:
        return self.bulk_append_end(items)

    def bulk_append_start(self, items: Iterable[object]) -> int:
        """
        Prepend an arbitrarily large batch in chunks of `chunk_size`.

        Chunks are applied last to first so the result matches a single
        prepend of the whole batch.
        """
        pages = self._paginate(items)
        for page in reversed(pages):
            self.append_start(*page)
        return len(self._elements)

    # --- removal ----------------------------------------------------------

    def remove_last(self) -> object:
        if not self._elements:
            raise EmptyCollectionError("remove_last from an empty sequence")
        item = self._elements.pop()
        self._index.discard(get_key(item, self._key_field))
        return item

    def remove_first(self) -> object:
        if not self._elements:
            raise EmptyCollectionError("remove_first from an empty sequence")
        item = self._elements.pop(0)
        self._index.discard(get_key(item, self._key_field))
        self._index.reindex_positions(self._elements)
        return item

    def splice(self, start: int, delete_count: int | None = None, *items: object) -> list[object]:
        """
        Remove `delete_count` elements at `start`, insert `items` there, and
        return the removed elements.

        `start` and `delete_count` are clamped the way array splice clamps
        them. Both maps are rebuilt afterwards.
        """
        require_keys(items, self._key_field)

        length = len(self._elements)
        if start < 0:
            start = max(length + start, 0)
        else:
            start = min(start, length)
        if delete_count is None:
            delete_count = length - start
        else:
            delete_count = max(0, min(delete_count, length - start))

        stop = start + delete_count
        removed = self._elements[start:stop]
        self._elements[start:stop] = items
        self._index.rebuild(self._elements)
        return removed

    # --- derived sequences ------------------------------------------------

    def slice(self, start: int | None = None, end: int | None = None) -> IndexedSequence:
        return self._derive(self._elements[start:end])

    def map(self, transform: Callable[[object], object]) -> IndexedSequence:
        """
        Build a new sequence from `transform(item)` for every element.
        """
        return self._derive([transform(item) for item in self._elements])

    def concat(self, *others: object) -> IndexedSequence:
        """
        Build a new sequence from this one followed by `others`.

        Sequence-like arguments contribute their elements; anything else is
        added as a single element.
        """
        results = list(self._elements)
        for other in others:
            if is_sequence_like(other):
                results.extend(other)
            else:
                results.append(other)
        return self._derive(results)

    # --- key access -------------------------------------------------------

    def find_by_key(self, key: Hashable, default: object = None) -> object:
        item = self._index.lookup(key)
        return default if item is None else item

    def position_of_key(self, key: Hashable) -> int:
        return self._index.position(key)

    def has_key(self, key: Hashable) -> bool:
        return key in self._index.by_key

    def keys(self) -> list[Hashable]:
        return list(self._index.by_key)

    def delete_by_key(self, key: Hashable) -> int:
        """
        Remove the element with `key` and return the position it held, or -1.
        """
        position = self._index.position(key)
        if position >= 0:
            self.splice(position, 1)
        return position

    def replace(self, item: object) -> None:
        """
        Put `item` in place of the element sharing its key.

        An unknown key only sets the key map entry; no slot is added to the
        list, so `find_by_key` sees the item but iteration does not.
        """
        key = require_key(item, self._key_field)
        self._index.by_key[key] = item
        position = self._index.position(key)
        if position >= 0:
            self._elements[position] = item

    def update(self, partial: object) -> None:
        """
        Shallow-merge `partial` into the element that shares its key.
        """
        key = require_key(partial, self._key_field)
        if key not in self._index.by_key:
            raise KeyNotFoundError(key)
        merge_into(self._index.by_key[key], partial)

    def update_range(
        self, partial: object, start: int | None = None, end: int | None = None
    ) -> None:
        """
        Shallow-merge `partial` into every element in positions [start, end).
        """
        merged: set[str] = set()
        for position in range(*slice(start, end).indices(len(self._elements))):
            merged |= merge_into(self._elements[position], partial)
        if self._key_field in merged:
            self._index.rebuild(self._elements)

    # --- internal helpers -------------------------------------------------

    def _paginate(self, items: Iterable[object]) -> list[list[object]]:
        items = list(items)
        require_keys(items, self._key_field)
        pages = [
            items[start : start + self.chunk_size]
            for start in range(0, len(items), self.chunk_size)
        ]
        return pages

    def _derive(self, items: list[object]) -> IndexedSequence:
        return type(self)(items, key_field=self._key_field, chunk_size=self.chunk_size)

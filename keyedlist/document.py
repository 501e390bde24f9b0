"""
Element helpers: key presence checks, key extraction, and shallow merges.

Elements are either mappings (the key is read as ``item[key_field]``) or
plain objects such as dataclasses (the key is read as an attribute).
"""

from __future__ import annotations

import dataclasses
from collections.abc import Hashable, Iterable, Mapping, MutableMapping

from .errors import InvalidKeyError, MissingKeyError


def get_key(item: object, key_field: str) -> Hashable | None:
    """
    Return the key carried by `item`, or None when it has none.
    """
    if isinstance(item, Mapping):
        return item.get(key_field)
    return getattr(item, key_field, None)


def require_key(item: object, key_field: str) -> Hashable:
    key = get_key(item, key_field)
    if key is None:
        raise MissingKeyError(key_field, item)
    try:
        hash(key)
    except TypeError as exc:
        raise InvalidKeyError(key_field, item) from exc
    return key


def require_keys(items: Iterable[object], key_field: str) -> None:
    """
    Validate a whole batch before anything is committed.
    """
    for item in items:
        require_key(item, key_field)


def _fields_of(partial: object) -> Iterable[tuple[str, object]]:
    if isinstance(partial, Mapping):
        return partial.items()
    if dataclasses.is_dataclass(partial):
        return ((field.name, getattr(partial, field.name)) for field in dataclasses.fields(partial))
    return ((name, value) for name, value in vars(partial).items() if not name.startswith("_"))


def merge_into(target: object, partial: object) -> set[str]:
    """
    Shallow-merge every field of `partial` onto `target` in place and
    return the names that were assigned.

    Nested lists and dicts are shared with `partial`, not copied.
    """
    merged: set[str] = set()
    for name, value in _fields_of(partial):
        if isinstance(target, MutableMapping):
            target[name] = value
        else:
            setattr(target, name, value)
        merged.add(name)
    return merged


def normalize_input(data: object) -> list[object]:
    """
    Flatten construction input into an ordered list of elements.

    None gives an empty list, a mapping of records gives its values in
    iteration order, and any other iterable gives its items in order.
    """
    if data is None:
        return []
    if isinstance(data, (str, bytes)):
        raise TypeError("data must be a sequence or a mapping of records, not a string")
    if isinstance(data, Mapping):
        return list(data.values())
    if isinstance(data, Iterable):
        return list(data)
    raise TypeError(f"cannot build a sequence from {type(data).__name__}")

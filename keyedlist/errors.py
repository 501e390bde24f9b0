class KeyedListError(Exception):
    """Base error for the project."""


class MissingKeyError(KeyedListError, ValueError):
    """Raised when an element lacks a value for the configured key field."""

    def __init__(self, key_field: str, item: object = None) -> None:
        super().__init__(
            f"elements added to the sequence must include a key field called '{key_field}'"
        )
        self.key_field = key_field
        self.item = item


class EmptyCollectionError(KeyedListError, IndexError):
    """Raised when removing from an empty sequence."""


class KeyNotFoundError(KeyedListError, KeyError):
    """Raised when an update targets a key that is not indexed."""

    def __init__(self, key: object) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"no element with key {self.key!r}"


class InvalidKeyError(KeyedListError, TypeError):
    """Raised when an element's key value cannot be hashed."""

    def __init__(self, key_field: str, item: object = None) -> None:
        super().__init__(f"key field '{key_field}' must hold a hashable value")
        self.key_field = key_field
        self.item = item

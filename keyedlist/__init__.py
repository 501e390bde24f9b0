"""
List-like container of records with constant-time access by a key field.
"""

from .errors import (
    EmptyCollectionError,
    InvalidKeyError,
    KeyedListError,
    KeyNotFoundError,
    MissingKeyError,
)
from .sequence import BULK_CHUNK_SIZE, IndexedSequence, is_sequence_like

__all__ = [
    "BULK_CHUNK_SIZE",
    "EmptyCollectionError",
    "IndexedSequence",
    "InvalidKeyError",
    "KeyNotFoundError",
    "KeyedListError",
    "MissingKeyError",
    "is_sequence_like",
]

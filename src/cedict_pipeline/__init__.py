"""CC-CEDICT to chunked JSON distribution build package."""

from .models import (
    CedictDataset,
    CedictMetadata,
    Classifier,
    DictionaryEntry,
    EntryType,
    Headword,
    NameParts,
)

__all__ = [
    "CedictDataset",
    "CedictMetadata",
    "Classifier",
    "DictionaryEntry",
    "EntryType",
    "Headword",
    "NameParts",
]

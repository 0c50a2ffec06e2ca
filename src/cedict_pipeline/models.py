"""Data models shared by the parsers, the merge stage and the chunker.

Entries are immutable. The merge stage produces new entries via
``dataclasses.replace`` instead of mutating parsed ones, so a parsed dataset
can be merged or chunked more than once in the same process.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union


class EntryType(str, Enum):
    """Headword shape of a dictionary line, serialized by value."""

    PLAIN = "not specified"
    COMPOUND_NAME = "compound name"
    PROVERB = "proverb"


@dataclass(frozen=True)
class Headword:
    """One script form of a headword.

    ``properties`` is empty for freshly parsed entries and is filled by the
    merge stage with single-character data (readings, code point, radical,
    frequency and stroke count).
    """

    headword: str
    properties: dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {"headword": self.headword, **self.properties}


@dataclass(frozen=True)
class NameParts:
    """First/last name pair of a compound (transliterated) name."""

    first_name: str
    last_name: str

    def to_dict(self) -> dict[str, Any]:
        return {"firstName": self.first_name, "lastName": self.last_name}


HeadwordForm = Union[Headword, NameParts]


@dataclass(frozen=True)
class Classifier:
    """Measure word attached to a noun sense (``CL:`` in the source)."""

    traditional: str
    simplified: str
    pinyin: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "traditional": self.traditional,
            "simplified": self.simplified,
            "pinyin": self.pinyin,
        }


@dataclass(frozen=True)
class DictionaryEntry:
    """One dictionary sense emitted from a CEDICT line.

    A source line listing several classifier groups yields several entries
    sharing the headword and pinyin fields, each with its own ``index``.
    ``pinyin`` is a plain string, or ``NameParts`` for compound names whose
    pinyin could be split around the ``·`` separator.
    """

    index: int
    type: EntryType
    traditional: HeadwordForm
    simplified: HeadwordForm
    pinyin: str | NameParts
    definitions: tuple[str, ...]
    classifier: tuple[Classifier, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping in distribution key order."""

        data: dict[str, Any] = {
            "index": self.index,
            "type": self.type.value,
            "traditional": self.traditional.to_dict(),
            "simplified": self.simplified.to_dict(),
        }
        if isinstance(self.pinyin, NameParts):
            data["pinyin"] = ""
            data["pinyinParts"] = self.pinyin.to_dict()
        else:
            data["pinyin"] = self.pinyin
        data["definitions"] = list(self.definitions)
        if self.classifier is not None:
            data["classifier"] = [item.to_dict() for item in self.classifier]
        return data


@dataclass(frozen=True)
class CedictMetadata:
    """Provenance fields parsed from the CC-CEDICT comment header.

    Every field is optional; a field the header does not provide stays
    ``None`` and is left out of the serialized record.
    """

    name: str | None = None
    description: str | None = None
    license_name: str | None = None
    license_uri: str | None = None
    referenced_works: tuple[str, ...] | None = None
    download_uri: str | None = None
    editor_uri: str | None = None
    reference_uri: str | None = None
    original_version: str | None = None
    original_subversion: str | None = None
    original_format: str | None = None
    original_charset: str | None = None
    publisher: str | None = None
    version: str | None = None
    date_time: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return present fields under their camelCase distribution names."""

        values = {
            "name": self.name,
            "description": self.description,
            "licenseName": self.license_name,
            "licenseURI": self.license_uri,
            "referencedWorks": (
                list(self.referenced_works) if self.referenced_works is not None else None
            ),
            "downloadURI": self.download_uri,
            "editorURI": self.editor_uri,
            "referenceURI": self.reference_uri,
            "originalVersion": self.original_version,
            "originalSubversion": self.original_subversion,
            "originalFormat": self.original_format,
            "originalCharset": self.original_charset,
            "publisher": self.publisher,
            "version": self.version,
            "dateTime": self.date_time,
        }
        return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True)
class CedictDataset:
    """Parsed CC-CEDICT source: header metadata plus ordered entries."""

    metadata: CedictMetadata
    entries: tuple[DictionaryEntry, ...] = field(default_factory=tuple)

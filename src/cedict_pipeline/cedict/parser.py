"""Parsing utilities for CC-CEDICT dictionary lines."""

from __future__ import annotations

import logging
import re
from typing import Iterable

from cedict_pipeline.cedict.metadata import parse_cedict_metadata
from cedict_pipeline.models import (
    CedictDataset,
    Classifier,
    DictionaryEntry,
    EntryType,
    Headword,
    HeadwordForm,
    NameParts,
)

logger = logging.getLogger(__name__)

CEDICT_ENTRY_RE = re.compile(r"(\S+) (\S+) \[(.+)] /(.+)/")
NAME_SEPARATOR = "·"
HEADWORD_NAME_RE = re.compile(r"(\S+)·(\S+)")
PINYIN_NAME_RE = re.compile(r"(.+)\s·\s(.+)")
PROVERB_RE = re.compile(r".+，.+")
CLASSIFIER_MARKER = "/CL:"
CLASSIFIER_TOKEN_RE = re.compile(r"(.+)\[(.+)]")


def split_definitions(blob: str) -> list[tuple[str, str | None]]:
    """Split a definitions payload into one group per homonym sense.

    Homonyms list a classifier after each sense, e.g.
    ``sense one/CL:個|个[ge4]/sense two/CL:條|条[tiao2]``. The payload is
    scanned left to right: each ``/CL:`` marker closes the current
    definitions group, and the classifier text runs up to the next ``/`` (or
    to the end of the payload when there is none).

    Args:
        blob: Text between the outer slashes of a CEDICT line.

    Returns:
        Ordered ``(definitions, classifier)`` pairs; ``classifier`` is
        ``None`` for a trailing group without a classifier.
    """

    groups: list[tuple[str, str | None]] = []
    remaining = blob
    while True:
        marker = remaining.find(CLASSIFIER_MARKER)
        if marker == -1:
            groups.append((remaining, None))
            return groups

        definitions = remaining[:marker]
        rest = remaining[marker + len(CLASSIFIER_MARKER) :]
        end = rest.find("/")
        if end == -1:
            groups.append((definitions, rest))
            return groups

        groups.append((definitions, rest[:end]))
        remaining = rest[end + 1 :]


def parse_classifiers(payload: str) -> tuple[Classifier, ...]:
    """Parse a comma-separated classifier list such as ``個|个[ge4],位[wei4]``.

    A token with a single head uses it for both scripts. Tokens that do not
    look like ``HEAD[PINYIN]`` are logged and dropped.

    Args:
        payload: Classifier text following ``CL:``.

    Returns:
        Parsed classifiers in source order.
    """

    classifiers: list[Classifier] = []
    for token in payload.split(","):
        match = CLASSIFIER_TOKEN_RE.match(token)
        if not match:
            logger.error('Cannot parse a "%s" classifier', token)
            continue
        heads = match.group(1).split("|")
        simplified = heads[1] if len(heads) == 2 else heads[0]
        classifiers.append(
            Classifier(traditional=heads[0], simplified=simplified, pinyin=match.group(2))
        )
    return tuple(classifiers)


def _name_parts(text: str, pattern: re.Pattern[str]) -> NameParts | None:
    match = pattern.match(text)
    if match is None:
        return None
    return NameParts(first_name=match.group(1), last_name=match.group(2))


class DictionaryEntryParser:
    """Stateful CEDICT line parser.

    The parser owns the running entry index, so indices stay dense across all
    lines fed to one instance, and it collects comment lines for the header
    metadata. Use one instance per source file.
    """

    def __init__(self, start_index: int = 1) -> None:
        self.next_index = start_index
        self._header_lines: list[str] = []

    @property
    def metadata_block(self) -> str:
        """Header comment lines seen so far, joined with newlines."""

        return "".join(f"{line}\n" for line in self._header_lines)

    def parse_line(self, line: str, line_number: int = 0) -> list[DictionaryEntry]:
        """Parse one source line into zero or more dictionary entries.

        Args:
            line: Raw source line; trailing newline characters are ignored.
            line_number: 1-based position in the source, used in diagnostics.

        Returns:
            Entries emitted for the line, each holding the next index.
        """

        line = line.rstrip("\r\n")
        if line.startswith("#"):
            self._header_lines.append(line)
            return []
        if not line.strip():
            return []

        match = CEDICT_ENTRY_RE.match(line)
        if not match:
            logger.error("Cannot parse line %d of CEDICT source file: %s", line_number, line)
            return []

        traditional_field, simplified_field, pinyin_field, blob = match.groups()
        entry_type, traditional, simplified, pinyin = self._classify(
            traditional_field, simplified_field, pinyin_field, line_number
        )

        entries: list[DictionaryEntry] = []
        for definitions, classifier in split_definitions(blob):
            entries.append(
                DictionaryEntry(
                    index=self.next_index,
                    type=entry_type,
                    traditional=traditional,
                    simplified=simplified,
                    pinyin=pinyin,
                    definitions=tuple(definitions.split("/")),
                    classifier=parse_classifiers(classifier) if classifier is not None else None,
                )
            )
            self.next_index += 1
        return entries

    def _classify(
        self,
        traditional_field: str,
        simplified_field: str,
        pinyin_field: str,
        line_number: int,
    ) -> tuple[EntryType, HeadwordForm, HeadwordForm, str | NameParts]:
        """Decide the headword shape and build per-side headword forms."""

        if NAME_SEPARATOR in traditional_field:
            sides: list[HeadwordForm] = []
            named_fields = (("traditional", traditional_field), ("simplified", simplified_field))
            for label, text in named_fields:
                parts = _name_parts(text, HEADWORD_NAME_RE)
                if parts is None:
                    logger.error(
                        "Cannot parse a compound name in a %s headword in line %d: %s",
                        label,
                        line_number,
                        text,
                    )
                    sides.append(Headword(text))
                else:
                    sides.append(parts)

            pinyin: str | NameParts
            pinyin_parts = _name_parts(pinyin_field, PINYIN_NAME_RE)
            if pinyin_parts is None:
                logger.error(
                    "Cannot parse a compound name in pinyin in line %d: %s",
                    line_number,
                    pinyin_field,
                )
                pinyin = pinyin_field
            else:
                pinyin = pinyin_parts
            return EntryType.COMPOUND_NAME, sides[0], sides[1], pinyin

        entry_type = EntryType.PROVERB if PROVERB_RE.search(traditional_field) else EntryType.PLAIN
        return entry_type, Headword(traditional_field), Headword(simplified_field), pinyin_field


def parse_cedict_lines(lines: Iterable[str]) -> CedictDataset:
    """Parse a whole CC-CEDICT source into metadata and ordered entries.

    Args:
        lines: Iterable of raw source lines, e.g. an open text file.

    Returns:
        Dataset with the header metadata and all emitted entries, indexed
        ``1..N`` in source order.
    """

    parser = DictionaryEntryParser()
    entries: list[DictionaryEntry] = []
    for line_number, line in enumerate(lines, start=1):
        entries.extend(parser.parse_line(line, line_number))
    return CedictDataset(
        metadata=parse_cedict_metadata(parser.metadata_block),
        entries=tuple(entries),
    )

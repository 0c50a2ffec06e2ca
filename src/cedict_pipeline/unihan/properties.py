"""Parsing of Unihan ``CODE FIELD VALUE`` property files."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable, Mapping

logger = logging.getLogger(__name__)

PROPERTY_LINE_RE = re.compile(r"^(\S*)\s(\S*)\s(.*)$")

FieldSpec = tuple[str, Callable[[str], Any]]


def parse_leading_int(value: str) -> int:
    """Parse the first whitespace-separated token of ``value`` as an integer.

    Unihan numeric fields may list several values (``kTotalStrokes`` gives one
    count per source, e.g. ``"9 8"``); the first one is the preferred value.

    Raises:
        ValueError: If the value is empty or its first token is not an integer.
    """

    tokens = value.split()
    if not tokens:
        raise ValueError("empty value")
    return int(tokens[0])


UNIHAN_READING_FIELDS: dict[str, FieldSpec] = {
    "kCantonese": ("cantonese", str),
    "kMandarin": ("mandarin", str),
    "kTang": ("tang", str),
    "kDefinition": ("definition", str),
}

DICTIONARY_LIKE_FIELDS: dict[str, FieldSpec] = {
    "kFrequency": ("frequency", parse_leading_int),
    "kTotalStrokes": ("totalStrokes", parse_leading_int),
}


class CharacterPropertyParser:
    """Accumulate per-character records from code-grouped property lines.

    Lines for one code point are expected to be contiguous: the record of the
    previous code is stored as soon as a different code appears, and the last
    record is stored by :meth:`finish`. Only field names listed in ``fields``
    are kept; everything else is ignored silently.

    Args:
        fields: Mapping of source field name to ``(output name, converter)``.
        source_name: Label used in diagnostics.
    """

    def __init__(self, fields: Mapping[str, FieldSpec], source_name: str) -> None:
        self.fields = dict(fields)
        self.source_name = source_name
        self.records: dict[str, dict[str, Any]] = {}
        self._current_code: str | None = None
        self._current_record: dict[str, Any] = {}

    def parse_line(self, line: str, line_number: int = 0) -> None:
        """Consume one source line, updating the record of its code point."""

        line = line.rstrip("\r\n")
        if not line.strip() or line.startswith("#"):
            return

        match = PROPERTY_LINE_RE.match(line)
        if not match:
            logger.error(
                "Cannot parse line %d of %s source file: %s", line_number, self.source_name, line
            )
            return

        code, field_name, value = match.groups()
        if code != self._current_code:
            self._flush()
            self._current_code = code

        spec = self.fields.get(field_name)
        if spec is None:
            return
        output_name, converter = spec
        try:
            self._current_record[output_name] = converter(value)
        except ValueError:
            logger.error(
                "Cannot parse a %s value in line %d of %s source file: %s",
                field_name,
                line_number,
                self.source_name,
                value,
            )

    def finish(self) -> dict[str, dict[str, Any]]:
        """Store the pending record and return the code point mapping."""

        self._flush()
        self._current_code = None
        return self.records

    def _flush(self) -> None:
        if self._current_code is not None:
            self.records[self._current_code] = self._current_record
        self._current_record = {}


def parse_property_lines(
    lines: Iterable[str],
    fields: Mapping[str, FieldSpec],
    source_name: str,
) -> dict[str, dict[str, Any]]:
    """Parse a whole property source into a ``code point -> record`` mapping.

    Args:
        lines: Raw source lines.
        fields: Allow-list of source fields, see :class:`CharacterPropertyParser`.
        source_name: Label used in diagnostics.

    Returns:
        One record per code point seen in the source.
    """

    parser = CharacterPropertyParser(fields, source_name)
    for line_number, line in enumerate(lines, start=1):
        parser.parse_line(line, line_number)
    return parser.finish()

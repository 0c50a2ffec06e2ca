"""Radical/stroke data from the Unihan ``kRSUnicode`` field."""

from __future__ import annotations

import re
from typing import Any, Iterable

from cedict_pipeline.unihan.properties import FieldSpec, parse_property_lines

RADICAL_STROKE_RE = re.compile(r"^(\d+)('*)\.(-?\d+)$")


def parse_radical_stroke(value: str) -> dict[str, Any]:
    """Parse a ``kRSUnicode`` value such as ``9.4`` or ``120'.3``.

    Only the first of several space-separated values is used. Apostrophes
    after the radical number mark a simplified form of the radical.

    Args:
        value: Raw field value.

    Returns:
        Record with ``number``, ``additionalStrokes`` and ``simplified``.

    Raises:
        ValueError: If the value does not have the ``R.S`` shape.
    """

    tokens = value.split()
    match = RADICAL_STROKE_RE.match(tokens[0]) if tokens else None
    if match is None:
        raise ValueError(f"invalid radical-stroke value '{value}'")
    return {
        "number": int(match.group(1)),
        "additionalStrokes": int(match.group(3)),
        "simplified": bool(match.group(2)),
    }


RADICAL_FIELDS: dict[str, FieldSpec] = {
    "kRSUnicode": ("radical", parse_radical_stroke),
}


def parse_radical_lines(lines: Iterable[str]) -> dict[str, dict[str, Any]]:
    """Build a ``code point -> radical record`` mapping from IRG source lines.

    Code points without a ``kRSUnicode`` line are not included.
    """

    records = parse_property_lines(lines, RADICAL_FIELDS, "Unihan IRG sources")
    return {code: record["radical"] for code, record in records.items() if "radical" in record}

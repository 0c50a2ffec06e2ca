"""Merge single-character Unihan data onto dictionary entries."""

from __future__ import annotations

import copy
from dataclasses import replace
from typing import Any, Iterable, Mapping

from cedict_pipeline.models import DictionaryEntry, Headword, HeadwordForm

PropertyMap = Mapping[str, Mapping[str, Any]]

DICTIONARY_LIKE_KEYS = ("frequency", "totalStrokes")


def code_point(char: str) -> str:
    """Return the Unihan-style code point label of a single character.

    Args:
        char: String holding exactly one character.

    Returns:
        Label like ``U+4E2D``, with at least four upper-case hex digits.
    """

    return f"U+{ord(char):04X}"


def _merge_side(
    side: HeadwordForm,
    definitions: tuple[str, ...],
    *,
    is_traditional: bool,
    readings: PropertyMap,
    dictionary_like: PropertyMap,
    radicals: PropertyMap,
) -> tuple[HeadwordForm, tuple[str, ...]]:
    """Attach character data to one headword side.

    Returns:
        The (possibly new) side and the (possibly filled) definitions.
    """

    if not isinstance(side, Headword) or len(side.headword) != 1:
        return side, definitions

    code = code_point(side.headword)
    properties = dict(side.properties)

    if code in readings:
        reading = dict(readings[code])
        definition = reading.pop("definition", None)
        properties.update(reading)
        properties["codePoint"] = code
        if not definitions and definition:
            definitions = (definition,)

    if code in radicals:
        radical = copy.deepcopy(dict(radicals[code]))
        if is_traditional:
            # Traditional headwords never use a simplified radical, so the flag is not stored.
            radical.pop("simplified", None)
        properties["radical"] = radical

    if code in dictionary_like:
        record = dictionary_like[code]
        for key in DICTIONARY_LIKE_KEYS:
            if key in record:
                properties[key] = record[key]

    if properties == side.properties:
        return side, definitions
    return Headword(side.headword, properties), definitions


def merge_character_properties(
    entries: Iterable[DictionaryEntry],
    readings: PropertyMap,
    dictionary_like: PropertyMap,
    radicals: PropertyMap | None = None,
) -> tuple[DictionaryEntry, ...]:
    """Attach Unihan data to the single-character sides of dictionary entries.

    For each entry the traditional side is handled before the simplified one.
    Reading fields (except ``definition``) and the ``codePoint`` label are
    added to a side found in ``readings``; the Unihan ``definition`` only
    fills ``definitions`` when the entry has none. Radical records are copied
    onto the side as ``radical``, and ``frequency``/``totalStrokes`` are taken
    from ``dictionary_like``. Multi-character headwords and compound-name
    parts are left as they are.

    Args:
        entries: Parsed dictionary entries.
        readings: Code point -> Unihan readings record.
        dictionary_like: Code point -> dictionary-like data record.
        radicals: Code point -> radical record, optional.

    Returns:
        New entries in the same order; the inputs are not modified.
    """

    radicals = radicals or {}
    merged: list[DictionaryEntry] = []
    for entry in entries:
        definitions = entry.definitions
        traditional, definitions = _merge_side(
            entry.traditional,
            definitions,
            is_traditional=True,
            readings=readings,
            dictionary_like=dictionary_like,
            radicals=radicals,
        )
        simplified, definitions = _merge_side(
            entry.simplified,
            definitions,
            is_traditional=False,
            readings=readings,
            dictionary_like=dictionary_like,
            radicals=radicals,
        )
        if (
            traditional is entry.traditional
            and simplified is entry.simplified
            and definitions is entry.definitions
        ):
            merged.append(entry)
            continue
        merged.append(
            replace(entry, traditional=traditional, simplified=simplified, definitions=definitions)
        )
    return tuple(merged)

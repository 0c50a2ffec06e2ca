"""Parsing of the CC-CEDICT comment header into a metadata record."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import re

from cedict_pipeline.models import CedictMetadata

logger = logging.getLogger(__name__)

# (attribute, human readable label, pattern). Each pattern captures the value
# in group 1 and is searched independently over the whole header block.
TEXT_FIELD_PATTERNS: tuple[tuple[str, str, re.Pattern[str]], ...] = (
    ("name", "dictionary name", re.compile(r"^#\s(.+)")),
    ("description", "description", re.compile(r"^.+\n# (.+)")),
    ("license_name", "license name", re.compile(r"# License:\n# (.+)")),
    ("license_uri", "license URI", re.compile(r"#! license=(.+)")),
    ("download_uri", "download URI", re.compile(r"# CC-CEDICT can be downloaded from:\n# (.+)")),
    (
        "editor_uri",
        "editor URI",
        re.compile(r"# Additions and corrections can be sent through:\n# (.+)"),
    ),
    (
        "reference_uri",
        "reference URI",
        re.compile(r"# For more information about CC-CEDICT see:\n# (.+)"),
    ),
    ("original_version", "original version number", re.compile(r"#! version=(.+)")),
    ("original_subversion", "original subversion number", re.compile(r"#! subversion=(.+)")),
    ("original_format", "original format", re.compile(r"#! format=(.+)")),
    ("original_charset", "original charset", re.compile(r"#! charset=(.+)")),
    ("publisher", "publisher", re.compile(r"#! publisher=(.+)")),
)
REFERENCED_WORKS_RE = re.compile(r"# Referenced works:\n# (.+)")
DATE_RE = re.compile(r"#! date=(\d{4})-(\d{2})-(\d{2})")
TIME_RE = re.compile(r"#! time=(\d+)")


def parse_cedict_metadata(block: str) -> CedictMetadata:
    """Extract provenance fields from the concatenated header comment lines.

    Every field is looked up on its own; a field that cannot be found is
    reported through the module logger and left unset, so a partial header
    still yields a usable record.

    Args:
        block: All ``#``-prefixed source lines in original order, joined with
            ``\\n``.

    Returns:
        Metadata record with the fields that could be extracted.
    """

    values: dict[str, object] = {}

    for attribute, label, pattern in TEXT_FIELD_PATTERNS:
        match = pattern.search(block)
        if match is None:
            logger.error("Cannot parse a %s field", label)
            continue
        values[attribute] = match.group(1).strip()

    match = REFERENCED_WORKS_RE.search(block)
    if match is not None:
        values["referenced_works"] = (match.group(1).strip(),)
    else:
        logger.error("Cannot parse a referenced works field")

    match = DATE_RE.search(block)
    if match is not None:
        values["version"] = "".join(match.groups())
    else:
        logger.error("Cannot parse a version field")

    match = TIME_RE.search(block)
    if match is None:
        logger.error("Cannot parse a time field")
    else:
        try:
            values["date_time"] = datetime.fromtimestamp(int(match.group(1)), tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as error:
            logger.error("Cannot parse a time field: %s", error)

    return CedictMetadata(**values)

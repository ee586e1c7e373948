"""Search and lookup helpers shared by both kernels.

This module provides:
- Document lookup by name (exact, then substring)
- Line-level substring search with optional surrounding context
- Marker value extraction for value histories
- Key value extraction for document summaries
"""

import re
from dataclasses import dataclass

from .constants import CONTEXT_MAX_CHARS, LAB_UNIT_PATTERN, SUMMARY_UNIT_PATTERN
from .dates import extract_dates
from .document import ParsedCorpus, Section

GENERIC_VALUE = re.compile(rf"(\d+\.?\d*)\s*({LAB_UNIT_PATTERN})?", re.IGNORECASE)
KEY_VALUE = re.compile(
    rf"(?:^|\s)([A-Za-z][A-Za-z\s]{{2,30}})[\s:]+(\d+\.?\d*)\s*({SUMMARY_UNIT_PATTERN})?",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class SearchHit:
    """Matching lines (or context blocks) from one section."""

    label: str
    document: str
    matches: list[str]


@dataclass(frozen=True)
class ValueReading:
    """A marker value found on a source line."""

    date: str
    value: str
    unit: str
    document: str
    context: str


def find_document_sections(corpus: ParsedCorpus, document_name: str) -> list[Section]:
    """Sections for a document name.

    Exact (case-insensitive) name matches win; otherwise every section whose
    name contains the requested text is returned.
    """
    wanted = document_name.strip().lower()
    if not wanted:
        return []
    exact = [s for s in corpus.sections if s.name.lower() == wanted]
    if exact:
        return exact
    return [s for s in corpus.sections if wanted in s.name.lower()]


def search_sections(
    corpus: ParsedCorpus,
    query: str,
    include_context: bool,
    context_lines: int = 2,
    max_matches: int | None = None,
) -> list[SearchHit]:
    """Case-insensitive substring search over every section line.

    Args:
        corpus: Parsed corpus to search
        query: Text to find
        include_context: Return ±``context_lines`` blocks instead of single lines
        context_lines: Lines of context on each side
        max_matches: Cap on matches kept per section

    Returns:
        One SearchHit per section with at least one matching line
    """
    needle = query.lower()
    hits: list[SearchHit] = []
    if not needle:
        return hits

    for section in corpus.sections:
        if needle not in section.content.lower():
            continue
        lines = section.content.split("\n")
        matches: list[str] = []
        for i, line in enumerate(lines):
            if needle not in line.lower():
                continue
            if include_context:
                start = max(0, i - context_lines)
                block = "\n".join(lines[start : i + context_lines + 1])
                if block not in matches:
                    matches.append(block)
            else:
                matches.append(line)
        if matches:
            if max_matches is not None:
                matches = matches[:max_matches]
            hits.append(SearchHit(label=section.label, document=section.name, matches=matches))

    return hits


def _value_patterns(marker: str) -> list[re.Pattern]:
    escaped = re.escape(marker)
    return [
        re.compile(rf"{escaped}[:\s]+([\d.,]+)\s*(\w*/\w*|\w+)?", re.IGNORECASE),
        re.compile(rf"([\d.,]+)\s*(\w*/\w*|\w+)?\s*{escaped}", re.IGNORECASE),
        GENERIC_VALUE,
    ]


def find_marker_values(corpus: ParsedCorpus, marker: str) -> list[ValueReading]:
    """Every value reported for ``marker``, sorted by date, deduplicated.

    A reading is dated with the first date found in its section, or
    'Unknown date' when the section has none.
    """
    needle = marker.lower()
    patterns = _value_patterns(marker)
    readings: list[ValueReading] = []

    for section in corpus.sections:
        section_date: str | None = None
        for line in section.content.split("\n"):
            if needle not in line.lower():
                continue
            for pattern in patterns:
                match = pattern.search(line)
                if not match or not match.group(1):
                    continue
                if section_date is None:
                    dates = extract_dates(section.content)
                    section_date = dates[0].date if dates else "Unknown date"
                readings.append(
                    ValueReading(
                        date=section_date,
                        value=match.group(1),
                        unit=match.group(2) or "",
                        document=section.name,
                        context=line.strip()[:CONTEXT_MAX_CHARS],
                    )
                )
                break

    readings.sort(key=lambda r: r.date)

    seen: set[tuple[str, str]] = set()
    unique: list[ValueReading] = []
    for reading in readings:
        key = (reading.date, reading.value)
        if key in seen:
            continue
        seen.add(key)
        unique.append(reading)
    return unique


def extract_key_values(sections: list[Section]) -> list[str]:
    """'Name: value unit' strings for numeric values found in the sections."""
    values: list[str] = []
    for section in sections:
        for match in KEY_VALUE.finditer(section.content):
            name = match.group(1).strip()
            if not 2 < len(name) < 30:
                continue
            unit = match.group(3) or ""
            values.append(f"{name}: {match.group(2)}{' ' + unit if unit else ''}")
    return list(dict.fromkeys(values))

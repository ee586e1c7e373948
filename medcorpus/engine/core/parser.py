"""Corpus parser.

Splits the flattened extraction output into sections and builds the
temporal index. The producer marks each document (or page) with a header:

    ## [CBC Report] - Page 1
    ## [Metabolic Panel]

Text before the first header is not part of any section.
"""

import logging
import re

from .dates import extract_dates
from .document import DateRange, ParsedCorpus, Section, TimelineEvent

logger = logging.getLogger(__name__)

SECTION_HEADER = re.compile(r"^## \[([^\]]+)\](?:\s*-\s*Page\s*(\d+))?")


def _split_sections(lines: list[str]) -> list[Section]:
    sections: list[Section] = []
    name: str | None = None
    page: int | None = None
    start = 0
    body: list[str] = []

    def close(end_line: int) -> None:
        sections.append(
            Section(
                name=name,
                page_number=page,
                content="\n".join(body).strip(),
                start_line=start,
                end_line=end_line,
            )
        )

    for i, line in enumerate(lines):
        match = SECTION_HEADER.match(line)
        if match:
            if name is not None:
                close(i - 1)
            name = match.group(1)
            page = int(match.group(2)) if match.group(2) else None
            start = i
            body = []
        elif name is not None:
            body.append(line)

    if name is not None:
        close(len(lines) - 1)

    return sections


def parse_corpus(raw: str) -> ParsedCorpus:
    """Parse raw corpus text into sections and a temporal index.

    Args:
        raw: Flattened extraction output with ``## [name]`` headers

    Returns:
        ParsedCorpus; parsing the same text twice gives equal results
    """
    lines = raw.split("\n")
    sections = _split_sections(lines)
    document_names = tuple(dict.fromkeys(s.name for s in sections))

    events: list[TimelineEvent] = []
    documents_by_year: dict[int, list[str]] = {}

    for section in sections:
        for match in extract_dates(section.content):
            events.append(
                TimelineEvent(
                    date=match.date,
                    year=match.year,
                    month=match.month,
                    day=match.day,
                    context=match.context,
                    document=section.name,
                )
            )
            year_docs = documents_by_year.setdefault(match.year, [])
            if section.name not in year_docs:
                year_docs.append(section.name)

    events.sort(key=lambda e: e.date)

    date_range = None
    if events:
        earliest, latest = events[0], events[-1]
        date_range = DateRange(
            earliest=earliest.date,
            latest=latest.date,
            years=latest.year - earliest.year + 1,
        )

    if date_range:
        logger.info(
            f"Parsed {len(sections)} sections, {len(events)} timeline events, "
            f"date range: {date_range.earliest} to {date_range.latest} ({date_range.years} years)"
        )
    else:
        logger.info(f"Parsed {len(sections)} sections, no dated events")

    return ParsedCorpus(
        sections=tuple(sections),
        document_names=document_names,
        total_characters=len(raw),
        total_sections=len(sections),
        date_range=date_range,
        documents_by_year=documents_by_year,
        timeline_events=tuple(events),
    )

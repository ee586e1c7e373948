"""Corpus data structures for the kernels.

This module contains the immutable structures produced by the parser:
sections, extracted dates and the parsed corpus index.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Section:
    """One header-delimited span of the corpus.

    Attributes:
        name: Document name from the ``## [name]`` header
        page_number: Page from an optional ``- Page N`` suffix
        content: Text between this header and the next one, stripped
        start_line: Index of the header line (0-indexed)
        end_line: Last line before the next header (0-indexed, inclusive)
    """

    name: str
    page_number: int | None
    content: str
    start_line: int
    end_line: int

    @property
    def label(self) -> str:
        """Name with page suffix, as shown in tool output."""
        if self.page_number is not None:
            return f"{self.name} - Page {self.page_number}"
        return self.name


@dataclass(frozen=True)
class DateMatch:
    """A validated calendar date found in a line of text.

    Attributes:
        date: ``YYYY-MM-DD`` when the day is known, else ``YYYY-MM``
        year: Four-digit year
        month: Month number (1-12)
        day: Day of month, if present
        context: Source line, stripped and truncated to 100 characters
    """

    date: str
    year: int
    month: int
    day: int | None = None
    context: str = ""


@dataclass(frozen=True)
class TimelineEvent(DateMatch):
    """A DateMatch attributed to the document it was found in."""

    document: str = ""


@dataclass(frozen=True)
class DateRange:
    """Span of dates found in the corpus."""

    earliest: str
    latest: str
    years: int


@dataclass(frozen=True)
class ParsedCorpus:
    """Index of a parsed corpus.

    Built once by ``parse_corpus`` and never mutated; re-parse to rebuild.

    Attributes:
        sections: Sections in source order
        document_names: Distinct section names in first-seen order
        total_characters: Length of the raw corpus text
        total_sections: Number of sections
        date_range: Earliest/latest date, or None when no dates were found
        documents_by_year: Year -> documents with a date in that year
        timeline_events: Every extracted date, sorted ascending by date
    """

    sections: tuple[Section, ...] = ()
    document_names: tuple[str, ...] = ()
    total_characters: int = 0
    total_sections: int = 0
    date_range: DateRange | None = None
    documents_by_year: dict[int, list[str]] = field(default_factory=dict)
    timeline_events: tuple[TimelineEvent, ...] = ()

    def sections_named(self, name: str) -> list[Section]:
        """All sections belonging to exactly this document."""
        return [s for s in self.sections if s.name == name]

    def years_with_data(self) -> list[int]:
        return sorted(self.documents_by_year)

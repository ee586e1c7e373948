"""Source data tool handlers shared by the analyst and validator kernels.

Handles:
- list_documents: Document names with section counts, sizes and pages
- read_document: Full text of a document (analyst)
- get_document_summary: Metadata and key values of a document (validator)
- search_data: Substring search across all sections
- get_date_range: Temporal span of the corpus
- list_documents_by_year: Documents grouped by year
- extract_timeline_events: Dated events grouped by year
- get_value_history: Values of one marker over time
"""

import logging
from typing import Any

from ...models import (
    EmptyParams,
    MarkerParams,
    ReadDocumentParams,
    SearchDataParams,
    TimelineParams,
)
from ..core import (
    extract_key_values,
    find_document_sections,
    find_marker_values,
    search_sections,
)
from ..core.tokens import format_size
from .base import SourceContext, missing_parameter

logger = logging.getLogger(__name__)


def handle_list_documents(params: dict[str, Any], ctx: SourceContext) -> str:
    """List every document in the corpus."""
    EmptyParams.model_validate(params)
    corpus = ctx.corpus

    lines = []
    for name in corpus.document_names:
        sections = corpus.sections_named(name)
        text = "".join(s.content for s in sections)
        pages = [str(s.page_number) for s in sections if s.page_number]
        page_info = f", pages {', '.join(pages)}" if pages else ""
        lines.append(f"- {name} ({len(sections)} section(s), {format_size(text)}{page_info})")

    return (
        f"# Available Documents\n\n"
        f"Total: {corpus.total_sections} sections from {len(corpus.document_names)} documents\n\n"
        + "\n".join(lines)
        + "\n\nUse read_document(document_name) to read a specific document, "
        "or search_data(query) to search across all documents."
    )


def _not_found(document_name: str) -> str:
    return (
        f'Document not found: "{document_name}". '
        "Use list_documents() to see available documents."
    )


def handle_read_document(params: dict[str, Any], ctx: SourceContext) -> str:
    """Return the full text of every section of a document.

    Marks each matched document as read.
    """
    p = ReadDocumentParams.model_validate(params)
    if not p.document_name.strip():
        return missing_parameter("read_document", "document_name")

    sections = find_document_sections(ctx.corpus, p.document_name)
    if not sections:
        return _not_found(p.document_name)

    for section in sections:
        ctx.exploration.mark_read(section.name)

    return "\n\n---\n\n".join(f"## {s.label}\n\n{s.content}" for s in sections)


def handle_get_document_summary(params: dict[str, Any], ctx: SourceContext) -> str:
    """Metadata about a document without its full text.

    Lists section count, size, dates mentioned and numeric key values.
    """
    p = ReadDocumentParams.model_validate(params)
    if not p.document_name.strip():
        return missing_parameter("get_document_summary", "document_name")

    sections = find_document_sections(ctx.corpus, p.document_name)
    if not sections:
        return _not_found(p.document_name)

    names = {s.name for s in sections}
    dates = [e.date for e in ctx.corpus.timeline_events if e.document in names]
    key_values = extract_key_values(sections)
    text = "".join(s.content for s in sections)

    values_block = "\n".join(f"- {v}" for v in key_values) or "No numeric values found"
    return (
        f"# Document Summary: {p.document_name}\n\n"
        f"**Sections Found:** {len(sections)}\n"
        f"**Total Size:** {format_size(text)}\n"
        f"**Dates Mentioned:** {', '.join(dates) if dates else 'None found'}\n\n"
        f"## Key Values Extracted ({len(key_values)} found)\n"
        f"{values_block}\n\n"
        '**To verify specific values:** Use `search_data("marker name")` or '
        '`verify_value_exists("marker", "value")`'
    )


def handle_search_data(params: dict[str, Any], ctx: SourceContext) -> str:
    """Case-insensitive substring search over all section lines.

    Every call counts as a search, whether or not it matches. An empty query
    is counted too and answered with the missing-parameter hint.
    """
    p = SearchDataParams.model_validate(params)
    query = (p.query or "").strip()
    ctx.exploration.queries.append(query)
    if not query:
        return missing_parameter("search_data", "query")

    include_context = (
        ctx.include_context_default if p.include_context is None else p.include_context
    )

    cfg = ctx.settings
    hits = search_sections(
        ctx.corpus,
        query,
        include_context=include_context,
        context_lines=cfg.search_context_lines,
        max_matches=cfg.search_max_matches_per_section,
    )
    if not hits:
        return (
            f'No matches found for "{query}". '
            "Try different terms or use list_documents() to see available data."
        )

    joiner = "\n\n---\n\n" if include_context else "\n"
    blocks = [f"### {hit.label}\n\n{joiner.join(hit.matches)}" for hit in hits[: cfg.search_max_sections]]
    shown = ""
    if len(hits) > cfg.search_max_sections:
        shown = f" (showing first {cfg.search_max_sections})"

    return (
        f'# Search Results for "{query}"\n\n'
        f"Found matches in {len(hits)} section(s){shown}:\n\n" + "\n\n---\n\n".join(blocks)
    )


def handle_get_date_range(params: dict[str, Any], ctx: SourceContext) -> str:
    """Summarize the temporal span of the corpus."""
    EmptyParams.model_validate(params)
    ctx.exploration.date_range_checked = True

    corpus = ctx.corpus
    date_range = corpus.date_range
    if date_range is None:
        return (
            "# Date Range\n\nNo dates found in the extracted documents. "
            "This may indicate the documents lack explicit date markers."
        )

    years_with_data = corpus.years_with_data()
    first, last = int(date_range.earliest[:4]), int(date_range.latest[:4])
    missing = [y for y in range(first, last + 1) if y not in corpus.documents_by_year]
    if missing:
        coverage = f"**Years with No Data:** {', '.join(map(str, missing))}"
    else:
        coverage = "**Coverage:** Complete - data found for all years"

    return (
        "# Date Range Summary\n\n"
        f"**Earliest Date:** {date_range.earliest}\n"
        f"**Latest Date:** {date_range.latest}\n"
        f"**Span:** {date_range.years} years\n\n"
        f"**Total Timeline Events Found:** {len(corpus.timeline_events)}\n"
        f"**Years with Data:** {', '.join(map(str, years_with_data))}\n"
        f"{coverage}\n\n"
        "---\n\n"
        "Use `list_documents_by_year()` to see documents per year, "
        "or `extract_timeline_events()` to get all dated events."
    )


def handle_list_documents_by_year(params: dict[str, Any], ctx: SourceContext) -> str:
    """Documents grouped under ascending years."""
    EmptyParams.model_validate(params)
    corpus = ctx.corpus
    years = corpus.years_with_data()
    if not years:
        return "# Documents by Year\n\nNo dated documents found."

    groups = "\n\n".join(
        f"## {year}\n" + "\n".join(f"- {doc}" for doc in corpus.documents_by_year[year])
        for year in years
    )
    date_range = corpus.date_range
    return (
        "# Documents by Year\n\n"
        f"**Date Range:** {date_range.earliest} to {date_range.latest}\n"
        f"**Years with Data:** {len(years)}\n\n"
        f"{groups}\n\n"
        "---\n\n"
        "Use `extract_timeline_events(year)` to get detailed events for a specific year."
    )


def handle_extract_timeline_events(params: dict[str, Any], ctx: SourceContext) -> str:
    """Dated events grouped by year, optionally for a single year."""
    p = TimelineParams.model_validate(params)
    ctx.exploration.timeline_extracted = True

    corpus = ctx.corpus
    year = p.year or None
    events = [e for e in corpus.timeline_events if year is None or e.year == year]

    if not events:
        if year:
            return f"# Timeline Events for {year}\n\nNo events found for year {year}."
        return "# Timeline Events\n\nNo dated events found in the documents."

    by_year: dict[int, list] = {}
    for event in events:
        by_year.setdefault(event.year, []).append(event)

    limit = ctx.settings.timeline_events_per_year
    groups = []
    for y in sorted(by_year):
        year_events = by_year[y]
        lines = []
        for e in year_events[:limit]:
            snippet = e.context[:80] + ("..." if len(e.context) > 80 else "")
            lines.append(f"- **{e.date}** - {e.document}: {snippet}")
        block = f"## {y} ({len(year_events)} events)\n" + "\n".join(lines)
        if len(year_events) > limit:
            block += f"\n... and {len(year_events) - limit} more"
        groups.append(block)

    header = f"# Timeline Events for {year}" if year else "# Timeline Events"
    range_line = ""
    if not year and corpus.date_range:
        range_line = f"**Date Range:** {corpus.date_range.earliest} to {corpus.date_range.latest}\n"

    return (
        f"{header}\n\n"
        f"**Total Events:** {len(events)}\n"
        f"{range_line}\n"
        + "\n\n".join(groups)
        + "\n\n---\n\n"
        "Include significant events from across the entire date range, not just recent ones."
    )


def handle_get_value_history(params: dict[str, Any], ctx: SourceContext) -> str:
    """Every value reported for a marker, oldest first."""
    p = MarkerParams.model_validate(params)
    marker = p.marker.strip()
    if not marker:
        return 'Error: Please provide a marker name (e.g., "TSH", "Homocysteine", "Neutrophils")'

    readings = find_marker_values(ctx.corpus, marker)
    if not readings:
        return (
            f'# Value History for "{marker}"\n\n'
            f'No values found for marker "{marker}". Try:\n'
            "- A different spelling or abbreviation\n"
            f'- search_data("{marker}") to find related content'
        )

    documents = {r.document for r in readings}
    entries = "\n\n".join(
        f"- **{r.date}**: {r.value}{' ' + r.unit if r.unit else ''} ({r.document})\n"
        f"  Context: {r.context}"
        for r in readings
    )
    logger.debug(f"Value history for {marker}: {len(readings)} readings")
    return (
        f'# Value History for "{marker}"\n\n'
        f"**Found {len(readings)} value(s) across {len(documents)} document(s)**\n\n"
        f"{entries}\n\n"
        "---\n\n"
        "Use this history to identify trends (improving, worsening, stable) in your analysis."
    )

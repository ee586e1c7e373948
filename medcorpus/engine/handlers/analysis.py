"""Analysis draft tool handlers.

Handles:
- get_analysis: Render the current draft
- update_analysis: Create, append to or replace a draft section
- complete_analysis: Coverage-gated completion

Also renders the kernel's read-only views: coverage stats, the final
ordered report and the external state summary used for context compression.
"""

import logging
import math
from typing import Any

from ...models import CompleteAnalysisParams, CoverageStats, DraftWrite, EmptyParams, UpdateAnalysisParams
from ..core.constants import (
    AUTO_SECTION_KEYWORD,
    COMPLETION_MARKER,
    EXPECTED_SECTIONS,
    REQUIRED_SECTIONS,
)
from .base import AnalystContext, missing_parameter

logger = logging.getLogger(__name__)


def coverage_percent(read: int, total: int) -> float:
    """Percent of documents read, rounded half-up and clamped to [0, 100]."""
    percent = math.floor(100 * read / max(1, total) + 0.5)
    return float(min(100, max(0, percent)))


def coverage_stats(ctx: AnalystContext) -> CoverageStats:
    read = len(ctx.exploration.documents_read)
    total = len(ctx.corpus.document_names)
    return CoverageStats(
        documents_read=read,
        total_documents=total,
        document_coverage=coverage_percent(read, total),
        searches_performed=len(ctx.exploration.queries),
        analysis_sections=len(ctx.draft),
        date_range_checked=ctx.exploration.date_range_checked,
        timeline_extracted=ctx.exploration.timeline_extracted,
    )


def _render_sections(items: list[tuple[str, str]]) -> str:
    return "\n\n---\n\n".join(f"## {title}\n\n{content}" for title, content in items)


def handle_get_analysis(params: dict[str, Any], ctx: AnalystContext) -> str:
    """Render the current draft as markdown."""
    EmptyParams.model_validate(params)
    if not ctx.draft:
        return "Analysis is empty. Use update_analysis() to start building your analysis."
    return f"# Current Analysis\n\n{_render_sections(ctx.draft.items())}"


def handle_update_analysis(params: dict[str, Any], ctx: AnalystContext) -> str:
    """Write to a draft section.

    ``section == "append"`` (any case) stores the content under the next
    auto-generated title. Otherwise the section is created, appended to, or
    replaced when ``replace`` is true.
    """
    p = UpdateAnalysisParams.model_validate(params)
    section = p.section.strip()
    if not section:
        return missing_parameter("update_analysis", "section")

    if section.lower() == AUTO_SECTION_KEYWORD:
        title = ctx.draft.add_auto_section(p.content)
        return f'Added new section: "{title}"'

    outcome = ctx.draft.write(section, p.content, replace=bool(p.replace))
    if outcome == DraftWrite.APPENDED:
        return f'Appended to section: "{section}"'
    return f'Updated section: "{section}"'


def unmet_requirements(ctx: AnalystContext, stats: CoverageStats) -> list[str]:
    """Human-readable list of every completion requirement not yet met."""
    cfg = ctx.settings
    issues: list[str] = []

    docs_needed = min(cfg.min_documents_read, stats.total_documents)
    if stats.documents_read < docs_needed:
        issues.append(
            f"Only {stats.documents_read} of {stats.total_documents} documents read "
            f"({stats.document_coverage:.0f}%, need at least {docs_needed}). "
            "Read more documents before completing."
        )

    if stats.searches_performed < cfg.min_searches:
        issues.append(
            f"Only {stats.searches_performed} searches performed (need at least {cfg.min_searches}). "
            "Use search_data() to cross-reference findings and find patterns."
        )

    if not stats.date_range_checked:
        issues.append(
            "Date range not checked. Call get_date_range() to understand the temporal scope of the data."
        )

    if not stats.timeline_extracted:
        issues.append(
            "Timeline events not extracted. Call extract_timeline_events() to build the "
            "Medical History Timeline."
        )

    missing_required = [
        label for label, keywords in REQUIRED_SECTIONS if not ctx.draft.has_section_matching(keywords)
    ]
    if missing_required:
        issues.append(
            f"Missing REQUIRED sections ({len(missing_required)}): {', '.join(missing_required)}. "
            "Use update_analysis() to write each of these before completing."
        )

    missing_expected = [
        label for label, keywords in EXPECTED_SECTIONS if not ctx.draft.has_section_matching(keywords)
    ]
    present = len(EXPECTED_SECTIONS) - len(missing_expected)
    if present < cfg.min_expected_sections:
        issues.append(
            f"Only {present}/{len(EXPECTED_SECTIONS)} expected sections written "
            f"(need at least {cfg.min_expected_sections}). "
            f"Missing: {', '.join(missing_expected)}. "
            f"Write at least {cfg.min_expected_sections - present} more."
        )

    return issues


def handle_complete_analysis(params: dict[str, Any], ctx: AnalystContext) -> str:
    """Finish the analysis if every coverage and content requirement holds.

    Returns:
        ``ANALYSIS_COMPLETE|confidence|summary`` on success, otherwise an
        enumerated list of unmet requirements and the current coverage stats.
    """
    p = CompleteAnalysisParams.model_validate(params)
    stats = coverage_stats(ctx)
    issues = unmet_requirements(ctx, stats)

    if issues:
        logger.info(f"complete_analysis rejected with {len(issues)} unmet requirement(s)")
        numbered = "\n".join(f"{i}. {issue}" for i, issue in enumerate(issues, 1))
        return (
            "# Cannot Complete Analysis Yet\n\n"
            "The following requirements are not met:\n\n"
            f"{numbered}\n\n"
            "## Current Coverage Stats\n"
            f"- Documents read: {stats.documents_read}/{stats.total_documents} "
            f"({stats.document_coverage:.0f}%)\n"
            f"- Searches performed: {stats.searches_performed}\n"
            f"- Analysis sections: {stats.analysis_sections}\n"
            f"- Date range checked: {'Yes' if stats.date_range_checked else 'No'}\n"
            f"- Timeline extracted: {'Yes' if stats.timeline_extracted else 'No'}\n\n"
            "Please address these issues before calling complete_analysis() again."
        )

    logger.info(
        f"Analysis complete: {stats.analysis_sections} sections, "
        f"{stats.documents_read}/{stats.total_documents} documents read"
    )
    return f"{COMPLETION_MARKER}|{p.confidence}|{p.summary}"


def render_final_analysis(ctx: AnalystContext) -> str:
    """The draft in report order, or an empty string when nothing was written."""
    if not ctx.draft:
        return ""
    return f"# Comprehensive Medical Analysis\n\n{_render_sections(ctx.draft.ordered_items())}"


def render_external_state(ctx: AnalystContext) -> str:
    """What is stored outside the conversation: draft sections and exploration."""
    lines = ["## Analysis Sections (stored externally)"]
    if not ctx.draft:
        lines.append("No sections written yet.")
    for title, content in ctx.draft.items():
        lines.append(f"- WRITTEN: {title} (~{round(len(content) / 1024)}KB)")

    exploration = ctx.exploration
    read = list(exploration.documents_read)
    unread = [d for d in ctx.corpus.document_names if d not in exploration.documents_read]
    lines += ["", "## Exploration Progress", f"Documents read: {len(read)}/{len(ctx.corpus.document_names)}"]
    lines += [f"  - READ: {d}" for d in read]
    lines += [f"  - UNREAD: {d}" for d in unread]

    lines.append(f"Searches performed: {len(exploration.queries)}")
    lines += [f'  - "{q}"' for q in dict.fromkeys(exploration.queries) if q]
    lines.append(f"Date range checked: {'Yes' if exploration.date_range_checked else 'No'}")
    lines.append(f"Timeline extracted: {'Yes' if exploration.timeline_extracted else 'No'}")
    return "\n".join(lines)

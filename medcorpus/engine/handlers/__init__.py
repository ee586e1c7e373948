"""Tool handlers for the medcorpus kernels.

This package contains tool handlers organized by domain:
- source: Corpus tools shared by both kernels (list, read, search, dates, values)
- analysis: Analysis draft tools and the coverage-gated completion
- validation: Artifact inspection, verification and the issue log

Each handler is a standalone function that takes:
- params: dict[str, Any] - Tool arguments from the agent
- ctx: SourceContext subclass - Per-run kernel state

And returns the text shown to the agent.
"""

from .analysis import (
    coverage_stats,
    handle_complete_analysis,
    handle_get_analysis,
    handle_update_analysis,
    render_external_state,
    render_final_analysis,
)
from .base import (
    AnalystContext,
    ExplorationState,
    HandlerFunc,
    SourceContext,
    ValidatorContext,
)
from .source import (
    handle_extract_timeline_events,
    handle_get_date_range,
    handle_get_document_summary,
    handle_get_value_history,
    handle_list_documents,
    handle_list_documents_by_year,
    handle_read_document,
    handle_search_data,
)
from .validation import (
    handle_check_value_in_json,
    handle_compare_date_ranges,
    handle_complete_validation,
    handle_find_missing_timeline_years,
    handle_get_json_overview,
    handle_get_json_section_summary,
    handle_get_validation_summary,
    handle_report_issue,
    handle_verify_value_exists,
)

__all__ = [
    # Base
    "ExplorationState",
    "SourceContext",
    "AnalystContext",
    "ValidatorContext",
    "HandlerFunc",
    # Source handlers
    "handle_list_documents",
    "handle_read_document",
    "handle_get_document_summary",
    "handle_search_data",
    "handle_get_date_range",
    "handle_list_documents_by_year",
    "handle_extract_timeline_events",
    "handle_get_value_history",
    # Analysis handlers
    "handle_get_analysis",
    "handle_update_analysis",
    "handle_complete_analysis",
    "coverage_stats",
    "render_final_analysis",
    "render_external_state",
    # Validation handlers
    "handle_verify_value_exists",
    "handle_get_json_overview",
    "handle_get_json_section_summary",
    "handle_check_value_in_json",
    "handle_compare_date_ranges",
    "handle_find_missing_timeline_years",
    "handle_report_issue",
    "handle_get_validation_summary",
    "handle_complete_validation",
]

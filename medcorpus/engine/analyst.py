"""Analyst kernel.

Executes the analyst agent's tool calls against one parsed corpus, tracks
which parts of the corpus the agent has explored and holds back
``complete_analysis`` until the coverage and content requirements are met.
"""

import logging
from typing import Any, Mapping

from ..config import Settings
from ..config import settings as default_settings
from ..models import AnalystTool, CoverageStats
from .core import parse_corpus
from .dispatch import resolve_tool, run_handler, unknown_tool
from .handlers import (
    AnalystContext,
    HandlerFunc,
    coverage_stats,
    handle_complete_analysis,
    handle_extract_timeline_events,
    handle_get_analysis,
    handle_get_date_range,
    handle_get_value_history,
    handle_list_documents,
    handle_list_documents_by_year,
    handle_read_document,
    handle_search_data,
    handle_update_analysis,
    render_external_state,
    render_final_analysis,
)

logger = logging.getLogger(__name__)


class AnalystKernel:
    """Tool executor for the analyst agent.

    One kernel serves one agent run over one corpus. State changes only
    through ``execute``; the accessors below are read-only views.

    Example:
        kernel = AnalystKernel(corpus_text)
        kernel.execute("read_document", {"document_name": "CBC Report"})
        kernel.execute("complete_analysis", {"summary": "...", "confidence": "high"})
    """

    _HANDLERS: dict[AnalystTool, HandlerFunc] = {
        AnalystTool.LIST_DOCUMENTS: handle_list_documents,
        AnalystTool.READ_DOCUMENT: handle_read_document,
        AnalystTool.SEARCH_DATA: handle_search_data,
        AnalystTool.GET_ANALYSIS: handle_get_analysis,
        AnalystTool.UPDATE_ANALYSIS: handle_update_analysis,
        AnalystTool.COMPLETE_ANALYSIS: handle_complete_analysis,
        AnalystTool.GET_DATE_RANGE: handle_get_date_range,
        AnalystTool.LIST_DOCUMENTS_BY_YEAR: handle_list_documents_by_year,
        AnalystTool.EXTRACT_TIMELINE_EVENTS: handle_extract_timeline_events,
        AnalystTool.GET_VALUE_HISTORY: handle_get_value_history,
    }

    def __init__(self, corpus_text: str, settings: Settings | None = None):
        self._ctx = AnalystContext(
            corpus=parse_corpus(corpus_text),
            settings=settings or default_settings,
            include_context_default=True,
        )
        logger.info(
            f"Analyst kernel ready: {len(self._ctx.corpus.document_names)} documents, "
            f"{self._ctx.corpus.total_sections} sections"
        )

    def execute(self, tool_name: str, args: Mapping[str, Any] | None = None) -> str:
        """Run one tool call and return its text result. Never raises."""
        tool = resolve_tool(AnalystTool, tool_name)
        if tool is None:
            logger.warning(f"Unknown analyst tool requested: {tool_name}")
            return unknown_tool(tool_name, AnalystTool)
        return run_handler(tool, self._HANDLERS, args, self._ctx)

    def coverage_stats(self) -> CoverageStats:
        """Snapshot of exploration coverage."""
        return coverage_stats(self._ctx)

    def final_analysis(self) -> str:
        """The draft as a single report, sections in canonical order."""
        return render_final_analysis(self._ctx)

    def external_state_summary(self) -> str:
        """Draft sections and exploration progress, for context compression."""
        return render_external_state(self._ctx)

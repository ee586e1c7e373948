"""Validator kernel.

Cross-checks a structured artifact (JSON text) against the parsed source
corpus and keeps the issues the validator agent reports.
"""

import logging
from typing import Any, Callable, Mapping

from ..config import Settings
from ..config import settings as default_settings
from ..models import ValidationIssue, ValidatorTool
from .core import load_artifact, parse_corpus
from .dispatch import resolve_tool, run_handler, unknown_tool
from .handlers import (
    HandlerFunc,
    ValidatorContext,
    handle_check_value_in_json,
    handle_compare_date_ranges,
    handle_complete_validation,
    handle_extract_timeline_events,
    handle_find_missing_timeline_years,
    handle_get_date_range,
    handle_get_document_summary,
    handle_get_json_overview,
    handle_get_json_section_summary,
    handle_get_validation_summary,
    handle_get_value_history,
    handle_list_documents,
    handle_list_documents_by_year,
    handle_report_issue,
    handle_search_data,
    handle_verify_value_exists,
)

logger = logging.getLogger(__name__)

# Old tool names still sent by earlier prompts, resolved from the call arguments
LEGACY_TOOL_ALIASES: dict[str, Callable[[Mapping[str, Any]], ValidatorTool]] = {
    "read_document": lambda args: ValidatorTool.GET_DOCUMENT_SUMMARY,
    "get_structured_json": lambda args: (
        ValidatorTool.GET_JSON_SECTION_SUMMARY if args.get("section") else ValidatorTool.GET_JSON_OVERVIEW
    ),
}


class ValidatorKernel:
    """Tool executor for the validator agent.

    Malformed artifact text does not fail construction; the tools then see
    an empty structure.
    """

    _HANDLERS: dict[ValidatorTool, HandlerFunc] = {
        # Source data
        ValidatorTool.LIST_DOCUMENTS: handle_list_documents,
        ValidatorTool.GET_DOCUMENT_SUMMARY: handle_get_document_summary,
        ValidatorTool.SEARCH_DATA: handle_search_data,
        ValidatorTool.VERIFY_VALUE_EXISTS: handle_verify_value_exists,
        ValidatorTool.GET_DATE_RANGE: handle_get_date_range,
        ValidatorTool.LIST_DOCUMENTS_BY_YEAR: handle_list_documents_by_year,
        ValidatorTool.EXTRACT_TIMELINE_EVENTS: handle_extract_timeline_events,
        ValidatorTool.GET_VALUE_HISTORY: handle_get_value_history,
        # Artifact inspection
        ValidatorTool.GET_JSON_OVERVIEW: handle_get_json_overview,
        ValidatorTool.GET_JSON_SECTION_SUMMARY: handle_get_json_section_summary,
        ValidatorTool.COMPARE_DATE_RANGES: handle_compare_date_ranges,
        ValidatorTool.CHECK_VALUE_IN_JSON: handle_check_value_in_json,
        ValidatorTool.FIND_MISSING_TIMELINE_YEARS: handle_find_missing_timeline_years,
        # Issue log
        ValidatorTool.REPORT_ISSUE: handle_report_issue,
        ValidatorTool.GET_VALIDATION_SUMMARY: handle_get_validation_summary,
        ValidatorTool.COMPLETE_VALIDATION: handle_complete_validation,
    }

    def __init__(self, corpus_text: str, artifact_text: str, settings: Settings | None = None):
        self._ctx = ValidatorContext(
            corpus=parse_corpus(corpus_text),
            settings=settings or default_settings,
            include_context_default=False,
            artifact=load_artifact(artifact_text),
        )
        logger.info(
            f"Validator kernel ready: {len(self._ctx.corpus.document_names)} documents, "
            f"{len(self._ctx.artifact)} artifact fields"
        )

    def execute(self, tool_name: str, args: Mapping[str, Any] | None = None) -> str:
        """Run one tool call and return its text result. Never raises."""
        alias = LEGACY_TOOL_ALIASES.get(tool_name) if isinstance(tool_name, str) else None
        if alias is not None:
            tool = alias(args if isinstance(args, Mapping) else {})
            logger.debug(f"Resolved legacy tool {tool_name} to {tool.value}")
        else:
            tool = resolve_tool(ValidatorTool, tool_name)
        if tool is None:
            logger.warning(f"Unknown validator tool requested: {tool_name}")
            return unknown_tool(tool_name, ValidatorTool)
        return run_handler(tool, self._HANDLERS, args, self._ctx)

    def issues(self) -> list[ValidationIssue]:
        """Copy of the issue log, in report order."""
        return [issue.model_copy() for issue in self._ctx.issues]

    def verified_markers(self) -> list[str]:
        """Markers found in both source and artifact, in first-verified order."""
        return list(self._ctx.verified_markers)

"""Enumeration types for medcorpus kernels."""

from enum import StrEnum


class AnalystTool(StrEnum):
    """Tools exposed by the analyst kernel."""

    LIST_DOCUMENTS = "list_documents"
    READ_DOCUMENT = "read_document"
    SEARCH_DATA = "search_data"
    GET_ANALYSIS = "get_analysis"
    UPDATE_ANALYSIS = "update_analysis"
    COMPLETE_ANALYSIS = "complete_analysis"
    # Temporal awareness
    GET_DATE_RANGE = "get_date_range"
    LIST_DOCUMENTS_BY_YEAR = "list_documents_by_year"
    EXTRACT_TIMELINE_EVENTS = "extract_timeline_events"
    GET_VALUE_HISTORY = "get_value_history"


class ValidatorTool(StrEnum):
    """Tools exposed by the validator kernel."""

    # Source data
    LIST_DOCUMENTS = "list_documents"
    GET_DOCUMENT_SUMMARY = "get_document_summary"
    SEARCH_DATA = "search_data"
    VERIFY_VALUE_EXISTS = "verify_value_exists"
    GET_DATE_RANGE = "get_date_range"
    LIST_DOCUMENTS_BY_YEAR = "list_documents_by_year"
    EXTRACT_TIMELINE_EVENTS = "extract_timeline_events"
    GET_VALUE_HISTORY = "get_value_history"
    # Artifact inspection
    GET_JSON_OVERVIEW = "get_json_overview"
    GET_JSON_SECTION_SUMMARY = "get_json_section_summary"
    COMPARE_DATE_RANGES = "compare_date_ranges"
    CHECK_VALUE_IN_JSON = "check_value_in_json"
    FIND_MISSING_TIMELINE_YEARS = "find_missing_timeline_years"
    # Issue log
    REPORT_ISSUE = "report_issue"
    GET_VALIDATION_SUMMARY = "get_validation_summary"
    COMPLETE_VALIDATION = "complete_validation"


class IssueSeverity(StrEnum):
    """Severity of a reported validation issue."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class IssueCategory(StrEnum):
    """Suggested categories for reported issues (free text is also accepted)."""

    MISSING_DATA = "missing_data"
    MISSING_TIMELINE = "missing_timeline"
    WRONG_VALUE = "wrong_value"
    MISSING_CONTEXT = "missing_context"
    INCONSISTENCY = "inconsistency"


class VerificationStatus(StrEnum):
    """Outcome of verify_value_exists."""

    VERIFIED = "VERIFIED"
    MISSING_FROM_JSON = "MISSING FROM JSON"
    NOT_IN_SOURCE = "NOT IN SOURCE"
    NOT_FOUND = "NOT FOUND"


class DraftWrite(StrEnum):
    """What update_analysis did to the draft."""

    CREATED = "created"
    APPENDED = "appended"
    REPLACED = "replaced"

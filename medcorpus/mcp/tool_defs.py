"""Tool definitions for function-calling agents.

Each kernel's tool vocabulary is published as a list of
``{name, description, inputSchema}`` entries so the agent loop can register
them with a model. There is exactly one definition per tool enum member.

Tool Categories:
    - Source Data: list_documents, read_document, get_document_summary, search_data
    - Temporal: get_date_range, list_documents_by_year, extract_timeline_events, get_value_history
    - Analysis Draft: get_analysis, update_analysis, complete_analysis
    - Artifact Inspection: get_json_overview, get_json_section_summary, check_value_in_json,
      compare_date_ranges, find_missing_timeline_years, verify_value_exists
    - Issue Log: report_issue, get_validation_summary, complete_validation
"""

from ..engine.core.constants import EXPECTED_SECTIONS, REQUIRED_SECTIONS
from ..models import AnalystTool, IssueCategory, IssueSeverity, ValidatorTool

_NO_PARAMS = {"type": "object", "properties": {}}

_REQUIRED_LABELS = ", ".join(label for label, _ in REQUIRED_SECTIONS)
_EXPECTED_LABELS = ", ".join(label for label, _ in EXPECTED_SECTIONS)


ANALYST_TOOL_DEFINITIONS: list[dict] = [
    # ============ Source Data Tools ============
    {
        "name": AnalystTool.LIST_DOCUMENTS.value,
        "description": "List all documents in the extracted data with section counts, sizes and pages. Use this first to see what you have to work with.",
        "inputSchema": _NO_PARAMS,
    },
    {
        "name": AnalystTool.READ_DOCUMENT.value,
        "description": "Read the full content of a document. Use the document name from list_documents.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "document_name": {
                    "type": "string",
                    "description": "Document name from list_documents (exact name preferred, partial names also match)",
                },
            },
            "required": ["document_name"],
        },
    },
    {
        "name": AnalystTool.SEARCH_DATA.value,
        "description": "Search all documents for a term, marker or pattern. Returns matching lines grouped by document and page.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": 'A lab marker (e.g. "TSH"), a condition (e.g. "diabetes") or a pattern (e.g. "elevated")',
                },
                "include_context": {
                    "type": "boolean",
                    "default": True,
                    "description": "Include two lines before and after each match",
                },
            },
            "required": ["query"],
        },
    },
    # ============ Temporal Tools ============
    {
        "name": AnalystTool.GET_DATE_RANGE.value,
        "description": "Get the date range of all data and the years with and without documents. Call this early; the timeline should be proportional to the span.",
        "inputSchema": _NO_PARAMS,
    },
    {
        "name": AnalystTool.LIST_DOCUMENTS_BY_YEAR.value,
        "description": "List documents grouped by year to see the temporal distribution of the data.",
        "inputSchema": _NO_PARAMS,
    },
    {
        "name": AnalystTool.EXTRACT_TIMELINE_EVENTS.value,
        "description": "Get all dated events extracted from the documents, grouped by year. Use this to build the Medical History Timeline.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "year": {"type": "integer", "description": "Only return events from this year"},
            },
        },
    },
    {
        "name": AnalystTool.GET_VALUE_HISTORY.value,
        "description": "Get every value reported for a lab marker across documents, oldest first, to track trends.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "marker": {
                    "type": "string",
                    "description": 'The marker to track (e.g. "TSH", "Homocysteine", "Neutrophils")',
                },
            },
            "required": ["marker"],
        },
    },
    # ============ Analysis Draft Tools ============
    {
        "name": AnalystTool.GET_ANALYSIS.value,
        "description": "Get the current state of your analysis to review what you have written so far.",
        "inputSchema": _NO_PARAMS,
    },
    {
        "name": AnalystTool.UPDATE_ANALYSIS.value,
        "description": 'Add to or update a section of your analysis. Lab values should carry value, unit, reference range and flag, e.g. "HbA1c: 5.7 % (ref 4.0-5.6) *H".',
        "inputSchema": {
            "type": "object",
            "properties": {
                "section": {
                    "type": "string",
                    "description": 'Section title (e.g. "Executive Summary"). Use "append" to add a new auto-named section.',
                },
                "content": {"type": "string", "description": "Markdown content to add"},
                "replace": {
                    "type": "boolean",
                    "default": False,
                    "description": "Replace the section instead of appending to it",
                },
            },
            "required": ["section", "content"],
        },
    },
    {
        "name": AnalystTool.COMPLETE_ANALYSIS.value,
        "description": (
            f"Signal that the analysis is complete. Requires these sections: {_REQUIRED_LABELS}; "
            f"and at least 3 of: {_EXPECTED_LABELS}. Also requires documents read, "
            "searches performed, the date range checked and timeline events extracted."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "summary": {"type": "string", "description": "Brief summary of what the analysis covers"},
                "confidence": {
                    "type": "string",
                    "enum": ["high", "medium", "low"],
                    "description": "Confidence in the analysis",
                },
            },
            "required": ["summary", "confidence"],
        },
    },
]


VALIDATOR_TOOL_DEFINITIONS: list[dict] = [
    # ============ Source Data Tools ============
    {
        "name": ValidatorTool.LIST_DOCUMENTS.value,
        "description": "List all source documents with summary stats.",
        "inputSchema": _NO_PARAMS,
    },
    {
        "name": ValidatorTool.GET_DOCUMENT_SUMMARY.value,
        "description": "Get a summary of a source document (size, dates, key values) without its full content.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "document_name": {"type": "string", "description": "The document to summarize"},
            },
            "required": ["document_name"],
        },
    },
    {
        "name": ValidatorTool.SEARCH_DATA.value,
        "description": "Search source documents for a term. Returns matching lines only.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": 'Be specific, e.g. "glucose 105" or "HbA1c"'},
                "include_context": {
                    "type": "boolean",
                    "default": False,
                    "description": "Include surrounding lines",
                },
            },
            "required": ["query"],
        },
    },
    {
        "name": ValidatorTool.VERIFY_VALUE_EXISTS.value,
        "description": "Check that a value exists in both the source and the JSON, then compare unit, reference range and status. This is the primary verification tool.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "marker": {"type": "string", "description": 'The marker or test name, e.g. "Glucose"'},
                "expected_value": {
                    "type": "string",
                    "description": "Expected value; when omitted only the marker is checked",
                },
            },
            "required": ["marker"],
        },
    },
    {
        "name": ValidatorTool.GET_DATE_RANGE.value,
        "description": "Get the date range of the source data, to compare with the JSON timeline.",
        "inputSchema": _NO_PARAMS,
    },
    {
        "name": ValidatorTool.LIST_DOCUMENTS_BY_YEAR.value,
        "description": "List source documents grouped by year.",
        "inputSchema": _NO_PARAMS,
    },
    {
        "name": ValidatorTool.EXTRACT_TIMELINE_EVENTS.value,
        "description": "Get all dated events from the source documents.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "year": {"type": "integer", "description": "Only return events from this year"},
            },
        },
    },
    {
        "name": ValidatorTool.GET_VALUE_HISTORY.value,
        "description": "Get the history of a marker from the source documents.",
        "inputSchema": {
            "type": "object",
            "properties": {"marker": {"type": "string", "description": "The marker to track"}},
            "required": ["marker"],
        },
    },
    # ============ Artifact Inspection Tools ============
    {
        "name": ValidatorTool.GET_JSON_OVERVIEW.value,
        "description": "Get an overview of the structured JSON: its top-level sections with type and size.",
        "inputSchema": _NO_PARAMS,
    },
    {
        "name": ValidatorTool.GET_JSON_SECTION_SUMMARY.value,
        "description": "Get a summary of one JSON section (type, count and a short preview).",
        "inputSchema": {
            "type": "object",
            "properties": {
                "section": {
                    "type": "string",
                    "description": 'Top-level section name, e.g. "timeline" or "criticalFindings"',
                },
            },
            "required": ["section"],
        },
    },
    {
        "name": ValidatorTool.COMPARE_DATE_RANGES.value,
        "description": "Compare the source date range with the JSON timeline and list missing years.",
        "inputSchema": _NO_PARAMS,
    },
    {
        "name": ValidatorTool.CHECK_VALUE_IN_JSON.value,
        "description": "Check whether a marker (and optionally a value) appears in the structured JSON, and where.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "marker": {"type": "string", "description": "The marker or field name to look for"},
                "value": {"type": "string", "description": "The value to look for"},
            },
            "required": ["marker"],
        },
    },
    {
        "name": ValidatorTool.FIND_MISSING_TIMELINE_YEARS.value,
        "description": "Find years that have source data but no entry in the JSON timeline.",
        "inputSchema": _NO_PARAMS,
    },
    # ============ Issue Log Tools ============
    {
        "name": ValidatorTool.REPORT_ISSUE.value,
        "description": "Log a validation issue that needs fixing.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "category": {
                    "type": "string",
                    "description": "Category, e.g. " + ", ".join(c.value for c in IssueCategory),
                },
                "severity": {
                    "type": "string",
                    "enum": [s.value for s in IssueSeverity],
                    "default": IssueSeverity.WARNING.value,
                },
                "description": {"type": "string", "description": "What is wrong"},
                "source_location": {"type": "string", "description": "Where the correct data is in the source"},
                "json_location": {"type": "string", "description": "Where the problem is in the JSON"},
            },
            "required": ["category", "severity", "description"],
        },
    },
    {
        "name": ValidatorTool.GET_VALIDATION_SUMMARY.value,
        "description": "Get a summary of all issues reported so far.",
        "inputSchema": _NO_PARAMS,
    },
    {
        "name": ValidatorTool.COMPLETE_VALIDATION.value,
        "description": "Signal that validation is complete.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "status": {
                    "type": "string",
                    "description": "Overall status: pass, pass_with_warnings or needs_revision",
                },
                "summary": {"type": "string", "description": "Brief summary of validation results"},
            },
            "required": ["status", "summary"],
        },
    },
]


def get_tool_definition(name: str, definitions: list[dict]) -> dict | None:
    """Look up a tool definition by name."""
    for definition in definitions:
        if definition["name"] == name:
            return definition
    return None

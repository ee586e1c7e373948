"""Tool parameter models (pydantic *Params classes).

Agents send loosely typed JSON arguments; these models coerce them (numbers
to strings, "true" to True, "2024" to 2024) and ignore unknown keys. A value
that cannot be coerced raises a pydantic ValidationError, which the kernels
render as text.
"""

from pydantic import BaseModel, ConfigDict, Field


class ToolParams(BaseModel):
    """Base for all tool parameter models."""

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")


class EmptyParams(ToolParams):
    """Parameters for tools that take no arguments."""


# ============ SOURCE DATA PARAMS ============


class ReadDocumentParams(ToolParams):
    """Parameters for read_document / get_document_summary."""

    document_name: str = Field(default="", description="Document name from list_documents")


class SearchDataParams(ToolParams):
    """Parameters for search_data."""

    query: str | None = Field(default="", description="Case-insensitive search text")
    include_context: bool | None = Field(
        default=None, description="Include surrounding lines (kernel default when omitted)"
    )


class TimelineParams(ToolParams):
    """Parameters for extract_timeline_events."""

    year: int | None = Field(default=None, description="Only return events from this year")


class MarkerParams(ToolParams):
    """Parameters for get_value_history."""

    marker: str = Field(default="", description="Lab marker or term to track")


# ============ ANALYSIS DRAFT PARAMS ============


class UpdateAnalysisParams(ToolParams):
    """Parameters for update_analysis."""

    section: str = Field(default="", description='Section title, or "append" for a new auto-named one')
    content: str = Field(default="", description="Markdown content to add")
    replace: bool | None = Field(default=None, description="Replace instead of append")


class CompleteAnalysisParams(ToolParams):
    """Parameters for complete_analysis."""

    summary: str = Field(default="", description="Brief summary of what was covered")
    confidence: str = Field(default="", description='"high", "medium" or "low"')


# ============ VALIDATOR PARAMS ============


class VerifyValueParams(ToolParams):
    """Parameters for verify_value_exists."""

    marker: str = Field(default="", description="Marker or test name")
    expected_value: str | None = Field(default=None, description="Expected value, optional")


class CheckValueParams(ToolParams):
    """Parameters for check_value_in_json."""

    marker: str = Field(default="", description="Marker to look for")
    value: str | None = Field(default=None, description="Value to look for, optional")


class JsonSectionParams(ToolParams):
    """Parameters for get_json_section_summary."""

    section: str = Field(default="", description="Top-level artifact field name")


class ReportIssueParams(ToolParams):
    """Parameters for report_issue."""

    category: str | None = Field(default="", description="Issue category")
    severity: str | None = Field(default="warning", description="critical, warning or info")
    description: str | None = Field(default="", description="What is wrong")
    source_location: str | None = Field(default=None, description="Where in the source")
    json_location: str | None = Field(default=None, description="Where in the artifact")


class CompleteValidationParams(ToolParams):
    """Parameters for complete_validation."""

    status: str = Field(default="", description="Overall validation status")
    summary: str = Field(default="", description="Summary of findings")

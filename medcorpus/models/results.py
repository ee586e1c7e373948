"""Kernel state snapshots exposed outside of execute()."""

from pydantic import BaseModel, Field


class CoverageStats(BaseModel):
    """Exploration coverage of the analyst kernel."""

    documents_read: int = Field(default=0, ge=0, description="Distinct documents read")
    total_documents: int = Field(default=0, ge=0, description="Documents in the corpus")
    document_coverage: float = Field(
        default=0.0, ge=0.0, le=100.0, description="Percent of documents read"
    )
    searches_performed: int = Field(default=0, ge=0, description="search_data calls")
    analysis_sections: int = Field(default=0, ge=0, description="Draft sections written")
    date_range_checked: bool = Field(default=False, description="get_date_range was called")
    timeline_extracted: bool = Field(
        default=False, description="extract_timeline_events was called"
    )


class ValidationIssue(BaseModel):
    """One entry of the validator's issue log."""

    category: str = Field(..., description="Issue category, e.g. missing_data")
    severity: str = Field(..., description="critical, warning or info")
    description: str = Field(..., description="What is wrong")
    source_location: str | None = Field(default=None, description="Where in the source")
    json_location: str | None = Field(default=None, description="Where in the artifact")

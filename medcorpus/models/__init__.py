"""Pydantic models and enums for medcorpus.

Import from submodules directly for narrower imports:

    from medcorpus.models.enums import AnalystTool
    from medcorpus.models.requests import SearchDataParams
"""

from .enums import (
    AnalystTool,
    DraftWrite,
    IssueCategory,
    IssueSeverity,
    ValidatorTool,
    VerificationStatus,
)
from .requests import (
    CheckValueParams,
    CompleteAnalysisParams,
    CompleteValidationParams,
    EmptyParams,
    JsonSectionParams,
    MarkerParams,
    ReadDocumentParams,
    ReportIssueParams,
    SearchDataParams,
    TimelineParams,
    ToolParams,
    UpdateAnalysisParams,
    VerifyValueParams,
)
from .results import CoverageStats, ValidationIssue

__all__ = [
    # Enums
    "AnalystTool",
    "ValidatorTool",
    "IssueSeverity",
    "IssueCategory",
    "VerificationStatus",
    "DraftWrite",
    # Params
    "ToolParams",
    "EmptyParams",
    "ReadDocumentParams",
    "SearchDataParams",
    "TimelineParams",
    "MarkerParams",
    "UpdateAnalysisParams",
    "CompleteAnalysisParams",
    "VerifyValueParams",
    "CheckValueParams",
    "JsonSectionParams",
    "ReportIssueParams",
    "CompleteValidationParams",
    # Results
    "CoverageStats",
    "ValidationIssue",
]

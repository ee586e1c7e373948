"""Engine core module.

This module contains the corpus index and the helpers shared by the kernels:
- Date extraction and corpus parsing
- Corpus data structures and the analysis draft
- Search, value history and key value extraction
- Structured artifact inspection
- Token estimation
- Prompt template conditionals
"""

from .artifact import (
    artifact_timeline,
    extract_value_details,
    find_marker_in_artifact,
    load_artifact,
    normalize_unit,
    parse_source_lab_line,
)
from .dates import extract_dates, extract_dates_from_line
from .document import DateMatch, DateRange, ParsedCorpus, Section, TimelineEvent
from .draft import AnalysisDraft
from .parser import parse_corpus
from .search import (
    extract_key_values,
    find_document_sections,
    find_marker_values,
    search_sections,
)
from .templates import apply_conditional_block, apply_patient_context
from .tokens import count_tokens, format_size

__all__ = [
    # Document structures
    "Section",
    "DateMatch",
    "TimelineEvent",
    "DateRange",
    "ParsedCorpus",
    "AnalysisDraft",
    # Parsing
    "extract_dates",
    "extract_dates_from_line",
    "parse_corpus",
    # Search
    "find_document_sections",
    "search_sections",
    "find_marker_values",
    "extract_key_values",
    # Artifact
    "load_artifact",
    "find_marker_in_artifact",
    "parse_source_lab_line",
    "extract_value_details",
    "normalize_unit",
    "artifact_timeline",
    # Token utilities
    "count_tokens",
    "format_size",
    # Templates
    "apply_conditional_block",
    "apply_patient_context",
]

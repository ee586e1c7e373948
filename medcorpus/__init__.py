"""medcorpus - document indexing and coverage-gated tool dispatch.

Parses a flattened corpus of extracted document text into sections and a
temporal index, and exposes two tool-dispatch kernels to an external agent:

- AnalystKernel: read/search/write tools with a coverage-gated completion tool
- ValidatorKernel: cross-checks a structured JSON artifact against the corpus

Usage:
    from medcorpus import AnalystKernel

    kernel = AnalystKernel(extracted_text)
    kernel.execute("list_documents", {})
    kernel.execute("read_document", {"document_name": "CBC Report"})
"""

__version__ = "0.3.1"

from .engine import AnalystKernel, ValidatorKernel
from .engine.core import (
    ParsedCorpus,
    Section,
    apply_conditional_block,
    apply_patient_context,
    extract_dates,
    parse_corpus,
)

__all__ = [
    "__version__",
    "AnalystKernel",
    "ValidatorKernel",
    "ParsedCorpus",
    "Section",
    "extract_dates",
    "parse_corpus",
    "apply_conditional_block",
    "apply_patient_context",
]

"""Base infrastructure for tool handlers.

This module provides the common types used by all handler modules. Each
handler receives the raw tool arguments plus a context carrying the kernel's
state, and returns the text shown to the agent.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from ...config import Settings
from ...models import ValidationIssue
from ..core import AnalysisDraft, ParsedCorpus


@dataclass
class ExplorationState:
    """What the agent has looked at so far.

    Only ever grows during a run.
    """

    # Insertion-ordered set of document names
    documents_read: dict[str, None] = field(default_factory=dict)
    queries: list[str] = field(default_factory=list)
    date_range_checked: bool = False
    timeline_extracted: bool = False

    def mark_read(self, document: str) -> None:
        self.documents_read.setdefault(document, None)


@dataclass
class SourceContext:
    """Context passed to the source data handlers.

    Contains the parsed corpus and per-run state; decouples handlers from the
    kernel classes.
    """

    corpus: ParsedCorpus
    settings: Settings
    exploration: ExplorationState = field(default_factory=ExplorationState)

    # search_data include_context when the agent omits it
    include_context_default: bool = True


@dataclass
class AnalystContext(SourceContext):
    """Source context plus the analysis draft."""

    draft: AnalysisDraft = field(default_factory=AnalysisDraft)


@dataclass
class ValidatorContext(SourceContext):
    """Source context plus the artifact under validation and the issue log."""

    artifact: dict[str, Any] = field(default_factory=dict)
    issues: list[ValidationIssue] = field(default_factory=list)
    # Insertion-ordered set of marker names
    verified_markers: dict[str, None] = field(default_factory=dict)


# Type alias for handler functions
HandlerFunc = Callable[[dict[str, Any], Any], str]


def missing_parameter(tool: str, name: str) -> str:
    """Error text for a required argument that was empty or absent."""
    return f"Error: {tool}: missing required parameter '{name}'"

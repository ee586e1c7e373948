"""Tool definitions published to function-calling agents."""

from .tool_defs import (
    ANALYST_TOOL_DEFINITIONS,
    VALIDATOR_TOOL_DEFINITIONS,
    get_tool_definition,
)

__all__ = [
    "ANALYST_TOOL_DEFINITIONS",
    "VALIDATOR_TOOL_DEFINITIONS",
    "get_tool_definition",
]

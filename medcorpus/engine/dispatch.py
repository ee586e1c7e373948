"""Tool dispatch shared by the kernels.

Resolves a tool name against a closed StrEnum, looks up its handler in a
static table and turns every failure into text for the agent.
"""

import logging
from enum import StrEnum
from typing import Any, Mapping

from pydantic import ValidationError

from .handlers import HandlerFunc

logger = logging.getLogger(__name__)


def resolve_tool(tool_enum: type[StrEnum], tool_name: str) -> StrEnum | None:
    """The enum member named ``tool_name``, or None for an unknown name."""
    try:
        return tool_enum(tool_name)
    except (TypeError, ValueError):
        return None


def unknown_tool(tool_name: str, tool_enum: type[StrEnum]) -> str:
    available = ", ".join(t.value for t in tool_enum)
    return f"Unknown tool: {tool_name}. Available tools: {available}"


def format_validation_error(tool: str, exc: ValidationError) -> str:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}"
        for err in exc.errors()
    )
    return f"Invalid parameters for {tool}: {problems}"


def run_handler(
    tool: StrEnum,
    handlers: Mapping[StrEnum, HandlerFunc],
    args: Mapping[str, Any] | None,
    ctx: Any,
) -> str:
    """Invoke the handler for ``tool``; never raises."""
    try:
        params = dict(args or {})
        return handlers[tool](params, ctx)
    except ValidationError as exc:
        logger.warning(f"Invalid parameters for {tool.value}: {exc.error_count()} error(s)")
        return format_validation_error(tool.value, exc)
    except Exception as e:
        logger.error(f"Tool execution error in {tool.value}: {e}", exc_info=True)
        return f"Error executing {tool.value}: {e}"

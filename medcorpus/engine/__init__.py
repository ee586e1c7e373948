"""Engine module.

Contains the two tool-dispatch kernels and their building blocks:
- core: corpus parsing, search and artifact helpers
- handlers: one function per tool
- analyst / validator: the kernels exposed to agent loops
"""

from .analyst import AnalystKernel
from .validator import LEGACY_TOOL_ALIASES, ValidatorKernel

__all__ = [
    "AnalystKernel",
    "ValidatorKernel",
    "LEGACY_TOOL_ALIASES",
]

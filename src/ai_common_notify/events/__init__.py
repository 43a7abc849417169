"""Event classification and notification composition."""

from ._classifier import classify
from ._composer import HIGH_IMPACT_TOOLS, compose, tool_input_preview

__all__ = [
    "HIGH_IMPACT_TOOLS",
    "classify",
    "compose",
    "tool_input_preview",
]

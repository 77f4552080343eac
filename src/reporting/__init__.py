"""
Reporting Module
Breakdown table of evaluated decisions
"""

from .breakdown import breakdown_frame, format_as_table, render_breakdown

__all__ = [
    "breakdown_frame",
    "format_as_table",
    "render_breakdown"
]

"""Utility modules for the Q&A forum app."""

from .display_helpers import (
    format_created_at,
    content_preview,
    resolved_label,
    format_results_for_display,
)

__all__ = [
    "format_created_at",
    "content_preview",
    "resolved_label",
    "format_results_for_display",
]

"""Presentation layer for CLI output formatting.

Components:
- FgitColors: Shared palette for click and prompt_toolkit output
- render_listing: Grouped file listing with IDs and inline diffs
"""

from fgit.core.presentation.colors import FgitColors, render_diff_line
from fgit.core.presentation.listing_renderer import render_entry, render_listing

__all__ = [
    "FgitColors",
    "render_diff_line",
    "render_entry",
    "render_listing",
]

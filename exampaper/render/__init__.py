"""Markup rendering for exam papers."""

from .html import (
    CLASS_HOOKS,
    build_preamble,
    escape_html,
    metadata_parts,
    option_label,
    render_html,
    render_metadata,
    render_question,
    render_section,
    render_table,
)

__all__ = [
    "CLASS_HOOKS",
    "build_preamble",
    "escape_html",
    "metadata_parts",
    "option_label",
    "render_html",
    "render_metadata",
    "render_question",
    "render_section",
    "render_table",
]

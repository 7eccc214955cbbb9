"""Export functionality for exam papers."""

from .docx_generator import export_answer_key, export_to_docx
from .files import default_export_filename, ensure_output_directory
from .html_writer import export_to_html

__all__ = [
    "default_export_filename",
    "ensure_output_directory",
    "export_answer_key",
    "export_to_docx",
    "export_to_html",
]

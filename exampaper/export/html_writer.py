"""HTML file export."""

import logging

from exampaper.export.files import resolve_output_path, write_text_file
from exampaper.models.paper import Document, RenderOptions
from exampaper.render.html import render_html

logger = logging.getLogger(__name__)


def export_to_html(
    document: Document,
    output_path: str,
    options: RenderOptions | None = None,
    use_output_dir: bool = False,
    output_dir: str = "output",
) -> str:
    """
    Export a paper to an HTML file.

    The file content is exactly ``render_html(document, options)``.

    Args:
        document: Paper to export
        output_path: Destination path (``.html`` is appended if missing)
        options: Font and orientation settings
        use_output_dir: If True, saves to output_dir with a timestamped name
        output_dir: Directory used when use_output_dir is True

    Returns:
        Path to the created HTML file

    Raises:
        ExportError: If the file cannot be written
    """
    path = resolve_output_path(output_path, "html", use_output_dir, output_dir)
    markup = render_html(document, options)
    write_text_file(path, markup)
    logger.info("Wrote %d characters of HTML to %s", len(markup), path)
    return str(path)

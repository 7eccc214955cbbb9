"""Output path helpers shared by the exporters."""

import re
from datetime import datetime
from pathlib import Path

from exampaper.exceptions import ExportError
from exampaper.models.paper import Document

DEFAULT_BASE_NAME = "exam_paper"

_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')


def ensure_output_directory(output_dir: str = "output") -> Path:
    """
    Ensure the output directory exists.

    Args:
        output_dir: Directory path to create

    Returns:
        Path object for the output directory

    Raises:
        ExportError: If the directory cannot be created
    """
    output_path = Path(output_dir)
    try:
        output_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExportError(output_path, f"cannot create directory ({e.strerror or e})") from e
    return output_path


def generate_timestamped_filename(base_name: str, extension: str = "html") -> str:
    """
    Generate a filename with timestamp.

    Args:
        base_name: Base name for the file
        extension: File extension (without dot)

    Returns:
        Filename with timestamp
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    # Clean the base name to remove any path components
    base_name = Path(base_name).name
    return f"{base_name}_{timestamp}.{extension}"


def safe_base_name(document: Document) -> str:
    """Derive a filename stem from the exam title."""
    title = document.exam.title.strip()
    if not title:
        return DEFAULT_BASE_NAME
    return _INVALID_FILENAME_CHARS.sub("_", title)


def default_export_filename(document: Document, extension: str) -> str:
    """Get a timestamped filename based on the exam title."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{safe_base_name(document)}_{timestamp}.{extension}"


def resolve_output_path(
    output_path: str,
    extension: str,
    use_output_dir: bool,
    output_dir: str,
) -> Path:
    """
    Work out where an export should be written.

    With ``use_output_dir`` the stem of ``output_path`` is timestamped and
    placed in ``output_dir``; otherwise ``output_path`` is used as given,
    with ``extension`` appended when missing.
    """
    if use_output_dir:
        directory = ensure_output_directory(output_dir)
        return directory / generate_timestamped_filename(Path(output_path).stem, extension)

    path = Path(output_path)
    if path.suffix.lower() != f".{extension}":
        path = path.with_name(f"{path.name}.{extension}")
    return path


def write_text_file(path: Path, content: str) -> Path:
    """Write UTF-8 text, converting I/O failures to ExportError."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ExportError(path, e.strerror or str(e)) from e
    return path

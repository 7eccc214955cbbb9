"""JSON project files for saving and reopening exam papers.

Layout::

    {"version": 1, "exam": {...}, "sections": [...]}
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from exampaper.exceptions import ProjectFileError
from exampaper.models.paper import Document, Exam, Section

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
PROJECT_EXTENSION = ".exam.json"


class ProjectFile(BaseModel):
    """On-disk envelope around a document."""

    version: int = Field(default=FORMAT_VERSION, ge=1)
    exam: Exam = Field(default_factory=Exam)
    sections: list[Section] = Field(default_factory=list)

    @classmethod
    def from_document(cls, document: Document) -> "ProjectFile":
        return cls(version=FORMAT_VERSION, exam=document.exam, sections=document.sections)

    def to_document(self) -> Document:
        return Document(exam=self.exam, sections=self.sections)


def with_project_extension(path: str | Path) -> Path:
    """Append the project extension to a path that has no suffix."""
    path = Path(path)
    if path.suffix:
        return path
    return path.with_name(path.name + PROJECT_EXTENSION)


def dumps_project(document: Document) -> str:
    """Serialize a document to project-file JSON."""
    envelope = ProjectFile.from_document(document)
    return json.dumps(envelope.model_dump(mode="json"), indent=2, ensure_ascii=False)


def loads_project(text: str, source: str = "<string>") -> Document:
    """
    Parse project-file JSON into a document.

    Args:
        text: JSON text
        source: Name used in error messages

    Returns:
        The loaded Document

    Raises:
        ProjectFileError: If the JSON is malformed, fails validation, or was
            written by a newer format version
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ProjectFileError(source, f"invalid JSON ({e})") from e

    if not isinstance(data, dict):
        raise ProjectFileError(source, "top-level value must be an object")

    try:
        header = ProjectFile.model_validate({"version": data.get("version", FORMAT_VERSION)})
    except ValidationError as e:
        raise ProjectFileError(source, f"invalid format version {data['version']!r}") from e

    # Checked before the body so newer layouts are not reported as schema errors
    if header.version > FORMAT_VERSION:
        raise ProjectFileError(
            source,
            f"format version {header.version} is newer than supported version {FORMAT_VERSION}",
        )

    try:
        envelope = ProjectFile.model_validate(data)
    except ValidationError as e:
        raise ProjectFileError(source, f"invalid project data ({e.error_count()} errors)") from e

    return envelope.to_document()


def save_project(document: Document, path: str | Path) -> Path:
    """
    Write a document to a project file.

    Args:
        document: Document to save
        path: Destination path; parent directories are created

    Returns:
        Path of the written file
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dumps_project(document), encoding="utf-8")
    except OSError as e:
        raise ProjectFileError(path, f"cannot write ({e.strerror or e})") from e

    logger.info("Saved project with %d sections to %s", document.total_sections, path)
    return path


def load_project(path: str | Path) -> Document:
    """
    Read a document from a project file.

    Raises:
        ProjectFileError: If the file cannot be read or is not a valid project
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProjectFileError(path, f"cannot read ({e.strerror or e})") from e

    document = loads_project(text, source=str(path))
    logger.info("Loaded project %s (%d questions)", path, document.total_questions)
    return document

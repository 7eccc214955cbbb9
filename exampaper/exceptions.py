"""Exceptions raised at the boundaries of the rendering engine."""


class ExamPaperError(Exception):
    """Base class for exampaper failures."""


class ExportError(ExamPaperError):
    """Raised when an exported file cannot be written."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to write {self.path}: {reason}")


class ProjectFileError(ExamPaperError):
    """Raised when a project file cannot be read, parsed or written."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Project file {self.path}: {reason}")

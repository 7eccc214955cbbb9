"""Project-file persistence."""

from .project_file import (
    FORMAT_VERSION,
    PROJECT_EXTENSION,
    dumps_project,
    load_project,
    loads_project,
    save_project,
    with_project_extension,
)

__all__ = [
    "FORMAT_VERSION",
    "PROJECT_EXTENSION",
    "dumps_project",
    "load_project",
    "loads_project",
    "save_project",
    "with_project_extension",
]

"""Data models for exam papers."""

from .paper import (
    Document,
    Exam,
    Orientation,
    Question,
    QuestionType,
    RenderOptions,
    Section,
)

__all__ = [
    "Document",
    "Exam",
    "Orientation",
    "Question",
    "QuestionType",
    "RenderOptions",
    "Section",
]

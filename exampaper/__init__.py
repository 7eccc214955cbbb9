"""Exam paper model and rendering engine."""

from .models import (
    Document,
    Exam,
    Orientation,
    Question,
    QuestionType,
    RenderOptions,
    Section,
)
from .render import render_html

__version__ = "0.1.0"

__all__ = [
    "Document",
    "Exam",
    "Orientation",
    "Question",
    "QuestionType",
    "RenderOptions",
    "Section",
    "render_html",
]

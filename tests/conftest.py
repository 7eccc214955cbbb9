"""Shared test fixtures and configuration for pytest."""

from datetime import date

import pytest

from exampaper.config.settings import get_settings
from exampaper.models.paper import (
    Document,
    Exam,
    Question,
    QuestionType,
    RenderOptions,
    Section,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_exam() -> Exam:
    """Create a sample Exam for testing."""
    return Exam(
        title="Annual Examination",
        subject="Mathematics",
        duration="3 Hours",
        total_marks=100,
        pass_marks=35,
        class_name="X-A",
        exam_date=date(2024, 3, 15),
        term="Final",
    )


@pytest.fixture
def mcq_question() -> Question:
    """Create a sample MCQ question for testing."""
    return Question(
        type=QuestionType.MCQ,
        text="Testing MCQ",
        options=["Option A", "Option B", "Option C", "Option D"],
        correct_index=1,
    )


@pytest.fixture
def or_question() -> Question:
    """Create a sample OR question with one alternative."""
    return Question(
        type=QuestionType.OR,
        text="Main Question",
        sub_questions=[Question(text="Alternative Question")],
    )


@pytest.fixture
def sample_sections(mcq_question: Question, or_question: Question) -> list[Section]:
    """Create two sections with mixed question types."""
    return [
        Section(
            label="Section A",
            subtitle="Answer all questions",
            questions=[
                mcq_question,
                Question(text="<p>Define a <b>prime</b> number.</p>"),
                Question(
                    type=QuestionType.MIXED,
                    text="Fill in the blanks",
                    options=["2 + 2 = __", "3 x 3 = __", "10 / 2 = __"],
                    correct_index=0,
                ),
            ],
        ),
        Section(
            label="Section B",
            subtitle="Attempt any two",
            questions=[
                or_question,
                Question(
                    text="Study the table",
                    table=[["x", "y"], ["1", "2"], ["3", "6"]],
                ),
            ],
        ),
    ]


@pytest.fixture
def sample_document(sample_exam: Exam, sample_sections: list[Section]) -> Document:
    """Create a sample Document for testing."""
    return Document(exam=sample_exam, sections=sample_sections)


@pytest.fixture
def render_options() -> RenderOptions:
    """Create non-default render options for testing."""
    return RenderOptions(font_family="Georgia", font_size=14)

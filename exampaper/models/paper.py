"""Pydantic models for exam paper data structures."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field


class QuestionType(str, Enum):
    """Question layout variants."""

    REGULAR = "regular"
    OR = "or"
    MCQ = "mcq"
    MIXED = "mixed"


class Orientation(str, Enum):
    """Page orientation of the printed paper."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class Exam(BaseModel):
    """Metadata describing the overall paper."""

    title: str = Field(default="", description="Paper title")
    subject: str = Field(default="", description="Subject name")
    duration: str = Field(default="", description="Free-text duration, e.g. '3 Hours'")
    total_marks: int = Field(default=0, ge=0, description="Maximum marks")
    pass_marks: int = Field(default=0, ge=0, description="Marks required to pass")
    class_name: str = Field(default="", description="Class or grade")
    exam_date: date | None = Field(default=None, description="Date of the exam")
    term: str = Field(default="", description="Academic term")
    is_landscape: bool = Field(default=False, description="Print in landscape")

    @property
    def orientation(self) -> Orientation:
        """Get the page orientation implied by the landscape flag."""
        return Orientation.LANDSCAPE if self.is_landscape else Orientation.PORTRAIT

    def marks_consistent(self) -> bool:
        """Check that the pass mark does not exceed the total."""
        return self.pass_marks <= self.total_marks

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Annual Examination",
                "subject": "Mathematics",
                "duration": "3 Hours",
                "total_marks": 100,
                "pass_marks": 35,
                "class_name": "X-A",
                "term": "Final",
            }
        }
    }


class Question(BaseModel):
    """
    A single question.

    ``text`` holds pre-formatted rich markup from the editor and is emitted
    as-is. Which of ``sub_questions`` and ``options`` is meaningful depends on
    ``type``; the other list is ignored when rendering.
    """

    type: QuestionType = Field(
        default=QuestionType.REGULAR,
        description="Layout variant",
    )
    text: str = Field(default="", description="Question body (HTML)")
    diagram_path: str | None = Field(
        None,
        description="Filesystem path of a diagram shown beside the question",
    )
    table: list[list[str]] = Field(
        default_factory=list,
        description="Data table rows; the first row is the header",
    )
    sub_questions: list["Question"] = Field(
        default_factory=list,
        description="Alternatives for OR questions",
    )
    options: list[str] = Field(
        default_factory=list,
        description="Options for MCQ and mixed questions",
    )
    correct_index: int = Field(
        default=-1,
        ge=-1,
        description="Index of the correct option, -1 when unset",
    )

    def correct_option(self) -> str | None:
        """Get the text of the correct option, if one is set and in range."""
        if 0 <= self.correct_index < len(self.options):
            return self.options[self.correct_index]
        return None

    model_config = {
        "json_schema_extra": {
            "example": {
                "type": "mcq",
                "text": "<p>Which of these is a prime number?</p>",
                "options": ["4", "6", "7", "9"],
                "correct_index": 2,
            }
        }
    }


class Section(BaseModel):
    """A labelled, ordered group of questions."""

    label: str = Field(default="", description="Section heading, e.g. 'Section A'")
    subtitle: str = Field(default="", description="Instructions shown under the label")
    questions: list[Question] = Field(
        default_factory=list,
        description="Questions in rendering order",
    )

    @property
    def question_count(self) -> int:
        """Get the number of questions in this section."""
        return len(self.questions)


class Document(BaseModel):
    """A complete exam paper: metadata plus sections."""

    exam: Exam = Field(default_factory=Exam, description="Paper metadata")
    sections: list[Section] = Field(
        default_factory=list,
        description="Sections in rendering order",
    )

    @property
    def total_questions(self) -> int:
        """Calculate total number of questions across all sections."""
        return sum(section.question_count for section in self.sections)

    @property
    def total_sections(self) -> int:
        """Get the total number of sections."""
        return len(self.sections)

    def is_valid(self) -> bool:
        """Check the paper has a non-empty title and at least one section."""
        return bool(self.exam.title) and bool(self.sections)

    def clear(self) -> None:
        """Reset to an empty exam with no sections."""
        self.exam = Exam()
        self.sections = []

    def questions_by_type(self, question_type: QuestionType) -> list[Question]:
        """Get all top-level questions of a given variant."""
        questions = []
        for section in self.sections:
            questions.extend(q for q in section.questions if q.type == question_type)
        return questions


class RenderOptions(BaseModel):
    """
    Presentation settings passed to the renderer.

    Values are not clamped; they reach the stylesheet verbatim.
    """

    font_family: str = Field(default="Times New Roman", description="CSS font family")
    font_size: int = Field(default=12, description="Base font size in points")
    orientation: Orientation = Field(
        default=Orientation.PORTRAIT,
        description="A4 page orientation",
    )

    model_config = {"frozen": True}

    @classmethod
    def for_exam(
        cls,
        exam: Exam,
        font_family: str = "Times New Roman",
        font_size: int = 12,
    ) -> "RenderOptions":
        """Build options whose orientation follows the exam's landscape flag."""
        return cls(
            font_family=font_family,
            font_size=font_size,
            orientation=exam.orientation,
        )

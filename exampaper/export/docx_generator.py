"""DOCX document generator for exam paper export."""

import logging
from pathlib import Path

from bs4 import BeautifulSoup
from docx import Document as new_docx
from docx.document import Document as DocxDocument
from docx.enum.section import WD_ORIENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.image.exceptions import UnrecognizedImageError
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Mm, Pt

from exampaper.exceptions import ExportError
from exampaper.export.files import resolve_output_path
from exampaper.models.paper import (
    Document,
    Orientation,
    Question,
    QuestionType,
    RenderOptions,
    Section,
)
from exampaper.render.html import METADATA_SEPARATOR, metadata_parts, option_label

logger = logging.getLogger(__name__)

A4_SHORT_EDGE = Mm(210)
A4_LONG_EDGE = Mm(297)
PAGE_MARGIN = Mm(15)
DIAGRAM_WIDTH = Inches(1.5)
OR_INDENT = Inches(0.3)
OPTION_INDENT = Inches(0.2)

BLOCK_TAGS = ["p", "div", "li", "tr", "h1", "h2", "h3", "h4", "h5", "h6"]
NON_TEXT_TAGS = ["head", "style", "script"]


def markup_to_text(markup: str) -> str:
    """
    Reduce editor markup to plain text for word-processor output.

    Accepts fragments or full documents such as a rich-text editor's HTML
    export. Head, style and script content is discarded, block elements and
    ``<br>`` end a line, and blank lines are dropped.
    """
    soup = BeautifulSoup(markup, "html.parser")
    for element in soup(NON_TEXT_TAGS):
        element.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(BLOCK_TAGS):
        block.append("\n")

    lines = (line.strip() for line in soup.get_text().splitlines())
    return "\n".join(line for line in lines if line)


def export_to_docx(
    document: Document,
    output_path: str,
    options: RenderOptions | None = None,
    include_answers: bool = False,
    use_output_dir: bool = False,
    output_dir: str = "output",
) -> str:
    """
    Export a paper to a formatted DOCX file.

    Args:
        document: Paper to export
        output_path: Path where the DOCX file should be saved
        options: Font and orientation settings
        include_answers: If True, appends an answer key
        use_output_dir: If True, saves to output_dir with a timestamped name
        output_dir: Directory used when use_output_dir is True

    Returns:
        Path to the created DOCX file

    Raises:
        ExportError: If the file cannot be written
    """
    if options is None:
        options = RenderOptions()
    path = resolve_output_path(output_path, "docx", use_output_dir, output_dir)

    doc = new_docx()
    setup_document_styles(doc, options)

    exam = document.exam
    if exam.title:
        title = doc.add_heading(exam.title, level=0)
        title.alignment = WD_ALIGN_PARAGRAPH.CENTER

    parts = metadata_parts(exam)
    if parts:
        info_para = doc.add_paragraph(METADATA_SEPARATOR.join(parts))
        info_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
        info_para.runs[0].font.size = Pt(max(options.font_size - 2, 1))

    add_horizontal_rule(doc)

    for section in document.sections:
        add_section_to_document(doc, section)

    if include_answers:
        add_answer_key(doc, document)

    save_docx(doc, path)
    logger.info("Exported %d questions to %s", document.total_questions, path)
    return str(path)


def save_docx(doc: DocxDocument, path: Path) -> None:
    """Save a python-docx document, converting I/O failures to ExportError."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        doc.save(str(path))
    except OSError as e:
        raise ExportError(path, e.strerror or str(e)) from e


def setup_document_styles(doc: DocxDocument, options: RenderOptions) -> None:
    """
    Set up document-wide font, page size and orientation.

    Args:
        doc: Document to configure
        options: Font and orientation settings
    """
    style = doc.styles["Normal"]
    font = style.font
    font.name = options.font_family
    font.size = Pt(options.font_size)

    for section in doc.sections:
        if options.orientation == Orientation.LANDSCAPE:
            section.orientation = WD_ORIENT.LANDSCAPE
            section.page_width = A4_LONG_EDGE
            section.page_height = A4_SHORT_EDGE
        else:
            section.orientation = WD_ORIENT.PORTRAIT
            section.page_width = A4_SHORT_EDGE
            section.page_height = A4_LONG_EDGE
        section.top_margin = PAGE_MARGIN
        section.bottom_margin = PAGE_MARGIN
        section.left_margin = PAGE_MARGIN
        section.right_margin = PAGE_MARGIN


def add_horizontal_rule(doc: DocxDocument) -> None:
    """Add a bottom-bordered empty paragraph as a separator line."""
    para = doc.add_paragraph()
    p_pr = para._p.get_or_add_pPr()
    borders = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), "12")
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), "000000")
    borders.append(bottom)
    p_pr.append(borders)


def add_section_to_document(doc: DocxDocument, section: Section) -> None:
    """
    Add a section to the document.

    Questions are numbered from 1 within the section.

    Args:
        doc: Document to add to
        section: Section to render
    """
    if section.label:
        heading = doc.add_heading(section.label, level=1)
        heading.alignment = WD_ALIGN_PARAGRAPH.CENTER

    if section.subtitle:
        sub_para = doc.add_paragraph()
        sub_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
        sub_run = sub_para.add_run(section.subtitle)
        sub_run.italic = True
        sub_run.bold = True

    for number, question in enumerate(section.questions, 1):
        add_question_to_document(doc, question, number)


def add_question_to_document(doc: DocxDocument, question: Question, number: int) -> None:
    """
    Add one numbered question, its diagram, table and variant content.

    Args:
        doc: Document to add to
        question: Question to render
        number: 1-based position within the section
    """
    q_para = doc.add_paragraph()
    q_run = q_para.add_run(f"{number}) ")
    q_run.bold = True
    q_para.add_run(markup_to_text(question.text))

    if question.diagram_path:
        add_diagram(doc, question.diagram_path)

    if question.table:
        add_data_table(doc, question.table)

    if question.type == QuestionType.OR and question.sub_questions:
        or_para = doc.add_paragraph()
        or_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
        or_para.add_run("OR").bold = True
        for alternative in question.sub_questions:
            alt_para = doc.add_paragraph(alternative.text)
            alt_para.paragraph_format.left_indent = OR_INDENT

    elif question.type == QuestionType.MCQ and question.options:
        add_mcq_options(doc, question.options)

    elif question.type == QuestionType.MIXED and question.options:
        for i, option in enumerate(question.options):
            opt_para = doc.add_paragraph(f"({option_label(i)}) {option}")
            opt_para.paragraph_format.left_indent = OPTION_INDENT
            opt_para.paragraph_format.space_after = Pt(0)


def add_mcq_options(doc: DocxDocument, options: list[str]) -> None:
    """Lay out options two per row in a borderless table."""
    table = doc.add_table(rows=0, cols=2)
    for i in range(0, len(options), 2):
        cells = table.add_row().cells
        cells[0].text = f"({option_label(i)}) {options[i]}"
        if i + 1 < len(options):
            cells[1].text = f"({option_label(i + 1)}) {options[i + 1]}"


def add_data_table(doc: DocxDocument, rows: list[list[str]]) -> None:
    """Add a gridded data table with a bold header row."""
    if not rows:
        return

    cols = max(len(row) for row in rows)
    if cols == 0:
        return

    table = doc.add_table(rows=0, cols=cols)
    table.style = "Table Grid"
    for row_index, row in enumerate(rows):
        cells = table.add_row().cells
        for col, value in enumerate(row):
            cells[col].text = value
            if row_index == 0:
                for paragraph in cells[col].paragraphs:
                    for run in paragraph.runs:
                        run.bold = True


def add_diagram(doc: DocxDocument, diagram_path: str) -> None:
    """Insert a diagram from disk; missing or unreadable images are skipped."""
    path = Path(diagram_path)
    if not path.is_file():
        logger.warning("Diagram not found, skipping: %s", diagram_path)
        return
    try:
        doc.add_picture(str(path), width=DIAGRAM_WIDTH)
    except UnrecognizedImageError:
        logger.warning("Unrecognized image format, skipping: %s", diagram_path)


def answer_rows(document: Document) -> list[tuple[str, int, str]]:
    """
    Collect answer key entries.

    Returns:
        (section label, question number, answer) for every MCQ or mixed
        question whose correct option is set
    """
    rows = []
    for section_index, section in enumerate(document.sections, 1):
        label = section.label or f"Section {section_index}"
        for number, question in enumerate(section.questions, 1):
            if question.type not in (QuestionType.MCQ, QuestionType.MIXED):
                continue
            answer = question.correct_option()
            if answer is None:
                continue
            rows.append((label, number, f"({option_label(question.correct_index)}) {answer}"))
    return rows


def add_answer_key(doc: DocxDocument, document: Document) -> None:
    """
    Add an answer key at the end of the document.

    Args:
        doc: Document to add to
        document: Paper the answers belong to
    """
    doc.add_page_break()

    header = doc.add_heading("Answer Key", level=1)
    header.alignment = WD_ALIGN_PARAGRAPH.CENTER

    rows = answer_rows(document)
    if not rows:
        doc.add_paragraph("No answers recorded.")
        return

    table = doc.add_table(rows=1, cols=3)
    table.style = "Table Grid"

    header_cells = table.rows[0].cells
    header_cells[0].text = "Section"
    header_cells[1].text = "Q#"
    header_cells[2].text = "Answer"
    for cell in header_cells:
        for paragraph in cell.paragraphs:
            for run in paragraph.runs:
                run.bold = True

    for label, number, answer in rows:
        row_cells = table.add_row().cells
        row_cells[0].text = label
        row_cells[1].text = str(number)
        row_cells[2].text = answer


def export_answer_key(
    document: Document,
    output_path: str,
    use_output_dir: bool = False,
    output_dir: str = "output",
) -> str:
    """
    Generate a separate answer key document.

    Args:
        document: Paper whose answers are exported
        output_path: Path where the answer key should be saved
        use_output_dir: If True, saves to output_dir with a timestamped name
        output_dir: Directory used when use_output_dir is True

    Returns:
        Path to the created answer key file
    """
    path = resolve_output_path(output_path, "docx", use_output_dir, output_dir)

    doc = new_docx()
    setup_document_styles(doc, RenderOptions.for_exam(document.exam))

    title_text = document.exam.title or "Exam Paper"
    title = doc.add_heading(f"{title_text} - Answer Key", level=0)
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER

    add_answer_key(doc, document)

    save_docx(doc, path)
    logger.info("Exported answer key to %s", path)
    return str(path)

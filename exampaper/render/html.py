"""HTML renderer for exam papers.

Turns a ``Document`` plus ``RenderOptions`` into one self-contained HTML
string. Preview, print and export consumers key off the class names declared
in the stylesheet, so those names must stay stable.
"""

from collections.abc import Callable

from exampaper.models.paper import (
    Document,
    Exam,
    Question,
    QuestionType,
    RenderOptions,
    Section,
)

QUESTION_NUMBER_WIDTH = 30
OR_INDENT = 20
DIAGRAM_WIDTH = 150

# Class hooks consumed downstream; renaming any of these is a breaking change.
CLASS_HOOKS = (
    "metadata",
    "section",
    "subtitle",
    "question",
    "question-layout",
    "question-num-cell",
    "question-text-cell",
    "or-question",
    "mcq-table",
    "mcq-options",
    "data-table",
    "question-image",
)

METADATA_SEPARATOR = " | "

OR_SEPARATOR = '<div style="text-align:center; font-weight:bold; margin: 5px 0;">OR</div>'
CLEAR_FLOATS = '<div style="clear:both;"></div>'
RULE = '<hr style="border: 0; border-top: 2px solid #000; margin: 10px 0 20px 0;" />'

_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;"})


def escape_html(text: str) -> str:
    """Escape ``&``, ``<``, ``>`` and ``"``; everything else is left alone."""
    return text.translate(_ESCAPES)


def option_label(index: int) -> str:
    """
    Get the letter label for a 0-based option index.

    Indices 0-25 map to ``a``-``z``. Beyond that labels continue as
    ``aa``, ``ab``, ... (spreadsheet-column style) rather than running past
    ``z`` into punctuation.

    Args:
        index: Option position, starting at 0

    Returns:
        Lower-case label without brackets
    """
    if index < 0:
        raise ValueError(f"Option index must be non-negative, got {index}")
    label = ""
    n = index + 1
    while n > 0:
        n, remainder = divmod(n - 1, 26)
        label = chr(ord("a") + remainder) + label
    return label


def _rule(selector: str, *declarations: str) -> str:
    return selector + " { " + "".join(f"{d}; " for d in declarations) + "}"


def build_stylesheet(options: RenderOptions) -> str:
    """
    Build the embedded CSS for the given render options.

    Args:
        options: Font and orientation settings

    Returns:
        CSS rules as a single string
    """
    font_family = f"font-family:'{options.font_family}', serif"
    font_size = f"font-size:{options.font_size}pt"
    orientation = options.orientation.value

    rules = [
        _rule("@page", f"size: A4 {orientation}", "margin: 15mm"),
        "@media print { "
        + _rule(
            "body",
            font_family,
            font_size,
            "margin:0",
            "line-height:1.4",
            "max-width:100%",
        )
        + "}",
        _rule(
            "body",
            font_family,
            font_size,
            "margin:10px",
            "line-height:1.4",
            "max-width:100%",
            "box-sizing:border-box",
        ),
        _rule("p", "margin:0", "padding:0"),
        _rule(
            "h1",
            "text-align:center",
            "margin-bottom:6px",
            "font-size:1.3em",
            "font-weight:bold",
        ),
        _rule(
            "h2",
            "text-align:center",
            "margin-top:12px",
            "margin-bottom:3px",
            "font-size:1.0em",
            "font-weight:bold",
        ),
        _rule(".metadata", "text-align:center", "margin-bottom:12px", "font-size:0.8em"),
        _rule(".section", "margin-top:12px", "page-break-inside:avoid"),
        _rule(
            ".subtitle",
            "text-align:center",
            "font-weight:bold",
            "font-size:0.85em",
            "margin-bottom:6px",
            "font-style:italic",
        ),
        _rule(".question", "margin:2px 0", "text-align:left"),
        _rule(".question-layout", "width:100%", "border-collapse:collapse"),
        _rule(".question-layout td", "border:none", "padding:0", "vertical-align:top"),
        _rule(
            ".question-num-cell",
            f"width:{QUESTION_NUMBER_WIDTH}px",
            "font-weight:bold",
        ),
        _rule(".question-text-cell", "text-align:left"),
        _rule(".or-question", f"margin-left:{OR_INDENT}px", "margin-top:2px"),
        _rule(".mcq-options", "margin-left:15px", "margin-top:1px", "line-height:1.2"),
        _rule(
            "table",
            "border-collapse:collapse",
            "width:100%",
            "margin:3px 0",
            "font-size:0.85em",
        ),
        _rule("td, th", "border:1px solid #000", "padding:2px 4px", "text-align:left"),
        _rule("th", "background-color:#f5f5f5", "font-weight:bold"),
        _rule(
            "img",
            "max-width:100%",
            "height:auto",
            "margin:2px 0",
            "display:block",
        ),
        _rule(
            ".mcq-table",
            "width: 95%",
            "border: none",
            "margin-left: 15px",
            "margin-top: 5px",
        ),
        _rule(".mcq-table td", "border: none", "padding: 2px 10px", "vertical-align: top"),
        _rule(
            ".data-table",
            "float: right",
            "width: auto",
            "margin: 0 0 5px 15px",
            "border: 1px solid #000",
        ),
        _rule(".data-table td, .data-table th", "border: 1px solid #000"),
        _rule(".question-image", "margin: 5px"),
    ]
    return "".join(rules)


def build_preamble(options: RenderOptions) -> str:
    """Build everything up to and including the opening ``<body>`` tag."""
    return (
        '<html><head><meta charset="utf-8"><style>'
        + build_stylesheet(options)
        + "</style></head><body>"
    )


def metadata_parts(exam: Exam) -> list[str]:
    """
    Get the unescaped parts of the metadata line.

    Parts appear only when set, in the order subject, duration, total marks,
    pass marks, class.
    """
    parts = []
    if exam.subject:
        parts.append(exam.subject)
    if exam.duration:
        parts.append(exam.duration)
    if exam.total_marks > 0:
        parts.append(f"Total Marks: {exam.total_marks}")
    if exam.pass_marks > 0:
        parts.append(f"Pass Marks: {exam.pass_marks}")
    if exam.class_name:
        parts.append(f"Class: {exam.class_name}")
    return parts


def render_metadata(exam: Exam) -> str:
    """Render the metadata line shown under the title."""
    parts = [escape_html(part) for part in metadata_parts(exam)]
    return '<div class="metadata">' + METADATA_SEPARATOR.join(parts) + "</div>"


def render_table(table: list[list[str]]) -> str:
    """
    Render a data table; the first row becomes header cells.

    Returns an empty string for an empty table.
    """
    if not table:
        return ""

    html = '<table class="data-table">'
    for row_index, row in enumerate(table):
        tag = "th" if row_index == 0 else "td"
        html += "<tr>"
        for cell in row:
            html += f"<{tag}>{escape_html(cell)}</{tag}>"
        html += "</tr>"
    html += "</table>"
    return html


def _render_diagram(path: str) -> str:
    return (
        f'<br/><img src="file://{path}" width="{DIAGRAM_WIDTH}" align="right" '
        'class="question-image" alt="Question diagram" />'
    )


def _render_regular(question: Question) -> str:
    return ""


def _render_or(question: Question) -> str:
    if not question.sub_questions:
        return ""
    html = OR_SEPARATOR
    for alternative in question.sub_questions:
        html += f'<div class="or-question">{escape_html(alternative.text)}</div>'
    return html


def _render_mcq(question: Question) -> str:
    options = question.options
    if not options:
        return ""

    html = CLEAR_FLOATS + '<table class="mcq-table">'
    for i in range(0, len(options), 2):
        html += "<tr>"
        html += f'<td width="50%">({option_label(i)}) {escape_html(options[i])}</td>'
        if i + 1 < len(options):
            html += (
                f'<td width="50%">({option_label(i + 1)}) '
                f"{escape_html(options[i + 1])}</td>"
            )
        else:
            html += "<td></td>"
        html += "</tr>"
    html += "</table>"
    return html


def _render_mixed(question: Question) -> str:
    if not question.options:
        return ""

    html = CLEAR_FLOATS + '<div class="mcq-options">'
    for i, option in enumerate(question.options):
        html += f"({option_label(i)}) {escape_html(option)}<br/>"
    html += "</div>"
    return html


VARIANT_RENDERERS: dict[QuestionType, Callable[[Question], str]] = {
    QuestionType.REGULAR: _render_regular,
    QuestionType.OR: _render_or,
    QuestionType.MCQ: _render_mcq,
    QuestionType.MIXED: _render_mixed,
}


def render_question(question: Question, number: int) -> str:
    """
    Render one question with its number.

    The number sits in a narrow left cell. The right cell holds the question
    text unescaped, followed by the diagram and data table. Variant-specific
    content (OR alternatives, MCQ grid, mixed options) comes after the layout
    table.

    Args:
        question: Question to render
        number: 1-based position within its section

    Returns:
        HTML for the question block
    """
    floated = ""
    if question.diagram_path:
        floated += _render_diagram(question.diagram_path)
    if question.table:
        floated += render_table(question.table)

    html = '<div class="question">'
    html += (
        '<table class="question-layout"><tr>'
        f'<td class="question-num-cell">{number})</td>'
        f'<td class="question-text-cell">{question.text}{floated}</td>'
        "</tr></table>"
    )
    html += VARIANT_RENDERERS[question.type](question)
    html += "</div>"
    return html


def render_section(section: Section) -> str:
    """Render a section; question numbers start again at 1."""
    html = '<div class="section">'
    if section.label:
        html += f"<h2>{escape_html(section.label)}</h2>"
    if section.subtitle:
        html += f'<div class="subtitle">{escape_html(section.subtitle)}</div>'

    for number, question in enumerate(section.questions, 1):
        html += render_question(question, number)

    html += "</div>"
    return html


def render_html(document: Document, options: RenderOptions | None = None) -> str:
    """
    Render a complete exam paper to HTML.

    The function is pure: it never mutates ``document`` and equal inputs
    always give identical output.

    Args:
        document: Paper to render
        options: Font and orientation settings; defaults when omitted

    Returns:
        A self-contained HTML document
    """
    if options is None:
        options = RenderOptions()

    exam = document.exam
    html = build_preamble(options)

    if exam.title:
        html += f"<h1>{escape_html(exam.title)}</h1>"

    html += render_metadata(exam)
    html += RULE

    for section in document.sections:
        html += render_section(section)

    html += "</body></html>"
    return html

"""Tests for the HTML renderer."""

import re

import pytest

from exampaper.models.paper import (
    Document,
    Exam,
    Orientation,
    Question,
    QuestionType,
    RenderOptions,
    Section,
)
from exampaper.render.html import (
    CLASS_HOOKS,
    VARIANT_RENDERERS,
    build_preamble,
    escape_html,
    option_label,
    render_html,
    render_metadata,
    render_question,
    render_section,
    render_table,
)


def single_question_document(question: Question, label: str = "") -> Document:
    return Document(
        exam=Exam(title="Test Exam"),
        sections=[Section(label=label, questions=[question])],
    )


class TestEscapeHtml:
    """Test selective escaping."""

    def test_escapes_special_characters(self):
        """Test the four escaped characters."""
        assert escape_html('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"

    def test_leaves_single_quotes(self):
        """Test that apostrophes are not escaped."""
        assert escape_html("it's") == "it's"


class TestOptionLabel:
    """Test option lettering."""

    def test_first_letters(self):
        """Test indices 0-3 map to a-d."""
        assert [option_label(i) for i in range(4)] == ["a", "b", "c", "d"]

    def test_last_single_letter(self):
        """Test index 25 maps to z."""
        assert option_label(25) == "z"

    def test_continues_with_two_letters(self):
        """Test labels past z continue spreadsheet style."""
        assert option_label(26) == "aa"
        assert option_label(27) == "ab"
        assert option_label(51) == "az"
        assert option_label(52) == "ba"

    def test_rejects_negative_index(self):
        """Test negative indices are an error."""
        with pytest.raises(ValueError):
            option_label(-1)


class TestPreamble:
    """Test the document preamble and stylesheet."""

    def test_declares_utf8(self):
        """Test the charset declaration."""
        assert '<meta charset="utf-8">' in build_preamble(RenderOptions())

    def test_declares_all_class_hooks(self):
        """Test every contract class appears in the stylesheet."""
        preamble = build_preamble(RenderOptions())
        for hook in CLASS_HOOKS:
            assert f".{hook} {{" in preamble, hook

    def test_uses_font_settings(self, render_options: RenderOptions):
        """Test font family and size are injected."""
        preamble = build_preamble(render_options)
        assert "font-family:'Georgia', serif" in preamble
        assert "font-size:14pt" in preamble

    def test_portrait_page(self):
        """Test portrait orientation directive."""
        assert "size: A4 portrait;" in build_preamble(RenderOptions())

    def test_landscape_page(self):
        """Test landscape orientation directive."""
        options = RenderOptions(orientation=Orientation.LANDSCAPE)
        assert "size: A4 landscape;" in build_preamble(options)

    def test_font_size_passed_through_verbatim(self):
        """Test the renderer does not clamp font sizes."""
        assert "font-size:0pt" in build_preamble(RenderOptions(font_size=0))

    def test_mcq_rule(self):
        """Test the MCQ table rule is borderless."""
        assert ".mcq-table { width: 95%; border: none;" in build_preamble(RenderOptions())


class TestRenderMetadata:
    """Test the metadata line."""

    def test_full_metadata_order(self, sample_exam: Exam):
        """Test parts appear in order, joined by the separator."""
        assert render_metadata(sample_exam) == (
            '<div class="metadata">Mathematics | 3 Hours | Total Marks: 100 | '
            "Pass Marks: 35 | Class: X-A</div>"
        )

    def test_omits_empty_parts(self):
        """Test empty fields and zero marks are skipped."""
        exam = Exam(subject="Physics", class_name="IX")
        assert render_metadata(exam) == '<div class="metadata">Physics | Class: IX</div>'

    def test_empty_exam(self):
        """Test an exam with no metadata gives an empty line."""
        assert render_metadata(Exam()) == '<div class="metadata"></div>'

    def test_escapes_parts(self):
        """Test free-text parts are escaped individually."""
        exam = Exam(subject="R&D", duration="<2h>", class_name='"A"')
        html = render_metadata(exam)
        assert "R&amp;D | &lt;2h&gt; | Class: &quot;A&quot;" in html


class TestRenderTable:
    """Test data table rendering."""

    def test_empty_table_renders_nothing(self):
        """Test no <table> is emitted for an empty grid."""
        assert render_table([]) == ""

    def test_single_header_row(self):
        """Test a one-row table uses header cells."""
        html = render_table([["Col 1", "Col 2"]])
        assert html == (
            '<table class="data-table"><tr><th>Col 1</th><th>Col 2</th></tr></table>'
        )

    def test_body_rows_use_td(self):
        """Test rows after the first use body cells."""
        html = render_table([["h1", "h2"], ["a", "b"], ["c", "d"]])
        assert html.count("<th>") == 2
        assert html.count("<td>") == 4
        assert "<tr><td>c</td><td>d</td></tr>" in html

    def test_cells_are_escaped(self):
        """Test cell text is escaped."""
        html = render_table([["a<b"], ["x & y"]])
        assert "<th>a&lt;b</th>" in html
        assert "<td>x &amp; y</td>" in html


class TestRenderQuestion:
    """Test question rendering per variant."""

    def test_variant_dispatch_is_exhaustive(self):
        """Test every question type has a layout function."""
        assert set(VARIANT_RENDERERS) == set(QuestionType)

    def test_regular_layout(self):
        """Test number and text cells."""
        html = render_question(Question(text="What is 2+2?"), 3)
        assert html == (
            '<div class="question"><table class="question-layout"><tr>'
            '<td class="question-num-cell">3)</td>'
            '<td class="question-text-cell">What is 2+2?</td>'
            "</tr></table></div>"
        )

    def test_text_is_not_escaped(self):
        """Test the rich text body is emitted verbatim."""
        html = render_question(Question(text="<p>Solve <i>x</i> &amp; y</p>"), 1)
        assert "<p>Solve <i>x</i> &amp; y</p>" in html

    def test_mcq_options_paired(self, mcq_question: Question):
        """Test MCQ options are lettered and two per row."""
        html = render_question(mcq_question, 1)
        assert 'class="mcq-table"' in html
        assert (
            '<tr><td width="50%">(a) Option A</td><td width="50%">(b) Option B</td></tr>'
            in html
        )
        assert (
            '<tr><td width="50%">(c) Option C</td><td width="50%">(d) Option D</td></tr>'
            in html
        )

    def test_mcq_odd_option_gets_empty_cell(self):
        """Test an odd final option has an empty sibling cell."""
        question = Question(type=QuestionType.MCQ, options=["one", "two", "three"])
        html = render_question(question, 1)
        assert '<tr><td width="50%">(c) three</td><td></td></tr>' in html
        assert html.count("<tr>") == 3  # layout row + two option rows

    def test_mcq_options_escaped(self):
        """Test option text is escaped."""
        question = Question(type=QuestionType.MCQ, options=["x < y", "a & b"])
        html = render_question(question, 1)
        assert "(a) x &lt; y" in html
        assert "(b) a &amp; b" in html

    def test_mcq_without_options(self):
        """Test an MCQ with no options has no option table."""
        html = render_question(Question(type=QuestionType.MCQ, text="Q"), 1)
        assert "mcq-table" not in html

    def test_mixed_options_one_per_line(self):
        """Test mixed options are lettered lines without pairing."""
        question = Question(type=QuestionType.MIXED, text="Q", options=["first", "<b>"])
        html = render_question(question, 1)
        assert '<div class="mcq-options">(a) first<br/>(b) &lt;b&gt;<br/></div>' in html
        assert "mcq-table" not in html

    def test_or_separator_between_texts(self, or_question: Question):
        """Test OR appears between the main and alternative text."""
        html = render_question(or_question, 1)
        main = html.index("Main Question")
        separator = html.index(">OR</div>")
        alternative = html.index("Alternative Question")
        assert main < separator < alternative
        assert '<div class="or-question">Alternative Question</div>' in html

    def test_or_alternatives_escaped_and_ordered(self):
        """Test alternatives are escaped and keep their order."""
        question = Question(
            type=QuestionType.OR,
            text="Main",
            sub_questions=[Question(text="first <alt>"), Question(text="second")],
        )
        html = render_question(question, 1)
        assert html.index("first &lt;alt&gt;") < html.index("second")
        assert html.count('class="or-question"') == 2

    def test_or_without_alternatives(self):
        """Test no separator is emitted without alternatives."""
        html = render_question(Question(type=QuestionType.OR, text="Main"), 1)
        assert ">OR<" not in html

    def test_variant_ignores_other_list(self):
        """Test a regular question ignores populated options and alternatives."""
        question = Question(
            text="Plain",
            options=["stray"],
            sub_questions=[Question(text="stray alternative")],
        )
        html = render_question(question, 1)
        assert "stray" not in html

    def test_diagram_after_text(self):
        """Test the image marker follows the question text."""
        question = Question(text="Image Question", diagram_path="/tmp/test.png")
        html = render_question(question, 1)
        assert 'class="question-image"' in html
        assert 'src="file:///tmp/test.png"' in html
        assert html.index("Image Question") < html.index('class="question-image"')

    def test_table_inside_text_cell(self):
        """Test a data table is floated inside the text cell."""
        question = Question(text="Table Question", table=[["Col 1", "Col 2"]])
        html = render_question(question, 1)
        text_cell = re.search(r'<td class="question-text-cell">(.*)</td></tr></table>', html)
        assert text_cell is not None
        assert 'class="data-table"' in text_cell.group(1)
        assert "<th>Col 1</th><th>Col 2</th>" in html


class TestRenderSection:
    """Test section rendering."""

    def test_label_and_subtitle(self):
        """Test label heading and escaped subtitle."""
        html = render_section(Section(label="Section A", subtitle="Answer <all>"))
        assert "<h2>Section A</h2>" in html
        assert '<div class="subtitle">Answer &lt;all&gt;</div>' in html

    def test_empty_section_still_rendered(self):
        """Test an empty section produces a section block."""
        assert render_section(Section()) == '<div class="section"></div>'

    def test_numbering_starts_at_one(self):
        """Test questions are numbered 1..n."""
        section = Section(questions=[Question(text=f"Q{i}") for i in range(3)])
        html = render_section(section)
        assert re.findall(r'question-num-cell">(\d+)\)', html) == ["1", "2", "3"]


class TestRenderHtml:
    """Test full document rendering."""

    def test_scenario_mcq(self, mcq_question: Question):
        """Test the MCQ layout inside a full document."""
        html = render_html(single_question_document(mcq_question, "Section A"))
        assert "<h2>Section A</h2>" in html
        assert '<td width="50%">(a) Option A</td>' in html
        assert '<td width="50%">(b) Option B</td>' in html
        assert html.index("(b) Option B") < html.index("(c) Option C")

    def test_numbering_restarts_per_section(self, sample_document: Document):
        """Test every section starts numbering at 1."""
        html = render_html(sample_document)
        numbers = re.findall(r'question-num-cell">(\d+)\)', html)
        assert numbers == ["1", "2", "3", "1", "2"]

    def test_deterministic(self, sample_document: Document, render_options: RenderOptions):
        """Test equal inputs give identical output."""
        first = render_html(sample_document, render_options)
        second = render_html(sample_document.model_copy(deep=True), render_options)
        assert first == second

    def test_does_not_mutate_document(self, sample_document: Document):
        """Test rendering leaves the document unchanged."""
        before = sample_document.model_dump()
        render_html(sample_document)
        assert sample_document.model_dump() == before

    def test_empty_document(self):
        """Test an empty document keeps preamble and title."""
        html = render_html(Document(exam=Exam(title="Mid-Term")))
        assert html.startswith("<html><head>")
        assert "<h1>Mid-Term</h1>" in html
        assert 'class="section"' not in html
        assert html.endswith("</body></html>")

    def test_untitled_document_has_no_heading(self):
        """Test no <h1> when the title is empty."""
        assert "<h1>" not in render_html(Document())

    def test_title_escaped(self):
        """Test the title is escaped."""
        html = render_html(Document(exam=Exam(title="Q&A <Final>")))
        assert "<h1>Q&amp;A &lt;Final&gt;</h1>" in html

    def test_default_options(self):
        """Test omitted options mean defaults."""
        assert render_html(Document()) == render_html(Document(), RenderOptions())

    def test_orientation_from_options_not_exam(self):
        """Test the exam flag does not override explicit options."""
        document = Document(exam=Exam(is_landscape=True))
        assert "size: A4 portrait;" in render_html(document, RenderOptions())

    def test_metadata_rule_and_sections_order(self, sample_document: Document):
        """Test title, metadata, rule and sections appear in order."""
        html = render_html(sample_document)
        assert (
            html.index("<h1>")
            < html.index('<div class="metadata">')
            < html.index("<hr")
            < html.index("Section A")
            < html.index("Section B")
        )

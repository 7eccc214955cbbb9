"""Typer CLI application for exam paper rendering and export."""

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from exampaper.config.settings import get_settings
from exampaper.exceptions import ExamPaperError
from exampaper.export.docx_generator import export_answer_key, export_to_docx
from exampaper.export.files import (
    default_export_filename,
    generate_timestamped_filename,
    safe_base_name,
)
from exampaper.export.html_writer import export_to_html
from exampaper.models.paper import (
    Document,
    Exam,
    Orientation,
    QuestionType,
    RenderOptions,
    Section,
)
from exampaper.storage.project_file import load_project, save_project, with_project_extension

app = typer.Typer(
    name="exampaper",
    help="Render exam papers to HTML and DOCX",
    add_completion=False,
)

console = Console()


def configure_logging(level: str) -> None:
    """Route log records through rich at the given level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def open_project(project: Path) -> Document:
    """Load a project file, exiting with an error message on failure."""
    try:
        return load_project(project)
    except ExamPaperError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold")
        raise typer.Exit(code=1)


def resolve_render_options(
    document: Document,
    font: Optional[str],
    font_size: Optional[int],
    orientation: Optional[Orientation],
) -> RenderOptions:
    """
    Combine command-line overrides with configured defaults.

    Orientation falls back to the exam's landscape flag, then to settings.
    """
    settings = get_settings()
    if orientation is None:
        orientation = (
            Orientation.LANDSCAPE if document.exam.is_landscape else settings.orientation
        )
    return RenderOptions(
        font_family=font or settings.font_family,
        font_size=font_size or settings.font_size,
        orientation=orientation,
    )


def default_output(document: Document, extension: str) -> str:
    settings = get_settings()
    return str(Path(settings.default_output_dir) / default_export_filename(document, extension))


def warn_if_invalid(document: Document) -> None:
    if not document.is_valid():
        console.print(
            "[yellow]Warning:[/yellow] paper has no title or no sections; "
            "rendering anyway."
        )
    if not document.exam.marks_consistent():
        console.print(
            f"[yellow]Warning:[/yellow] pass marks ({document.exam.pass_marks}) exceed "
            f"total marks ({document.exam.total_marks})."
        )


def font_option():
    return typer.Option(None, "--font", "-f", help="Font family (default from settings)")


def font_size_option():
    return typer.Option(
        None,
        "--font-size",
        "-s",
        help="Font size in points (default from settings)",
        min=1,
    )


def orientation_option():
    return typer.Option(
        None,
        "--orientation",
        help="Page orientation (default from the paper, then settings)",
        case_sensitive=False,
    )


@app.command()
def render(
    project: Path = typer.Argument(..., help="Project file to render", exists=True, dir_okay=False),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output HTML path"),
    font: Optional[str] = font_option(),
    font_size: Optional[int] = font_size_option(),
    orientation: Optional[Orientation] = orientation_option(),
) -> None:
    """
    Render a project file to an HTML exam paper.

    Example:
        exampaper render maths.exam.json -o maths.html --font Georgia
    """
    document = open_project(project)
    warn_if_invalid(document)
    options = resolve_render_options(document, font, font_size, orientation)

    try:
        output_file = export_to_html(document, output or default_output(document, "html"), options)
    except ExamPaperError as e:
        console.print(f"\n[red]Error during export:[/red] {e}", style="bold")
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Paper exported to: {output_file}")


@app.command()
def docx(
    project: Path = typer.Argument(..., help="Project file to export", exists=True, dir_okay=False),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output DOCX path"),
    include_answers: bool = typer.Option(
        False,
        "--with-answers/--no-answers",
        help="Append an answer key to the paper",
    ),
    font: Optional[str] = font_option(),
    font_size: Optional[int] = font_size_option(),
    orientation: Optional[Orientation] = orientation_option(),
) -> None:
    """Export a project file to a Word document."""
    document = open_project(project)
    warn_if_invalid(document)
    options = resolve_render_options(document, font, font_size, orientation)

    try:
        output_file = export_to_docx(
            document,
            output or default_output(document, "docx"),
            options,
            include_answers=include_answers,
        )
    except ExamPaperError as e:
        console.print(f"\n[red]Error during export:[/red] {e}", style="bold")
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Paper exported to: {output_file}")


@app.command()
def answers(
    project: Path = typer.Argument(..., help="Project file", exists=True, dir_okay=False),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output DOCX path"),
) -> None:
    """Export the answer key of a project as a separate Word document."""
    document = open_project(project)

    if output is None:
        settings = get_settings()
        filename = generate_timestamped_filename(f"{safe_base_name(document)}_answers", "docx")
        output = str(Path(settings.default_output_dir) / filename)

    try:
        output_file = export_answer_key(document, output)
    except ExamPaperError as e:
        console.print(f"\n[red]Error during export:[/red] {e}", style="bold")
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Answer key exported to: {output_file}")


@app.command()
def info(
    project: Path = typer.Argument(..., help="Project file", exists=True, dir_okay=False),
) -> None:
    """Display a summary of a project file."""
    document = open_project(project)
    exam = document.exam

    table = Table(title="Paper Summary", border_style="green")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Title", exam.title or "[dim]untitled[/dim]")
    if exam.subject:
        table.add_row("Subject", exam.subject)
    if exam.duration:
        table.add_row("Duration", exam.duration)
    table.add_row("Marks", f"{exam.pass_marks} / {exam.total_marks}")
    table.add_row("Orientation", exam.orientation.value.capitalize())
    table.add_row("Total Sections", str(document.total_sections))
    table.add_row("Total Questions", str(document.total_questions))
    for question_type in QuestionType:
        count = len(document.questions_by_type(question_type))
        if count:
            table.add_row(f"{question_type.value.upper()} questions", str(count))
    table.add_row("Valid", "[green]yes[/green]" if document.is_valid() else "[red]no[/red]")

    console.print()
    console.print(table)

    if document.sections:
        sections_table = Table(title="Sections Breakdown", border_style="cyan")
        sections_table.add_column("#", style="cyan")
        sections_table.add_column("Label", style="white")
        sections_table.add_column("Questions", style="white")
        for index, section in enumerate(document.sections, 1):
            sections_table.add_row(str(index), section.label, str(section.question_count))
        console.print()
        console.print(sections_table)


@app.command()
def new(
    path: Path = typer.Argument(
        ..., help="Project file to create; .exam.json is added when no suffix is given"
    ),
    title: str = typer.Option("", "--title", help="Paper title"),
    subject: str = typer.Option("", "--subject", help="Subject"),
    duration: str = typer.Option("", "--duration", help="Duration, e.g. '3 Hours'"),
    total_marks: int = typer.Option(0, "--total-marks", min=0, help="Maximum marks"),
    pass_marks: int = typer.Option(0, "--pass-marks", min=0, help="Pass marks"),
    class_name: str = typer.Option("", "--class", help="Class or grade"),
    landscape: bool = typer.Option(False, "--landscape/--portrait", help="Page orientation"),
    sections: int = typer.Option(
        1,
        "--sections",
        min=0,
        max=26,
        help="Number of empty sections to create",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Create a new, empty project file."""
    path = with_project_extension(path)
    if path.exists() and not force:
        console.print(f"[red]Error:[/red] {path} already exists (use --force).", style="bold")
        raise typer.Exit(code=1)

    document = Document(
        exam=Exam(
            title=title,
            subject=subject,
            duration=duration,
            total_marks=total_marks,
            pass_marks=pass_marks,
            class_name=class_name,
            is_landscape=landscape,
        ),
        sections=[Section(label=f"Section {chr(ord('A') + i)}") for i in range(sections)],
    )
    warn_if_invalid(document)

    try:
        saved = save_project(document, path)
    except ExamPaperError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold")
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Created {saved}")


@app.command()
def about() -> None:
    """Display information about exampaper."""
    info_text = """
[bold cyan]Exam Paper Renderer[/bold cyan]
Version: 0.1.0

[bold]Question types:[/bold]
  • Regular - numbered question text
  • OR - a question with alternatives
  • MCQ - options in a two-column grid
  • Mixed - lettered options, one per line

[bold]Output:[/bold]
  • Self-contained HTML (preview, print to PDF)
  • DOCX with optional answer key
    """
    console.print(Panel(info_text, title="exampaper", border_style="cyan"))


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show info-level logs"),
) -> None:
    """
    Exam Paper Renderer - build printable exam papers from project files.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]Error:[/red] invalid settings ({e.error_count()} errors)", style="bold")
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"  {field}: {error['msg']}", markup=False)
        raise typer.Exit(code=1)

    level = "INFO" if verbose else settings.log_level
    configure_logging(level)


if __name__ == "__main__":
    app()

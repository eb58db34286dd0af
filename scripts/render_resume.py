#!/usr/bin/env python3
"""
Resume Rendering CLI

Renders plain-text resumes to PDF and inspects or validates the result using the
inference, typesetting and rendering contexts.

Commands:
    render   - Render a text resume to a PDF file
    inspect  - Print the structure inferred from a text resume as YAML
    validate - Render a text resume and check the PDF for layout issues

Examples:\n

    render_resume.py render resume.txt                        # Writes resume.pdf

    render_resume.py render resume.txt -o out/cv.pdf --no-fit # Standard spacing only

    render_resume.py render resume.txt --preset type_serif    # Apply an extra preset

    render_resume.py inspect resume.txt                       # Show inferred structure

    render_resume.py validate resume.txt --pages 2            # Expect two pages
"""

import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vellum.contexts.inference import Document
from vellum.contexts.inference.logger import setup_inference_logger
from vellum.contexts.rendering import RenderError, render_resume, validate_pdf
from vellum.contexts.rendering.logger import setup_rendering_logger
from vellum.contexts.typesetting import LayoutSettings, apply_presets

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


def session_log_dir(command: str) -> Path:
    """Timestamped log directory for one CLI invocation."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return LOGS_PATH / f"{command}_{timestamp}"


def read_resume(path: Path) -> str:
    if not path.exists():
        typer.secho(f"Error: File not found: {path}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return path.read_text(encoding="utf-8")


def build_settings(presets: Optional[List[str]]) -> LayoutSettings:
    try:
        return apply_presets(LayoutSettings(), presets or [])
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


app = typer.Typer(
    help="Render plain-text resumes to paginated PDFs",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("render")
def render_command(
    input_file: Annotated[
        Path,
        typer.Argument(help="Plain-text resume"),
    ],
    output_file: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="PDF path (default: input path with .pdf suffix)",
        ),
    ] = None,
    preset: Annotated[
        Optional[List[str]],
        typer.Option(
            "--preset",
            "-p",
            help="Layout preset applied before fitting (repeatable, e.g. type_serif)",
        ),
    ] = None,
    no_fit: Annotated[
        bool,
        typer.Option(
            "--no-fit",
            help="Skip single-page fitting and lay out with the given settings only",
        ),
    ] = False,
):
    """
    Render a plain-text resume to PDF.

    By default, progressively denser spacing presets are tried until the resume
    fits on one page.

    Examples:\n

        $ render_resume.py render resume.txt                  # Fit to one page

        $ render_resume.py render resume.txt -p type_small    # Smaller type
    """
    text = read_resume(input_file)
    output_file = output_file or input_file.with_suffix(".pdf")
    settings = build_settings(preset)

    typer.secho(f"\nRendering: {input_file}", fg=typer.colors.BLUE, bold=True)
    log_file = setup_rendering_logger(session_log_dir("render"), source=str(input_file))

    try:
        result = render_resume(text, settings=settings, fit_single_page=not no_fit)
    except RenderError as e:
        typer.secho(f"✗ Rendering failed: {e}\n", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(code=1)

    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_bytes(result.pdf_bytes)

    typer.secho("✓ Rendered", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Pages: {result.page_count}")
    if result.preset_name:
        typer.echo(f"  Preset: {result.preset_name}")
    if result.document.is_raw:
        typer.secho("  No sections recognized; rendered as plain lines", fg=typer.colors.YELLOW)
    typer.echo(f"  PDF: {output_file}")
    typer.echo(f"  Log: {log_file}")
    typer.echo("")


@app.command("inspect")
def inspect_command(
    input_file: Annotated[
        Path,
        typer.Argument(help="Plain-text resume"),
    ],
):
    """
    Print the structure inferred from a plain-text resume as YAML.

    Examples:\n

        $ render_resume.py inspect resume.txt
    """
    text = read_resume(input_file)
    log_file = setup_inference_logger(session_log_dir("inspect"))

    document = Document.from_text(text)
    typer.echo(document.to_yaml())

    if document.is_raw:
        typer.secho("No sections recognized (raw fallback)", fg=typer.colors.YELLOW)
    typer.echo(f"Log: {log_file}")


@app.command("validate")
def validate_command(
    input_file: Annotated[
        Path,
        typer.Argument(help="Plain-text resume"),
    ],
    pages: Annotated[
        int,
        typer.Option(
            "--pages",
            help="Intended page count",
            min=1,
        ),
    ] = 1,
    preset: Annotated[
        Optional[List[str]],
        typer.Option(
            "--preset",
            "-p",
            help="Layout preset applied before fitting (repeatable)",
        ),
    ] = None,
):
    """
    Render a resume and check the PDF for layout issues.

    Reports page count mismatches, headings missing from the PDF and pages that
    continue a section without repeating its heading.

    Examples:\n

        $ render_resume.py validate resume.txt

        $ render_resume.py validate resume.txt --pages 2
    """
    text = read_resume(input_file)
    settings = build_settings(preset)

    typer.secho(f"\nValidating: {input_file}", fg=typer.colors.BLUE, bold=True)
    log_file = setup_rendering_logger(session_log_dir("validate"), source=str(input_file))

    try:
        rendered = render_resume(text, settings=settings, fit_single_page=pages == 1)
    except RenderError as e:
        typer.secho(f"✗ Rendering failed: {e}\n", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(code=1)

    result = validate_pdf(rendered.pdf_bytes, rendered.document, intended_page_count=pages)

    if result.is_valid:
        typer.secho("\n✓ Validation passed", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Page count: {result.page_count}")
    else:
        typer.secho("\n✗ Validation failed", fg=typer.colors.RED, bold=True)
        typer.echo(f"  Page count: {result.page_count}")
        for issue in result.issues:
            typer.secho(f"  - {issue}", fg=typer.colors.RED)

    typer.echo(f"  Log: {log_file}")
    typer.echo("")

    raise typer.Exit(code=0 if result.is_valid else 1)


if __name__ == "__main__":
    app()

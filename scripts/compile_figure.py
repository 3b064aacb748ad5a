#!/usr/bin/env python3
"""
Figure Rendering and Compilation CLI

Renders YAML figure descriptions to standalone LaTeX and compiles them to PDF.

Commands:
    render  - Print (or write) the generated LaTeX source
    compile - Compile a figure to PDF and save it
    engines - List supported LaTeX engines

Examples:\n

    compile_figure.py render figures/quadratic.yaml                   # Print LaTeX source

    compile_figure.py render figures/quadratic.yaml -o quadratic.tex  # Write LaTeX source

    compile_figure.py compile figures/quadratic.yaml                  # -> figures/quadratic.pdf

    compile_figure.py compile figures/quadratic.yaml -e pdflatex -o out/ --open
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from figtex.contexts.rendering import (
    CompileError,
    LatexEngine,
    SaveError,
    UnknownEngineError,
)
from figtex.contexts.rendering.logger import setup_rendering_logger
from figtex.contexts.templating import CompatVersionError, FigureConfigError, load_document
from figtex.contexts.templating.logger import setup_templating_logger

load_dotenv()
DEFAULT_ENGINE = os.getenv("FIGTEX_LATEX_ENGINE", str(LatexEngine.default()))
LOGS_PATH = Path(os.getenv("FIGTEX_LOGS_PATH", "outs/logs"))


app = typer.Typer(
    help="Render YAML figure descriptions to PGFPlots LaTeX and compile them to PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _session_dir(command: str) -> Path:
    return LOGS_PATH / f"{command}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"


def _load(figure: Path):
    try:
        return load_document(figure)
    except (FigureConfigError, CompatVersionError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("render")
def render_command(
    figure: Annotated[
        Path,
        typer.Argument(help="YAML figure description", exists=True, dir_okay=False),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the LaTeX source here instead of stdout"),
    ] = None,
):
    """
    Render a figure description to standalone LaTeX source.

    Examples:\n

        $ compile_figure.py render figures/quadratic.yaml

        $ compile_figure.py render figures/quadratic.yaml -o quadratic.tex
    """
    setup_templating_logger(_session_dir("render"), figure)
    source = _load(figure).standalone_string()

    if output is None:
        typer.echo(source)
        raise typer.Exit(code=0)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(source + "\n", encoding="utf-8")
    typer.secho(f"✓ LaTeX written to {output}", fg=typer.colors.GREEN, bold=True)


@app.command("compile")
def compile_command(
    figure: Annotated[
        Path,
        typer.Argument(help="YAML figure description", exists=True, dir_okay=False),
    ],
    engine_name: Annotated[
        str,
        typer.Option(
            "--engine",
            "-e",
            help="LaTeX engine (default: FIGTEX_LATEX_ENGINE or lualatex)",
        ),
    ] = DEFAULT_ENGINE,
    output: Annotated[
        Optional[str],
        typer.Option(
            "--output",
            "-o",
            help="Destination file or directory, a trailing slash always means a directory "
            "(default: next to the figure description)",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing PDF without asking"),
    ] = False,
    open_pdf: Annotated[
        bool,
        typer.Option("--open", help="Open the saved PDF with the default viewer"),
    ] = False,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", "-t", help="Kill the compiler after this many seconds", min=1),
    ] = None,
):
    """
    Compile a figure description to PDF.

    Examples:\n

        $ compile_figure.py compile figures/quadratic.yaml

        $ compile_figure.py compile figures/quadratic.yaml -e pdflatex -o out/

        $ compile_figure.py compile figures/quadratic.yaml -o out/plot.pdf --force --open
    """
    try:
        engine = LatexEngine.from_name(engine_name)
    except UnknownEngineError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    destination = Path(output) if output is not None else figure.with_suffix(".pdf")

    log_dir = _session_dir("compile")
    setup_rendering_logger(log_dir, str(engine))

    document = _load(figure)

    # Path() drops the trailing separator that marks a directory
    if output is not None and output.endswith(("/", os.sep)) and not destination.exists():
        try:
            destination.mkdir(parents=True)
        except OSError as e:
            typer.secho(f"Error: cannot create directory {destination}: {e}\n", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    typer.secho(f"\nCompiling: {figure}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Engine: {engine}")
    typer.echo("")

    try:
        with document.pdf(engine, timeout=timeout) as pdf:
            saved = pdf.save(
                destination,
                overwrite=lambda: force or typer.confirm(f"{destination} exists. Overwrite?"),
            )
            if saved and destination.is_dir():
                destination = destination / pdf.output_path.name
    except CompileError as e:
        typer.secho("✗ Compilation failed", fg=typer.colors.RED, bold=True)
        typer.secho(f"  {e}", fg=typer.colors.RED)
        typer.echo(f"  Log: {log_dir / 'render.log'}\n")
        raise typer.Exit(code=1)
    except SaveError as e:
        typer.secho("✗ Unable to save PDF", fg=typer.colors.RED, bold=True)
        typer.secho(f"  {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    if not saved:
        typer.secho(f"Kept existing file: {destination}", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)

    typer.secho("✓ Compilation succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  PDF: {destination}")
    typer.echo(f"  Log: {log_dir / 'render.log'}\n")

    if open_pdf and typer.launch(str(destination)) != 0:
        typer.secho(f"Unable to open {destination}", fg=typer.colors.YELLOW, err=True)


@app.command("engines")
def engines_command():
    """List supported LaTeX engines."""
    for engine in LatexEngine:
        marker = " (default)" if engine is LatexEngine.default() else ""
        kind = "external" if engine.is_external else "in-process"
        typer.echo(f"{engine}{marker} [{kind}]")


if __name__ == "__main__":
    app()

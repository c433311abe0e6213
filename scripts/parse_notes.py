#!/usr/bin/env python3
"""
Notes Extraction CLI

Turns a notes file into tasks and project updates.

Commands:
    parse     - Extract records from a notes file
    classify  - Report whether a notes file is already in the structured format
    render    - Parse a notes file and print it back in the structured format

Examples:
    # Auto: structured notes parse locally, anything else goes through the generation service
    python scripts/parse_notes.py parse notes/standup.txt

    # No network: pattern-based task extraction only
    python scripts/parse_notes.py parse notes/standup.txt --method fallback --format yaml

    # Read from stdin
    cat notes.txt | python scripts/parse_notes.py parse -
"""

import json
import sys
import time
from pathlib import Path

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from toditox.contexts.extraction import is_structured_format, render_structured
from toditox.contexts.extraction.logger import (
    log_extraction_result,
    log_extraction_start,
    setup_extraction_logger,
)
from toditox.pipeline import METHOD_STRUCTURED, METHODS, extract_notes
from toditox.utils.llm import GenerationServiceError
from toditox.utils.logger import session_log_dir

load_dotenv()

OUTPUT_FORMATS = ("json", "yaml", "text")

app = typer.Typer(
    help="Extract tasks and project updates from notes",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def read_notes(source: str) -> tuple[str, str]:
    """Return (display name, text) for a file path or "-" (stdin)."""
    if source == "-":
        return "<stdin>", sys.stdin.read()

    path = Path(source)
    if not path.exists():
        typer.secho(f"File not found: {source}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    return path.name, path.read_text(encoding="utf-8")


def format_output(data: dict, output_format: str) -> str:
    if output_format == "yaml":
        return OmegaConf.to_yaml(OmegaConf.create(data))
    return json.dumps(data, indent=2, ensure_ascii=False)


@app.command()
def parse(
    source: Annotated[str, typer.Argument(help="Notes file path, or - for stdin")],
    method: Annotated[
        str, typer.Option("--method", "-m", help=f"Pipeline: {', '.join(METHODS)}")
    ] = "auto",
    output_format: Annotated[
        str, typer.Option("--format", "-f", help=f"Output: {', '.join(OUTPUT_FORMATS)}")
    ] = "json",
    log: Annotated[bool, typer.Option("--log", help="Write a session log under TODITOX_LOG_DIR")] = False,
):
    """Extract records from a notes file."""
    if method not in METHODS:
        typer.secho(f"Unknown method: {method}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    if output_format not in OUTPUT_FORMATS:
        typer.secho(f"Unknown format: {output_format}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    name, text = read_notes(source)

    if log:
        log_dir = session_log_dir("parse")
        setup_extraction_logger(log_dir, phase="parse")
    log_extraction_start(name, text, method)

    start = time.time()
    try:
        extraction = extract_notes(text, method=method)
    except GenerationServiceError as e:
        typer.secho(f"Generation service error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    log_extraction_result(name, extraction.result, extraction.method, time.time() - start)

    if output_format == "text":
        typer.echo(render_structured(extraction.result), nl=False)
    else:
        payload = {"method": extraction.method, **extraction.result.to_dict()}
        typer.echo(format_output(payload, output_format))


@app.command()
def classify(
    source: Annotated[str, typer.Argument(help="Notes file path, or - for stdin")],
):
    """Report whether the notes are in the structured format."""
    _, text = read_notes(source)
    typer.echo("structured" if is_structured_format(text) else "freeform")


@app.command()
def render(
    source: Annotated[str, typer.Argument(help="Structured notes file path, or - for stdin")],
):
    """Parse structured notes and print them back in canonical form."""
    _, text = read_notes(source)
    extraction = extract_notes(text, method=METHOD_STRUCTURED)
    typer.echo(render_structured(extraction.result), nl=False)


if __name__ == "__main__":
    app()

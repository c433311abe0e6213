#!/usr/bin/env python3
"""
Draft a new project from freeform notes.

Usage:
    python scripts/draft_project.py notes/kickoff.txt
    python scripts/draft_project.py notes/kickoff.txt --format yaml
"""

import json
from pathlib import Path

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf

from toditox.contexts.generation import (
    GenerationServiceError,
    ProjectDraftParseError,
    extract_project_draft,
)

load_dotenv()

app = typer.Typer(help="Draft a project (fields, milestones, tasks, links) from notes.")


@app.command()
def main(
    notes_file: Path = typer.Argument(..., help="Notes file about the project"),
    output_format: str = typer.Option("json", "--format", "-f", help="Output: json or yaml"),
):
    """Send the notes to the generation service and print the project draft."""
    if not notes_file.exists():
        typer.secho(f"File not found: {notes_file}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    try:
        draft = extract_project_draft(notes_file.read_text(encoding="utf-8"))
    except GenerationServiceError as e:
        typer.secho(f"Generation service error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    except ProjectDraftParseError as e:
        typer.secho(f"Could not read project draft: {e.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if output_format == "yaml":
        typer.echo(OmegaConf.to_yaml(OmegaConf.create(draft)))
    else:
        typer.echo(json.dumps(draft, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()

"""
Shared CLI plumbing — settings, analysis, and generated-file output.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

import click

from pipegen.core.models.facts import ProjectFacts
from pipegen.core.models.settings import GeneratorSettings
from pipegen.core.models.template import GeneratedFile


def fail(message: str) -> NoReturn:
    """Print an error and exit 1."""
    click.secho(f"❌ {message}", fg="red")
    sys.exit(1)


def analyze(ctx: click.Context, path: str | None) -> tuple[ProjectFacts, GeneratorSettings]:
    """Load settings and analyze the project, exiting on failure."""
    from pipegen.core.config.loader import ConfigError, load_settings
    from pipegen.core.services.analyzer import AnalysisError, analyze_project

    project_root = Path(path) if path else None

    try:
        settings = load_settings(ctx.obj.get("config_path"), start_dir=project_root)
        facts = analyze_project(project_root, settings=settings)
    except (ConfigError, AnalysisError) as e:
        fail(str(e))

    return facts, settings


def handle_generated(project_root: Path, files: list[GeneratedFile], write: bool) -> None:
    """Preview or write generated files."""
    from pipegen.core.services.generation import write_generated_file

    if write:
        for f in files:
            wr = write_generated_file(project_root, f)
            if "error" in wr:
                fail(wr["error"])
            click.secho(f"✅ Written: {wr['path']}", fg="green", bold=True)
        return

    for f in files:
        click.secho(f"📄 Preview: {f.path}", fg="cyan", bold=True)
        if f.reason:
            click.echo(f"   Reason: {f.reason}")
        click.echo("─" * 60)
        click.echo(f.content)
        click.echo("─" * 60)
    click.secho("   (use --write to save to disk)", fg="yellow")

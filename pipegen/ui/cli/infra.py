"""
CLI commands for infrastructure-as-code generation.

The platform is always explicit; there is no automatic choice.
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from pipegen.ui.cli.common import analyze, fail, handle_generated


@click.group()
def infra() -> None:
    """Infrastructure — detect services and generate IaC templates."""


@infra.command("services")
@click.argument("path", required=False, type=click.Path(file_okay=False))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def services(ctx: click.Context, path: str | None, as_json: bool) -> None:
    """Show the services resolved from project dependencies."""
    from pipegen.core.services.service_detection import detect_services

    facts, _ = analyze(ctx, path)
    detected = detect_services(facts)

    if as_json:
        click.echo(json.dumps(detected, indent=2))
        return

    if not detected:
        click.secho("No external services detected.", fg="yellow")
        if facts.environment.requires_database:
            click.echo("   Database required, but no known client dependency was found")
        return

    click.secho("🧩 Detected services:", fg="cyan", bold=True)
    for kind, engine in detected.items():
        click.echo(f"   {kind:<10} → {engine}")


@infra.command("generate")
@click.argument("path", required=False, type=click.Path(file_okay=False))
@click.option(
    "--platform",
    required=True,
    type=click.Choice(["terraform", "cloudformation"]),
    help="IaC platform.",
)
@click.option("--write", is_flag=True, help="Write to disk (default: preview only).")
@click.pass_context
def generate(ctx: click.Context, path: str | None, platform: str, write: bool) -> None:
    """Generate infrastructure templates from project analysis."""
    from pipegen.core.services.generation import GeneratorError
    from pipegen.core.services.registry import create_infrastructure_generator

    facts, settings = analyze(ctx, path)

    try:
        generator = create_infrastructure_generator(platform, facts, settings)
    except GeneratorError as e:
        fail(str(e))

    if not ctx.obj.get("quiet"):
        click.secho(f"🏗️  {generator.platform_name}", fg="cyan", bold=True)

    handle_generated(Path(facts.project_root), generator.generate(), write)

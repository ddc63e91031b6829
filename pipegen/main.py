"""
pipegen — CLI entrypoint.

Usage:
    python -m pipegen.main --help
    python -m pipegen.main analyze
    python -m pipegen.main pipeline generate --write
    python -m pipegen.main infra generate --platform terraform
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import click

from pipegen import __version__
from pipegen.core.observability.logging_config import setup_logging
from pipegen.ui.cli.common import analyze as _analyze


@click.group()
@click.version_option(version=__version__, prog_name="pipegen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help="Path to pipegen.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: Path | None,
) -> None:
    """pipegen — CI pipelines and infrastructure from project analysis."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = config_path

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("PIPEGEN_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("PIPEGEN_LOG_FILE"),
        log_file_level=os.environ.get("PIPEGEN_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.argument("path", required=False, type=click.Path(file_okay=False))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def analyze(ctx: click.Context, path: str | None, as_json: bool) -> None:
    """Analyze a project and show the detected facts."""
    facts, _ = _analyze(ctx, path)

    if as_json:
        click.echo(json.dumps(facts.to_dict(), indent=2))
        return

    def flag(value: bool) -> str:
        return "✅" if value else "—"

    click.secho(f"\n🔍 {facts.project_name}", fg="cyan", bold=True)
    click.echo(f"   Root: {facts.project_root}")
    click.echo(f"   Type: {facts.project_type or 'unknown'}"
               f"{f' ({facts.framework})' if facts.framework else ''}")
    click.echo(f"   Version: {facts.package_version}")
    click.echo(f"   Source control: {facts.source_control} (branch {facts.default_branch})")
    click.echo()
    click.echo(f"   {flag(facts.has_tests)} tests")
    click.echo(f"   {flag(facts.has_container_descriptor)} Dockerfile")
    click.echo(f"   {flag(facts.has_infrastructure_as_code)} infrastructure as code")
    click.echo(f"   {flag(facts.is_package_project)} package project")
    click.echo()

    env = facts.environment
    click.secho("   Requirements:", fg="white", bold=True)
    click.echo(f"     {flag(env.requires_database)} database")
    click.echo(f"     {flag(env.requires_container_runtime)} container runtime")
    click.echo(f"     {flag(env.requires_cloud_provider)} cloud provider")

    if facts.dependencies:
        click.echo()
        click.secho(f"   Dependencies ({len(facts.dependencies)}):", fg="white", bold=True)
        for dep in facts.dependencies:
            click.echo(f"     • {dep}")

    click.echo()


# ── Register sub-command groups from pipegen/ui/cli/ ──────────────

from pipegen.ui.cli.infra import infra
from pipegen.ui.cli.pipeline import pipeline

cli.add_command(pipeline)
cli.add_command(infra)


if __name__ == "__main__":
    cli()

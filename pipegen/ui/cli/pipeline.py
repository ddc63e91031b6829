"""
CLI commands for CI pipeline generation.

Thin wrappers over ``pipegen.core.services.registry`` and the
pipeline generators.
"""

from __future__ import annotations

from pathlib import Path

import click

from pipegen.ui.cli.common import analyze, fail, handle_generated


@click.group()
def pipeline() -> None:
    """CI pipelines — pick a platform and generate its workflow."""


@pipeline.command("platforms")
def platforms() -> None:
    """List the supported pipeline platforms."""
    from pipegen.core.services.registry import DEFAULT_PIPELINE_PLATFORM, default_registry

    registry = default_registry()
    click.secho("⚙️  Pipeline platforms:", fg="cyan", bold=True)
    for platform_id in registry.pipeline_platforms():
        generator = registry.pipeline(platform_id)
        default = " (default)" if platform_id == DEFAULT_PIPELINE_PLATFORM else ""
        click.echo(f"   • {platform_id:<8} → {generator.output_path}{default}")


@pipeline.command("generate")
@click.argument("path", required=False, type=click.Path(file_okay=False))
@click.option(
    "--platform",
    default=None,
    help="Pipeline platform (github/azure/gitlab). Default: from the git remote.",
)
@click.option("--write", is_flag=True, help="Write to disk (default: preview only).")
@click.pass_context
def generate(ctx: click.Context, path: str | None, platform: str | None, write: bool) -> None:
    """Generate a CI pipeline from project analysis."""
    from pipegen.core.services.generation import GeneratorError
    from pipegen.core.services.registry import select_pipeline_generator

    facts, _ = analyze(ctx, path)

    try:
        generator = select_pipeline_generator(facts, platform)
    except GeneratorError as e:
        fail(str(e))

    if not ctx.obj.get("quiet"):
        click.secho(f"🔧 {generator.platform_name}", fg="cyan", bold=True)

    handle_generated(Path(facts.project_root), generator.generate(), write)

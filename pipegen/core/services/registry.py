"""
Generator registry — platform lookup and pipeline selection.

Pipeline platforms are chosen automatically from the detected source
control (or explicitly by the caller). Infrastructure platforms have
no automatic choice: the caller always names one.
"""

from __future__ import annotations

import logging

from pipegen.core.models.facts import ProjectFacts, SourceControlKind
from pipegen.core.models.settings import GeneratorSettings
from pipegen.core.services.generation import GeneratorError
from pipegen.core.services.iac import (
    CloudFormationGenerator,
    InfrastructureGenerator,
    TerraformGenerator,
)
from pipegen.core.services.pipelines import (
    AzureDevOpsGenerator,
    GitHubActionsGenerator,
    GitLabCIGenerator,
    PipelineGenerator,
)

logger = logging.getLogger(__name__)

DEFAULT_PIPELINE_PLATFORM = GitHubActionsGenerator.platform_id

_PLATFORM_BY_SOURCE_CONTROL: dict[SourceControlKind, str] = {
    SourceControlKind.GITHUB: GitHubActionsGenerator.platform_id,
    SourceControlKind.AZURE_DEVOPS: AzureDevOpsGenerator.platform_id,
    SourceControlKind.GIT: GitLabCIGenerator.platform_id,
}


class GeneratorRegistry:
    """Registered generator classes, keyed by platform id."""

    def __init__(self) -> None:
        self._pipelines: dict[str, type[PipelineGenerator]] = {}
        self._infrastructure: dict[str, type[InfrastructureGenerator]] = {}

    def register_pipeline(self, generator: type[PipelineGenerator]) -> None:
        if generator.platform_id in self._pipelines:
            logger.warning("Overwriting pipeline generator: %s", generator.platform_id)
        self._pipelines[generator.platform_id] = generator

    def register_infrastructure(self, generator: type[InfrastructureGenerator]) -> None:
        if generator.platform_id in self._infrastructure:
            logger.warning("Overwriting infrastructure generator: %s", generator.platform_id)
        self._infrastructure[generator.platform_id] = generator

    def pipeline(self, platform: str) -> type[PipelineGenerator]:
        try:
            return self._pipelines[platform]
        except KeyError:
            raise GeneratorError(
                f"Unknown pipeline platform: {platform}. "
                f"Available: {', '.join(self.pipeline_platforms())}"
            ) from None

    def infrastructure(self, platform: str) -> type[InfrastructureGenerator]:
        try:
            return self._infrastructure[platform]
        except KeyError:
            raise GeneratorError(
                f"Unknown infrastructure platform: {platform}. "
                f"Available: {', '.join(self.infrastructure_platforms())}"
            ) from None

    def pipeline_platforms(self) -> list[str]:
        return list(self._pipelines)

    def infrastructure_platforms(self) -> list[str]:
        return list(self._infrastructure)


def default_registry() -> GeneratorRegistry:
    """Registry with every built-in generator."""
    registry = GeneratorRegistry()
    for pipeline in (GitHubActionsGenerator, AzureDevOpsGenerator, GitLabCIGenerator):
        registry.register_pipeline(pipeline)
    for infra in (TerraformGenerator, CloudFormationGenerator):
        registry.register_infrastructure(infra)
    return registry


def pipeline_platform_for(source_control: SourceControlKind | None) -> str:
    """Pipeline platform id for a source-control kind, GitHub Actions by default."""
    if source_control is None:
        return DEFAULT_PIPELINE_PLATFORM
    return _PLATFORM_BY_SOURCE_CONTROL.get(source_control, DEFAULT_PIPELINE_PLATFORM)


def select_pipeline_generator(
    facts: ProjectFacts,
    platform: str | None = None,
    *,
    registry: GeneratorRegistry | None = None,
) -> PipelineGenerator:
    """Build the pipeline generator for a project.

    An explicit ``platform`` id wins; otherwise the platform follows the
    detected source control.

    Raises:
        GeneratorError: If ``platform`` is not registered.
    """
    registry = registry or default_registry()
    platform_id = platform or pipeline_platform_for(facts.source_control)
    generator = registry.pipeline(platform_id)(facts)
    logger.info("Selected pipeline generator: %s", generator.platform_name)
    return generator


def create_infrastructure_generator(
    platform: str,
    facts: ProjectFacts,
    settings: GeneratorSettings | None = None,
    *,
    registry: GeneratorRegistry | None = None,
) -> InfrastructureGenerator:
    """Build the named infrastructure generator.

    Raises:
        GeneratorError: If ``platform`` is not registered.
    """
    registry = registry or default_registry()
    generator = registry.infrastructure(platform)(facts, settings)
    logger.info("Created infrastructure generator: %s", generator.platform_name)
    return generator

"""
Pipeline generator contract and the shared CI decision tree.

Every CI platform runs the same sequence: checkout → SDK setup →
restore → build → (test) → (pack, publish on the default branch).
``plan_pipeline`` makes those decisions once from the fact snapshot;
platform generators only render a ``PipelinePlan``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from pipegen.core.models.facts import ProjectFacts
from pipegen.core.models.template import GeneratedFile

# Used when no runtime version could be detected
DEFAULT_SDK_VERSION = "8.0.x"

NUGET_SOURCE = "https://api.nuget.org/v3/index.json"


@dataclass(frozen=True)
class PipelinePlan:
    """Platform-neutral CI decisions."""

    runtime_version: str | None
    build_configuration: str
    run_tests: bool
    publish: bool
    publish_branch: str

    @property
    def sdk_version(self) -> str:
        """SDK version pin for setup steps, e.g. ``8.0.x``."""
        if self.runtime_version:
            return f"{self.runtime_version}.x"
        return DEFAULT_SDK_VERSION


def plan_pipeline(facts: ProjectFacts) -> PipelinePlan:
    return PipelinePlan(
        runtime_version=facts.runtime_version,
        build_configuration=facts.build_configuration,
        run_tests=facts.has_tests,
        publish=facts.is_package_project,
        publish_branch=facts.default_branch,
    )


class PipelineGenerator(ABC):
    """Abstract base class for CI pipeline generators.

    To add a platform:
        1. Subclass PipelineGenerator
        2. Set platform_id and output_path, implement platform_name and render
        3. Register it in the GeneratorRegistry
    """

    platform_id: ClassVar[str]
    output_path: ClassVar[str]

    def __init__(self, facts: ProjectFacts):
        self._facts = facts
        self._plan = plan_pipeline(facts)

    @property
    @abstractmethod
    def platform_name(self) -> str:
        """Human-readable platform name (e.g. 'GitHub Actions')."""

    @property
    def plan(self) -> PipelinePlan:
        return self._plan

    def supports_project_type(self, project_type: str) -> bool:
        return True

    @abstractmethod
    def render(self) -> str:
        """Render the complete workflow file."""

    def generate(self) -> list[GeneratedFile]:
        return [
            GeneratedFile(
                path=self.output_path,
                content=self.render(),
                overwrite=True,
                reason=f"{self.platform_name} pipeline for {self._facts.project_name}",
            )
        ]

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} platform={self.platform_id!r}>"

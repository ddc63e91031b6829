"""
Project analysis — build the ProjectFacts snapshot.

This is the one place that touches the filesystem and git. It runs the
fact extractor and the requirement classifier, asks the git service
for remote and default branch, and freezes the result. Generators take
the snapshot as input and never trigger analysis themselves.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from pipegen.adapters.vcs.git import GitRemoteService
from pipegen.core.models.facts import ProjectFacts, classify_source_control
from pipegen.core.models.settings import GeneratorSettings
from pipegen.core.services.manifest import (
    AnalysisError,
    collect_dependencies,
    detect_infrastructure_as_code,
    find_manifests,
    has_container_descriptor,
    has_tests,
    read_manifest_metadata,
)
from pipegen.core.services.requirements import classify_requirements

logger = logging.getLogger(__name__)

__all__ = ["AnalysisError", "SourceControlService", "analyze_project"]

DEFAULT_BRANCH = "main"


class SourceControlService(Protocol):
    """What the analyzer needs from source control."""

    def detect_project_root(self, start: Path | None = None) -> Path: ...

    def check_for_repository(self, root: Path) -> tuple[bool, str | None]: ...

    def default_branch(self, root: Path) -> str | None: ...


def analyze_project(
    project_root: Path | None = None,
    *,
    git: SourceControlService | None = None,
    settings: GeneratorSettings | None = None,
) -> ProjectFacts:
    """Analyze a project tree and return its fact snapshot.

    Args:
        project_root: Directory to analyze. When None, resolved through
            the source-control service (repository top level, else cwd).
        git: Source-control collaborator (default: ``GitRemoteService``).
        settings: Generator settings; supplies the build configuration.

    Raises:
        AnalysisError: If a project file exists but cannot be read.
    """
    git = git or GitRemoteService()
    settings = settings or GeneratorSettings()
    root = Path(project_root) if project_root is not None else git.detect_project_root()
    root = root.resolve()

    logger.info("Analyzing project at %s", root)

    manifests = find_manifests(root)
    dependencies = collect_dependencies(manifests)
    metadata = read_manifest_metadata(manifests)
    container = has_container_descriptor(root)
    environment = classify_requirements(root, dependencies, container)

    has_remote, remote_url = git.check_for_repository(root)
    source_control = classify_source_control(has_remote, remote_url)
    default_branch = git.default_branch(root) or DEFAULT_BRANCH

    facts = ProjectFacts(
        project_root=str(root),
        project_type="dotnet" if manifests else "",
        framework=metadata.target_frameworks[0] if metadata.target_frameworks else "",
        has_tests=has_tests(root),
        has_container_descriptor=container,
        has_infrastructure_as_code=detect_infrastructure_as_code(root),
        dependencies=tuple(dependencies),
        source_control=source_control,
        remote_url=remote_url,
        default_branch=default_branch,
        build_configuration=settings.build_configuration,
        target_runtime_versions=tuple(metadata.target_frameworks),
        is_package_project=bool(manifests),
        package_id=metadata.package_id,
        package_version=metadata.version,
        environment=environment,
    )

    logger.info(
        "Analysis done: %d manifest(s), %d dependencies, source control=%s",
        len(manifests), len(dependencies), source_control,
    )
    return facts

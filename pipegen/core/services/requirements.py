"""
Requirement classification — coarse environment needs of a project.

Database and cloud needs come from two sources: literal markers in any
``*.cs`` source file, and dependency names. The container need is the
presence of the root Dockerfile. Each source file is read once and
checked against every marker.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from pipegen.core.models.facts import EnvironmentRequirements
from pipegen.core.services.manifest import iter_files, read_file
from pipegen.core.services.service_detection import DATABASE_MARKERS

logger = logging.getLogger(__name__)

SOURCE_GLOB = "*.cs"
DATABASE_SOURCE_MARKER = "DbContext"
CLOUD_SOURCE_MARKERS = ("Amazon.", "AWS.")

_ORM_DEPENDENCY_MARKER = "EntityFrameworkCore"
_CLOUD_SDK_PREFIX = "AWSSDK."


def _dependency_needs_database(dependencies: Sequence[str]) -> bool:
    markers = [marker for marker, _ in DATABASE_MARKERS] + [_ORM_DEPENDENCY_MARKER]
    return any(marker in dep for dep in dependencies for marker in markers)


def _dependency_needs_cloud(dependencies: Sequence[str]) -> bool:
    return any(dep.startswith(_CLOUD_SDK_PREFIX) for dep in dependencies)


def scan_source_markers(root: Path) -> tuple[bool, bool]:
    """Return ``(uses_database, uses_cloud)`` from source file contents."""
    uses_database = False
    uses_cloud = False
    for path in iter_files(root, SOURCE_GLOB):
        content = read_file(path)
        if not uses_database and DATABASE_SOURCE_MARKER in content:
            logger.debug("Database marker in %s", path)
            uses_database = True
        if not uses_cloud and any(m in content for m in CLOUD_SOURCE_MARKERS):
            logger.debug("Cloud SDK marker in %s", path)
            uses_cloud = True
        if uses_database and uses_cloud:
            break
    return uses_database, uses_cloud


def classify_requirements(
    root: Path,
    dependencies: Sequence[str],
    has_container_descriptor: bool,
) -> EnvironmentRequirements:
    """Derive environment requirements for a project tree."""
    source_database, source_cloud = scan_source_markers(root)
    return EnvironmentRequirements(
        requires_database=source_database or _dependency_needs_database(dependencies),
        requires_container_runtime=has_container_descriptor,
        requires_cloud_provider=source_cloud or _dependency_needs_cloud(dependencies),
    )

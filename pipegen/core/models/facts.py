"""
Project fact model — the immutable snapshot every generator consumes.

Built once per analysis run by ``core.services.analyzer`` and never
mutated afterwards. Every field has a zero-value so an empty directory
(no manifest, no remote) still produces a valid snapshot.
"""

from __future__ import annotations

import re
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# net8.0 → 8.0, net8.0-windows → 8.0, netcoreapp3.1 → 3.1, net48 stays unmatched (no dot)
_RUNTIME_RE = re.compile(r"^net(?:coreapp)?(\d+\.\d+)(?:-[\w.]+)?$")


class SourceControlKind(StrEnum):
    """Where the project's remote lives."""

    NONE = "none"
    GIT = "git"
    GITHUB = "github"
    AZURE_DEVOPS = "azure-devops"


def classify_source_control(has_remote: bool, remote_url: str | None) -> SourceControlKind:
    """Classify a remote URL by host substring.

    ``Git`` is the fallback when a remote exists but matches no known host.
    """
    if not has_remote:
        return SourceControlKind.NONE
    url = remote_url or ""
    if "github.com" in url:
        return SourceControlKind.GITHUB
    if "dev.azure.com" in url:
        return SourceControlKind.AZURE_DEVOPS
    return SourceControlKind.GIT


class EnvironmentRequirements(BaseModel):
    """Coarse runtime needs derived from dependencies and source contents."""

    model_config = ConfigDict(frozen=True)

    requires_database: bool = False
    requires_container_runtime: bool = False
    requires_cloud_provider: bool = False


class ProjectFacts(BaseModel):
    """Everything detected about a project in one analysis run."""

    model_config = ConfigDict(frozen=True)

    project_root: str = ""
    project_type: str = ""
    framework: str = ""

    has_tests: bool = False
    has_container_descriptor: bool = False
    has_infrastructure_as_code: bool = False

    # Exhaustive across manifests, not deduplicated
    dependencies: tuple[str, ...] = ()

    source_control: SourceControlKind = SourceControlKind.NONE
    remote_url: str | None = None
    default_branch: str = "main"

    build_configuration: str = "Release"
    target_runtime_versions: tuple[str, ...] = ()

    is_package_project: bool = False
    package_id: str | None = None
    package_version: str = "1.0.0"

    environment: EnvironmentRequirements = Field(default_factory=EnvironmentRequirements)

    @property
    def project_name(self) -> str:
        """Package id, else the root directory name, else ``app``."""
        if self.package_id:
            return self.package_id
        if self.project_root:
            name = Path(self.project_root).name
            if name:
                return name
        return "app"

    @property
    def runtime_version(self) -> str | None:
        """Numeric runtime version of the first target framework, if any."""
        if not self.target_runtime_versions:
            return None
        match = _RUNTIME_RE.match(self.target_runtime_versions[0].strip())
        return match.group(1) if match else None

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        data["project_name"] = self.project_name
        data["runtime_version"] = self.runtime_version
        return data

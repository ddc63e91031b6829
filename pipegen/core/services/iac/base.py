"""
Infrastructure generator contract.

Service detection runs once at construction (pure, no I/O). Subclasses
render the primary template and a deployment README into the settings'
``iac_dir``; multi-environment platforms add per-environment files.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from typing import ClassVar

from pipegen.core.models.facts import ProjectFacts
from pipegen.core.models.settings import GeneratorSettings
from pipegen.core.models.template import GeneratedFile
from pipegen.core.services.service_detection import detect_services

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def resource_slug(name: str) -> str:
    """Lowercase, dash-separated form usable in bucket and stack names."""
    return _SLUG_RE.sub("-", name.lower()).strip("-") or "app"


def quoted(value: str) -> str:
    """Double-quoted YAML scalar."""
    return json.dumps(value)


def hcl_string(value: str) -> str:
    """Double-quoted HCL string literal with template sequences escaped."""
    return json.dumps(value).replace("${", "$${").replace("%{", "%%{")


class InfrastructureGenerator(ABC):
    """Abstract base class for infrastructure-as-code generators."""

    platform_id: ClassVar[str]

    def __init__(self, facts: ProjectFacts, settings: GeneratorSettings | None = None):
        self._facts = facts
        self._settings = settings or GeneratorSettings()
        self._services = detect_services(facts)

    @property
    @abstractmethod
    def platform_name(self) -> str:
        """Human-readable platform name (e.g. 'Terraform')."""

    @property
    def services(self) -> dict[str, str]:
        """Detected services, kind → engine."""
        return dict(self._services)

    @property
    def project_slug(self) -> str:
        return resource_slug(self._facts.project_name)

    @property
    def needs_containers(self) -> bool:
        return self._facts.environment.requires_container_runtime

    @abstractmethod
    def render_template(self) -> str:
        """Render the primary infrastructure template."""

    @abstractmethod
    def render_readme(self) -> str:
        """Render the companion deployment guide."""

    @abstractmethod
    def generate(self) -> list[GeneratedFile]:
        """Every file this platform writes."""

    def _file(self, name: str, content: str, reason: str) -> GeneratedFile:
        return GeneratedFile(
            path=f"{self._settings.iac_dir}/{name}",
            content=content,
            overwrite=True,
            reason=reason,
        )

    def _detected_lines(self) -> str:
        if not self._services:
            return "- no external services detected"
        return "\n".join(f"- {kind}: {engine}" for kind, engine in self._services.items())

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} platform={self.platform_id!r}>"

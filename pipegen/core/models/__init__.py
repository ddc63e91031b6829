"""
Domain models — Pydantic types for pipegen.

All models are re-exported here for convenient access:

    from pipegen.core.models import ProjectFacts, GeneratedFile, GeneratorSettings
"""

from pipegen.core.models.facts import (
    EnvironmentRequirements,
    ProjectFacts,
    SourceControlKind,
    classify_source_control,
)
from pipegen.core.models.settings import GeneratorSettings
from pipegen.core.models.template import GeneratedFile

__all__ = [
    # facts.py
    "EnvironmentRequirements",
    "ProjectFacts",
    "SourceControlKind",
    "classify_source_control",
    # settings.py
    "GeneratorSettings",
    # template.py
    "GeneratedFile",
]

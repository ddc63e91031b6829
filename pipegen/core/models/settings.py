"""
Generator settings — optional knobs loaded from pipegen.yml.

Every field has a default, so a project without a config file
behaves exactly like one with an empty file.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

PRODUCTION_ENVIRONMENT = "prod"
DEFAULT_ENVIRONMENTS = ["dev", "staging", PRODUCTION_ENVIRONMENT]


class GeneratorSettings(BaseModel):
    """Settings shared by the analyzer and the generators."""

    build_configuration: str = "Release"
    aws_region: str = "us-east-1"
    iac_dir: str = "iac"
    environments: list[str] = Field(default_factory=lambda: list(DEFAULT_ENVIRONMENTS))

    def is_production(self, environment: str) -> bool:
        """Whether an environment label gets production durability."""
        return environment == PRODUCTION_ENVIRONMENT

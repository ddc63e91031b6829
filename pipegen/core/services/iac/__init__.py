"""
Infrastructure generators — one per IaC platform, chosen explicitly.
"""

from pipegen.core.services.iac.base import InfrastructureGenerator
from pipegen.core.services.iac.cloudformation import CloudFormationGenerator
from pipegen.core.services.iac.terraform import TerraformGenerator

__all__ = [
    "CloudFormationGenerator",
    "InfrastructureGenerator",
    "TerraformGenerator",
]

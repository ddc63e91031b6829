"""
Pipeline generators — one per CI platform, all rendering the same plan.
"""

from pipegen.core.services.pipelines.azure_devops import AzureDevOpsGenerator
from pipegen.core.services.pipelines.base import PipelineGenerator, PipelinePlan, plan_pipeline
from pipegen.core.services.pipelines.github_actions import GitHubActionsGenerator
from pipegen.core.services.pipelines.gitlab_ci import GitLabCIGenerator

__all__ = [
    "AzureDevOpsGenerator",
    "GitHubActionsGenerator",
    "GitLabCIGenerator",
    "PipelineGenerator",
    "PipelinePlan",
    "plan_pipeline",
]

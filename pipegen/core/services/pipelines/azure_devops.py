"""
Azure DevOps pipeline generator.

Writes ``azure-pipelines.yml`` at the project root. Tasks use the
DotNetCoreCLI / NuGetCommand task family; the push task is conditioned
on the default branch.
"""

from __future__ import annotations

from pipegen.core.services.generation import GENERATED_HEADER
from pipegen.core.services.pipelines.base import PipelineGenerator


class AzureDevOpsGenerator(PipelineGenerator):
    platform_id = "azure"
    output_path = "azure-pipelines.yml"

    @property
    def platform_name(self) -> str:
        return "Azure DevOps"

    def render(self) -> str:
        plan = self.plan
        branch = plan.publish_branch

        steps: list[str] = []

        steps.append(f"""\
- task: UseDotNet@2
  displayName: 'Setup .NET'
  inputs:
    packageType: 'sdk'
    version: '{plan.sdk_version}'""")

        steps.append("""\
- task: DotNetCoreCLI@2
  displayName: 'Restore'
  inputs:
    command: 'restore'
    projects: '**/*.csproj'""")

        steps.append("""\
- task: DotNetCoreCLI@2
  displayName: 'Build'
  inputs:
    command: 'build'
    projects: '**/*.csproj'
    arguments: '--configuration $(buildConfiguration) --no-restore'""")

        if plan.run_tests:
            steps.append("""\
- task: DotNetCoreCLI@2
  displayName: 'Test'
  inputs:
    command: 'test'
    projects: '**/*[Tt]est*/*.csproj'
    arguments: '--configuration $(buildConfiguration) --no-build'""")

        if plan.publish:
            steps.append("""\
- task: DotNetCoreCLI@2
  displayName: 'Pack'
  inputs:
    command: 'pack'
    packagesToPack: '**/*.csproj'
    configuration: '$(buildConfiguration)'
    nobuild: true""")

            steps.append(f"""\
- task: NuGetCommand@2
  displayName: 'Publish to NuGet'
  condition: and(succeeded(), ne(variables['Build.Reason'], 'PullRequest'), eq(variables['Build.SourceBranch'], 'refs/heads/{branch}'))
  inputs:
    command: 'push'
    packagesToPush: '$(Build.ArtifactStagingDirectory)/**/*.nupkg'
    nuGetFeedType: 'external'
    publishFeedCredentials: 'NuGet'""")

        steps_str = "\n\n".join(steps)

        return f"""\
{GENERATED_HEADER}
trigger:
- {branch}

pool:
  vmImage: 'ubuntu-latest'

variables:
  buildConfiguration: '{plan.build_configuration}'

steps:
{steps_str}
"""

"""
GitHub Actions workflow generator.

Writes ``.github/workflows/ci-cd.yml``: a single build job whose
publish step only fires on pushes to the default branch.
"""

from __future__ import annotations

from pipegen.core.services.generation import GENERATED_HEADER
from pipegen.core.services.pipelines.base import NUGET_SOURCE, PipelineGenerator


class GitHubActionsGenerator(PipelineGenerator):
    platform_id = "github"
    output_path = ".github/workflows/ci-cd.yml"

    @property
    def platform_name(self) -> str:
        return "GitHub Actions"

    def render(self) -> str:
        plan = self.plan
        branch = plan.publish_branch
        config = plan.build_configuration

        steps: list[str] = []

        steps.append("      - uses: actions/checkout@v4")

        steps.append(f"""\
      - name: Setup .NET
        uses: actions/setup-dotnet@v4
        with:
          dotnet-version: {plan.sdk_version}""")

        steps.append("""\
      - name: Restore dependencies
        run: dotnet restore""")

        steps.append(f"""\
      - name: Build
        run: dotnet build --configuration {config} --no-restore""")

        if plan.run_tests:
            steps.append(f"""\
      - name: Test
        run: dotnet test --configuration {config} --no-build --verbosity normal""")

        if plan.publish:
            steps.append(f"""\
      - name: Pack
        run: dotnet pack --configuration {config} --no-build --output ./artifacts""")

            steps.append(f"""\
      - name: Publish to NuGet
        if: github.event_name == 'push' && github.ref == 'refs/heads/{branch}'
        run: dotnet nuget push "./artifacts/*.nupkg" --source {NUGET_SOURCE} --api-key ${{{{ secrets.NUGET_API_KEY }}}} --skip-duplicate""")

        steps_str = "\n\n".join(steps)

        return f"""\
{GENERATED_HEADER}
name: .NET CI/CD

on:
  push:
    branches: [{branch}]
  pull_request:
    branches: [{branch}]

permissions:
  contents: read

jobs:
  build:
    name: Build{" & test" if plan.run_tests else ""}
    runs-on: ubuntu-latest

    steps:
{steps_str}
"""

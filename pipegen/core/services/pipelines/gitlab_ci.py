"""
GitLab CI pipeline generator.

Writes ``.gitlab-ci.yml``. Stages are only declared for jobs that
exist: ``test`` when the project has tests, ``publish`` when it is a
package project.
"""

from __future__ import annotations

from pipegen.core.services.generation import GENERATED_HEADER
from pipegen.core.services.pipelines.base import NUGET_SOURCE, PipelineGenerator

SDK_IMAGE = "mcr.microsoft.com/dotnet/sdk"


class GitLabCIGenerator(PipelineGenerator):
    platform_id = "gitlab"
    output_path = ".gitlab-ci.yml"

    @property
    def platform_name(self) -> str:
        return "GitLab CI"

    def render(self) -> str:
        plan = self.plan
        image_tag = plan.runtime_version or "latest"

        stages = ["build"]
        if plan.run_tests:
            stages.append("test")
        if plan.publish:
            stages.append("publish")
        stages_str = "\n".join(f"  - {s}" for s in stages)

        jobs: list[str] = []

        jobs.append("""\
build:
  stage: build
  script:
    - dotnet restore
    - dotnet build --configuration $CONFIGURATION --no-restore""")

        if plan.run_tests:
            jobs.append("""\
test:
  stage: test
  script:
    - dotnet test --configuration $CONFIGURATION""")

        if plan.publish:
            jobs.append(f"""\
publish:
  stage: publish
  rules:
    - if: $CI_PIPELINE_SOURCE == "push" && $CI_COMMIT_BRANCH == "{plan.publish_branch}"
  script:
    - dotnet pack --configuration $CONFIGURATION --output ./artifacts
    - dotnet nuget push "./artifacts/*.nupkg" --source "{NUGET_SOURCE}" --api-key ${{NUGET_API_KEY}} --skip-duplicate""")

        jobs_str = "\n\n".join(jobs)

        return f"""\
{GENERATED_HEADER}
image: {SDK_IMAGE}:{image_tag}

stages:
{stages_str}

variables:
  CONFIGURATION: {plan.build_configuration}

{jobs_str}
"""

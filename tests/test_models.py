"""
Tests for core models — ProjectFacts, settings, GeneratedFile.
"""

import pytest

from pipegen.core.models import (
    EnvironmentRequirements,
    GeneratedFile,
    GeneratorSettings,
    ProjectFacts,
    SourceControlKind,
    classify_source_control,
)


class TestClassifySourceControl:
    def test_no_remote(self):
        assert classify_source_control(False, None) == SourceControlKind.NONE

    def test_no_remote_ignores_url(self):
        assert classify_source_control(False, "https://github.com/a/b") == SourceControlKind.NONE

    def test_github(self):
        assert classify_source_control(True, "https://github.com/a/b") == SourceControlKind.GITHUB

    def test_azure(self):
        url = "https://acme@dev.azure.com/acme/app/_git/app"
        assert classify_source_control(True, url) == SourceControlKind.AZURE_DEVOPS

    def test_other_host_is_git(self):
        assert classify_source_control(True, "ssh://git@bitbucket.org/a/b") == SourceControlKind.GIT

    def test_remote_without_url_is_git(self):
        assert classify_source_control(True, None) == SourceControlKind.GIT


class TestProjectFacts:
    def test_defaults(self):
        facts = ProjectFacts()
        assert facts.package_version == "1.0.0"
        assert facts.build_configuration == "Release"
        assert facts.default_branch == "main"
        assert facts.environment == EnvironmentRequirements()

    def test_project_name_fallback(self):
        assert ProjectFacts().project_name == "app"

    def test_project_name_from_root(self):
        assert ProjectFacts(project_root="/work/orders-api").project_name == "orders-api"

    def test_project_name_prefers_package_id(self):
        facts = ProjectFacts(project_root="/work/orders-api", package_id="Acme.Orders")
        assert facts.project_name == "Acme.Orders"

    @pytest.mark.parametrize("tfm, expected", [
        ("net8.0", "8.0"),
        ("net6.0", "6.0"),
        ("netcoreapp3.1", "3.1"),
        ("net8.0-windows", "8.0"),
        ("net7.0-android", "7.0"),
        ("net8.0-windows10.0.19041.0", "8.0"),
        ("net48", None),
        ("netstandard2.0", None),
    ])
    def test_runtime_version(self, tfm, expected):
        assert ProjectFacts(target_runtime_versions=(tfm,)).runtime_version == expected

    def test_runtime_version_uses_first(self):
        facts = ProjectFacts(target_runtime_versions=("net6.0", "net8.0"))
        assert facts.runtime_version == "6.0"

    def test_runtime_version_empty(self):
        assert ProjectFacts().runtime_version is None

    def test_to_dict(self):
        facts = ProjectFacts(
            source_control=SourceControlKind.AZURE_DEVOPS,
            dependencies=("Npgsql",),
            environment=EnvironmentRequirements(requires_database=True),
        )
        data = facts.to_dict()
        assert data["source_control"] == "azure-devops"
        assert data["dependencies"] == ["Npgsql"]
        assert data["environment"]["requires_database"] is True
        assert data["project_name"] == "app"
        assert data["runtime_version"] is None


class TestGeneratorSettings:
    def test_defaults(self):
        settings = GeneratorSettings()
        assert settings.environments == ["dev", "staging", "prod"]
        assert settings.aws_region == "us-east-1"
        assert settings.iac_dir == "iac"

    def test_defaults_not_shared(self):
        a = GeneratorSettings()
        a.environments.append("qa")
        assert GeneratorSettings().environments == ["dev", "staging", "prod"]

    def test_is_production(self):
        settings = GeneratorSettings()
        assert settings.is_production("prod")
        assert not settings.is_production("production")
        assert not settings.is_production("staging")


class TestGeneratedFile:
    def test_defaults(self):
        f = GeneratedFile(path="a.yml", content="x: 1\n")
        assert f.overwrite is True
        assert f.reason == ""

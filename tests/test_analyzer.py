"""
Tests for analyzer — the ProjectFacts snapshot end to end.

Real filesystem via tmp_path, git replaced by FakeGit.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from pipegen.core.models.facts import SourceControlKind
from pipegen.core.models.settings import GeneratorSettings
from pipegen.core.services.analyzer import AnalysisError, analyze_project
from pipegen.core.services.pipelines import AzureDevOpsGenerator
from pipegen.core.services.registry import select_pipeline_generator
from pipegen.core.services.service_detection import default_port, detect_services, engine_version
from tests.conftest import FakeGit, csproj


class TestEmptyProject:
    def test_zero_value_facts(self, tmp_path: Path, fake_git):
        facts = analyze_project(tmp_path, git=fake_git)

        assert facts.project_type == ""
        assert facts.framework == ""
        assert facts.dependencies == ()
        assert facts.target_runtime_versions == ()
        assert facts.package_version == "1.0.0"
        assert facts.package_id is None
        assert facts.source_control == SourceControlKind.NONE
        assert facts.remote_url is None
        assert facts.default_branch == "main"
        assert facts.build_configuration == "Release"

        assert not facts.has_tests
        assert not facts.has_container_descriptor
        assert not facts.has_infrastructure_as_code
        assert not facts.is_package_project
        assert not facts.environment.requires_database
        assert not facts.environment.requires_container_runtime
        assert not facts.environment.requires_cloud_provider

    def test_project_name_from_directory(self, tmp_path: Path, fake_git):
        facts = analyze_project(tmp_path, git=fake_git)
        assert facts.project_name == tmp_path.name


class TestDatabaseContainerProject:
    """Dockerfile + Npgsql manifest + tests directory."""

    @pytest.fixture
    def facts(self, make_project, fake_git):
        root = make_project({
            "Dockerfile": "FROM mcr.microsoft.com/dotnet/aspnet:8.0\n",
            "src/Api/Api.csproj": csproj("Npgsql.EntityFrameworkCore.PostgreSQL"),
            "tests/Api.Tests/Api.Tests.csproj": csproj("xunit"),
        })
        return analyze_project(root, git=fake_git)

    def test_flags(self, facts):
        assert facts.has_tests
        assert facts.has_container_descriptor
        assert facts.is_package_project
        assert facts.environment.requires_database
        assert facts.environment.requires_container_runtime

    def test_dependencies_from_all_manifests(self, facts):
        assert facts.dependencies == ("Npgsql.EntityFrameworkCore.PostgreSQL", "xunit")

    def test_framework_and_runtime(self, facts):
        assert facts.project_type == "dotnet"
        assert facts.framework == "net8.0"
        assert facts.runtime_version == "8.0"

    def test_database_resolves_to_postgres(self, facts):
        services = detect_services(facts)
        assert services["database"] == "postgres"
        assert engine_version(services["database"], "terraform") == "14"
        assert default_port(services["database"]) == 5432


class TestMonorepoLayout:
    def test_manifest_under_packages(self, make_project, fake_git):
        root = make_project({
            "packages/Core/Core.csproj": csproj("Npgsql"),
            "packages/Tests/Tests.csproj": csproj("xunit"),
        })
        facts = analyze_project(root, git=fake_git)

        assert facts.dependencies == ("Npgsql", "xunit")
        assert facts.is_package_project
        assert facts.project_type == "dotnet"
        assert facts.has_tests
        assert facts.environment.requires_database


class TestDockerfileOnly:
    def test_container_without_package(self, make_project, fake_git):
        root = make_project({"Dockerfile": "FROM nginx\n"})
        facts = analyze_project(root, git=fake_git)

        assert facts.has_container_descriptor
        assert facts.environment.requires_container_runtime
        assert not facts.has_tests
        assert not facts.is_package_project
        assert not facts.environment.requires_database


class TestSourceControl:
    @pytest.mark.parametrize("url, kind", [
        ("https://github.com/acme/app.git", SourceControlKind.GITHUB),
        ("git@github.com:acme/app.git", SourceControlKind.GITHUB),
        ("https://dev.azure.com/acme/app/_git/app", SourceControlKind.AZURE_DEVOPS),
        ("https://gitlab.example.com/acme/app.git", SourceControlKind.GIT),
    ])
    def test_remote_classification(self, tmp_path: Path, url, kind):
        facts = analyze_project(tmp_path, git=FakeGit(remote_url=url))
        assert facts.source_control == kind
        assert facts.remote_url == url

    def test_azure_remote_selects_azure_generator(self, tmp_path: Path):
        git = FakeGit(remote_url="https://dev.azure.com/acme/app/_git/app")
        facts = analyze_project(tmp_path, git=git)
        assert isinstance(select_pipeline_generator(facts), AzureDevOpsGenerator)

    def test_default_branch_from_git(self, tmp_path: Path):
        facts = analyze_project(tmp_path, git=FakeGit(branch="develop"))
        assert facts.default_branch == "develop"

    def test_root_resolved_through_git(self, tmp_path: Path):
        git = FakeGit(root=tmp_path)
        facts = analyze_project(git=git)
        assert facts.project_root == str(tmp_path.resolve())
        assert "detect_project_root" in git.calls


class TestSnapshot:
    def test_idempotent(self, make_project, fake_git):
        root = make_project({
            "A/A.csproj": csproj("Serilog", "Npgsql"),
            "B/B.csproj": csproj("Serilog"),
            "Dockerfile": "FROM scratch\n",
        })
        first = analyze_project(root, git=fake_git)
        second = analyze_project(root, git=fake_git)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_frozen(self, tmp_path: Path, fake_git):
        facts = analyze_project(tmp_path, git=fake_git)
        with pytest.raises(ValidationError):
            facts.has_tests = True

    def test_duplicates_preserved(self, make_project, fake_git):
        root = make_project({
            "A/A.csproj": csproj("Serilog"),
            "B/B.csproj": csproj("Serilog"),
        })
        facts = analyze_project(root, git=fake_git)
        assert facts.dependencies == ("Serilog", "Serilog")

    def test_build_configuration_from_settings(self, tmp_path: Path, fake_git):
        settings = GeneratorSettings(build_configuration="Debug")
        facts = analyze_project(tmp_path, git=fake_git, settings=settings)
        assert facts.build_configuration == "Debug"

    def test_package_metadata(self, make_project, fake_git):
        root = make_project({
            "App/App.csproj": csproj(target="netcoreapp3.1", package_id="Acme.App", version="2.0.0"),
        })
        facts = analyze_project(root, git=fake_git)
        assert facts.package_id == "Acme.App"
        assert facts.package_version == "2.0.0"
        assert facts.project_name == "Acme.App"
        assert facts.runtime_version == "3.1"


class TestReadFailures:
    def test_unreadable_source_file(self, make_project, fake_git, monkeypatch):
        root = make_project({"Program.cs": "class Program {}"})
        original = Path.read_text

        def fake_read_text(self, *args, **kwargs):
            if self.suffix == ".cs":
                raise OSError(5, "Input/output error")
            return original(self, *args, **kwargs)

        monkeypatch.setattr(Path, "read_text", fake_read_text)

        with pytest.raises(AnalysisError):
            analyze_project(root, git=fake_git)

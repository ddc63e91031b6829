"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

from pathlib import Path

import pytest


class FakeGit:
    """Stand-in for GitRemoteService — no subprocess, fixed answers."""

    def __init__(
        self,
        remote_url: str | None = None,
        branch: str | None = None,
        root: Path | None = None,
    ):
        self.remote_url = remote_url
        self.branch = branch
        self.root = root
        self.calls: list[str] = []

    def detect_project_root(self, start: Path | None = None) -> Path:
        self.calls.append("detect_project_root")
        return self.root or Path.cwd()

    def check_for_repository(self, root: Path) -> tuple[bool, str | None]:
        self.calls.append("check_for_repository")
        return self.remote_url is not None, self.remote_url

    def default_branch(self, root: Path) -> str | None:
        self.calls.append("default_branch")
        return self.branch


def csproj(
    *packages: str,
    target: str | None = "net8.0",
    package_id: str | None = None,
    version: str | None = None,
) -> str:
    """Build a minimal SDK-style project file."""
    props = []
    if target:
        props.append(f"    <TargetFramework>{target}</TargetFramework>")
    if package_id:
        props.append(f"    <PackageId>{package_id}</PackageId>")
    if version:
        props.append(f"    <Version>{version}</Version>")
    refs = "\n".join(
        f'    <PackageReference Include="{p}" Version="1.0.0" />' for p in packages
    )
    return (
        '<Project Sdk="Microsoft.NET.Sdk">\n'
        "  <PropertyGroup>\n" + "\n".join(props) + "\n  </PropertyGroup>\n"
        "  <ItemGroup>\n" + refs + "\n  </ItemGroup>\n"
        "</Project>\n"
    )


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def make_project(tmp_path: Path):
    """Write a file tree under tmp_path and return its root.

    Keys ending in "/" create empty directories.
    """

    def _make(files: dict[str, str] | None = None) -> Path:
        for rel, content in (files or {}).items():
            target = tmp_path / rel
            if rel.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _make

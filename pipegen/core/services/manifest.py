"""
Fact extraction — raw project signals from the filesystem.

Answers yes/no and enumerable questions about a .NET project tree:
test directories, a root Dockerfile, ``*.csproj`` dependency
declarations and metadata, infrastructure-as-code files.

Asymmetry to keep in mind: dependencies are collected from *every*
manifest, metadata comes from the *first* manifest only.

Missing files produce empty results. A file that exists but cannot be
read raises ``AnalysisError``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

MANIFEST_GLOB = "*.csproj"
CONTAINER_DESCRIPTOR = "Dockerfile"
IAC_DIRECTORY = "infrastructure"
CLOUDFORMATION_MARKER = "AWSTemplateFormatVersion"
DEFAULT_PACKAGE_VERSION = "1.0.0"

# VCS metadata and build output only; everything else is project source
_SKIP_DIRS = frozenset({".git", "bin", "obj"})

_PACKAGE_REFERENCE_RE = re.compile(r'<PackageReference\s+Include="(.*?)"')
_TARGET_FRAMEWORK_RE = re.compile(r"<TargetFramework>(.*?)</TargetFramework>")
_TARGET_FRAMEWORKS_RE = re.compile(r"<TargetFrameworks>(.*?)</TargetFrameworks>")
_PACKAGE_ID_RE = re.compile(r"<PackageId>(.*?)</PackageId>")
_VERSION_RE = re.compile(r"<Version>(.*?)</Version>")


class AnalysisError(Exception):
    """Raised when a project file exists but cannot be read."""


@dataclass
class ManifestMetadata:
    """Metadata read from the first manifest found."""

    manifest: Path | None = None
    target_frameworks: list[str] = field(default_factory=list)
    package_id: str | None = None
    version: str = DEFAULT_PACKAGE_VERSION


# ═══════════════════════════════════════════════════════════════════
#  Tree walking
# ═══════════════════════════════════════════════════════════════════


def _skipped(path: Path, root: Path) -> bool:
    return any(part in _SKIP_DIRS for part in path.relative_to(root).parts)


def iter_files(root: Path, pattern: str) -> list[Path]:
    """All files under ``root`` matching ``pattern``, in sorted path order."""
    if not root.is_dir():
        return []
    return [
        p for p in sorted(root.rglob(pattern))
        if p.is_file() and not _skipped(p, root)
    ]


def iter_directories(root: Path) -> list[Path]:
    """All directories under ``root`` (root excluded), in sorted path order."""
    if not root.is_dir():
        return []
    return [
        p for p in sorted(root.rglob("*"))
        if p.is_dir() and not _skipped(p, root)
    ]


def read_file(path: Path) -> str:
    """Read a text file, turning OS errors into ``AnalysisError``."""
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        raise AnalysisError(f"Cannot read {path}: {e}") from e


def find_manifests(root: Path) -> list[Path]:
    """Every ``*.csproj`` under the root, in discovery order."""
    return iter_files(root, MANIFEST_GLOB)


# ═══════════════════════════════════════════════════════════════════
#  Existence checks
# ═══════════════════════════════════════════════════════════════════


def has_tests(root: Path) -> bool:
    """True if any directory name contains "test" (case-insensitive)."""
    return any("test" in d.name.lower() for d in iter_directories(root))


def has_container_descriptor(root: Path) -> bool:
    return (root / CONTAINER_DESCRIPTOR).is_file()


def detect_infrastructure_as_code(root: Path) -> bool:
    """An ``infrastructure/`` dir, any ``.tf`` file, or a CloudFormation ``.yaml``.

    YAML files are read in full; the scan stops at the first match.
    """
    if (root / IAC_DIRECTORY).is_dir():
        return True
    if iter_files(root, "*.tf"):
        return True
    for path in iter_files(root, "*.yaml"):
        if CLOUDFORMATION_MARKER in read_file(path):
            logger.debug("CloudFormation template found: %s", path)
            return True
    return False


# ═══════════════════════════════════════════════════════════════════
#  Manifest content
# ═══════════════════════════════════════════════════════════════════


def extract_dependencies(content: str) -> list[str]:
    """Package identifiers from ``<PackageReference Include="...">`` elements."""
    return _PACKAGE_REFERENCE_RE.findall(content)


def extract_target_frameworks(content: str) -> list[str]:
    """Target framework monikers, single-target form first."""
    match = _TARGET_FRAMEWORK_RE.search(content)
    if match:
        value = match.group(1).strip()
        return [value] if value else []
    match = _TARGET_FRAMEWORKS_RE.search(content)
    if match:
        return [tfm.strip() for tfm in match.group(1).split(";") if tfm.strip()]
    return []


def extract_package_id(content: str) -> str | None:
    match = _PACKAGE_ID_RE.search(content)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None


def extract_version(content: str) -> str:
    match = _VERSION_RE.search(content)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return DEFAULT_PACKAGE_VERSION


def collect_dependencies(manifests: list[Path]) -> list[str]:
    """Dependencies across all manifests, in file then appearance order.

    Duplicates are kept.
    """
    dependencies: list[str] = []
    for manifest in manifests:
        found = extract_dependencies(read_file(manifest))
        logger.debug("%s: %d package reference(s)", manifest.name, len(found))
        dependencies.extend(found)
    return dependencies


def read_manifest_metadata(manifests: list[Path]) -> ManifestMetadata:
    """Metadata from the first manifest; defaults when there is none."""
    if not manifests:
        return ManifestMetadata()
    first = manifests[0]
    content = read_file(first)
    return ManifestMetadata(
        manifest=first,
        target_frameworks=extract_target_frameworks(content),
        package_id=extract_package_id(content),
        version=extract_version(content),
    )

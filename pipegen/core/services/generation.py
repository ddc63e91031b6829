"""
Generation plumbing shared by pipeline and infrastructure generators.

Generators return ``GeneratedFile`` lists; nothing is written until the
caller hands them to ``write_generated_files``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pipegen.core.models.template import GeneratedFile

logger = logging.getLogger(__name__)

GENERATED_HEADER = "# Generated by pipegen"


class GeneratorError(Exception):
    """Raised for an unknown generator platform."""


def write_generated_file(project_root: Path, file: GeneratedFile) -> dict:
    """Write a GeneratedFile to disk.

    Parent directories are created if absent.

    Returns:
        {"ok": True, "path": "...", "written": True} or {"error": "..."}
    """
    if not file.path or not file.content:
        return {"error": "Missing path or content"}

    target = project_root / file.path

    if target.exists() and not file.overwrite:
        return {
            "error": f"File already exists: {file.path} (use overwrite=true to replace)",
            "path": file.path,
            "written": False,
        }

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(file.content, encoding="utf-8")
    logger.info("Wrote generated file: %s", target)

    return {"ok": True, "path": file.path, "written": True}


def write_generated_files(project_root: Path, files: list[GeneratedFile]) -> list[dict]:
    """Write every file, returning one result dict per file."""
    return [write_generated_file(project_root, f) for f in files]

"""
Git remote service — source-control facts for the analyzer.

Answers three questions about a working tree: where is its root, does
it have a remote (and which URL), and what is its default branch.
Uses the git CLI — never raw API calls. A missing git binary or a
directory that is not a repository is reported as "no remote", never
raised.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class GitRemoteService:
    """Read-only git queries used once per analysis run."""

    def __init__(self, timeout: int = 15):
        self._timeout = timeout

    def is_available(self) -> bool:
        return shutil.which("git") is not None

    def detect_project_root(self, start: Path | None = None) -> Path:
        """Top-level directory of the enclosing repository, else ``start``."""
        start = (start or Path.cwd()).resolve()
        out = self._git(["rev-parse", "--show-toplevel"], start)
        if out:
            return Path(out).resolve()
        return start

    def check_for_repository(self, root: Path) -> tuple[bool, str | None]:
        """Return ``(has_remote, remote_url)`` for the ``origin`` remote."""
        url = self._git(["remote", "get-url", "origin"], root)
        if not url:
            return False, None
        return True, url

    def default_branch(self, root: Path) -> str | None:
        """Branch ``origin/HEAD`` points at, else the current branch."""
        ref = self._git(["symbolic-ref", "--short", "refs/remotes/origin/HEAD"], root)
        if ref:
            # origin/main → main
            return ref.split("/", 1)[-1]
        branch = self._git(["rev-parse", "--abbrev-ref", "HEAD"], root)
        if branch and branch != "HEAD":
            return branch
        return None

    def _git(self, args: list[str], cwd: Path) -> str | None:
        """Run a git command and return stripped stdout, or None on failure."""
        if not cwd.is_dir():
            return None
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=str(cwd),
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            logger.debug("git %s unavailable: %s", args[0], e)
            return None
        if result.returncode != 0:
            logger.debug("git %s failed: %s", " ".join(args), result.stderr.strip())
            return None
        return result.stdout.strip() or None

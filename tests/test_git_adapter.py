"""
Tests for GitRemoteService — git CLI calls mocked via subprocess.run.
"""

import subprocess
from pathlib import Path
from unittest.mock import patch

from pipegen.adapters.vcs.git import GitRemoteService


def _done(stdout: str = "", returncode: int = 0) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=["git"], returncode=returncode, stdout=stdout, stderr="")


RUN = "pipegen.adapters.vcs.git.subprocess.run"


class TestCheckForRepository:
    def test_origin_url(self, tmp_path: Path):
        with patch(RUN, return_value=_done("https://github.com/acme/app.git\n")) as run:
            assert GitRemoteService().check_for_repository(tmp_path) == (
                True, "https://github.com/acme/app.git",
            )
        assert run.call_args.args[0] == ["git", "remote", "get-url", "origin"]

    def test_no_remote(self, tmp_path: Path):
        with patch(RUN, return_value=_done(returncode=2)):
            assert GitRemoteService().check_for_repository(tmp_path) == (False, None)

    def test_git_missing(self, tmp_path: Path):
        with patch(RUN, side_effect=FileNotFoundError("git")):
            assert GitRemoteService().check_for_repository(tmp_path) == (False, None)

    def test_timeout(self, tmp_path: Path):
        with patch(RUN, side_effect=subprocess.TimeoutExpired("git", 15)):
            assert GitRemoteService().check_for_repository(tmp_path) == (False, None)

    def test_missing_directory_skips_git(self, tmp_path: Path):
        with patch(RUN) as run:
            assert GitRemoteService().check_for_repository(tmp_path / "nope") == (False, None)
        run.assert_not_called()


class TestDefaultBranch:
    def test_from_origin_head(self, tmp_path: Path):
        with patch(RUN, return_value=_done("origin/develop\n")):
            assert GitRemoteService().default_branch(tmp_path) == "develop"

    def test_falls_back_to_current_branch(self, tmp_path: Path):
        with patch(RUN, side_effect=[_done(returncode=128), _done("feature/x\n")]):
            assert GitRemoteService().default_branch(tmp_path) == "feature/x"

    def test_detached_head(self, tmp_path: Path):
        with patch(RUN, side_effect=[_done(returncode=128), _done("HEAD\n")]):
            assert GitRemoteService().default_branch(tmp_path) is None


class TestDetectProjectRoot:
    def test_toplevel(self, tmp_path: Path):
        with patch(RUN, return_value=_done(f"{tmp_path}\n")):
            assert GitRemoteService().detect_project_root(tmp_path / ".") == tmp_path.resolve()

    def test_not_a_repository(self, tmp_path: Path):
        with patch(RUN, return_value=_done(returncode=128)):
            assert GitRemoteService().detect_project_root(tmp_path) == tmp_path.resolve()


class TestIsAvailable:
    def test_which(self):
        with patch("pipegen.adapters.vcs.git.shutil.which", return_value=None):
            assert not GitRemoteService().is_available()
        with patch("pipegen.adapters.vcs.git.shutil.which", return_value="/usr/bin/git"):
            assert GitRemoteService().is_available()

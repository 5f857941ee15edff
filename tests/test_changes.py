import subprocess
from unittest.mock import patch

import pytest

from api_change_finder.changes import GitDiffError, get_changed_files, git_diff_names


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestGitDiffNames:
    @patch("api_change_finder.changes.subprocess.run")
    def test_splits_output(self, mock_run):
        mock_run.return_value = _completed(stdout="spec/a.yaml\n\nspec/b.yaml\n")
        assert git_diff_names("HEAD~1", "HEAD") == ["spec/a.yaml", "spec/b.yaml"]
        assert mock_run.call_args[0][0] == ["git", "diff", "--name-only", "HEAD~1", "HEAD"]

    @patch("api_change_finder.changes.subprocess.run")
    def test_nonzero_exit_raises(self, mock_run):
        mock_run.return_value = _completed(returncode=128, stderr="fatal: bad revision")
        with pytest.raises(GitDiffError, match="bad revision"):
            git_diff_names("nope", "HEAD")

    @patch("api_change_finder.changes.subprocess.run", side_effect=FileNotFoundError("git"))
    def test_missing_git_raises(self, mock_run):
        with pytest.raises(GitDiffError):
            git_diff_names("HEAD")


class TestGetChangedFiles:
    @patch("api_change_finder.changes.git_diff_names")
    def test_uses_base_ref(self, mock_diff):
        mock_diff.return_value = ["spec/a.yaml"]
        assert get_changed_files("main") == ["spec/a.yaml"]
        mock_diff.assert_called_once_with("main", "HEAD", cwd=None)

    @patch("api_change_finder.changes.git_diff_names")
    def test_fallback_to_working_tree(self, mock_diff, capsys):
        mock_diff.side_effect = [GitDiffError("no HEAD~1"), ["local.yaml"]]
        assert get_changed_files() == ["local.yaml"]
        assert mock_diff.call_args_list[1].args == ("HEAD",)
        assert "::warning::" in capsys.readouterr().err

    @patch("api_change_finder.changes.git_diff_names")
    def test_total_failure_returns_empty(self, mock_diff, capsys):
        mock_diff.side_effect = GitDiffError("not a repo")
        assert get_changed_files() == []
        assert "Fallback failed" in capsys.readouterr().err

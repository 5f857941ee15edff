"""Lists the files changed in the commit range under evaluation."""

import subprocess
from pathlib import Path

from api_change_finder import actions


class GitDiffError(RuntimeError):
    """Raised when ``git diff`` cannot produce a file list."""


def git_diff_names(*refs: str, cwd: Path | None = None) -> list[str]:
    """Run ``git diff --name-only`` for the given refs."""
    try:
        result = subprocess.run(
            ["git", "diff", "--name-only", *refs],
            capture_output=True,
            text=True,
            cwd=cwd,
        )
    except OSError as e:
        raise GitDiffError(str(e)) from e

    if result.returncode != 0:
        raise GitDiffError(result.stderr.strip() or f"git exited with {result.returncode}")
    return [line for line in result.stdout.strip().splitlines() if line]


def get_changed_files(base_ref: str = "HEAD~1", cwd: Path | None = None) -> list[str]:
    """Files changed between ``base_ref`` and HEAD.

    Falls back to the uncommitted changes against HEAD, then to an empty list.
    """
    try:
        return git_diff_names(base_ref, "HEAD", cwd=cwd)
    except GitDiffError as e:
        actions.warning(f"Error getting changed files: {e}")

    try:
        return git_diff_names("HEAD", cwd=cwd)
    except GitDiffError as e:
        actions.error(f"Fallback failed: {e}")
        return []

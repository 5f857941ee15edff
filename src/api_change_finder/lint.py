"""Runs ``postman api lint`` for each affected API."""

import subprocess
from collections.abc import Sequence

from api_change_finder.parser.base import LintOutcome, MatchResult

DEFAULT_EXECUTABLE = "postman"


class LintError(RuntimeError):
    """The Postman CLI could not be prepared for linting."""


class MissingCredentialError(LintError):
    """Linting was requested without a Postman API key."""


class PostmanLinter:
    """Wrapper around the Postman CLI's API governance lint command."""

    def __init__(self, api_key: str | None, executable: str = DEFAULT_EXECUTABLE):
        if not api_key:
            raise MissingCredentialError("postman-api-key is required when linting is enabled")
        self.api_key = api_key
        self.executable = executable

    def login(self) -> None:
        try:
            result = self._run(["login", "--with-api-key", self.api_key])
        except OSError as e:
            raise LintError(f"Could not run {self.executable}: {e}") from e
        if result.returncode != 0:
            raise LintError(f"Postman CLI login failed: {_combined_output(result).strip()}")

    def lint(self, result: MatchResult) -> LintOutcome:
        """Lint one API. Failures are reported in the outcome, never raised."""
        args = ["api", "lint", result.api_id]
        if result.integration_id:
            args += ["--integration-id", result.integration_id]

        try:
            completed = self._run(args)
        except OSError as e:
            return LintOutcome(
                api_id=result.api_id,
                integration_id=result.integration_id,
                success=False,
                output=f"Could not run {self.executable}: {e}",
            )

        return LintOutcome(
            api_id=result.api_id,
            integration_id=result.integration_id,
            success=completed.returncode == 0,
            output=_combined_output(completed),
        )

    def lint_all(self, results: Sequence[MatchResult]) -> list[LintOutcome]:
        return [self.lint(result) for result in results]

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        return subprocess.run(
            [self.executable, *args],
            capture_output=True,
            text=True,
        )


def _combined_output(result: subprocess.CompletedProcess) -> str:
    return (result.stdout or "") + (result.stderr or "")

"""End-to-end run against a real git repository."""

import json
import shutil
import subprocess
from pathlib import Path

import pytest
from click.testing import CliRunner

from api_change_finder.cli import main

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")

API_DEFINITION = """configVersion = 1.1.0
type = api

[config]
id = A1

[config.relations.apiDefinition]
files[] = {"path":"spec/a.yaml","metaData":{}}

[config.relations.apiDefinition.metaData]
rootFiles[] = spec/a.yaml
"""


def _git(repo: Path, *args: str) -> None:
    subprocess.run(
        ["git", "-c", "user.name=ci", "-c", "user.email=ci@example.com", *args],
        cwd=repo,
        check=True,
        capture_output=True,
    )


@pytest.fixture
def repo(tmp_path, monkeypatch):
    (tmp_path / ".postman").mkdir()
    (tmp_path / ".postman" / "api_a1").write_text(API_DEFINITION)
    (tmp_path / "spec").mkdir()
    (tmp_path / "spec" / "a.yaml").write_text("openapi: 3.0.0\n")
    (tmp_path / "spec" / "b.yaml").write_text("openapi: 3.0.0\n")

    _git(tmp_path, "init", "-q")
    _git(tmp_path, "add", ".")
    _git(tmp_path, "commit", "-q", "-m", "initial")

    (tmp_path / "spec" / "a.yaml").write_text("openapi: 3.1.0\n")
    (tmp_path / "spec" / "b.yaml").write_text("openapi: 3.1.0\n")
    _git(tmp_path, "commit", "-q", "-am", "bump")

    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestEndToEnd:
    def test_single_api_scenario(self, repo):
        output_file = repo / "github_output"
        runner = CliRunner()
        result = runner.invoke(main, ["find"], env={"GITHUB_OUTPUT": str(output_file)})

        assert result.exit_code == 0
        assert "Found 2 changed files" in result.output
        assert "integration-ids.csv file not found" in result.output

        text = output_file.read_text()
        start = text.index("[")
        end = text.rindex("]") + 1
        assert json.loads(text[start:end]) == [
            {
                "apiId": "A1",
                "rootFile": "spec/a.yaml",
                "changedFiles": ["spec/a.yaml"],
                "integrationId": None,
            }
        ]

"""Renders resolution and lint results for logs and step outputs."""

import json
from collections.abc import Sequence

import yaml

from api_change_finder.parser.base import LintOutcome, MatchResult

OUTPUT_FORMATS = ("github", "json", "yaml")


def results_to_json(results: Sequence[MatchResult]) -> str:
    return json.dumps([r.to_dict() for r in results], indent=2)


def lint_outcomes_to_json(outcomes: Sequence[LintOutcome]) -> str:
    return json.dumps([o.to_dict() for o in outcomes], indent=2)


def render_results(results: Sequence[MatchResult], fmt: str = "github") -> str:
    """Render matched APIs as a readable list, JSON or YAML."""
    if fmt == "json":
        return results_to_json(results)
    if fmt == "yaml":
        return yaml.safe_dump([r.to_dict() for r in results], sort_keys=False)

    lines = []
    for result in results:
        lines.append(
            f"📄 {result.api_id} (root: {result.root_file or '-'}, "
            f"integration: {result.integration_id or '-'})"
        )
        lines.extend(f"    {path}" for path in result.changed_files)
    return "\n".join(lines)


def summarize_lint(outcomes: Sequence[LintOutcome]) -> str:
    """One pass/fail line per linted API."""
    lines = []
    for outcome in outcomes:
        status = "✅ passed" if outcome.success else "❌ failed"
        lines.append(f"{outcome.api_id}: {status}")
    return "\n".join(lines)

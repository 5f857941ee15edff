"""CLI entry point for api-change-finder.

Each option also reads the matching ``INPUT_*`` variable, so the same command
runs as a GitHub Actions step and from a local checkout.
"""

from pathlib import Path

import click

from api_change_finder import actions
from api_change_finder.changes import get_changed_files
from api_change_finder.lint import LintError, PostmanLinter
from api_change_finder.parser.base import LintOutcome, MatchResult
from api_change_finder.parser.definition import load_catalog
from api_change_finder.parser.mappings import DEFAULT_MAPPINGS_PATH, load_integration_mappings
from api_change_finder.reporter import (
    OUTPUT_FORMATS,
    lint_outcomes_to_json,
    render_results,
    results_to_json,
    summarize_lint,
)
from api_change_finder.resolver import find_api_changes

postman_directory_option = click.option(
    "--postman-directory",
    envvar="INPUT_POSTMAN-DIRECTORY",
    default=".postman",
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding the api_* definition files.",
)


@click.group()
def main():
    """API Change Finder — find Postman APIs touched by a commit range and lint them."""
    pass


@main.command()
@postman_directory_option
@click.option("--base-ref", envvar="INPUT_BASE-REF", default="HEAD~1", show_default=True, help="Git ref to diff HEAD against.")
@click.option("--output-format", envvar="INPUT_OUTPUT-FORMAT", default="github", type=click.Choice(OUTPUT_FORMATS), help="How to log the results.")
@click.option("--lint/--no-lint", envvar="INPUT_LINT", default=False, help="Run `postman api lint` for every affected API.")
@click.option("--postman-api-key", envvar="POSTMAN_API_KEY", default=None, help="Postman API key, required with --lint.")
@click.option("--integration-ids", envvar="INPUT_INTEGRATION-IDS", default=DEFAULT_MAPPINGS_PATH, type=click.Path(dir_okay=False, path_type=Path), help="CSV of api-id,integration-id rows.")
def find(postman_directory: Path, base_ref: str, output_format: str, lint: bool, postman_api_key: str | None, integration_ids: Path):
    """Find APIs whose declared files changed and optionally lint them."""
    linter = None
    if lint:
        try:
            linter = PostmanLinter(api_key=postman_api_key)
        except LintError as e:
            actions.error(str(e))
            raise SystemExit(1)

    try:
        exit_code = _run_find(postman_directory, base_ref, output_format, integration_ids, linter)
    except Exception as e:
        actions.error(f"Action failed: {e}")
        raise SystemExit(1)

    if exit_code:
        raise SystemExit(exit_code)


def _run_find(postman_directory: Path, base_ref: str, output_format: str, integration_ids: Path, linter: PostmanLinter | None) -> int:
    actions.info(f"Searching for API changes in {postman_directory}")
    actions.info(f"Comparing against {base_ref}")

    changed_files = get_changed_files(base_ref)
    catalog = load_catalog(postman_directory)
    mappings = load_integration_mappings(integration_ids)

    actions.info(f"Found {len(changed_files)} changed files")
    actions.info(f"Found {len(catalog)} API definitions")
    if not changed_files:
        actions.info("No changed files found")

    for record in catalog:
        actions.info(f"Processing API {record.api_id} with {len(record.file_paths)} defined files")

    results = find_api_changes(changed_files, catalog, mappings)
    for result in results:
        for path in result.changed_files:
            actions.info(f"Match found: {path} for API {result.api_id}")

    actions.set_output("api-changes", results_to_json(results))
    actions.set_output("has-changes", "true" if results else "false")
    _log_results(results, output_format)

    if linter is None or not results:
        return 0

    outcomes = _lint_results(linter, results)
    actions.set_output("lint-results", lint_outcomes_to_json(outcomes))

    failed = [o.api_id for o in outcomes if not o.success]
    if failed:
        actions.error(f"Linting failed for {len(failed)} API(s): {', '.join(failed)}")
        return 1
    return 0


def _log_results(results: list[MatchResult], output_format: str) -> None:
    if not results:
        actions.info("No API file changes found")
        return

    actions.info(f"Found {len(results)} affected API(s):")
    if output_format == "github":
        actions.start_group("API Changes Found")
        actions.info(render_results(results, "github"))
        actions.end_group()
    else:
        actions.info(render_results(results, output_format))


def _lint_results(linter: PostmanLinter, results: list[MatchResult]) -> list[LintOutcome]:
    linter.login()

    outcomes = []
    for result in results:
        actions.start_group(f"Linting {result.api_id}")
        outcome = linter.lint(result)
        if outcome.output:
            actions.info(outcome.output.rstrip())
        actions.end_group()
        if not outcome.success:
            actions.warning(f"Lint failed for API {result.api_id}")
        outcomes.append(outcome)

    actions.info(summarize_lint(outcomes))
    return outcomes


@main.command("list-apis")
@postman_directory_option
def list_apis(postman_directory: Path):
    """Show the APIs declared in the Postman directory."""
    catalog = load_catalog(postman_directory)
    for record in catalog:
        root = record.root_files[0] if record.root_files else "-"
        click.echo(f"{record.api_id}  files={len(record.file_paths)}  root={root}")
    click.echo(f"{len(catalog)} API definition(s)")

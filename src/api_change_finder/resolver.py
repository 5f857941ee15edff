"""Matches changed files against the files each API declares.

A changed file belongs to an API when any of three rules holds for one of
its declared paths: the strings are equal, the changed path ends with
``/<declared>``, or both resolve to the same absolute path.
"""

import os
from collections.abc import Mapping, Sequence
from pathlib import Path

from api_change_finder.parser.base import ApiRecord, MatchResult


def is_exact_match(changed: str, declared: str) -> bool:
    return changed == declared


def is_suffix_match(changed: str, declared: str) -> bool:
    return changed.endswith("/" + declared)


def is_resolved_match(changed: str, declared: str, cwd: Path | None = None) -> bool:
    """Compare both paths after making them absolute against ``cwd``."""
    base = os.fspath(cwd) if cwd is not None else os.getcwd()
    return _absolute(changed, base) == _absolute(declared, base)


def _absolute(path: str, base: str) -> str:
    return os.path.normpath(os.path.join(base, path))


def paths_match(changed: str, declared: str, cwd: Path | None = None) -> bool:
    return (
        is_exact_match(changed, declared)
        or is_suffix_match(changed, declared)
        or is_resolved_match(changed, declared, cwd)
    )


def match_changed_files(
    record: ApiRecord, changed_files: Sequence[str], cwd: Path | None = None
) -> list[str]:
    """Changed files that hit any declared path of the record, first-seen order."""
    matched: list[str] = []
    seen: set[str] = set()
    for changed in changed_files:
        if changed in seen:
            continue
        for declared in record.file_paths:
            if paths_match(changed, declared, cwd):
                matched.append(changed)
                seen.add(changed)
                break
    return matched


def find_api_changes(
    changed_files: Sequence[str],
    catalog: Sequence[ApiRecord],
    mappings: Mapping[str, str],
    cwd: Path | None = None,
) -> list[MatchResult]:
    """Build one MatchResult per API with at least one changed file."""
    if not changed_files:
        return []

    results = []
    for record in catalog:
        matched = match_changed_files(record, changed_files, cwd)
        if not matched:
            continue
        results.append(
            MatchResult(
                api_id=record.api_id,
                root_file=record.root_files[0] if record.root_files else None,
                changed_files=matched,
                integration_id=mappings.get(record.api_id),
            )
        )
    return results

"""Loads the API catalog from a Postman ``.postman`` directory.

Every ``api_*`` file describes one API; the aggregate ``api`` manifest and
other files are ignored.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from api_change_finder import actions
from api_change_finder.parser.base import ApiRecord
from api_change_finder.parser.ini import IniDecodeError, decode

API_FILE_PREFIX = "api_"

# A declared file is either a bare path or an object such as {"path": "index.yaml"}.
PathEntry = str | Mapping[str, Any]


def normalize_path_entry(entry: PathEntry) -> str | None:
    """Return the path a declared file entry refers to, or None."""
    if isinstance(entry, str):
        try:
            parsed = json.loads(entry)
        except json.JSONDecodeError:
            return entry or None
        if not isinstance(parsed, Mapping):
            return entry or None
        entry = parsed

    if isinstance(entry, Mapping):
        path = entry.get("path")
        if isinstance(path, str) and path:
            return path
    return None


def discover_api_files(directory: Path) -> list[Path]:
    """List the individual API definition files in a directory."""
    if not directory.is_dir():
        actions.info(f"No {directory} directory found")
        return []

    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.name.startswith(API_FILE_PREFIX)
    )


def parse_api_file(file_path: Path) -> ApiRecord | None:
    """Read one definition file; returns None when it should be skipped."""
    try:
        parsed = decode(file_path.read_text(encoding="utf-8"))

        config = parsed.get("config") or {}
        api_id = config.get("id")
        api_definition = (config.get("relations") or {}).get("apiDefinition")

        if not api_id or not isinstance(api_definition, Mapping):
            actions.info(f"Skipping {file_path}: missing required sections")
            return None

        files = api_definition.get("files") or []
        if not isinstance(files, list):
            files = [files]
        root_files = (api_definition.get("metaData") or {}).get("rootFiles") or []

        file_paths = [p for p in (normalize_path_entry(f) for f in files) if p is not None]

        return ApiRecord(
            api_id=str(api_id),
            file_paths=file_paths,
            root_files=root_files if isinstance(root_files, list) else [],
            source=file_path,
        )
    except (OSError, IniDecodeError, AttributeError, TypeError, ValueError) as e:
        actions.error(f"Error parsing {file_path}: {e}")
        return None


def load_catalog(directory: Path) -> list[ApiRecord]:
    """Parse every API definition file in the directory, skipping invalid ones."""
    records = []
    for file_path in discover_api_files(directory):
        record = parse_api_file(file_path)
        if record is not None:
            records.append(record)
    return records

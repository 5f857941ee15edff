"""Integration ID lookup table loaded from ``integration-ids.csv``."""

from pathlib import Path

from api_change_finder import actions

DEFAULT_MAPPINGS_PATH = Path("integration-ids.csv")


def load_integration_mappings(csv_path: Path = DEFAULT_MAPPINGS_PATH) -> dict[str, str]:
    """Load ``api-id,integration-id`` rows into a dict.

    The first line is always dropped as the header, even when it holds data.
    Rows without both columns are ignored. A missing or unreadable file
    gives an empty mapping.
    """
    mappings: dict[str, str] = {}

    if not csv_path.exists():
        actions.info(f"{csv_path} file not found")
        return mappings

    try:
        lines = csv_path.read_text(encoding="utf-8").strip().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        actions.error(f"Error loading {csv_path}: {e}")
        return mappings

    for line in lines[1:]:
        if not line.strip():
            continue
        columns = [col.strip() for col in line.split(",")]
        if len(columns) < 2:
            continue
        api_id, integration_id = columns[0], columns[1]
        if api_id and integration_id:
            mappings[api_id] = integration_id

    actions.info(f"Loaded {len(mappings)} integration ID mappings from {csv_path.name}")
    return mappings

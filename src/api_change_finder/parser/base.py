"""Data models shared by the catalog loader, the resolver and the reporter.

Results are serialized with camelCase keys (``apiId``, ``rootFile`` ...)
because workflow steps consume them as JSON.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiRecord(BaseModel):
    """One API declared in a ``.postman/api_*`` definition file."""

    api_id: str
    file_paths: list[str]
    root_files: list[str] = []
    source: Path | None = None  # definition file this record was read from


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class MatchResult(_CamelModel):
    """An API with at least one changed file."""

    api_id: str
    root_file: str | None
    changed_files: list[str]
    integration_id: str | None = None


class LintOutcome(_CamelModel):
    """Result of linting one affected API."""

    api_id: str
    integration_id: str | None = None
    success: bool
    output: str = ""

"""Decoder for the INI dialect Postman writes into ``.postman/`` files.

Sections use dotted names for nesting (``[config.relations.apiDefinition]``)
and keys ending in ``[]`` collect repeated values into a list:

    [config]
    id = 7c1e...

    [config.relations.apiDefinition]
    files[] = {"path":"index.yaml","metaData":{}}

    [config.relations.apiDefinition.metaData]
    rootFiles[] = index.yaml
"""

import json
import re

SECTION_RE = re.compile(r"^\[([^\]]*)\]\s*$")
ENTRY_RE = re.compile(r"^([^=]+?)\s*(?:=\s*(.*))?$")
SECTION_SPLIT_RE = re.compile(r"(?<!\\)\.")

LITERALS = {"true": True, "false": False, "null": None}


class IniDecodeError(ValueError):
    """Raised when a line cannot be read as a section header or entry."""

    def __init__(self, lineno: int, line: str):
        super().__init__(f"line {lineno}: cannot parse {line!r}")
        self.lineno = lineno
        self.line = line


def decode(text: str) -> dict:
    """Decode INI text into nested dicts and lists."""
    root: dict = {}
    section = root

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line[0] in ";#":
            continue

        match = SECTION_RE.match(line)
        if match:
            section = _enter_section(root, match.group(1))
            continue

        match = ENTRY_RE.match(line)
        if not match:
            raise IniDecodeError(lineno, raw)

        key = match.group(1).strip()
        if key[0] in "\"'":
            key = str(_unquote(key))
        value = True if match.group(2) is None else _unquote(match.group(2).strip())

        if key.endswith("[]"):
            key = key[:-2]
            existing = section.get(key)
            if not isinstance(existing, list):
                existing = [] if existing is None else [existing]
                section[key] = existing
            existing.append(value)
        else:
            section[key] = value

    return root


def _enter_section(root: dict, name: str) -> dict:
    section = root
    for part in SECTION_SPLIT_RE.split(name):
        part = part.replace("\\.", ".")
        child = section.get(part)
        if not isinstance(child, dict):
            child = {}
            section[part] = child
        section = child
    return section


def _unquote(value: str):
    if len(value) >= 2 and value[0] == value[-1] == '"':
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value[1:-1]
    if len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1]
    if value in LITERALS:
        return LITERALS[value]
    return value

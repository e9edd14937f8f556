"""Parsing helpers for session logging input."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from zg_cli.core.models import Effort

_ENTRY_RE = re.compile(
    r"^(?P<id>[^:\s]+):(?P<sets>\d+)x(?P<reps>\d+)"
    r"(?:@(?P<weight>\d+(?:\.\d+)?)\s*(?:kg)?)?"
    r"(?::(?P<effort>[a-zA-Z_\- ]+))?$"
)


def parse_entry(value: str) -> Tuple[str, Dict[str, Any]]:
    """Parse ``ID:SETSxREPS[@WEIGHT][:effort]`` into (id, fields)."""
    match = _ENTRY_RE.match(value.strip())
    if not match:
        raise ValueError(
            f"Invalid entry '{value}'. Expected ID:SETSxREPS[@WEIGHT][:effort], e.g. leg_press:3x10@80:ideal"
        )
    fields: Dict[str, Any] = {
        "sets": int(match.group("sets")),
        "reps": int(match.group("reps")),
    }
    if match.group("weight"):
        fields["weight"] = float(match.group("weight"))
    if match.group("effort"):
        fields["effort"] = Effort.parse(match.group("effort")).value
    return match.group("id"), fields


def parse_entries(values: Optional[List[str]]) -> Dict[str, Dict[str, Any]]:
    entries: Dict[str, Dict[str, Any]] = {}
    for value in values or []:
        exercise_id, fields = parse_entry(value)
        entries[exercise_id] = fields
    return entries


def entries_from_records(records: Any) -> Dict[str, Dict[str, Any]]:
    """Convert ``exercises`` records from a session file into entries."""
    if not isinstance(records, list):
        return {}
    entries: Dict[str, Dict[str, Any]] = {}
    for record in records:
        if not isinstance(record, dict) or not record.get("id"):
            continue
        fields: Dict[str, Any] = {}
        for key in ("sets", "reps"):
            if record.get(key) is not None:
                fields[key] = int(record[key])
        if record.get("weight") is not None:
            fields["weight"] = float(record["weight"])
        if record.get("effort"):
            fields["effort"] = Effort.parse(record["effort"]).value
        entries[str(record["id"])] = fields
    return entries


def load_session_input(file_path: Optional[Path], read_stdin: bool, stdin_text: str = "") -> Optional[Dict[str, Any]]:
    """Load a session description from a JSON/YAML file or stdin text."""
    raw_data: Any
    if file_path:
        text = file_path.read_text()
        if file_path.suffix.lower() in {".yaml", ".yml"}:
            raw_data = yaml.safe_load(text)
        else:
            raw_data = json.loads(text)
    elif read_stdin:
        text = stdin_text.strip()
        if not text:
            return None
        try:
            raw_data = json.loads(text)
        except json.JSONDecodeError:
            raw_data = yaml.safe_load(text)
    else:
        return None

    if isinstance(raw_data, list):
        return {"exercises": raw_data}
    if isinstance(raw_data, dict):
        return raw_data
    return None

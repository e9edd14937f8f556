"""Exercise catalog loading."""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from zg_cli.core.models import Exercise

BUNDLED_CATALOG = "exercises.json"


class CatalogError(RuntimeError):
    """Raised when the exercise catalog is unavailable or malformed."""


def _read_bundled() -> str:
    return resources.files("zg_cli.data").joinpath(BUNDLED_CATALOG).read_text(encoding="utf-8")


def _parse_text(text: str, suffix: str, source: str) -> Any:
    try:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise CatalogError(f"Catalog unavailable: cannot parse {source}: {exc}") from exc


def parse_catalog(raw: Any, source: str = "catalog") -> List[Exercise]:
    """Validate decoded catalog records into exercises."""
    if isinstance(raw, dict) and "exercises" in raw:
        raw = raw["exercises"]
    if not isinstance(raw, list):
        raise CatalogError(f"Catalog unavailable: {source} must contain a list of exercises")

    exercises: List[Exercise] = []
    seen: set[str] = set()
    for index, record in enumerate(raw):
        try:
            exercise = Exercise.from_dict(record)
        except ValueError as exc:
            raise CatalogError(f"Catalog unavailable: record {index} in {source}: {exc}") from exc
        if exercise.id in seen:
            raise CatalogError(f"Catalog unavailable: duplicate exercise id '{exercise.id}' in {source}")
        seen.add(exercise.id)
        exercises.append(exercise)
    return exercises


def load_catalog(path: Optional[Path] = None) -> List[Exercise]:
    """Load exercises from ``path`` (JSON/YAML) or the bundled catalog."""
    if path is None:
        return parse_catalog(_parse_text(_read_bundled(), ".json", BUNDLED_CATALOG), BUNDLED_CATALOG)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogError(f"Catalog unavailable: cannot read {path}: {exc}") from exc
    return parse_catalog(_parse_text(text, path.suffix.lower(), str(path)), str(path))


def load_catalog_or_empty(path: Optional[Path] = None) -> Tuple[List[Exercise], Optional[str]]:
    """Load the catalog, degrading to an empty list with the error message."""
    try:
        return load_catalog(path), None
    except CatalogError as exc:
        return [], str(exc)


def catalog_by_id(catalog: Sequence[Exercise]) -> Dict[str, Exercise]:
    return {exercise.id: exercise for exercise in catalog}


def find_exercise(catalog: Sequence[Exercise], exercise_id: str) -> Optional[Exercise]:
    """Look up an exercise by id (case-insensitive)."""
    wanted = exercise_id.strip().lower()
    for exercise in catalog:
        if exercise.id.lower() == wanted:
            return exercise
    return None

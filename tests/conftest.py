from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
from typer.testing import CliRunner

from zg_cli.core.catalog import parse_catalog
from zg_cli.core.models import Exercise


def _record(
    exercise_id: str,
    group: str,
    minutes: int = 5,
    contraindications: List[str] | None = None,
    equipment: str = "machine",
) -> Dict[str, Any]:
    return {
        "id": exercise_id,
        "name": exercise_id.replace("_", " ").title(),
        "muscleGroup": group,
        "equipment": equipment,
        "sets": 3,
        "reps": "10-12",
        "restSeconds": 60,
        "durationMinutes": minutes,
        "contraindications": contraindications or [],
        "checklist": ["Brace", "Control the tempo"],
        "dangerAlert": "",
        "instructions": f"Perform the {exercise_id.replace('_', ' ')}. Keep it controlled.",
    }


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def catalog_records() -> List[Dict[str, Any]]:
    return [
        _record("chest_press", "chest"),
        _record("chest_fly", "chest", contraindications=["shoulder"], equipment="cable"),
        _record("back_row", "back"),
        _record("back_deadlift", "back", minutes=8, contraindications=["lower_back", "knee"], equipment="free_weight"),
        _record("shoulder_press", "shoulders", contraindications=["shoulder"]),
        _record("biceps_curl", "biceps", equipment="free_weight"),
        _record("triceps_pushdown", "triceps", equipment="cable"),
        _record("leg_press", "quadriceps", contraindications=["knee"]),
        _record("goblet_squat", "quadriceps", equipment="free_weight"),
        _record("leg_curl", "hamstrings"),
        _record("hip_thrust", "glutes", equipment="bench"),
        _record("calf_raise", "calves"),
        _record("crunch", "abdomen", contraindications=["neck"], equipment="bodyweight"),
    ]


@pytest.fixture()
def catalog(catalog_records: List[Dict[str, Any]]) -> List[Exercise]:
    return parse_catalog(catalog_records, "test catalog")


@pytest.fixture()
def write_temp_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, indent=2) + "\n")
        return path

    return _write


@pytest.fixture()
def write_temp_toml(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write


@pytest.fixture()
def zg_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, write_temp_json, catalog_records) -> Dict[str, Path]:
    """Point config, store, catalog and exports at a temporary directory."""
    paths = {
        "config": tmp_path / "config" / "config.toml",
        "data": tmp_path / "data",
        "store": tmp_path / "data" / "zengym.json",
        "catalog": write_temp_json("catalog.json", catalog_records),
        "output": tmp_path / "exports",
    }
    monkeypatch.setenv("ZG_CONFIG_FILE", str(paths["config"]))
    monkeypatch.setenv("ZG_DATA_DIR", str(paths["data"]))
    monkeypatch.setenv("ZG_STORE_FILE", str(paths["store"]))
    monkeypatch.setenv("ZG_CATALOG_FILE", str(paths["catalog"]))
    monkeypatch.setenv("ZG_OUTPUT_DIR", str(paths["output"]))
    return paths

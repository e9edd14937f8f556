from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Dict, List

from zg_cli.__main__ import app
from zg_cli.core.catalog import find_exercise
from zg_cli.core.config import load_config
from zg_cli.core.constants import SPLIT_MUSCLE_GROUPS
from zg_cli.core.models import Exercise, WorkoutSplit
from zg_cli.core.store import LocalStore

UPPER_GROUPS = {group.value for group in SPLIT_MUSCLE_GROUPS[WorkoutSplit.UPPER]}


def _seed_plan(store_path: Path, catalog: List[Exercise], ids: List[str], split: WorkoutSplit = WorkoutSplit.UPPER) -> None:
    store = LocalStore.load(store_path)
    store.set_current_plan([find_exercise(catalog, item) for item in ids], split, 30)
    store.save()


def _plain_fields(output: str) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    for line in output.splitlines():
        key, _, value = line.partition("\t")
        fields[key] = value
    return fields


def test_global_json_plain_conflict(runner) -> None:
    result = runner.invoke(app, ["--json", "--plain", "generate"])
    assert result.exit_code == 2
    assert "--json" in result.stdout
    assert "--plain" in result.stdout


def test_invalid_config_exits_with_code_2(runner, zg_env) -> None:
    zg_env["config"].parent.mkdir(parents=True)
    zg_env["config"].write_text("[profile\nname = 1")
    result = runner.invoke(app, ["split"])
    assert result.exit_code == 2
    assert "Config error" in result.stdout


def test_generate_json_respects_split_and_budget(runner, zg_env) -> None:
    result = runner.invoke(app, ["--json", "generate", "--split", "upper", "--duration", "30", "--seed", "4"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["split"] == "upper"
    assert payload["duration_budget"] == 30
    assert payload["planned_minutes"] <= 30
    assert payload["exercises"]
    assert {item["muscleGroup"] for item in payload["exercises"]} <= UPPER_GROUPS

    stored = json.loads(zg_env["store"].read_text())
    assert stored["current_plan"]["exercise_ids"] == [item["id"] for item in payload["exercises"]]


def test_generate_auto_split_starts_with_full_body(runner, zg_env) -> None:
    result = runner.invoke(app, ["--json", "generate", "--seed", "1", "--no-save"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["split"] == "full"
    assert not zg_env["store"].exists()


def test_generate_plain_applies_restrictions(runner, zg_env) -> None:
    for seed in range(5):
        result = runner.invoke(
            app,
            ["--plain", "generate", "--split", "lower", "--duration", "60", "-r", "knee", "--seed", str(seed)],
        )
        assert result.exit_code == 0
        assert "leg_press" not in result.stdout
        assert "goblet_squat" in result.stdout
        assert _plain_fields(result.stdout)["split"] == "lower"


def test_generate_rejects_unknown_restriction(runner, zg_env) -> None:
    result = runner.invoke(app, ["generate", "-r", "elbow"])
    assert result.exit_code == 2


def test_generate_with_unavailable_catalog_degrades(runner, zg_env, tmp_path: Path) -> None:
    result = runner.invoke(app, ["--catalog", str(tmp_path / "missing.json"), "generate", "--split", "full"])
    assert result.exit_code == 0
    assert "Catalog unavailable" in result.output


def test_generate_with_undecodable_catalog_degrades(runner, zg_env, tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_bytes(b"[\xff\xfe]")
    result = runner.invoke(app, ["--json", "--catalog", str(broken), "generate", "--split", "full"])
    assert result.exit_code == 0
    assert "Catalog unavailable" in result.output


def test_undecodable_store_exits_with_code_2(runner, zg_env) -> None:
    zg_env["store"].parent.mkdir(parents=True, exist_ok=True)
    zg_env["store"].write_bytes(b"\xff\xfe{}")
    result = runner.invoke(app, ["history"])
    assert result.exit_code == 2
    assert "Store error" in result.stdout


def test_invalid_stored_split_exits_with_code_2(runner, zg_env) -> None:
    zg_env["store"].parent.mkdir(parents=True, exist_ok=True)
    zg_env["store"].write_text(json.dumps({"last_split": "legs", "current_plan": None, "sessions": []}))
    result = runner.invoke(app, ["generate", "--duration", "30"])
    assert result.exit_code == 2
    assert "Store error" in result.stdout


def test_plan_requires_generated_plan(runner, zg_env, catalog) -> None:
    result = runner.invoke(app, ["plan"])
    assert result.exit_code == 1
    assert "No current plan" in result.stdout

    _seed_plan(zg_env["store"], catalog, ["chest_press", "back_row"])
    result = runner.invoke(app, ["--plain", "plan"])
    assert result.exit_code == 0
    assert "chest_press" in result.stdout
    assert _plain_fields(result.stdout)["planned_minutes"] == "10"


def test_swap_replaces_exercise_in_place(runner, zg_env, catalog) -> None:
    _seed_plan(zg_env["store"], catalog, ["chest_press", "back_row"])
    result = runner.invoke(app, ["--json", "swap", "chest_press"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["status"] == "swapped"
    assert payload["replacement"]["id"] == "chest_fly"

    stored = json.loads(zg_env["store"].read_text())
    assert stored["current_plan"]["exercise_ids"] == ["chest_fly", "back_row"]


def test_swap_reports_no_replacement(runner, zg_env, catalog) -> None:
    _seed_plan(zg_env["store"], catalog, ["chest_press", "back_row"])
    result = runner.invoke(app, ["--plain", "swap", "chest_press", "-r", "shoulder"])
    assert result.exit_code == 0
    assert _plain_fields(result.stdout)["status"] == "unavailable"

    result = runner.invoke(app, ["swap", "back_row", "-r", "lower_back"])
    assert result.exit_code == 0
    assert "No replacement available" in result.stdout


def test_swap_rejects_exercise_outside_plan(runner, zg_env, catalog) -> None:
    _seed_plan(zg_env["store"], catalog, ["chest_press"])
    result = runner.invoke(app, ["swap", "leg_press"])
    assert result.exit_code == 2


def test_split_rotation(runner, zg_env) -> None:
    result = runner.invoke(app, ["--plain", "split"])
    assert result.exit_code == 0
    assert _plain_fields(result.stdout) == {"last_split": "-", "recommended": "full"}

    result = runner.invoke(app, ["--json", "split", "--last", "lower"])
    assert json.loads(result.stdout) == {"last_split": "lower", "recommended": "upper"}

    result = runner.invoke(app, ["split", "--last", "full"])
    assert "Recommended today: Upper body" in result.stdout


def test_split_accepts_display_label(runner, zg_env) -> None:
    result = runner.invoke(app, ["--json", "split", "--last", "Lower body"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"last_split": "lower", "recommended": "upper"}


def test_catalog_list_filters(runner, zg_env) -> None:
    result = runner.invoke(app, ["--plain", "catalog", "list", "--muscle", "chest"])
    assert result.exit_code == 0
    assert _plain_fields(result.stdout)["total"] == "2"

    result = runner.invoke(app, ["--plain", "catalog", "list", "--muscle", "chest", "-r", "shoulder"])
    assert _plain_fields(result.stdout)["total"] == "1"

    result = runner.invoke(app, ["--json", "catalog", "list", "--split", "lower"])
    payload = json.loads(result.stdout)
    assert payload["count"] == 5


def test_catalog_show(runner, zg_env) -> None:
    result = runner.invoke(app, ["--json", "catalog", "show", "LEG_PRESS"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["id"] == "leg_press"
    assert payload["contraindications"] == ["knee"]

    result = runner.invoke(app, ["catalog", "show", "nope"])
    assert result.exit_code == 1
    assert "Exercise not found" in result.stdout


def test_log_from_current_plan_updates_split(runner, zg_env, catalog) -> None:
    _seed_plan(zg_env["store"], catalog, ["chest_press", "back_row"])
    result = runner.invoke(
        app,
        ["--json", "log", "-e", "chest_press:3x10@40:ideal", "--notes", "Good", "--date", "2026-03-05"],
    )
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["status"] == "recorded"
    session = payload["session"]
    assert session["exercise_count"] == 2
    assert session["total_volume"] == 1200.0
    assert session["estimated_calories"] == 150
    assert session["split"] == "upper"
    assert session["date"].startswith("2026-03-05")

    stored = json.loads(zg_env["store"].read_text())
    assert stored["last_split"] == "upper"
    assert stored["current_plan"] is None

    result = runner.invoke(app, ["--plain", "split"])
    assert _plain_fields(result.stdout)["recommended"] == "lower"


def test_log_from_stdin(runner, zg_env) -> None:
    session = {
        "split": "lower",
        "duration": 20,
        "date": "2026-02-10",
        "exercises": [{"id": "leg_curl", "sets": 3, "reps": 12, "weight": 30}],
    }
    result = runner.invoke(app, ["--plain", "log", "--stdin"], input=json.dumps(session))
    assert result.exit_code == 0
    fields = _plain_fields(result.stdout)
    assert fields["status"] == "recorded"
    assert fields["exercises"] == "1"
    assert fields["volume"] == "1080.0"
    assert fields["calories"] == "100"


def test_log_rejects_non_numeric_session_duration(runner, zg_env) -> None:
    session = {"duration": "long", "exercises": [{"id": "leg_curl", "sets": 3, "reps": 12}]}
    result = runner.invoke(app, ["log", "--stdin"], input=json.dumps(session))
    assert result.exit_code == 2
    assert "Invalid session duration" in result.output
    assert not zg_env["store"].exists()


def test_log_dry_run_does_not_save(runner, zg_env, catalog) -> None:
    _seed_plan(zg_env["store"], catalog, ["chest_press"])
    result = runner.invoke(app, ["log", "--dry-run"])
    assert result.exit_code == 0
    assert "Previewed session" in result.stdout
    assert json.loads(zg_env["store"].read_text())["sessions"] == []


def test_log_without_plan_or_input_fails(runner, zg_env) -> None:
    result = runner.invoke(app, ["log"])
    assert result.exit_code == 2


def test_log_rejects_unknown_exercise(runner, zg_env) -> None:
    result = runner.invoke(app, ["log", "-e", "nope:3x10"])
    assert result.exit_code == 2


def _log_two_sessions(runner) -> None:
    first = runner.invoke(app, ["log", "-e", "leg_curl:3x12@30", "--split", "lower", "--duration", "20", "--date", "2026-02-10"])
    second = runner.invoke(app, ["log", "-e", "chest_press:3x10@40", "--split", "upper", "--duration", "40", "--date", "2026-03-05"])
    assert first.exit_code == 0
    assert second.exit_code == 0


def test_history_filters_by_date(runner, zg_env) -> None:
    _log_two_sessions(runner)

    result = runner.invoke(app, ["--plain", "history"])
    assert result.exit_code == 0
    assert _plain_fields(result.stdout)["total"] == "2"

    result = runner.invoke(app, ["--json", "history", "--start-date", "2026-02-01", "--end-date", "2026-02-28"])
    payload = json.loads(result.stdout)
    assert [item["split"] for item in payload["sessions"]] == ["lower"]
    assert payload["date_range"] == {"start": "2026-02-01", "end": "2026-02-28"}


def test_summary_latest_and_missing(runner, zg_env) -> None:
    _log_two_sessions(runner)

    result = runner.invoke(app, ["--json", "summary"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["split"] == "upper"
    assert payload["estimated_calories"] == 200
    assert payload["volume_by_muscle_group"] == {"chest": 1200.0}

    result = runner.invoke(app, ["summary", "zzzzzzzz"])
    assert result.exit_code == 1
    assert "Session not found" in result.stdout


def test_export_formats(runner, zg_env, tmp_path: Path) -> None:
    _log_two_sessions(runner)
    out_dir = tmp_path / "out"

    result = runner.invoke(app, ["--json", "export", "--format", "csv", "--output-dir", str(out_dir)])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["count"] == 2
    with (out_dir / "sessions.csv").open() as handle:
        rows = list(csv.DictReader(handle))
    assert {row["exercise_id"] for row in rows} == {"leg_curl", "chest_press"}

    result = runner.invoke(app, ["--plain", "export", "--format", "ical", "--output-dir", str(out_dir)])
    assert result.exit_code == 0
    assert (out_dir / "zengym.ics").read_text().count("BEGIN:VEVENT") == 2

    result = runner.invoke(app, ["export", "--format", "markdown", "--output-dir", str(out_dir)])
    assert result.exit_code == 0
    assert "Exported 2 sessions" in result.stdout
    assert (out_dir / "sessions" / "INDEX.md").exists()
    assert len(list((out_dir / "sessions").glob("2026-*.md"))) == 2

    health_file = tmp_path / "health.json"
    result = runner.invoke(
        app,
        ["--json", "export", "--format", "health", "--output-file", str(health_file), "--start-date", "2026-03-01"],
    )
    assert result.exit_code == 0
    health = json.loads(health_file.read_text())
    assert health["count"] == 1
    assert health["workouts"][0]["activity_type"] == "traditional_strength_training"


def test_export_rejects_unknown_format(runner, zg_env) -> None:
    result = runner.invoke(app, ["export", "--format", "pdf"])
    assert result.exit_code == 2


def test_profile_set_persists_and_drives_generation(runner, zg_env) -> None:
    result = runner.invoke(app, ["--json", "profile", "set", "--name", "Sam", "-r", "knee"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["profile"]["restrictions"] == ["knee"]

    cfg = load_config(zg_env["config"])
    assert cfg["profile"]["name"] == "Sam"
    assert cfg["profile"]["onboarding_complete"] is True
    assert cfg["profile"]["created_at"]

    result = runner.invoke(app, ["--json", "profile", "show"])
    payload = json.loads(result.stdout)
    assert payload["restrictions"] == ["knee"]
    assert payload["totals"]["sessions"] == 0

    for seed in range(5):
        result = runner.invoke(app, ["--json", "generate", "--split", "lower", "--duration", "60", "--seed", str(seed)])
        ids = {item["id"] for item in json.loads(result.stdout)["exercises"]}
        assert "leg_press" not in ids

    result = runner.invoke(app, ["--plain", "profile", "set", "--clear-restrictions"])
    assert result.exit_code == 0
    assert _plain_fields(result.stdout)["restrictions"] == "-"


def test_profile_show_rich_output(runner, zg_env) -> None:
    result = runner.invoke(app, ["profile", "show"])
    assert result.exit_code == 0
    assert "Restrictions: none" in result.stdout

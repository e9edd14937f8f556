from __future__ import annotations

from datetime import datetime

import pytest

from zg_cli.core.models import (
    BodyArea,
    Effort,
    Equipment,
    Exercise,
    ExerciseLog,
    MuscleGroup,
    UserProfile,
    WorkoutSession,
    WorkoutSplit,
)


def _log(weight: float = 40.0, sets: int = 3, reps: int = 10) -> ExerciseLog:
    return ExerciseLog(
        exercise_id="chest_press",
        exercise_name="Chest Press",
        muscle_group=MuscleGroup.CHEST,
        sets=sets,
        reps=reps,
        weight=weight,
        effort=Effort.IDEAL,
        completed_at=datetime(2026, 2, 14, 18, 30),
    )


def test_choice_enum_parse_accepts_loose_spellings() -> None:
    assert BodyArea.parse("Lower Back") == BodyArea.LOWER_BACK
    assert BodyArea.parse("lower-back") == BodyArea.LOWER_BACK
    assert WorkoutSplit.parse("UPPER") == WorkoutSplit.UPPER
    assert Equipment.parse("free weight") == Equipment.FREE_WEIGHT
    assert Effort.parse(Effort.LIGHT) is Effort.LIGHT


def test_choice_enum_parse_rejects_unknown_values() -> None:
    with pytest.raises(ValueError, match="Expected one of"):
        MuscleGroup.parse("forearms")


def test_parse_many_deduplicates_in_order() -> None:
    assert BodyArea.parse_many(["knee", "neck", "Knee"]) == [BodyArea.KNEE, BodyArea.NECK]
    assert BodyArea.parse_many(None) == []


def test_exercise_from_dict_accepts_camel_and_snake_case() -> None:
    camel = Exercise.from_dict(
        {"id": "x", "name": "X", "muscleGroup": "back", "durationMinutes": 6, "restSeconds": 90, "contraindications": ["knee"]}
    )
    snake = Exercise.from_dict({"id": "x", "muscle_group": "back", "duration_minutes": 6, "rest_seconds": 90})
    assert camel.muscle_group == MuscleGroup.BACK
    assert camel.rest_seconds == 90
    assert camel.contraindications == (BodyArea.KNEE,)
    assert snake.duration_minutes == 6
    assert snake.name == "x"
    assert snake.equipment == Equipment.BODYWEIGHT


def test_exercise_from_dict_rejects_bad_records() -> None:
    with pytest.raises(ValueError, match="missing 'id'"):
        Exercise.from_dict({"muscleGroup": "chest", "durationMinutes": 5})
    with pytest.raises(ValueError, match="Invalid exercise 'x'"):
        Exercise.from_dict({"id": "x", "muscleGroup": "wings", "durationMinutes": 5})
    with pytest.raises(ValueError, match="Invalid exercise 'x'"):
        Exercise.from_dict({"id": "x", "muscleGroup": "chest"})
    with pytest.raises(ValueError, match="must be an object"):
        Exercise.from_dict(["x"])  # type: ignore[arg-type]


def test_exercise_identity_is_id_only() -> None:
    first = Exercise.from_dict({"id": "x", "name": "One", "muscleGroup": "chest", "durationMinutes": 5})
    second = Exercise.from_dict({"id": "x", "name": "Two", "muscleGroup": "back", "durationMinutes": 9})
    assert first == second
    assert len({first, second}) == 1


def test_exercise_to_dict_uses_catalog_keys() -> None:
    exercise = Exercise.from_dict(
        {"id": "x", "muscleGroup": "chest", "durationMinutes": 5, "dangerAlert": "Careful", "checklist": ["a"]}
    )
    payload = exercise.to_dict()
    assert payload["muscleGroup"] == "chest"
    assert payload["durationMinutes"] == 5
    assert payload["dangerAlert"] == "Careful"
    assert Exercise.from_dict(payload).checklist == ("a",)


def test_exercise_log_volume() -> None:
    assert _log().total_volume == 1200.0
    assert _log(weight=0.0).total_volume == 0.0


def test_session_totals_and_calories() -> None:
    session = WorkoutSession(
        id="abc12345",
        date=datetime(2026, 2, 14, 19, 0),
        duration_minutes=45,
        split=WorkoutSplit.UPPER,
        logs=[_log(), _log(weight=20.0, sets=2, reps=12)],
    )
    assert session.total_volume == 1680.0
    assert session.exercise_count == 2
    assert session.estimated_calories() == 225
    assert session.estimated_calories(6.5) == 292


def test_session_dict_round_trip_keeps_logs() -> None:
    session = WorkoutSession(
        id="abc12345",
        date=datetime(2026, 2, 14, 19, 0),
        duration_minutes=30,
        split=None,
        notes="Felt strong",
        logs=[_log()],
    )
    restored = WorkoutSession.from_dict(session.to_dict())
    assert restored.split is None
    assert restored.notes == "Felt strong"
    assert restored.logs[0].effort == Effort.IDEAL
    assert restored.logs[0].completed_at == datetime(2026, 2, 14, 18, 30)


def test_user_profile_from_and_to_config() -> None:
    profile = UserProfile.from_config({"profile": {"name": "Sam", "restrictions": ["knee", "neck"]}})
    assert profile.has_restriction(BodyArea.KNEE)
    assert not profile.has_restriction(BodyArea.SHOULDER)
    assert profile.onboarding_complete is False
    section = profile.to_config()
    assert section == {"name": "Sam", "restrictions": ["knee", "neck"], "onboarding_complete": False}


def test_user_profile_defaults_when_section_missing() -> None:
    profile = UserProfile.from_config({})
    assert profile.name == ""
    assert profile.restrictions == []


def test_choice_enum_parse_accepts_display_labels() -> None:
    assert WorkoutSplit.parse("Upper body") == WorkoutSplit.UPPER
    assert WorkoutSplit.parse("full body") == WorkoutSplit.FULL
    assert BodyArea.parse("Lower back") == BodyArea.LOWER_BACK
    assert Equipment.parse("Free weight") == Equipment.FREE_WEIGHT


@pytest.mark.parametrize("minutes", [0, -5])
def test_exercise_from_dict_rejects_non_positive_duration(minutes: int) -> None:
    with pytest.raises(ValueError, match="durationMinutes must be at least 1"):
        Exercise.from_dict({"id": "x", "muscleGroup": "chest", "durationMinutes": minutes})

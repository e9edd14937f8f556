"""Static constants and mappings for the Zengym CLI."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from zg_cli.core.models import BodyArea, Effort, Equipment, MuscleGroup, WorkoutSplit

SPLIT_MUSCLE_GROUPS: Dict[WorkoutSplit, Tuple[MuscleGroup, ...]] = {
    WorkoutSplit.UPPER: (
        MuscleGroup.CHEST,
        MuscleGroup.BACK,
        MuscleGroup.SHOULDERS,
        MuscleGroup.BICEPS,
        MuscleGroup.TRICEPS,
    ),
    WorkoutSplit.LOWER: (
        MuscleGroup.QUADRICEPS,
        MuscleGroup.HAMSTRINGS,
        MuscleGroup.GLUTES,
        MuscleGroup.CALVES,
    ),
    WorkoutSplit.FULL: tuple(MuscleGroup),
}

# Full is only ever the first recommendation; afterwards upper/lower alternate.
SPLIT_TRANSITIONS: Dict[Optional[WorkoutSplit], WorkoutSplit] = {
    None: WorkoutSplit.FULL,
    WorkoutSplit.FULL: WorkoutSplit.UPPER,
    WorkoutSplit.UPPER: WorkoutSplit.LOWER,
    WorkoutSplit.LOWER: WorkoutSplit.UPPER,
}

# Fill pass stops once this many minutes or fewer remain.
FILL_PASS_MIN_REMAINING = 2

DEFAULT_DURATION_MINUTES = 45
DURATION_CHOICES = (30, 45, 60)
DEFAULT_CALORIES_PER_MINUTE = 5.0
HEALTH_ACTIVITY_TYPE = "traditional_strength_training"
HEALTH_BRAND_NAME = "Zengym"

MUSCLE_GROUP_LABELS = {
    MuscleGroup.CHEST: "Chest",
    MuscleGroup.BACK: "Back",
    MuscleGroup.SHOULDERS: "Shoulders",
    MuscleGroup.BICEPS: "Biceps",
    MuscleGroup.TRICEPS: "Triceps",
    MuscleGroup.QUADRICEPS: "Quadriceps",
    MuscleGroup.HAMSTRINGS: "Hamstrings",
    MuscleGroup.GLUTES: "Glutes",
    MuscleGroup.CALVES: "Calves",
    MuscleGroup.ABDOMEN: "Abdomen",
}

BODY_AREA_LABELS = {
    BodyArea.LOWER_BACK: "Lower back",
    BodyArea.KNEE: "Knee",
    BodyArea.SHOULDER: "Shoulder",
    BodyArea.NECK: "Neck",
}

BODY_AREA_DESCRIPTIONS = {
    BodyArea.LOWER_BACK: "Pain or sensitivity in the lower back",
    BodyArea.KNEE: "Pain or sensitivity in the knees",
    BodyArea.SHOULDER: "Pain or sensitivity in the shoulders",
    BodyArea.NECK: "Pain or sensitivity in the neck",
}

SPLIT_LABELS = {
    WorkoutSplit.UPPER: "Upper body",
    WorkoutSplit.LOWER: "Lower body",
    WorkoutSplit.FULL: "Full body",
}

EQUIPMENT_LABELS = {
    Equipment.MACHINE: "Machine",
    Equipment.CABLE: "Cable",
    Equipment.FREE_WEIGHT: "Free weight",
    Equipment.BODYWEIGHT: "Bodyweight",
    Equipment.BENCH: "Bench",
}

EFFORT_LABELS = {
    Effort.LIGHT: "Light",
    Effort.IDEAL: "Ideal",
    Effort.TOO_HEAVY: "Too heavy",
}

CHOICE_LABELS = {
    MuscleGroup: MUSCLE_GROUP_LABELS,
    BodyArea: BODY_AREA_LABELS,
    WorkoutSplit: SPLIT_LABELS,
    Equipment: EQUIPMENT_LABELS,
    Effort: EFFORT_LABELS,
}

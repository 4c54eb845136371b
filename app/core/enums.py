"""Shared enums for models, calculations and API."""

from enum import Enum


class ExerciseType(str, Enum):
    """How a set of this exercise is measured. Controls all calculation branching."""

    WEIGHT_REPS = "weight_reps"  # Weight & Reps
    DURATION = "duration"  # Time-based (e.g. Planks)
    DURATION_WEIGHT = "duration_weight"  # Loaded holds, farmer's walk for time
    DISTANCE_DURATION = "distance_duration"  # Running, rowing
    WEIGHT_DISTANCE = "weight_distance"  # Sled push, loaded carries
    BODYWEIGHT = "bodyweight"  # Push-ups, pull-ups
    ASSISTED_BODYWEIGHT = "assisted_bodyweight"  # Band / machine assisted
    WEIGHTED_BODYWEIGHT = "weighted_bodyweight"  # Weighted dips, weighted pull-ups


BODYWEIGHT_TYPES = frozenset(
    {
        ExerciseType.BODYWEIGHT,
        ExerciseType.ASSISTED_BODYWEIGHT,
        ExerciseType.WEIGHTED_BODYWEIGHT,
    }
)


class EquipmentType(str, Enum):
    """Equipment categories with their own minimum realistic weight increment."""

    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    MACHINE = "machine"
    CABLE = "cable"
    KETTLEBELL = "kettlebell"
    PLATE_LOADED = "plate_loaded"


class SetLabel(str, Enum):
    """Smart set labeling."""

    WARMUP = "warmup"
    WORKING = "working"
    FAILURE = "failure"
    DROP_SET = "drop_set"


class PRType(str, Enum):
    """Type of personal record."""

    HEAVIEST_WEIGHT = "heaviest_weight"
    BEST_1RM = "best_1rm"  # Estimated one-rep max
    VOLUME = "volume"  # Highest single-set weight × reps


class ProgressionRationale(str, Enum):
    """Why a progression suggestion looks the way it does."""

    INSUFFICIENT_HISTORY = "insufficient_history"
    INCREASE_REPS = "increase_reps"
    INCREASE_WEIGHT = "increase_weight"
    REACH_MIN_REPS = "reach_min_reps"
    EXTEND_REP_RANGE = "extend_rep_range"  # Bodyweight only: past the top of the range
    TARGET_WEIGHT_REACHED = "target_weight_reached"


class ProgressTrend(str, Enum):
    IMPROVING = "improving"
    PLATEAUING = "plateauing"
    DECLINING = "declining"
    INSUFFICIENT_DATA = "insufficient_data"


class RPETrend(str, Enum):
    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"
    INSUFFICIENT_DATA = "insufficient_data"


class OneRepMaxFormula(str, Enum):
    BRZYCKI = "brzycki"
    EPLEY = "epley"


class PartialRepsVolumeWeight(str, Enum):
    """How much a partial rep counts toward set volume."""

    NONE = "none"
    HALF = "half"
    FULL = "full"


class SuggestionType(str, Enum):
    """Lever a progress suggestion pulls."""

    WEIGHT = "weight"
    REPS = "reps"
    SETS = "sets"


class SuggestionConfidence(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

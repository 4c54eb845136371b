"""Progressive overload: next-session prescriptions, PR checks, progress trends.

History comes in as plain SetRecords (the caller loads them); nothing here
touches the database. For bodyweight-relative exercises the caller passes
effective weights (see exercise_calculations.effective_weight) in `weight`.

Progression rules, applied to the most recent session:
- achieved reps >= top of range  -> add one weight increment, reset reps to the bottom
- bottom <= achieved < top       -> same weight, one more rep
- achieved < bottom              -> same weight, work up to the bottom of the range
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from app.core.constants import (
    BRZYCKI_MAX_RELIABLE_REPS,
    DEFAULT_KETTLEBELL_INCREMENT,
    DEFAULT_MAX_REPS,
    DEFAULT_MIN_REPS,
    DEFAULT_WEIGHT_INCREMENT,
    DELOAD_FACTOR,
    RPE_EASY_MAX,
    RPE_MODERATE_MAX,
    RPE_WINDOW,
    SUGGEST_REPS_AFTER_WEEKS,
    SUGGEST_SETS_AFTER_WEEKS,
    SUGGEST_SETS_MAX,
    SUGGEST_WEIGHT_AFTER_WEEKS,
    TREND_IMPROVING_RATIO,
    TREND_MIN_SESSIONS,
    TREND_WINDOW_SESSIONS,
)
from app.core.enums import (
    OneRepMaxFormula,
    PartialRepsVolumeWeight,
    PRType,
    ProgressionRationale,
    ProgressTrend,
    RPETrend,
    SuggestionConfidence,
    SuggestionType,
)
from app.core.records import SetRecord


@dataclass(frozen=True)
class WeightIncrements:
    """Smallest realistic jump per equipment type. Comes from user settings."""

    barbell: float = DEFAULT_WEIGHT_INCREMENT
    dumbbell: float = DEFAULT_WEIGHT_INCREMENT
    machine: float = DEFAULT_WEIGHT_INCREMENT
    cable: float = DEFAULT_WEIGHT_INCREMENT
    kettlebell: float = DEFAULT_KETTLEBELL_INCREMENT
    plate_loaded: float = DEFAULT_WEIGHT_INCREMENT
    default_increment: float = DEFAULT_WEIGHT_INCREMENT


@dataclass(frozen=True)
class ProgressionTargets:
    min_reps: int | None = None
    max_reps: int | None = None
    weight_target: float | str | None = None  # number, or a label like "heavy"


@dataclass
class ProgressionSuggestion:
    rationale: ProgressionRationale
    suggested_weight: float | None = None
    suggested_reps: int | None = None
    suggested_min_reps: int | None = None
    suggested_max_reps: int | None = None
    weight_increment: float | None = None
    previous_weight: float | None = None
    previous_reps: int | None = None
    muscle_groups: list[str] = field(default_factory=list)
    message: str = ""

    @property
    def is_progression(self) -> bool:
        return self.rationale in (
            ProgressionRationale.INCREASE_REPS,
            ProgressionRationale.INCREASE_WEIGHT,
            ProgressionRationale.EXTEND_REP_RANGE,
        )


@dataclass(frozen=True)
class PersonalRecordResult:
    is_heaviest_weight: bool = False
    is_best_1rm: bool = False
    is_volume_record: bool = False

    @property
    def is_record(self) -> bool:
        return self.is_heaviest_weight or self.is_best_1rm or self.is_volume_record

    def types(self) -> list[PRType]:
        out: list[PRType] = []
        if self.is_heaviest_weight:
            out.append(PRType.HEAVIEST_WEIGHT)
        if self.is_best_1rm:
            out.append(PRType.BEST_1RM)
        if self.is_volume_record:
            out.append(PRType.VOLUME)
        return out


@dataclass
class CurrentBest:
    weight: float = 0.0
    reps: int = 0
    volume: float = 0.0
    one_rep_max: float = 0.0


@dataclass
class OverloadSuggestion:
    kind: SuggestionType
    current_value: float
    suggested_value: float
    increase: float
    percentage: float
    reasoning: str
    confidence: SuggestionConfidence
    priority: int  # 1 is most important


@dataclass
class ProgressAnalysis:
    current_best: CurrentBest
    trend: ProgressTrend
    weeks_since_progress: int
    rpe_trend: RPETrend
    ready_for_progression: bool
    sessions_analyzed: int
    suggestions: list[OverloadSuggestion] = field(default_factory=list)


# ---- 1RM and volume ----


def estimate_one_rep_max(
    weight: float,
    reps: int,
    formula: OneRepMaxFormula | str = OneRepMaxFormula.BRZYCKI,
) -> float:
    """Estimated one-rep max (Brzycki by default, Epley on request)."""
    if reps <= 0:
        return 0.0
    if reps == 1:
        return float(weight)
    if formula == OneRepMaxFormula.EPLEY:
        return weight * (1.0 + reps / 30.0)
    if reps > BRZYCKI_MAX_RELIABLE_REPS:
        # Formula not reliable for high reps
        return float(weight)
    return weight * (36.0 / (37.0 - reps))


def partial_rep_weight(setting: PartialRepsVolumeWeight | str | None) -> float:
    """How much one partial rep counts toward volume for a user setting."""
    if setting == PartialRepsVolumeWeight.FULL:
        return 1.0
    if setting == PartialRepsVolumeWeight.HALF:
        return 0.5
    return 0.0


def set_volume(weight: float, reps: int, partial_reps: int = 0, partial_weight: float = 0.5) -> float:
    return weight * reps + weight * partial_reps * partial_weight


# ---- Equipment increments ----


def get_weight_increment(equipment_type: str | None, increments: WeightIncrements) -> float:
    """Increment for the equipment, or `default_increment` when unmapped."""
    if not equipment_type:
        return increments.default_increment
    key = equipment_type.strip().lower().replace("-", "_").replace(" ", "_")
    if key == "default_increment" or key not in WeightIncrements.__dataclass_fields__:
        return increments.default_increment
    return getattr(increments, key)


# ---- History helpers ----


def _session_key(record: SetRecord, index: int):
    if record.session_id is not None:
        return ("session", record.session_id)
    if record.performed_at is not None:
        return ("date", record.performed_at.date())
    return ("set", index)


def _chronological(history: Iterable[SetRecord]) -> list[SetRecord]:
    """Oldest first. Sorted by performed_at when every record has one, else input order."""
    records = list(history)
    if records and all(r.performed_at is not None for r in records):
        records.sort(key=lambda r: r.performed_at)
    return records


def group_sessions(history: Iterable[SetRecord]) -> list[list[SetRecord]]:
    """Split history into sessions, oldest first, keeping first-seen session order."""
    sessions: dict = {}
    for index, record in enumerate(_chronological(history)):
        sessions.setdefault(_session_key(record, index), []).append(record)
    return list(sessions.values())


def _latest_session(records: Sequence[SetRecord]) -> list[SetRecord]:
    last_index = len(records) - 1
    last_key = _session_key(records[last_index], last_index)
    return [r for i, r in enumerate(records) if _session_key(r, i) == last_key]


def _resolve_rep_range(targets: ProgressionTargets) -> tuple[int, int]:
    low, high = targets.min_reps, targets.max_reps
    if low is None and high is None:
        return DEFAULT_MIN_REPS, DEFAULT_MAX_REPS
    if low is None:
        low = high
    if high is None:
        high = low
    return min(low, high), max(low, high)


def _numeric_weight_target(weight_target: float | str | None) -> float | None:
    if weight_target is None or isinstance(weight_target, bool):
        return None
    try:
        cap = float(weight_target)
    except ValueError:
        return None  # "bodyweight", "moderate", "heavy"
    # "nan" and "inf" parse as floats but are not a usable cap
    return cap if math.isfinite(cap) else None


def _muscle_group_note(muscle_groups: Sequence[str]) -> str:
    if not muscle_groups:
        return ""
    return f" Focus: {', '.join(muscle_groups)}."


def _fmt(value: float) -> str:
    return f"{value:g}"


# ---- Suggestions ----


def calculate_progression(
    history: Iterable[SetRecord],
    targets: ProgressionTargets,
    weight_increment: float,
    muscle_groups: Sequence[str] = (),
) -> ProgressionSuggestion:
    """
    Next-session weight and reps for a weighted exercise.

    Only completed sets with both weight and reps count. The latest session's
    heaviest weight is the current weight; the fewest reps done at that weight
    decide whether the whole session hit the target.
    """
    groups = list(muscle_groups)
    note = _muscle_group_note(groups)
    usable = [
        r for r in _chronological(history)
        if r.completed and r.weight is not None and r.reps is not None
    ]
    if not usable:
        return ProgressionSuggestion(
            rationale=ProgressionRationale.INSUFFICIENT_HISTORY,
            muscle_groups=groups,
            message="Not enough history yet. Log a session to get a suggestion." + note,
        )

    low, high = _resolve_rep_range(targets)
    session = _latest_session(usable)
    current_weight = max(float(r.weight) for r in session)
    achieved = min(int(r.reps) for r in session if float(r.weight) == current_weight)

    base = dict(
        suggested_min_reps=low,
        suggested_max_reps=high,
        weight_increment=weight_increment,
        previous_weight=current_weight,
        previous_reps=achieved,
        muscle_groups=groups,
    )

    if achieved >= high:
        next_weight = current_weight + weight_increment
        cap = _numeric_weight_target(targets.weight_target)
        if cap is not None and next_weight > cap:
            return ProgressionSuggestion(
                rationale=ProgressionRationale.TARGET_WEIGHT_REACHED,
                suggested_weight=current_weight,
                suggested_reps=high,
                message=f"Target weight of {_fmt(cap)} reached. Hold {_fmt(current_weight)} for {high} reps." + note,
                **base,
            )
        return ProgressionSuggestion(
            rationale=ProgressionRationale.INCREASE_WEIGHT,
            suggested_weight=next_weight,
            suggested_reps=low,
            message=(
                f"You hit {achieved} reps at {_fmt(current_weight)}. "
                f"Add {_fmt(weight_increment)} and start again at {low} reps." + note
            ),
            **base,
        )

    if achieved >= low:
        return ProgressionSuggestion(
            rationale=ProgressionRationale.INCREASE_REPS,
            suggested_weight=current_weight,
            suggested_reps=min(achieved + 1, high),
            message=f"Stay at {_fmt(current_weight)} and aim for {min(achieved + 1, high)} reps." + note,
            **base,
        )

    return ProgressionSuggestion(
        rationale=ProgressionRationale.REACH_MIN_REPS,
        suggested_weight=current_weight,
        suggested_reps=low,
        message=f"Stay at {_fmt(current_weight)} until you reach {low} reps." + note,
        **base,
    )


def calculate_bodyweight_progression(
    history: Iterable[SetRecord],
    targets: ProgressionTargets,
) -> ProgressionSuggestion:
    """Reps-only progression: bodyweight is not a lever, so no weight is ever suggested."""
    usable = [r for r in _chronological(history) if r.completed and r.reps is not None]
    if not usable:
        return ProgressionSuggestion(
            rationale=ProgressionRationale.INSUFFICIENT_HISTORY,
            message="Not enough history yet. Log a session to get a suggestion.",
        )

    low, high = _resolve_rep_range(targets)
    achieved = min(int(r.reps) for r in _latest_session(usable))
    base = dict(
        suggested_min_reps=low,
        suggested_max_reps=high,
        previous_reps=achieved,
    )

    if achieved >= high:
        return ProgressionSuggestion(
            rationale=ProgressionRationale.EXTEND_REP_RANGE,
            suggested_reps=achieved + 1,
            message=f"Top of the range reached. Go for {achieved + 1} reps.",
            **base,
        )
    if achieved >= low:
        return ProgressionSuggestion(
            rationale=ProgressionRationale.INCREASE_REPS,
            suggested_reps=achieved + 1,
            message=f"Aim for {achieved + 1} reps.",
            **base,
        )
    return ProgressionSuggestion(
        rationale=ProgressionRationale.REACH_MIN_REPS,
        suggested_reps=low,
        message=f"Work up to {low} reps.",
        **base,
    )


# ---- Personal records ----


def check_personal_records(
    history: Iterable[SetRecord],
    candidate_weight: float | None,
    candidate_reps: int | None,
    formula: OneRepMaxFormula | str = OneRepMaxFormula.BRZYCKI,
) -> PersonalRecordResult:
    """
    Compare a candidate set against the best historical weight, estimated 1RM
    and single-set volume. Ties are not records. With no usable history
    nothing is a record.
    """
    usable = [r for r in history if r.weight is not None and r.reps is not None]
    if not usable:
        return PersonalRecordResult()

    max_weight = max(float(r.weight) for r in usable)
    max_1rm = max(estimate_one_rep_max(float(r.weight), int(r.reps), formula) for r in usable)
    max_volume = max(float(r.weight) * int(r.reps) for r in usable)

    heaviest = candidate_weight is not None and float(candidate_weight) > max_weight
    if candidate_weight is None or candidate_reps is None:
        return PersonalRecordResult(is_heaviest_weight=heaviest)

    w, r = float(candidate_weight), int(candidate_reps)
    return PersonalRecordResult(
        is_heaviest_weight=heaviest,
        is_best_1rm=estimate_one_rep_max(w, r, formula) > max_1rm,
        is_volume_record=w * r > max_volume,
    )


# ---- Trends ----


def _best_set(session: Sequence[SetRecord], formula) -> SetRecord | None:
    candidates = [
        r for r in session
        if r.completed and r.weight is not None and r.reps is not None
    ]
    if not candidates:
        return None
    # First set wins ties
    return max(candidates, key=lambda r: estimate_one_rep_max(float(r.weight), int(r.reps), formula))


def _session_volume(session: Sequence[SetRecord], partial_weight: float) -> float:
    return sum(
        set_volume(float(r.weight), int(r.reps), int(r.partial_reps or 0), partial_weight)
        for r in session
        if r.completed and r.weight is not None and r.reps is not None
    )


def _session_one_rm(session: Sequence[SetRecord], formula) -> float:
    best = _best_set(session, formula)
    if best is None:
        return 0.0
    return estimate_one_rep_max(float(best.weight), int(best.reps), formula)


def determine_trend(
    history: Iterable[SetRecord],
    formula: OneRepMaxFormula | str = OneRepMaxFormula.BRZYCKI,
    partial_weight: float = 0.5,
) -> ProgressTrend:
    """Improving / plateauing / declining over the last few sessions."""
    sessions = [s for s in group_sessions(history) if _best_set(s, formula) is not None]
    if len(sessions) < TREND_MIN_SESSIONS:
        return ProgressTrend.INSUFFICIENT_DATA

    recent = sessions[-TREND_WINDOW_SESSIONS:]
    strength_gains = 0
    volume_gains = 0
    for previous, current in zip(recent, recent[1:]):
        if _session_one_rm(current, formula) > _session_one_rm(previous, formula):
            strength_gains += 1
        if _session_volume(current, partial_weight) > _session_volume(previous, partial_weight):
            volume_gains += 1

    comparisons = len(recent) - 1
    threshold = comparisons * TREND_IMPROVING_RATIO
    if strength_gains >= threshold or volume_gains >= threshold:
        return ProgressTrend.IMPROVING
    if strength_gains == 0 and volume_gains == 0:
        return ProgressTrend.DECLINING
    return ProgressTrend.PLATEAUING


def analyze_rpe_trend(history: Iterable[SetRecord]) -> tuple[RPETrend, bool]:
    """(trend, ready_for_progression) from the average of the most recent RPEs."""
    rpes = [float(r.rpe) for r in _chronological(history) if r.rpe is not None]
    if len(rpes) < RPE_WINDOW:
        return RPETrend.INSUFFICIENT_DATA, False
    recent = rpes[-RPE_WINDOW:]
    avg = sum(recent) / len(recent)
    if avg <= RPE_EASY_MAX:
        return RPETrend.EASY, True
    if avg <= RPE_MODERATE_MAX:
        return RPETrend.MODERATE, True
    return RPETrend.HARD, False


def _session_date(session: Sequence[SetRecord]) -> datetime | None:
    dates = [r.performed_at for r in session if r.performed_at is not None]
    return max(dates) if dates else None


def weeks_since_progress(
    history: Iterable[SetRecord],
    formula: OneRepMaxFormula | str = OneRepMaxFormula.BRZYCKI,
) -> int:
    """
    Whole weeks between the latest session and the most recent earlier session
    it beats on estimated 1RM. With no beaten session, weeks since the oldest.
    Sessions without dates are ignored.
    """
    sessions = [
        s for s in group_sessions(history)
        if _session_date(s) is not None and _best_set(s, formula) is not None
    ]
    if len(sessions) < 2:
        return 0

    latest = sessions[-1]
    latest_date = _session_date(latest)
    latest_1rm = _session_one_rm(latest, formula)
    for earlier in reversed(sessions[:-1]):
        if latest_1rm > _session_one_rm(earlier, formula):
            return (latest_date - _session_date(earlier)).days // 7
    return (latest_date - _session_date(sessions[0])).days // 7


def _latest_scored_session(sessions: Sequence[Sequence[SetRecord]], formula) -> Sequence[SetRecord] | None:
    return next((s for s in reversed(sessions) if _best_set(s, formula) is not None), None)


def _percent(increase: float, current: float) -> float:
    return round(increase / current * 100, 1) if current else 0.0


def generate_suggestions(
    history: Iterable[SetRecord],
    trend: ProgressTrend,
    weeks: int,
    weight_increment: float,
    formula: OneRepMaxFormula | str = OneRepMaxFormula.BRZYCKI,
    rep_ceiling: int = DEFAULT_MAX_REPS,
) -> list[OverloadSuggestion]:
    """
    Ranked ways to progress from the latest session's best set, most important first.

    - improving, or no progress for 2+ weeks: add one weight increment
    - below the rep ceiling and plateauing (or 1+ week stalled): one more rep
    - fewer than 5 sets and plateauing (or 3+ weeks stalled): one more set
    - declining: deload to 85 % of the current weight

    No history gives no suggestions; a starting weight is not guessed.
    """
    latest = _latest_scored_session(group_sessions(history), formula)
    if latest is None:
        return []

    best = _best_set(latest, formula)
    weight, reps = float(best.weight), int(best.reps)
    working_sets = sum(
        1 for r in latest if r.completed and r.weight is not None and r.reps is not None
    )
    suggestions: list[OverloadSuggestion] = []

    if trend == ProgressTrend.IMPROVING or weeks >= SUGGEST_WEIGHT_AFTER_WEEKS:
        improving = trend == ProgressTrend.IMPROVING
        suggestions.append(
            OverloadSuggestion(
                kind=SuggestionType.WEIGHT,
                current_value=weight,
                suggested_value=weight + weight_increment,
                increase=weight_increment,
                percentage=_percent(weight_increment, weight),
                reasoning=(
                    "You've been consistently improving. Time to increase the weight."
                    if improving
                    else f"It's been {weeks} weeks since your last progress. Try a small weight increase."
                ),
                confidence=SuggestionConfidence.HIGH if improving else SuggestionConfidence.MEDIUM,
                priority=1,
            )
        )

    if reps < rep_ceiling and (trend == ProgressTrend.PLATEAUING or weeks >= SUGGEST_REPS_AFTER_WEEKS):
        suggestions.append(
            OverloadSuggestion(
                kind=SuggestionType.REPS,
                current_value=reps,
                suggested_value=reps + 1,
                increase=1,
                percentage=_percent(1, reps),
                reasoning="Add one more rep to each set before increasing the weight.",
                confidence=SuggestionConfidence.HIGH,
                priority=2,
            )
        )

    if working_sets < SUGGEST_SETS_MAX and (
        trend == ProgressTrend.PLATEAUING or weeks >= SUGGEST_SETS_AFTER_WEEKS
    ):
        suggestions.append(
            OverloadSuggestion(
                kind=SuggestionType.SETS,
                current_value=working_sets,
                suggested_value=working_sets + 1,
                increase=1,
                percentage=_percent(1, working_sets),
                reasoning="Add an extra set to increase training volume.",
                confidence=SuggestionConfidence.MEDIUM,
                priority=3,
            )
        )

    if trend == ProgressTrend.DECLINING:
        deload = round(weight * DELOAD_FACTOR, 2)
        suggestions.append(
            OverloadSuggestion(
                kind=SuggestionType.WEIGHT,
                current_value=weight,
                suggested_value=deload,
                increase=round(deload - weight, 2),
                percentage=round((DELOAD_FACTOR - 1) * 100, 1),
                reasoning="Performance has been declining. Take a deload week at 85% of your current weight.",
                confidence=SuggestionConfidence.HIGH,
                priority=1,
            )
        )

    # Stable: equal priorities keep the order above
    return sorted(suggestions, key=lambda s: s.priority)


def analyze_progress(
    history: Iterable[SetRecord],
    formula: OneRepMaxFormula | str = OneRepMaxFormula.BRZYCKI,
    partial_weight: float = 0.5,
    weight_increment: float = DEFAULT_WEIGHT_INCREMENT,
    rep_ceiling: int = DEFAULT_MAX_REPS,
) -> ProgressAnalysis:
    """
    Current best, trend, ranked suggestions and readiness for one exercise's
    history. The RPE trend is reported alongside but does not change readiness.
    """
    records = _chronological(history)
    sessions = group_sessions(records)
    trend = determine_trend(records, formula, partial_weight)
    weeks = weeks_since_progress(records, formula)
    rpe_trend, _ = analyze_rpe_trend(records)

    current_best = CurrentBest()
    latest = _latest_scored_session(sessions, formula)
    if latest is not None:
        best = _best_set(latest, formula)
        current_best = CurrentBest(
            weight=float(best.weight),
            reps=int(best.reps),
            volume=round(_session_volume(latest, partial_weight), 2),
            one_rep_max=round(estimate_one_rep_max(float(best.weight), int(best.reps), formula), 2),
        )

    ready = (
        trend == ProgressTrend.IMPROVING
        or (trend == ProgressTrend.PLATEAUING and weeks >= 1)
        or (trend == ProgressTrend.INSUFFICIENT_DATA and latest is not None)
    )

    return ProgressAnalysis(
        current_best=current_best,
        trend=trend,
        weeks_since_progress=weeks,
        rpe_trend=rpe_trend,
        ready_for_progression=ready,
        sessions_analyzed=len(sessions),
        suggestions=generate_suggestions(records, trend, weeks, weight_increment, formula, rep_ceiling),
    )

#!/usr/bin/env python3
"""
Analysis context - condensed workout statistics handed to the coaching analyzer

Labels are machine codes; turning them into user-facing text is the
consumer's job.
"""
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Sequence

from ..config.logging import get_logger
from ..config.settings import get_settings
from ..storage.model import WorkoutData, WorkoutRecord, Lap
from .helper import coefficient_of_variation, format_pace, format_duration
from .track import lap_record_windows


logger = get_logger(__name__)

NO_DATA = "no_data"
INSUFFICIENT_LAPS = "insufficient_laps"

# (upper CV bound in percent, label), checked in order
HEART_RATE_VARIATION_CLASSES = (
    (5, "very_stable"),
    (10, "stable"),
    (15, "moderate"),
)
PACE_CONSISTENCY_CLASSES = (
    (3, "very_consistent"),
    (6, "consistent"),
    (10, "moderate"),
)
VARIABLE = "variable"


@dataclass
class VariationResult:
    """Classified coefficient of variation"""
    label: str
    cv: Optional[float] = None
    sample_size: int = 0


@dataclass
class LapExcerpt:
    """Lap line for the analysis prompt"""
    lap_number: int
    distance_km: float
    duration: str
    pace: Optional[str]
    avg_heart_rate: Optional[int]
    record_count: int


@dataclass
class AnalysisContext:
    """Everything the analyzer needs about one workout"""
    summary: Dict[str, Any]
    laps: List[LapExcerpt] = field(default_factory=list)
    total_laps: int = 0
    heart_rate_variation: VariationResult = field(default_factory=lambda: VariationResult(NO_DATA))
    pace_consistency: VariationResult = field(default_factory=lambda: VariationResult(INSUFFICIENT_LAPS))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _classify(cv: float, classes) -> str:
    for bound, label in classes:
        if cv < bound:
            return label
    return VARIABLE


def heart_rate_variation(records: Sequence[WorkoutRecord]) -> VariationResult:
    """Heart-rate CV over records with a positive heart rate"""
    heart_rates = [r.heart_rate for r in records if r.heart_rate and r.heart_rate > 0]
    cv = coefficient_of_variation(heart_rates)
    if cv is None:
        return VariationResult(NO_DATA)
    return VariationResult(_classify(cv, HEART_RATE_VARIATION_CLASSES), cv, len(heart_rates))


def pace_consistency(laps: Sequence[Lap]) -> VariationResult:
    """CV of lap average speeds; needs at least two laps with a positive speed"""
    speeds = [lap.avg_speed for lap in laps if lap.avg_speed and lap.avg_speed > 0]
    if len(speeds) < 2:
        return VariationResult(INSUFFICIENT_LAPS, sample_size=len(speeds))
    cv = coefficient_of_variation(speeds)
    return VariationResult(_classify(cv, PACE_CONSISTENCY_CLASSES), cv, len(speeds))


def build_analysis_context(workout: WorkoutData, max_laps: Optional[int] = None) -> AnalysisContext:
    """
    Condense a workout for the coaching analyzer.

    Args:
        workout: Parsed workout
        max_laps: Laps to include (defaults to the analysis_max_laps setting)

    Returns:
        AnalysisContext with the summary, the first laps and variation statistics
    """
    if max_laps is None:
        max_laps = get_settings().analysis_max_laps

    windows = lap_record_windows(workout)
    excerpts = [
        LapExcerpt(
            lap_number=i + 1,
            distance_km=round(lap.total_distance / 1000, 2),
            duration=format_duration(lap.total_elapsed_time),
            pace=format_pace(lap.avg_speed),
            avg_heart_rate=lap.avg_heart_rate,
            record_count=len(windows[i]),
        )
        for i, lap in enumerate(workout.laps[:max_laps])
    ]

    context = AnalysisContext(
        summary=workout.summary.model_dump(exclude_none=True),
        laps=excerpts,
        total_laps=len(workout.laps),
        heart_rate_variation=heart_rate_variation(workout.records),
        # Consistency is measured over every lap, not only the excerpt
        pace_consistency=pace_consistency(workout.laps),
    )
    logger.debug(
        "Analysis context built",
        workout_id=workout.id,
        laps=len(excerpts),
        heart_rate_variation=context.heart_rate_variation.label,
        pace_consistency=context.pace_consistency.label,
    )
    return context

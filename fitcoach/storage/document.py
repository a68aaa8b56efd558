#!/usr/bin/env python3
"""
Workout document helpers for the persistence layer
"""
from typing import Any, Dict, Optional

from .model import WorkoutData


def avg_pace_min_per_km(avg_speed: Optional[float]) -> Optional[float]:
    """Average pace in minutes per km from a speed in m/s"""
    if not avg_speed:
        return None
    return 1000 / avg_speed / 60


def summary_columns(workout: WorkoutData) -> Dict[str, Any]:
    """
    Indexed scalar columns stored next to the full workout document.

    total_time is the rounded elapsed time in seconds and avg_pace is in
    minutes per km.
    """
    summary = workout.summary
    return {
        "id": workout.id,
        "file_name": workout.file_name,
        "sport": summary.sport,
        "start_time": summary.start_time,
        "total_distance": summary.total_distance,
        "total_time": round(summary.total_elapsed_time),
        "avg_heart_rate": summary.avg_heart_rate,
        "max_heart_rate": summary.max_heart_rate,
        "avg_pace": avg_pace_min_per_km(summary.avg_speed),
        "total_calories": summary.total_calories,
        "total_ascent": summary.total_ascent,
        "total_descent": summary.total_descent,
        "avg_power": summary.avg_power,
    }

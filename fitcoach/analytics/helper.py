#!/usr/bin/env python3
"""
Analytics Helper Methods - statistics and pace formatting
"""
from typing import Iterable, Optional

import numpy as np


def coefficient_of_variation(values: Iterable[float]) -> Optional[float]:
    """Population coefficient of variation in percent, or None without data"""
    arr = np.asarray([v for v in values if v is not None], dtype=float)
    if arr.size == 0:
        return None
    mean = arr.mean()
    if mean == 0:
        return None
    return float(arr.std() / mean * 100)


def speed_to_pace(speed: Optional[float]) -> Optional[float]:
    """Convert speed in m/s to pace in seconds per km"""
    if not speed or speed <= 0:
        return None
    return 1000.0 / speed


def seconds_to_mmss(seconds: float) -> str:
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"


def format_pace(speed: Optional[float]) -> Optional[str]:
    """Format a speed in m/s as MM:SS per km"""
    pace = speed_to_pace(speed)
    if pace is None:
        return None
    return seconds_to_mmss(pace)


def format_duration(seconds: float) -> str:
    """Format seconds as H:MM:SS, or M:SS under an hour"""
    hours = int(seconds // 3600)
    if hours:
        return f"{hours}:{seconds_to_mmss(seconds % 3600).zfill(5)}"
    return seconds_to_mmss(seconds)

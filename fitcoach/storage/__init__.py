#!/usr/bin/env python3
"""
Storage Module - Normalized workout models and persistence helpers
"""

from .model import (
    WorkoutBaseModel,
    WorkoutSummary,
    Lap,
    WorkoutRecord,
    DeviceInfo,
    WorkoutData,
)
from .document import summary_columns, avg_pace_min_per_km

__all__ = [
    'WorkoutBaseModel',
    'WorkoutSummary',
    'Lap',
    'WorkoutRecord',
    'DeviceInfo',
    'WorkoutData',
    'summary_columns',
    'avg_pace_min_per_km',
]

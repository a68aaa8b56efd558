#!/usr/bin/env python3
"""
Track helpers for map and chart rendering
"""
from bisect import bisect_left
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from dateutil.parser import isoparse

from ..config.settings import get_settings
from ..storage.model import WorkoutData, WorkoutRecord


@dataclass(frozen=True)
class TrackBounds:
    """Bounding box of a GPS track"""
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.min_lat + self.max_lat) / 2, (self.min_lon + self.max_lon) / 2)


def gps_points(records: Sequence[WorkoutRecord]) -> List[WorkoutRecord]:
    """Records with a usable position; missing and exactly-zero coordinates are dropped"""
    return [r for r in records if r.latitude and r.longitude]


def track_bounds(records: Sequence[WorkoutRecord]) -> Optional[TrackBounds]:
    points = gps_points(records)
    if not points:
        return None
    lats = [r.latitude for r in points]
    lons = [r.longitude for r in points]
    return TrackBounds(min(lats), max(lats), min(lons), max(lons))


def elevation_gain(records: Sequence[WorkoutRecord]) -> float:
    """Sum of positive altitude changes between consecutive GPS points"""
    gain = 0.0
    points = gps_points(records)
    for prev, curr in zip(points, points[1:]):
        if prev.altitude and curr.altitude and curr.altitude > prev.altitude:
            gain += curr.altitude - prev.altitude
    return gain


def downsample(records: Sequence[Any], max_points: Optional[int] = None) -> List[Any]:
    """Keep every n-th item so that roughly max_points remain (defaults to the chart_max_points setting)"""
    if max_points is None:
        max_points = get_settings().chart_max_points
    step = max(1, len(records) // max_points)
    return list(records[::step])


def chart_series(records: Sequence[WorkoutRecord], max_points: Optional[int] = None) -> List[Dict[str, Any]]:
    """Downsampled chart rows with speed in km/h"""
    return [
        {
            'time': index,
            'heart_rate': record.heart_rate,
            'speed': record.speed * 3.6 if record.speed else None,
            'altitude': record.altitude,
            'cadence': record.cadence,
            'power': record.power,
        }
        for index, record in enumerate(downsample(records, max_points))
    ]


def lap_record_windows(workout: WorkoutData) -> List[List[WorkoutRecord]]:
    """
    Records belonging to each lap.

    A lap covers [start_time, start_time + total_elapsed_time). Records are
    matched on their timestamps so out-of-order samples still land in the
    right lap.
    """
    stamps = [isoparse(r.timestamp) for r in workout.records]
    order = sorted(range(len(stamps)), key=stamps.__getitem__)
    sorted_stamps = [stamps[i] for i in order]

    windows = []
    for lap in workout.laps:
        start = isoparse(lap.start_time)
        end = start + timedelta(seconds=lap.total_elapsed_time)
        lo = bisect_left(sorted_stamps, start)
        hi = bisect_left(sorted_stamps, end)
        windows.append([workout.records[i] for i in order[lo:hi]])
    return windows

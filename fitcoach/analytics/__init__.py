#!/usr/bin/env python3
"""
Analytics
"""

from .helper import (
    coefficient_of_variation, speed_to_pace, format_pace, format_duration,
)
from .track import (
    TrackBounds, gps_points, track_bounds, elevation_gain,
    downsample, chart_series, lap_record_windows,
)
from .context import (
    AnalysisContext, LapExcerpt, VariationResult,
    heart_rate_variation, pace_consistency, build_analysis_context,
)

__all__ = [
    # Statistics and formatting
    'coefficient_of_variation', 'speed_to_pace', 'format_pace', 'format_duration',

    # Track helpers
    'TrackBounds', 'gps_points', 'track_bounds', 'elevation_gain',
    'downsample', 'chart_series', 'lap_record_windows',

    # Analysis context
    'AnalysisContext', 'LapExcerpt', 'VariationResult',
    'heart_rate_variation', 'pace_consistency', 'build_analysis_context',
]

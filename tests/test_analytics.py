"""
Tests for analysis context, track and pace helpers.
"""

import pytest

from fitcoach.analytics import (
    build_analysis_context,
    chart_series,
    coefficient_of_variation,
    downsample,
    elevation_gain,
    format_duration,
    format_pace,
    gps_points,
    heart_rate_variation,
    lap_record_windows,
    pace_consistency,
    speed_to_pace,
    track_bounds,
)
from fitcoach.storage.model import Lap, WorkoutData, WorkoutRecord, WorkoutSummary


def ts(second):
    return f"2024-05-01T06:{30 + second // 60:02d}:{second % 60:02d}.000Z"


def make_records(heart_rates=None, count=10, **values):
    heart_rates = heart_rates or [None] * count
    return [WorkoutRecord(timestamp=ts(i), heart_rate=hr, **values) for i, hr in enumerate(heart_rates)]


def make_laps(speeds, seconds=60):
    return [
        Lap(start_time=ts(i * seconds), total_elapsed_time=seconds, total_distance=300, avg_speed=speed)
        for i, speed in enumerate(speeds)
    ]


def make_workout(records=(), laps=()):
    return WorkoutData(
        id="w1",
        file_name="run.fit",
        summary=WorkoutSummary(start_time=ts(0), sport="running", total_distance=3000),
        laps=list(laps),
        records=list(records),
    )


class TestHelpers:
    """Test statistics and pace formatting"""

    def test_coefficient_of_variation(self):
        assert coefficient_of_variation([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(40.0)

    def test_coefficient_of_variation_empty(self):
        assert coefficient_of_variation([]) is None

    def test_speed_to_pace(self):
        assert speed_to_pace(4.0) == pytest.approx(250.0)
        assert speed_to_pace(0) is None
        assert speed_to_pace(None) is None

    def test_format_pace(self):
        assert format_pace(2.5) == "6:40"
        assert format_pace(4.0) == "4:10"
        assert format_pace(None) is None

    def test_format_duration(self):
        assert format_duration(125) == "2:05"
        assert format_duration(3725) == "1:02:05"


class TestHeartRateVariation:
    """Test heart-rate variation labels"""

    def test_no_data(self):
        result = heart_rate_variation(make_records([None, 0, None]))

        assert result.label == "no_data"
        assert result.cv is None

    def test_constant_heart_rate(self):
        result = heart_rate_variation(make_records([150] * 5))

        assert result.label == "very_stable"
        assert result.cv == pytest.approx(0.0)
        assert result.sample_size == 5

    def test_zero_heart_rate_ignored(self):
        result = heart_rate_variation(make_records([150, 0, 150, None]))
        assert result.sample_size == 2

    @pytest.mark.parametrize("heart_rates,label", [
        ([100, 108], "very_stable"),   # cv ~3.8%
        ([100, 115], "stable"),        # cv ~7.0%
        ([100, 125], "moderate"),      # cv ~11.1%
        ([100, 140], "variable"),      # cv ~16.7%
    ])
    def test_labels(self, heart_rates, label):
        assert heart_rate_variation(make_records(heart_rates)).label == label


class TestPaceConsistency:
    """Test lap pace consistency labels"""

    def test_insufficient_laps(self):
        assert pace_consistency(make_laps([3.0])).label == "insufficient_laps"
        assert pace_consistency(make_laps([3.0, None])).label == "insufficient_laps"

    @pytest.mark.parametrize("speeds,label", [
        ([3.0, 3.1], "very_consistent"),   # cv ~1.6%
        ([3.0, 3.3], "consistent"),        # cv ~4.8%
        ([3.0, 3.5], "moderate"),          # cv ~7.7%
        ([3.0, 4.0], "variable"),          # cv ~14.3%
    ])
    def test_labels(self, speeds, label):
        assert pace_consistency(make_laps(speeds)).label == label


class TestTrack:
    """Test GPS and chart helpers"""

    def test_gps_points_filter(self):
        records = [
            WorkoutRecord(timestamp=ts(0), latitude=35.0, longitude=139.0),
            WorkoutRecord(timestamp=ts(1), latitude=0.0, longitude=139.0),
            WorkoutRecord(timestamp=ts(2), latitude=35.0),
            WorkoutRecord(timestamp=ts(3), latitude=35.1, longitude=139.1),
        ]
        assert [r.timestamp for r in gps_points(records)] == [ts(0), ts(3)]

    def test_track_bounds(self):
        records = [
            WorkoutRecord(timestamp=ts(0), latitude=35.0, longitude=139.0),
            WorkoutRecord(timestamp=ts(1), latitude=35.2, longitude=139.4),
            WorkoutRecord(timestamp=ts(2), latitude=0.0, longitude=0.0),
        ]
        bounds = track_bounds(records)

        assert bounds.min_lat == 35.0
        assert bounds.max_lon == 139.4
        assert bounds.center == pytest.approx((35.1, 139.2))

    def test_track_bounds_without_gps(self):
        assert track_bounds(make_records(count=3)) is None

    def test_elevation_gain(self):
        records = [
            WorkoutRecord(timestamp=ts(i), latitude=35.0, longitude=139.0, altitude=alt)
            for i, alt in enumerate([10.0, 15.0, 12.0, 20.0])
        ]
        assert elevation_gain(records) == pytest.approx(13.0)

    def test_downsample(self):
        assert len(downsample(list(range(1000)), 200)) == 200
        assert len(downsample(list(range(450)), 200)) == 225
        assert downsample(list(range(50)), 200) == list(range(50))

    def test_chart_series(self):
        records = make_records([140] * 4, speed=2.5)
        series = chart_series(records, max_points=2)

        assert [row["time"] for row in series] == [0, 1]
        assert series[0]["speed"] == pytest.approx(9.0)
        assert series[0]["heart_rate"] == 140

    def test_chart_points_from_settings(self, clean_env):
        clean_env.setenv("FIT_CHART_MAX_POINTS", "5")
        records = make_records([140] * 50)

        assert len(chart_series(records)) == 5
        assert len(downsample(records)) == 5

    def test_chart_points_default(self, clean_env):
        records = make_records([140] * 1000)
        assert len(chart_series(records)) == 200

    def test_lap_record_windows(self):
        workout = make_workout(records=make_records(count=120), laps=make_laps([3.0, 3.0]))
        windows = lap_record_windows(workout)

        assert [len(w) for w in windows] == [60, 60]
        assert windows[1][0].timestamp == ts(60)


class TestAnalysisContext:
    """Test analysis context construction"""

    def test_context(self):
        workout = make_workout(
            records=make_records([150] * 120),
            laps=make_laps([2.5, 2.5]),
        )
        context = build_analysis_context(workout, max_laps=10)

        assert context.total_laps == 2
        assert len(context.laps) == 2
        assert context.laps[0].lap_number == 1
        assert context.laps[0].record_count == 60
        assert context.laps[0].pace == "6:40"
        assert context.laps[0].duration == "1:00"
        assert context.laps[0].distance_km == 0.3
        assert context.heart_rate_variation.label == "very_stable"
        assert context.pace_consistency.label == "very_consistent"
        assert context.summary["sport"] == "running"

    def test_lap_limit(self):
        workout = make_workout(laps=make_laps([3.0] * 15, seconds=10))
        context = build_analysis_context(workout, max_laps=10)

        assert len(context.laps) == 10
        assert context.total_laps == 15

    def test_default_lap_limit_from_settings(self, clean_env):
        clean_env.setenv("FIT_ANALYSIS_MAX_LAPS", "3")
        workout = make_workout(laps=make_laps([3.0] * 5, seconds=10))

        assert len(build_analysis_context(workout).laps) == 3

    def test_to_dict(self):
        context = build_analysis_context(make_workout(), max_laps=10)
        data = context.to_dict()

        assert data["heart_rate_variation"]["label"] == "no_data"
        assert data["pace_consistency"]["label"] == "insufficient_laps"
        assert data["laps"] == []

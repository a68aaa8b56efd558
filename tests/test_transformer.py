"""
Tests for the semantic transformer.
"""

from datetime import datetime, timezone

import pytest

from fitcoach.exceptions import MissingSessionError
from fitcoach.processors.decoder import DecodedActivity
from fitcoach.processors.interface import FitMessage, MessageType
from fitcoach.processors.transformer import (
    WorkoutTransformer,
    format_timestamp,
    timer_corrected_speed,
)


NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def session(**fields):
    return FitMessage(MessageType.SESSION, fields=fields)


def lap(**fields):
    return FitMessage(MessageType.LAP, fields=fields)


def record(**fields):
    return FitMessage(MessageType.RECORD, fields=fields)


def device_info(**fields):
    return FitMessage(MessageType.DEVICE_INFO, fields=fields)


@pytest.fixture
def transformer():
    return WorkoutTransformer(now=NOW, id_factory=lambda: "workout-1")


class TestTimerCorrectedSpeed:
    """Test the moving-time average speed law"""

    def test_distance_over_timer(self):
        assert timer_corrected_speed(10000, 3000, 3.0) == pytest.approx(10000 / 3000)

    def test_zero_timer_keeps_raw(self):
        assert timer_corrected_speed(10000, 0, 3.1) == 3.1

    def test_zero_distance_keeps_raw(self):
        assert timer_corrected_speed(0, 3000, None) is None


class TestFormatTimestamp:
    """Test timestamp formatting"""

    def test_millisecond_precision(self):
        value = datetime(2024, 5, 1, 6, 30, 0, 250000, tzinfo=timezone.utc)
        assert format_timestamp(value, NOW) == "2024-05-01T06:30:00.250Z"

    def test_missing_uses_default(self):
        assert format_timestamp(None, NOW) == "2024-06-01T12:00:00.000Z"


class TestSessionTransform:
    """Test WorkoutSummary construction"""

    def test_missing_session(self, transformer):
        with pytest.raises(MissingSessionError):
            transformer.transform(DecodedActivity(), "run.fit")

    def test_timer_corrected_summary(self, transformer):
        summary = transformer.transform_session(session(
            total_elapsed_time=3600.0, total_timer_time=3000.0,
            total_distance=10000.0, avg_speed=2.778,
        ))

        assert summary.total_timer_time == 3000.0
        assert summary.avg_speed == pytest.approx(10000 / 3000)

    def test_timer_falls_back_to_elapsed(self, transformer):
        summary = transformer.transform_session(session(total_elapsed_time=2000.0, total_distance=5000.0))

        assert summary.total_timer_time == 2000.0
        assert summary.avg_speed == pytest.approx(2.5)

    def test_zero_timer_is_kept(self, transformer):
        summary = transformer.transform_session(session(
            total_elapsed_time=2000.0, total_timer_time=0.0, total_distance=5000.0, avg_speed=2.4,
        ))

        assert summary.total_timer_time == 0.0
        assert summary.avg_speed == 2.4

    def test_defaults(self, transformer):
        summary = transformer.transform_session(session())

        assert summary.sport == "generic"
        assert summary.start_time == "2024-06-01T12:00:00.000Z"
        assert summary.total_elapsed_time == 0
        assert summary.total_timer_time == 0
        assert summary.total_distance == 0
        assert summary.avg_speed is None
        assert summary.avg_heart_rate is None
        assert summary.total_calories is None

    def test_unknown_sport_code_stringified(self, transformer):
        summary = transformer.transform_session(session(sport=200))
        assert summary.sport == "200"

    def test_timer_exceeding_elapsed_is_preserved(self, transformer):
        summary = transformer.transform_session(session(total_elapsed_time=100.0, total_timer_time=120.0))

        assert summary.total_elapsed_time == 100.0
        assert summary.total_timer_time == 120.0

    def test_array_values_use_first_element(self, transformer):
        summary = transformer.transform_session(session(avg_heart_rate=(None, 150)))
        assert summary.avg_heart_rate == 150


class TestLapTransform:
    """Test Lap construction"""

    def test_lap_speed_and_timer(self, transformer):
        result = transformer.transform_lap(lap(
            start_time=datetime(2024, 5, 1, 6, 30, tzinfo=timezone.utc),
            total_elapsed_time=330.0, total_timer_time=300.0, total_distance=1000.0, avg_speed=3.0,
        ))

        assert result.start_time == "2024-05-01T06:30:00.000Z"
        assert result.total_timer_time == 300.0
        assert result.avg_speed == pytest.approx(1000 / 300)

    def test_lap_without_distance(self, transformer):
        result = transformer.transform_lap(lap(total_elapsed_time=60.0, avg_speed=1.5))

        assert result.total_timer_time == 60.0
        assert result.avg_speed == 1.5


class TestRecordTransform:
    """Test WorkoutRecord construction"""

    def test_record_fields(self, transformer):
        result = transformer.transform_record(record(
            timestamp=datetime(2024, 5, 1, 6, 30, 5, tzinfo=timezone.utc),
            heart_rate=150, speed=3.2, distance=15.0, altitude=40.0,
            cadence=88, power=250, temperature=21,
            position_lat=35.0, position_long=139.0,
        ))

        assert result.timestamp == "2024-05-01T06:30:05.000Z"
        assert result.heart_rate == 150
        assert result.latitude == 35.0
        assert result.longitude == 139.0
        assert result.temperature == 21

    def test_zero_coordinates_preserved(self, transformer):
        result = transformer.transform_record(record(position_lat=0.0, position_long=0.0))

        assert result.latitude == 0.0
        assert result.longitude == 0.0

    def test_missing_timestamp_uses_now(self, transformer):
        result = transformer.transform_record(record(heart_rate=120))
        assert result.timestamp == "2024-06-01T12:00:00.000Z"


class TestDeviceInfoTransform:
    """Test DeviceInfo construction"""

    def test_known_product_name(self, transformer):
        result = transformer.transform_device_info(device_info(
            manufacturer="garmin", product=3113, serial_number=3950000001,
        ))

        assert result.manufacturer == "garmin"
        assert result.product == "fr945"
        assert result.serial_number == "3950000001"

    def test_unknown_product_stringified(self, transformer):
        result = transformer.transform_device_info(device_info(manufacturer="wahoo_fitness", product=12))
        assert result.product == "12"

    def test_unknown_manufacturer_code(self, transformer):
        result = transformer.transform_device_info(device_info(manufacturer=9999))
        assert result.manufacturer == "9999"
        assert result.product is None


class TestTransform:
    """Test the full transform"""

    def test_workout_identity_and_name(self, transformer):
        workout = transformer.transform(
            DecodedActivity(session=session(total_distance=1000.0)), "morning run.fit"
        )

        assert workout.id == "workout-1"
        assert workout.file_name == "morning run.fit"
        assert workout.laps == []
        assert workout.records == []
        assert workout.device_info is None

    def test_default_ids_are_unique(self):
        activity = DecodedActivity(session=session())
        first = WorkoutTransformer().transform(activity, "a.fit")
        second = WorkoutTransformer().transform(activity, "a.fit")

        assert first.id != second.id

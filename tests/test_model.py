"""
Tests for the normalized workout models.
"""

import json

import pytest
from pydantic import ValidationError

from fitcoach.storage.model import DeviceInfo, Lap, WorkoutData, WorkoutRecord, WorkoutSummary


def make_workout(**overrides):
    data = dict(
        id="abc",
        file_name="run.fit",
        summary=WorkoutSummary(start_time="2024-05-01T06:30:00.000Z", total_distance=5000, avg_speed=2.5),
        laps=[Lap(start_time="2024-05-01T06:30:00.000Z", total_distance=1000, total_timer_time=300)],
        records=[WorkoutRecord(timestamp="2024-05-01T06:30:00.000Z", heart_rate=140)],
        device_info=DeviceInfo(manufacturer="garmin", product="fr945", serial_number="123"),
    )
    data.update(overrides)
    return WorkoutData(**data)


class TestWorkoutSummary:
    """Test WorkoutSummary model"""

    def test_defaults(self):
        summary = WorkoutSummary(start_time="2024-05-01T06:30:00.000Z")

        assert summary.sport == "generic"
        assert summary.total_elapsed_time == 0
        assert summary.total_timer_time == 0
        assert summary.total_distance == 0
        assert summary.max_power is None

    def test_empty_sport_defaults_to_generic(self):
        summary = WorkoutSummary(start_time="2024-05-01T06:30:00.000Z", sport="")
        assert summary.sport == "generic"

    def test_immutable(self):
        summary = WorkoutSummary(start_time="2024-05-01T06:30:00.000Z")
        with pytest.raises(ValidationError):
            summary.sport = "running"

    def test_negative_distance_rejected(self):
        with pytest.raises(ValidationError):
            WorkoutSummary(start_time="2024-05-01T06:30:00.000Z", total_distance=-1)

    def test_populate_by_alias(self):
        summary = WorkoutSummary(startTime="2024-05-01T06:30:00.000Z", totalTimerTime=120)
        assert summary.total_timer_time == 120


class TestWorkoutDocument:
    """Test camelCase transport document"""

    def test_camel_case_keys(self):
        document = make_workout().to_document()

        assert document["fileName"] == "run.fit"
        assert document["summary"]["startTime"] == "2024-05-01T06:30:00.000Z"
        assert document["summary"]["totalTimerTime"] == 0
        assert document["laps"][0]["totalTimerTime"] == 300
        assert document["records"][0]["heartRate"] == 140
        assert document["deviceInfo"]["serialNumber"] == "123"

    def test_absent_fields_omitted(self):
        document = make_workout(device_info=None).to_document()

        assert "deviceInfo" not in document
        assert "avgHeartRate" not in document["summary"]
        assert "subSport" not in document["summary"]
        assert "speed" not in document["records"][0]

    def test_to_json(self):
        payload = json.loads(make_workout().to_json())

        assert payload["id"] == "abc"
        assert payload["summary"]["avgSpeed"] == 2.5

    def test_round_trip_from_document(self):
        workout = make_workout()
        assert WorkoutData.from_document(workout.to_document()) == workout

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            WorkoutRecord(timestamp="2024-05-01T06:30:00.000Z", position_lat=1.0)

#!/usr/bin/env python3
"""
Pydantic Data Models for Normalized Workouts

The models are immutable once built. Serialization uses camelCase keys and
omits absent optional fields, which is the transport document consumed by
the web client and the persistence layer.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..const import DEFAULT_SPORT


class WorkoutBaseModel(BaseModel):
    """Shared configuration for workout models"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Allow both field name and alias
        frozen=True,
        extra="forbid",
    )

    def to_document(self) -> Dict[str, Any]:
        """JSON-compatible dict with camelCase keys and no absent fields"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, **kwargs) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, **kwargs)


class WorkoutSummary(WorkoutBaseModel):
    """Summary of the whole activity, built from the first session message"""

    sport: str = Field(DEFAULT_SPORT, description="Sport name")
    sub_sport: Optional[str] = Field(None, description="Sub-sport category")
    start_time: str = Field(..., description="Activity start time, ISO-8601 UTC")

    # Duration and distance
    total_elapsed_time: float = Field(0, ge=0, description="Total elapsed time in seconds")
    total_timer_time: float = Field(0, ge=0, description="Total timer time in seconds")
    total_distance: float = Field(0, ge=0, description="Total distance in meters")
    total_calories: Optional[int] = Field(None, ge=0, description="Total calories in kcal")

    # Heart rate
    avg_heart_rate: Optional[int] = Field(None, ge=0, description="Average heart rate in bpm")
    max_heart_rate: Optional[int] = Field(None, ge=0, description="Maximum heart rate in bpm")

    # Speed
    avg_speed: Optional[float] = Field(None, ge=0, description="Average speed in m/s")
    max_speed: Optional[float] = Field(None, ge=0, description="Maximum speed in m/s")

    # Cadence and power
    avg_cadence: Optional[int] = Field(None, ge=0, description="Average cadence in rpm")
    max_cadence: Optional[int] = Field(None, ge=0, description="Maximum cadence in rpm")
    avg_power: Optional[int] = Field(None, ge=0, description="Average power in watts")
    max_power: Optional[int] = Field(None, ge=0, description="Maximum power in watts")

    # Elevation
    total_ascent: Optional[int] = Field(None, ge=0, description="Total ascent in meters")
    total_descent: Optional[int] = Field(None, ge=0, description="Total descent in meters")
    min_altitude: Optional[float] = Field(None, description="Minimum altitude in meters")
    max_altitude: Optional[float] = Field(None, description="Maximum altitude in meters")

    @field_validator("sport")
    @classmethod
    def validate_sport(cls, v: str) -> str:
        return v or DEFAULT_SPORT


class Lap(WorkoutBaseModel):
    """Lap data model"""

    start_time: str = Field(..., description="Lap start time, ISO-8601 UTC")
    total_elapsed_time: float = Field(0, ge=0, description="Lap elapsed time in seconds")
    total_timer_time: float = Field(0, ge=0, description="Lap timer time in seconds")
    total_distance: float = Field(0, ge=0, description="Lap distance in meters")
    avg_heart_rate: Optional[int] = Field(None, ge=0, description="Average heart rate in bpm")
    max_heart_rate: Optional[int] = Field(None, ge=0, description="Maximum heart rate in bpm")
    avg_speed: Optional[float] = Field(None, ge=0, description="Average speed in m/s")
    max_speed: Optional[float] = Field(None, ge=0, description="Maximum speed in m/s")
    avg_cadence: Optional[int] = Field(None, ge=0, description="Average cadence in rpm")
    avg_power: Optional[int] = Field(None, ge=0, description="Average power in watts")


class WorkoutRecord(WorkoutBaseModel):
    """
    Single time-series sample.

    Coordinates are kept as decoded; 0/0 positions are filtered downstream.
    """

    timestamp: str = Field(..., description="Sample time, ISO-8601 UTC")
    heart_rate: Optional[int] = Field(None, ge=0, description="Heart rate in bpm")
    speed: Optional[float] = Field(None, ge=0, description="Speed in m/s")
    distance: Optional[float] = Field(None, ge=0, description="Cumulative distance in meters")
    altitude: Optional[float] = Field(None, description="Altitude in meters")
    cadence: Optional[int] = Field(None, ge=0, description="Cadence in rpm")
    power: Optional[int] = Field(None, ge=0, description="Power in watts")
    temperature: Optional[int] = Field(None, description="Temperature in Celsius")
    latitude: Optional[float] = Field(None, description="Latitude in degrees")
    longitude: Optional[float] = Field(None, description="Longitude in degrees")


class DeviceInfo(WorkoutBaseModel):
    """Recording device metadata"""

    manufacturer: Optional[str] = Field(None, description="Manufacturer name")
    product: Optional[str] = Field(None, description="Product name or code")
    serial_number: Optional[str] = Field(None, description="Device serial number")


class WorkoutData(WorkoutBaseModel):
    """Normalized workout aggregate produced by one parse"""

    id: str = Field(..., description="Unique workout identifier")
    file_name: str = Field(..., description="Original upload filename")
    summary: WorkoutSummary
    laps: List[Lap] = Field(default_factory=list)
    records: List[WorkoutRecord] = Field(default_factory=list)
    device_info: Optional[DeviceInfo] = None

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "WorkoutData":
        """Rebuild a workout from its transport document"""
        return cls.model_validate(document)

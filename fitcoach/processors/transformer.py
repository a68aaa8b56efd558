#!/usr/bin/env python3
"""
Semantic Transformer - turns decoded FIT messages into the normalized workout model
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from ..config.logging import get_logger
from ..const import DEFAULT_SPORT
from ..exceptions import InvalidFieldValueError, MissingSessionError
from ..storage.model import WorkoutData, WorkoutSummary, Lap, WorkoutRecord, DeviceInfo
from .decoder import DecodedActivity
from .interface import FitMessage
from .profile import resolve_product


logger = get_logger(__name__)


def format_timestamp(value: Optional[datetime], default: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a Z suffix"""
    value = value if isinstance(value, datetime) else default
    return value.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def timer_corrected_speed(distance: float, timer_time: float, raw_avg_speed: Optional[float]) -> Optional[float]:
    """Average speed over moving time, or the recorded average when it cannot be derived"""
    if timer_time > 0 and distance > 0:
        return distance / timer_time
    return raw_avg_speed


def _scalar(value: Any) -> Any:
    """First valid element of an array field; raw byte blobs are treated as absent"""
    if isinstance(value, tuple):
        return next((v for v in value if v is not None), None)
    if isinstance(value, bytes):
        return None
    return value


def _as_int(value: Any) -> Optional[int]:
    value = _scalar(value)
    if value is None:
        return None
    return int(round(value))


def _as_float(value: Any) -> Optional[float]:
    value = _scalar(value)
    if value is None:
        return None
    return float(value)


def _as_str(value: Any) -> Optional[str]:
    value = _scalar(value)
    if value is None:
        return None
    return str(value)


class WorkoutTransformer:
    """Build a WorkoutData from the retained messages of one file"""

    def __init__(self, now: Optional[datetime] = None,
                 id_factory: Callable[[], str] = lambda: str(uuid.uuid4())):
        # One capture of "now" per parse, used for every missing timestamp
        self.now = now or datetime.now(timezone.utc)
        self.id_factory = id_factory

    def transform(self, activity: DecodedActivity, file_name: str) -> WorkoutData:
        if activity.session is None:
            raise MissingSessionError("No session data found in FIT file", {'file_name': file_name})

        try:
            summary = self.transform_session(activity.session)
            laps = [self.transform_lap(lap) for lap in activity.laps]
            records = [self.transform_record(record) for record in activity.records]
            device_info = self.transform_device_info(activity.device_info) if activity.device_info else None
        except ValidationError as e:
            raise InvalidFieldValueError(
                "Decoded values do not fit the workout model",
                {
                    'file_name': file_name,
                    'model': e.title,
                    'errors': [{'loc': err['loc'], 'msg': err['msg']} for err in e.errors()],
                },
            ) from e
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidFieldValueError(
                "Decoded field has an unexpected value type",
                {'file_name': file_name, 'error': str(e)},
            ) from e

        return WorkoutData(
            id=self.id_factory(),
            file_name=file_name,
            summary=summary,
            laps=laps,
            records=records,
            device_info=device_info,
        )

    def _resolve_times(self, message: FitMessage, kind: str) -> Dict[str, float]:
        elapsed = _as_float(message.fields.get('total_elapsed_time'))
        timer = _as_float(message.fields.get('total_timer_time'))
        distance = _as_float(message.fields.get('total_distance')) or 0.0

        if timer is not None and elapsed is not None and timer > elapsed:
            logger.warning(
                "Timer time exceeds elapsed time",
                message_type=kind, total_timer_time=timer, total_elapsed_time=elapsed,
            )

        elapsed = elapsed or 0.0
        if timer is None:
            timer = elapsed
        return {'total_elapsed_time': elapsed, 'total_timer_time': timer, 'total_distance': distance}

    def transform_session(self, session: FitMessage) -> WorkoutSummary:
        f = session.fields
        times = self._resolve_times(session, 'session')
        avg_speed = timer_corrected_speed(
            times['total_distance'], times['total_timer_time'], _as_float(f.get('avg_speed'))
        )

        logger.debug(
            "Session time calculation",
            total_elapsed_time=times['total_elapsed_time'],
            total_timer_time=times['total_timer_time'],
            pause_time=times['total_elapsed_time'] - times['total_timer_time'],
            total_distance=times['total_distance'],
            avg_speed_original=f.get('avg_speed'),
            avg_speed_recalculated=avg_speed,
        )

        return WorkoutSummary(
            sport=_as_str(f.get('sport')) or DEFAULT_SPORT,
            sub_sport=_as_str(f.get('sub_sport')),
            start_time=format_timestamp(f.get('start_time'), self.now),
            total_calories=_as_int(f.get('total_calories')),
            avg_heart_rate=_as_int(f.get('avg_heart_rate')),
            max_heart_rate=_as_int(f.get('max_heart_rate')),
            avg_speed=avg_speed,
            max_speed=_as_float(f.get('max_speed')),
            avg_cadence=_as_int(f.get('avg_cadence')),
            max_cadence=_as_int(f.get('max_cadence')),
            avg_power=_as_int(f.get('avg_power')),
            max_power=_as_int(f.get('max_power')),
            total_ascent=_as_int(f.get('total_ascent')),
            total_descent=_as_int(f.get('total_descent')),
            min_altitude=_as_float(f.get('min_altitude')),
            max_altitude=_as_float(f.get('max_altitude')),
            **times,
        )

    def transform_lap(self, lap: FitMessage) -> Lap:
        f = lap.fields
        times = self._resolve_times(lap, 'lap')
        return Lap(
            start_time=format_timestamp(f.get('start_time'), self.now),
            avg_heart_rate=_as_int(f.get('avg_heart_rate')),
            max_heart_rate=_as_int(f.get('max_heart_rate')),
            avg_speed=timer_corrected_speed(
                times['total_distance'], times['total_timer_time'], _as_float(f.get('avg_speed'))
            ),
            max_speed=_as_float(f.get('max_speed')),
            avg_cadence=_as_int(f.get('avg_cadence')),
            avg_power=_as_int(f.get('avg_power')),
            **times,
        )

    def transform_record(self, record: FitMessage) -> WorkoutRecord:
        f = record.fields
        return WorkoutRecord(
            timestamp=format_timestamp(f.get('timestamp'), self.now),
            heart_rate=_as_int(f.get('heart_rate')),
            speed=_as_float(f.get('speed')),
            distance=_as_float(f.get('distance')),
            altitude=_as_float(f.get('altitude')),
            cadence=_as_int(f.get('cadence')),
            power=_as_int(f.get('power')),
            temperature=_as_int(f.get('temperature')),
            latitude=_as_float(f.get('position_lat')),
            longitude=_as_float(f.get('position_long')),
        )

    def transform_device_info(self, device_info: FitMessage) -> DeviceInfo:
        f = device_info.fields
        manufacturer = _scalar(f.get('manufacturer'))
        product = _scalar(f.get('product'))
        if isinstance(product, int):
            product = resolve_product(manufacturer, product)
        return DeviceInfo(
            manufacturer=_as_str(manufacturer),
            product=_as_str(product) or _as_str(f.get('product_name')),
            serial_number=_as_str(f.get('serial_number')),
        )

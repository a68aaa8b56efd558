#!/usr/bin/env python3
"""
Message Decoder - maps raw data messages onto the FIT profile

Raw values are converted with the profile's scale, offset and units, enum
codes are resolved to names and date_time values become UTC datetimes.
Enhanced fields replace their 16-bit counterparts when present.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional

from ..config.logging import get_logger
from ..const import FIT_EPOCH_OFFSET, SEMICIRCLES_TO_DEGREES
from ..exceptions import UnknownMessageTypeError
from .interface import MessageType, FitMessage, RawMessage, ParseDiagnostics
from .profile import (
    FieldProfile, get_message_profile, resolve_enum, resolve_product,
    ENUMS, DATE_TIME, SEMICIRCLES,
)


logger = get_logger(__name__)

ENHANCED_PREFIX = 'enhanced_'


def convert_value(profile: FieldProfile, value: Any) -> Any:
    """Convert one raw field value to its profile representation"""
    if value is None:
        return None
    if isinstance(value, tuple):
        return tuple(convert_value(profile, v) for v in value)
    if isinstance(value, (bytes, str)):
        return value

    if profile.value_type == DATE_TIME:
        return datetime.fromtimestamp(value + FIT_EPOCH_OFFSET, tz=timezone.utc)
    if profile.value_type in ENUMS:
        return resolve_enum(profile.value_type, value)
    if profile.units == SEMICIRCLES:
        return value * SEMICIRCLES_TO_DEGREES
    if profile.scale != 1 or profile.offset != 0:
        return value / profile.scale - profile.offset
    return value


@dataclass
class DecodedActivity:
    """Messages retained from one file"""
    file_id: Optional[FitMessage] = None
    session: Optional[FitMessage] = None
    laps: List[FitMessage] = field(default_factory=list)
    records: List[FitMessage] = field(default_factory=list)
    device_info: Optional[FitMessage] = None


class MessageDecoder:
    """Decode raw messages and keep the ones the workout model needs"""

    def __init__(self, diagnostics: Optional[ParseDiagnostics] = None):
        self.diagnostics = diagnostics or ParseDiagnostics()

    def decode(self, raw: RawMessage) -> Optional[FitMessage]:
        """
        Map a raw message onto the profile.

        Returns None for message types the profile does not describe.
        """
        try:
            profile = get_message_profile(raw.global_number)
        except UnknownMessageTypeError as e:
            self.diagnostics.unknown_messages += 1
            logger.debug("Skipping unknown FIT message", global_message_number=e.global_message_number)
            return None

        message = FitMessage(message_type=profile.message_type)
        for number, value in raw.fields.items():
            field_profile = profile.get_field(number)
            if field_profile is None:
                message.additional_fields[number] = value
                self.diagnostics.unknown_fields += 1
                continue
            message.fields[field_profile.name] = convert_value(field_profile, value)

        self._apply_enhanced_fields(message)
        self.diagnostics.messages_decoded += 1
        return message

    @staticmethod
    def _apply_enhanced_fields(message: FitMessage):
        for name in [n for n in message.fields if n.startswith(ENHANCED_PREFIX)]:
            value = message.fields.pop(name)
            base_name = name[len(ENHANCED_PREFIX):]
            if value is not None or base_name not in message.fields:
                message.fields[base_name] = value

    def _record_file_id(self, message: FitMessage):
        diagnostics = self.diagnostics
        diagnostics.file_type = message.get('type')
        diagnostics.manufacturer = message.get('manufacturer')
        product = message.get('product')
        if isinstance(product, int):
            diagnostics.product = resolve_product(diagnostics.manufacturer, product)
        else:
            diagnostics.product = message.get('product_name')
        diagnostics.time_created = message.get('time_created')

    def decode_all(self, messages: Iterable[RawMessage]) -> DecodedActivity:
        """Decode a message stream, keeping the first session and device_info and every lap and record"""
        activity = DecodedActivity()

        for raw in messages:
            message = self.decode(raw)
            if message is None:
                continue

            if message.message_type == MessageType.RECORD:
                activity.records.append(message)
            elif message.message_type == MessageType.LAP:
                activity.laps.append(message)
            elif message.message_type == MessageType.SESSION:
                self.diagnostics.sessions_seen += 1
                if activity.session is None:
                    activity.session = message
                else:
                    logger.warning(
                        "Discarding additional session message",
                        sessions_seen=self.diagnostics.sessions_seen,
                    )
            elif message.message_type == MessageType.DEVICE_INFO:
                self.diagnostics.device_infos_seen += 1
                if activity.device_info is None:
                    activity.device_info = message
            elif message.message_type == MessageType.FILE_ID:
                if activity.file_id is None:
                    activity.file_id = message
                    self._record_file_id(message)

        logger.debug(
            "FIT messages decoded",
            sessions=self.diagnostics.sessions_seen,
            laps=len(activity.laps),
            records=len(activity.records),
            unknown_messages=self.diagnostics.unknown_messages,
        )
        return activity

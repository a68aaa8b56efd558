#!/usr/bin/env python3
"""
Processors Interface - Message types and result containers shared by the decoding pipeline
"""
from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Dict, Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..storage.model import WorkoutData


class MessageType(Enum):
    """Message type enumeration"""
    FILE_ID = "file_id"
    SESSION = "session"
    LAP = "lap"
    RECORD = "record"
    DEVICE_INFO = "device_info"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FieldDefinition:
    """One field of a definition message"""
    number: int
    size: int
    base_type: int


@dataclass(frozen=True)
class MessageDefinition:
    """Layout bound to a local message slot"""
    local_type: int
    global_number: int
    little_endian: bool
    fields: tuple
    dev_data_size: int = 0

    @property
    def data_size(self) -> int:
        """Payload size of one data message using this layout"""
        return sum(f.size for f in self.fields) + self.dev_data_size


@dataclass
class RawMessage:
    """Data message as read from the stream, keyed by field number"""
    global_number: int
    local_type: int
    little_endian: bool
    fields: Dict[int, Any]


@dataclass
class FitMessage:
    """Data message mapped onto the profile"""
    message_type: MessageType
    fields: Dict[str, Any] = field(default_factory=dict)
    # Values whose field number the profile does not describe
    additional_fields: Dict[int, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        value = self.fields.get(name)
        return default if value is None else value


@dataclass
class ParseDiagnostics:
    """Per-parse counters"""
    protocol_version: Optional[int] = None
    profile_version: Optional[int] = None
    header_size: Optional[int] = None
    data_size: Optional[int] = None
    header_crc_valid: Optional[bool] = None
    file_crc_valid: Optional[bool] = None
    definitions_seen: int = 0
    messages_decoded: int = 0
    unknown_messages: int = 0
    unknown_fields: int = 0
    sessions_seen: int = 0
    device_infos_seen: int = 0
    developer_bytes_skipped: int = 0
    # First file_id message
    file_type: Optional[Any] = None
    manufacturer: Optional[Any] = None
    product: Optional[str] = None
    time_created: Optional[datetime] = None

    @property
    def crc_ok(self) -> bool:
        """False when any checked CRC failed"""
        return self.header_crc_valid is not False and self.file_crc_valid is not False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ParseResult:
    """Decoded workout together with its diagnostics"""
    workout: "WorkoutData"
    diagnostics: ParseDiagnostics

#!/usr/bin/env python3
"""
FIT Binary Reader - validates the file framing and streams raw data messages

The reader tracks definition messages per local slot and yields one RawMessage
per data message, with field values keyed by field number. It is a single
forward pass over the buffer.
"""
import struct
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

from ..config.logging import get_logger
from ..const import (
    FIT_SIGNATURE, FIT_HEADER_SIZES, FIT_MIN_HEADER_SIZE, FIT_CRC_SIZE, CRC_TABLE,
    HEADER_COMPRESSED_MASK, HEADER_DEFINITION_MASK, HEADER_DEV_DATA_MASK,
    HEADER_LOCAL_TYPE_MASK, COMPRESSED_LOCAL_TYPE_MASK, COMPRESSED_TIME_MASK,
    TIMESTAMP_FIELD_NUM,
)
from ..exceptions import (
    MalformedHeaderError, TruncatedRecordError,
    UndefinedLocalMessageError, CrcMismatchError,
)
from .base_types import get_base_type, decode_value
from .interface import FieldDefinition, MessageDefinition, RawMessage, ParseDiagnostics


logger = get_logger(__name__)

DEFINITION_FIXED_SIZE = 5
FIELD_DEFINITION_SIZE = 3


def calculate_crc(data: bytes, crc: int = 0) -> int:
    """FIT CRC-16 over a byte sequence"""
    for byte in data:
        tmp = CRC_TABLE[crc & 0xF]
        crc = ((crc >> 4) & 0x0FFF) ^ tmp ^ CRC_TABLE[byte & 0xF]
        tmp = CRC_TABLE[crc & 0xF]
        crc = ((crc >> 4) & 0x0FFF) ^ tmp ^ CRC_TABLE[(byte >> 4) & 0xF]
    return crc & 0xFFFF


@dataclass(frozen=True)
class FitHeader:
    """File header"""
    header_size: int
    protocol_version: int
    profile_version: int
    data_size: int
    header_crc: Optional[int] = None

    @property
    def data_end(self) -> int:
        return self.header_size + self.data_size


class FitReader:
    """Forward-only reader over an in-memory FIT buffer"""

    def __init__(self, buffer: bytes, strict_crc: bool = False,
                 diagnostics: Optional[ParseDiagnostics] = None):
        self.buffer = bytes(buffer)
        self.strict_crc = strict_crc
        self.diagnostics = diagnostics or ParseDiagnostics()
        self.header = self._parse_header()
        self._check_crc()

    def _parse_header(self) -> FitHeader:
        buf = self.buffer
        if len(buf) < FIT_MIN_HEADER_SIZE:
            raise MalformedHeaderError(
                "Buffer too small to be a FIT file",
                {'size': len(buf), 'minimum': FIT_MIN_HEADER_SIZE},
            )

        header_size = buf[0]
        if header_size not in FIT_HEADER_SIZES:
            raise MalformedHeaderError(
                f"Unexpected header size: {header_size}",
                {'header_size': header_size, 'allowed': list(FIT_HEADER_SIZES)},
            )
        if len(buf) < header_size:
            raise MalformedHeaderError(
                "Buffer shorter than declared header",
                {'size': len(buf), 'header_size': header_size},
            )
        if buf[8:12] != FIT_SIGNATURE:
            raise MalformedHeaderError("Invalid FIT file signature", {'signature': buf[8:12].hex()})

        profile_version, data_size = struct.unpack_from('<HI', buf, 2)
        header_crc = None
        if header_size == 14:
            header_crc = struct.unpack_from('<H', buf, 12)[0]

        header = FitHeader(
            header_size=header_size,
            protocol_version=buf[1],
            profile_version=profile_version,
            data_size=data_size,
            header_crc=header_crc,
        )
        if header.data_end > len(buf):
            raise MalformedHeaderError(
                "Declared data size runs past end of buffer",
                {'data_size': data_size, 'available': len(buf) - header_size},
            )

        self.diagnostics.header_size = header_size
        self.diagnostics.protocol_version = header.protocol_version
        self.diagnostics.profile_version = profile_version
        self.diagnostics.data_size = data_size
        return header

    def _check_crc(self):
        header = self.header
        buf = self.buffer

        # Header CRC is optional; 0x0000 means not set
        if header.header_crc:
            calc = calculate_crc(buf[:12])
            self.diagnostics.header_crc_valid = calc == header.header_crc
            if calc != header.header_crc:
                self._crc_mismatch('header', header.header_crc, calc)

        if len(buf) >= header.data_end + FIT_CRC_SIZE:
            stored = struct.unpack_from('<H', buf, header.data_end)[0]
            calc = calculate_crc(buf[:header.data_end])
            self.diagnostics.file_crc_valid = calc == stored
            if calc != stored:
                self._crc_mismatch('file', stored, calc)
        else:
            logger.debug("FIT file has no trailing CRC", data_end=header.data_end)

    def _crc_mismatch(self, scope: str, stored: int, calc: int):
        details = {'scope': scope, 'stored': f"0x{stored:04X}", 'calculated': f"0x{calc:04X}"}
        if self.strict_crc:
            raise CrcMismatchError(f"{scope.capitalize()} CRC mismatch", details)
        logger.warning("FIT CRC mismatch", **details)

    def _require(self, pos: int, size: int, what: str):
        if pos + size > self.header.data_end:
            raise TruncatedRecordError(
                f"Truncated {what}",
                {'offset': pos, 'needed': size, 'data_end': self.header.data_end},
            )

    def _read_definition(self, pos: int, record_header: int) -> Tuple[MessageDefinition, int]:
        buf = self.buffer
        local_type = record_header & HEADER_LOCAL_TYPE_MASK

        self._require(pos, DEFINITION_FIXED_SIZE, 'definition message')
        little_endian = buf[pos + 1] == 0
        global_number = struct.unpack_from('<H' if little_endian else '>H', buf, pos + 2)[0]
        field_count = buf[pos + 4]
        pos += DEFINITION_FIXED_SIZE

        self._require(pos, field_count * FIELD_DEFINITION_SIZE, 'field definitions')
        fields = []
        for _ in range(field_count):
            fields.append(FieldDefinition(number=buf[pos], size=buf[pos + 1], base_type=buf[pos + 2]))
            pos += FIELD_DEFINITION_SIZE

        dev_data_size = 0
        if record_header & HEADER_DEV_DATA_MASK:
            self._require(pos, 1, 'developer field count')
            dev_count = buf[pos]
            pos += 1
            self._require(pos, dev_count * FIELD_DEFINITION_SIZE, 'developer field definitions')
            for _ in range(dev_count):
                dev_data_size += buf[pos + 1]
                pos += FIELD_DEFINITION_SIZE

        definition = MessageDefinition(
            local_type=local_type,
            global_number=global_number,
            little_endian=little_endian,
            fields=tuple(fields),
            dev_data_size=dev_data_size,
        )
        return definition, pos

    def _read_data(self, pos: int, definition: MessageDefinition) -> Tuple[Dict[int, Any], int]:
        self._require(pos, definition.data_size, 'data message')
        buf = self.buffer
        values = {}
        for field_def in definition.fields:
            raw = buf[pos:pos + field_def.size]
            values[field_def.number] = decode_value(
                raw, get_base_type(field_def.base_type), definition.little_endian
            )
            pos += field_def.size

        if definition.dev_data_size:
            # Developer field values are not interpreted
            self.diagnostics.developer_bytes_skipped += definition.dev_data_size
            pos += definition.dev_data_size
        return values, pos

    def __iter__(self) -> Iterator[RawMessage]:
        return self.messages()

    def messages(self) -> Iterator[RawMessage]:
        """Yield every data message in file order"""
        buf = self.buffer
        pos = self.header.header_size
        data_end = self.header.data_end
        definitions: Dict[int, MessageDefinition] = {}
        last_timestamp: Optional[int] = None

        while pos < data_end:
            record_header = buf[pos]
            pos += 1

            if record_header & HEADER_COMPRESSED_MASK:
                local_type = (record_header & COMPRESSED_LOCAL_TYPE_MASK) >> 5
                time_offset = record_header & COMPRESSED_TIME_MASK
                definition = definitions.get(local_type)
                if definition is None:
                    raise UndefinedLocalMessageError(
                        f"Compressed timestamp message refers to undefined local type {local_type}",
                        {'local_type': local_type, 'offset': pos - 1},
                    )
                values, pos = self._read_data(pos, definition)
                if last_timestamp is not None:
                    last_timestamp = _resolve_compressed_timestamp(last_timestamp, time_offset)
                    values[TIMESTAMP_FIELD_NUM] = last_timestamp
                else:
                    logger.debug("Compressed timestamp without a prior full timestamp", offset=pos)
                yield RawMessage(definition.global_number, local_type, definition.little_endian, values)

            elif record_header & HEADER_DEFINITION_MASK:
                definition, pos = self._read_definition(pos, record_header)
                definitions[definition.local_type] = definition
                self.diagnostics.definitions_seen += 1

            else:
                local_type = record_header & HEADER_LOCAL_TYPE_MASK
                definition = definitions.get(local_type)
                if definition is None:
                    raise UndefinedLocalMessageError(
                        f"Data message refers to undefined local type {local_type}",
                        {'local_type': local_type, 'offset': pos - 1},
                    )
                values, pos = self._read_data(pos, definition)
                timestamp = values.get(TIMESTAMP_FIELD_NUM)
                if isinstance(timestamp, int):
                    last_timestamp = timestamp
                yield RawMessage(definition.global_number, local_type, definition.little_endian, values)


def _resolve_compressed_timestamp(last_timestamp: int, time_offset: int) -> int:
    """Apply a 5-bit rolling offset to the last full timestamp"""
    base = last_timestamp & ~COMPRESSED_TIME_MASK
    if time_offset >= (last_timestamp & COMPRESSED_TIME_MASK):
        return base + time_offset
    return base + time_offset + COMPRESSED_TIME_MASK + 1

"""
FIT base types.

Each base type carries its struct format character, byte width and the
sentinel that marks a field as invalid. Decoded sentinels become None.
"""
import math
import struct
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class BaseType:
    """FIT base type descriptor"""
    code: int
    name: str
    fmt: str
    size: int
    invalid: Any

    def is_invalid(self, value: Any) -> bool:
        if self.name == 'float32' or self.name == 'float64':
            # Invalid floats are all-ones bit patterns, which decode to NaN
            return isinstance(value, float) and math.isnan(value)
        return value == self.invalid


BASE_TYPES: Dict[int, BaseType] = {
    bt.code: bt for bt in (
        BaseType(0x00, 'enum', 'B', 1, 0xFF),
        BaseType(0x01, 'sint8', 'b', 1, 0x7F),
        BaseType(0x02, 'uint8', 'B', 1, 0xFF),
        BaseType(0x83, 'sint16', 'h', 2, 0x7FFF),
        BaseType(0x84, 'uint16', 'H', 2, 0xFFFF),
        BaseType(0x85, 'sint32', 'i', 4, 0x7FFFFFFF),
        BaseType(0x86, 'uint32', 'I', 4, 0xFFFFFFFF),
        BaseType(0x07, 'string', 's', 1, b''),
        BaseType(0x88, 'float32', 'f', 4, None),
        BaseType(0x89, 'float64', 'd', 8, None),
        BaseType(0x0A, 'uint8z', 'B', 1, 0),
        BaseType(0x8B, 'uint16z', 'H', 2, 0),
        BaseType(0x8C, 'uint32z', 'I', 4, 0),
        BaseType(0x0D, 'byte', 'B', 1, 0xFF),
        BaseType(0x8E, 'sint64', 'q', 8, 0x7FFFFFFFFFFFFFFF),
        BaseType(0x8F, 'uint64', 'Q', 8, 0xFFFFFFFFFFFFFFFF),
        BaseType(0x90, 'uint64z', 'Q', 8, 0),
    )
}

BASE_TYPE_BYTE = BASE_TYPES[0x0D]
BASE_TYPE_STRING = BASE_TYPES[0x07]

# Base types are also looked up by the low five bits, which drop the endian flag
_BY_NUMBER = {code & 0x1F: bt for code, bt in BASE_TYPES.items()}


def get_base_type(code: int) -> BaseType:
    """Resolve a base type byte, treating unknown codes as raw bytes"""
    bt = BASE_TYPES.get(code)
    if bt is None:
        bt = _BY_NUMBER.get(code & 0x1F, BASE_TYPE_BYTE)
    return bt


def decode_string(data: bytes) -> Optional[str]:
    """Decode a NUL-terminated UTF-8 string; empty strings are absent"""
    value = data.split(b'\x00', 1)[0]
    if not value:
        return None
    return value.decode('utf-8', errors='replace')


def decode_value(data: bytes, base_type: BaseType, little_endian: bool = True) -> Any:
    """
    Decode the bytes of one field.

    Sizes that are a multiple of the base size greater than one element give
    a tuple (array field), or None when every element is invalid. Sizes that
    are not a multiple of the base size come back as raw bytes.
    """
    if base_type is BASE_TYPE_STRING:
        return decode_string(data)

    size = len(data)
    if size == 0 or size % base_type.size:
        return bytes(data)

    count = size // base_type.size
    endian = '<' if little_endian else '>'
    values = struct.unpack(f'{endian}{count}{base_type.fmt}', data)

    if count == 1:
        value = values[0]
        return None if base_type.is_invalid(value) else value

    decoded = tuple(None if base_type.is_invalid(v) else v for v in values)
    if all(v is None for v in decoded):
        return None
    return decoded

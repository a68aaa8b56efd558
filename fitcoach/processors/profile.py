#!/usr/bin/env python3
"""
FIT Profile subset - field layouts for the message types consumed by the decoder

Only file_id, session, lap, record and device_info are described. Adding a
message type means registering another MessageProfile in PROFILE.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from ..const import (
    MESG_NUM_FILE_ID, MESG_NUM_SESSION, MESG_NUM_LAP,
    MESG_NUM_RECORD, MESG_NUM_DEVICE_INFO,
    TIMESTAMP_FIELD_NUM, MESSAGE_INDEX_FIELD_NUM,
)
from ..exceptions import UnknownMessageTypeError
from .interface import MessageType


# Value types that need more than scale/offset
DATE_TIME = 'date_time'
SPORT = 'sport'
SUB_SPORT = 'sub_sport'
MANUFACTURER = 'manufacturer'
FILE_TYPE = 'file'

SEMICIRCLES = 'semicircles'


@dataclass(frozen=True)
class FieldProfile:
    """Profile entry for one field number"""
    name: str
    base_type: str
    scale: float = 1
    offset: float = 0
    units: Optional[str] = None
    value_type: Optional[str] = None


@dataclass(frozen=True)
class MessageProfile:
    """Profile entry for one global message number"""
    global_number: int
    message_type: MessageType
    fields: Dict[int, FieldProfile] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.message_type.value

    def get_field(self, number: int) -> Optional[FieldProfile]:
        return self.fields.get(number)


_TIMESTAMP = FieldProfile('timestamp', 'uint32', units='s', value_type=DATE_TIME)
_MESSAGE_INDEX = FieldProfile('message_index', 'uint16')


FILE_ID = MessageProfile(MESG_NUM_FILE_ID, MessageType.FILE_ID, {
    0: FieldProfile('type', 'enum', value_type=FILE_TYPE),
    1: FieldProfile('manufacturer', 'uint16', value_type=MANUFACTURER),
    2: FieldProfile('product', 'uint16'),
    3: FieldProfile('serial_number', 'uint32z'),
    4: FieldProfile('time_created', 'uint32', value_type=DATE_TIME),
    5: FieldProfile('number', 'uint16'),
    8: FieldProfile('product_name', 'string'),
})

SESSION = MessageProfile(MESG_NUM_SESSION, MessageType.SESSION, {
    TIMESTAMP_FIELD_NUM: _TIMESTAMP,
    MESSAGE_INDEX_FIELD_NUM: _MESSAGE_INDEX,
    2: FieldProfile('start_time', 'uint32', value_type=DATE_TIME),
    3: FieldProfile('start_position_lat', 'sint32', units=SEMICIRCLES),
    4: FieldProfile('start_position_long', 'sint32', units=SEMICIRCLES),
    5: FieldProfile('sport', 'enum', value_type=SPORT),
    6: FieldProfile('sub_sport', 'enum', value_type=SUB_SPORT),
    7: FieldProfile('total_elapsed_time', 'uint32', scale=1000, units='s'),
    8: FieldProfile('total_timer_time', 'uint32', scale=1000, units='s'),
    9: FieldProfile('total_distance', 'uint32', scale=100, units='m'),
    11: FieldProfile('total_calories', 'uint16', units='kcal'),
    14: FieldProfile('avg_speed', 'uint16', scale=1000, units='m/s'),
    15: FieldProfile('max_speed', 'uint16', scale=1000, units='m/s'),
    16: FieldProfile('avg_heart_rate', 'uint8', units='bpm'),
    17: FieldProfile('max_heart_rate', 'uint8', units='bpm'),
    18: FieldProfile('avg_cadence', 'uint8', units='rpm'),
    19: FieldProfile('max_cadence', 'uint8', units='rpm'),
    20: FieldProfile('avg_power', 'uint16', units='watts'),
    21: FieldProfile('max_power', 'uint16', units='watts'),
    22: FieldProfile('total_ascent', 'uint16', units='m'),
    23: FieldProfile('total_descent', 'uint16', units='m'),
    26: FieldProfile('num_laps', 'uint16'),
    49: FieldProfile('avg_altitude', 'uint16', scale=5, offset=500, units='m'),
    50: FieldProfile('max_altitude', 'uint16', scale=5, offset=500, units='m'),
    57: FieldProfile('avg_temperature', 'sint8', units='C'),
    58: FieldProfile('max_temperature', 'sint8', units='C'),
    71: FieldProfile('min_altitude', 'uint16', scale=5, offset=500, units='m'),
    124: FieldProfile('enhanced_avg_speed', 'uint32', scale=1000, units='m/s'),
    125: FieldProfile('enhanced_max_speed', 'uint32', scale=1000, units='m/s'),
    126: FieldProfile('enhanced_avg_altitude', 'uint32', scale=5, offset=500, units='m'),
    127: FieldProfile('enhanced_min_altitude', 'uint32', scale=5, offset=500, units='m'),
    128: FieldProfile('enhanced_max_altitude', 'uint32', scale=5, offset=500, units='m'),
})

LAP = MessageProfile(MESG_NUM_LAP, MessageType.LAP, {
    TIMESTAMP_FIELD_NUM: _TIMESTAMP,
    MESSAGE_INDEX_FIELD_NUM: _MESSAGE_INDEX,
    2: FieldProfile('start_time', 'uint32', value_type=DATE_TIME),
    3: FieldProfile('start_position_lat', 'sint32', units=SEMICIRCLES),
    4: FieldProfile('start_position_long', 'sint32', units=SEMICIRCLES),
    5: FieldProfile('end_position_lat', 'sint32', units=SEMICIRCLES),
    6: FieldProfile('end_position_long', 'sint32', units=SEMICIRCLES),
    7: FieldProfile('total_elapsed_time', 'uint32', scale=1000, units='s'),
    8: FieldProfile('total_timer_time', 'uint32', scale=1000, units='s'),
    9: FieldProfile('total_distance', 'uint32', scale=100, units='m'),
    11: FieldProfile('total_calories', 'uint16', units='kcal'),
    13: FieldProfile('avg_speed', 'uint16', scale=1000, units='m/s'),
    14: FieldProfile('max_speed', 'uint16', scale=1000, units='m/s'),
    15: FieldProfile('avg_heart_rate', 'uint8', units='bpm'),
    16: FieldProfile('max_heart_rate', 'uint8', units='bpm'),
    17: FieldProfile('avg_cadence', 'uint8', units='rpm'),
    18: FieldProfile('max_cadence', 'uint8', units='rpm'),
    19: FieldProfile('avg_power', 'uint16', units='watts'),
    20: FieldProfile('max_power', 'uint16', units='watts'),
    21: FieldProfile('total_ascent', 'uint16', units='m'),
    22: FieldProfile('total_descent', 'uint16', units='m'),
    25: FieldProfile('sport', 'enum', value_type=SPORT),
    110: FieldProfile('enhanced_avg_speed', 'uint32', scale=1000, units='m/s'),
    111: FieldProfile('enhanced_max_speed', 'uint32', scale=1000, units='m/s'),
})

RECORD = MessageProfile(MESG_NUM_RECORD, MessageType.RECORD, {
    TIMESTAMP_FIELD_NUM: _TIMESTAMP,
    0: FieldProfile('position_lat', 'sint32', units=SEMICIRCLES),
    1: FieldProfile('position_long', 'sint32', units=SEMICIRCLES),
    2: FieldProfile('altitude', 'uint16', scale=5, offset=500, units='m'),
    3: FieldProfile('heart_rate', 'uint8', units='bpm'),
    4: FieldProfile('cadence', 'uint8', units='rpm'),
    5: FieldProfile('distance', 'uint32', scale=100, units='m'),
    6: FieldProfile('speed', 'uint16', scale=1000, units='m/s'),
    7: FieldProfile('power', 'uint16', units='watts'),
    13: FieldProfile('temperature', 'sint8', units='C'),
    53: FieldProfile('fractional_cadence', 'uint8', scale=128, units='rpm'),
    73: FieldProfile('enhanced_speed', 'uint32', scale=1000, units='m/s'),
    78: FieldProfile('enhanced_altitude', 'uint32', scale=5, offset=500, units='m'),
})

DEVICE_INFO = MessageProfile(MESG_NUM_DEVICE_INFO, MessageType.DEVICE_INFO, {
    TIMESTAMP_FIELD_NUM: _TIMESTAMP,
    0: FieldProfile('device_index', 'uint8'),
    1: FieldProfile('device_type', 'uint8'),
    2: FieldProfile('manufacturer', 'uint16', value_type=MANUFACTURER),
    3: FieldProfile('serial_number', 'uint32z'),
    4: FieldProfile('product', 'uint16'),
    5: FieldProfile('software_version', 'uint16', scale=100),
    6: FieldProfile('hardware_version', 'uint8'),
    27: FieldProfile('product_name', 'string'),
})

PROFILE: Dict[int, MessageProfile] = {
    p.global_number: p for p in (FILE_ID, SESSION, LAP, RECORD, DEVICE_INFO)
}


def get_message_profile(global_number: int) -> MessageProfile:
    """Look up the profile for a global message number"""
    try:
        return PROFILE[global_number]
    except KeyError:
        raise UnknownMessageTypeError(global_number) from None


# Enumerations

FILE_TYPES = {
    1: 'device', 2: 'settings', 3: 'sport', 4: 'activity', 5: 'workout',
    6: 'course', 7: 'schedules', 9: 'weight', 10: 'totals', 11: 'goals',
    14: 'blood_pressure', 15: 'monitoring_a', 20: 'activity_summary',
    28: 'monitoring_daily', 32: 'monitoring_b', 34: 'segment',
    35: 'segment_list', 40: 'exd_configuration',
}

SPORTS = {
    0: 'generic', 1: 'running', 2: 'cycling', 3: 'transition',
    4: 'fitness_equipment', 5: 'swimming', 6: 'basketball', 7: 'soccer',
    8: 'tennis', 9: 'american_football', 10: 'training', 11: 'walking',
    12: 'cross_country_skiing', 13: 'alpine_skiing', 14: 'snowboarding',
    15: 'rowing', 16: 'mountaineering', 17: 'hiking', 18: 'multisport',
    19: 'paddling', 20: 'flying', 21: 'e_biking', 22: 'motorcycling',
    23: 'boating', 24: 'driving', 25: 'golf', 26: 'hang_gliding',
    27: 'horseback_riding', 28: 'hunting', 29: 'fishing',
    30: 'inline_skating', 31: 'rock_climbing', 32: 'sailing',
    33: 'ice_skating', 34: 'sky_diving', 35: 'snowshoeing',
    36: 'snowmobiling', 37: 'stand_up_paddleboarding', 38: 'surfing',
    39: 'wakeboarding', 40: 'water_skiing', 41: 'kayaking', 42: 'rafting',
    43: 'windsurfing', 44: 'kitesurfing', 45: 'tactical', 46: 'jumpmaster',
    47: 'boxing', 48: 'floor_climbing', 53: 'diving', 254: 'all',
}

SUB_SPORTS = {
    0: 'generic', 1: 'treadmill', 2: 'street', 3: 'trail', 4: 'track',
    5: 'spin', 6: 'indoor_cycling', 7: 'road', 8: 'mountain', 9: 'downhill',
    10: 'recumbent', 11: 'cyclocross', 12: 'hand_cycling',
    13: 'track_cycling', 14: 'indoor_rowing', 15: 'elliptical',
    16: 'stair_climbing', 17: 'lap_swimming', 18: 'open_water',
    19: 'flexibility_training', 20: 'strength_training', 21: 'warm_up',
    22: 'match', 23: 'exercise', 24: 'challenge', 25: 'indoor_skiing',
    26: 'cardio_training', 27: 'indoor_walking', 28: 'e_bike_fitness',
    29: 'bmx', 30: 'casual_walking', 31: 'speed_walking',
    32: 'bike_to_run_transition', 33: 'run_to_bike_transition',
    34: 'swim_to_bike_transition', 35: 'atv', 36: 'motocross',
    37: 'backcountry', 38: 'resort', 39: 'rc_drone', 40: 'wingsuit',
    41: 'whitewater', 42: 'skate_skiing', 43: 'yoga', 44: 'pilates',
    45: 'indoor_running', 46: 'gravel_cycling', 47: 'e_bike_mountain',
    48: 'commuting', 49: 'mixed_surface', 50: 'navigate', 51: 'track_me',
    52: 'map', 58: 'virtual_activity', 59: 'obstacle', 254: 'all',
}

MANUFACTURERS = {
    1: 'garmin', 2: 'garmin_fr405_antfs', 3: 'zephyr', 4: 'dayton', 5: 'idt',
    6: 'srm', 7: 'quarq', 8: 'ibike', 9: 'saris', 10: 'spark_hk',
    11: 'tanita', 12: 'echowell', 13: 'dynastream_oem', 14: 'nautilus',
    15: 'dynastream', 16: 'timex', 17: 'metrigear', 18: 'xelic',
    19: 'beurer', 20: 'cardiosport', 21: 'a_and_d', 22: 'hmm', 23: 'suunto',
    24: 'thita_elektronik', 25: 'gpulse', 26: 'clean_mobile',
    27: 'pedal_brain', 28: 'peaksware', 29: 'saxonar', 30: 'lemond_fitness',
    31: 'dexcom', 32: 'wahoo_fitness', 33: 'octane_fitness',
    34: 'archinoetics', 35: 'the_hurt_box', 36: 'citizen_systems',
    37: 'magellan', 38: 'osynce', 39: 'holux', 40: 'concept2',
    41: 'shimano', 69: 'stages_cycling', 71: 'tomtom', 89: 'tacx',
    95: 'stryd', 123: 'polar_electro', 255: 'development', 260: 'zwift',
    263: 'favero_electronics', 265: 'strava', 267: 'bryton', 268: 'sram',
    281: 'trainer_road', 289: 'hammerhead', 294: 'coros',
}

# Product codes of manufacturers sharing the Garmin product table
GARMIN_PRODUCTS = {
    1: 'hrm1', 717: 'fr405', 782: 'fr50', 988: 'fr60', 1018: 'fr310xt',
    1036: 'edge500', 1124: 'fr110', 1169: 'edge800', 1328: 'fr910xt',
    1345: 'fr610', 1482: 'fr10', 1561: 'edge510', 1567: 'edge810',
    1623: 'fr620', 1632: 'fr220', 1765: 'fr920xt', 1836: 'edge1000',
    2067: 'edge520', 2431: 'fr235', 2691: 'fr935', 3113: 'fr945',
    65534: 'connect',
}

GARMIN_PRODUCT_MANUFACTURERS = {'garmin', 'dynastream', 'dynastream_oem', 'tacx'}

ENUMS: Dict[str, Dict[int, str]] = {
    FILE_TYPE: FILE_TYPES,
    SPORT: SPORTS,
    SUB_SPORT: SUB_SPORTS,
    MANUFACTURER: MANUFACTURERS,
}


def resolve_enum(value_type: str, value: int) -> Union[str, int]:
    """Resolve an enum code to its name, keeping unknown codes as integers"""
    return ENUMS.get(value_type, {}).get(value, value)


def resolve_product(manufacturer: Optional[Union[str, int]], product: Optional[int]) -> Optional[str]:
    """Product name when the manufacturer's product table knows the code, else the code as text"""
    if product is None:
        return None
    if manufacturer in GARMIN_PRODUCT_MANUFACTURERS and product in GARMIN_PRODUCTS:
        return GARMIN_PRODUCTS[product]
    return str(product)

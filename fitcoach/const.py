FIT_SIGNATURE = b'.FIT'
FIT_HEADER_SIZES = (12, 14)
FIT_MIN_HEADER_SIZE = 12
FIT_CRC_SIZE = 2

# Seconds between the Unix epoch and the FIT epoch (1989-12-31T00:00:00Z)
FIT_EPOCH_OFFSET = 631065600

SEMICIRCLES_TO_DEGREES = 180.0 / 2**31

# Record header bits
HEADER_COMPRESSED_MASK = 0x80
HEADER_DEFINITION_MASK = 0x40
HEADER_DEV_DATA_MASK = 0x20
HEADER_LOCAL_TYPE_MASK = 0x0F
COMPRESSED_LOCAL_TYPE_MASK = 0x60
COMPRESSED_TIME_MASK = 0x1F

# Field number shared by every message carrying a timestamp
TIMESTAMP_FIELD_NUM = 253
MESSAGE_INDEX_FIELD_NUM = 254

DEFAULT_SPORT = "generic"

# Global message numbers consumed by the decoder
MESG_NUM_FILE_ID = 0
MESG_NUM_SESSION = 18
MESG_NUM_LAP = 19
MESG_NUM_RECORD = 20
MESG_NUM_DEVICE_INFO = 23

CRC_TABLE = (
    0x0000, 0xCC01, 0xD801, 0x1400, 0xF001, 0x3C00, 0x2800, 0xE401,
    0xA001, 0x6C00, 0x7800, 0xB401, 0x5000, 0x9C01, 0x8801, 0x4400,
)

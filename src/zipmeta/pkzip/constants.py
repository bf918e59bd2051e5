# The zip format stores "not set" as -1 in every widened field
UNSET = -1

MAX_CRC = 0xFFFFFFFF
MAX_PATH_BYTES = 0xFFFF

# MS-DOS date/time bit fields
DOS_EPOCH_YEAR = 1980
DOS_MAX_YEAR = DOS_EPOCH_YEAR + 0x7F

from enum import IntEnum

from zipmeta.pkzip.constants import UNSET


class CompressionMethod(IntEnum):
    STORED = 0
    DEFLATED = 8


def describe_compression_method(method: int) -> str:
    if method == UNSET:
        return "unset"

    try:
        return CompressionMethod(method).name.lower()
    except ValueError:
        return f"method {method}"

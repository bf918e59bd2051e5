from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import typer

from zipmeta.pkzip.constants import (
    DOS_EPOCH_YEAR,
    DOS_MAX_YEAR,
    MAX_PATH_BYTES,
    UNSET,
)


def or_none(value: int) -> int | None:
    return None if value == UNSET else value


def check_path_length(name: str):
    encoded_length = len(name.encode("utf-8"))

    if encoded_length > MAX_PATH_BYTES:
        raise ValueError(
            f"Entry name is {encoded_length} bytes long when encoded, "
            f"the zip format allows at most {MAX_PATH_BYTES} bytes."
        )


def lenient_datetime(
    year: int, month: int, day: int, hour: int, minute: int, second: int
) -> datetime:
    """Build a naive datetime, carrying out-of-range components into the next unit.

    Day 0 is the last day of the previous month, month 0 is December of the
    previous year, second 62 lands two seconds into the next minute.
    """
    year, month_index = divmod(year * 12 + month - 1, 12)

    return datetime(year, month_index + 1, 1) + timedelta(
        days=day - 1, hours=hour, minutes=minute, seconds=second
    )


def dos_to_datetime(
    mod_date: int, time: int, tz: tzinfo | None = None
) -> datetime | None:
    """Decode packed MS-DOS date and time fields.

    Zip archives store local wall-clock time, so without ``tz`` the result is a
    naive datetime in the local time zone of this process.

    A wall-clock time repeated when clocks fall back is read as standard
    time, the second occurrence (``fold=1``). A time skipped when clocks
    spring forward keeps ``fold=0`` and is read with the offset in effect
    before the transition.
    """
    if time == UNSET:
        return None

    year = DOS_EPOCH_YEAR + (mod_date >> 9 & 0x7F)
    month = mod_date >> 5 & 0xF
    day = mod_date & 0x1F

    hour = time >> 11 & 0x1F
    minute = time >> 5 & 0x3F
    second = (time & 0x1F) << 1

    result = lenient_datetime(year, month, day, hour, minute, second)
    if tz is not None:
        result = result.replace(tzinfo=tz)

    # Only an ambiguous time reads later with fold=1
    later = result.replace(fold=1)
    return later if later.timestamp() > result.timestamp() else result


def dos_to_millis(mod_date: int, time: int, tz: tzinfo | None = None) -> int:
    decoded = dos_to_datetime(mod_date, time, tz)

    if decoded is None:
        return UNSET

    # Naive datetimes are interpreted in the local time zone
    return round(decoded.timestamp() * 1000)


def date_time_to_dos(date_time: tuple[int, ...]) -> tuple[int, int]:
    """Pack a ``(year, month, day, hour, minute, second)`` tuple, as found on
    ``zipfile.ZipInfo.date_time``, into ``(mod_date, time)``."""
    year, month, day, hour, minute, second = date_time[:6]

    if not DOS_EPOCH_YEAR <= year <= DOS_MAX_YEAR:
        raise ValueError(
            f"Year {year} cannot be stored in a zip archive, "
            f"expected {DOS_EPOCH_YEAR}..{DOS_MAX_YEAR}."
        )

    mod_date = (year - DOS_EPOCH_YEAR) << 9 | month << 5 | day
    time = hour << 11 | minute << 5 | second >> 1

    return mod_date, time


def datetime_to_dos(value: datetime) -> tuple[int, int]:
    # Wall-clock fields are packed as-is, aware values are not converted
    return date_time_to_dos(value.timetuple()[:6])


def resolve_timezone(name: str | None) -> tzinfo | None:
    if name is None or name.lower() == "local":
        return None

    if name.upper() == "UTC":
        return timezone.utc

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise typer.BadParameter(f"Unknown time zone: {name}")


def parse_packed_int(value: str) -> int:
    try:
        parsed = int(value, 0)
    except ValueError:
        raise typer.BadParameter(f"Not an integer: {value}")

    if parsed != UNSET and not 0 <= parsed <= 0xFFFF:
        raise typer.BadParameter(
            f"Packed fields are 16 bits wide (or {UNSET} when unset), got {value}"
        )

    return parsed

from dataclasses import dataclass
from datetime import datetime, tzinfo
from pathlib import PurePosixPath
from typing import ClassVar

from zipmeta.pkzip.constants import MAX_CRC, UNSET
from zipmeta.pkzip.enumerators.compression_method import CompressionMethod
from zipmeta.pkzip.helpers import dos_to_datetime, dos_to_millis, or_none


@dataclass(frozen=True)
class ZipEntry:
    """An entry within a zip file.

    The entry holds the central directory metadata only, never the data itself,
    and is used as a key when reading the entry's payload. Every numeric field
    uses -1 for "not set", exactly as the zip format does.

    ``canonical_path`` may contain traversal segments such as ``foo/../bar``;
    it must be validated before being used to build a filesystem path.
    """

    STORED: ClassVar[CompressionMethod] = CompressionMethod.STORED
    DEFLATED: ClassVar[CompressionMethod] = CompressionMethod.DEFLATED

    canonical_path: PurePosixPath
    is_directory: bool = False
    comment: str = ""
    crc: int = UNSET  # widened so that -1 and 0xFFFFFFFF stay distinct
    compressed_size: int = UNSET
    size: int = UNSET
    compression_method: int = UNSET
    time: int = UNSET
    mod_date: int = UNSET
    extra: bytes = b""
    local_header_rel_offset: int = UNSET
    children: tuple[PurePosixPath, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "canonical_path", PurePosixPath(self.canonical_path))
        object.__setattr__(self, "extra", bytes(self.extra))
        object.__setattr__(
            self, "children", tuple(PurePosixPath(child) for child in self.children)
        )

        if self.crc != UNSET and not 0 <= self.crc <= MAX_CRC:
            raise ValueError(
                f"CRC {self.crc} of '{self.canonical_path}' is out of range, "
                f"expected {UNSET} or 0..{MAX_CRC:#x}."
            )

        if self.children and not self.is_directory:
            raise ValueError(
                f"'{self.canonical_path}' is not a directory and cannot have children."
            )

    @property
    def crc_or_none(self) -> int | None:
        return or_none(self.crc)

    @property
    def compressed_size_or_none(self) -> int | None:
        return or_none(self.compressed_size)

    @property
    def size_or_none(self) -> int | None:
        return or_none(self.size)

    @property
    def local_header_rel_offset_or_none(self) -> int | None:
        return or_none(self.local_header_rel_offset)

    @property
    def compression(self) -> CompressionMethod | None:
        """The compression method, or None when it has not been set.

        Raises ValueError for method codes other than STORED and DEFLATED.
        """
        if self.compression_method == UNSET:
            return None

        return CompressionMethod(self.compression_method)

    def timestamp_millis(self, tz: tzinfo | None = None) -> int:
        """Last modification time in milliseconds since Jan. 1, 1970, or -1.

        The packed fields hold local wall-clock time, so they are read in the
        local time zone unless ``tz`` is given.
        """
        return dos_to_millis(self.mod_date, self.time, tz)

    def modified_at(self, tz: tzinfo | None = None) -> datetime | None:
        return dos_to_datetime(self.mod_date, self.time, tz)

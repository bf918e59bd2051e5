import logging
import zipfile
from collections.abc import Iterable, Iterator
from pathlib import Path, PurePosixPath

from zipmeta.pkzip.dataclasses.entry import ZipEntry
from zipmeta.pkzip.dataclasses.entry_builder import ZipEntryBuilder
from zipmeta.pkzip.helpers import check_path_length, date_time_to_dos, or_none

log = logging.getLogger(__name__)


class ZipArchive:

    __comment: str = ""

    @property
    def comment(self) -> str:
        return self.__comment

    @property
    def entries(self) -> list[ZipEntry]:
        return list(self.__entries.values())

    @property
    def files(self) -> list[ZipEntry]:
        return [entry for entry in self.__entries.values() if not entry.is_directory]

    @property
    def directories(self) -> list[ZipEntry]:
        return [entry for entry in self.__entries.values() if entry.is_directory]

    @property
    def total_size(self) -> int:
        return sum(or_none(entry.size) or 0 for entry in self.files)

    @property
    def total_compressed_size(self) -> int:
        return sum(or_none(entry.compressed_size) or 0 for entry in self.files)

    def __init__(self, archive_path: Path | None = None):
        self.__entries: dict[PurePosixPath, ZipEntry] = {}

        if archive_path:
            self.__read_central_directory(archive_path)

    @classmethod
    def from_entries(cls, builders: Iterable[ZipEntryBuilder]) -> "ZipArchive":
        archive = cls()
        archive.__link(builders)
        return archive

    def __read_central_directory(self, archive_path: Path):
        with zipfile.ZipFile(archive_path) as zf:
            self.__comment = zf.comment.decode("utf-8", errors="replace")
            builders = [self.__read_entry(info) for info in zf.infolist()]

        log.debug("Read %d entries from %s", len(builders), archive_path)
        self.__link(builders)

    def __read_entry(self, info: zipfile.ZipInfo) -> ZipEntryBuilder:
        check_path_length(info.filename)
        mod_date, time = date_time_to_dos(info.date_time)

        return ZipEntryBuilder(
            # Directory names carry a trailing slash in the archive
            canonical_path=PurePosixPath(info.filename.rstrip("/") or "/"),
            is_directory=info.is_dir(),
            comment=info.comment.decode("utf-8", errors="replace"),
            crc=info.CRC,
            compressed_size=info.compress_size,
            size=info.file_size,
            compression_method=info.compress_type,
            time=time,
            mod_date=mod_date,
            extra=info.extra,
            local_header_rel_offset=info.header_offset,
        )

    def __link(self, builders: Iterable[ZipEntryBuilder]):
        by_path: dict[PurePosixPath, ZipEntryBuilder] = {}

        for builder in builders:
            if builder.canonical_path in by_path:
                log.warning(
                    "Duplicate entry %s, keeping the last one", builder.canonical_path
                )

            # Linking works on copies, the caller keeps ownership of its builders
            by_path[builder.canonical_path] = builder.copy()

        # Children are recorded in central directory order
        for path, builder in by_path.items():
            parent = by_path.get(path.parent)

            if parent is None or parent is builder:
                log.debug("No parent directory entry for %s", path)
                continue

            if not parent.is_directory:
                log.debug("Parent %s of %s is not a directory", path.parent, path)
                continue

            parent.add_child(path)

        self.__entries = {path: builder.build() for path, builder in by_path.items()}

    def get(self, path: PurePosixPath | str) -> ZipEntry:
        try:
            return self.__entries[PurePosixPath(path)]
        except KeyError:
            raise KeyError(f"Entry not found for path: {path}")

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, PurePosixPath)):
            return False

        return PurePosixPath(path) in self.__entries

    def __iter__(self) -> Iterator[ZipEntry]:
        return iter(self.__entries.values())

    def __len__(self) -> int:
        return len(self.__entries)

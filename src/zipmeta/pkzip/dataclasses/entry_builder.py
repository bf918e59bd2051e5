from dataclasses import dataclass, fields, replace
from pathlib import PurePosixPath

from zipmeta.pkzip.constants import UNSET
from zipmeta.pkzip.dataclasses.entry import ZipEntry


@dataclass
class ZipEntryBuilder:
    """Mutable stand-in for a ZipEntry while the central directory is walked.

    Only the reader that owns the builder appends children; ``build()`` then
    publishes an immutable ZipEntry.
    """

    canonical_path: PurePosixPath
    is_directory: bool = False
    comment: str = ""
    crc: int = UNSET
    compressed_size: int = UNSET
    size: int = UNSET
    compression_method: int = UNSET
    time: int = UNSET
    mod_date: int = UNSET
    extra: bytes = b""
    local_header_rel_offset: int = UNSET

    def __post_init__(self):
        self.canonical_path = PurePosixPath(self.canonical_path)
        self.__children: list[PurePosixPath] = []

    @property
    def children(self) -> tuple[PurePosixPath, ...]:
        return tuple(self.__children)

    def add_child(self, path: PurePosixPath | str):
        if not self.is_directory:
            raise ValueError(
                f"Cannot add '{path}' to '{self.canonical_path}', "
                "only directory entries have children."
            )

        self.__children.append(PurePosixPath(path))

    def copy(self) -> "ZipEntryBuilder":
        duplicate = replace(self)
        duplicate.__children.extend(self.__children)
        return duplicate

    def build(self) -> ZipEntry:
        return ZipEntry(
            **{field.name: getattr(self, field.name) for field in fields(self)},
            children=tuple(self.__children),
        )

import zipfile
from pathlib import Path
from typing import Annotated

import humanize
import typer
from rich import print
from rich.console import Console
from rich.progress import Progress
from rich.table import Table

from zipmeta.pkzip.archive import ZipArchive
from zipmeta.pkzip.dataclasses.entry import ZipEntry
from zipmeta.pkzip.enumerators.compression_method import describe_compression_method
from zipmeta.pkzip.helpers import (
    dos_to_datetime,
    dos_to_millis,
    parse_packed_int,
    resolve_timezone,
)

app = typer.Typer(help="Tools for zip archives (.zip/.jar files)")

ArchivePath = Annotated[
    Path,
    typer.Argument(
        help="Path to the input zip archive",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]

TimezoneName = Annotated[
    str | None,
    typer.Option(
        "--timezone",
        "-t",
        envvar="ZIPMETA_TZ",
        help="Time zone used to read entry timestamps (defaults to the local one)",
    ),
]


def load_archive(archive_path: Path) -> ZipArchive:
    with Progress(transient=True) as progress:
        progress.add_task(
            description="Reading central directory...",
            total=None,
        )

        try:
            return ZipArchive(archive_path)
        except zipfile.BadZipFile as e:
            raise typer.BadParameter(f"Cannot read {archive_path}: {e}")


def format_size(value: int | None) -> str:
    return humanize.naturalsize(value) if value is not None else "-"


def format_path(entry: ZipEntry) -> str:
    return f"{entry.canonical_path}/" if entry.is_directory else str(entry.canonical_path)


@app.command(help="Prints information about a zip archive")
def info(archive_path: ArchivePath):
    archive = load_archive(archive_path)

    print(f"Number of directories: {len(archive.directories)}")
    print(f"Number of files: {len(archive.files)}")
    print(f"Total size: {humanize.naturalsize(archive.total_size)}")
    print(f"Compressed size: {humanize.naturalsize(archive.total_compressed_size)}")

    if archive.comment:
        print(f"Comment: {archive.comment}")


@app.command(name="list", help="Lists entries in a zip archive")
def contents(
    archive_path: ArchivePath,
    timezone: TimezoneName = None,
    show_children: Annotated[
        bool,
        typer.Option(
            "--children",
            "-c",
            is_flag=True,
            help="Print the direct children of every directory entry",
        ),
    ] = False,
):
    console = Console()
    tz = resolve_timezone(timezone)
    archive = load_archive(archive_path)

    table = Table("Path", "Size", "Compressed", "Method", "CRC", "Modified", "Offset")

    for entry in archive:
        modified = entry.modified_at(tz)
        crc = entry.crc_or_none
        offset = entry.local_header_rel_offset_or_none

        table.add_row(
            format_path(entry),
            format_size(entry.size_or_none),
            format_size(entry.compressed_size_or_none),
            describe_compression_method(entry.compression_method),
            f"{crc:08x}" if crc is not None else "-",
            modified.isoformat(sep=" ") if modified else "-",
            hex(offset) if offset is not None else "-",
        )

    console.print(table)

    if show_children:
        for directory in archive.directories:
            console.print(f"{format_path(directory)}")

            for child in directory.children:
                console.print(f"  {child}")


@app.command(name="decode-time", help="Decodes packed MS-DOS date and time fields")
def decode_time(
    mod_date: Annotated[
        str, typer.Argument(help="Packed date field (decimal or 0x-prefixed hex)")
    ],
    time: Annotated[
        str, typer.Argument(help="Packed time field (decimal or 0x-prefixed hex)")
    ],
    timezone: TimezoneName = None,
):
    tz = resolve_timezone(timezone)
    packed_date = parse_packed_int(mod_date)
    packed_time = parse_packed_int(time)

    decoded = dos_to_datetime(packed_date, packed_time, tz)

    print(f"Milliseconds: {dos_to_millis(packed_date, packed_time, tz)}")
    print(f"Timestamp: {decoded.isoformat(sep=' ') if decoded else 'not set'}")


if __name__ == "__main__":
    app()

import os
import time
import zipfile
from pathlib import Path

import pytest


@pytest.fixture
def pin_local_timezone():
    """Return a setter for the process time zone, restored after the test."""
    original = os.environ.get("TZ")

    def pin(name: str):
        os.environ["TZ"] = name
        time.tzset()

    yield pin

    if original is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = original
    time.tzset()


@pytest.fixture
def utc_local(pin_local_timezone):
    pin_local_timezone("UTC")


README = b"zip metadata\n" * 20
BLOB = bytes(range(256))


@pytest.fixture
def sample_payloads() -> dict[str, bytes]:
    return {"docs/readme.txt": README, "docs/nested/blob.bin": BLOB, "top.txt": b"top"}


@pytest.fixture
def sample_archive(tmp_path: Path) -> Path:
    archive_path = tmp_path / "sample.zip"

    with zipfile.ZipFile(archive_path, "w") as zf:
        zf.comment = b"archive note"

        zf.writestr(zipfile.ZipInfo("docs/", date_time=(2020, 1, 2, 3, 4, 6)), "")

        readme = zipfile.ZipInfo("docs/readme.txt", date_time=(2021, 6, 15, 13, 45, 30))
        readme.compress_type = zipfile.ZIP_DEFLATED
        readme.comment = b"read me first"
        zf.writestr(readme, README)

        zf.writestr(zipfile.ZipInfo("docs/nested/", date_time=(2020, 1, 2, 3, 4, 6)), "")
        zf.writestr(
            zipfile.ZipInfo("docs/nested/blob.bin", date_time=(1980, 1, 1, 0, 0, 0)),
            BLOB,
        )
        zf.writestr(zipfile.ZipInfo("top.txt", date_time=(2107, 12, 31, 23, 59, 58)), "top")

    return archive_path

"""Unpack MARC files delivered inside ZIP archives."""

from __future__ import annotations

import zipfile
from logging import getLogger
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from .discovery import MARC_SUFFIXES

if TYPE_CHECKING:
    from collections.abc import Iterable

log = getLogger(__name__)


def extract_marc_members(archive: Path) -> list[Path]:
    """Extract ``.xml`` and ``.mrc`` members of ``archive`` without their paths.

    Members land in a directory named after the archive, next to it. Other
    members are skipped. A corrupt archive raises ``zipfile.BadZipFile``.
    """

    target_dir = archive.with_suffix("")
    extracted: list[Path] = []
    with zipfile.ZipFile(archive) as bundle:
        for member in bundle.infolist():
            if member.is_dir():
                continue
            name = PurePosixPath(member.filename).name
            if Path(name).suffix.lower() not in MARC_SUFFIXES:
                log.debug("Skipping %s in %s", member.filename, archive.name)
                continue
            target_dir.mkdir(parents=True, exist_ok=True)
            destination = target_dir / name
            with bundle.open(member) as source, destination.open("wb") as sink:
                while chunk := source.read(1 << 16):
                    sink.write(chunk)
            log.info("Extracted %s from %s to %s", member.filename, archive.name, destination)
            extracted.append(destination)
    return extracted


def extract_archives(archives: Iterable[Path]) -> list[Path]:
    extracted: list[Path] = []
    for archive in archives:
        extracted.extend(extract_marc_members(archive))
    return extracted


__all__ = ["extract_archives", "extract_marc_members"]

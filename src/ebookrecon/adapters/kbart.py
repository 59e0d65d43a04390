"""Read tab-delimited KBART entitlement manifests."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from ebookrecon.domain.model import ManifestFile

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)

UNDECODABLE = "\ufffd"


def _split(line: str) -> tuple[str, ...]:
    return tuple(line.rstrip("\r\n").split("\t"))


def read_manifest(path: Path, *, name: str | None = None) -> ManifestFile:
    """Load ``path`` as a manifest; the first line is the header.

    Blank lines are dropped. Column resolution happens in the entitlement index.
    Bytes that are not valid UTF-8 are replaced with U+FFFD and logged.
    """

    log.info("Reading entitlement manifest %s", path)
    with path.open(encoding="utf-8-sig", errors="replace", newline="") as handle:
        lines = handle.readlines()

    for line_number, line in enumerate(lines, start=1):
        if UNDECODABLE in line:
            log.warning(
                "%s line %s: replaced bytes that are not valid UTF-8", path.name, line_number
            )

    header = _split(lines[0]) if lines else ()
    rows = tuple(_split(line) for line in lines[1:] if line.strip())
    return ManifestFile(name=name or str(path), header=header, rows=rows)


__all__ = ["read_manifest"]

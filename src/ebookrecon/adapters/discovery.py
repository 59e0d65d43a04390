"""Locate input files beneath the input directory."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

ACTIVATION_SUFFIXES: Final[tuple[str, ...]] = (".csv",)
MANIFEST_SUFFIXES: Final[tuple[str, ...]] = (".txt",)
ARCHIVE_SUFFIXES: Final[tuple[str, ...]] = (".zip",)
MARC_SUFFIXES: Final[tuple[str, ...]] = (".xml", ".mrc")

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InputFiles:
    """Input files grouped by category, each in sorted path order."""

    activation_exports: tuple[Path, ...]
    manifests: tuple[Path, ...]
    archives: tuple[Path, ...]


def find_files(
    root: Path,
    suffixes: Iterable[str],
    *,
    exclude: Iterable[Path] = (),
) -> tuple[Path, ...]:
    """Return files under ``root`` with one of ``suffixes``, sorted by path.

    Sorting fixes the ingestion order, which decides the surviving record when
    several manifests list the same title.
    """

    wanted = {suffix.lower() for suffix in suffixes}
    excluded = [path.resolve() for path in exclude]
    found = [
        path
        for path in root.rglob("*")
        if path.is_file()
        and path.suffix.lower() in wanted
        and not any(path.resolve().is_relative_to(skip) for skip in excluded)
    ]
    return tuple(sorted(found))


def discover_inputs(root: Path, *, exclude: Iterable[Path] = ()) -> InputFiles:
    excluded = tuple(exclude)
    inputs = InputFiles(
        activation_exports=find_files(root, ACTIVATION_SUFFIXES, exclude=excluded),
        manifests=find_files(root, MANIFEST_SUFFIXES, exclude=excluded),
        archives=find_files(root, ARCHIVE_SUFFIXES, exclude=excluded),
    )
    log.info(
        "Discovered inputs in %s: activation_exports=%s, manifests=%s, archives=%s",
        root,
        len(inputs.activation_exports),
        len(inputs.manifests),
        len(inputs.archives),
    )
    return inputs


def find_marc_files(root: Path, *, exclude: Iterable[Path] = ()) -> tuple[Path, ...]:
    return find_files(root, MARC_SUFFIXES, exclude=exclude)


__all__ = ["InputFiles", "discover_inputs", "find_files", "find_marc_files"]

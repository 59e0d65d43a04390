"""Plain-text writers for reports and the activation error log."""

from __future__ import annotations

import csv
from logging import getLogger
from typing import TYPE_CHECKING, Self

if TYPE_CHECKING:
    from pathlib import Path
    from types import TracebackType

    from ebookrecon.domain.reports import Report

log = getLogger(__name__)


def write_report(report: Report, path: Path) -> Path:
    """Write ``report`` as a tab-separated file with its header line first."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle, delimiter="\t", lineterminator="\n")
        writer.writerow(report.header)
        writer.writerows(report.rows)
    log.info("Wrote %s rows for %s to %s", len(report), report.name, path)
    return path


class ErrorLogFile:
    """Error channel appending one line per rejected row to a file."""

    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.path = path
        self.lines = 0
        self._handle = path.open("w", encoding="utf-8")

    def __call__(self, line: str) -> None:
        self._handle.write(f"{line}\n")
        self.lines += 1

    def close(self) -> None:
        self._handle.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["ErrorLogFile", "write_report"]

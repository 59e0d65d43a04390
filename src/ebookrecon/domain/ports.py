"""Ports between the reconciliation core and its readers and writers."""

from __future__ import annotations

from typing import Protocol


class ErrorChannel(Protocol):
    """Receives one human-readable line per rejected input row."""

    def __call__(self, line: str) -> None: ...


class BibRecord(Protocol):
    """A decoded bibliographic record as seen by the classifier."""

    @property
    def title(self) -> str | None: ...

    @property
    def access_link(self) -> str | None: ...

    @property
    def source(self) -> str: ...

    @property
    def position(self) -> int: ...


class RecordSink(Protocol):
    """Output stream for bibliographic records."""

    def write(self, record: BibRecord) -> None: ...


__all__ = ["BibRecord", "ErrorChannel", "RecordSink"]

"""Reusable fakes and builders for bibliographic record tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pymarc import Field, Record, Subfield

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ebookrecon.domain.ports import BibRecord


@dataclass(frozen=True, slots=True)
class FakeBibRecord:
    title: str | None
    access_link: str | None
    source: str = "batch.xml"
    position: int = 1


@dataclass(slots=True)
class ListSink:
    records: list[BibRecord] = field(default_factory=list["BibRecord"])

    def write(self, record: BibRecord) -> None:
        self.records.append(record)


def make_marc_record(
    title: str,
    *,
    links: Sequence[str] = (),
    with_856: bool = True,
) -> Record:
    record = Record()
    record.add_field(
        Field(
            tag="245",
            indicators=["0", "0"],
            subfields=[Subfield(code="a", value=title)],
        )
    )
    if with_856:
        record.add_field(
            Field(
                tag="856",
                indicators=["4", "0"],
                subfields=[Subfield(code="u", value=link) for link in links],
            )
        )
    return record

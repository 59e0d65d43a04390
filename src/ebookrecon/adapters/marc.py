"""MARC record reading and writing backed by pymarc."""

from __future__ import annotations

import io
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Self
from xml.etree import ElementTree
from xml.sax import SAXException

from pymarc import MARCReader, XMLWriter, parse_xml_to_array

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path
    from types import TracebackType

    from pymarc import Record

    from ebookrecon.domain.ports import BibRecord

ACCESS_LINK_TAG = "856"
ACCESS_LINK_CODE = "u"

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MarcBibRecord:
    """A pymarc record together with where it was read from."""

    record: Record
    source: str
    position: int

    @property
    def title(self) -> str | None:
        return self.record.title

    @property
    def access_link(self) -> str | None:
        """First ``$u`` of the first ``856`` field, or ``None``."""

        fields = self.record.get_fields(ACCESS_LINK_TAG)
        if not fields:
            return None
        links = fields[0].get_subfields(ACCESS_LINK_CODE)
        if not links:
            return None
        return links[0].strip() or None


def read_marc_file(path: Path) -> Iterator[MarcBibRecord]:
    """Yield the records in ``path`` (MARCXML, or binary MARC21 for ``.mrc``).

    Records that fail to decode are logged and skipped.
    """

    log.info("Reading MARC file %s", path)
    if path.suffix.lower() == ".mrc":
        return _read_binary(path)
    return _read_xml(path)


def read_marc_files(paths: Iterable[Path]) -> Iterator[Iterator[MarcBibRecord]]:
    for path in paths:
        yield read_marc_file(path)


def _read_binary(path: Path) -> Iterator[MarcBibRecord]:
    with path.open("rb") as handle:
        reader = MARCReader(handle, to_unicode=True, force_utf8=True, permissive=True)
        for position, record in enumerate(reader, start=1):
            if record is None:
                log.warning(
                    "Skipping unparsable record %s in %s: %s",
                    position,
                    path.name,
                    reader.current_exception,
                )
                continue
            yield MarcBibRecord(record=record, source=path.name, position=position)


def _local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def _read_xml(path: Path) -> Iterator[MarcBibRecord]:
    position = 0
    try:
        for _event, element in ElementTree.iterparse(path, events=("end",)):
            if _local_name(element.tag) != "record":
                continue
            position += 1
            element.tail = None
            try:
                records = parse_xml_to_array(io.BytesIO(ElementTree.tostring(element)))
            except (SAXException, KeyError, ValueError) as exc:
                log.warning("Skipping unparsable record %s in %s: %s", position, path.name, exc)
                continue
            finally:
                element.clear()
            if not records:
                log.warning("Skipping empty record %s in %s", position, path.name)
                continue
            yield MarcBibRecord(record=records[0], source=path.name, position=position)
    except ElementTree.ParseError as exc:
        log.error(  # noqa: TRY400
            "Stopped reading %s after record %s: malformed XML (%s)", path.name, position, exc
        )


class MarcXmlSink:
    """Write records to a MARCXML collection file."""

    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.path = path
        self.written = 0
        self._writer = XMLWriter(path.open("wb"))

    def write(self, record: BibRecord) -> None:
        if not isinstance(record, MarcBibRecord):
            raise TypeError(f"Expected a MARC record, got {type(record).__name__}")
        self._writer.write(record.record)
        self.written += 1

    def close(self) -> None:
        self._writer.close()
        log.info("Wrote %s records to %s", self.written, self.path)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["MarcBibRecord", "MarcXmlSink", "read_marc_file", "read_marc_files"]

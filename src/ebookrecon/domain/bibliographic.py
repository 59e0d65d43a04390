"""Classification and deduplication of bibliographic records by access link."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .identity import DEFAULT_IDENTITY_MARKER, normalize
from .model import BibClassification, BibRecordOutcome

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .activation import ActivationIndex
    from .identity import IdentityKey
    from .ports import BibRecord, RecordSink

log = getLogger(__name__)


@dataclass(slots=True)
class BibStreams:
    """Output streams receiving routed bibliographic records."""

    load: RecordSink
    bad_link: RecordSink
    no_link: RecordSink


@dataclass(slots=True)
class BibSummary:
    """Per-outcome tallies for one classifier run."""

    outcomes: Counter[BibRecordOutcome] = field(default_factory=Counter[BibRecordOutcome])

    @property
    def total(self) -> int:
        return sum(self.outcomes.values())

    def count(self, outcome: BibRecordOutcome) -> int:
        return self.outcomes[outcome]


@dataclass(slots=True)
class BibliographicClassifier:
    """Sort bibliographic records into outcomes against the activation index.

    The emitted-key set spans the whole run, so a title linked from records in
    several batches reaches the load stream at most once.
    """

    activations: ActivationIndex
    platform_url: str
    marker: str = DEFAULT_IDENTITY_MARKER
    _emitted: Counter[IdentityKey] = field(default_factory=Counter["IdentityKey"])

    def classify(self, record: BibRecord) -> BibClassification:
        link = record.access_link
        if not link:
            log.info(
                "NO LINK: File: %s Record %s: %s", record.source, record.position, record.title
            )
            return BibClassification(record=record, outcome=BibRecordOutcome.NO_LINK)

        if not link.startswith(self.platform_url):
            log.info(
                "BAD LINK: File: %s Record %s: %s Link: %s",
                record.source,
                record.position,
                record.title,
                link,
            )
            return BibClassification(record=record, outcome=BibRecordOutcome.MALFORMED_LINK)

        key = normalize(link, marker=self.marker)
        if key in self.activations:
            log.info(
                "RECORD WITH LINK ACTIVATED: File: %s Record %s: %s Link: %s",
                record.source,
                record.position,
                record.title,
                link,
            )
            return BibClassification(
                record=record, outcome=BibRecordOutcome.MATCHED, identity_key=key
            )

        log.info(
            "NO ACTIVATED LINK: File: %s Record %s: %s Link: %s",
            record.source,
            record.position,
            record.title,
            link,
        )
        first = key not in self._emitted
        self._emitted[key] += 1
        if first:
            return BibClassification(
                record=record, outcome=BibRecordOutcome.UNMATCHED_FIRST, identity_key=key
            )
        log.info("Skipping record already written for %s", key)
        return BibClassification(
            record=record, outcome=BibRecordOutcome.UNMATCHED_DUPLICATE, identity_key=key
        )

    def classify_batches(
        self,
        batches: Iterable[Iterable[BibRecord]],
    ) -> Iterator[BibClassification]:
        for batch in batches:
            for record in batch:
                yield self.classify(record)

    def route(
        self,
        classifications: Iterable[BibClassification],
        streams: BibStreams,
    ) -> BibSummary:
        """Write each classified record to its stream and tally the outcomes."""

        summary = BibSummary()
        for classification in classifications:
            summary.outcomes[classification.outcome] += 1
            match classification.outcome:
                case BibRecordOutcome.UNMATCHED_FIRST:
                    streams.load.write(classification.record)
                case BibRecordOutcome.MALFORMED_LINK:
                    streams.bad_link.write(classification.record)
                case BibRecordOutcome.NO_LINK:
                    streams.no_link.write(classification.record)
                case BibRecordOutcome.MATCHED | BibRecordOutcome.UNMATCHED_DUPLICATE:
                    pass
        return summary

    def was_emitted(self, key: IdentityKey) -> bool:
        return key in self._emitted

    def duplicate_count(self, key: IdentityKey) -> int:
        """Number of records for ``key`` suppressed after the first was emitted."""

        return max(self._emitted[key] - 1, 0)


__all__ = ["BibStreams", "BibSummary", "BibliographicClassifier"]

"""Index of activated portfolios keyed by identity."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .identity import DEFAULT_IDENTITY_MARKER, classify_activation_url, normalize
from .model import ActivationRecord, RejectedActivation

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .identity import AddressForms, IdentityKey
    from .model import ActivationRow
    from .ports import ErrorChannel

log = getLogger(__name__)


@dataclass(slots=True)
class ActivationIngestResult:
    """Counts for one batch of activation rows."""

    accepted: int = 0
    rejected: list[RejectedActivation] = field(default_factory=list[RejectedActivation])


@dataclass(slots=True)
class ActivationIndex:
    """Activated portfolios keyed by identity key.

    The first external id seen for a key is kept; later rows for the same key only
    raise its occurrence count. Keys iterate in first-ingested order.
    """

    forms: AddressForms
    marker: str = DEFAULT_IDENTITY_MARKER
    _records: dict[IdentityKey, ActivationRecord] = field(
        default_factory=dict["IdentityKey", ActivationRecord]
    )

    def ingest(
        self,
        rows: Iterable[ActivationRow],
        *,
        errors: ErrorChannel | None = None,
    ) -> ActivationIngestResult:
        result = ActivationIngestResult()
        for row in rows:
            platform_url = classify_activation_url(row.raw_url, self.forms)
            if platform_url is None:
                rejection = RejectedActivation(external_id=row.external_id, raw_url=row.raw_url)
                result.rejected.append(rejection)
                log.debug("Rejected activation %s: %s", row.external_id, row.raw_url)
                if errors is not None:
                    errors(rejection.describe())
                continue
            self._upsert(normalize(platform_url, marker=self.marker), row.external_id)
            result.accepted += 1
        return result

    def _upsert(self, key: IdentityKey, external_id: str) -> None:
        existing = self._records.get(key)
        if existing is None:
            self._records[key] = ActivationRecord(identity_key=key, external_id=external_id)
            return
        existing.occurrence_count += 1

    def lookup(self, key: IdentityKey) -> ActivationRecord | None:
        return self._records.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ActivationRecord]:
        return iter(self._records.values())

    def duplicates(self) -> Iterator[ActivationRecord]:
        """Yield records activated more than once."""

        return (record for record in self._records.values() if record.is_duplicate)


__all__ = ["ActivationIndex", "ActivationIngestResult"]

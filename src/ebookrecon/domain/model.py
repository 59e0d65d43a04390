"""Value types flowing through the reconciliation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .identity import IdentityKey
    from .ports import BibRecord


@dataclass(frozen=True, slots=True)
class ActivationRow:
    """One row of a catalog portfolio export."""

    resource_type: str
    external_id: str
    raw_url: str


@dataclass(slots=True)
class ActivationRecord:
    """An activated portfolio, keyed by identity.

    ``external_id`` is the first one seen for the key; ``occurrence_count`` counts
    every row that mapped to it. A count above one means the title was activated
    more than once.
    """

    identity_key: IdentityKey
    external_id: str
    occurrence_count: int = 1

    @property
    def is_duplicate(self) -> bool:
        return self.occurrence_count > 1


@dataclass(frozen=True, slots=True)
class RejectedActivation:
    """A portfolio row whose URL matched neither accepted address form."""

    external_id: str
    raw_url: str

    def describe(self) -> str:
        return f"URL not formed as expected for Portfolio ID:\t{self.external_id}\t{self.raw_url}"


@dataclass(frozen=True, slots=True)
class ManifestFile:
    """A tab-delimited entitlement manifest split into header and data rows."""

    name: str
    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class EntitlementRecord:
    identity_key: IdentityKey
    source_file: str
    raw_url: str
    title: str
    print_identifier: str
    online_identifier: str


class BibRecordOutcome(StrEnum):
    MATCHED = "matched"
    UNMATCHED_FIRST = "unmatched_first"
    UNMATCHED_DUPLICATE = "unmatched_duplicate"
    MALFORMED_LINK = "malformed_link"
    NO_LINK = "no_link"


@dataclass(frozen=True, slots=True)
class BibClassification:
    """Outcome of classifying one bibliographic record."""

    record: BibRecord
    outcome: BibRecordOutcome
    identity_key: IdentityKey | None = None


__all__ = [
    "ActivationRecord",
    "ActivationRow",
    "BibClassification",
    "BibRecordOutcome",
    "EntitlementRecord",
    "ManifestFile",
    "RejectedActivation",
]

"""Tabular reports assembled from the reconciliation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .activation import ActivationIndex
    from .bibliographic import BibliographicClassifier
    from .identity import IdentityKey
    from .model import ActivationRecord, EntitlementRecord

ENTITLEMENT_HEADER: Final[tuple[str, ...]] = (
    "Identity key",
    "Filename",
    "URL",
    "Title",
    "Print identifier",
    "Online identifier",
)
ACTIVATION_HEADER: Final[tuple[str, ...]] = ("Portfolio ID", "Identity key")
ACTIVATION_COUNT_HEADER: Final[tuple[str, ...]] = ("Identity key", "Portfolios")


@dataclass(slots=True)
class Report:
    """A named table with a fixed header and one row per entry."""

    name: str
    header: tuple[str, ...]
    rows: list[tuple[str, ...]] = field(default_factory=list[tuple[str, ...]])

    def __len__(self) -> int:
        return len(self.rows)

    def add(self, *values: str) -> None:
        if len(values) != len(self.header):
            raise ValueError(
                f"Report {self.name} expects {len(self.header)} columns, got {len(values)}"
            )
        self.rows.append(values)


def entitlement_report(name: str, records: Iterable[EntitlementRecord]) -> Report:
    report = Report(name=name, header=ENTITLEMENT_HEADER)
    for record in records:
        report.add(
            record.identity_key,
            record.source_file,
            record.raw_url,
            record.title,
            record.print_identifier,
            record.online_identifier,
        )
    return report


def activated_not_entitled_report(name: str, records: Iterable[ActivationRecord]) -> Report:
    report = Report(name=name, header=ACTIVATION_HEADER)
    for record in records:
        report.add(record.external_id, record.identity_key)
    return report


def activation_counts_report(name: str, activations: ActivationIndex) -> Report:
    report = Report(name=name, header=ACTIVATION_COUNT_HEADER)
    for record in activations:
        report.add(record.identity_key, str(record.occurrence_count))
    return report


def entitled_without_records(
    missing: Mapping[IdentityKey, EntitlementRecord],
    classifier: BibliographicClassifier,
) -> list[EntitlementRecord]:
    """Entitled, not activated, and never written to the load stream.

    These are the titles with nothing to load: no portfolio and no record.
    """

    return [record for key, record in missing.items() if not classifier.was_emitted(key)]


__all__ = [
    "ACTIVATION_COUNT_HEADER",
    "ACTIVATION_HEADER",
    "ENTITLEMENT_HEADER",
    "Report",
    "activated_not_entitled_report",
    "activation_counts_report",
    "entitled_without_records",
    "entitlement_report",
]

"""Index of entitlement manifest rows, joined against activations at ingest time."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, ClassVar

from .errors import InvalidManifestError
from .identity import DEFAULT_IDENTITY_MARKER, normalize
from .model import EntitlementRecord

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .activation import ActivationIndex
    from .identity import IdentityKey
    from .model import ManifestFile

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ManifestColumns:
    """Positions of the required manifest columns, resolved by header name."""

    REQUIRED: ClassVar[tuple[str, ...]] = (
        "publication_title",
        "print_identifier",
        "online_identifier",
        "title_url",
    )

    publication_title: int
    print_identifier: int
    online_identifier: int
    title_url: int

    @classmethod
    def from_header(cls, header: Sequence[str], *, source_file: str = "") -> ManifestColumns:
        positions: dict[str, int] = {}
        for index, name in enumerate(header):
            cleaned = name.strip()
            if cleaned in cls.REQUIRED:
                positions[cleaned] = index
        missing = [name for name in cls.REQUIRED if name not in positions]
        if missing:
            raise InvalidManifestError(source_file=source_file, missing_columns=missing)
        return cls(**positions)

    @property
    def width(self) -> int:
        return max(
            self.publication_title,
            self.print_identifier,
            self.online_identifier,
            self.title_url,
        ) + 1


@dataclass(slots=True)
class ManifestIngestResult:
    """Rows of one manifest split by whether their title is activated."""

    source_file: str
    found: list[EntitlementRecord] = field(default_factory=list[EntitlementRecord])
    not_found: list[EntitlementRecord] = field(default_factory=list[EntitlementRecord])
    skipped: int = 0


@dataclass(slots=True)
class EntitlementIndex:
    """Entitlement records keyed by identity key.

    Ingest only after the activation index is complete: each row is matched
    against it as it is read. For duplicated keys the last record ingested wins,
    both here and in the ``missing`` table, so manifests must be fed in a fixed
    order.
    """

    activations: ActivationIndex
    marker: str = DEFAULT_IDENTITY_MARKER
    records: dict[IdentityKey, EntitlementRecord] = field(
        default_factory=dict["IdentityKey", EntitlementRecord]
    )
    missing: dict[IdentityKey, EntitlementRecord] = field(
        default_factory=dict["IdentityKey", EntitlementRecord]
    )
    _occurrences: Counter[IdentityKey] = field(default_factory=Counter["IdentityKey"])

    def ingest(self, manifest: ManifestFile) -> ManifestIngestResult:
        """Index ``manifest`` and report which rows have an activated portfolio.

        Raises ``InvalidManifestError`` before touching the index when a required
        column is missing from the header.
        """

        columns = ManifestColumns.from_header(manifest.header, source_file=manifest.name)
        result = ManifestIngestResult(source_file=manifest.name)

        for line_number, row in enumerate(manifest.rows, start=2):
            record = self._parse_row(manifest.name, columns, row)
            if record is None:
                log.warning(
                    "Skipping malformed row %s in %s: %r", line_number, manifest.name, row
                )
                result.skipped += 1
                continue

            self.records[record.identity_key] = record
            self._occurrences[record.identity_key] += 1
            if record.identity_key in self.activations:
                result.found.append(record)
            else:
                result.not_found.append(record)
                self.missing[record.identity_key] = record

        log.info(
            "Ingested %s: found=%s, not_found=%s, skipped=%s",
            manifest.name,
            len(result.found),
            len(result.not_found),
            result.skipped,
        )
        return result

    def _parse_row(
        self,
        source_file: str,
        columns: ManifestColumns,
        row: Sequence[str],
    ) -> EntitlementRecord | None:
        if len(row) < columns.width:
            return None
        raw_url = row[columns.title_url].strip()
        if not raw_url:
            return None
        return EntitlementRecord(
            identity_key=normalize(raw_url, marker=self.marker),
            source_file=source_file,
            raw_url=raw_url,
            title=row[columns.publication_title].strip(),
            print_identifier=row[columns.print_identifier].strip(),
            online_identifier=row[columns.online_identifier].strip(),
        )

    @property
    def entitled_keys(self) -> set[IdentityKey]:
        return set(self._occurrences)

    def occurrences(self, key: IdentityKey) -> int:
        return self._occurrences[key]

    def duplicate_keys(self) -> list[IdentityKey]:
        return [key for key, count in self._occurrences.items() if count > 1]


__all__ = ["EntitlementIndex", "ManifestColumns", "ManifestIngestResult"]

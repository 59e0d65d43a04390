"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from ebookrecon.adapters.archive import extract_archives
from ebookrecon.adapters.discovery import discover_inputs, find_marc_files
from ebookrecon.adapters.kbart import read_manifest
from ebookrecon.adapters.marc import MarcXmlSink, read_marc_files
from ebookrecon.adapters.portfolio_export import read_portfolio_export
from ebookrecon.adapters.writers import ErrorLogFile, write_report
from ebookrecon.domain import (
    ActivationIndex,
    BibliographicClassifier,
    BibRecordOutcome,
    BibStreams,
    EntitlementIndex,
    InvalidManifestError,
    activated_not_entitled,
    entitled_without_records,
)
from ebookrecon.domain.reports import (
    activated_not_entitled_report,
    activation_counts_report,
    entitlement_report,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from ebookrecon.config import ReconcileConfig
    from ebookrecon.domain import EntitlementRecord, ManifestIngestResult
    from ebookrecon.domain.bibliographic import BibSummary


log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationSummary:
    """Outcome of a full reconciliation run."""

    activated: int = 0
    duplicate_activations: int = 0
    rejected_activations: int = 0
    found: int = 0
    not_found: int = 0
    invalid_manifests: list[str] = field(default_factory=list[str])
    activated_not_entitled: int = 0
    bibliographic: dict[BibRecordOutcome, int] = field(
        default_factory=dict[BibRecordOutcome, int]
    )
    entitled_without_records: int = 0


def build_activation_index(
    config: ReconcileConfig,
    exports: Sequence[Path],
) -> tuple[ActivationIndex, int]:
    """Ingest every activation export, reporting rejected rows to the error log."""

    index = ActivationIndex(forms=config.address_forms, marker=config.identity_marker)
    rejected = 0
    with ErrorLogFile(config.output_path("activation_errors")) as errors:
        for path in exports:
            result = index.ingest(read_portfolio_export(path, errors=errors), errors=errors)
            rejected += len(result.rejected)
            log.info(
                "Ingested %s: accepted=%s, rejected=%s",
                path.name,
                result.accepted,
                len(result.rejected),
            )

    for record in index.duplicates():
        log.warning(
            "Portfolio %s activated %s times for %s",
            record.external_id,
            record.occurrence_count,
            record.identity_key,
        )
    write_report(
        activation_counts_report("activation counts", index),
        config.output_path("activation_counts"),
    )
    return index, rejected


def ingest_manifests(
    index: EntitlementIndex,
    manifests: Sequence[Path],
    *,
    root: Path,
) -> tuple[list[ManifestIngestResult], list[str]]:
    """Ingest manifests in the given order, skipping invalid ones."""

    results: list[ManifestIngestResult] = []
    invalid: list[str] = []
    for path in manifests:
        name = str(path.relative_to(root)) if path.is_relative_to(root) else str(path)
        try:
            results.append(index.ingest(read_manifest(path, name=name)))
        except InvalidManifestError as exc:
            log.warning("%s ...skipping", exc)
            invalid.append(name)
    return results, invalid


def classify_bibliographic_records(
    config: ReconcileConfig,
    classifier: BibliographicClassifier,
    marc_files: Sequence[Path],
) -> BibSummary:
    with (
        MarcXmlSink(config.output_path("load_records")) as load,
        MarcXmlSink(config.output_path("bad_links")) as bad_link,
        MarcXmlSink(config.output_path("no_links")) as no_link,
    ):
        streams = BibStreams(load=load, bad_link=bad_link, no_link=no_link)
        classifications = classifier.classify_batches(read_marc_files(marc_files))
        return classifier.route(classifications, streams)


def run_reconciliation(config: ReconcileConfig) -> ReconciliationSummary:
    """Reconcile activations, entitlements and MARC records under the input directory.

    Activation exports are fully indexed before any manifest or MARC file is
    read. Each input category is processed in sorted path order.
    """

    config.output_dir.mkdir(parents=True, exist_ok=True)
    exclude = config.discovery_exclusions()
    inputs = discover_inputs(config.input_dir, exclude=exclude)
    summary = ReconciliationSummary()

    activations, summary.rejected_activations = build_activation_index(
        config, inputs.activation_exports
    )
    summary.activated = len(activations)
    summary.duplicate_activations = sum(1 for _ in activations.duplicates())

    entitlements = EntitlementIndex(activations=activations, marker=config.identity_marker)
    results, summary.invalid_manifests = ingest_manifests(
        entitlements, inputs.manifests, root=config.input_dir
    )
    found: list[EntitlementRecord] = [record for result in results for record in result.found]
    not_found: list[EntitlementRecord] = [
        record for result in results for record in result.not_found
    ]
    summary.found = len(found)
    summary.not_found = len(not_found)
    write_report(entitlement_report("found", found), config.output_path("found"))
    write_report(entitlement_report("not found", not_found), config.output_path("not_found"))
    for key in entitlements.duplicate_keys():
        log.info("Entitlement %s listed %s times", key, entitlements.occurrences(key))

    unentitled = activated_not_entitled(activations, entitlements.entitled_keys)
    summary.activated_not_entitled = len(unentitled)
    write_report(
        activated_not_entitled_report("activated not entitled", unentitled),
        config.output_path("activated_not_entitled"),
    )

    extract_archives(inputs.archives)
    classifier = BibliographicClassifier(
        activations=activations,
        platform_url=config.platform_url,
        marker=config.identity_marker,
    )
    bib_summary = classify_bibliographic_records(
        config,
        classifier,
        find_marc_files(config.input_dir, exclude=exclude),
    )
    summary.bibliographic = dict(bib_summary.outcomes)

    no_records = entitled_without_records(entitlements.missing, classifier)
    summary.entitled_without_records = len(no_records)
    write_report(
        entitlement_report("entitled not activated without records", no_records),
        config.output_path("entitled_without_records"),
    )

    log.info(
        "Finished reconciliation: activated=%s, duplicates=%s, rejected=%s, found=%s, "
        "not_found=%s, activated_not_entitled=%s, records=%s, no_records=%s",
        summary.activated,
        summary.duplicate_activations,
        summary.rejected_activations,
        summary.found,
        summary.not_found,
        summary.activated_not_entitled,
        bib_summary.total,
        summary.entitled_without_records,
    )
    return summary

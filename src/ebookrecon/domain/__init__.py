"""Reconciliation core: identity keys, indexes, classification and reports.

Stages run in a fixed order:
1) index activated portfolios
2) index entitlement manifests, matching each row against the activations
3) list activations without an entitlement
4) classify bibliographic records and route them to output streams
5) list entitled, unactivated titles that have no record to load
"""

from __future__ import annotations

from .activation import ActivationIndex, ActivationIngestResult
from .bibliographic import BibliographicClassifier, BibStreams, BibSummary
from .entitlement import EntitlementIndex, ManifestColumns, ManifestIngestResult
from .errors import InvalidManifestError
from .identity import AddressForms, IdentityKey, classify_activation_url, normalize
from .model import (
    ActivationRecord,
    ActivationRow,
    BibClassification,
    BibRecordOutcome,
    EntitlementRecord,
    ManifestFile,
    RejectedActivation,
)
from .reconciliation import activated_not_entitled
from .reports import Report, entitled_without_records

__all__ = [
    "ActivationIndex",
    "ActivationIngestResult",
    "ActivationRecord",
    "ActivationRow",
    "AddressForms",
    "BibClassification",
    "BibRecordOutcome",
    "BibStreams",
    "BibSummary",
    "BibliographicClassifier",
    "EntitlementIndex",
    "EntitlementRecord",
    "IdentityKey",
    "InvalidManifestError",
    "ManifestColumns",
    "ManifestFile",
    "ManifestIngestResult",
    "RejectedActivation",
    "Report",
    "activated_not_entitled",
    "classify_activation_url",
    "entitled_without_records",
    "normalize",
]

"""Output file naming for a reconciliation run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True, slots=True)
class OutputPaths:
    """File names written into the output directory."""

    found: str = "entitled-links-found.tsv"
    not_found: str = "entitled-links-not-found.tsv"
    activated_not_entitled: str = "activated-not-entitled.tsv"
    activation_errors: str = "activation-errors.log"
    activation_counts: str = "activation-counts.tsv"
    load_records: str = "load-records.xml"
    bad_links: str = "bad-links.xml"
    no_links: str = "no-links.xml"
    entitled_without_records: str = "entitled-not-activated-no-records.tsv"
    run_log: str = "ebookrecon.log"

    def resolve(self, output_dir: Path, name: str) -> Path:
        return output_dir / getattr(self, name)

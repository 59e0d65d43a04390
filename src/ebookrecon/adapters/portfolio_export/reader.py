"""Read catalog portfolio URL exports into activation rows."""

from __future__ import annotations

import csv
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from ebookrecon.domain.model import ActivationRow

from .schema import EXPORT_FIELDS, PortfolioExportRow

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from ebookrecon.domain.ports import ErrorChannel

log = getLogger(__name__)

UNDECODABLE = "\ufffd"


def read_portfolio_export(
    path: Path,
    *,
    errors: ErrorChannel | None = None,
) -> Iterator[ActivationRow]:
    """Yield activation rows from ``path``, skipping the header line.

    Lines are parsed one at a time so that a malformed line is reported and
    skipped without losing the rest of the file. Bytes that are not valid
    UTF-8 are replaced with U+FFFD and logged.
    """

    log.info("Reading portfolio export %s", path)
    with path.open(encoding="utf-8-sig", errors="replace", newline="") as handle:
        for line_number, line in enumerate(handle, start=1):
            if line_number == 1:
                continue
            row = _parse_line(path, line_number, line.rstrip("\r\n"), errors)
            if row is not None:
                yield row


def _parse_line(
    path: Path,
    line_number: int,
    line: str,
    errors: ErrorChannel | None,
) -> ActivationRow | None:
    if not line.strip():
        return None
    if UNDECODABLE in line:
        log.warning("%s line %s: replaced bytes that are not valid UTF-8", path.name, line_number)
    try:
        fields = next(csv.reader([line]))
    except csv.Error as exc:
        log.warning("%s line %s: parse failed on %r (%s)", path.name, line_number, line, exc)
        return None

    if len(fields) != len(EXPORT_FIELDS):
        message = (
            f"{path.name}: skipping line {line_number}: expected {len(EXPORT_FIELDS)} fields "
            f"and found {len(fields)}"
        )
        log.warning("%s", message)
        if errors is not None:
            errors(message)
        return None

    try:
        payload = PortfolioExportRow.model_validate(dict(zip(EXPORT_FIELDS, fields, strict=True)))
    except ValidationError as exc:
        message = f"{path.name}: skipping line {line_number}: invalid row {line!r}"
        log.warning("%s: %s", message, exc.errors(include_url=False))
        if errors is not None:
            errors(message)
        return None

    return ActivationRow(
        resource_type=payload.resource_type,
        external_id=payload.portfolio_id,
        raw_url=payload.url,
    )

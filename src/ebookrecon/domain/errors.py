"""Domain error definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class InvalidManifestError(ValueError):
    """Raised when an entitlement manifest header lacks required columns."""

    def __init__(self, *, source_file: str, missing_columns: Sequence[str]) -> None:
        self.source_file = source_file
        self.missing_columns = tuple(missing_columns)
        super().__init__(
            f"Invalid entitlement manifest {source_file}: "
            f"missing columns {', '.join(self.missing_columns)}"
        )

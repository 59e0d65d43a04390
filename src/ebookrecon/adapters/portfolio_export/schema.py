"""Pydantic model describing one row of a catalog portfolio URL export."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

EXPORT_FIELDS = ("resource_type", "portfolio_id", "url")


def _strip(value: object) -> object:
    if isinstance(value, str):
        return value.strip()
    return value


class PortfolioExportRow(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    resource_type: str
    portfolio_id: str = Field(min_length=1)
    url: str = Field(min_length=1)

    _strip_values = field_validator("resource_type", "portfolio_id", "url", mode="before")(_strip)

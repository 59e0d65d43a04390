"""Public interface for the portfolio export adapter."""

from __future__ import annotations

from .reader import read_portfolio_export
from .schema import PortfolioExportRow

__all__ = ["PortfolioExportRow", "read_portfolio_export"]

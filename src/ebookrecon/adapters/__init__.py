"""File-format adapters around the reconciliation core."""

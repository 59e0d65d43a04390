"""Complement of activations against entitlements."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Container

    from .activation import ActivationIndex
    from .identity import IdentityKey
    from .model import ActivationRecord


def activated_not_entitled(
    activations: ActivationIndex,
    entitled_keys: Container[IdentityKey],
) -> list[ActivationRecord]:
    """Return activated records whose key never appeared in an entitlement manifest.

    Each key is listed once, whatever its occurrence count, in the order the
    activations were ingested.
    """

    return [record for record in activations if record.identity_key not in entitled_keys]


__all__ = ["activated_not_entitled"]

"""Identity keys shared by activations, entitlements and bibliographic records.

The same e-book is addressed by different URLs depending on the access route
(proxied or direct, with or without trailing parameters). Everything from the
structural marker onwards identifies the resource, so that suffix is the join
key across all three datasets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, TypeAlias

IdentityKey: TypeAlias = str

DEFAULT_IDENTITY_MARKER: Final[str] = "/ebooks/"


def normalize(raw_url: str, *, marker: str = DEFAULT_IDENTITY_MARKER) -> IdentityKey:
    """Return the identity key for ``raw_url``.

    The key starts at the last occurrence of ``marker`` and runs to the end of the
    string. URLs without the marker pass through unchanged so they still get a
    stable key. Case, trailing slashes and query strings are left alone.
    """

    position = raw_url.rfind(marker)
    if position == -1:
        return raw_url
    return raw_url[position:]


@dataclass(frozen=True, slots=True)
class AddressForms:
    """The two accepted shapes of an activated portfolio URL."""

    proxy_prefix: str
    platform_url: str

    @property
    def proxied_platform_url(self) -> str:
        return self.proxy_prefix + self.platform_url


def classify_activation_url(raw_url: str, forms: AddressForms) -> str | None:
    """Return the platform URL behind ``raw_url`` or ``None`` for unknown forms."""

    if forms.proxy_prefix and raw_url.startswith(forms.proxied_platform_url):
        return raw_url[len(forms.proxy_prefix) :]
    if raw_url.startswith(forms.platform_url):
        return raw_url
    return None


__all__ = [
    "DEFAULT_IDENTITY_MARKER",
    "AddressForms",
    "IdentityKey",
    "classify_activation_url",
    "normalize",
]

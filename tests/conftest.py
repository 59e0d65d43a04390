from __future__ import annotations

import pytest

from ebookrecon.domain import ActivationIndex, ActivationRow, AddressForms

PROXY = "http://proxy.example.edu/login?url="
PLATFORM = "http://platform/"


@pytest.fixture
def forms() -> AddressForms:
    return AddressForms(proxy_prefix=PROXY, platform_url=PLATFORM)


@pytest.fixture
def activation_index(forms: AddressForms) -> ActivationIndex:
    return ActivationIndex(forms=forms)


@pytest.fixture
def populated_activations(activation_index: ActivationIndex) -> ActivationIndex:
    activation_index.ingest(
        [
            ActivationRow("Book", "P100", "http://platform/ebooks/111"),
            ActivationRow("Book", "P200", f"{PROXY}http://platform/ebooks/222"),
        ]
    )
    return activation_index

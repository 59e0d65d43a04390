from __future__ import annotations

import pytest

from ebookrecon.domain.identity import AddressForms, classify_activation_url, normalize

PROXY = "http://proxy.example.edu/login?url="


def test_normalize_collapses_proxied_and_direct_urls() -> None:
    proxied = normalize(f"{PROXY}http://platform/ebooks/12345")
    direct = normalize("http://platform/ebooks/12345")

    assert proxied == direct == "/ebooks/12345"


def test_normalize_passes_through_urls_without_marker() -> None:
    assert normalize("http://elsewhere/book/9") == "http://elsewhere/book/9"
    assert normalize("") == ""


def test_normalize_is_idempotent() -> None:
    key = normalize("https://host/ebooks/ebooks2/1/2?x=1")

    assert normalize(key) == key


def test_normalize_uses_last_marker_occurrence() -> None:
    assert normalize("http://a/ebooks/x/ebooks/77") == "/ebooks/77"


@pytest.mark.parametrize(
    ("first", "second"),
    [
        ("http://p/ebooks/1", "http://p/ebooks/1/"),
        ("http://p/ebooks/1", "http://p/EBOOKS/1"),
        ("http://p/ebooks/1", "http://p/ebooks/1?ref=x"),
    ],
)
def test_normalize_does_not_fold_suffix_variants(first: str, second: str) -> None:
    assert normalize(first) != normalize(second)


def test_normalize_accepts_custom_marker() -> None:
    assert normalize("http://host/titles/5", marker="/titles/") == "/titles/5"


def test_classify_activation_url_strips_proxy_prefix() -> None:
    forms = AddressForms(proxy_prefix=PROXY, platform_url="http://platform/")

    assert (
        classify_activation_url(f"{PROXY}http://platform/ebooks/1", forms)
        == "http://platform/ebooks/1"
    )
    assert classify_activation_url("http://platform/ebooks/1", forms) == "http://platform/ebooks/1"


def test_classify_activation_url_rejects_other_hosts() -> None:
    forms = AddressForms(proxy_prefix=PROXY, platform_url="http://platform/")

    assert classify_activation_url("http://other/ebooks/1", forms) is None
    assert classify_activation_url(f"{PROXY}http://other/ebooks/1", forms) is None

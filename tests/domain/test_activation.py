from __future__ import annotations

from ebookrecon.domain import ActivationIndex, ActivationRow

PROXY = "http://proxy.example.edu/login?url="


def test_first_external_id_wins_and_count_tracks_every_row(
    activation_index: ActivationIndex,
) -> None:
    activation_index.ingest(
        [
            ActivationRow("Book", "P1", "http://platform/ebooks/10"),
            ActivationRow("Book", "P2", f"{PROXY}http://platform/ebooks/10"),
        ]
    )
    activation_index.ingest([ActivationRow("Book", "P3", "http://platform/ebooks/10")])

    record = activation_index.lookup("/ebooks/10")

    assert record is not None
    assert record.external_id == "P1"
    assert record.occurrence_count == 3
    assert [item.identity_key for item in activation_index.duplicates()] == ["/ebooks/10"]


def test_unrecognised_urls_are_rejected_and_reported(activation_index: ActivationIndex) -> None:
    lines: list[str] = []

    result = activation_index.ingest(
        [
            ActivationRow("Book", "P9", "http://other/ebooks/9"),
            ActivationRow("Book", "P9", "http://other/ebooks/9"),
            ActivationRow("Book", "P1", "http://platform/ebooks/1"),
        ],
        errors=lines.append,
    )

    assert result.accepted == 1
    assert len(result.rejected) == 2
    assert lines == [
        "URL not formed as expected for Portfolio ID:\tP9\thttp://other/ebooks/9",
        "URL not formed as expected for Portfolio ID:\tP9\thttp://other/ebooks/9",
    ]
    assert "http://other/ebooks/9" not in activation_index
    assert activation_index.lookup("/ebooks/9") is None


def test_lookup_returns_none_for_unknown_key(activation_index: ActivationIndex) -> None:
    assert activation_index.lookup("/ebooks/unknown") is None
    assert len(activation_index) == 0


def test_iteration_follows_first_ingestion_order(activation_index: ActivationIndex) -> None:
    activation_index.ingest(
        [
            ActivationRow("Book", "B", "http://platform/ebooks/2"),
            ActivationRow("Book", "A", "http://platform/ebooks/1"),
            ActivationRow("Book", "C", "http://platform/ebooks/2"),
        ]
    )

    assert [record.external_id for record in activation_index] == ["B", "A"]

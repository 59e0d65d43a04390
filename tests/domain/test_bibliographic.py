from __future__ import annotations

from ebookrecon.domain import (
    ActivationIndex,
    BibliographicClassifier,
    BibRecordOutcome,
    BibStreams,
)
from tests.helpers.records import FakeBibRecord, ListSink

PLATFORM = "http://platform/"


def _classifier(activations: ActivationIndex) -> BibliographicClassifier:
    return BibliographicClassifier(activations=activations, platform_url=PLATFORM)


def test_outcomes_follow_link_and_activation_state(
    populated_activations: ActivationIndex,
) -> None:
    classifier = _classifier(populated_activations)

    outcomes = [
        classifier.classify(FakeBibRecord("No link", None)).outcome,
        classifier.classify(FakeBibRecord("Other host", "http://other/ebooks/1")).outcome,
        classifier.classify(FakeBibRecord("Active", "http://platform/ebooks/111")).outcome,
        classifier.classify(FakeBibRecord("New", "http://platform/ebooks/333")).outcome,
        classifier.classify(FakeBibRecord("Again", "http://platform/ebooks/333")).outcome,
    ]

    assert outcomes == [
        BibRecordOutcome.NO_LINK,
        BibRecordOutcome.MALFORMED_LINK,
        BibRecordOutcome.MATCHED,
        BibRecordOutcome.UNMATCHED_FIRST,
        BibRecordOutcome.UNMATCHED_DUPLICATE,
    ]


def test_proxied_record_link_is_malformed(populated_activations: ActivationIndex) -> None:
    classifier = _classifier(populated_activations)

    result = classifier.classify(
        FakeBibRecord("Proxied", "http://proxy.example.edu/login?url=http://platform/ebooks/1")
    )

    assert result.outcome is BibRecordOutcome.MALFORMED_LINK
    assert result.identity_key is None


def test_load_stream_holds_one_record_per_key_across_batches(
    activation_index: ActivationIndex,
) -> None:
    classifier = _classifier(activation_index)
    first = FakeBibRecord("Copy 1", "http://platform/ebooks/333", source="a.xml")
    second = FakeBibRecord("Copy 2", "http://platform/ebooks/333", source="b.xml")
    other = FakeBibRecord("Other", "http://platform/ebooks/555", source="b.xml", position=2)
    streams = BibStreams(load=ListSink(), bad_link=ListSink(), no_link=ListSink())

    summary = classifier.route(classifier.classify_batches([[first], [second, other]]), streams)

    assert streams.load.records == [first, other]
    assert summary.count(BibRecordOutcome.UNMATCHED_FIRST) == 2
    assert summary.count(BibRecordOutcome.UNMATCHED_DUPLICATE) == 1
    assert summary.total == 3
    assert classifier.was_emitted("/ebooks/333")
    assert classifier.duplicate_count("/ebooks/333") == 1
    assert classifier.duplicate_count("/ebooks/555") == 0


def test_route_sends_bad_and_missing_links_to_their_streams(
    populated_activations: ActivationIndex,
) -> None:
    classifier = _classifier(populated_activations)
    no_link = FakeBibRecord("No link", None)
    blank_link = FakeBibRecord("Blank link", "")
    bad_link = FakeBibRecord("Bad link", "ftp://platform/ebooks/1")
    matched = FakeBibRecord("Matched", "http://platform/ebooks/222")
    streams = BibStreams(load=ListSink(), bad_link=ListSink(), no_link=ListSink())

    classifier.route(
        classifier.classify_batches([[no_link, blank_link, bad_link, matched]]), streams
    )

    assert streams.no_link.records == [no_link, blank_link]
    assert streams.bad_link.records == [bad_link]
    assert streams.load.records == []
    assert not classifier.was_emitted("/ebooks/222")

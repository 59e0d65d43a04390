from __future__ import annotations

from pathlib import Path  # noqa: TC003

from ebookrecon.adapters.kbart import read_manifest


def test_read_manifest_splits_header_and_rows(tmp_path: Path) -> None:
    path = tmp_path / "kbart.txt"
    path.write_text(
        "publication_title\tprint_identifier\tonline_identifier\ttitle_url\r\n"
        "Book\t111\t222\thttp://platform/ebooks/1\r\n"
        "\n"
        "Other\t\t\thttp://platform/ebooks/2\n",
        encoding="utf-8",
    )

    manifest = read_manifest(path, name="kbart.txt")

    assert manifest.name == "kbart.txt"
    assert manifest.header == (
        "publication_title",
        "print_identifier",
        "online_identifier",
        "title_url",
    )
    assert manifest.rows == (
        ("Book", "111", "222", "http://platform/ebooks/1"),
        ("Other", "", "", "http://platform/ebooks/2"),
    )


def test_read_empty_manifest(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")

    manifest = read_manifest(path)

    assert manifest.header == ()
    assert manifest.rows == ()
    assert manifest.name == str(path)


def test_invalid_utf8_bytes_are_replaced(tmp_path: Path) -> None:
    path = tmp_path / "latin1.txt"
    path.write_bytes(
        b"publication_title\tprint_identifier\tonline_identifier\ttitle_url\n"
        b"Caf\xe9\t1\t2\thttp://platform/ebooks/9\n"
    )

    manifest = read_manifest(path)

    assert manifest.rows == (("Caf\ufffd", "1", "2", "http://platform/ebooks/9"),)

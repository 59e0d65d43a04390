from __future__ import annotations

from pathlib import Path  # noqa: TC003

from ebookrecon.adapters.discovery import discover_inputs, find_marc_files


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


def test_inputs_are_grouped_and_sorted(tmp_path: Path) -> None:
    b_manifest = _touch(tmp_path / "b" / "kbart.txt")
    a_manifest = _touch(tmp_path / "a.txt")
    export = _touch(tmp_path / "urls.CSV")
    archive = _touch(tmp_path / "marc.zip")
    _touch(tmp_path / "notes.md")

    inputs = discover_inputs(tmp_path)

    assert inputs.manifests == (a_manifest, b_manifest)
    assert inputs.activation_exports == (export,)
    assert inputs.archives == (archive,)


def test_excluded_paths_are_skipped(tmp_path: Path) -> None:
    kept = _touch(tmp_path / "in" / "batch.xml")
    _touch(tmp_path / "reports" / "load-records.xml")
    binary = _touch(tmp_path / "in" / "batch.mrc")

    found = find_marc_files(tmp_path, exclude=[tmp_path / "reports"])

    assert found == (binary, kept)

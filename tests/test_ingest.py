from __future__ import annotations

import json
from pathlib import Path

import pytest

from diary_reader.ingest import ScanPage, ingest_scan, load_scan
from diary_reader.ocr.base import OcrEngine

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


class FakeEngine(OcrEngine):
    name = "fake"

    def __init__(self, text: str) -> None:
        self.text = text
        self.calls: list[tuple[bytes, str]] = []

    def ocr_image_bytes(self, image_bytes: bytes, content_type: str = "image/png") -> str:
        self.calls.append((image_bytes, content_type))
        return self.text


def test_load_scan_reads_image(tmp_path: Path) -> None:
    p = tmp_path / "page 1.png"
    p.write_bytes(PNG_BYTES)

    page = load_scan(p, entry_date="2024-05-01", page_number=7)
    assert page.file_name == "page 1.png"
    assert page.content_type == "image/png"
    assert page.image_bytes == PNG_BYTES
    assert page.entry_date == "2024-05-01"
    assert page.page_number == 7


def test_load_scan_rejects_non_images(tmp_path: Path) -> None:
    p = tmp_path / "notes.txt"
    p.write_text("hello", encoding="utf-8")
    with pytest.raises(ValueError):
        load_scan(p)


def test_load_scan_rejects_empty_file(tmp_path: Path) -> None:
    p = tmp_path / "blank.jpg"
    p.write_bytes(b"")
    with pytest.raises(ValueError):
        load_scan(p)


def test_load_scan_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_scan(tmp_path / "nope.png")


def test_ingest_scan_segments_ocr_text() -> None:
    engine = FakeEngine("\nleftover from last page\nMar 4\nWent for a walk.\n\nMar 5\nRain.\n")
    page = ScanPage(
        file_name="scan.jpg",
        image_bytes=b"jpeg",
        content_type="image/jpeg",
        entry_date="2024-03-03",
    )

    result = ingest_scan(page, engine)

    assert engine.calls == [(b"jpeg", "image/jpeg")]
    assert result.clean_text == "leftover from last page\nMar 4\nWent for a walk.\n\nMar 5\nRain."
    assert [(s.index, s.date, s.text) for s in result.segments] == [
        (0, "2024-03-03", "leftover from last page"),
        (1, "2024-03-04", "Mar 4\nWent for a walk."),
        (2, "2024-03-05", "Mar 5\nRain."),
    ]


def test_ingest_scan_blank_ocr_keeps_raw_text() -> None:
    page = ScanPage(file_name="x.png", image_bytes=PNG_BYTES, content_type="image/png")
    result = ingest_scan(page, FakeEngine("  \n"))
    assert result.clean_text == "  \n"
    assert result.segments == []


def test_ingest_result_record_is_json_ready() -> None:
    page = ScanPage(file_name="x.png", image_bytes=PNG_BYTES, content_type="image/png", page_number=3)
    rec = ingest_scan(page, FakeEngine("Just prose.\n")).to_record()

    assert json.loads(json.dumps(rec)) == {
        "source_file_name": "x.png",
        "page_number": 3,
        "entry_date": None,
        "raw_text": "Just prose.\n",
        "clean_text": "Just prose.",
        "segments": [{"segment_index": 0, "segment_date": None, "text": "Just prose."}],
    }

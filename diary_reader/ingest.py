from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path

from .date.types import Segment
from .ocr.base import OcrEngine
from .segment import segment_diary_text


@dataclass(frozen=True)
class ScanPage:
    """One uploaded scan plus the metadata the uploader supplied."""

    file_name: str
    image_bytes: bytes
    content_type: str
    entry_date: str | None = None  # YYYY-MM-DD, fallback for undated text
    page_number: int | None = None


@dataclass(frozen=True)
class IngestResult:
    page: ScanPage
    raw_text: str
    clean_text: str
    segments: list[Segment] = field(default_factory=list)

    def to_record(self) -> dict[str, object]:
        return {
            "source_file_name": self.page.file_name,
            "page_number": self.page.page_number,
            "entry_date": self.page.entry_date,
            "raw_text": self.raw_text,
            "clean_text": self.clean_text,
            "segments": [s.to_record() for s in self.segments],
        }


def guess_content_type(file_name: str) -> str:
    ctype, _ = mimetypes.guess_type(file_name)
    return ctype or "application/octet-stream"


def load_scan(path: Path, *, entry_date: str | None = None, page_number: int | None = None) -> ScanPage:
    """Read a scan from disk, rejecting anything that is not a non-empty image."""
    if not path.exists():
        raise FileNotFoundError(f"Scan not found: {path}")

    ctype = guess_content_type(path.name)
    if not ctype.startswith("image/"):
        raise ValueError(f"Only image scans are supported (jpg/png/etc.), got {ctype}: {path.name}")

    b = path.read_bytes()
    if not b:
        raise ValueError(f"Scan is empty: {path}")

    return ScanPage(
        file_name=path.name,
        image_bytes=b,
        content_type=ctype,
        entry_date=entry_date or None,
        page_number=page_number,
    )


def ingest_scan(page: ScanPage, engine: OcrEngine) -> IngestResult:
    """OCR a scan and split its text into dated segments."""
    raw = engine.ocr_image_bytes(page.image_bytes, page.content_type)
    clean = raw.strip() or raw
    return IngestResult(
        page=page,
        raw_text=raw,
        clean_text=clean,
        segments=segment_diary_text(clean, page.entry_date),
    )

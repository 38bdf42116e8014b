from __future__ import annotations

from abc import ABC, abstractmethod


class OcrEngine(ABC):
    name: str

    @abstractmethod
    def ocr_image_bytes(self, image_bytes: bytes, content_type: str = "image/png") -> str:
        """Return OCR text for a scanned page image. Should return a trailing newline when non-empty."""
        raise NotImplementedError


def finish_text(text: str) -> str:
    out = text.strip()
    return out + ("\n" if out else "")

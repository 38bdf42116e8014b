from __future__ import annotations

import base64
import os
from dataclasses import dataclass

import requests
from dotenv import load_dotenv

from .base import OcrEngine, finish_text

TRANSCRIBE_PROMPT = (
    "This is a scanned handwritten diary page. "
    "Transcribe the handwriting as accurately as possible into plain text. "
    "Preserve the original wording. Do not summarize or add commentary."
)


def to_data_url(image_bytes: bytes, content_type: str) -> str:
    b64 = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{content_type or 'image/jpeg'};base64,{b64}"


@dataclass
class OpenAIVisionEngine(OcrEngine):
    """Transcribe a page with an OpenAI vision chat model."""

    api_key: str
    model: str = "gpt-4o-mini"
    base_url: str = "https://api.openai.com/v1"
    max_tokens: int = 4096
    timeout_s: int = 180

    name: str = "openai"

    @classmethod
    def from_env(cls, *, model: str | None = None, timeout_s: int = 180) -> "OpenAIVisionEngine":
        load_dotenv()
        key = os.environ.get("OPENAI_API_KEY", "").strip()
        if not key:
            raise RuntimeError("Missing OPENAI_API_KEY (set env var or create .env)")
        return cls(
            api_key=key,
            model=model or os.environ.get("OPENAI_OCR_MODEL", "").strip() or "gpt-4o-mini",
            base_url=os.environ.get("OPENAI_BASE_URL", "").strip() or "https://api.openai.com/v1",
            timeout_s=int(timeout_s),
        )

    def ocr_image_bytes(self, image_bytes: bytes, content_type: str = "image/png") -> str:
        payload = {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": TRANSCRIBE_PROMPT},
                        {"type": "image_url", "image_url": {"url": to_data_url(image_bytes, content_type)}},
                    ],
                }
            ],
            "max_tokens": int(self.max_tokens),
        }
        r = requests.post(
            self.base_url.rstrip("/") + "/chat/completions",
            headers={"Authorization": f"Bearer {self.api_key}"},
            json=payload,
            timeout=int(self.timeout_s),
        )
        if r.status_code != 200:
            raise RuntimeError(f"OpenAI transcription failed ({r.status_code}): {r.text}")

        choices = r.json().get("choices") or []
        msg = (choices[0].get("message") or {}) if choices else {}
        return finish_text(str(msg.get("content") or ""))

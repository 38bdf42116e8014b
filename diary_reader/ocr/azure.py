from __future__ import annotations

import os
import time
from dataclasses import dataclass

import requests
from dotenv import load_dotenv

from .base import OcrEngine, finish_text


@dataclass
class AzureVisionReadEngine(OcrEngine):
    """Azure AI Vision Read (v3.2) engine for scanned diary pages."""

    endpoint: str
    key: str
    language: str = "en"
    timeout_s: int = 180
    poll_interval_s: float = 0.7

    name: str = "azure"

    @classmethod
    def from_env(cls, *, language: str = "en", timeout_s: int = 180) -> "AzureVisionReadEngine":
        load_dotenv()
        endpoint = os.environ.get("AZURE_VISION_ENDPOINT", "").strip()
        key = os.environ.get("AZURE_VISION_KEY", "").strip()
        if not endpoint or not key:
            raise RuntimeError("Missing AZURE_VISION_ENDPOINT/AZURE_VISION_KEY (set env vars or create .env)")
        return cls(endpoint=endpoint, key=key, language=language, timeout_s=int(timeout_s))

    def _submit(self, image_bytes: bytes) -> str:
        analyze_url = self.endpoint.rstrip("/") + "/vision/v3.2/read/analyze"
        headers = {
            "Ocp-Apim-Subscription-Key": self.key,
            "Content-Type": "application/octet-stream",
        }
        r = requests.post(
            analyze_url,
            headers=headers,
            params={"language": self.language},
            data=image_bytes,
            timeout=30,
        )
        if r.status_code != 202:
            raise RuntimeError(f"Azure analyze failed ({r.status_code}): {r.text}")

        op_loc = r.headers.get("Operation-Location")
        if not op_loc:
            raise RuntimeError("Azure response missing Operation-Location header")
        return op_loc

    @staticmethod
    def _lines(result: dict) -> list[str]:
        analyze = result.get("analyzeResult") or {}
        out: list[str] = []
        for page in analyze.get("readResults") or []:
            for line in page.get("lines") or []:
                t = str(line.get("text") or "").strip()
                if t:
                    out.append(t)
        return out

    def ocr_image_bytes(self, image_bytes: bytes, content_type: str = "image/png") -> str:
        op_loc = self._submit(image_bytes)

        deadline = time.time() + int(self.timeout_s)
        while time.time() < deadline:
            pr = requests.get(op_loc, headers={"Ocp-Apim-Subscription-Key": self.key}, timeout=30)
            if pr.status_code != 200:
                raise RuntimeError(f"Azure poll failed ({pr.status_code}): {pr.text}")
            j = pr.json()
            status = str(j.get("status", "")).lower()
            if status == "succeeded":
                return finish_text("\n".join(self._lines(j)))
            if status == "failed":
                raise RuntimeError(f"Azure Read failed: {j}")
            time.sleep(self.poll_interval_s)

        raise RuntimeError("Azure Read timed out polling")

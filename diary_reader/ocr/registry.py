from __future__ import annotations

from .azure import AzureVisionReadEngine
from .base import OcrEngine
from .openai_vision import OpenAIVisionEngine


def build_engine(name: str, **kwargs) -> OcrEngine:
    """Engine factory; both engines read their credentials from the environment."""
    n = (name or "openai").lower()
    if n in ("openai", "openai-vision", "openai_vision"):
        return OpenAIVisionEngine.from_env(
            model=kwargs.get("openai_model"),
            timeout_s=int(kwargs.get("timeout_s", 180)),
        )
    if n in ("azure", "azure-read", "azure_read"):
        return AzureVisionReadEngine.from_env(
            language=str(kwargs.get("azure_language", "en")),
            timeout_s=int(kwargs.get("timeout_s", 180)),
        )

    raise ValueError(f"Unsupported OCR engine: {name} (expected 'openai' or 'azure')")

from __future__ import annotations

import logging
import os
import threading
from typing import Any, Optional, Protocol

from google import genai

_log = logging.getLogger("mathbuddy.llm")

DEFAULT_MODEL = "gemini-2.0-flash"


class LLMError(RuntimeError):
    """The text-generation service could not produce a reply."""


class TextGenerator(Protocol):
    def generate(self, prompt: str, json_mode: bool = False) -> str: ...


class GeminiGenerator:
    """
    Thin wrapper over google-genai. One request per prompt, no streaming;
    timeouts/retries are whatever the SDK defaults to.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key
        self.model = model or os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
        self._client: Any = None
        self._lock = threading.Lock()

    def _resolve_api_key(self) -> str:
        key = self.api_key or os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
        if not key:
            raise LLMError("GOOGLE_API_KEY not configured on server.")
        return key

    def _get_client(self) -> Any:
        with self._lock:
            if self._client is None:
                self._client = genai.Client(api_key=self._resolve_api_key())
            return self._client

    def generate(self, prompt: str, json_mode: bool = False) -> str:
        client = self._get_client()
        # json_mode asks the model for a bare JSON body; callers still normalize the reply
        config = {"response_mime_type": "application/json"} if json_mode else None
        try:
            resp = client.models.generate_content(
                model=self.model, contents=prompt, config=config
            )
        except Exception as e:
            _log.warning("gemini_call_failed model=%s err=%s", self.model, type(e).__name__)
            raise LLMError(f"{type(e).__name__}: {e}") from e
        return resp.text or ""


_generator: Optional[GeminiGenerator] = None


def get_generator() -> TextGenerator:
    """FastAPI dependency; tests swap it out via app.dependency_overrides."""
    global _generator
    if _generator is None:
        _generator = GeminiGenerator()
    return _generator

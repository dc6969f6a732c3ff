"""Thin wrapper around the Ollama generate API."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import httpx

from rfp_dataset.config import Settings, settings
from rfp_dataset.errors import LLMConnectionError, LLMError, LLMResponseError
from rfp_dataset.utils.tokenization import estimate_prompt_tokens, load_prompt_encoding

logger = logging.getLogger(__name__)


def connection_help(url: str, model: str, headline: Optional[str] = None) -> str:
    """Remediation text shown to the user when Ollama cannot be used."""
    headline = headline or f"Connection Failed: Could not reach Ollama at {url}."
    return (
        f"{headline}\n\n"
        "POSSIBLE CAUSES & FIXES:\n"
        "1. Ollama is not running.\n"
        "   -> Fix: Start Ollama in your terminal:\n"
        "   ollama serve\n\n"
        "2. Ollama is listening on another address or rejects this origin.\n"
        "   -> Fix: Point OLLAMA_URL at the running server, or restart it with\n"
        "   OLLAMA_HOST and OLLAMA_ORIGINS set, e.g.:\n"
        '   OLLAMA_ORIGINS="*" ollama serve\n\n'
        f"3. The model '{model}' is not pulled.\n"
        f"   -> Fix: Run: ollama pull {model}"
    )


class OllamaClient:
    """Sends one prompt per call to a local Ollama server."""

    def __init__(
        self,
        config: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config or settings
        self.url = self.config.ollama_url
        self.model = self.config.ollama_model
        self._transport = transport

    def build_payload(self, prompt: str, json_mode: bool = False) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": self.config.temperature,
                "num_ctx": self.config.num_ctx,
            },
        }
        if json_mode:
            payload["format"] = "json"
        return payload

    def generate(self, prompt: str, json_mode: bool = False) -> str:
        """Return the raw completion for ``prompt``.

        Raises LLMConnectionError when the server is unreachable or its reply is
        malformed, LLMResponseError on a non-success status and LLMError for
        anything else.
        """
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must be non-empty text.")
        if self.config.warn_on_context_overflow:
            self._check_context(prompt)

        started = time.perf_counter()
        try:
            with httpx.Client(timeout=self.config.request_timeout, transport=self._transport) as client:
                response = client.post(self.url, json=self.build_payload(prompt, json_mode))
        except httpx.TransportError as exc:
            logger.error("Ollama connection error: %s", exc)
            raise LLMConnectionError(connection_help(self.url, self.model)) from exc
        except Exception as exc:
            logger.error("Ollama request failed: %s", exc)
            raise LLMError(f"Failed to connect to Ollama: {exc}") from exc

        if not response.is_success:
            raise LLMResponseError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Ollama returned a non-JSON body: %.200s", response.text)
            raise LLMConnectionError(
                connection_help(self.url, self.model, "Invalid response format from Ollama.")
            ) from exc
        if not isinstance(data, dict) or not isinstance(data.get("response"), str):
            logger.error("Ollama reply is missing the 'response' field: %.200s", response.text)
            raise LLMConnectionError(
                connection_help(self.url, self.model, "Invalid response format from Ollama.")
            )

        logger.debug(
            "Ollama %s replied in %.2fs (json_mode=%s, prompt_chars=%s)",
            self.model,
            time.perf_counter() - started,
            json_mode,
            len(prompt),
        )
        return data["response"]

    def _check_context(self, prompt: str) -> None:
        try:
            encoding = load_prompt_encoding(self.config.allow_tiktoken_fallback)
            tokens = estimate_prompt_tokens(prompt, encoding)
        except Exception as exc:
            logger.debug("Skipping prompt size check: %s", exc)
            return
        if tokens > self.config.num_ctx:
            logger.warning(
                "Prompt of ~%s tokens exceeds num_ctx=%s; Ollama will truncate it. "
                "Lower PAGE_CHUNK_SIZE or raise NUM_CTX.",
                tokens,
                self.config.num_ctx,
            )

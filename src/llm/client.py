"""Chat-completions client for the language model.

The model is treated as an opaque text-to-text function. Calls go to an OpenAI-style
`/chat/completions` endpoint; the default base URL is Gemini's OpenAI-compatible API.
"""

from __future__ import annotations

import http.client
import json
import logging
from dataclasses import dataclass
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from src.config.settings import DEFAULT_LLM_API_BASE, DEFAULT_LLM_MODEL, Settings

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    """Raised when the language model call fails or returns an unusable response."""


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for the OpenAI-style Chat Completions API call."""

    api_key: str
    model: str = DEFAULT_LLM_MODEL
    api_base: str = DEFAULT_LLM_API_BASE
    timeout_s: float = 30.0


def llm_config_from_settings(settings: Settings) -> LLMConfig:
    """Build the LLM config from validated application settings."""

    return LLMConfig(
        api_key=settings.llm_api_key,
        model=settings.llm_model,
        api_base=settings.llm_api_base,
        timeout_s=settings.llm_timeout_s,
    )


def _chat_completions_url(api_base: str) -> str:
    return api_base.rstrip("/") + "/chat/completions"


class ChatModel:
    """Single-turn prompt completion against a chat-completions endpoint."""

    def __init__(self, config: LLMConfig) -> None:
        self.config = config

    def complete(self, prompt: str, *, temperature: float = 0.0) -> str:
        """Send `prompt` as a single user message and return the reply text."""

        payload = {
            "model": self.config.model,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

        req = Request(
            _chat_completions_url(self.config.api_base),
            method="POST",
            headers={
                "Authorization": f"Bearer {self.config.api_key}",
                "Content-Type": "application/json",
            },
            data=json.dumps(payload).encode(),
        )

        try:
            with urlopen(req, timeout=self.config.timeout_s) as resp:  # noqa: S310 (configured API host)
                body = resp.read()
        except HTTPError as exc:
            raise LLMError(f"LLM HTTP error: {exc.code}") from exc
        except URLError as exc:
            raise LLMError("LLM connection error") from exc
        except (TimeoutError, OSError, http.client.HTTPException) as exc:
            raise LLMError(f"LLM request failed: {exc}") from exc

        try:
            decoded = json.loads(body)
            content = decoded["choices"][0]["message"]["content"]
        except Exception as exc:  # noqa: BLE001
            raise LLMError("Unexpected LLM response format") from exc

        if not isinstance(content, str):
            raise LLMError("Unexpected LLM response format")
        return content

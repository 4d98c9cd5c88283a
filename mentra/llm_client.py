"""Chat completion client for mentor explanations.

Talks to OpenAI, Azure OpenAI (when ``AZURE_OPENAI_ENDPOINT`` is set) or an
OpenAI-compatible gateway through ``base_url``. Every failure surfaces as
``LLMClientError`` so callers can map it to a single user-facing error.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_AZURE_API_VERSION = "2024-05-01-preview"


class LLMClientError(RuntimeError):
    """Raised when a mentor explanation cannot be generated."""


@dataclass(frozen=True)
class LLMConfig:
    model: str = "gpt-4.1-mini"
    temperature: float = 0.7
    max_tokens: int = 1000
    timeout_seconds: int = 60


class OpenAIChatClient:
    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        azure_endpoint: str | None = None,
        api_version: str | None = None,
    ):
        api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise LLMClientError("Missing OPENAI_API_KEY (the Azure OpenAI key also goes here)")
        azure_endpoint = azure_endpoint or os.getenv("AZURE_OPENAI_ENDPOINT")

        try:
            from openai import AzureOpenAI, OpenAI
        except ImportError as exc:  # pragma: no cover - import guard
            raise LLMClientError(
                "openai package is not installed. Run: pip install -e ."
            ) from exc

        if azure_endpoint:
            self._client = AzureOpenAI(
                api_key=api_key,
                azure_endpoint=azure_endpoint,
                api_version=api_version
                or os.getenv("AZURE_OPENAI_API_VERSION", DEFAULT_AZURE_API_VERSION),
            )
            return

        client_kwargs = {"api_key": api_key}
        if base_url:
            client_kwargs["base_url"] = base_url
        self._client = OpenAI(**client_kwargs)

    def complete(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        config: LLMConfig,
        retries: int = 2,
    ) -> str:
        last_exc: Exception | None = None

        for attempt in range(retries + 1):
            try:
                response = self._create_completion(
                    system_prompt=system_prompt,
                    user_prompt=user_prompt,
                    config=config,
                )
                content = response.choices[0].message.content
                if not content:
                    raise LLMClientError("Mentor model returned an empty explanation")
                return content.strip()
            except Exception as exc:  # pragma: no cover - external API behavior
                last_exc = exc
                if attempt < retries:
                    logger.warning(
                        "Mentor completion failed on %s (attempt %d of %d): %s",
                        config.model,
                        attempt + 1,
                        retries + 1,
                        exc,
                    )
                    time.sleep(1.0 + attempt)
                    continue

        raise LLMClientError(
            f"Mentor explanation failed after {retries + 1} attempt(s): {last_exc}"
        ) from last_exc

    def _create_completion(self, *, system_prompt: str, user_prompt: str, config: LLMConfig):
        base_kwargs = {
            "model": config.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": config.temperature,
            "timeout": config.timeout_seconds,
        }

        # Providers disagree on max_tokens vs max_completion_tokens.
        token_variants = [
            {"max_completion_tokens": config.max_tokens},
            {"max_tokens": config.max_tokens},
        ]

        token_error: Exception | None = None
        for token_kwargs in token_variants:
            try:
                return self._client.chat.completions.create(
                    **base_kwargs,
                    **token_kwargs,
                )
            except Exception as exc:  # pragma: no cover - provider compatibility handling
                token_error = exc
                message = str(exc).lower()
                if "max_tokens" in message or "max_completion_tokens" in message:
                    continue
                raise

        raise LLMClientError(
            f"{config.model} accepted neither max_completion_tokens nor max_tokens: {token_error}"
        )

"""
Ollama LLM provider implementation.

Talks to the Ollama HTTP API, optionally constraining output to a JSON
schema through the ``format`` field.
"""

import time
from typing import Any

import httpx

from swipelite.config import get_logger, get_settings
from swipelite.core.exceptions import LLMResponseError, LLMUnavailableError
from swipelite.core.interfaces import HealthStatus, LLMResponse
from swipelite.infrastructure.llm.base import BaseLLMProvider

logger = get_logger(__name__)


class OllamaProvider(BaseLLMProvider):
    """Ollama HTTP API provider."""

    provider_name = "ollama"

    def __init__(
        self,
        host: str | None = None,
        model: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.host = (host or settings.llm.host).rstrip("/")
        self.model = model or settings.llm.model_name
        self.timeout = settings.llm.timeout
        self.max_tokens = settings.llm.max_tokens
        self.temperature = settings.llm.temperature
        self._transport = transport

    async def _make_request(self, endpoint: str, payload: dict) -> dict:
        """Make HTTP request to Ollama API."""
        url = f"{self.host}/{endpoint}"

        async with httpx.AsyncClient(timeout=self.timeout + 5, transport=self._transport) as client:
            response = await client.post(url, json=payload, timeout=self.timeout)

            if response.status_code != 200:
                error_text = response.text[:200]
                raise LLMUnavailableError("ollama", f"HTTP {response.status_code}: {error_text}")

            try:
                data = response.json()
            except ValueError as e:
                raise LLMResponseError(f"Non-JSON body from {endpoint}: {e}", response.text) from e

        if not isinstance(data, dict):
            raise LLMResponseError(f"Unexpected body from {endpoint}", response.text)
        return data

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        json_schema: dict[str, Any] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Generate a completion."""
        temperature = temperature if temperature is not None else self.temperature
        max_tokens = max_tokens or self.max_tokens

        payload: dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": temperature,
                "num_predict": max_tokens,
            },
        }
        if system_prompt:
            payload["system"] = system_prompt
        if json_schema is not None:
            payload["format"] = json_schema

        async def _do_generate() -> LLMResponse:
            start_time = time.time()
            result = await self._make_request("api/generate", payload)
            elapsed = time.time() - start_time

            response_text = str(result.get("response") or "")
            if not response_text.strip():
                raise LLMResponseError(
                    f"Empty response (done_reason={result.get('done_reason')})",
                    response_text,
                )

            logger.info(
                "ollama_generate",
                model=self.model,
                prompt_len=len(prompt),
                response_len=len(response_text),
                elapsed_ms=int(elapsed * 1000),
            )

            return LLMResponse(
                text=response_text,
                model=self.model,
                done=result.get("done", True),
                done_reason=result.get("done_reason"),
            )

        return await self._with_retry(_do_generate)

    async def check_health(self) -> HealthStatus:
        """Check that the server answers and the model is pulled."""
        start_time = time.time()
        try:
            async with httpx.AsyncClient(timeout=5, transport=self._transport) as client:
                response = await client.get(f"{self.host}/api/tags")
        except httpx.HTTPError as e:
            return HealthStatus(available=False, provider="ollama", model=self.model, error=str(e))

        elapsed_ms = (time.time() - start_time) * 1000
        if response.status_code != 200:
            return HealthStatus(
                available=False,
                provider="ollama",
                model=self.model,
                error=f"HTTP {response.status_code}",
                response_time_ms=elapsed_ms,
            )

        try:
            models = [m.get("name", "") for m in response.json().get("models", [])]
        except (ValueError, AttributeError):
            return HealthStatus(
                available=False,
                provider="ollama",
                model=self.model,
                error="Unreadable /api/tags response",
                response_time_ms=elapsed_ms,
            )
        if self.model not in models:
            return HealthStatus(
                available=False,
                provider="ollama",
                model=self.model,
                error=f"Model '{self.model}' not pulled",
                response_time_ms=elapsed_ms,
            )
        return HealthStatus(
            available=True,
            provider="ollama",
            model=self.model,
            response_time_ms=elapsed_ms,
        )

"""
Base LLM provider with configurable retry.

Smart bill parsing is fire-and-forget: by default a call is attempted
once, and ``LLM_MAX_RETRIES`` raises that for flaky local servers.
"""

from abc import ABC
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar, cast

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from swipelite.config import get_logger, get_settings
from swipelite.core.exceptions import LLMTimeoutError, LLMUnavailableError
from swipelite.core.interfaces import ILLMProvider

logger = get_logger(__name__)

T = TypeVar("T")


class BaseLLMProvider(ILLMProvider, ABC):
    """Base class for LLM providers; maps transport failures to domain errors."""

    provider_name = "llm"

    def _get_retry_decorator(self) -> Any:
        """Get tenacity retry decorator with current settings."""
        settings = get_settings()
        return retry(
            stop=stop_after_attempt(max(settings.llm.max_retries, 1)),
            wait=wait_exponential(
                multiplier=settings.llm.retry_delay,
                min=settings.llm.retry_delay,
                max=settings.llm.retry_delay * (settings.llm.retry_multiplier**3),
            ),
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.TransportError)),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        """Log retry attempts."""
        logger.warning(
            "llm_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _with_retry(
        self,
        operation: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """
        Execute operation with retry.

        Raises:
            LLMTimeoutError: If operation times out
            LLMUnavailableError: If provider cannot be reached
        """
        try:
            retry_decorator = self._get_retry_decorator()
            result = await retry_decorator(operation)(*args, **kwargs)
            return cast(T, result)

        except httpx.TimeoutException:
            raise LLMTimeoutError(get_settings().llm.timeout)

        except httpx.TransportError as e:
            raise LLMUnavailableError(self.provider_name, str(e))

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Sequence

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from resume_optimizer.ai.config import ProviderConfig
from resume_optimizer.ai.errors import ProviderCallFailed, ProviderUnavailable
from resume_optimizer.ai.prompt import build_optimization_messages
from resume_optimizer.ai.types import ChatMessage
from resume_optimizer.ai.validation import ResponseValidator
from resume_optimizer.schemas.resume import OptimizationOptions, OptimizationResult

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class ProviderAdapter:
    """Shared cascade-stage behaviour for remote LLM providers.

    Subclasses only build the SDK client and implement ``_complete``, which
    sends the chat messages and returns the raw reply text. The remote call is
    retried with exponential backoff (``initial_delay * 2 ** (attempt - 1)``);
    parsing happens once, after the call succeeded.
    """

    provider_id = "base"

    def __init__(
        self,
        config: ProviderConfig,
        *,
        client: Any = None,
        validator: ResponseValidator | None = None,
        initial_delay_s: float = 1.0,
        sleep: Sleep = asyncio.sleep,
    ):
        self.config = config
        self.validator = validator or ResponseValidator()
        self.initial_delay_s = initial_delay_s
        self._sleep = sleep
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            if not self.is_available():
                raise ProviderUnavailable(f"{self.provider_id} is not configured", provider=self.provider_id)
            self._client = self._build_client()
        return self._client

    def is_available(self) -> bool:
        return self._client is not None or (self.config.enabled and bool(self.config.api_key))

    def _build_client(self) -> Any:
        raise NotImplementedError

    async def _complete(self, messages: Sequence[ChatMessage]) -> str:
        raise NotImplementedError

    def build_messages(self, resume_text: str, language: str, options: OptimizationOptions) -> list[ChatMessage]:
        return build_optimization_messages(resume_text, self.provider_id, language, options)

    async def complete_with_retry(self, messages: Sequence[ChatMessage]) -> str:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.config.retries + 1),
            wait=wait_exponential(multiplier=self.initial_delay_s),
            retry=retry_if_not_exception_type(ProviderUnavailable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self._sleep,
            reraise=True,
        )
        attempts = 0
        try:
            async for attempt in retrying:
                with attempt:
                    attempts += 1
                    return await self._complete(messages)
        except ProviderUnavailable:
            raise
        except Exception as exc:
            raise ProviderCallFailed(
                f"{self.provider_id} call failed after {attempts} attempt(s): {exc}",
                provider=self.provider_id,
                attempts=attempts,
            ) from exc
        raise ProviderCallFailed(f"{self.provider_id} returned no result", provider=self.provider_id, attempts=attempts)

    async def attempt_optimize(
        self, resume_text: str, language: str, options: OptimizationOptions
    ) -> OptimizationResult:
        if not self.is_available():
            raise ProviderUnavailable(f"{self.provider_id} is not configured", provider=self.provider_id)

        messages = self.build_messages(resume_text, language, options)
        logger.info("provider_request provider=%s model=%s", self.provider_id, self.config.model)
        raw = await self.complete_with_retry(messages)
        result = self.validator.parse(raw, provider=self.provider_id)
        return result.model_copy(update={"language": language})

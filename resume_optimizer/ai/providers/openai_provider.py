from __future__ import annotations

import os
from typing import Sequence

from openai import AsyncOpenAI

from resume_optimizer.ai.providers.base import ProviderAdapter
from resume_optimizer.ai.types import ChatMessage


class OpenAIProvider(ProviderAdapter):
    provider_id = "openai"

    def _build_client(self) -> AsyncOpenAI:
        # Backoff is owned by ProviderAdapter, so the SDK must not retry on its own.
        return AsyncOpenAI(
            api_key=self.config.api_key,
            base_url=(os.getenv("OPENAI_BASE_URL") or None),
            timeout=self.config.timeout_s,
            max_retries=0,
        )

    async def _complete(self, messages: Sequence[ChatMessage]) -> str:
        payload = [{"role": m.role, "content": m.content} for m in messages]

        create_kwargs = {
            "model": self.config.model,
            "messages": payload,
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }
        if (os.getenv("OPENAI_RESPONSE_FORMAT") or "").strip().lower() == "json":
            create_kwargs["response_format"] = {"type": "json_object"}

        completion = await self.client.chat.completions.create(**create_kwargs)
        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""

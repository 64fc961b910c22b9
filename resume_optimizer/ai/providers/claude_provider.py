from __future__ import annotations

from typing import Sequence

from anthropic import AsyncAnthropic

from resume_optimizer.ai.providers.base import ProviderAdapter
from resume_optimizer.ai.types import ChatMessage


class ClaudeProvider(ProviderAdapter):
    provider_id = "claude"

    def _build_client(self) -> AsyncAnthropic:
        return AsyncAnthropic(
            api_key=self.config.api_key,
            timeout=self.config.timeout_s,
            max_retries=0,
        )

    async def _complete(self, messages: Sequence[ChatMessage]) -> str:
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        payload = [{"role": m.role, "content": m.content} for m in messages if m.role != "system"]

        response = await self.client.messages.create(
            model=self.config.model,
            system=system,
            messages=payload,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
        )
        parts = [getattr(block, "text", "") for block in response.content if getattr(block, "type", "") == "text"]
        return "".join(parts)

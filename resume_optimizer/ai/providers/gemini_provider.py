from __future__ import annotations

from typing import Sequence

from google import genai
from google.genai import types

from resume_optimizer.ai.providers.base import ProviderAdapter
from resume_optimizer.ai.types import ChatMessage

_BLOCKED_CATEGORIES = (
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)


def combine_messages(messages: Sequence[ChatMessage]) -> str:
    """Gemini gets one prompt: system instructions first, then the task."""
    return "\n\n".join(m.content for m in messages if m.content)


class GeminiProvider(ProviderAdapter):
    provider_id = "gemini"

    def _build_client(self) -> genai.Client:
        return genai.Client(
            api_key=self.config.api_key,
            http_options=types.HttpOptions(timeout=int(self.config.timeout_s * 1000)),
        )

    def generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_tokens,
            top_k=40,
            top_p=0.95,
            safety_settings=[
                types.SafetySetting(category=category, threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE)
                for category in _BLOCKED_CATEGORIES
            ],
        )

    async def _complete(self, messages: Sequence[ChatMessage]) -> str:
        response = await self.client.aio.models.generate_content(
            model=self.config.model,
            contents=combine_messages(messages),
            config=self.generation_config(),
        )
        return response.text or ""

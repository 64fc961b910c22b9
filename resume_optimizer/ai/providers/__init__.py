from .base import ProviderAdapter
from .claude_provider import ClaudeProvider
from .gemini_provider import GeminiProvider
from .openai_provider import OpenAIProvider

__all__ = ["ProviderAdapter", "OpenAIProvider", "GeminiProvider", "ClaudeProvider"]

from resume_optimizer.ai.config import load_provider_configs
from resume_optimizer.ai.registry import ProviderRegistry
from resume_optimizer.ai.validation import ResponseValidator
from resume_optimizer.core.config import Settings

from resume_optimizer.ai.providers.openai_provider import OpenAIProvider
from resume_optimizer.ai.providers.claude_provider import ClaudeProvider
from resume_optimizer.ai.providers.gemini_provider import GeminiProvider

_ADAPTERS = {
    "openai": OpenAIProvider,
    "gemini": GeminiProvider,
    "claude": ClaudeProvider,
}


def build_provider_registry(settings: Settings) -> ProviderRegistry:
    validator = ResponseValidator(min_chars=settings.min_optimized_text_chars)
    providers = []
    for cfg in load_provider_configs(settings.ai_provider_order):
        adapter_cls = _ADAPTERS.get(cfg.name)
        if adapter_cls is None:
            raise ValueError(f"Unsupported AI provider '{cfg.name}'")
        providers.append(
            adapter_cls(cfg, validator=validator, initial_delay_s=settings.retry_initial_delay_s)
        )
    return ProviderRegistry(providers)

from __future__ import annotations

import hashlib
import json
import logging
import time
from enum import Enum
from typing import Sequence

from resume_optimizer.ai.errors import EmptyResumeError, InvalidResponse, OptimizationError
from resume_optimizer.ai.registry import ProviderRegistry
from resume_optimizer.ai.types import OptimizationProvider
from resume_optimizer.ai.validation import ResponseValidator
from resume_optimizer.core.config import settings
from resume_optimizer.optimization.fallback import FallbackGenerator
from resume_optimizer.optimization.language import normalize_language
from resume_optimizer.schemas.resume import (
    OptimizationOptions,
    OptimizationResult,
    ReoptimizationRequest,
)

logger = logging.getLogger(__name__)


class CascadeStage(str, Enum):
    REOPTIMIZE_PREFERRED = "reoptimize_preferred"
    TRY_PRIMARY = "try_primary"
    TRY_SECONDARY = "try_secondary"
    TRY_TERTIARY = "try_tertiary"
    FALLBACK = "fallback"


_REMOTE_STAGES = (CascadeStage.TRY_PRIMARY, CascadeStage.TRY_SECONDARY, CascadeStage.TRY_TERTIARY)


def _short_hash(value: str | None) -> str:
    normalized = (value or "").strip()
    if not normalized:
        return ""
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:12]


def build_reoptimization_instructions(request: ReoptimizationRequest) -> list[str]:
    instructions: list[str] = []
    keywords = [k.strip() for k in request.applied_keywords if k and k.strip()]
    if keywords:
        instructions.append(f"Apply these keywords: {', '.join(keywords)}")
    for suggestion in request.applied_suggestions:
        if suggestion.text:
            instructions.append(f"Apply this suggestion: {suggestion.text}")
    return instructions


class CascadeOrchestrator:
    """Tries remote providers in priority order, then the fallback generator.

    Stages run strictly one after another. Any provider error or rejected
    result moves on to the next stage; the fallback stage always succeeds.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        fallback: FallbackGenerator | None = None,
        validator: ResponseValidator | None = None,
    ):
        if len(registry) > len(_REMOTE_STAGES):
            raise ValueError(f"At most {len(_REMOTE_STAGES)} remote providers are supported, got {len(registry)}")
        self.registry = registry
        self.fallback = fallback or FallbackGenerator()
        self.validator = validator or ResponseValidator(min_chars=settings.min_optimized_text_chars)

    async def _attempt(
        self,
        stage: CascadeStage,
        provider: OptimizationProvider,
        resume_text: str,
        language: str,
        options: OptimizationOptions,
    ) -> OptimizationResult | None:
        if not provider.is_available():
            logger.info("cascade_stage_skipped provider=%s stage=%s: not configured", provider.provider_id, stage.value)
            return None

        started_at = time.perf_counter()
        try:
            result = await provider.attempt_optimize(resume_text, language, options)
            result = self.validator.validate_result(result)
        except InvalidResponse as exc:
            logger.warning("cascade_invalid_response provider=%s stage=%s: %s", provider.provider_id, stage.value, exc)
            return None
        except OptimizationError as exc:
            logger.warning(
                "cascade_stage_failed provider=%s stage=%s code=%s: %s",
                provider.provider_id,
                stage.value,
                exc.code,
                exc,
            )
            return None
        except Exception as exc:  # noqa: BLE001
            logger.warning("cascade_stage_failed provider=%s stage=%s: %s", provider.provider_id, stage.value, exc)
            return None

        logger.info(
            json.dumps(
                {
                    "event": "cascade_stage_accepted",
                    "provider": provider.provider_id,
                    "stage": stage.value,
                    "duration_ms": int((time.perf_counter() - started_at) * 1000),
                    "text_len": len(resume_text),
                    "text_hash": _short_hash(resume_text),
                    "ats_score": result.ats_score,
                }
            )
        )
        return result.model_copy(update={"provider_id": provider.provider_id})

    async def _run(
        self,
        providers: Sequence[OptimizationProvider],
        resume_text: str,
        language: str,
        options: OptimizationOptions,
    ) -> OptimizationResult:
        for stage, provider in zip(_REMOTE_STAGES, providers):
            result = await self._attempt(stage, provider, resume_text, language, options)
            if result is not None:
                return result

        logger.info(
            json.dumps(
                {
                    "event": "cascade_fallback",
                    "stage": CascadeStage.FALLBACK.value,
                    "tried": [p.provider_id for p in providers],
                    "text_len": len(resume_text),
                    "text_hash": _short_hash(resume_text),
                }
            )
        )
        return self.fallback.generate(resume_text, language)

    async def optimize(
        self,
        resume_text: str,
        language: str | None = None,
        options: OptimizationOptions | None = None,
    ) -> OptimizationResult:
        if not resume_text or not resume_text.strip():
            raise EmptyResumeError("Resume text is empty")

        options = options or OptimizationOptions()
        lang = normalize_language(language or options.language)
        return await self._run(list(self.registry), resume_text, lang, options)

    async def reoptimize(self, request: ReoptimizationRequest) -> OptimizationResult:
        """Re-run optimization with the user's applied items folded into the prompt.

        The provider that produced the stored result is tried first; the rest of
        the cascade only runs if it is unavailable or fails.
        """
        text = request.original_text if request.applied_suggestions else (request.optimized_text or request.original_text)
        if not text or not text.strip():
            raise EmptyResumeError("Resume text is empty")

        lang = normalize_language(request.language)
        options = OptimizationOptions(
            language=lang,
            custom_instructions=build_reoptimization_instructions(request),
        )
        logger.info(
            "reoptimize_start resume_id=%s provider=%s keywords=%s suggestions=%s",
            request.resume_id,
            request.provider,
            len(request.applied_keywords),
            len(request.applied_suggestions),
        )

        preferred = self.registry.get(request.provider)
        remaining = [p for p in self.registry if p is not preferred]

        result = None
        if preferred is not None:
            result = await self._attempt(CascadeStage.REOPTIMIZE_PREFERRED, preferred, text, lang, options)
        else:
            logger.info("reoptimize_preferred_unknown provider=%s, using cascade", request.provider)
        if result is None:
            result = await self._run(remaining, text, lang, options)

        return result.model_copy(update={"resume_id": request.resume_id})

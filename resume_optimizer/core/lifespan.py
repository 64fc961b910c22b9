from contextlib import asynccontextmanager
import logging

from resume_optimizer.ai.factory import build_provider_registry
from resume_optimizer.ai.validation import ResponseValidator
from resume_optimizer.core.config import settings
from resume_optimizer.optimization.cascade import CascadeOrchestrator
from resume_optimizer.optimization.fallback import FallbackGenerator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    registry = build_provider_registry(settings)
    fallback = FallbackGenerator()
    app.state.provider_registry = registry
    app.state.orchestrator = CascadeOrchestrator(
        registry,
        fallback=fallback,
        validator=ResponseValidator(min_chars=settings.min_optimized_text_chars),
    )
    logger.info("provider_registry_ready order=%s availability=%s", registry.order, registry.availability())
    yield

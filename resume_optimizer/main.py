import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from resume_optimizer.ai.errors import EmptyResumeError
from resume_optimizer.api.v1.health import router as health_router
from resume_optimizer.api.v1.optimize import router as optimize_router
from resume_optimizer.api.v1.score import router as score_router
from resume_optimizer.core.config import settings
from resume_optimizer.core.lifespan import lifespan
from resume_optimizer.core.rate_limit import limiter

logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn, send_default_pii=False)

logger = logging.getLogger(__name__)

app = FastAPI(title="Resume Optimizer API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allowed_origins),
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(EmptyResumeError)
async def empty_resume_handler(request: Request, exc: EmptyResumeError):
    logger.info("optimization_rejected path=%s: %s", request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": str(exc)})


app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(optimize_router, prefix="/v1", tags=["Optimize"])
app.include_router(score_router, prefix="/v1", tags=["Score"])

from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from resume_optimizer.core.config import settings

limiter = Limiter(key_func=get_remote_address)


def rate_limit(limit: str | None = None):
    """Per-client limit for one route, ``settings.rate_limit`` unless overridden.

    Routes that reach a remote provider pass ``settings.optimize_rate_limit``.
    """
    if not settings.rate_limit_enabled:

        def passthrough(func):
            return func

        return passthrough

    return limiter.limit(limit or settings.rate_limit)

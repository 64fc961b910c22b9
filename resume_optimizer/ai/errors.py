from __future__ import annotations


class OptimizationError(RuntimeError):
    def __init__(self, message: str, *, provider: str | None = None, code: str = "optimization_failed"):
        super().__init__(message)
        self.provider = provider
        self.code = code


class ProviderUnavailable(OptimizationError):
    """Provider is not configured (missing key, disabled). Never retried."""

    def __init__(self, message: str, *, provider: str | None = None):
        super().__init__(message, provider=provider, code="provider_unavailable")


class ProviderCallFailed(OptimizationError):
    """Remote call kept failing after the adapter's retry budget was spent."""

    def __init__(self, message: str, *, provider: str | None = None, attempts: int = 1):
        super().__init__(message, provider=provider, code="provider_call_failed")
        self.attempts = attempts


class InvalidResponse(OptimizationError):
    """A response arrived but could not be turned into a usable result."""

    def __init__(self, message: str, *, provider: str | None = None):
        super().__init__(message, provider=provider, code="invalid_response")


class EmptyResumeError(ValueError):
    pass

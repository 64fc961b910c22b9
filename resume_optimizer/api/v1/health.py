from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check(request: Request):
    registry = getattr(request.app.state, "provider_registry", None)
    providers = registry.availability() if registry is not None else {}
    return {
        "status": "healthy",
        "providers": providers,
        "fallback_only": not any(providers.values()),
    }

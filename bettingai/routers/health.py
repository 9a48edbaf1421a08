# bettingai/routers/health.py
from fastapi import APIRouter, Depends

from ..core.config import SUPPORTED_SPORTS
from ..core.cache import CATEGORIES
from ..deps import get_client
from ..services.provider_client import ProviderClient

router = APIRouter(tags=["health"])

@router.get("/api/v1/ping")
def ping():
    return {"pong": True}

@router.get("/health")
def health(client: ProviderClient = Depends(get_client)):
    return {
        "status": "ok",
        "sports": list(SUPPORTED_SPORTS),
        "mock_data": client.settings.use_mock_data,
        "cached": {c: client.cache.size(c) for c in CATEGORIES},
    }

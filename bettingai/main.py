# bettingai/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .core.config import get_settings
from .core.logging import configure_logging
from .deps import get_client
from .providers.base import UnsupportedSportError
from .routers import health, session, sports

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings().log_level)
    logger.info("Starting bettingai sports data API")
    yield
    if get_client.cache_info().currsize:
        await get_client().aclose()
    logger.info("bettingai stopped")


app = FastAPI(title="BettingAI Sports Data API", version="0.1.0", lifespan=lifespan)

# Routers
app.include_router(health.router)
app.include_router(sports.router)
app.include_router(sports.cache_router)
app.include_router(session.router)
app.include_router(session.favorites_router)


@app.exception_handler(UnsupportedSportError)
async def unsupported_sport(request: Request, exc: UnsupportedSportError):
    return JSONResponse(
        status_code=422,
        content={"detail": {"message": "Unsupported sport", "input": exc.sport, "expected": exc.expected}},
    )


@app.get("/")
def root():
    return {"service": "bettingai-sports-data"}

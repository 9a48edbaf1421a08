# bettingai/deps.py
from functools import lru_cache

from .core.config import get_settings
from .services.favorites import FavoritesStore
from .services.provider_client import ProviderClient
from .services.session import SportsDataFacade

@lru_cache(maxsize=1)
def get_client() -> ProviderClient:
    """One ProviderClient (and so one cache) per process."""
    return ProviderClient(get_settings())

@lru_cache(maxsize=1)
def get_facade() -> SportsDataFacade:
    settings = get_settings()
    return SportsDataFacade(get_client(), FavoritesStore(settings.favorites_path), settings=settings)

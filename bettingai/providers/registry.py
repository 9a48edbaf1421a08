"""
Sport -> data source wiring. Adding a sport means one LiveSource subclass
and one entry in LIVE_SOURCES.
"""

from __future__ import annotations

from typing import Dict, Optional, Type

from ..core.config import Settings
from ..core.http import HttpRetryingClient
from .balldontlie import BallDontLieSource
from .base import LayeredSource, LiveSource, SportDataSource, ensure_supported
from .espn_nfl import EspnNflSource
from .football_data import FootballDataSource
from .mlb import MlbStatsSource
from .mock import mock_source
from .nhl import NhlStatsSource

LIVE_SOURCES: Dict[str, Type[LiveSource]] = {
    "football": FootballDataSource,
    "nba":      BallDontLieSource,
    "mlb":      MlbStatsSource,
    "nfl":      EspnNflSource,
    "nhl":      NhlStatsSource,
}


def _api_key(sport: str, settings: Settings) -> Optional[str]:
    return {
        "football": settings.football_data_key,
        "nba": settings.balldontlie_key,
    }.get(sport)


def build_source(sport: str, http: HttpRetryingClient, settings: Settings) -> SportDataSource:
    """Canned tables first (when enabled and present), then the live provider."""
    ensure_supported(sport)
    live = LIVE_SOURCES[sport](http, api_key=_api_key(sport, settings))
    layers = []
    if settings.use_mock_data:
        mock = mock_source(sport)
        if mock is not None:
            layers.append(mock)
    layers.append(live)
    return LayeredSource(sport, layers)


def build_sources(http: HttpRetryingClient, settings: Settings) -> Dict[str, SportDataSource]:
    return {sport: build_source(sport, http, settings) for sport in LIVE_SOURCES}

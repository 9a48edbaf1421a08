from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from bettingai.core.config import Settings
from bettingai.core.http import HttpRetryingClient
from bettingai.services.favorites import FavoritesStore
from bettingai.services.provider_client import ProviderClient
from bettingai.services.session import SportsDataFacade


class Upstream:
    """
    Stand-in for the five providers. Routes match on the end of the URL path;
    a route is a JSON payload, an int status code, or a callable(request).
    """

    def __init__(self, routes: Optional[Dict[str, Any]] = None):
        self.routes: Dict[str, Any] = dict(routes or {})
        self.calls: List[httpx.Request] = []

    def paths(self) -> List[str]:
        return [r.url.path for r in self.calls]

    def __call__(self, request: httpx.Request):
        self.calls.append(request)
        for suffix, route in self.routes.items():
            if request.url.path.endswith(suffix):
                if callable(route):
                    route = route(request)
                if inspect.isawaitable(route):
                    return self._later(route)
                return _respond(route)
        return httpx.Response(404, json={"message": f"no route for {request.url.path}"})

    @staticmethod
    async def _later(route) -> httpx.Response:
        return _respond(await route)


def _respond(route: Any) -> httpx.Response:
    if isinstance(route, httpx.Response):
        return route
    if isinstance(route, int):
        return httpx.Response(route, json={"message": "upstream said no"})
    return httpx.Response(200, json=route)


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        football_data_key="fd-key",
        balldontlie_key="bdl-key",
        use_mock_data=False,
        http_retries=0,
        http_backoff=0.0,
        favorites_path=str(tmp_path / "favorites.json"),
    )
    values.update(overrides)
    return Settings(**values)


def make_client(settings: Settings, handler: Callable) -> ProviderClient:
    http = HttpRetryingClient(transport=httpx.MockTransport(handler), retries=settings.http_retries,
                              backoff=settings.http_backoff)
    return ProviderClient(settings, http=http)


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def live_client(tmp_path, upstream):
    return make_client(make_settings(tmp_path), upstream)


@pytest.fixture
def mock_client(tmp_path, upstream):
    return make_client(make_settings(tmp_path, use_mock_data=True), upstream)


@pytest.fixture
def facade(tmp_path, mock_client):
    return SportsDataFacade(mock_client, FavoritesStore(tmp_path / "favorites.json"))


# ---------- football-data.org payloads ----------
SPURS = {"id": 73, "name": "Tottenham Hotspur FC", "shortName": "Tottenham", "crest": "https://crests/73.png"}
LFC = {"id": 64, "name": "Liverpool FC", "shortName": "Liverpool", "crest": "https://crests/64.png"}


def fd_match(match_id, utc_date="2024-01-02T15:00:00Z", odds=None, **extra):
    row = {
        "id": match_id,
        "utcDate": utc_date,
        "status": "TIMED",
        "homeTeam": LFC,
        "awayTeam": SPURS,
        "score": {"fullTime": {"home": None, "away": None}},
        "odds": odds if odds is not None else {"msg": "Activate Odds-Package in User-Panel to retrieve odds."},
    }
    row.update(extra)
    return row


def fd_matches(*rows):
    return {"competition": {"id": 2021, "name": "Premier League", "emblem": "https://crests/PL.png"},
            "matches": list(rows)}

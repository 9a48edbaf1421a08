# bettingai/routers/sports.py
from __future__ import annotations

from datetime import date as _date, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.cache import CATEGORIES
from ..deps import get_client
from ..domain.models import League, Match, Player, Team
from ..services.formatting import display_tz, local_today
from ..services.provider_client import ProviderClient

router = APIRouter(prefix="/sports/{sport}", tags=["sports"])
cache_router = APIRouter(tags=["cache"])

_DATE = r"^\d{4}-\d{2}-\d{2}$"


def _today(client: ProviderClient) -> _date:
    return local_today(display_tz(client.settings.display_timezone))


def _season(season: Optional[int], client: ProviderClient) -> int:
    return season or _today(client).year


def _found(value, what: str):
    if value is None:
        raise HTTPException(status_code=404, detail=f"{what} not found or unavailable")
    return value


@router.get("/leagues", response_model=List[League], summary="Leagues for a sport")
async def leagues(sport: str, client: ProviderClient = Depends(get_client)):
    return await client.list_leagues(sport)


@router.get(
    "/leagues/{league_id}/teams",
    response_model=List[Team],
    summary="Teams in a league",
    description="Empty when the provider is unreachable.",
)
async def teams(sport: str, league_id: int, client: ProviderClient = Depends(get_client)):
    return await client.list_teams(sport, league_id)


@router.get("/leagues/{league_id}/matches", response_model=List[Match], summary="Matches in a date window")
async def matches(
    sport: str,
    league_id: int,
    date_from: Optional[str] = Query(None, pattern=_DATE, description="YYYY-MM-DD (defaults to today)"),
    date_to: Optional[str] = Query(None, pattern=_DATE, description="YYYY-MM-DD (defaults to a week later)"),
    client: ProviderClient = Depends(get_client),
):
    start = date_from or _today(client).isoformat()
    end = date_to or (_date.fromisoformat(start) + timedelta(days=client.settings.match_window_days)).isoformat()
    return await client.list_matches(sport, league_id, start, end)


@router.get("/matches/{match_id}", response_model=Match, summary="Match detail")
async def match_detail(sport: str, match_id: int, client: ProviderClient = Depends(get_client)):
    return _found(await client.get_match_detail(sport, match_id), "Match")


@router.get("/teams/{team_id}/stats", summary="Team stats (shape depends on the sport)")
async def team_stats(
    sport: str,
    team_id: int,
    season: Optional[int] = Query(None, description="Season year (defaults to this year)"),
    client: ProviderClient = Depends(get_client),
):
    return _found(await client.get_team_stats(sport, team_id, _season(season, client)), "Team stats")


@router.get("/teams/{team_id}/players", response_model=List[Player], summary="Team roster")
async def players(sport: str, team_id: int, client: ProviderClient = Depends(get_client)):
    return await client.list_players(sport, team_id)


@router.get("/players/{player_id}/stats", summary="Player stats (shape depends on the sport)")
async def player_stats(
    sport: str,
    player_id: int,
    season: Optional[int] = Query(None, description="Season year (defaults to this year)"),
    client: ProviderClient = Depends(get_client),
):
    return _found(await client.get_player_stats(sport, player_id, _season(season, client)), "Player stats")


@cache_router.delete("/cache", summary="Drop cached results")
def clear_cache(
    category: Optional[str] = Query(None, description=" | ".join(CATEGORIES)),
    key: Optional[str] = Query(None, description="e.g. matches:football:2021:2024-01-01:2024-01-08"),
    client: ProviderClient = Depends(get_client),
):
    if key is not None and category is None:
        raise HTTPException(status_code=422, detail="key needs a category")
    if category is not None and category not in CATEGORIES:
        raise HTTPException(
            status_code=422,
            detail={"message": "Unknown cache category", "input": category, "expected": list(CATEGORIES)},
        )
    client.clear_cache(category, key)
    return {"cleared": {"category": category, "key": key}, "remaining": client.cache.size()}

# bettingai/routers/session.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..deps import get_facade
from ..domain.models import Match, MatchViewModel, Player, Team
from ..schemas.query import FavoriteState, PromptRequest, PromptResponse, SessionUpdate
from ..services.session import SportsDataFacade

router = APIRouter(prefix="/session", tags=["session"])
favorites_router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", summary="Current sport, league and date window")
def get_session(facade: SportsDataFacade = Depends(get_facade)):
    return facade.context.as_dict()


@router.put("", summary="Change sport, league or date window")
def update_session(body: SessionUpdate, facade: SportsDataFacade = Depends(get_facade)):
    if body.sport is not None:
        facade.set_active_sport(body.sport)
    if body.league_id is not None:
        facade.set_active_league(body.league_id)
    if body.date_from is not None or body.date_to is not None:
        ctx = facade.context
        facade.set_date_range(body.date_from or ctx.date_from, body.date_to or ctx.date_to)
    return facade.context.as_dict()


@router.get("/matches", response_model=List[MatchViewModel])
async def session_matches(facade: SportsDataFacade = Depends(get_facade)):
    return await facade.load_matches()


@router.get("/teams", response_model=List[Team])
async def session_teams(facade: SportsDataFacade = Depends(get_facade)):
    return await facade.load_teams()


@router.get("/teams/search", response_model=List[Team])
async def search_teams(q: str = Query("", description="Name or short name"),
                       facade: SportsDataFacade = Depends(get_facade)):
    return await facade.search_teams(q)


@router.get("/teams/{team_id}/matches", response_model=List[MatchViewModel])
async def team_matches(team_id: int, facade: SportsDataFacade = Depends(get_facade)):
    return await facade.load_team_matches(team_id)


@router.get("/teams/{team_id}/stats")
async def team_stats(team_id: int, facade: SportsDataFacade = Depends(get_facade)):
    stats = await facade.load_team_stats(team_id)
    if stats is None:
        raise HTTPException(status_code=404, detail="Team stats not found or unavailable")
    return stats


@router.get("/teams/{team_id}/players", response_model=List[Player])
async def team_players(team_id: int, facade: SportsDataFacade = Depends(get_facade)):
    return await facade.load_team_players(team_id)


@router.get("/matches/{match_id}", response_model=Match)
async def match_details(match_id: int, facade: SportsDataFacade = Depends(get_facade)):
    details: Optional[Match] = await facade.load_match_details(match_id)
    if details is None:
        raise HTTPException(status_code=404, detail="Match not found or unavailable")
    return details


@router.post("/prompt", response_model=PromptResponse, summary="Add team stats to a prompt")
async def enhance_prompt(body: PromptRequest, facade: SportsDataFacade = Depends(get_facade)):
    return {"prompt": await facade.generate_enhanced_prompt(body.prompt)}


@favorites_router.post("/{sport}/{team_id}", response_model=FavoriteState, summary="Toggle a favorite team")
def toggle_favorite(sport: str, team_id: int, facade: SportsDataFacade = Depends(get_facade)):
    return {"sport": sport, "team_id": team_id, "favorite": facade.toggle_favorite(sport, team_id)}


@favorites_router.get("/{sport}/{team_id}", response_model=FavoriteState)
def is_favorite(sport: str, team_id: int, facade: SportsDataFacade = Depends(get_facade)):
    return {"sport": sport, "team_id": team_id, "favorite": facade.is_favorite(sport, team_id)}

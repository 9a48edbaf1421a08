from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

NEUTRAL_ODDS = 1.0
# Decimal odds can never pay back less than the stake.
ODDS_FLOOR = 1.0

# Sport-specific key/value bags; the caller knows which shape the sport uses.
TeamStats = Dict[str, Any]
PlayerStats = Dict[str, Any]


class _Record(BaseModel):
    # normalized once, then shared from the cache
    model_config = ConfigDict(frozen=True)


class League(_Record):
    id: int
    name: str
    country: str = ""


class Team(_Record):
    id: int
    name: str
    short_name: Optional[str] = None
    abbreviation: Optional[str] = None   # tla for football
    crest: Optional[str] = None          # crest / logo URL
    venue: Optional[str] = None
    coach: Optional[str] = None
    founded: Optional[int] = None
    address: Optional[str] = None
    website: Optional[str] = None
    club_colors: Optional[str] = None
    city: Optional[str] = None
    conference: Optional[str] = None
    division: Optional[str] = None
    league: Optional[str] = None


class TeamRef(_Record):
    id: int
    name: str
    short_name: Optional[str] = None
    crest: Optional[str] = None


class Score(_Record):
    home: Optional[int] = None
    away: Optional[int] = None


class Competition(_Record):
    id: int
    name: str
    emblem: Optional[str] = None


class Odds(_Record):
    home: float = NEUTRAL_ODDS
    draw: float = NEUTRAL_ODDS
    away: float = NEUTRAL_ODDS

    @field_validator("home", "draw", "away", mode="before")
    @classmethod
    def _neutral_when_missing(cls, v: Any) -> float:
        try:
            price = float(v)
        except (TypeError, ValueError):
            return NEUTRAL_ODDS
        if not math.isfinite(price) or price < ODDS_FLOOR:
            return NEUTRAL_ODDS
        return price


class Match(_Record):
    id: int
    kickoff_time: datetime
    status: str
    home_team: TeamRef
    away_team: TeamRef
    score: Score = Field(default_factory=Score)
    competition: Competition
    odds: Odds = Field(default_factory=Odds)

    # provider extras, present on detail payloads
    matchday: Optional[int] = None
    stage: Optional[str] = None
    venue: Optional[str] = None
    attendance: Optional[int] = None
    head_to_head: Optional[Dict[str, Any]] = None
    lineups: Optional[Dict[str, List[Dict[str, Any]]]] = None

    @field_validator("odds", mode="before")
    @classmethod
    def _default_odds(cls, v: Any) -> Any:
        return Odds() if v is None else v

    @field_validator("score", mode="before")
    @classmethod
    def _default_score(cls, v: Any) -> Any:
        return Score() if v is None else v

    def involves(self, team_id: int) -> bool:
        return team_id in (self.home_team.id, self.away_team.id)


class Player(_Record):
    id: int
    name: str
    position: Optional[str] = None
    nationality: Optional[str] = None
    date_of_birth: Optional[str] = None
    number: Optional[int] = None
    height: Optional[str] = None
    weight: Optional[int] = None
    team: Optional[str] = None


class MatchViewModel(BaseModel):
    """UI-ready projection of a Match."""
    id: int
    home_team: str
    away_team: str
    home_team_id: int
    away_team_id: int
    home_team_logo: Optional[str] = None
    away_team_logo: Optional[str] = None
    time: str                      # "Today, 19:30"
    kickoff_time: datetime
    status: str
    league: str
    league_id: int
    home_score: str                # "-" until played
    away_score: str
    odds: Odds

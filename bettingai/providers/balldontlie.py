"""
balldontlie NBA (https://api.balldontlie.io/v1), header Authorization.

  teams:     GET /teams
  games:     GET /games?start_date=&end_date=&per_page=100
  game:      GET /games/{id}
  season:    GET /games?team_ids[]=&seasons[]=&per_page=100   (team stats are derived)
  players:   GET /players?team_ids[]=&per_page=100
  averages:  GET /season_averages?season=&player_ids[]=
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..domain.models import Match, Player, PlayerStats, Team, TeamStats
from ..services.stats import basketball_team_stats
from .base import LiveSource, parse_kickoff, project_one, project_rows, to_int

PER_PAGE = 100
NBA_COMPETITION = {"id": 0, "name": "NBA"}


def _ref(team: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": team["id"], "name": team["full_name"], "short_name": team.get("abbreviation")}


class BallDontLieSource(LiveSource):
    sport = "nba"
    auth_header = "Authorization"

    @staticmethod
    def _team(team: Dict[str, Any]) -> Team:
        return Team(
            id=team["id"],
            name=team["full_name"],
            short_name=team.get("name"),
            abbreviation=team.get("abbreviation"),
            city=team.get("city"),
            conference=team.get("conference"),
            division=team.get("division"),
        )

    @staticmethod
    def _match(game: Dict[str, Any]) -> Match:
        # 'datetime' carries the tip-off; older rows only have a 'date'
        return Match(
            id=game["id"],
            kickoff_time=parse_kickoff(game.get("datetime") or game["date"]),
            status=game.get("status") or "SCHEDULED",
            home_team=_ref(game["home_team"]),
            away_team=_ref(game["visitor_team"]),
            score={"home": to_int(game.get("home_team_score")), "away": to_int(game.get("visitor_team_score"))},
            competition=NBA_COMPETITION,
        )

    @staticmethod
    def _player(p: Dict[str, Any]) -> Player:
        return Player(
            id=p["id"],
            name=f"{p.get('first_name', '')} {p.get('last_name', '')}".strip(),
            position=p.get("position") or None,
            number=to_int(p.get("jersey_number")),
            height=p.get("height"),
            weight=to_int(p.get("weight")),
            team=(p.get("team") or {}).get("full_name"),
            nationality=p.get("country"),
        )

    async def list_teams(self, league_id: int) -> Optional[List[Team]]:
        payload = await self._get("/teams")
        return project_rows(self.sport, "team", payload.get("data"), self._team)

    async def list_matches(self, league_id: int, date_from: str, date_to: str) -> Optional[List[Match]]:
        payload = await self._get("/games", {"start_date": date_from, "end_date": date_to, "per_page": PER_PAGE})
        return project_rows(self.sport, "game", payload.get("data"), self._match)

    async def get_match(self, match_id: int) -> Optional[Match]:
        payload = await self._get(f"/games/{match_id}")
        game = payload.get("data")
        if not isinstance(game, dict):
            return None
        return project_one(self.sport, "game", game, self._match)

    async def get_team_stats(self, team_id: int, season: int) -> Optional[TeamStats]:
        payload = await self._get("/games", {"team_ids[]": team_id, "seasons[]": season, "per_page": PER_PAGE})
        if payload.get("data") is None:
            return None
        games = project_rows(self.sport, "game", payload["data"], self._match)
        return basketball_team_stats(team_id, games)

    async def list_players(self, team_id: int) -> Optional[List[Player]]:
        payload = await self._get("/players", {"team_ids[]": team_id, "per_page": PER_PAGE})
        return project_rows(self.sport, "player", payload.get("data"), self._player)

    async def get_player_stats(self, player_id: int, season: int) -> Optional[PlayerStats]:
        payload = await self._get("/season_averages", {"season": season, "player_ids[]": player_id})
        rows = payload.get("data") or []
        return dict(rows[0]) if rows else None

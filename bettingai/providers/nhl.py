"""
NHL Stats API (https://statsapi.web.nhl.com/api/v1), no key.

  teams:    GET /teams
  games:    GET /schedule?startDate=&endDate=
  game:     GET /schedule?gamePk={id}
  stats:    GET /teams/{id}/stats?season=YYYYYYYY
  roster:   GET /teams/{id}/roster
  player:   GET /people/{id}/stats?stats=statsSingleSeason&season=YYYYYYYY

Seasons are written as both years, e.g. 20232024.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..domain.models import Match, Player, PlayerStats, Team, TeamStats
from .base import LiveSource, dig, parse_kickoff, project_rows, to_int

NHL_COMPETITION = {"id": 0, "name": "NHL"}


def nhl_season(season: int) -> str:
    return f"{season}{season + 1}"


def _single_split(payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    stat = dig(payload, "stats", 0, "splits", 0, "stat")
    return dict(stat) if isinstance(stat, dict) else None


class NhlStatsSource(LiveSource):
    sport = "nhl"

    @staticmethod
    def _team(team: Dict[str, Any]) -> Team:
        return Team(
            id=team["id"],
            name=team["name"],
            short_name=team.get("teamName"),
            abbreviation=team.get("abbreviation"),
            city=team.get("locationName"),
            division=dig(team, "division", "name"),
            conference=dig(team, "conference", "name"),
            venue=dig(team, "venue", "name"),
            founded=to_int(team.get("firstYearOfPlay")),
        )

    @staticmethod
    def _game(game: Dict[str, Any]) -> Match:
        home, away = game["teams"]["home"], game["teams"]["away"]
        return Match(
            id=game["gamePk"],
            kickoff_time=parse_kickoff(game["gameDate"]),
            status=dig(game, "status", "detailedState") or "Scheduled",
            home_team={"id": home["team"]["id"], "name": home["team"]["name"]},
            away_team={"id": away["team"]["id"], "name": away["team"]["name"]},
            score={"home": to_int(home.get("score")), "away": to_int(away.get("score"))},
            competition=NHL_COMPETITION,
            venue=dig(game, "venue", "name"),
        )

    def _games(self, payload: Dict[str, Any]) -> List[Match]:
        out: List[Match] = []
        for day in payload.get("dates") or []:
            out.extend(project_rows(self.sport, "game", dig(day, "games"), self._game))
        return out

    @staticmethod
    def _player(row: Dict[str, Any]) -> Player:
        return Player(
            id=row["person"]["id"],
            name=row["person"]["fullName"],
            position=dig(row, "position", "name"),
            number=to_int(row.get("jerseyNumber")),
        )

    async def list_teams(self, league_id: int) -> Optional[List[Team]]:
        payload = await self._get("/teams")
        return project_rows(self.sport, "team", payload.get("teams"), self._team)

    async def list_matches(self, league_id: int, date_from: str, date_to: str) -> Optional[List[Match]]:
        payload = await self._get("/schedule", {"startDate": date_from, "endDate": date_to})
        return self._games(payload)

    async def get_match(self, match_id: int) -> Optional[Match]:
        payload = await self._get("/schedule", {"gamePk": match_id})
        games = self._games(payload)
        return games[0] if games else None

    async def get_team_stats(self, team_id: int, season: int) -> Optional[TeamStats]:
        payload = await self._get(f"/teams/{team_id}/stats", {"season": nhl_season(season)})
        return _single_split(payload)

    async def list_players(self, team_id: int) -> Optional[List[Player]]:
        payload = await self._get(f"/teams/{team_id}/roster")
        return project_rows(self.sport, "player", payload.get("roster"), self._player)

    async def get_player_stats(self, player_id: int, season: int) -> Optional[PlayerStats]:
        payload = await self._get(
            f"/people/{player_id}/stats",
            {"stats": "statsSingleSeason", "season": nhl_season(season)},
        )
        return _single_split(payload)

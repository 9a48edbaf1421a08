"""
MLB Stats API (https://statsapi.mlb.com/api/v1), no key.

  teams:    GET /teams?sportId=1[&leagueIds=103|104]
  games:    GET /schedule?sportId=1&startDate=&endDate=[&leagueId=]
  game:     GET /schedule?sportId=1&gamePk={id}
  stats:    GET /teams/{id}/stats?stats=season&group=hitting&season=
  roster:   GET /teams/{id}/roster
  player:   GET /people/{id}/stats?stats=season&season=
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..core.config import league_name
from ..domain.models import Match, Player, PlayerStats, Team, TeamStats
from .base import LiveSource, dig, parse_kickoff, project_rows, to_int

MLB_SPORT_ID = 1


def _season_split(payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    stat = dig(payload, "stats", 0, "splits", 0, "stat")
    return dict(stat) if isinstance(stat, dict) else None


class MlbStatsSource(LiveSource):
    sport = "mlb"

    @staticmethod
    def _team(team: Dict[str, Any]) -> Team:
        return Team(
            id=team["id"],
            name=team["name"],
            short_name=team.get("teamName"),
            abbreviation=team.get("abbreviation"),
            city=team.get("locationName"),
            league=dig(team, "league", "name"),
            division=dig(team, "division", "name"),
            venue=dig(team, "venue", "name"),
            founded=to_int(team.get("firstYearOfPlay")),
        )

    def _game(self, game: Dict[str, Any], league_id: Optional[int]) -> Match:
        home, away = game["teams"]["home"], game["teams"]["away"]
        return Match(
            id=game["gamePk"],
            kickoff_time=parse_kickoff(game["gameDate"]),
            status=dig(game, "status", "detailedState") or "Scheduled",
            home_team={"id": home["team"]["id"], "name": home["team"]["name"]},
            away_team={"id": away["team"]["id"], "name": away["team"]["name"]},
            score={"home": to_int(home.get("score")), "away": to_int(away.get("score"))},
            competition={"id": league_id or 0, "name": league_name(self.sport, league_id)},
            venue=dig(game, "venue", "name"),
        )

    def _games(self, payload: Dict[str, Any], league_id: Optional[int]) -> List[Match]:
        out: List[Match] = []
        for day in payload.get("dates") or []:
            out.extend(project_rows(self.sport, "game", dig(day, "games"), lambda g: self._game(g, league_id)))
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
        payload = await self._get("/teams", {"sportId": MLB_SPORT_ID, "leagueIds": league_id})
        rows = payload.get("teams")
        if isinstance(rows, list):
            # narrow to the requested league when the payload says which one a team is in
            rows = [t for t in rows if dig(t, "league", "id") in (None, league_id)]
        return project_rows(self.sport, "team", rows, self._team)

    async def list_matches(self, league_id: int, date_from: str, date_to: str) -> Optional[List[Match]]:
        payload = await self._get("/schedule", {
            "sportId": MLB_SPORT_ID,
            "startDate": date_from,
            "endDate": date_to,
            "leagueId": league_id,
        })
        return self._games(payload, league_id)

    async def get_match(self, match_id: int) -> Optional[Match]:
        payload = await self._get("/schedule", {"sportId": MLB_SPORT_ID, "gamePk": match_id})
        games = self._games(payload, None)
        return games[0] if games else None

    async def get_team_stats(self, team_id: int, season: int) -> Optional[TeamStats]:
        payload = await self._get(f"/teams/{team_id}/stats", {"stats": "season", "group": "hitting", "season": season})
        return _season_split(payload)

    async def list_players(self, team_id: int) -> Optional[List[Player]]:
        payload = await self._get(f"/teams/{team_id}/roster")
        return project_rows(self.sport, "player", payload.get("roster"), self._player)

    async def get_player_stats(self, player_id: int, season: int) -> Optional[PlayerStats]:
        payload = await self._get(f"/people/{player_id}/stats", {"stats": "season", "season": season})
        return _season_split(payload)

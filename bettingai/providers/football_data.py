"""
football-data.org v4 (https://api.football-data.org/v4), header X-Auth-Token.

  competitions:  GET /competitions
  teams:         GET /competitions/{id}/teams
  matches:       GET /competitions/{id}/matches?dateFrom=YYYY-MM-DD&dateTo=YYYY-MM-DD
  match:         GET /matches/{id}
  team matches:  GET /teams/{id}/matches?season=YYYY&status=FINISHED   (stats are derived)
  squad:         GET /teams/{id}
  person:        GET /persons/{id}
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..core.config import league_name
from ..domain.models import League, Match, Player, PlayerStats, Team, TeamStats
from ..services.stats import football_team_stats
from .base import LiveSource, dig, parse_kickoff, project_one, project_rows, to_int


def _ref(side: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": side["id"],
        "name": side["name"],
        "short_name": side.get("shortName"),
        "crest": side.get("crest"),
    }


class FootballDataSource(LiveSource):
    sport = "football"
    auth_header = "X-Auth-Token"

    # ---------- projections ----------
    @staticmethod
    def _league(comp: Dict[str, Any]) -> League:
        return League(id=comp["id"], name=comp["name"], country=dig(comp, "area", "name") or "")

    @staticmethod
    def _team(team: Dict[str, Any]) -> Team:
        return Team(
            id=team["id"],
            name=team["name"],
            short_name=team.get("shortName"),
            abbreviation=team.get("tla"),
            crest=team.get("crest"),
            address=team.get("address"),
            website=team.get("website"),
            founded=to_int(team.get("founded")),
            venue=team.get("venue"),
            coach=dig(team, "coach", "name"),
            club_colors=team.get("clubColors"),
        )

    def _match(self, m: Dict[str, Any], competition: Optional[Dict[str, Any]] = None,
               league_id: Optional[int] = None) -> Match:
        comp = m.get("competition") or competition or {}
        lid = comp.get("id", league_id)
        odds = m.get("odds") or {}
        return Match(
            id=m["id"],
            kickoff_time=parse_kickoff(m["utcDate"]),
            status=m.get("status") or "SCHEDULED",
            home_team=_ref(m["homeTeam"]),
            away_team=_ref(m["awayTeam"]),
            score={
                "home": to_int(dig(m, "score", "fullTime", "home")),
                "away": to_int(dig(m, "score", "fullTime", "away")),
            },
            competition={
                "id": lid or 0,
                "name": comp.get("name") or league_name(self.sport, lid),
                "emblem": comp.get("emblem"),
            },
            # only present with the odds add-on; otherwise {"msg": "..."}
            odds={"home": odds.get("homeWin"), "draw": odds.get("draw"), "away": odds.get("awayWin")},
            matchday=to_int(m.get("matchday")),
            stage=m.get("stage"),
            venue=m.get("venue"),
            attendance=to_int(m.get("attendance")),
        )

    @staticmethod
    def _player(p: Dict[str, Any]) -> Player:
        return Player(
            id=p["id"],
            name=p["name"],
            position=p.get("position"),
            date_of_birth=p.get("dateOfBirth"),
            nationality=p.get("nationality"),
            number=to_int(p.get("shirtNumber")),
        )

    # ---------- operations ----------
    async def list_leagues(self) -> Optional[List[League]]:
        payload = await self._get("/competitions")
        return project_rows(self.sport, "competition", payload.get("competitions"), self._league)

    async def list_teams(self, league_id: int) -> Optional[List[Team]]:
        payload = await self._get(f"/competitions/{league_id}/teams")
        return project_rows(self.sport, "team", payload.get("teams"), self._team)

    async def list_matches(self, league_id: int, date_from: str, date_to: str) -> Optional[List[Match]]:
        payload = await self._get(
            f"/competitions/{league_id}/matches",
            {"dateFrom": date_from, "dateTo": date_to},
        )
        competition = payload.get("competition")
        return project_rows(self.sport, "match", payload.get("matches"),
                            lambda m: self._match(m, competition, league_id))

    async def get_match(self, match_id: int) -> Optional[Match]:
        payload = await self._get(f"/matches/{match_id}")
        if "id" not in payload:
            return None
        match = project_one(self.sport, "match", payload, self._match)
        h2h = payload.get("head2head")
        if h2h:
            match = match.model_copy(update={"head_to_head": {
                "total_matches": h2h.get("numberOfMatches"),
                "home_wins": dig(h2h, "homeTeam", "wins"),
                "away_wins": dig(h2h, "awayTeam", "wins"),
                "draws": dig(h2h, "homeTeam", "draws"),
            }})
        return match

    async def get_team_stats(self, team_id: int, season: int) -> Optional[TeamStats]:
        payload = await self._get(f"/teams/{team_id}/matches", {"season": season, "status": "FINISHED"})
        if payload.get("matches") is None:
            return None
        matches = project_rows(self.sport, "match", payload["matches"], self._match)
        return football_team_stats(team_id, matches)

    async def list_players(self, team_id: int) -> Optional[List[Player]]:
        payload = await self._get(f"/teams/{team_id}")
        return project_rows(self.sport, "player", payload.get("squad"), self._player)

    async def get_player_stats(self, player_id: int, season: int) -> Optional[PlayerStats]:
        payload = await self._get(f"/persons/{player_id}")
        if "id" not in payload:
            return None
        return {
            "id": payload["id"],
            "name": payload.get("name"),
            "position": payload.get("position") or payload.get("section"),
            "date_of_birth": payload.get("dateOfBirth"),
            "nationality": payload.get("nationality"),
            "shirt_number": to_int(payload.get("shirtNumber")),
            "current_team": dig(payload, "currentTeam", "name"),
            "season": season,
        }

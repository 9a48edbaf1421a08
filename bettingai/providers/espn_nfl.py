"""
ESPN site API for the NFL
(https://site.api.espn.com/apis/site/v2/sports/football/nfl), no key.

  teams:      GET /teams
  games:      GET /scoreboard?dates=YYYYMMDD-YYYYMMDD
  game:       GET /summary?event={id}
  stats:      GET /teams/{id}/statistics?season=
  roster:     GET /teams/{id}/roster
  athlete:    GET /athletes/{id}/statistics?season=

ESPN ids are strings and its odds are American moneylines.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..core.config import league_name
from ..domain.models import Match, Player, PlayerStats, Team, TeamStats
from .base import LiveSource, dig, parse_kickoff, project_one, project_rows, to_int


def american_to_decimal(price: Any) -> Optional[float]:
    ml = to_int(price)
    if not ml:
        return None
    return round(1 + ml / 100, 3) if ml > 0 else round(1 + 100 / abs(ml), 3)


def _compact_date(day: str) -> str:
    return day.replace("-", "")


def _categories(payload: Dict[str, Any]) -> Optional[Dict[str, Dict[str, Any]]]:
    cats = dig(payload, "results", "stats", "categories") or dig(payload, "splits", "categories")
    if not isinstance(cats, list):
        return None
    return {
        c.get("name", "general"): {s["name"]: s.get("value") for s in c.get("stats") or [] if "name" in s}
        for c in cats
    }


class EspnNflSource(LiveSource):
    sport = "nfl"

    @staticmethod
    def _team(team: Dict[str, Any]) -> Team:
        logos = team.get("logos") or []
        return Team(
            id=int(team["id"]),
            name=team["displayName"],
            short_name=team.get("name"),
            abbreviation=team.get("abbreviation"),
            city=team.get("location"),
            crest=logos[0].get("href") if logos else None,
        )

    def _competition_match(self, event_id: Any, comp: Dict[str, Any], league_id: Optional[int]) -> Match:
        sides = {c["homeAway"]: c for c in comp["competitors"]}
        home, away = sides["home"], sides["away"]
        odds = dig(comp, "odds", 0) or {}
        return Match(
            id=int(event_id),
            kickoff_time=parse_kickoff(comp["date"]),
            status=dig(comp, "status", "type", "name") or "STATUS_SCHEDULED",
            home_team={"id": int(home["team"]["id"]), "name": home["team"]["displayName"],
                       "short_name": home["team"].get("shortDisplayName"), "crest": home["team"].get("logo")},
            away_team={"id": int(away["team"]["id"]), "name": away["team"]["displayName"],
                       "short_name": away["team"].get("shortDisplayName"), "crest": away["team"].get("logo")},
            score={"home": to_int(home.get("score")), "away": to_int(away.get("score"))},
            competition={"id": league_id or 0, "name": league_name(self.sport, league_id) if league_id else "NFL"},
            odds={
                "home": american_to_decimal(dig(odds, "homeTeamOdds", "moneyLine")),
                "away": american_to_decimal(dig(odds, "awayTeamOdds", "moneyLine")),
            },
            venue=dig(comp, "venue", "fullName"),
            attendance=to_int(comp.get("attendance")),
        )

    def _event(self, event: Dict[str, Any], league_id: Optional[int]) -> Match:
        comp = dict(event["competitions"][0])
        # status and date sometimes only sit on the event
        comp.setdefault("status", event.get("status"))
        comp.setdefault("date", event.get("date"))
        return self._competition_match(event["id"], comp, league_id)

    @staticmethod
    def _player(a: Dict[str, Any]) -> Player:
        return Player(
            id=int(a["id"]),
            name=a.get("displayName") or a["fullName"],
            position=dig(a, "position", "name"),
            number=to_int(a.get("jersey")),
            height=a.get("displayHeight"),
            weight=to_int(a.get("weight")),
            date_of_birth=(a.get("dateOfBirth") or "")[:10] or None,
            nationality=dig(a, "birthPlace", "country"),
        )

    async def list_teams(self, league_id: int) -> Optional[List[Team]]:
        payload = await self._get("/teams")
        rows = [dig(t, "team") for t in dig(payload, "sports", 0, "leagues", 0, "teams") or []]
        return project_rows(self.sport, "team", rows, self._team)

    async def list_matches(self, league_id: int, date_from: str, date_to: str) -> Optional[List[Match]]:
        payload = await self._get("/scoreboard", {"dates": f"{_compact_date(date_from)}-{_compact_date(date_to)}"})
        return project_rows(self.sport, "event", payload.get("events"), lambda e: self._event(e, league_id))

    async def get_match(self, match_id: int) -> Optional[Match]:
        payload = await self._get("/summary", {"event": match_id})
        comp = dig(payload, "header", "competitions", 0)
        if not isinstance(comp, dict):
            return None
        comp = dict(comp)
        venue = dig(payload, "gameInfo", "venue")
        if venue and "venue" not in comp:
            comp["venue"] = venue
        if "attendance" not in comp:
            comp["attendance"] = dig(payload, "gameInfo", "attendance")
        event_id = dig(payload, "header", "id") or match_id
        return project_one(self.sport, "event", comp, lambda c: self._competition_match(event_id, c, None))

    async def get_team_stats(self, team_id: int, season: int) -> Optional[TeamStats]:
        payload = await self._get(f"/teams/{team_id}/statistics", {"season": season})
        return project_one(self.sport, "statistics", payload, _categories)

    async def list_players(self, team_id: int) -> Optional[List[Player]]:
        payload = await self._get(f"/teams/{team_id}/roster")
        players: List[Player] = []
        for group in payload.get("athletes") or []:
            players.extend(project_rows(self.sport, "athlete", dig(group, "items"), self._player))
        return players

    async def get_player_stats(self, player_id: int, season: int) -> Optional[PlayerStats]:
        payload = await self._get(f"/athletes/{player_id}/statistics", {"season": season})
        return project_one(self.sport, "statistics", payload, _categories)

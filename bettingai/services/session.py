# bettingai/services/session.py
"""
Session layer over ProviderClient.

A ``SessionContext`` holds what the user is looking at (sport, league, date
window). ``SportsDataFacade`` owns one context plus what has been loaded for
it, and turns normalized records into view-models for the UI.

    facade = SportsDataFacade(client, FavoritesStore(path))
    facade.set_active_sport("nba")
    rows = await facade.load_matches()
"""
from __future__ import annotations

import copy
import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

from ..core.config import LEAGUES, Settings
from ..domain.models import League, Match, MatchViewModel, Player, Team, TeamStats
from ..providers.base import ensure_supported
from .favorites import FavoritesStore
from .formatting import display_tz, local_today, to_view_model
from .provider_client import ProviderClient

logger = logging.getLogger(__name__)

STATS_HEADER = "\n\nTeam Statistics:\n"


@dataclass
class SessionContext:
    sport: str
    league_id: int
    date_from: str
    date_to: str

    @classmethod
    def starting(cls, sport: str, window_days: int, today: Optional[datetime] = None) -> "SessionContext":
        """First league of ``sport`` and the next ``window_days`` days."""
        ensure_supported(sport)
        start = (today or datetime.now(timezone.utc)).date()
        return cls(
            sport=sport,
            league_id=first_league_id(sport),
            date_from=start.isoformat(),
            date_to=(start + timedelta(days=window_days)).isoformat(),
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def first_league_id(sport: str) -> int:
    return LEAGUES[sport][0]["id"]


class SportsDataFacade:
    def __init__(
        self,
        client: ProviderClient,
        favorites: FavoritesStore,
        *,
        settings: Optional[Settings] = None,
        context: Optional[SessionContext] = None,
    ):
        self.client = client
        self.favorites = favorites
        settings = settings or client.settings
        self.tz = display_tz(settings.display_timezone)
        self.context = context or SessionContext.starting(settings.default_sport, settings.match_window_days)
        self.teams: List[Team] = []
        self.matches: List[Match] = []
        self._team_stats: Dict[Tuple[str, int], TeamStats] = {}
        self._match_details: Dict[Tuple[str, int], Match] = {}

    # ---------- context ----------
    def set_active_sport(self, sport: str) -> None:
        """Switch sport; the league goes back to that sport's first league."""
        ensure_supported(sport)
        self.context.sport = sport
        self.context.league_id = first_league_id(sport)
        self._forget_loaded()

    def set_active_league(self, league_id: int) -> None:
        self.context.league_id = league_id
        self._forget_loaded()

    def set_date_range(self, date_from: str, date_to: str) -> None:
        self.context.date_from = date_from
        self.context.date_to = date_to
        self.matches = []

    def _forget_loaded(self) -> None:
        # loaded teams/matches belong to the previous sport or league
        self.teams = []
        self.matches = []

    # ---------- loading ----------
    async def load_leagues(self) -> List[League]:
        return await self.client.list_leagues(self.context.sport)

    async def load_teams(self) -> List[Team]:
        self.teams = await self.client.list_teams(self.context.sport, self.context.league_id)
        return self.teams

    async def load_matches(self) -> List[MatchViewModel]:
        ctx = self.context
        self.matches = await self.client.list_matches(ctx.sport, ctx.league_id, ctx.date_from, ctx.date_to)
        return self._view(self.matches)

    def _view(self, matches: List[Match]) -> List[MatchViewModel]:
        # one reference day for the whole batch
        today = local_today(self.tz)
        return [to_view_model(m, today, self.tz) for m in matches]

    async def load_team_matches(self, team_id: int) -> List[MatchViewModel]:
        if not self.matches:
            await self.load_matches()
        return self._view([m for m in self.matches if m.involves(team_id)])

    async def load_team_stats(self, team_id: int) -> Optional[TeamStats]:
        key = (self.context.sport, team_id)
        if key in self._team_stats:
            return copy.deepcopy(self._team_stats[key])
        season = datetime.now(self.tz).year
        stats = await self.client.get_team_stats(self.context.sport, team_id, season)
        if stats is not None:
            self._team_stats[key] = copy.deepcopy(stats)
        return stats

    async def load_match_details(self, match_id: int) -> Optional[Match]:
        key = (self.context.sport, match_id)
        if key in self._match_details:
            return self._match_details[key]
        details = await self.client.get_match_detail(self.context.sport, match_id)
        if details is not None:
            self._match_details[key] = details
        return details

    async def load_team_players(self, team_id: int) -> List[Player]:
        return await self.client.list_players(self.context.sport, team_id)

    async def search_teams(self, query: str) -> List[Team]:
        if not query:
            return []
        if not self.teams:
            await self.load_teams()
        term = query.lower()
        return [t for t in self.teams if term in t.name.lower() or (t.short_name and term in t.short_name.lower())]

    # ---------- favorites ----------
    def toggle_favorite(self, sport: str, team_id: int) -> bool:
        ensure_supported(sport)
        return self.favorites.toggle(sport, team_id)

    def is_favorite(self, sport: str, team_id: int) -> bool:
        ensure_supported(sport)
        return self.favorites.contains(sport, team_id)

    # ---------- prompt enrichment ----------
    async def generate_enhanced_prompt(self, user_prompt: str) -> str:
        """
        Append the stats of every team the prompt names. Loaded teams are
        checked first (name or short name, case-insensitive); when none
        match, the teams of the loaded matches are tried. No match, no change.
        """
        if not self.teams:
            await self.load_teams()
        text = user_prompt.lower()

        mentions: List[Tuple[int, str]] = [
            (t.id, t.name) for t in self.teams if _named_in(text, t)
        ]
        if not mentions:
            for m in self.matches:
                for side in (m.home_team, m.away_team):
                    if side.name.lower() in text:
                        mentions.append((side.id, side.name))

        unique: Dict[int, str] = {}
        for team_id, name in mentions:
            unique.setdefault(team_id, name)
        if not unique:
            return user_prompt

        enhanced = user_prompt + STATS_HEADER
        for team_id, name in unique.items():
            if not team_id:
                continue
            stats = await self.load_team_stats(team_id)
            if stats:
                enhanced += f"\n{name}:\n{json.dumps(stats, indent=2, default=str)}\n"
        logger.debug(f"prompt enriched with {len(unique)} team(s)")
        return enhanced


def _named_in(text: str, team: Team) -> bool:
    return any(n and n.lower() in text for n in (team.name, team.short_name))

# bettingai/services/provider_client.py
"""
Uniform entry point for every sport: cache, then the sport's data source.

Transient upstream trouble (UpstreamError) stops here and turns into an empty
list / None with a warning in the log. Asking for a sport nobody serves is a
caller mistake and raises UnsupportedSportError.
"""
from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from ..core.cache import CacheKey, QueryCache
from ..core.config import Settings, get_settings
from ..core.http import HttpRetryingClient, UpstreamError
from ..domain.models import League, Match, Player, PlayerStats, Team, TeamStats
from ..providers.base import SportDataSource, ensure_supported, fixed_leagues
from ..providers.registry import build_sources

logger = logging.getLogger(__name__)


class ProviderClient:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        http: Optional[HttpRetryingClient] = None,
        sources: Optional[Dict[str, SportDataSource]] = None,
        cache: Optional[QueryCache] = None,
    ):
        self.settings = settings or get_settings()
        self._http = http or HttpRetryingClient(
            timeout=self.settings.http_timeout,
            retries=self.settings.http_retries,
            backoff=self.settings.http_backoff,
        )
        self._sources = sources if sources is not None else build_sources(self._http, self.settings)
        self.cache = cache or QueryCache()
        self._inflight: Dict[str, asyncio.Future] = {}

    async def aclose(self) -> None:
        await self._http.aclose()

    def _source(self, sport: str) -> SportDataSource:
        ensure_supported(sport)
        try:
            return self._sources[sport]
        except KeyError:
            raise ValueError(f"No data source wired for '{sport}'") from None

    async def _cached(self, key: CacheKey, loader: Callable[[], Awaitable[Any]]) -> Any:
        """
        Cache hit, or join a fetch already running for the same key, or start
        one. Only non-None results are stored so a failed lookup is retried
        on the next call.
        """
        if key in self.cache:
            logger.debug(f"cache hit {key}")
            return self.cache.get(key)

        name = str(key)
        task = self._inflight.get(name)
        if task is None:
            task = asyncio.create_task(self._fetch(key, loader))
            self._inflight[name] = task
        else:
            logger.debug(f"joining in-flight fetch for {key}")
        # a cancelled caller must not cancel the fetch others are waiting on
        return await asyncio.shield(task)

    async def _fetch(self, key: CacheKey, loader: Callable[[], Awaitable[Any]]) -> Any:
        try:
            value = await loader()
            if value is not None:
                self.cache.set(key, value)
            return value
        finally:
            self._inflight.pop(str(key), None)

    async def _degrade(self, sport: str, what: str, call: Awaitable[Any]) -> Any:
        try:
            return await call
        except UpstreamError as e:
            logger.warning(f"[{sport}] {what} unavailable, degrading: {e}")
            return None

    # ---------- operations ----------
    async def list_leagues(self, sport: str) -> List[League]:
        source = self._source(sport)

        async def load() -> List[League]:
            try:
                leagues = await source.list_leagues()
            except UpstreamError as e:
                logger.warning(f"[{sport}] competitions unavailable, using fixed table: {e}")
                leagues = None
            return leagues or fixed_leagues(sport)

        return list(await self._cached(CacheKey("leagues", sport), load))

    async def list_teams(self, sport: str, league_id: int) -> List[Team]:
        source = self._source(sport)
        key = CacheKey("teams", sport, (league_id,))
        teams = await self._cached(key, lambda: self._degrade(sport, "teams", source.list_teams(league_id)))
        return list(teams or [])

    async def list_matches(self, sport: str, league_id: int, date_from: str, date_to: str) -> List[Match]:
        source = self._source(sport)
        key = CacheKey("matches", sport, (league_id, date_from, date_to))
        matches = await self._cached(key, lambda: self._degrade(
            sport, "matches", source.list_matches(league_id, date_from, date_to)))
        return list(matches or [])

    async def get_match_detail(self, sport: str, match_id: int) -> Optional[Match]:
        source = self._source(sport)
        key = CacheKey("matches", sport, ("detail", match_id))
        return await self._cached(key, lambda: self._degrade(sport, "match detail", source.get_match(match_id)))

    async def get_team_stats(self, sport: str, team_id: int, season: int) -> Optional[TeamStats]:
        source = self._source(sport)
        key = CacheKey("stats", sport, ("team", team_id, season))
        stats = await self._cached(key, lambda: self._degrade(
            sport, "team stats", source.get_team_stats(team_id, season)))
        # callers get their own copy of the cached dict
        return copy.deepcopy(stats)

    async def list_players(self, sport: str, team_id: int) -> List[Player]:
        source = self._source(sport)
        key = CacheKey("players", sport, (team_id,))
        players = await self._cached(key, lambda: self._degrade(sport, "players", source.list_players(team_id)))
        return list(players or [])

    async def get_player_stats(self, sport: str, player_id: int, season: int) -> Optional[PlayerStats]:
        source = self._source(sport)
        key = CacheKey("stats", sport, ("player", player_id, season))
        stats = await self._cached(key, lambda: self._degrade(
            sport, "player stats", source.get_player_stats(player_id, season)))
        return copy.deepcopy(stats)

    def clear_cache(self, category: Optional[str] = None, key: Union[CacheKey, str, None] = None) -> None:
        self.cache.clear(category, key)
        logger.info(f"cache cleared category={category or '*'} key={key or '*'}")

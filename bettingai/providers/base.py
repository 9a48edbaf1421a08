"""
Data-source abstraction for the five sports providers.

Every sport is served through the same interface. A source answers each
operation with a normalized record, or ``None`` when it has nothing for that
operation (canned tables only cover some sports/operations). Live sources
raise ``UpstreamError`` for transient failures; deciding what to do about
them is the caller's job.

    source = LayeredSource("football", [MockDataSource(...), FootballDataSource(http, key)])
    teams = await source.list_teams(2021)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Sequence, TypeVar

from ..core.config import ENDPOINTS, LEAGUES, SUPPORTED_SPORTS
from ..core.http import HttpRetryingClient, UpstreamError
from ..domain.models import League, Match, Player, PlayerStats, Team, TeamStats

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UnsupportedSportError(ValueError):
    """Requested sport has no provider. A caller/configuration mistake, not a transient fault."""

    def __init__(self, sport: str):
        super().__init__(f"Sport '{sport}' not supported")
        self.sport = sport
        self.expected = sorted(SUPPORTED_SPORTS)


def ensure_supported(sport: str) -> str:
    if sport not in SUPPORTED_SPORTS:
        raise UnsupportedSportError(sport)
    return sport


def fixed_leagues(sport: str) -> List[League]:
    return [League(**row) for row in LEAGUES.get(sport, [])]


# ---------- projection helpers ----------
def parse_kickoff(value: Any) -> datetime:
    """
    Providers disagree on timestamps: '2024-03-02T15:00:00Z',
    '2024-09-06T00:20Z', '2024-01-05T00:00:00.000Z' or a bare '2024-01-05'.
    Always return an aware UTC datetime.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise ValueError(f"no kickoff time in {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return None


def dig(data: Any, *path: Any) -> Any:
    """Walk dicts/lists by key or index; None as soon as anything is missing."""
    for part in path:
        if isinstance(data, Mapping):
            data = data.get(part)
        elif isinstance(data, list) and isinstance(part, int) and -len(data) <= part < len(data):
            data = data[part]
        else:
            return None
    return data


def project_rows(sport: str, what: str, rows: Any, fn: Callable[[Any], T]) -> List[T]:
    """
    Map raw rows with ``fn``. A row that does not fit the expected shape is
    skipped so one quirky record doesn't kill the whole batch.
    """
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise UpstreamError(f"{sport} {what}: expected a list, got {type(rows).__name__}")
    out: List[T] = []
    for row in rows:
        try:
            out.append(fn(row))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            keys = list(row.keys()) if isinstance(row, Mapping) else type(row).__name__
            logger.warning(f"[{sport}] skip {what} row due to mapping error: {e} | row keys={keys}")
    return out


def project_one(sport: str, what: str, row: Any, fn: Callable[[Any], T]) -> T:
    """Map a single record; a payload that doesn't fit is an upstream fault."""
    try:
        return fn(row)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise UpstreamError(f"{sport} {what}: malformed payload ({e})") from e


# ---------- interfaces ----------
class SportDataSource(ABC):
    """One sport's answer to the uniform operations. ``None`` means 'not served here'."""

    sport: str = ""

    async def list_leagues(self) -> Optional[List[League]]:
        return None

    @abstractmethod
    async def list_teams(self, league_id: int) -> Optional[List[Team]]:
        ...

    @abstractmethod
    async def list_matches(self, league_id: int, date_from: str, date_to: str) -> Optional[List[Match]]:
        ...

    @abstractmethod
    async def get_match(self, match_id: int) -> Optional[Match]:
        ...

    @abstractmethod
    async def get_team_stats(self, team_id: int, season: int) -> Optional[TeamStats]:
        ...

    @abstractmethod
    async def list_players(self, team_id: int) -> Optional[List[Player]]:
        ...

    @abstractmethod
    async def get_player_stats(self, player_id: int, season: int) -> Optional[PlayerStats]:
        ...


class LayeredSource(SportDataSource):
    """Ask each layer in order; the first non-None answer wins."""

    def __init__(self, sport: str, layers: Sequence[SportDataSource]):
        self.sport = sport
        self.layers = list(layers)

    async def _first(self, op: str, *args: Any) -> Any:
        for layer in self.layers:
            result = await getattr(layer, op)(*args)
            if result is not None:
                return result
        return None

    async def list_leagues(self):
        return await self._first("list_leagues")

    async def list_teams(self, league_id):
        return await self._first("list_teams", league_id)

    async def list_matches(self, league_id, date_from, date_to):
        return await self._first("list_matches", league_id, date_from, date_to)

    async def get_match(self, match_id):
        return await self._first("get_match", match_id)

    async def get_team_stats(self, team_id, season):
        return await self._first("get_team_stats", team_id, season)

    async def list_players(self, team_id):
        return await self._first("list_players", team_id)

    async def get_player_stats(self, player_id, season):
        return await self._first("get_player_stats", player_id, season)


class LiveSource(SportDataSource):
    """
    HTTP-backed source. Subclasses set ``sport`` (and ``auth_header`` when the
    provider wants a key) and implement the projections.
    """

    auth_header: ClassVar[Optional[str]] = None

    def __init__(self, http: HttpRetryingClient, api_key: Optional[str] = None,
                 base_url: Optional[str] = None):
        self._http = http
        self.api_key = api_key
        self.base_url = (base_url or ENDPOINTS[self.sport]).rstrip("/")

    def _headers(self) -> Dict[str, str]:
        if not self.auth_header:
            return {}
        if not self.api_key:
            raise UpstreamError(f"{self.sport}: API key not configured")
        return {self.auth_header: self.api_key}

    async def _get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug(f"Fetching {self.sport} data from: {url} params={dict(params or {})}")
        payload = await self._http.get_json(url, params=params, headers=self._headers())
        if not isinstance(payload, dict):
            raise UpstreamError(f"{self.sport}: unexpected payload from {url}", url=url)
        return payload

    async def list_leagues(self) -> Optional[List[League]]:
        # only football has a dynamic listing; everyone else is a fixed table
        return fixed_leagues(self.sport)

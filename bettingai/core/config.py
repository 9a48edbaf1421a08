# bettingai/core/config.py
from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# ----- Public types -----
Sport = Literal["football", "nba", "mlb", "nfl", "nhl"]

# ----- App settings (env-driven) -----
class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    football_data_key: Optional[str] = None
    balldontlie_key: Optional[str] = None
    use_mock_data: bool = True

    http_timeout: float = 20.0
    http_retries: int = 2
    http_backoff: float = 0.75

    log_level: str = "INFO"
    favorites_path: str = ".bettingai_favorites.json"
    display_timezone: str = "UTC"
    default_sport: Sport = "football"
    match_window_days: int = 7

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

# ----- Provider static metadata -----
ENDPOINTS: Dict[str, str] = {
    "football": "https://api.football-data.org/v4",
    "nba":      "https://api.balldontlie.io/v1",
    "mlb":      "https://statsapi.mlb.com/api/v1",
    "nfl":      "https://site.api.espn.com/apis/site/v2/sports/football/nfl",
    "nhl":      "https://statsapi.web.nhl.com/api/v1",
}

# Fixed league tables. Football may be refreshed from /competitions.
LEAGUES: Dict[str, List[dict]] = {
    "football": [
        {"id": 2021, "name": "Premier League",        "country": "England"},
        {"id": 2014, "name": "La Liga",               "country": "Spain"},
        {"id": 2019, "name": "Serie A",               "country": "Italy"},
        {"id": 2002, "name": "Bundesliga",            "country": "Germany"},
        {"id": 2015, "name": "Ligue 1",               "country": "France"},
        {"id": 2001, "name": "UEFA Champions League", "country": "Europe"},
    ],
    "nba": [
        {"id": 0, "name": "NBA", "country": "USA"},
    ],
    "mlb": [
        {"id": 103, "name": "American League", "country": "USA"},
        {"id": 104, "name": "National League", "country": "USA"},
    ],
    "nfl": [
        {"id": 1, "name": "AFC", "country": "USA"},
        {"id": 2, "name": "NFC", "country": "USA"},
    ],
    "nhl": [
        {"id": 0, "name": "NHL", "country": "USA/Canada"},
    ],
}

SUPPORTED_SPORTS = tuple(ENDPOINTS)

def league_name(sport: str, league_id: Optional[int]) -> str:
    """Name of a league from the fixed table, or 'Unknown League'."""
    for row in LEAGUES.get(sport, []):
        if row["id"] == league_id:
            return row["name"]
    return "Unknown League"

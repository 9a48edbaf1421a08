from __future__ import annotations

import copy
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from ..core.config import league_name
from ..domain.models import League, Match, Player, PlayerStats, Team, TeamStats
from .base import SportDataSource, fixed_leagues

logger = logging.getLogger(__name__)

_CREST = "https://crests.football-data.org/{}.svg"

# ---------------- football ----------------
FOOTBALL_TEAMS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Manchester United", "short_name": "Man United",  "abbreviation": "MUN", "crest": _CREST.format(66)},
    {"id": 2, "name": "Liverpool",         "short_name": "Liverpool",   "abbreviation": "LIV", "crest": _CREST.format(64)},
    {"id": 3, "name": "Arsenal",           "short_name": "Arsenal",     "abbreviation": "ARS", "crest": _CREST.format(57)},
    {"id": 4, "name": "Chelsea",           "short_name": "Chelsea",     "abbreviation": "CHE", "crest": _CREST.format(61)},
    {"id": 5, "name": "Manchester City",   "short_name": "Man City",    "abbreviation": "MCI", "crest": _CREST.format(65)},
    {"id": 6, "name": "Tottenham Hotspur", "short_name": "Spurs",       "abbreviation": "TOT", "crest": _CREST.format(73)},
    {"id": 7, "name": "Newcastle United",  "short_name": "Newcastle",   "abbreviation": "NEW", "crest": _CREST.format(67)},
    {"id": 8, "name": "Aston Villa",       "short_name": "Aston Villa", "abbreviation": "AVL", "crest": _CREST.format(58)},
]

# (match id, home team id, away team id, hours from now)
FOOTBALL_FIXTURES = [(1001, 1, 2, 1), (1002, 3, 4, 2), (1003, 5, 6, 3), (1004, 7, 8, 4)]

FOOTBALL_STATS: Dict[int, TeamStats] = {
    1: {"played": 28, "wins": 16, "draws": 6, "losses": 6,  "goals_for": 48, "goals_against": 33,
        "clean_sheets": 9,  "points": 54, "goal_difference": 15, "win_rate": 57.1, "form": ["W", "D", "W", "L", "W"]},
    2: {"played": 29, "wins": 19, "draws": 7, "losses": 3,  "goals_for": 65, "goals_against": 26,
        "clean_sheets": 12, "points": 64, "goal_difference": 39, "win_rate": 65.5, "form": ["W", "W", "W", "D", "W"]},
    3: {"played": 29, "wins": 21, "draws": 4, "losses": 4,  "goals_for": 70, "goals_against": 24,
        "clean_sheets": 11, "points": 67, "goal_difference": 46, "win_rate": 72.4, "form": ["W", "W", "W", "L", "W"]},
    4: {"played": 28, "wins": 11, "draws": 7, "losses": 10, "goals_for": 44, "goals_against": 39,
        "clean_sheets": 8,  "points": 40, "goal_difference": 5,  "win_rate": 39.3, "form": ["L", "W", "L", "D", "W"]},
    5: {"played": 28, "wins": 20, "draws": 5, "losses": 3,  "goals_for": 67, "goals_against": 26,
        "clean_sheets": 10, "points": 65, "goal_difference": 41, "win_rate": 71.4, "form": ["W", "W", "D", "W", "W"]},
}
FOOTBALL_DEFAULT_STATS: TeamStats = {
    "played": 28, "wins": 12, "draws": 8, "losses": 8, "goals_for": 42, "goals_against": 40,
    "clean_sheets": 7, "points": 44, "goal_difference": 2, "win_rate": 42.9, "form": ["W", "L", "D", "W", "L"],
}

def _squad(rows) -> List[Dict[str, Any]]:
    return [
        {"id": pid, "name": name, "position": pos, "nationality": nat, "date_of_birth": dob, "number": num}
        for pid, name, pos, nat, dob, num in rows
    ]

FOOTBALL_SQUADS: Dict[int, List[Dict[str, Any]]] = {
    1: _squad([
        (101, "David de Gea",       "Goalkeeper", "Spain",     "1990-11-07", 1),
        (102, "Aaron Wan-Bissaka",  "Defender",   "England",   "1997-11-26", 29),
        (103, "Raphael Varane",     "Defender",   "France",    "1993-04-25", 19),
        (104, "Lisandro Martinez",  "Defender",   "Argentina", "1998-01-18", 6),
        (105, "Luke Shaw",          "Defender",   "England",   "1995-07-12", 23),
        (106, "Casemiro",           "Midfielder", "Brazil",    "1992-02-23", 18),
        (107, "Bruno Fernandes",    "Midfielder", "Portugal",  "1994-09-08", 8),
        (108, "Mason Mount",        "Midfielder", "England",   "1999-01-10", 7),
        (109, "Marcus Rashford",    "Attacker",   "England",   "1997-10-31", 10),
        (110, "Rasmus Højlund",     "Attacker",   "Denmark",   "2003-02-04", 11),
        (111, "Antony",             "Attacker",   "Brazil",    "2000-02-24", 21),
    ]),
    2: _squad([
        (201, "Alisson",                "Goalkeeper", "Brazil",      "1992-10-02", 1),
        (202, "Trent Alexander-Arnold", "Defender",   "England",     "1998-10-07", 66),
        (203, "Virgil van Dijk",        "Defender",   "Netherlands", "1991-07-08", 4),
        (204, "Andrew Robertson",       "Defender",   "Scotland",    "1994-03-11", 26),
        (205, "Ibrahima Konaté",        "Defender",   "France",      "1999-05-25", 5),
        (206, "Alexis Mac Allister",    "Midfielder", "Argentina",   "1998-12-24", 10),
        (207, "Dominik Szoboszlai",     "Midfielder", "Hungary",     "2000-10-25", 8),
        (208, "Ryan Gravenberch",       "Midfielder", "Netherlands", "2002-05-16", 38),
        (209, "Mohamed Salah",          "Attacker",   "Egypt",       "1992-06-15", 11),
        (210, "Luis Díaz",              "Attacker",   "Colombia",    "1997-01-13", 7),
        (211, "Darwin Núñez",           "Attacker",   "Uruguay",     "1999-06-24", 9),
    ]),
}
FOOTBALL_DEFAULT_SQUAD = _squad([
    (901, "Goalkeeper",   "Goalkeeper", "England",   "1990-01-01", 1),
    (902, "Defender 1",   "Defender",   "England",   "1992-01-01", 2),
    (903, "Defender 2",   "Defender",   "France",    "1993-01-01", 3),
    (904, "Defender 3",   "Defender",   "Spain",     "1994-01-01", 4),
    (905, "Midfielder 1", "Midfielder", "Brazil",    "1995-01-01", 6),
    (906, "Midfielder 2", "Midfielder", "Argentina", "1996-01-01", 8),
    (907, "Midfielder 3", "Midfielder", "Germany",   "1997-01-01", 10),
    (908, "Forward 1",    "Attacker",   "Portugal",  "1998-01-01", 7),
    (909, "Forward 2",    "Attacker",   "Italy",     "1999-01-01", 9),
    (910, "Forward 3",    "Attacker",   "Belgium",   "2000-01-01", 11),
])

# ---------------- nba ----------------
NBA_TEAMS: List[Dict[str, Any]] = [
    {"id": 101, "name": "Los Angeles Lakers",    "short_name": "Lakers",   "abbreviation": "LAL"},
    {"id": 102, "name": "Boston Celtics",        "short_name": "Celtics",  "abbreviation": "BOS"},
    {"id": 103, "name": "Golden State Warriors", "short_name": "Warriors", "abbreviation": "GSW"},
    {"id": 104, "name": "Brooklyn Nets",         "short_name": "Nets",     "abbreviation": "BKN"},
]
NBA_FIXTURES = [(2001, 101, 102, 1), (2002, 103, 104, 2)]

NBA_STATS: TeamStats = {
    "wins": 42, "losses": 30, "win_percentage": 0.583,
    "points_per_game": 115.7, "rebounds_per_game": 44.2, "assists_per_game": 25.8,
    "steals_per_game": 7.5, "blocks_per_game": 5.2, "turnovers_per_game": 13.5,
    "field_goal_percentage": 47.6, "three_point_percentage": 36.2, "free_throw_percentage": 78.3,
    "form": ["W", "W", "L", "W", "L"],
}

NBA_ROSTER: List[Dict[str, Any]] = [
    {"id": pid, "name": name, "position": pos, "number": num, "height": h, "weight": w, "team": "Los Angeles Lakers"}
    for pid, name, pos, num, h, w in [
        (301, "LeBron James",      "Forward",        23, "6-9",  250),
        (302, "Anthony Davis",     "Forward-Center", 3,  "6-10", 253),
        (303, "Austin Reaves",     "Guard",          15, "6-5",  197),
        (304, "D'Angelo Russell",  "Guard",          1,  "6-4",  193),
        (305, "Jarred Vanderbilt", "Forward",        2,  "6-9",  214),
        (306, "Rui Hachimura",     "Forward",        28, "6-8",  230),
        (307, "Gabe Vincent",      "Guard",          7,  "6-3",  200),
        (308, "Taurean Prince",    "Forward",        12, "6-7",  218),
        (309, "Christian Wood",    "Center",         35, "6-9",  214),
        (310, "Jaxson Hayes",      "Center",         11, "7-0",  220),
    ]
]


class MockDataSource(SportDataSource):
    """
    Canned demonstration data. Kickoff times are relative to the call, like a
    live slate would be. Answers None wherever there is no table, so a live
    source layered behind it takes over.
    """

    def __init__(self, sport: str, tables: Dict[str, Any]):
        self.sport = sport
        self.tables = tables

    def _served(self, what: str) -> None:
        logger.info(f"Using mock {self.sport} {what} data")

    def _team(self, team_id: int) -> Dict[str, Any]:
        return next(t for t in self.tables["teams"] if t["id"] == team_id)

    def _ref(self, team_id: int) -> Dict[str, Any]:
        t = self._team(team_id)
        return {"id": t["id"], "name": t["name"], "short_name": t.get("short_name"), "crest": t.get("crest")}

    def _match(self, match_id: int, home: int, away: int, hours: float, league_id: int, **extra) -> Match:
        return Match(
            id=match_id,
            kickoff_time=datetime.now(timezone.utc) + timedelta(hours=hours),
            status="SCHEDULED",
            home_team=self._ref(home),
            away_team=self._ref(away),
            competition={"id": league_id, "name": league_name(self.sport, league_id),
                         "emblem": self.tables.get("emblem")},
            **extra,
        )

    async def list_leagues(self) -> Optional[List[League]]:
        return fixed_leagues(self.sport)

    async def list_teams(self, league_id: int) -> Optional[List[Team]]:
        if "teams" not in self.tables:
            return None
        self._served("teams")
        return [Team(**t) for t in self.tables["teams"]]

    async def list_matches(self, league_id: int, date_from: str, date_to: str) -> Optional[List[Match]]:
        if "fixtures" not in self.tables:
            return None
        self._served("matches")
        return [self._match(mid, h, a, hrs, league_id) for mid, h, a, hrs in self.tables["fixtures"]]

    async def get_match(self, match_id: int) -> Optional[Match]:
        detail = self.tables.get("detail")
        if detail is None or not match_id:
            return None
        self._served("match details")
        return self._match(match_id, detail["home"], detail["away"], 24, detail["league_id"],
                           **detail["extra"])

    async def get_team_stats(self, team_id: int, season: int) -> Optional[TeamStats]:
        stats = self.tables.get("stats")
        if stats is None:
            return None
        self._served("team stats")
        if callable(stats):
            return copy.deepcopy(stats(team_id))
        return copy.deepcopy(stats)

    async def list_players(self, team_id: int) -> Optional[List[Player]]:
        players = self.tables.get("players")
        if players is None:
            return None
        self._served("players")
        rows = players(team_id) if callable(players) else players
        return [Player(**p) for p in rows]

    async def get_player_stats(self, player_id: int, season: int) -> Optional[PlayerStats]:
        return None


FOOTBALL_DETAIL = {
    "home": 1,
    "away": 2,
    "league_id": 2021,
    "extra": {
        "matchday": 30,
        "stage": "REGULAR_SEASON",
        "venue": "Old Trafford",
        "attendance": 74000,
        "head_to_head": {"total_matches": 12, "home_wins": 5, "away_wins": 4, "draws": 3},
        "lineups": {
            "home": [
                {"id": 101, "name": "David de Gea", "position": "Goalkeeper"},
                {"id": 102, "name": "Aaron Wan-Bissaka", "position": "Defender"},
                {"id": 103, "name": "Raphael Varane", "position": "Defender"},
                {"id": 104, "name": "Lisandro Martinez", "position": "Defender"},
            ],
            "away": [
                {"id": 201, "name": "Alisson", "position": "Goalkeeper"},
                {"id": 202, "name": "Trent Alexander-Arnold", "position": "Defender"},
                {"id": 203, "name": "Virgil van Dijk", "position": "Defender"},
                {"id": 204, "name": "Andrew Robertson", "position": "Defender"},
            ],
        },
    },
}

MOCK_TABLES: Dict[str, Dict[str, Any]] = {
    "football": {
        "teams": FOOTBALL_TEAMS,
        "fixtures": FOOTBALL_FIXTURES,
        "emblem": "https://crests.football-data.org/PL.png",
        "detail": FOOTBALL_DETAIL,
        "stats": lambda team_id: FOOTBALL_STATS.get(team_id, FOOTBALL_DEFAULT_STATS),
        "players": lambda team_id: FOOTBALL_SQUADS.get(team_id, FOOTBALL_DEFAULT_SQUAD),
    },
    "nba": {
        "teams": NBA_TEAMS,
        "fixtures": NBA_FIXTURES,
        "stats": NBA_STATS,
        "players": NBA_ROSTER,
    },
}


def mock_source(sport: str) -> Optional[MockDataSource]:
    tables = MOCK_TABLES.get(sport)
    return MockDataSource(sport, tables) if tables is not None else None

from datetime import datetime, timezone

import pytest

from bettingai.providers.base import dig, parse_kickoff, project_rows, to_int
from bettingai.providers.espn_nfl import american_to_decimal
from bettingai.providers.nhl import nhl_season

from conftest import fd_match, fd_matches


def test_parse_kickoff_handles_provider_formats():
    expected = datetime(2024, 9, 6, 0, 20, tzinfo=timezone.utc)
    assert parse_kickoff("2024-09-06T00:20Z") == expected
    assert parse_kickoff("2024-09-06T00:20:00.000Z") == expected
    assert parse_kickoff("2024-09-05T20:20:00-04:00") == expected
    assert parse_kickoff("2024-09-06") == datetime(2024, 9, 6, tzinfo=timezone.utc)
    with pytest.raises(ValueError):
        parse_kickoff(None)


def test_small_helpers():
    assert to_int("3") == 3
    assert to_int("2.0") == 2
    assert to_int("") is None
    assert dig({"a": [{"b": 1}]}, "a", 0, "b") == 1
    assert dig({"a": []}, "a", 0, "b") is None
    assert american_to_decimal("-150") == 1.667
    assert american_to_decimal(130) == 2.3
    assert american_to_decimal(None) is None
    assert nhl_season(2023) == "20232024"


def test_bad_rows_are_skipped(caplog):
    rows = [{"id": 1}, {"nope": True}]
    assert project_rows("football", "team", rows, lambda r: r["id"]) == [1]
    assert "skip team row" in caplog.text


@pytest.mark.asyncio
async def test_football_match_detail_extras(live_client, upstream):
    upstream.routes["/matches/99"] = {
        **fd_match(99, status="FINISHED", matchday=21, stage="REGULAR_SEASON", venue="Anfield", attendance=60000),
        "competition": {"id": 2021, "name": "Premier League"},
        "score": {"fullTime": {"home": 4, "away": 2}},
        "head2head": {"numberOfMatches": 10, "homeTeam": {"wins": 6, "draws": 2}, "awayTeam": {"wins": 2}},
    }
    match = await live_client.get_match_detail("football", 99)

    assert match.status == "FINISHED"
    assert (match.score.home, match.score.away) == (4, 2)
    assert (match.matchday, match.venue, match.attendance) == (21, "Anfield", 60000)
    assert match.head_to_head == {"total_matches": 10, "home_wins": 6, "away_wins": 2, "draws": 2}
    request = upstream.calls[0]
    assert request.headers["X-Auth-Token"] == "fd-key"


@pytest.mark.asyncio
async def test_football_matches_skip_malformed_rows(live_client, upstream):
    broken = fd_match(2)
    del broken["utcDate"]
    upstream.routes["/competitions/2021/matches"] = fd_matches(fd_match(1), broken)
    matches = await live_client.list_matches("football", 2021, "2024-01-01", "2024-01-08")
    assert [m.id for m in matches] == [1]
    assert upstream.calls[0].url.params["dateTo"] == "2024-01-08"


@pytest.mark.asyncio
async def test_football_team_stats_are_derived_from_finished_matches(live_client, upstream):
    def played(i, home, hs, as_):
        row = fd_match(i, f"2024-0{i}-01T15:00:00Z", status="FINISHED")
        row["homeTeam"], row["awayTeam"] = (LFC_REF, OPP) if home else (OPP, LFC_REF)
        row["score"] = {"fullTime": {"home": hs, "away": as_}}
        return row

    upstream.routes["/teams/64/matches"] = {"matches": [
        played(1, True, 3, 0),
        played(2, False, 0, 1),
        played(3, True, 1, 0),
        played(4, False, 1, 1),
        played(5, True, 1, 2),
    ]}
    stats = await live_client.get_team_stats("football", 64, 2024)

    assert stats["played"] == 5
    assert (stats["wins"], stats["draws"], stats["losses"]) == (3, 1, 1)
    assert stats["points"] == 10
    assert stats["goal_difference"] == 4
    assert stats["win_rate"] == 60.0
    assert upstream.calls[0].url.params["status"] == "FINISHED"


LFC_REF = {"id": 64, "name": "Liverpool FC"}
OPP = {"id": 1, "name": "Opponent FC"}


@pytest.mark.asyncio
async def test_nba_games_and_derived_stats(live_client, upstream):
    lakers = {"id": 14, "full_name": "Los Angeles Lakers", "abbreviation": "LAL"}
    celtics = {"id": 2, "full_name": "Boston Celtics", "abbreviation": "BOS"}
    game = {"id": 9001, "date": "2024-01-05", "datetime": "2024-01-06T00:30:00Z", "status": "Final",
            "home_team": lakers, "visitor_team": celtics, "home_team_score": 114, "visitor_team_score": 105}
    upstream.routes["/games"] = {"data": [game]}

    matches = await live_client.list_matches("nba", 0, "2024-01-05", "2024-01-06")
    assert matches[0].home_team.short_name == "LAL"
    assert matches[0].competition.name == "NBA"
    assert matches[0].kickoff_time == datetime(2024, 1, 6, 0, 30, tzinfo=timezone.utc)
    assert upstream.calls[0].url.params["start_date"] == "2024-01-05"
    assert upstream.calls[0].headers["Authorization"] == "bdl-key"

    stats = await live_client.get_team_stats("nba", 14, 2023)
    assert stats["wins"] == 1
    assert stats["points_per_game"] == 114.0


@pytest.mark.asyncio
async def test_mlb_schedule_and_league_filter(live_client, upstream):
    upstream.routes["/teams"] = {"teams": [
        {"id": 147, "name": "New York Yankees", "teamName": "Yankees", "league": {"id": 103, "name": "American League"}},
        {"id": 121, "name": "New York Mets", "teamName": "Mets", "league": {"id": 104, "name": "National League"}},
    ]}
    upstream.routes["/schedule"] = {"dates": [{"games": [{
        "gamePk": 745001,
        "gameDate": "2024-04-02T23:05:00Z",
        "status": {"detailedState": "Scheduled"},
        "teams": {"home": {"team": {"id": 147, "name": "New York Yankees"}},
                  "away": {"team": {"id": 111, "name": "Boston Red Sox"}}},
    }]}]}

    teams = await live_client.list_teams("mlb", 103)
    assert [t.short_name for t in teams] == ["Yankees"]

    matches = await live_client.list_matches("mlb", 103, "2024-04-01", "2024-04-07")
    assert matches[0].id == 745001
    assert matches[0].competition.name == "American League"
    assert matches[0].score.home is None
    assert upstream.calls[-1].url.params["startDate"] == "2024-04-01"


@pytest.mark.asyncio
async def test_nfl_scoreboard_moneylines(live_client, upstream):
    def side(home_away, team_id, name, score):
        return {"homeAway": home_away, "score": score,
                "team": {"id": str(team_id), "displayName": name, "shortDisplayName": name.split()[-1]}}

    upstream.routes["/scoreboard"] = {"events": [{
        "id": "401547417",
        "date": "2024-09-06T00:20Z",
        "competitions": [{
            "date": "2024-09-06T00:20Z",
            "status": {"type": {"name": "STATUS_FINAL"}},
            "competitors": [side("home", 12, "Kansas City Chiefs", "27"), side("away", 33, "Baltimore Ravens", "20")],
            "odds": [{"homeTeamOdds": {"moneyLine": -150}, "awayTeamOdds": {"moneyLine": 130}}],
        }],
    }]}
    (match,) = await live_client.list_matches("nfl", 1, "2024-09-05", "2024-09-10")

    assert match.id == 401547417
    assert (match.score.home, match.score.away) == (27, 20)
    assert (match.odds.home, match.odds.draw, match.odds.away) == (1.667, 1.0, 2.3)
    assert match.competition.name == "AFC"
    assert upstream.calls[0].url.params["dates"] == "20240905-20240910"


@pytest.mark.asyncio
async def test_nhl_roster_and_season_format(live_client, upstream):
    upstream.routes["/roster"] = {"roster": [
        {"person": {"id": 8478402, "fullName": "Connor McDavid"}, "jerseyNumber": "97", "position": {"name": "Center"}},
    ]}
    upstream.routes["/stats"] = {"stats": [{"splits": [{"stat": {"wins": 52, "losses": 23}}]}]}

    (player,) = await live_client.list_players("nhl", 22)
    assert (player.name, player.number, player.position) == ("Connor McDavid", 97, "Center")

    stats = await live_client.get_team_stats("nhl", 22, 2023)
    assert stats == {"wins": 52, "losses": 23}
    assert upstream.calls[-1].url.params["season"] == "20232024"

from datetime import datetime
from zoneinfo import ZoneInfo

import httpx
import pytest

from bettingai.deps import get_client, get_facade
from bettingai.main import app
from bettingai.services.formatting import local_today

from conftest import make_client, make_settings


@pytest.fixture
def api(facade):
    app.dependency_overrides[get_client] = lambda: facade.client
    app.dependency_overrides[get_facade] = lambda: facade
    yield httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_ping_and_health(api):
    async with api as ac:
        r = await ac.get("/api/v1/ping")
        h = await ac.get("/health")
    assert r.status_code == 200
    assert r.json() == {"pong": True}
    assert h.json()["status"] == "ok"
    assert "nhl" in h.json()["sports"]


@pytest.mark.asyncio
async def test_unsupported_sport_is_422(api):
    async with api as ac:
        r = await ac.get("/sports/curling/leagues/1/teams")
    assert r.status_code == 422
    detail = r.json()["detail"]
    assert detail["input"] == "curling"
    assert "football" in detail["expected"]


@pytest.mark.asyncio
async def test_sports_routes(api):
    async with api as ac:
        leagues = await ac.get("/sports/nba/leagues")
        teams = await ac.get("/sports/football/leagues/2021/teams")
        matches = await ac.get("/sports/football/leagues/2021/matches",
                               params={"date_from": "2024-01-01", "date_to": "2024-01-08"})
        detail = await ac.get("/sports/football/matches/1001")
        stats = await ac.get("/sports/football/teams/2/stats", params={"season": 2024})
        players = await ac.get("/sports/nba/teams/101/players")
    assert leagues.json() == [{"id": 0, "name": "NBA", "country": "USA"}]
    assert len(teams.json()) == 8
    assert matches.json()[0]["odds"] == {"home": 1.0, "draw": 1.0, "away": 1.0}
    assert detail.json()["venue"] == "Old Trafford"
    assert stats.json()["points"] == 64
    assert players.json()[0]["name"] == "LeBron James"


@pytest.mark.asyncio
async def test_unavailable_detail_is_404(api, upstream):
    upstream.routes["/persons/5"] = 502
    async with api as ac:
        r = await ac.get("/sports/football/players/5/stats")
        bad_date = await ac.get("/sports/football/leagues/2021/matches", params={"date_from": "01/02/2024"})
    assert r.status_code == 404
    assert bad_date.status_code == 422


@pytest.mark.asyncio
async def test_cache_clear(api, facade):
    async with api as ac:
        await ac.get("/sports/football/leagues/2021/teams")
        assert facade.client.cache.size("teams") == 1
        r = await ac.delete("/cache", params={"category": "teams", "key": "teams:football:2021"})
        bogus = await ac.delete("/cache", params={"category": "odds"})
    assert r.status_code == 200
    assert facade.client.cache.size("teams") == 0
    assert bogus.status_code == 422


@pytest.mark.asyncio
async def test_session_flow(api):
    async with api as ac:
        start = await ac.get("/session")
        switched = await ac.put("/session", json={"sport": "nba", "date_from": "2024-01-01"})
        rejected = await ac.put("/session", json={"sport": "nba", "colour": "red"})
        matches = await ac.get("/session/matches")
        found = await ac.get("/session/teams/search", params={"q": "lakers"})
    assert start.json()["sport"] == "football"
    assert switched.json()["league_id"] == 0
    assert switched.json()["date_from"] == "2024-01-01"
    assert rejected.status_code == 422
    assert [m["id"] for m in matches.json()] == [2001, 2002]
    assert [t["id"] for t in found.json()] == [101]


@pytest.mark.asyncio
async def test_session_team_routes(api):
    async with api as ac:
        team_matches = await ac.get("/session/teams/3/matches")
        stats = await ac.get("/session/teams/3/stats")
        players = await ac.get("/session/teams/1/players")
        detail = await ac.get("/session/matches/1001")
    assert [m["id"] for m in team_matches.json()] == [1002]
    assert stats.json()["wins"] == 21
    assert players.json()[0]["name"] == "David de Gea"
    assert detail.json()["attendance"] == 74000


@pytest.mark.asyncio
async def test_prompt_and_favorites(api):
    async with api as ac:
        prompt = await ac.post("/session/prompt", json={"prompt": "Arsenal at home?"})
        on = await ac.post("/favorites/football/3")
        check = await ac.get("/favorites/football/3")
    assert prompt.json()["prompt"].startswith("Arsenal at home?\n\nTeam Statistics:\n\nArsenal:\n")
    assert on.json() == {"sport": "football", "team_id": 3, "favorite": True}
    assert check.json()["favorite"] is True


@pytest.mark.asyncio
async def test_favorites_reject_unknown_sport(api):
    async with api as ac:
        toggled = await ac.post("/favorites/curling/1")
        checked = await ac.get("/favorites/curling/1")
    assert toggled.status_code == 422
    assert toggled.json()["detail"]["input"] == "curling"
    assert checked.status_code == 422


@pytest.mark.asyncio
async def test_default_window_and_season_follow_display_timezone(tmp_path, upstream):
    tz = ZoneInfo("Pacific/Kiritimati")
    client = make_client(make_settings(tmp_path, display_timezone="Pacific/Kiritimati"), upstream)
    upstream.routes["/schedule"] = {"dates": []}
    upstream.routes["/teams/147/stats"] = {"stats": []}
    app.dependency_overrides[get_client] = lambda: client
    try:
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
            matches = await ac.get("/sports/mlb/leagues/103/matches")
            await ac.get("/sports/mlb/teams/147/stats")
    finally:
        app.dependency_overrides.clear()

    assert matches.json() == []
    schedule, stats = upstream.calls
    assert schedule.url.params["startDate"] == local_today(tz).isoformat()
    assert stats.url.params["season"] == str(datetime.now(tz).year)

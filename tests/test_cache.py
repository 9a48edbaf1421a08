import pytest

from bettingai.core.cache import CacheKey, QueryCache


def test_key_renders_category_sport_and_params():
    key = CacheKey("matches", "football", (2021, "2024-01-01", "2024-01-08"))
    assert str(key) == "matches:football:2021:2024-01-01:2024-01-08"
    assert str(CacheKey("leagues", "nba")) == "leagues:nba"


def test_date_windows_are_separate_entries():
    cache = QueryCache()
    jan = CacheKey("matches", "football", (2021, "2024-01-01", "2024-01-08"))
    feb = CacheKey("matches", "football", (2021, "2024-02-01", "2024-02-08"))
    cache.set(jan, ["jan"])
    cache.set(feb, ["feb"])
    assert cache.get(jan) == ["jan"]
    assert cache.get(feb) == ["feb"]
    assert cache.size("matches") == 2


def test_clear_all_one_category_or_one_key():
    cache = QueryCache()
    teams = CacheKey("teams", "football", (2021,))
    other_teams = CacheKey("teams", "nba", (0,))
    players = CacheKey("players", "football", (1,))
    for k in (teams, other_teams, players):
        cache.set(k, [k.sport])

    cache.clear("teams", "teams:nba:0")
    assert other_teams not in cache
    assert teams in cache

    cache.clear("teams")
    assert cache.size("teams") == 0
    assert players in cache

    cache.clear()
    assert cache.size() == 0


def test_unknown_category_is_rejected_on_write():
    with pytest.raises(ValueError):
        QueryCache().set(CacheKey("odds", "football"), [])

import json

from bettingai.services.favorites import STORAGE_KEY, FavoritesStore


def test_toggle_round_trip(tmp_path):
    store = FavoritesStore(tmp_path / "favorites.json")
    assert store.toggle("football", 1) is True
    assert store.is_favorite("football", 1)
    assert store.toggle("football", 1) is False
    assert not store.is_favorite("football", 1)


def test_state_survives_reload(tmp_path):
    path = tmp_path / "favorites.json"
    FavoritesStore(path).toggle("nba", 14)

    assert FavoritesStore(path).contains("nba", 14)
    assert json.loads(path.read_text()) == {STORAGE_KEY: {"nba_14": True}}


def test_reload_picks_up_external_changes(tmp_path):
    path = tmp_path / "favorites.json"
    store = FavoritesStore(path)
    path.write_text(json.dumps({STORAGE_KEY: {"mlb_147": True}}))
    store.reload()
    assert store.contains("mlb", 147)


def test_corrupt_or_missing_storage_is_empty(tmp_path, caplog):
    assert len(FavoritesStore(tmp_path / "missing.json")) == 0

    path = tmp_path / "favorites.json"
    path.write_text("{not json")
    store = FavoritesStore(path)
    assert len(store) == 0
    assert "Error loading favorites" in caplog.text

    store.toggle("football", 2)
    assert json.loads(path.read_text()) == {STORAGE_KEY: {"football_2": True}}


def test_wrong_shape_is_ignored(tmp_path):
    path = tmp_path / "favorites.json"
    path.write_text(json.dumps({STORAGE_KEY: ["football_1"]}))
    assert len(FavoritesStore(path)) == 0

# bettingai/services/favorites.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Union

logger = logging.getLogger(__name__)

STORAGE_KEY = "bettingAI_favorites"


def favorite_key(sport: str, team_id: int) -> str:
    return f"{sport}_{team_id}"


class FavoritesStore:
    """
    Favorite teams as a flat ``{"football_1": true}`` map kept under one
    namespaced key of a small JSON file. Loaded once, rewritten in full on
    every toggle. An unreadable file counts as no favorites.
    """
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._favorites: Dict[str, bool] = self._load()

    def _load(self) -> Dict[str, bool]:
        if not self.path.exists():
            return {}
        try:
            saved = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Error loading favorites from {self.path}: {e}")
            return {}
        favorites = saved.get(STORAGE_KEY) if isinstance(saved, dict) else None
        if not isinstance(favorites, dict):
            logger.error(f"Ignoring malformed favorites in {self.path}")
            return {}
        return {str(k): True for k, v in favorites.items() if v}

    def _save(self) -> None:
        try:
            self.path.write_text(json.dumps({STORAGE_KEY: self._favorites}), encoding="utf-8")
        except OSError as e:
            logger.error(f"Error saving favorites to {self.path}: {e}")

    def reload(self) -> None:
        self._favorites = self._load()

    def toggle(self, sport: str, team_id: int) -> bool:
        """Flip membership and persist; returns whether the team is now a favorite."""
        key = favorite_key(sport, team_id)
        if self._favorites.pop(key, False):
            logger.info(f"Removed favorite {key}")
        else:
            self._favorites[key] = True
            logger.info(f"Added favorite {key}")
        self._save()
        return key in self._favorites

    def contains(self, sport: str, team_id: int) -> bool:
        return favorite_key(sport, team_id) in self._favorites

    is_favorite = contains

    def __len__(self) -> int:
        return len(self._favorites)

from __future__ import annotations

from typing import Any, Dict, Literal, NamedTuple, Optional, Tuple, Union, get_args

Category = Literal["leagues", "teams", "matches", "players", "stats"]
CATEGORIES: Tuple[str, ...] = get_args(Category)


class CacheKey(NamedTuple):
    """(category, sport, params...) rendered as ``category:sport:p1:p2``."""
    category: str
    sport: str
    params: Tuple[Any, ...] = ()

    def __str__(self) -> str:
        return ":".join([self.category, self.sport, *(str(p) for p in self.params)])


class QueryCache:
    """
    Process-local store of normalized query results, one bucket per category.

    No TTL and no size bound: entries live until clear() removes them.
    Writes replace the whole entry.
    """
    def __init__(self) -> None:
        self._store: Dict[str, Dict[str, Any]] = {c: {} for c in CATEGORIES}

    def get(self, key: CacheKey) -> Optional[Any]:
        return self._bucket(key.category).get(str(key))

    def set(self, key: CacheKey, value: Any) -> None:
        self._bucket(key.category)[str(key)] = value

    def __contains__(self, key: CacheKey) -> bool:
        return str(key) in self._bucket(key.category)

    def clear(self, category: Optional[str] = None, key: Union[CacheKey, str, None] = None) -> None:
        if category is None:
            for bucket in self._store.values():
                bucket.clear()
            return
        if category not in self._store:
            return
        if key is None:
            self._store[category].clear()
        else:
            self._store[category].pop(str(key), None)

    def size(self, category: Optional[str] = None) -> int:
        if category is not None:
            return len(self._store.get(category, {}))
        return sum(len(b) for b in self._store.values())

    def _bucket(self, category: str) -> Dict[str, Any]:
        try:
            return self._store[category]
        except KeyError:
            raise ValueError(f"Unknown cache category '{category}'") from None

"""Request-keyed cache for computed shopping lists.

The cached value is the unpriced aggregation, a pure function of the meal
plan, the recipes it points at and the pantry snapshot. Prices are applied
per request on top of it. The key is built explicitly from those inputs:
(meal plan id, meal plan version, snapshot fingerprint). There is no hidden
invalidation; a changed pantry simply produces a different key.

Thread-safety with a simple Lock, bounded by MAX_ENTRIES (least recently used
entries are dropped first).
"""
from __future__ import annotations
import hashlib
import json
from collections import OrderedDict
from threading import Lock
from typing import Any, Iterable, Optional, Tuple

from kitcha.domain.ShoppingList import ShoppingListResult

MAX_ENTRIES = 256

CacheKey = Tuple[str, int, str]


def fingerprint(records: Iterable[Any]) -> str:
    """Stable digest of a collection of value objects exposing to_dict()."""
    payload = sorted(json.dumps(r.to_dict(), sort_keys=True, default=str) for r in records)
    return hashlib.sha1("\n".join(payload).encode('utf-8')).hexdigest()


class ShoppingListCache:
    def __init__(self, max_entries: int = MAX_ENTRIES):
        self._lock = Lock()
        self._entries: "OrderedDict[CacheKey, ShoppingListResult]" = OrderedDict()
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(meal_plan_id: str, plan_version: int, *snapshots: Iterable[Any]) -> CacheKey:
        digest = hashlib.sha1("|".join(fingerprint(s) for s in snapshots).encode('utf-8')).hexdigest()
        return meal_plan_id, plan_version, digest

    def get(self, key: CacheKey) -> Optional[ShoppingListResult]:
        with self._lock:
            result = self._entries.get(key)
            if result is None:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return result

    def put(self, key: CacheKey, result: ShoppingListResult) -> None:
        with self._lock:
            self._entries[key] = result
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ['ShoppingListCache', 'fingerprint']

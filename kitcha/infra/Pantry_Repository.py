"""Pantry repository helpers (file persistence); satisfies PantryProvider.

Document layout: {"<user id>": [pantry item dict, ...]}

An item is identified by its normalized name and unit, so the same
ingredient can be stocked in several units (flour in cups and in grams).
"""
import logging
from threading import Lock
from typing import List, Optional

from kitcha.domain.Ingredient import Unit, normalize_name
from kitcha.domain.Pantry import PantryItem
from kitcha.infra.json_store import load_document, save_document
from kitcha.infra.paths import PANTRY_FILENAME, data_file

logger = logging.getLogger(__name__)

# guards read-modify-write of the pantry file
_lock = Lock()


def _matches(item: PantryItem, name: str, unit: Optional[Unit]) -> bool:
    return normalize_name(item.name) == normalize_name(name) and (unit is None or item.unit == unit)


class PantryRepository:
    def __init__(self, filename: str = PANTRY_FILENAME):
        self.filename = filename

    @property
    def path(self):
        return data_file(self.filename)

    def _load_all(self) -> dict:
        return load_document(self.path, {})

    def get_snapshot(self, user_id: str) -> List[PantryItem]:
        items = []
        for entry in self._load_all().get(user_id, []):
            try:
                items.append(PantryItem.from_dict(entry))
            except (ValueError, TypeError) as e:
                logger.error("Skipping malformed pantry item for %s: %s", user_id, e)
        return items

    def _save_user(self, user_id: str, items: List[PantryItem]) -> None:
        store = self._load_all()
        store[user_id] = [item.to_dict() for item in items]
        save_document(self.path, store)

    def add_item(self, user_id: str, item: PantryItem) -> PantryItem:
        with _lock:
            items = self.get_snapshot(user_id)
            if any(i.key == item.key for i in items):
                raise ValueError('Ingredient already exists')
            items.append(item)
            self._save_user(user_id, items)
        return item

    def update_item(self, user_id: str, name: str, item: PantryItem, unit: Optional[Unit] = None) -> PantryItem:
        '''Replace the item called ``name`` (stocked in ``unit`` when given).

        Raises KeyError when nothing matches, ValueError when the name alone
        matches several units or the replacement collides with another item.
        '''
        unit = Unit.parse(unit) if unit is not None else None
        with _lock:
            items = self.get_snapshot(user_id)
            found = [idx for idx, existing in enumerate(items) if _matches(existing, name, unit)]
            if not found:
                raise KeyError(name)
            if len(found) > 1:
                raise ValueError('Ingredient is stocked in several units; pass the unit to update')
            target = found[0]
            if any(i.key == item.key for idx, i in enumerate(items) if idx != target):
                raise ValueError('Another ingredient with this name and unit already exists')
            items[target] = item
            self._save_user(user_id, items)
        return item

    def delete_item(self, user_id: str, name: str, unit: Optional[Unit] = None) -> bool:
        '''Remove ``name`` in ``unit``, or in every unit when none is given.'''
        unit = Unit.parse(unit) if unit is not None else None
        with _lock:
            items = self.get_snapshot(user_id)
            remaining = [i for i in items if not _matches(i, name, unit)]
            if len(remaining) == len(items):
                return False
            self._save_user(user_id, remaining)
        return True

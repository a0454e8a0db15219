"""Pantry analysis helpers: what expires soon and what is running low."""
from __future__ import annotations
from datetime import date as _date
from typing import Any, Dict, Iterable, List, Optional

from kitcha.domain.Pantry import PantryItem
from kitcha.utilities.config import DAYS_BEFORE_EXPIRY
from kitcha.utilities.constants import DATE_FORMAT, LOW_STOCK_THRESHOLD
from kitcha.utilities.formatting import quantity_to_json

__all__ = ["compute_expiring_soon", "compute_low_stock", "compute_pantry_snapshots", "expiry_priority"]


def expiry_priority(days_left: int) -> str:
    """'urgent' within three days (or already expired), 'high' otherwise."""
    return 'urgent' if days_left <= 3 else 'high'


def compute_expiring_soon(items: Iterable[PantryItem], *, window: int | None = None,
                          today: Optional[_date] = None) -> List[Dict[str, Any]]:
    """Return items expiring in <= window days (including already expired)."""
    expiring_window = window if window is not None else DAYS_BEFORE_EXPIRY
    today = today or _date.today()
    result: List[Dict[str, Any]] = []
    for item in items:
        if not item.expiry_date:
            continue
        days_left = (item.expiry_date - today).days
        if days_left <= expiring_window:
            result.append({
                'name': item.name,
                'quantity': quantity_to_json(item.quantity),
                'unit': item.unit.value,
                'exp': item.expiry_date.strftime(DATE_FORMAT),
                'days_left': days_left,
                'priority': expiry_priority(days_left),
                'category': item.category,
            })
    result.sort(key=lambda x: (x['days_left'], x['name']))
    return result


def compute_low_stock(items: Iterable[PantryItem]) -> List[Dict[str, Any]]:
    """Return items whose stock is at or below the LOW_STOCK_THRESHOLD for their unit."""
    low: List[Dict[str, Any]] = []
    for item in items:
        th = LOW_STOCK_THRESHOLD.get(item.unit.value, 0)
        if th > 0 and item.quantity <= th:
            low.append({
                'name': item.name,
                'quantity': quantity_to_json(item.quantity),
                'unit': item.unit.value,
                'threshold': th,
                'category': item.category,
            })
    low.sort(key=lambda x: (x['quantity'], x['name']))
    return low


def compute_pantry_snapshots(items: Iterable[PantryItem], *, window: int | None = None,
                             today: Optional[_date] = None):
    items = list(items)
    return compute_expiring_soon(items, window=window, today=today), compute_low_stock(items)

"""Pantry domain: PantryItem values and the per-user Pantry snapshot."""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from kitcha.domain.Ingredient import Unit, normalize_name, parse_quantity
from kitcha.utilities.constants import DATE_FORMAT, PANTRY_CATEGORIES, PANTRY_LOCATIONS


def _parse_date(value: Any) -> Optional[date]:
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value), DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"Invalid expiry date (expected {DATE_FORMAT}): {value!r}") from None


@dataclass(frozen=True)
class PantryItem:
    name: str
    quantity: Decimal
    unit: Unit
    category: str = 'other'
    expiry_date: Optional[date] = None
    location: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Pantry item name cannot be empty")
        object.__setattr__(self, 'name', self.name.strip())
        object.__setattr__(self, 'quantity', parse_quantity(self.quantity, allow_zero=True))
        object.__setattr__(self, 'unit', Unit.parse(self.unit))
        category = (self.category or 'other').strip().lower()
        # Unknown categories collapse to 'other'
        object.__setattr__(self, 'category', category if category in PANTRY_CATEGORIES else 'other')
        object.__setattr__(self, 'expiry_date', _parse_date(self.expiry_date))
        if self.location is not None:
            location = self.location.strip().lower()
            if location not in PANTRY_LOCATIONS:
                raise ValueError(f"Unknown pantry location: {self.location!r}")
            object.__setattr__(self, 'location', location)

    @property
    def key(self) -> Tuple[str, Unit]:
        return normalize_name(self.name), self.unit

    def __str__(self) -> str:
        parts = [f"{self.name} - {self.quantity} {self.unit.value}"]
        if self.expiry_date:
            parts.append(f"Exp: {self.expiry_date.strftime(DATE_FORMAT)}")
        return " - ".join(parts)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'PantryItem':
        '''Creates a PantryItem from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return PantryItem(
            name=d.get('name') or d.get('ingredientName') or '',
            quantity=d.get('quantity', 0),
            unit=d.get('unit'),
            category=d.get('category') or 'other',
            expiry_date=d.get('expiry_date') or d.get('expiryDate'),
            location=d.get('location') or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        '''Converts the PantryItem to a dictionary for JSON persistence.'''
        return {
            "name": self.name,
            "quantity": str(self.quantity),
            "unit": self.unit.value,
            "category": self.category,
            "expiry_date": self.expiry_date.strftime(DATE_FORMAT) if self.expiry_date else None,
            "location": self.location,
        }


class Pantry:
    """Read-only snapshot of what one user has on hand."""

    def __init__(self, items: Iterable[PantryItem] = ()):
        self.items: Tuple[PantryItem, ...] = tuple(items)

    def quantities_by_key(self) -> Dict[Tuple[str, Unit], Decimal]:
        '''Total quantity per (normalized name, unit); duplicates are summed.'''
        totals: Dict[Tuple[str, Unit], Decimal] = {}
        for item in self.items:
            totals[item.key] = totals.get(item.key, Decimal(0)) + item.quantity
        return totals

    def categories_by_key(self) -> Dict[Tuple[str, Unit], str]:
        categories: Dict[Tuple[str, Unit], str] = {}
        for item in self.items:
            categories.setdefault(item.key, item.category)
        return categories

    def get_items(self) -> List[PantryItem]:
        return list(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Items:\n\t{items_str}"

    __repr__ = __str__

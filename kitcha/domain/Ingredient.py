"""Recipe ingredient value type and the unit vocabulary shared with the pantry."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Unit(str, Enum):
    # Weight
    GRAMS = 'grams'
    KG = 'kg'
    OZ = 'oz'
    LBS = 'lbs'
    # Volume
    ML = 'ml'
    LITERS = 'liters'
    CUPS = 'cups'
    TSP = 'tsp'
    TBSP = 'tbsp'
    FL_OZ = 'fl_oz'
    # Count
    PIECES = 'pieces'
    ITEMS = 'items'

    @classmethod
    def parse(cls, value: Any) -> 'Unit':
        """Accept a Unit or a unit string, tolerating case and common aliases."""
        if isinstance(value, Unit):
            return value
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Invalid unit: {value!r}")
        raw = value.strip().lower()
        raw = _UNIT_ALIASES.get(raw, raw)
        try:
            return cls(raw)
        except ValueError:
            raise ValueError(f"Unknown unit: {value!r}") from None

    @property
    def kind(self) -> str:
        if self in _MASS_UNITS:
            return 'mass'
        if self in _VOLUME_UNITS:
            return 'volume'
        return 'count'


_UNIT_ALIASES = {
    'g': 'grams', 'gram': 'grams', 'gr': 'grams',
    'kilogram': 'kg', 'kilograms': 'kg',
    'ounce': 'oz', 'ounces': 'oz',
    'lb': 'lbs', 'pound': 'lbs', 'pounds': 'lbs',
    'milliliter': 'ml', 'milliliters': 'ml',
    'l': 'liters', 'liter': 'liters', 'litre': 'liters', 'litres': 'liters',
    'cup': 'cups',
    'teaspoon': 'tsp', 'teaspoons': 'tsp',
    'tablespoon': 'tbsp', 'tablespoons': 'tbsp',
    'fl oz': 'fl_oz', 'floz': 'fl_oz',
    'pcs': 'pieces', 'pc': 'pieces', 'piece': 'pieces',
    'item': 'items',
}

_MASS_UNITS = frozenset({Unit.GRAMS, Unit.KG, Unit.OZ, Unit.LBS})
_VOLUME_UNITS = frozenset({Unit.ML, Unit.LITERS, Unit.CUPS, Unit.TSP, Unit.TBSP, Unit.FL_OZ})


def parse_quantity(value: Any, *, allow_zero: bool = False) -> Decimal:
    """Convert an int/str/Decimal quantity to Decimal, rejecting junk and negatives."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid quantity: {value!r}")
    try:
        # floats go through str() so 0.1 stays 0.1
        q = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f"Invalid quantity: {value!r}") from None
    if not q.is_finite():
        raise ValueError(f"Invalid quantity: {value!r}")
    if q < 0 or (q == 0 and not allow_zero):
        raise ValueError(f"Quantity must be {'non-negative' if allow_zero else 'positive'}: {value!r}")
    return q


def normalize_name(name: str) -> str:
    """Identity of an ingredient name: trimmed and case-insensitive."""
    return (name or '').strip().lower()


@dataclass(frozen=True)
class RecipeIngredient:
    name: str
    quantity: Decimal
    unit: Unit
    note: Optional[str] = None
    category: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Ingredient name cannot be empty")
        object.__setattr__(self, 'name', self.name.strip())
        object.__setattr__(self, 'quantity', parse_quantity(self.quantity))
        object.__setattr__(self, 'unit', Unit.parse(self.unit))
        if self.category is not None:
            object.__setattr__(self, 'category', self.category.strip().lower() or None)

    @property
    def key(self) -> Tuple[str, Unit]:
        return normalize_name(self.name), self.unit

    def __str__(self) -> str:
        return f"{self.name} - {self.quantity} {self.unit.value}"

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'RecipeIngredient':
        '''Build from a JSON dict; accepts both camelCase and snake_case names.'''
        d = dict(data) if isinstance(data, dict) else {}
        return RecipeIngredient(
            name=d.get('name') or d.get('ingredientName') or '',
            quantity=d.get('quantity'),
            unit=d.get('unit'),
            note=d.get('note') or None,
            category=d.get('category') or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "name": self.name,
            "quantity": str(self.quantity),
            "unit": self.unit.value,
        }
        if self.note:
            out["note"] = self.note
        if self.category:
            out["category"] = self.category
        return out

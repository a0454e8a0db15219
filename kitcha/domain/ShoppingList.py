"""Shopping list values derived from a meal plan and a pantry snapshot."""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from kitcha.domain.Ingredient import Unit
from kitcha.utilities.formatting import quantity_to_json


@dataclass(frozen=True)
class AggregatedShoppingItem:
    """One deduplicated, demand-minus-pantry line of a shopping list.

    ``required_quantity`` is the scaled sum over all contributing meal plan
    entries before the pantry is taken into account; ``quantity`` is what is
    left to buy.
    """
    name: str
    unit: Unit
    required_quantity: Decimal
    quantity: Decimal
    recipes: Tuple[str, ...]
    pantry_quantity: Decimal = Decimal(0)
    category: Optional[str] = None
    estimated_unit_cost_cents: Optional[int] = None
    estimated_cost_cents: Optional[int] = None

    @property
    def key(self) -> Tuple[str, Unit]:
        return self.name, self.unit

    def with_cost(self, unit_cost_cents: Optional[int], cost_cents: Optional[int]) -> 'AggregatedShoppingItem':
        return replace(self, estimated_unit_cost_cents=unit_cost_cents, estimated_cost_cents=cost_cents)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ingredientName": self.name,
            "quantity": quantity_to_json(self.quantity),
            "unit": self.unit.value,
            "recipes": list(self.recipes),
            "category": self.category,
            "requiredQuantity": quantity_to_json(self.required_quantity),
            "pantryQuantity": quantity_to_json(self.pantry_quantity),
            "estimatedUnitCostCents": self.estimated_unit_cost_cents,
            "estimatedCostCents": self.estimated_cost_cents,
        }


@dataclass(frozen=True)
class ShoppingListResult:
    items: Tuple[AggregatedShoppingItem, ...] = field(default_factory=tuple)
    skipped_count: int = 0
    skipped_recipe_ids: Tuple[str, ...] = field(default_factory=tuple)
    total_estimated_cost_cents: Optional[int] = None
    # plan cost from the recipes' own estimates, used when no line can be priced
    recipe_cost_cents: Optional[int] = None

    def __len__(self) -> int:
        return len(self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "totalEstimatedCostCents": self.total_estimated_cost_cents,
            "skippedCount": self.skipped_count,
        }

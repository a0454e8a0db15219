"""Recipe domain entity: identity, base servings and its ingredient list."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
from uuid import uuid4

from kitcha.domain.Ingredient import RecipeIngredient


@dataclass(frozen=True)
class Recipe:
    id: str
    name: str
    ingredients: Tuple[RecipeIngredient, ...]
    servings: Optional[int] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)
    estimated_total_cost_cents: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Recipe name cannot be empty")
        object.__setattr__(self, 'name', self.name.strip())
        if self.servings is not None:
            if isinstance(self.servings, bool) or not isinstance(self.servings, int) or self.servings < 1:
                raise ValueError(f"Recipe servings must be a positive integer: {self.servings!r}")
        ingredients = tuple(self.ingredients or ())
        if not ingredients:
            raise ValueError('Recipe must have at least one ingredient')
        object.__setattr__(self, 'ingredients', ingredients)
        object.__setattr__(self, 'tags', tuple(t.strip() for t in self.tags if t and t.strip()))
        cost = self.estimated_total_cost_cents
        if cost is not None and (isinstance(cost, bool) or not isinstance(cost, int) or cost < 0):
            raise ValueError(f"Estimated cost must be a non-negative number of cents: {cost!r}")

    def __str__(self) -> str:
        servings = f"{self.servings} servings" if self.servings else "servings n/a"
        return f"{self.name} - {servings} - {len(self.ingredients)} ingredients"

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Recipe':
        d = dict(data)
        return Recipe(
            id=str(d.get('id') or uuid4()),
            name=d.get('name') or d.get('title') or '',
            ingredients=tuple(RecipeIngredient.from_dict(i) for i in d.get('ingredients', [])),
            servings=d.get('servings'),
            tags=tuple(d.get('tags') or ()),
            estimated_total_cost_cents=d.get('estimated_total_cost_cents'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "servings": self.servings,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "tags": list(self.tags),
            "estimated_total_cost_cents": self.estimated_total_cost_cents,
        }

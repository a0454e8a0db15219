"""Shopping list builder.

Turns the entries of a meal plan plus a pantry snapshot into a deduplicated
shopping list: one line per (normalized ingredient name, unit), scaled by
servings, summed across recipes and reduced by what the pantry already holds.

Provides aggregate(entries, recipes, pantry, price_estimator=None).
"""
from __future__ import annotations
import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from kitcha.domain.Ingredient import Unit
from kitcha.domain.Pantry import Pantry, PantryItem
from kitcha.domain.Plan import MealPlanEntry
from kitcha.domain.Recipe import Recipe
from kitcha.domain.ShoppingList import AggregatedShoppingItem, ShoppingListResult
from kitcha.domain.errors import UnresolvedReference
from kitcha.logic.providers import PriceEstimator, RecipeSource, as_recipe_provider, resolve_recipe
from kitcha.logic.shopping.cost import price_shopping_list, recipe_cost_total

logger = logging.getLogger(__name__)

Key = Tuple[str, Unit]


def scale_factor(recipe: Recipe, servings: int) -> Decimal:
    """Multiplier applied to a recipe's ingredient quantities for one entry."""
    if recipe.servings:
        return Decimal(servings) / Decimal(recipe.servings)
    return Decimal(servings)


class _Line:
    __slots__ = ('quantity', 'recipes', 'category')

    def __init__(self):
        self.quantity = Decimal(0)
        self.recipes: List[str] = []
        self.category: Optional[str] = None


def _collect(entries: Iterable[MealPlanEntry], recipes: RecipeSource):
    provider = as_recipe_provider(recipes)
    lines: Dict[Key, _Line] = {}
    skipped: List[str] = []
    portions: List[Tuple[Recipe, Decimal]] = []
    for entry in entries:
        try:
            recipe = resolve_recipe(provider, entry.recipe_id)
        except UnresolvedReference as e:
            logger.warning("Skipping %s %s entry: %s", entry.day_name, entry.meal_type.value, e)
            skipped.append(e.recipe_id)
            continue
        factor = scale_factor(recipe, entry.servings)
        portions.append((recipe, factor))
        for ing in recipe.ingredients:
            line = lines.get(ing.key)
            if line is None:
                line = lines[ing.key] = _Line()
            line.quantity += ing.quantity * factor
            if recipe.name not in line.recipes:
                line.recipes.append(recipe.name)
            if line.category is None and ing.category:
                line.category = ing.category
    return lines, skipped, portions


def required_by_key(entries: Iterable[MealPlanEntry], recipes: RecipeSource) -> Dict[Key, Decimal]:
    """Scaled demand per (name, unit) before the pantry is consulted."""
    lines, _, _ = _collect(entries, recipes)
    return {k: line.quantity for k, line in lines.items()}


def _sort_key(item: AggregatedShoppingItem):
    # categorized lines first, grouped by category; then by name and unit
    return (item.category is None, item.category or '', item.name, item.unit.value)


def aggregate(entries: Iterable[MealPlanEntry],
              recipes: RecipeSource,
              pantry: Iterable[PantryItem] | Pantry = (),
              *,
              price_estimator: Optional[PriceEstimator] = None) -> ShoppingListResult:
    """Compute the shopping list for a meal plan.

    Args:
        entries: meal plan entries, in plan order.
        recipes: RecipeProvider or mapping of recipe id -> Recipe.
        pantry: pantry snapshot (read only).
        price_estimator: optional; when given each line gets a cost estimate
            and the total falls back to recipe estimates if no line is priced.

    Returns:
        ShoppingListResult with the sorted lines still to buy and the number
        of entries skipped because their recipe could not be resolved.
    """
    lines, skipped, portions = _collect(entries, recipes)
    if not lines:
        return ShoppingListResult(skipped_count=len(skipped), skipped_recipe_ids=tuple(skipped))

    snapshot = pantry if isinstance(pantry, Pantry) else Pantry(pantry)
    have = snapshot.quantities_by_key()
    pantry_categories = snapshot.categories_by_key()

    items: List[AggregatedShoppingItem] = []
    for key, line in lines.items():
        name, unit = key
        available = have.get(key, Decimal(0))
        covered = min(available, line.quantity)
        remaining = max(line.quantity - covered, Decimal(0))
        if remaining == 0:
            continue  # fully covered by pantry
        items.append(AggregatedShoppingItem(
            name=name,
            unit=unit,
            required_quantity=line.quantity,
            quantity=remaining,
            recipes=tuple(line.recipes),
            pantry_quantity=covered,
            category=line.category or pantry_categories.get(key),
        ))
    items.sort(key=_sort_key)

    logger.debug("Aggregated %d shopping lines (%d entries skipped)", len(items), len(skipped))
    result = ShoppingListResult(
        items=tuple(items),
        skipped_count=len(skipped),
        skipped_recipe_ids=tuple(skipped),
        recipe_cost_cents=recipe_cost_total(portions),
    )
    if price_estimator is not None:
        result = price_shopping_list(result, price_estimator)
    return result


__all__ = ['aggregate', 'required_by_key', 'scale_factor']

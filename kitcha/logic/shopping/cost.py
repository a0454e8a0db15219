"""Shopping cost estimation.

Prices every aggregated line through a PriceEstimator. A line whose price is
unknown keeps a null cost and is left out of the total. When no line can be
priced at all, the total falls back to the recipes' own cost estimates,
scaled by each entry's servings.
"""
from __future__ import annotations
import logging
from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Tuple

from kitcha.domain.Recipe import Recipe
from kitcha.domain.ShoppingList import AggregatedShoppingItem, ShoppingListResult
from kitcha.logic.providers import PriceEstimator

logger = logging.getLogger(__name__)


def line_cost_cents(unit_cost_cents: int, quantity: Decimal) -> int:
    """Whole cents for quantity * unit cost, rounded half up."""
    return int((Decimal(unit_cost_cents) * quantity).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def estimate_costs(items: Iterable[AggregatedShoppingItem],
                   price_estimator: PriceEstimator) -> Tuple[List[AggregatedShoppingItem], Optional[int]]:
    priced: List[AggregatedShoppingItem] = []
    total: Optional[int] = None
    for item in items:
        unit_cost = price_estimator.get_unit_cost(item.name, item.unit)
        if unit_cost is None:
            logger.debug("No price for %s (%s)", item.name, item.unit.value)
            priced.append(item.with_cost(None, None))
            continue
        cost = line_cost_cents(unit_cost, item.quantity)
        priced.append(item.with_cost(unit_cost, cost))
        total = cost if total is None else total + cost
    return priced, total


def recipe_cost_total(portions: Iterable[Tuple[Recipe, Decimal]]) -> Optional[int]:
    """Sum of recipe cost estimates, each scaled by its entry's serving factor.

    Recipes without an estimate are left out; None when none has one.
    """
    total: Optional[int] = None
    for recipe, factor in portions:
        if recipe.estimated_total_cost_cents is None:
            continue
        cost = line_cost_cents(recipe.estimated_total_cost_cents, factor)
        total = cost if total is None else total + cost
    return total


def price_shopping_list(result: ShoppingListResult, price_estimator: PriceEstimator) -> ShoppingListResult:
    """Attach cost estimates to an aggregated (unpriced) shopping list."""
    items, total = estimate_costs(result.items, price_estimator)
    if total is None and items and result.recipe_cost_cents is not None:
        logger.debug("No line priced; using recipe estimates (%d cents)", result.recipe_cost_cents)
        total = result.recipe_cost_cents
    return replace(result, items=tuple(items), total_estimated_cost_cents=total)


__all__ = ['estimate_costs', 'line_cost_cents', 'price_shopping_list', 'recipe_cost_total']

"""Collaborator interfaces consumed by the shopping and budget logic.

The logic layer never performs I/O itself; callers hand it objects that
satisfy these protocols (JSON repositories in ``kitcha.infra``, fakes in
tests).
"""
from __future__ import annotations
from datetime import datetime
from typing import Iterable, List, Mapping, Optional, Protocol, Union

from kitcha.domain.Budget import CostRecord
from kitcha.domain.Ingredient import Unit
from kitcha.domain.Pantry import PantryItem
from kitcha.domain.Recipe import Recipe
from kitcha.domain.errors import UnresolvedReference


class RecipeProvider(Protocol):
    def get_recipe(self, recipe_id: str) -> Optional[Recipe]: ...


class PantryProvider(Protocol):
    def get_snapshot(self, user_id: str) -> List[PantryItem]: ...


class CostRecordProvider(Protocol):
    def get_for_week(self, user_id: str, week_start: datetime, week_end: datetime) -> List[CostRecord]: ...


class PriceEstimator(Protocol):
    def get_unit_cost(self, ingredient_name: str, unit: Unit) -> Optional[int]: ...


RecipeSource = Union[RecipeProvider, Mapping[str, Recipe]]


class MappingRecipeProvider:
    """Adapts an id -> Recipe mapping (or an iterable of recipes) to RecipeProvider."""

    def __init__(self, recipes: Union[Mapping[str, Recipe], Iterable[Recipe]]):
        if isinstance(recipes, Mapping):
            self._recipes = dict(recipes)
        else:
            self._recipes = {r.id: r for r in recipes}

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        return self._recipes.get(recipe_id)


def as_recipe_provider(source: RecipeSource) -> RecipeProvider:
    if isinstance(source, Mapping):
        return MappingRecipeProvider(source)
    return source


def resolve_recipe(provider: RecipeProvider, recipe_id: str) -> Recipe:
    """Look a recipe up; raises UnresolvedReference when it is gone."""
    recipe = provider.get_recipe(recipe_id)
    if recipe is None:
        raise UnresolvedReference(recipe_id)
    return recipe

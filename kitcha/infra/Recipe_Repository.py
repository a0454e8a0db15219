"""Recipe repository (file persistence); satisfies RecipeProvider."""
import logging
from threading import Lock
from typing import List, Optional

from kitcha.domain.Recipe import Recipe
from kitcha.infra.json_store import load_document, save_document
from kitcha.infra.paths import RECIPES_FILENAME, data_file

logger = logging.getLogger(__name__)

# guards read-modify-write of the recipe file
_lock = Lock()


class RecipeRepository:
    def __init__(self, filename: str = RECIPES_FILENAME):
        self.filename = filename

    @property
    def path(self):
        return data_file(self.filename)

    def _load_raw(self) -> list:
        return load_document(self.path, [])

    def list_recipes(self) -> List[Recipe]:
        """Read recipes, skipping (and logging) entries that fail validation."""
        recipes = []
        for entry in self._load_raw():
            try:
                recipes.append(Recipe.from_dict(entry))
            except (ValueError, TypeError) as e:
                logger.error("Skipping malformed recipe %r: %s", entry.get('name') if isinstance(entry, dict) else entry, e)
        return recipes

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        for recipe in self.list_recipes():
            if recipe.id == recipe_id:
                return recipe
        return None

    def add_recipe(self, recipe: Recipe) -> Recipe:
        with _lock:
            raw = self._load_raw()
            if any(r.get('id') == recipe.id for r in raw):
                raise ValueError(f"Recipe with id '{recipe.id}' already exists")
            if any((r.get('name') or '').lower() == recipe.name.lower() for r in raw):
                raise ValueError("Recipe with this name already exists")
            raw.append(recipe.to_dict())
            save_document(self.path, raw)
        return recipe

    def delete_recipe(self, recipe_id: str) -> bool:
        with _lock:
            raw = self._load_raw()
            remaining = [r for r in raw if r.get('id') != recipe_id]
            if len(remaining) == len(raw):
                return False
            save_document(self.path, remaining)
        return True

from pathlib import Path

from kitcha.utilities.config import get_data_dir

# Centralized names of the data files (single source of truth)
RECIPES_FILENAME = 'recipes.json'
PANTRY_FILENAME = 'pantry.json'
PLANS_FILENAME = 'mealplans.json'
BUDGET_FILENAME = 'budget.json'
PRICES_FILENAME = 'prices.json'


def data_file(filename: str) -> Path:
    """Absolute path of a data file inside the configured data directory."""
    return get_data_dir() / filename


__all__ = ['data_file', 'RECIPES_FILENAME', 'PANTRY_FILENAME', 'PLANS_FILENAME',
           'BUDGET_FILENAME', 'PRICES_FILENAME']

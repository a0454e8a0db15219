from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"

# Fixed display banding for the weekly budget. Independent of the
# user-configurable alert threshold.
WARNING_PERCENTAGE: Final[float] = 80.0
EXCEEDED_PERCENTAGE: Final[float] = 100.0

# Multi-week comparison bands
UNDER_BUDGET_BELOW: Final[float] = 95.0
ON_BUDGET_UP_TO: Final[float] = 105.0

DEFAULT_ALERT_THRESHOLD: Final[int] = 80
DEFAULT_WEEKLY_BUDGET_CENTS: Final[int] = 100000

LOW_STOCK_THRESHOLD: Final[dict[str, int]] = {
    "grams": 200,
    "ml": 500,
    "pieces": 3,
    "items": 3,
}

PANTRY_CATEGORIES: Final[tuple[str, ...]] = (
    'protein', 'vegetable', 'fruit', 'dairy', 'grains', 'spices',
    'canned', 'frozen', 'beverages', 'condiments', 'other',
)

PANTRY_LOCATIONS: Final[tuple[str, ...]] = (
    'fridge', 'freezer', 'pantry', 'counter', 'cabinet',
)

# Quantities are serialized with this many decimals
QUANTITY_DECIMALS: Final[int] = 2

"""Meal plan domain: dated collection of recipe-to-slot assignments."""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple
from uuid import uuid4

from kitcha.utilities.constants import DATE_FORMAT

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class MealType(str, Enum):
    BREAKFAST = 'breakfast'
    LUNCH = 'lunch'
    DINNER = 'dinner'
    SNACK = 'snack'


@dataclass(frozen=True)
class MealPlanEntry:
    recipe_id: str
    day_of_week: int
    meal_type: MealType
    servings: int = 1

    def __post_init__(self):
        if not isinstance(self.recipe_id, str) or not self.recipe_id.strip():
            raise ValueError("Meal plan entry needs a recipe id")
        if isinstance(self.day_of_week, bool) or not isinstance(self.day_of_week, int) \
                or not 0 <= self.day_of_week <= 6:
            raise ValueError(f"day_of_week must be 0 (Monday) .. 6 (Sunday): {self.day_of_week!r}")
        if not isinstance(self.meal_type, MealType):
            try:
                object.__setattr__(self, 'meal_type', MealType(str(self.meal_type).strip().lower()))
            except ValueError:
                raise ValueError(f"Unknown meal type: {self.meal_type!r}") from None
        if isinstance(self.servings, bool) or not isinstance(self.servings, int) or self.servings < 1:
            raise ValueError(f"servings must be a positive integer: {self.servings!r}")

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week]

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'MealPlanEntry':
        d = dict(data)
        return MealPlanEntry(
            recipe_id=str(d.get('recipe_id') or d.get('recipeId') or ''),
            day_of_week=d.get('day_of_week', d.get('dayOfWeek')),
            meal_type=d.get('meal_type') or d.get('mealType'),
            servings=d.get('servings') or 1,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recipe_id": self.recipe_id,
            "day_of_week": self.day_of_week,
            "meal_type": self.meal_type.value,
            "servings": self.servings,
        }


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value), DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"Invalid date (expected {DATE_FORMAT}): {value!r}") from None


@dataclass(frozen=True)
class MealPlan:
    id: str
    user_id: str
    name: str
    start_date: date
    end_date: date
    entries: Tuple[MealPlanEntry, ...] = field(default_factory=tuple)
    notes: Optional[str] = None
    version: int = 1

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Meal plan name cannot be empty")
        object.__setattr__(self, 'start_date', _to_date(self.start_date))
        object.__setattr__(self, 'end_date', _to_date(self.end_date))
        if self.start_date > self.end_date:
            raise ValueError("Start date must be before end date")
        object.__setattr__(self, 'entries', tuple(self.entries))

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'MealPlan':
        d = dict(data)
        return MealPlan(
            id=str(d.get('id') or uuid4()),
            user_id=str(d.get('user_id') or ''),
            name=d.get('name') or '',
            start_date=d.get('start_date'),
            end_date=d.get('end_date'),
            entries=tuple(MealPlanEntry.from_dict(e) for e in d.get('entries', [])),
            notes=d.get('notes') or None,
            version=int(d.get('version') or 1),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "start_date": self.start_date.strftime(DATE_FORMAT),
            "end_date": self.end_date.strftime(DATE_FORMAT),
            "entries": [e.to_dict() for e in self.entries],
            "notes": self.notes,
            "version": self.version,
        }
